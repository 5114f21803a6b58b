"""Configuration for pytest."""

from pathlib import Path
from typing import Dict

import pytest

from prchain.tests.fake_git import FakeGit
from prchain.tests.utils import TestRepo


@pytest.fixture
def fake_git() -> FakeGit:
    """Empty in-memory repository with trunk `main` at root commit M."""
    fake = FakeGit()
    fake.commit("M")
    fake.branch("main", "M")
    return fake


@pytest.fixture
def test_repo(tmp_path: Path) -> TestRepo:
    """Real repository with a single commit on main."""
    repo = TestRepo(str(tmp_path / "repo"))
    repo.commit("init")
    return repo


@pytest.fixture
def stack_repo(test_repo: TestRepo) -> Dict[str, str]:
    """Repository holding a three branch stack on top of main.

        main:     init - next_main
        branch-a: init - A1 - A2
        branch-b: init - A1 - B1 - B2
        branch-c: init - A1 - B1 - C1 - C2

    branch-b and branch-c start from earlier commits of the branch below them,
    so every branch but the last carries one commit the next one doesn't.
    Returns commit ids by message.
    """
    ids = {"init": test_repo.git("rev-parse HEAD")}
    ids["next_main"] = test_repo.commit("next_main")

    test_repo.checkout("branch-a", ids["init"])
    ids["A1"] = test_repo.commit("test A1")
    ids["A2"] = test_repo.commit("test A2")

    test_repo.checkout("branch-b", ids["A1"])
    ids["B1"] = test_repo.commit("test B1")
    ids["B2"] = test_repo.commit("test B2")

    test_repo.checkout("branch-c", ids["B1"])
    ids["C1"] = test_repo.commit("test C1")
    ids["C2"] = test_repo.commit("test C2")

    test_repo.checkout("main")
    return ids
