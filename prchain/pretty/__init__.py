"""Pretty formatting of a resolved stack for CLI output."""

import logging
from typing import IO, List, Optional

import click

from ..chain import PrChain
from ..typing import Commit, GitInterface
from ..util import ensure, short_id

# Get module logger
logger = logging.getLogger(__name__)


def log_commit(commit: Commit, branch: Optional[str] = None) -> str:
    """Format a commit as a graph line, with the branch name if it heads one."""
    decoration = click.style(f" ({branch})", fg="green") if branch else ""
    return f"* {click.style(short_id(commit.commit_id), fg='red')}{decoration} {commit.summary}"


def plan_lines(chain: PrChain, git_cmd: GitInterface) -> List[str]:
    """Listing of the planned stack, top branch first and newest commit first.

    The branch name is shown once, beside the newest commit it owns.
    """
    lines: List[str] = []
    for branch in reversed(chain.branches):
        commits = [git_cmd.get_commit(commit_id) for commit_id in reversed(branch.commit_ids)]
        for index, commit in enumerate(commits):
            lines.append(log_commit(commit, branch.name if index == 0 else None))
    return lines


def graph_revisions(chain: PrChain) -> List[str]:
    """Revisions spanning the whole stack, for `git log`."""
    if not chain.branches:
        raise ValueError("Can't render an empty chain")
    first_commit = ensure(next(iter(chain.branches[0].commit_ids), None))
    last_commit = ensure(next(reversed(chain.branches[-1].commit_ids), None))
    return [last_commit, f"{first_commit}^!"]


def log_plan(chain: PrChain, git_cmd: GitInterface, file: Optional[IO[str]] = None,
             color: Optional[bool] = None) -> None:
    """Log the current graph of the stack and print the planned one.

    Args:
        chain: The resolved stack
        git_cmd: Repository accessor used to render the graph and read commits
        file: Where to print the plan (default stdout)
        color: Force colors on or off (default: only on a terminal)
    """
    revisions = graph_revisions(chain)
    logger.info(f"Git Graph to Rebase:\n{git_cmd.log_graph(revisions)}")

    lines = plan_lines(chain, git_cmd)
    logger.info("Planned Git Graph")
    for line in lines:
        click.echo(line, file=file, color=color)
