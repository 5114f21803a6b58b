"""Shared utilities for prchain tests."""
import os
import subprocess
from typing import Optional
import logging

logger = logging.getLogger(__name__)

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_CONFIG_GLOBAL": os.devnull,
}

def run_cmd(cmd: str, cwd: Optional[str] = None, check: bool = True) -> str:
    """Run shell command and return output.

    Args:
        cmd: Command to run
        cwd: Working directory
        check: Whether to check return code

    Returns:
        str: Command output
    """
    logger.debug(f"Running command: {cmd}")
    result = subprocess.run(
        cmd, shell=True, check=check, cwd=cwd,
        capture_output=True, text=True, env={**os.environ, **GIT_ENV}
    )
    logger.debug(f"Command output: {result.stdout.strip()}")
    if result.stderr:
        logger.debug(f"Command stderr: {result.stderr.strip()}")
    return result.stdout.strip()

class TestRepo:
    """Throwaway repository driven through the git CLI."""
    __test__ = False  # Not a test class

    def __init__(self, path: str):
        self.path = path
        os.makedirs(path, exist_ok=True)
        self.git("init -q")
        self.git("symbolic-ref HEAD refs/heads/main")

    def git(self, args: str) -> str:
        """Run a git command inside the repository."""
        return run_cmd(f"git {args}", cwd=self.path)

    def commit(self, msg: str) -> str:
        """Create an empty commit on the current branch, returning its id."""
        self.git(f'commit -q --allow-empty -m "{msg}"')
        return self.git("rev-parse HEAD")

    def checkout(self, branch: str, start: Optional[str] = None) -> None:
        """Switch to branch, creating it at start if given."""
        if start is None:
            self.git(f"checkout -q {branch}")
        else:
            self.git(f"checkout -q -b {branch} {start}")
