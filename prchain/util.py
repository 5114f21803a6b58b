from typing import Optional, TypeVar

T = TypeVar('T')

SHORT_ID_LENGTH = 7


def ensure(value: Optional[T]) -> T:
    """Ensure a value is not None, raising RuntimeError if it is.

    Args:
        value: The value to check

    Returns:
        The value if it is not None

    Raises:
        RuntimeError: If the value is None
    """
    if value is None:
        raise RuntimeError("Value is None")
    return value


def short_id(commit_id: str) -> str:
    """Abbreviate a commit id the way `git log --oneline` does."""
    return commit_id[:SHORT_ID_LENGTH]
