"""
The main prchain package.
"""
import logging
import sys
from typing import Optional

# Default format for logs
LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Handler installed by the last setup_logging call
_handler: Optional[logging.Handler] = None

def setup_logging(verbose: int = 0, level: Optional[str] = None) -> None:
    """Setup logging with appropriate level based on verbosity.

    Args:
        verbose: Verbosity level
            0 = INFO and above (default, shows the plan and fetches)
            1 = More verbose INFO
            2 = DEBUG and above (shows every git call)
        level: Explicit level name (e.g. "warning"), overrides verbose
    """
    global _handler

    if level:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        log_level = resolved
    elif verbose >= 2:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Replace our previous handler, leave anything else attached alone
    if _handler is not None:
        logger.removeHandler(_handler)

    # Add handler with our format
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(_handler)

