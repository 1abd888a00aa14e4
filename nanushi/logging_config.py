import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """
    Configure loguru to emit structured JSON logs to stdout.

    Fields include:
      - time, level, message
      - module, function, line
      - any context bound with `logger.bind(...)` or passed as kwargs
    """
    logger.remove()

    logger.add(
        sys.stdout,
        level=(level or "INFO").upper(),
        serialize=True,  # JSON output
        backtrace=False,
        diagnose=False,
    )
