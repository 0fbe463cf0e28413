import logging
import sys


class ConsoleFormatter(logging.Formatter):
    """Plain ``time | level | logger | message`` lines for the console."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-5s | %(name)-28s | %(message)s",
            datefmt="%H:%M:%S",
        )


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the API process.

    Safe to call more than once: existing handlers are replaced.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
