import logging
import os
import sys


class _ActionsFormatter(logging.Formatter):
    """GitHub Actions 에서 WARNING/ERROR 를 annotation 으로 보이게 한다."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{text}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{text}"
        return text


def setup_logging(verbosity: int = 0) -> None:
    level = logging.INFO
    if verbosity >= 1:
        level = logging.DEBUG

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handler = logging.StreamHandler(sys.stdout)
    if os.getenv("GITHUB_ACTIONS") == "true":
        handler.setFormatter(_ActionsFormatter(fmt))
    else:
        handler.setFormatter(logging.Formatter(fmt))

    logging.basicConfig(level=level, handlers=[handler])


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
