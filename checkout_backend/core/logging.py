import logging
from typing import Union

from colorlog import ColoredFormatter

LOG_FORMAT = (
    "%(log_color)s%(levelname)-8s%(reset)s | "
    "%(blue)s%(asctime)s%(reset)s | "
    "%(green)s%(name)s:%(lineno)d%(reset)s | "
    "%(message)s"
)

# uvicorn installs its own handlers; route them through the root handler instead
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logger(level: Union[int, str] = logging.INFO) -> logging.Logger:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    if root.hasHandlers():
        root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_FORMAT,
            datefmt="%d-%m-%Y %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "white",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red,bg_white",
            },
        )
    )
    root.addHandler(handler)

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    # request_logger already logs every request with its timing
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root
