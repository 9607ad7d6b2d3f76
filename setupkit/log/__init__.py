import sys
from logging import FileHandler, Formatter, Logger, StreamHandler, getLogger

from setupkit.config import LogConfig

LOGGER_NAME = "setupkit"


def setup(config: LogConfig, force: bool = False):
    """
    Set up logging for the `setupkit` package.

    Log records go to the configured file, or to stderr so they never mix
    with prompts and progress on stdout. Records don't propagate to the
    root logger.

    The method is idempotent unless `force` is set to True,
    in which case existing handlers are replaced.
    """
    logger = getLogger(LOGGER_NAME)
    if logger.handlers and not force:
        return

    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()

    if config.output:
        handler = FileHandler(config.output, encoding="utf-8")
    else:
        handler = StreamHandler(sys.stderr)

    handler.setFormatter(Formatter(config.format))
    handler.setLevel(config.level)

    logger.setLevel(config.level)
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name) -> Logger:
    """
    Get log function for a given (module) name

    :return: Logger instance
    """
    return getLogger(name)


__all__ = ["LOGGER_NAME", "setup", "get_logger"]
