"""Logger setup for the vsf command line."""
import logging
import sys

_ROOT = "vsf"
_STDERR_FORMAT = "%(levelname)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def configure(quiet=False, debug=False, log_file=None):
    """(Re)installs the handlers on the package logger and returns it."""
    logger = logging.getLogger(_ROOT)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if debug:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.ERROR)
    else:
        logger.setLevel(logging.WARNING)

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(_STDERR_FORMAT))
    logger.addHandler(stream)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name):
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
