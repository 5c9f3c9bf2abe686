__all__ = (
    'enable_debug_logging',
    'logger',
)


import logging
from os import PathLike

from .constants import LOG_DATEFMT, LOG_FORMAT


logger = logging.getLogger(__package__)
logger.addHandler(logging.NullHandler())


def enable_debug_logging(file: PathLike = None) -> None:
    '''
    Send the package's debug messages to STDERR or to a file.
    The library itself never configures logging; hosts opt in here.

    :param file: Write the log to this file instead of STDERR
    :type file: :class:`PathLike`
    '''
    kwargs = dict(
        level='DEBUG',
        datefmt=LOG_DATEFMT,
        format=LOG_FORMAT,
        style='{',
    )
    if file is not None:
        kwargs.update(filename=file, filemode='w')
    logging.basicConfig(**kwargs)
    logger.setLevel(logging.DEBUG)
