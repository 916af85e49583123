import sys
from typing import Any

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | <level>{message}</level>"
)


def configure_logging(log_level: str = "INFO", sink: Any = None) -> int:
    """
    Route pyviewport's loguru output to a single sink.

    Any previously added handlers are removed first, so repeated calls
    replace the configuration rather than duplicating output.

    Parameters
    ----------
    log_level : str, default="INFO"
        Minimum level to emit, case-insensitive.
    sink : Any, optional
        Any loguru sink (stream, path or callable). Defaults to stderr,
        which is the only sink that is colourised.

    Returns
    -------
    int
        Handler id, usable with ``logger.remove``.
    """
    if sink is None:
        sink = sys.stderr
    logger.remove()
    return logger.add(
        sink,
        level=log_level.upper(),
        format=LOG_FORMAT,
        colorize=sink is sys.stderr,
    )
