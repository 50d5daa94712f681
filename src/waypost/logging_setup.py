"""Logger wiring for the ``waypost`` namespace.

Library modules only ever call ``logging.getLogger("waypost.<area>")``.
Applications that want waypost's records on stderr call
``configure_logging`` once at startup.
"""

import logging

from waypost.config import NavigatorConfig
from waypost.errors import ConfigurationError

LOGGER_NAME = "waypost"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(
    config: NavigatorConfig,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Apply ``config.log_level`` to the ``waypost`` logger.

    Adds *handler* (a ``StreamHandler`` by default) unless the logger
    already has one, so repeated calls do not duplicate output.

    Raises ``ConfigurationError`` for an unknown level name.
    """
    try:
        level = _LEVELS[config.log_level.lower()]
    except KeyError:
        msg = (
            f"Unknown log_level {config.log_level!r}. "
            f"Expected one of: {', '.join(_LEVELS)}"
        )
        raise ConfigurationError(msg) from None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = handler or logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    return logger
