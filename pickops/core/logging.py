from __future__ import annotations

import logging
import logging.config

from pickops.core.config import get_settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return

    settings = get_settings()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
            "loggers": {
                "pickops": {"level": (level or settings.log_level).upper()},
            },
        }
    )
    _configured = True
