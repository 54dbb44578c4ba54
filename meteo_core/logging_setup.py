import logging
import logging.config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Console logging for the app (no log files: nothing is persisted)."""
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "level": level,
                "formatter": "standard",
                "class": "logging.StreamHandler",
            },
        },
        "loggers": {
            "meteo_core": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }
    logging.config.dictConfig(logging_config)
    return logging.getLogger("meteo_core")
