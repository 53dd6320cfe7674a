import logging.config

from addrbook.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                }
            },
            "root": {"level": level or settings.log_level, "handlers": ["console"]},
            "loggers": {
                # statement echo stays off unless asked for explicitly
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
