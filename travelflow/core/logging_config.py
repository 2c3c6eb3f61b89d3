import logging
import logging.config
import os
from datetime import datetime
from travelflow.core.config import settings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024

# sub directory -> (level, formatter, backups)
LOG_FILES = {
    "app": (settings.LOG_LEVEL, "detailed", 10),
    "error": ("ERROR", "detailed", 10),
    "access": ("INFO", "access", 10),
    "audit": ("INFO", "default", 30),
    "budget": ("INFO", "default", 30),
}


def _file_handler(name: str, level: str, formatter: str, backups: int, stamp: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": os.path.join(settings.LOG_DIR, name, f"{name}-{stamp}.log"),
        "maxBytes": LOG_FILE_MAX_BYTES,
        "backupCount": backups,
    }


def setup_logging():
    """Console plus dated rotating files under LOG_DIR (app, error, access, audit, budget)"""
    log_dir = settings.LOG_DIR
    for sub_dir in LOG_FILES:
        os.makedirs(os.path.join(log_dir, sub_dir), exist_ok=True)

    current_date = datetime.now().strftime("%Y-%m-%d")
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    }
    for name, (level, formatter, backups) in LOG_FILES.items():
        handlers[f"{name}_file"] = _file_handler(name, level, formatter, backups, current_date)

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "access": {
                "format": "%(asctime)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "level": settings.LOG_LEVEL,
                "handlers": ["console", "app_file", "error_file"],
                "propagate": False,
            },
            # Request decisions and deletions
            "audit": {
                "level": "INFO",
                "handlers": ["audit_file", "console"],
                "propagate": False,
            },
            # Every budget write, kept apart for reconciliation
            "travelflow.services.finance.budget_service": {
                "level": "INFO",
                "handlers": ["budget_file", "app_file", "error_file", "console"],
                "propagate": False,
            },
            "access": {
                "level": "INFO",
                "handlers": ["access_file"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["access_file"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "INFO" if settings.DB_ECHO else "WARNING",
                "handlers": ["app_file"],
                "propagate": False,
            },
        },
    })

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured: level {settings.LOG_LEVEL}, files under {log_dir}/ ({settings.ENVIRONMENT})")
