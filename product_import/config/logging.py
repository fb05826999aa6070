# product_import/config/logging.py

import json
import logging
import socket
from datetime import datetime, timezone
from logging.config import dictConfig

# attributes every LogRecord has; anything else came in through `extra`
_RESERVED_RECORD_ATTRIBUTES = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_LOGGING_CONFIGURED: bool = False


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "@timestamp": datetime.now(timezone.utc).isoformat(),
            "message": record.getMessage(),
            "level": record.levelname,
            "logger_name": record.name,
            "hostname": socket.gethostname(),
        }
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stack_trace": self.formatException(record.exc_info),
            }
        for key, value in vars(record).items():
            if key not in _RESERVED_RECORD_ATTRIBUTES and key not in log_data:
                log_data[key] = value
        return json.dumps(log_data, cls=CustomJSONEncoder, ensure_ascii=False)


def build_log_config(log_level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "product_import": {
                "level": log_level,
                "propagate": True,
            },
            "sqlalchemy.engine": {
                "level": "WARNING",
            },
            "": {  # Root logger
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }


def initialize_logging(log_level: str = "INFO", force: bool = False) -> None:
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED and not force:
        logging.getLogger(__name__).debug("Skipping: logging already configured.")
        return

    dictConfig(build_log_config(log_level.upper()))
    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).info("Logging configured.", extra={"log_level": log_level.upper()})


def get_configured_logger(name: str = None) -> logging.Logger:
    # initialize_logging() must have been called first, otherwise this is a plain logger
    return logging.getLogger(name) if name else logging.getLogger()
