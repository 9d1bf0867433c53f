import logging
import json
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone


# extras copied into the JSON line when a record carries them
EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "record_id",
    "alerts",
    "priority",
)


def json_formatter(record):
    log = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": record.levelname,
        "service": "agriswarm",
        "message": record.getMessage(),
    }

    for field in EXTRA_FIELDS:
        if hasattr(record, field):
            log[field] = getattr(record, field)

    if record.exc_info:
        log["exception"] = logging.Formatter().formatException(record.exc_info)

    return json.dumps(log, default=str)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)


logger = logging.getLogger("agriswarm")
json_f = JSONFormatter()


def configure_logging(log_dir: str, level: str = "INFO") -> logging.Logger:
    """
    (Re)attach the rotating JSON file handler under `log_dir` and the console
    handler. Called by create_app() with that app's settings.
    """
    os.makedirs(log_dir, exist_ok=True)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "app.json.log"),
        maxBytes=5 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(json_f)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(json_f)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger
