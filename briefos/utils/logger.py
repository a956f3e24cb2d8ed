import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from briefos.config.settings import Settings

_CONFIGURED_MARKER = "_briefos_handler"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""
    def format(self, record):
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj)


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Configure the ``briefos`` logger tree.
    Writes text logs to stdout and, optionally, structured JSON logs to file.
    """
    logger = logging.getLogger("briefos")
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    # Avoid adding duplicate handlers if configure_logging is called multiple times
    if any(getattr(h, _CONFIGURED_MARKER, False) for h in logger.handlers):
        return logger

    # Console Handler (Human readable)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    setattr(console_handler, _CONFIGURED_MARKER, True)
    logger.addHandler(console_handler)

    # File Handler (Structured JSON)
    if settings.json_logs:
        log_dir = Path(settings.log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir / 'briefos.json.log')
        except OSError as e:
            logger.warning(f"JSON log file disabled: {e}")
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(JsonFormatter())
            setattr(file_handler, _CONFIGURED_MARKER, True)
            logger.addHandler(file_handler)

    return logger
