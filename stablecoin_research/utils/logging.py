"""Logging setup shared by the CLI, the API and the research pipeline."""
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional


# HTTP client libraries log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3")

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "json",
    enabled: bool = True,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Optional path that also receives every record
        format_type: "json" for one JSON object per line, anything else for text
        enabled: False silences logging entirely
        quiet: Logger names held at WARNING regardless of `level`
    """
    if not enabled:
        logging.disable(logging.CRITICAL)
        return
    logging.disable(logging.NOTSET)

    formatter = JsonFormatter() if format_type == "json" else logging.Formatter(TEXT_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with `extra=` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
