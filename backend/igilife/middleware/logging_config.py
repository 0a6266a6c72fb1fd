"""
Logging setup for the portal.

JSON lines by default. Each entry carries the request id of the call that
produced it plus any of the portal's structured extras (request method,
path, status and timing, the store key involved). Plain text is there for
local runs.
"""

import json
import logging
from datetime import datetime, timezone

from igilife.middleware.request_context import get_request_id

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms", "store_key")

# Loggers that would repeat what the request middleware already records
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                entry[field] = getattr(record, field)

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(log_level: str = "INFO", log_format: str = "json"):
    """Install one stream handler on the root logger in the chosen format."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
