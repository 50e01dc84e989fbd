"""Structured logging setup."""
import json
import logging

# LogRecord attributes copied into the JSON payload when present.
EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "client_ip",
    "details",
)


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Send all application logs to stderr as JSON lines.

    Safe to call more than once; only one JSON handler is ever installed.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if any(isinstance(h.formatter, JSONLogFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter())
    root.addHandler(handler)
