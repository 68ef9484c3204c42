import logging
import json
from datetime import datetime, timezone

import coloredlogs


class JSONFormatter(logging.Formatter):
    """JSON log formatter for production and log files"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Bound context and call-site fields
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class PrettyFormatter(coloredlogs.ColoredFormatter):
    """Coloured console formatter for development"""

    DEFAULT_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: str = "%H:%M:%S"):
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        extra = getattr(record, "extra_data", None)
        if extra:
            msg += " | " + " ".join(f"{k}={v}" for k, v in extra.items())
        return msg
