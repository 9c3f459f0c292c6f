from __future__ import annotations

import json
import logging
from typing import Any, Dict

_RESERVED = {
    "levelname", "name", "msg", "args", "exc_info", "exc_text", "stack_info",
    "lineno", "pathname", "filename", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process",
    "message", "asctime", "levelno", "module", "taskName",
}

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # pass through extra fields
        for key, value in record.__dict__.items():
            if key in _RESERVED:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), default=str)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    # Clear existing handlers to avoid duplicate logs
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(handler)

    # realtime client logs every heartbeat at INFO
    logging.getLogger("realtime").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
