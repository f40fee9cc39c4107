"""
Logger JSON del servicio de funcionarios.

Cada registro sale como una línea JSON con timestamp, nivel, logger, mensaje y
los campos pasados en ``extra``. Las claves sensibles (senha, token, ...) se
redactan antes de serializar.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from servicio_funcionarios import config_funcionarios as settings

LOGGER_NAME = "servicio_funcionarios"

_INTERNAL_KEYS = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "message", "taskName",
}

SENSITIVE_KEYS = {"senha", "password", "token", "authorization", "secret", "jwt_secret_key"}


def redact(value: Any, key: str = None) -> Any:
    if key and key.lower() in SENSITIVE_KEYS:
        return "***REDACTADO***"
    if isinstance(value, dict):
        return {str(k): redact(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact(v) for v in value]
    return value


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
        }
        for k, v in record.__dict__.items():
            if k in _INTERNAL_KEYS:
                continue
            payload[k] = redact(v, k)
        if record.exc_info:
            payload["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    # Evita handlers duplicados si el módulo se reimporta
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter() if settings.LOG_JSON else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)
    return log


def get_logger(suffix: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}")
