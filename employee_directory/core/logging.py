"""Logging setup for both tiers: JSON lines, request correlation, and
masking of employee personal data.

Employee records travel through log extras in three shapes: flat fields
(``employee_email="..."``), nested payloads (``extra={"employee": {...}}``)
and whole ``Employee`` models. ``EmployeeDataRedactor`` handles all three:
e-mail addresses are masked down to their first character and domain,
names down to initials, and credential headers are dropped entirely. E-mail
addresses embedded in free text are masked as well.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging import LogRecord
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel

from employee_directory.core.config import LogSettings, settings

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

EMAIL_KEYS = frozenset({"email", "employee_email"})
NAME_KEYS = frozenset({"name", "employee_name"})
CREDENTIAL_KEYS = frozenset({"authorization", "cookie", "set-cookie"})

REDACTED = "[REDACTED]"

_EMAIL_RE = re.compile(r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b")

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def set_request_id(request_id: str | None) -> None:
    _request_id_var.set(request_id)


def get_request_id() -> str | None:
    return _request_id_var.get()


def clear_request_id() -> None:
    _request_id_var.set(None)


def mask_email(value: str) -> str:
    """Mask every e-mail address in ``value``: ``jane.doe@company.com`` -> ``j***@company.com``."""
    return _EMAIL_RE.sub(r"\1***@\2", value)


def mask_name(value: str) -> str:
    """Reduce a person's name to initials: ``Jane Smith`` -> ``J. S.``."""
    initials = [f"{part[0].upper()}." for part in value.split() if part]
    return " ".join(initials) or REDACTED


class EmployeeDataRedactor:
    """Masks employee personal data inside log extras.

    Args:
        redact_names: Whether name fields are reduced to initials. E-mails
            and credentials are always masked.
    """

    def __init__(self, *, redact_names: bool = True) -> None:
        self.redact_names = redact_names

    def redact_field(self, key: str, value: Any) -> Any:
        lowered = key.lower()
        if lowered in CREDENTIAL_KEYS:
            return REDACTED
        if isinstance(value, str):
            if lowered in EMAIL_KEYS:
                return mask_email(value)
            if self.redact_names and lowered in NAME_KEYS:
                return mask_name(value)
        return self.redact(value)

    def redact(self, value: Any) -> Any:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", by_alias=True)
        if isinstance(value, Mapping):
            return {k: self.redact_field(str(k), v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self.redact(v) for v in value]
        if isinstance(value, str):
            return mask_email(value)
        return value


def record_extras(record: LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class RequestIdFilter(logging.Filter):
    """Attach request_id from context when absent on the record."""

    def filter(self, record: LogRecord) -> bool:  # noqa: D401
        if getattr(record, "request_id", None) is None:
            request_id = get_request_id()
            if request_id:
                record.request_id = request_id
        return True


class SensitiveDataFilter(logging.Filter):
    """Mask employee data in the record's extras and formatted message."""

    def __init__(self, redactor: EmployeeDataRedactor | None = None) -> None:
        super().__init__()
        self.redactor = redactor or EmployeeDataRedactor()

    def filter(self, record: LogRecord) -> bool:  # noqa: D401
        for key, value in record_extras(record).items():
            setattr(record, key, self.redactor.redact_field(key, value))
        record.msg = mask_email(record.getMessage())
        record.args = None
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record; extras become top-level keys."""

    def __init__(self, *, ensure_ascii: bool = True) -> None:
        super().__init__()
        self.ensure_ascii = ensure_ascii

    def format(self, record: LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None) or get_request_id()
        if request_id:
            payload["request_id"] = request_id
        payload.update(record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=self.ensure_ascii)


def _build_handler(log_settings: LogSettings) -> logging.Handler:
    if log_settings.output.lower() != "file":
        return logging.StreamHandler(sys.stdout)

    file_path = Path(log_settings.file_path or "logs/employee_directory.log")
    file_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        file_path,
        maxBytes=log_settings.max_bytes or 0,
        backupCount=log_settings.backup_count,
        encoding="utf-8",
    )


def configure_logging(log_settings: LogSettings | None = None) -> None:
    """Install the JSON (or plain) handler on the root logger.

    Args:
        log_settings: Optional log settings; defaults to global settings if omitted.
    """
    cfg = log_settings or settings.log

    level = logging.DEBUG if settings.app.debug else getattr(logging, cfg.level.upper(), logging.INFO)

    handler = _build_handler(cfg)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter(EmployeeDataRedactor(redact_names=cfg.redact_names)))
    if cfg.format.lower() == "plain":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Avoid double logging from uvicorn if it gets re-configured
    logging.getLogger("uvicorn").propagate = False
    logging.getLogger("uvicorn.access").propagate = False
