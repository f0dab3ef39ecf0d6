# src/atlas_taskflow/core/traceability/formatters.py
"""
Formatters de log dos Results.

O Executor emite `result.to_h()` (um dicionário) como mensagem de log em
nível INFO. Os formatters abaixo sabem renderizar tanto mensagens
dicionário quanto strings comuns:

    - JsonFormatter      → um objeto JSON por linha
    - KeyValueFormatter  → pares `chave=valor`
    - LineFormatter      → `I, [timestamp #pid] INFO -- logger: chave=valor ...`

Em todos os casos, os campos base (timestamp, level, logger, pid) são
adicionados antes dos campos da mensagem.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

from .serializer import iso, to_key_value, to_serializable


def _payload(record: logging.LogRecord) -> Dict[str, Any]:
    if isinstance(record.msg, dict):
        return to_serializable(record.msg)
    return {"message": record.getMessage()}


class ResultFormatter(logging.Formatter):
    def base_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        return {
            "timestamp": iso(datetime.fromtimestamp(record.created, tz=timezone.utc)),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process or os.getpid(),
        }

    def fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        event = self.base_fields(record)
        event.update(_payload(record))
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        return event


class JsonFormatter(ResultFormatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.fields(record), ensure_ascii=False, default=str)


class KeyValueFormatter(ResultFormatter):
    def format(self, record: logging.LogRecord) -> str:
        return to_key_value(self.fields(record))


class LineFormatter(ResultFormatter):
    def format(self, record: logging.LogRecord) -> str:
        event = self.fields(record)
        header = "{}, [{} #{}] {} -- {}:".format(
            record.levelname[:1],
            event.pop("timestamp"),
            event.pop("pid"),
            event.pop("level"),
            event.pop("logger"),
        )
        return f"{header} {to_key_value(event)}"


FORMATTERS = {
    "json": JsonFormatter,
    "key_value": KeyValueFormatter,
    "line": LineFormatter,
}
