# src/atlas_taskflow/core/traceability/__init__.py
"""
Pacote de rastreabilidade (traceability) do Atlas TaskFlow.

Responsabilidades principais:
    - Serializar Results e Chains em estruturas JSON-safe
    - Formatar registros de log (JSON, chave=valor, linha)
    - Expor o logger configurado do framework

API pública exposta:
    - get_logger / configure_logging
    - JsonFormatter / KeyValueFormatter / LineFormatter
    - serialize_result / serialize_chain / to_serializable

Decisões arquiteturais:
    - Cada Task executada gera exatamente um registro INFO com `result.to_h()`
    - A ordem dos Results na Chain reflete a ordem de criação das Tasks

Limites explícitos:
    - Não persiste logs nem Chains
    - Não decide políticas de execução
"""

from .formatters import FORMATTERS, JsonFormatter, KeyValueFormatter, LineFormatter, ResultFormatter
from .logger import configure_logging, get_logger
from .serializer import serialize_chain, serialize_result, to_key_value, to_serializable

__all__ = [
    "FORMATTERS",
    "JsonFormatter",
    "KeyValueFormatter",
    "LineFormatter",
    "ResultFormatter",
    "configure_logging",
    "get_logger",
    "serialize_chain",
    "serialize_result",
    "to_key_value",
    "to_serializable",
]
