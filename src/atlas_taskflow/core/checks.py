# src/atlas_taskflow/core/checks.py
"""
Resultado tipado de coerções e validações.

Coerções e validadores não levantam exceções para sinalizar entradas
inválidas: esse é um desfecho esperado e recuperável. Ambos retornam
um `Check`, que carrega o valor produzido (coerções) ou a mensagem
humana da falha.

Invariantes:
    - `ok=True` implica `message is None`
    - `ok=False` implica `message` não vazia

Limites explícitos:
    - Não registra erros em `Errors` (responsabilidade do AttributeValue)
    - Não traduz mensagens (o chamador já entrega texto final)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Check:
    """Desfecho imutável de uma coerção ou validação."""

    ok: bool
    value: Any = None
    message: Optional[str] = None

    @classmethod
    def passed(cls, value: Any = None) -> "Check":
        return cls(ok=True, value=value)

    @classmethod
    def failed(cls, message: str) -> "Check":
        if not message:
            raise ValueError("failed check requires a message")
        return cls(ok=False, message=message)
