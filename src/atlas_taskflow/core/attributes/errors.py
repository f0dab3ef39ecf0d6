# src/atlas_taskflow/core/attributes/errors.py
"""
Acumulador de erros de atributos de uma Task.

Erros de atributos (required ausente, coerção impossível, validação
reprovada) não são exceções: são acumulados aqui durante a resolução e,
ao final, convertidos em um único `fail` do Result antes do `work()`.

Invariantes:
    - Mensagens são deduplicadas por atributo
    - A ordem de inserção (atributos e mensagens) é preservada
    - `full_message` junta as mensagens no formato "<atributo> <mensagem>"
      separadas por ". "
"""

from __future__ import annotations

from typing import Dict, List


class Errors:
    def __init__(self) -> None:
        self.messages: Dict[str, List[str]] = {}

    def add(self, attribute: str, message: str) -> None:
        bucket = self.messages.setdefault(attribute, [])
        if message not in bucket:
            bucket.append(message)

    def for_attribute(self, attribute: str) -> List[str]:
        return list(self.messages.get(attribute, []))

    def has(self, attribute: str) -> bool:
        return bool(self.messages.get(attribute))

    def is_empty(self) -> bool:
        return not self.messages

    def __len__(self) -> int:
        return sum(len(v) for v in self.messages.values())

    def __bool__(self) -> bool:
        return not self.is_empty()

    def full_messages(self) -> Dict[str, List[str]]:
        return {attr: [f"{attr} {msg}" for msg in msgs] for attr, msgs in self.messages.items()}

    @property
    def full_message(self) -> str:
        return ". ".join(line for lines in self.full_messages().values() for line in lines)

    def to_h(self) -> Dict[str, List[str]]:
        return {attr: list(msgs) for attr, msgs in self.messages.items()}

    def __str__(self) -> str:
        return self.full_message

    def __repr__(self) -> str:
        return f"Errors({self.messages!r})"
