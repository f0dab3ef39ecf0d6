# src/atlas_taskflow/core/locale/__init__.py
"""
Lookup de mensagens humanas do Atlas TaskFlow.

As mensagens padrão (erros de atributo, coerção, validação e o reason
default de halts) vivem em catálogos YAML empacotados em `catalogs/`,
um arquivo por locale (`en.yml`, `pt.yml`), com a raiz
`<locale>.taskflow.<chave>`.

Política de resolução:
    1. Se `Configuration.translator` estiver definido, ele decide tudo
       (ex.: um stub que devolve a chave verbatim em testes)
    2. Catálogo do locale configurado
    3. Catálogo `en` como fallback
    4. "Translation missing: <chave>"

Interpolação usa `str.format` com os argumentos nomeados.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Optional

import yaml  # PyYAML

FALLBACK_LOCALE = "en"


@lru_cache(maxsize=None)
def load_catalog(locale: str) -> Dict[str, Any]:
    """Carrega (uma única vez) o catálogo YAML empacotado do locale."""
    resource = resources.files(__name__).joinpath("catalogs").joinpath(f"{locale}.yml")
    if not resource.is_file():
        return {}

    data = yaml.safe_load(resource.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Locale catalog root must be a dict: {locale}.yml")
    return data.get(locale) or {}


def lookup(locale: str, key: str) -> Optional[str]:
    node: Any = load_catalog(locale)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def translate(key: str, **interpolations: Any) -> str:
    from atlas_taskflow.core.config.settings import get_configuration

    config = get_configuration()
    if config.translator is not None:
        return config.translator(key, **interpolations)

    message = lookup(config.locale, key)
    if message is None and config.locale != FALLBACK_LOCALE:
        message = lookup(FALLBACK_LOCALE, key)
    if message is None:
        return f"Translation missing: {key}"

    return message.format(**interpolations) if interpolations else message


t = translate

__all__ = ["translate", "t", "lookup", "load_catalog", "FALLBACK_LOCALE"]
