# src/atlas_taskflow/core/identifier.py
"""Geração de identificadores de execução (tasks, chains, correlação)."""

from __future__ import annotations

import uuid


def generate() -> str:
    return str(uuid.uuid4())
