# src/atlas_taskflow/core/traceability/logger.py
"""
Acesso ao logger do Atlas TaskFlow.

O framework usa exclusivamente o módulo `logging` da biblioteca padrão.
`get_logger()` devolve o logger configurado (`Configuration.logger_name`)
sem alterar nível nem handlers, respeitando a configuração da aplicação
hospedeira.

`configure_logging()` é o atalho para aplicações sem configuração
própria: aplica `Configuration.log_level` e anexa um único
`StreamHandler` com o formatter escolhido em `Configuration.log_format`.
"""

from __future__ import annotations

import logging
from typing import IO, Optional

from atlas_taskflow.core.config.settings import get_configuration

from .formatters import FORMATTERS

_HANDLER_MARK = "_atlas_taskflow_handler"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    config = get_configuration()
    return logging.getLogger(name or config.logger_name)


def configure_logging(stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Anexa (ou substitui) o handler do Atlas TaskFlow no logger configurado.

    Chamadas repetidas não duplicam handlers.
    """
    config = get_configuration()
    logger = get_logger()
    logger.setLevel(config.log_level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(FORMATTERS[config.log_format]())
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)
    return logger
