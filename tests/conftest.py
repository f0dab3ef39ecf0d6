# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas TaskFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- isolamento da configuração global entre testes
- isolamento da Chain corrente entre testes
- conteúdos YAML determinísticos para o loader de configuração
- Tasks mínimas reutilizadas por vários módulos de teste

Decisões arquiteturais:
    - A configuração global e a Chain corrente são resetadas
      automaticamente (autouse), pois ambas são estado de processo
    - Conteúdos de configuração são fornecidos como string para que
      cada teste decida onde escrevê-los (tmp_path)
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhum teste herda configuração alterada por outro teste
    - Nenhum teste herda uma Chain ativa de outro teste

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica de negócio

Este módulo existe como infraestrutura de teste e não
como validação funcional do framework.
"""

import pytest


# =====================================================
# Isolamento de estado global
# =====================================================

@pytest.fixture(autouse=True)
def _isolated_taskflow_state():
    """
    Restaura a configuração global e limpa a Chain corrente antes e
    depois de cada teste.

    Invariantes:
        - `get_configuration()` sempre começa com os defaults canônicos
        - `Chain.current()` sempre começa como None
    """
    from atlas_taskflow.core.config.settings import reset_configuration
    from atlas_taskflow.core.execution.chain import Chain

    reset_configuration()
    Chain.clear()
    yield
    reset_configuration()
    Chain.clear()


# =====================================================
# Config Loader fixtures
# =====================================================

@pytest.fixture
def taskflow_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao `config.defaults.yaml` de uma aplicação.

    Contém a seção `taskflow:` (lida por `configure_from_files`) e uma
    seção `app:` arbitrária, que o loader carrega mas a configuração
    do framework ignora.
    """
    return """
taskflow:
  task_breakpoints: [failed]
  workflow_breakpoints: [failed]
  locale: en
  log_level: info
  log_format: json
app:
  name: billing
  retries: 0
  queues:
    - default
    - mailers
"""


@pytest.fixture
def taskflow_local_yaml() -> str:
    """YAML de overrides locais aplicado sobre os defaults via deep-merge."""
    return """
taskflow:
  task_breakpoints: [failed, skipped]
  locale: pt
app:
  queues:
    - critical
"""


# =====================================================
# Tasks mínimas
# =====================================================

@pytest.fixture
def adult_task():
    """
    Task com um atributo `age` required, inteiro e com mínimo de 18.

    Cobre os cenários de atributo ausente, coerção e validação.
    """
    from atlas_taskflow import Task, required

    class CheckAdult(Task):
        age = required(types="integer", numeric={"min": 18})

        def work(self):
            self.context.adult = True

    return CheckAdult
