# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config / load_file).

Este módulo valida o comportamento do loader responsável por:
- carregar arquivos de configuração padrão (defaults)
- carregar arquivos de configuração local (override)
- validar estrutura mínima da configuração
- rejeitar formatos e estados inválidos

Decisões arquiteturais:
    - A configuração é declarativa e baseada em arquivos
    - Defaults representam a base canônica do sistema
    - Configuração local atua apenas como override explícito

Invariantes:
    - A configuração final é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não valida a aplicação da seção `taskflow` (ver test_settings.py)

Este módulo existe para garantir segurança,
previsibilidade e confiabilidade no carregamento de configuração.
"""

import json
from pathlib import Path

import pytest

try:
    from atlas_taskflow.core.config.loader import load_config, load_file
    from atlas_taskflow.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Falha imediatamente quando o módulo `loader` ou as exceções
    canônicas de `errors` não podem ser importadas.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/atlas_taskflow/core/config/loader.py (load_config)\n"
            "- src/atlas_taskflow/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_defaults_raises(tmp_path: Path):
    """
    O arquivo de defaults é obrigatório.
    """
    _require_imports()
    missing = tmp_path / "defaults.yaml"

    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(missing), local_path=None)


def test_missing_local_is_ok(tmp_path: Path, taskflow_defaults_yaml):
    """
    Um arquivo local inexistente é ignorado e os defaults são usados.
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(taskflow_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))

    assert out["taskflow"]["locale"] == "en"
    assert out["app"]["queues"] == ["default", "mailers"]


def test_load_defaults_and_local(tmp_path: Path, taskflow_defaults_yaml, taskflow_local_yaml):
    """
    O override local é aplicado via deep-merge sobre os defaults:
        - valores sobrescritos refletem o arquivo local
        - valores não sobrescritos são preservados
        - listas são substituídas integralmente
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(taskflow_defaults_yaml, encoding="utf-8")
    local.write_text(taskflow_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=defaults, local_path=local)

    assert out["taskflow"]["locale"] == "pt"
    assert out["taskflow"]["task_breakpoints"] == ["failed", "skipped"]
    assert out["taskflow"]["log_format"] == "json"
    assert out["app"]["name"] == "billing"
    assert out["app"]["queues"] == ["critical"]


def test_json_files_are_supported(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.json"
    defaults.write_text(json.dumps({"taskflow": {"locale": "pt"}}), encoding="utf-8")

    assert load_config(defaults_path=defaults) == {"taskflow": {"locale": "pt"}}


def test_empty_file_is_an_empty_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yml"
    defaults.write_text("", encoding="utf-8")

    assert load_file(defaults) == {}


def test_invalid_root_type_raises(tmp_path: Path):
    """
    A raiz da configuração precisa ser um dicionário.
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults), local_path=None)


def test_unsupported_extension_raises(tmp_path: Path):
    """
    Extensões diferentes de .yaml/.yml/.json são rejeitadas.
    """
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("a = 1\n", encoding="utf-8")

    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults), local_path=None)
