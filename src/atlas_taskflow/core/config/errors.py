# src/atlas_taskflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas TaskFlow.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento de arquivos, o deep-merge e a aplicação de configuração
sobre o `Configuration` global.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao desenvolvedor

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa halt de Task (skip/fail)

Limites explícitos:
    - Não executa Tasks
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas TaskFlow.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas de configuração e falhas de execução
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Não existe tentativa de inferir ou criar defaults
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração (ou da
    seção `taskflow`) não é um dicionário.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"taskflow": {"locale": "en"}}
        - override: {"taskflow": ["pt"]}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class UnknownConfigKeyError(ConfigError):
    """
    Exceção levantada quando uma chave desconhecida é aplicada ao
    `Configuration`, seja via arquivo ou via `configure(**changes)`.

    Decisões arquiteturais:
        - Chaves não reconhecidas nunca são ignoradas silenciosamente
    """
