# src/atlas_taskflow/core/__init__.py
"""
Core do Atlas TaskFlow.

Este pacote contém a implementação canônica do framework de composição
de lógica de negócio: atributos, execução, configuração e
rastreabilidade.

Componentes principais:
    - attributes   → declaração, resolução e erros de atributos
    - coercions    → registry e coerções embutidas
    - validators   → registry e validadores embutidos
    - execution    → Result, Chain, Executor, Task, Workflow
    - config       → Configuration global + loader YAML/JSON
    - locale       → catálogos de mensagens
    - traceability → serialização e logging de Results

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Halts de negócio são valores (Result), não exceções propagadas
    - Erros de definição falham cedo e de forma tipada

Limites explícitos:
    - Execução síncrona, em processo
    - Sem persistência, filas, retries ou timeouts

Este pacote existe como a fonte de verdade operacional do Atlas TaskFlow.
"""
