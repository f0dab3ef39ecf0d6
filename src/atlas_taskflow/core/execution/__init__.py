# src/atlas_taskflow/core/execution/__init__.py
"""
Camada de execução do Atlas TaskFlow.

Componentes:
    - types     → State / Status e normalização de breakpoints
    - result    → máquina de estados state × status
    - fault     → halts em forma de exceção (SkipFault / FailFault)
    - chain     → registro ordenado dos Results de uma execução
    - executor  → ciclo de vida completo de uma Task
    - task      → superfície pública de Tasks
    - workflow  → composição sequencial de executáveis
    - protocol  → contrato `Executable`

Os módulos são importados diretamente (ex.: `from
atlas_taskflow.core.execution.task import Task`); este pacote não
reexporta nada para manter `types` importável pela camada de config sem
ciclos.
"""
