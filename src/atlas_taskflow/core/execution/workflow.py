# src/atlas_taskflow/core/execution/workflow.py
"""
Workflow: composição sequencial de executáveis.

Um Workflow organiza Tasks (ou outros Workflows) em grupos executados em
ordem, compartilhando um único Context:

    class Onboarding(Workflow):
        email = required(types="string")
        breakpoints = ("failed",)

    Onboarding.process(CreateUser, SendWelcome)
    Onboarding.process(NotifySales, if_="is_enterprise")

    result = Onboarding.execute(email="a@b.c")

Decisões arquiteturais:
    - Workflow não herda de Task: cada subclasse possui uma Task gerada
      (`cls.unit`, mesmo nome) cujo `work()` instancia o Workflow e
      chama `run()`
    - Atributos, callbacks e breakpoints de Task (`task_breakpoints`)
      declarados no Workflow são repassados à unit
    - Condições de grupo são avaliadas contra a instância do Workflow

Política de breakpoints (primeiro declarado vence):
    1. `breakpoints` do grupo (`process(..., breakpoints=...)`)
    2. `breakpoints` da classe do Workflow
    3. `Configuration.workflow_breakpoints`

Invariantes:
    - Grupos executam na ordem de declaração
    - Um status presente nos breakpoints efetivos é adotado via `throw`
      e interrompe o Workflow imediatamente
    - Subclasses herdam uma cópia dos grupos da classe pai

Limites explícitos:
    - Execução estritamente sequencial (sem paralelismo)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Tuple, Type

from atlas_taskflow.core.attributes.definition import Attribute
from atlas_taskflow.core.conditions import Condition, Reference, evaluate
from atlas_taskflow.core.config.settings import get_configuration
from atlas_taskflow.core.middlewares import Middleware
from atlas_taskflow.core.registry import Entry

from .chain import Chain
from .protocol import Executable
from .result import Result
from .task import Task
from .types import BreakpointsLike, Status, normalize_breakpoints


@dataclass(frozen=True)
class Group:
    executables: Tuple[Any, ...]
    if_: Condition = None
    unless: Condition = None
    breakpoints: Optional[Tuple[Status, ...]] = None


def _work(task: Task) -> None:
    type(task).workflow_class(task).run()


def _delegate(task: Task, name: str) -> Any:
    """Membros declarados no Workflow (condições, callbacks) vistos pela unit."""
    workflow_class = type(task).workflow_class
    if name.startswith("__") or not hasattr(workflow_class, name):
        raise AttributeError(name)
    return getattr(workflow_class(task), name)


class Workflow:
    breakpoints: ClassVar[BreakpointsLike] = None
    task_breakpoints: ClassVar[BreakpointsLike] = None
    tags: ClassVar[Tuple[str, ...]] = ()

    groups: ClassVar[Tuple[Group, ...]] = ()
    unit: ClassVar[Type[Task]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.groups = tuple(cls.groups)

        base_unit: Type[Task] = Task
        for base in cls.__mro__[1:]:
            if "unit" in base.__dict__:
                base_unit = base.__dict__["unit"]
                break

        namespace = {
            key: value for key, value in cls.__dict__.items() if isinstance(value, Attribute)
        }
        namespace.update(
            __module__=cls.__module__,
            __qualname__=cls.__qualname__,
            __doc__=cls.__doc__,
            workflow_class=cls,
            work=_work,
            __getattr__=_delegate,
            tags=tuple(cls.tags),
        )
        if "task_breakpoints" in cls.__dict__:
            namespace["breakpoints"] = cls.task_breakpoints

        cls.unit = type(cls.__name__, (base_unit,), namespace)

    # ------------------------------------------------------------------
    # Declaração
    # ------------------------------------------------------------------

    @classmethod
    def process(
        cls,
        *executables: Any,
        if_: Condition = None,
        unless: Condition = None,
        breakpoints: BreakpointsLike = None,
    ) -> Type["Workflow"]:
        if not executables:
            raise ValueError("process() requires at least one executable")
        for executable in executables:
            if not isinstance(executable, Executable):
                raise TypeError(f"Not an executable: {executable!r}")

        group = Group(
            executables=tuple(executables),
            if_=if_,
            unless=unless,
            breakpoints=normalize_breakpoints(breakpoints),
        )
        cls.groups = cls.groups + (group,)
        return cls

    @classmethod
    def register_callback(cls, type_: str, *references: Reference,
                          if_: Condition = None, unless: Condition = None) -> None:
        cls.unit.register_callback(type_, *references, if_=if_, unless=unless)

    @classmethod
    def register_coercion(cls, name: str, coercion: Entry) -> None:
        cls.unit.register_coercion(name, coercion)

    @classmethod
    def register_validator(cls, name: str, validator: Entry) -> None:
        cls.unit.register_validator(name, validator)

    @classmethod
    def use_middleware(cls, middleware: Middleware) -> None:
        cls.unit.use_middleware(middleware)

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------

    @classmethod
    def execute(cls, context: Any = None, *, chain: Optional[Chain] = None, **values: Any) -> Result:
        return cls.unit.execute(context, chain=chain, **values)

    @classmethod
    def execute_strict(cls, context: Any = None, *, chain: Optional[Chain] = None, **values: Any) -> Result:
        return cls.unit.execute_strict(context, chain=chain, **values)

    def __init__(self, task: Task) -> None:
        self.task = task

    @property
    def context(self) -> Any:
        return self.task.context

    @property
    def result(self) -> Result:
        return self.task.result

    @property
    def chain(self) -> Chain:
        return self.task.chain

    def __getattr__(self, name: str) -> Any:
        if name == "task":
            raise AttributeError(name)
        return getattr(self.task, name)

    def attribute_value(self, definition: Attribute) -> Any:
        return self.task.attribute_value(definition)

    def skip(self, reason: Optional[str] = None, **metadata: Any) -> None:
        self.task.skip(reason, **metadata)

    def fail(self, reason: Optional[str] = None, **metadata: Any) -> None:
        self.task.fail(reason, **metadata)

    def throw(self, result: Result, **metadata: Any) -> None:
        self.task.throw(result, **metadata)

    def breakpoints_for(self, group: Group) -> Tuple[Status, ...]:
        if group.breakpoints is not None:
            return group.breakpoints
        declared = normalize_breakpoints(type(self).breakpoints)
        if declared is not None:
            return declared
        return get_configuration().workflow_breakpoints

    def run(self) -> None:
        for group in type(self).groups:
            if not evaluate(self, if_=group.if_, unless=group.unless):
                continue

            halts = self.breakpoints_for(group)
            for executable in group.executables:
                result = executable.execute(self.context)
                if result.status in halts:
                    self.throw(result)
