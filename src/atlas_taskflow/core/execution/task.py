# src/atlas_taskflow/core/execution/task.py
"""
Task: unidade canônica de lógica de negócio do Atlas TaskFlow.

Uma Task declara seus atributos de entrada e implementa `work()`:

    class ChargeCard(Task):
        amount = required(types="decimal", numeric={"min": 1})
        card_id = required(types="string")

        def work(self):
            if self.context.charged:
                self.skip("already charged")
            self.context.charge = gateway.charge(self.card_id, self.amount)

    result = ChargeCard.execute(amount="10.50", card_id="c_1")
    result.status      # "success"

Superfície pública:
    - execute(context=None, *, chain=None, **values) → Result (nunca levanta halts)
    - execute_strict(...) → Result, ou levanta Fault / exceção original
      quando o status está nos breakpoints
    - skip / fail / throw → halts dentro de `work()`
    - register_callback / register_coercion / register_validator /
      use_middleware → extensões por classe (herdadas por subclasses)

Decisões arquiteturais:
    - Atributos são coletados na criação da classe (`__init_subclass__`)
    - Accessors são instalados pelo `method_name` de cada atributo
    - Conflitos de `method_name` são erros de definição
    - Registries da classe são cópias das da classe pai

Limites explícitos:
    - Execução síncrona, sem retries; limites de tempo via middleware Timeout
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from atlas_taskflow.core import identifier
from atlas_taskflow.core.attributes.definition import Attribute
from atlas_taskflow.core.attributes.errors import Errors
from atlas_taskflow.core.attributes.value import AttributeValue
from atlas_taskflow.core.callbacks import CallbackRegistry
from atlas_taskflow.core.coercions import CoercionRegistry
from atlas_taskflow.core.conditions import Condition, Reference
from atlas_taskflow.core.config.settings import get_configuration
from atlas_taskflow.core.context import Context
from atlas_taskflow.core.exceptions import AttributeDefinitionError, UndefinedWorkError
from atlas_taskflow.core.middlewares import Middleware, MiddlewareRegistry
from atlas_taskflow.core.registry import Entry
from atlas_taskflow.core.traceability.logger import get_logger
from atlas_taskflow.core.validators import ValidatorRegistry

from .chain import Chain
from .executor import Executor
from .result import Result
from .types import BreakpointsLike, Status, normalize_breakpoints

# Nomes atribuídos por instância em `Task.__init__`.
_INSTANCE_NAMES = frozenset({"id", "context", "chain", "result", "attributes", "errors"})


class Task:
    breakpoints: ClassVar[BreakpointsLike] = None
    tags: ClassVar[Tuple[str, ...]] = ()
    workflow_class: ClassVar[Optional[type]] = None

    attribute_definitions: ClassVar[Tuple[Attribute, ...]] = ()
    callbacks: ClassVar[CallbackRegistry] = CallbackRegistry()
    middlewares: ClassVar[MiddlewareRegistry] = MiddlewareRegistry()
    _coercions: ClassVar[CoercionRegistry] = CoercionRegistry()
    _validators: ClassVar[ValidatorRegistry] = ValidatorRegistry()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.callbacks = cls.callbacks.copy()
        cls.middlewares = cls.middlewares.copy()
        cls._coercions = cls._coercions.copy()
        cls._validators = cls._validators.copy()
        cls._collect_attributes()

    @classmethod
    def _collect_attributes(cls) -> None:
        inherited: List[Attribute] = []
        for base in reversed(cls.__mro__[1:]):
            for definition in base.__dict__.get("attribute_definitions", ()):
                if all(definition is not seen for seen in inherited):
                    inherited.append(definition)

        own = [
            (key, value)
            for key, value in list(cls.__dict__.items())
            if isinstance(value, Attribute) and value.parent is None
        ]

        own_names: Dict[str, Attribute] = {}
        for _, definition in own:
            for node in definition.walk():
                name = node.method_name
                if name in own_names:
                    raise AttributeDefinitionError(
                        f"Duplicate attribute method name on {cls.__name__}: {name}",
                        details={"task": cls.__name__, "method_name": name},
                    )
                if name in _INSTANCE_NAMES or hasattr(Task, name):
                    raise AttributeDefinitionError(
                        f"Attribute method name collides with the Task API: {name}",
                        details={"task": cls.__name__, "method_name": name},
                    )
                own_names[name] = node

        # Atributos próprios substituem herdados com o mesmo method_name.
        kept = [
            definition
            for definition in inherited
            if all(node.method_name not in own_names for node in definition.walk())
        ]
        cls.attribute_definitions = tuple(kept) + tuple(definition for _, definition in own)

        for key, definition in own:
            if key != definition.method_name:
                delattr(cls, key)
        for name, node in own_names.items():
            setattr(cls, name, node)

    # ------------------------------------------------------------------
    # Registries por classe
    # ------------------------------------------------------------------

    @classmethod
    def register_callback(cls, type_: str, *references: Reference,
                          if_: Condition = None, unless: Condition = None) -> None:
        cls.callbacks.register(type_, *references, if_=if_, unless=unless)

    @classmethod
    def register_coercion(cls, name: str, coercion: Entry) -> None:
        cls._coercions.register(name, coercion)

    @classmethod
    def register_validator(cls, name: str, validator: Entry) -> None:
        cls._validators.register(name, validator)

    @classmethod
    def use_middleware(cls, middleware: Middleware) -> None:
        cls.middlewares.register(middleware)

    @classmethod
    def coercion_registry(cls) -> CoercionRegistry:
        return get_configuration().coercions.layered(cls._coercions.entries())

    @classmethod
    def validator_registry(cls) -> ValidatorRegistry:
        return get_configuration().validators.layered(cls._validators.entries())

    @classmethod
    def effective_breakpoints(cls) -> Tuple[Status, ...]:
        declared = normalize_breakpoints(cls.breakpoints)
        if declared is not None:
            return declared
        return get_configuration().task_breakpoints

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------

    def __init__(self, context: Any = None, *, chain: Optional[Chain] = None, **values: Any) -> None:
        self.id: str = identifier.generate()
        self.context: Context = Context.build(context)
        self.context.update(values)
        if chain is None:
            chain = Chain.current()
        self.chain: Chain = chain if chain is not None else Chain()
        self.attributes: Dict[str, Any] = {}
        self.errors = Errors()
        self.result = Result(self)
        self.chain.append(self.result)

    @classmethod
    def execute(cls, context: Any = None, *, chain: Optional[Chain] = None, **values: Any) -> Result:
        return Executor.execute(cls(context, chain=chain, **values))

    @classmethod
    def execute_strict(cls, context: Any = None, *, chain: Optional[Chain] = None, **values: Any) -> Result:
        return Executor.execute(cls(context, chain=chain, **values), strict=True)

    def work(self) -> None:
        raise UndefinedWorkError(
            f"{self.__class__.__name__} does not implement work()",
            details={"task": self.__class__.__name__},
            hint="Define a work(self) method on the Task subclass.",
        )

    # ------------------------------------------------------------------
    # Halts
    # ------------------------------------------------------------------

    def skip(self, reason: Optional[str] = None, **metadata: Any) -> None:
        self.result.skip(reason, **metadata)

    def fail(self, reason: Optional[str] = None, **metadata: Any) -> None:
        self.result.fail(reason, **metadata)

    def throw(self, result: Result, **metadata: Any) -> None:
        self.result.throw(result, **metadata)

    # ------------------------------------------------------------------
    # Atributos
    # ------------------------------------------------------------------

    def attribute_value(self, definition: Attribute) -> AttributeValue:
        return AttributeValue(definition, self)

    def resolve_attributes(self) -> None:
        """Gera toda a árvore de atributos e, em seguida, valida toda a árvore."""
        nodes = [node for definition in self.attribute_definitions for node in definition.walk()]
        for node in nodes:
            self.attribute_value(node).generate()
        for node in nodes:
            self.attribute_value(node).validate()

    @property
    def logger(self):
        return get_logger()

    def to_h(self) -> Dict[str, Any]:
        return {
            "index": self.result.index,
            "chain_id": self.chain.id,
            "type": "Workflow" if self.workflow_class else "Task",
            "class": self.__class__.__name__,
            "id": self.id,
            "tags": list(self.tags),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"
