# src/atlas_taskflow/core/conditions.py
"""
Invocação uniforme de "referências executáveis" do Atlas TaskFlow.

Vários pontos do framework aceitam a mesma família de referências:
    - nome de método (str) resolvido no alvo (Task ou Workflow)
    - callable recebendo o alvo como primeiro argumento
    - booleano literal (apenas para condições `if_` / `unless`)

Exemplos de uso:
    - condições de validadores, callbacks e grupos de Workflow
    - `default` e `transform` de atributos
    - entradas de registries declaradas por nome de método

Invariantes:
    - Um nome de método inexistente levanta AttributeError (erro de programação)
    - Atributos não chamáveis (ex.: properties) são lidos, não invocados
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

Reference = Union[str, Callable[..., Any]]
Condition = Union[None, bool, str, Callable[..., Any]]


def invoke(target: Any, reference: Reference, *args: Any) -> Any:
    if isinstance(reference, str):
        member = getattr(target, reference)
        return member(*args) if callable(member) else member
    if callable(reference):
        return reference(target, *args)
    raise TypeError(f"Reference must be a method name or a callable, got: {type(reference).__name__}")


def truthy(target: Any, condition: Condition) -> bool:
    if isinstance(condition, bool):
        return condition
    return bool(invoke(target, condition))


def evaluate(target: Any, *, if_: Condition = None, unless: Condition = None) -> bool:
    """
    Avalia o par de condições `if_` / `unless` contra o alvo.

    Ausência de condição equivale a "permitido". Quando ambas estão
    presentes, as duas precisam concordar (`if_` verdadeiro e `unless`
    falso).
    """
    if if_ is not None and not truthy(target, if_):
        return False
    if unless is not None and truthy(target, unless):
        return False
    return True


def resolve(target: Any, value: Optional[Any]) -> Any:
    """
    Resolve um valor que pode ser literal, nome de método ou callable.

    Uma string só é tratada como referência quando o alvo possui um
    método com esse nome; nomes de dados do alvo (ex.: "context") e
    strings sem membro correspondente são literais. Para um literal que
    coincide com um método, use `lambda target: "nome"`.
    """
    if isinstance(value, str) and callable(getattr(target, value, None)):
        return invoke(target, value)
    if callable(value):
        return value(target)
    return value
