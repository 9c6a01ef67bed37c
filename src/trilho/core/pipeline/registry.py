"""
Registro estrutural de Steps do pipeline.

Este módulo define o `StepRegistry`, responsável por registrar Steps
e validar a integridade estrutural do pipeline antes de qualquer
execução.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada Step possua um nome válido
    - não existam nomes duplicados (o Dispatcher roteia por nome)
    - cada Step declare um adapter conhecido e uma função chamável
    - exceções declaradas existam somente para adapters `try`
    - a ordem de declaração seja preservada explicitamente

Decisões arquiteturais:
    - A validação ocorre no momento do registro, antes de qualquer run
    - Erros estruturais são tratados como falhas fatais (ValueError)
    - A ordem de registro é mantida separadamente da estrutura de armazenamento

Invariantes:
    - Cada Step registrado possui um nome único
    - A lista de Steps reflete exatamente a ordem de registro
    - Nenhum Step inválido é aceito no registry

Limites explícitos:
    - Não executa Steps
    - Não interage com RunContext
    - Não contém lógica de domínio
"""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterable
from typing import Any, Dict, List, Tuple, Type

from .step import Step
from .types import AdapterKind, StepSpec


class DuplicateStepNameError(ValueError):
    """
    Exceção levantada quando ocorre duplicidade de nome de Step.

    Decisões arquiteturais:
        - Nomes de Step devem ser únicos no pipeline
        - A duplicidade é tratada como erro fatal de configuração
        - A exceção é lançada no momento do registro, antes da execução

    Limites explícitos:
        - Não tenta resolver ou renomear Steps automaticamente
    """


class InvalidStepRegistrationError(ValueError):
    """
    Exceção levantada quando um Step é registrado com dados estruturalmente inválidos.

    Exemplos:
        - nome vazio ou não-string
        - adapter desconhecido
        - função não chamável
        - adapter `try` sem exceções declaradas
        - exceções declaradas em adapter que não é `try`
    """


def coerce_kind(kind: Any) -> AdapterKind:
    """Normaliza `kind` (enum ou string) para `AdapterKind`."""
    if isinstance(kind, AdapterKind):
        return kind
    try:
        return AdapterKind(kind)
    except ValueError:
        allowed = ", ".join(k.value for k in AdapterKind)
        raise InvalidStepRegistrationError(
            f"Unknown adapter kind: {kind!r} (expected one of: {allowed})"
        ) from None


def normalize_catch(kind: AdapterKind, catch: Any) -> Tuple[Type[BaseException], ...]:
    """Valida as exceções declaradas de acordo com o adapter."""
    if catch is None:
        items: Tuple[Any, ...] = ()
    elif isinstance(catch, type):
        items = (catch,)
    elif isinstance(catch, (str, bytes)):
        raise InvalidStepRegistrationError(
            f"catch must be exception classes, not a string: {catch!r} "
            "(use the class itself, or a 'module:Class' reference in config)"
        )
    elif isinstance(catch, Iterable):
        items = tuple(catch)
    else:
        raise InvalidStepRegistrationError("catch must be an exception class or an iterable of them")

    for exc in items:
        if not (isinstance(exc, type) and issubclass(exc, BaseException)):
            raise InvalidStepRegistrationError(f"catch entries must be exception classes, got {exc!r}")

    if kind is AdapterKind.TRY and not items:
        raise InvalidStepRegistrationError("adapter 'try' requires a non-empty set of declared exceptions")
    if kind is not AdapterKind.TRY and items:
        raise InvalidStepRegistrationError(f"adapter '{kind.value}' does not accept declared exceptions")

    return items


@dataclass
class StepRegistry:
    """
    Registro canônico de Steps para validação estrutural pré-execução.

    A ordem de inserção é a ordem de execução do pipeline e nunca é
    alterada depois do registro.
    """

    _steps: Dict[str, StepSpec] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, spec: StepSpec) -> None:
        name = spec.name
        if not isinstance(name, str) or not name.strip():
            raise InvalidStepRegistrationError("step name must be a non-empty string")

        if name in self._steps:
            raise DuplicateStepNameError(f"Duplicate step name: {name}")

        if not isinstance(spec.fn, Step):
            raise InvalidStepRegistrationError(f"step '{name}' function must be callable")

        self._steps[name] = spec
        self._order.append(name)

    def get(self, name: str) -> StepSpec:
        return self._steps[name]

    def list(self) -> List[StepSpec]:
        return [self._steps[n] for n in self._order]

    def names(self) -> Tuple[str, ...]:
        return tuple(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._steps

    def __len__(self) -> int:
        return len(self._order)
