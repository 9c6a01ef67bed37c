"""
Outcome canônico do Trilho.

Este módulo define o tipo de resultado com duas variantes que todos os
demais componentes compõem:

    - Success(state) → o pipeline segue adiante com o estado acumulado
    - Failure(error) → o pipeline para e carrega o motivo da falha

Princípios fundamentais:
    - Exatamente uma variante está populada
    - Instâncias são imutáveis (frozen dataclasses)
    - Igualdade estrutural (variante + payload), útil em testes
    - Nenhum comportamento de composição vive aqui; o encadeamento é
      responsabilidade exclusiva do Pipeline

Acessar o payload da variante errada é erro de programação e levanta
`InvalidAccess`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from trilho.core.exceptions import InvalidAccess

S = TypeVar("S")
E = TypeVar("E")


class Outcome(Generic[S, E]):
    """Base das variantes `Success` e `Failure`."""

    __slots__ = ()

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def unwrap(self) -> S:
        """Retorna o estado de um Success; falha com InvalidAccess em um Failure."""
        if isinstance(self, Success):
            return self.state
        raise InvalidAccess(
            message="unwrap() chamado em um Failure",
            details={"error": repr(getattr(self, "error", None))},
            hint="Verifique is_success() antes de acessar o estado",
        )

    def unwrap_error(self) -> E:
        """Retorna o erro de um Failure; falha com InvalidAccess em um Success."""
        if isinstance(self, Failure):
            return self.error
        raise InvalidAccess(
            message="unwrap_error() chamado em um Success",
            details={},
            hint="Verifique is_failure() antes de acessar o erro",
        )


@dataclass(frozen=True)
class Success(Outcome[S, Any]):
    state: S

    @property
    def error(self) -> Any:
        raise InvalidAccess(
            message="Success não possui erro",
            details={},
            hint="Use .state em um Success",
        )

    def __repr__(self) -> str:
        return f"Success({self.state!r})"


@dataclass(frozen=True)
class Failure(Outcome[Any, E]):
    error: E

    @property
    def state(self) -> Any:
        raise InvalidAccess(
            message="Failure não possui estado",
            details={"error": repr(self.error)},
            hint="Use .error em um Failure",
        )

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


def success(state: S) -> Success[S]:
    return Success(state)


def failure(error: E) -> Failure[E]:
    return Failure(error)
