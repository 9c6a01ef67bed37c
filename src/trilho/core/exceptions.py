"""
Trilho — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Trilho.

Todas as exceções aqui representam **erros de programação**: uso incorreto
de um Outcome, Steps que violam o contrato do seu adapter ou tabelas de
handlers incompletas em modo estrito. Nenhuma delas é convertida em
`Failure` pelo pipeline; elas sempre propagam até o chamador.

Falhas de negócio NÃO são exceções: são valores `Failure(...)`.

Regras:
- Exceções carregam apenas dados estruturados em `details`.
- Mensagem curta e humana; `hint` indica onde corrigir.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class TrilhoException(Exception):
    """Base class para exceções internas do Trilho.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InvalidAccess(TrilhoException, AttributeError):
    """Acesso ao payload da variante errada de um Outcome.

    Também é um AttributeError: `hasattr(success(s), "error")` retorna False.
    """


# ---------------------------------------------------------------------------
# Contratos de Step
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class StepContractError(TrilhoException):
    """Step `continue` retornou algo que não é um Outcome."""


@dataclass(eq=False)
class StateContractError(TrilhoException):
    """Step retornou estado inválido (não-mapping ou com chaves removidas)."""


@dataclass(eq=False)
class UnknownStepError(TrilhoException):
    """Referência a um Step que não está registrado no pipeline."""


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnhandledFailureError(TrilhoException):
    """Nenhum handler casou com a falha e a tabela está em modo estrito."""
