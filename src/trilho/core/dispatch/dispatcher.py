"""
Dispatcher de Outcomes.

Dado um Outcome finalizado e uma tabela de handlers, seleciona e invoca
EXATAMENTE um handler, segundo uma lista de prioridades explícita avaliada
de cima para baixo:

    1. Success            → handler de sucesso (com o estado final)
    2. valor de falha     → handler registrado para aquele valor
    3. nome do Step       → handler registrado para o Step que falhou
    4. fallback           → handler genérico
    5. nenhum             → falha descartada com warning registrado
                            (ou UnhandledFailureError em modo estrito)

Casamento por valor de falha:
    - `error == chave`, ou
    - a chave é uma classe de exceção e `error` é instância dela
      (útil para falhas produzidas por adapters `try`)

Handlers recebem o payload CRU da falha (não o `StepFailure`). Quando o
Step que falhou é outro pipeline (`continue` com `inner.run`), a falha chega
etiquetada uma vez por nível; todas as camadas de `StepFailure` são
removidas antes do casamento por valor, e o casamento por nome usa o Step
mais externo.

Handlers não possuem contrato de retorno; `dispatch` devolve o
`DispatchMatch` que indica qual regra disparou.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from trilho.core.exceptions import UnhandledFailureError
from trilho.core.pipeline.context import RunContext
from trilho.core.pipeline.outcome import Outcome
from trilho.core.pipeline.types import StepFailure

logger = logging.getLogger(__name__)

DISPATCH_STEP_ID = "dispatch"

Handler = Callable[[Any], Any]


class DispatchMatch(str, Enum):
    """Regra da lista de prioridades que selecionou o handler."""
    SUCCESS = "success"
    FAILURE_VALUE = "failure_value"
    STEP = "step"
    FALLBACK = "fallback"
    NONE = "none"


def _innermost(error: Any) -> Any:
    # pipelines aninhados etiquetam a falha uma vez por nível
    while isinstance(error, StepFailure):
        error = error.error
    return error


def _value_matches(key: Any, error: Any) -> bool:
    if isinstance(key, type) and issubclass(key, BaseException):
        return isinstance(error, key)
    return bool(error == key)


@dataclass
class Handlers:
    """
    Tabela de handlers construída pelo chamador imediatamente antes do dispatch.

    Os handlers por valor de falha são mantidos em lista (ordem de registro),
    o que permite valores não-hasheáveis como chaves (ex.: listas de erros
    de validação).
    """

    strict: bool = False
    _success: Optional[Handler] = field(default=None, init=False, repr=False)
    _fallback: Optional[Handler] = field(default=None, init=False, repr=False)
    _values: List[Tuple[Any, Handler]] = field(default_factory=list, init=False, repr=False)
    _steps: Dict[str, Handler] = field(default_factory=dict, init=False, repr=False)

    def on_success(self, fn: Handler) -> "Handlers":
        self._success = fn
        return self

    def on_failure_value(self, value: Any, fn: Handler) -> "Handlers":
        self._values.append((value, fn))
        return self

    def on_step(self, name: str, fn: Handler) -> "Handlers":
        self._steps[name] = fn
        return self

    def fallback(self, fn: Handler) -> "Handlers":
        self._fallback = fn
        return self

    @property
    def has_fallback(self) -> bool:
        return self._fallback is not None

    @classmethod
    def from_dict(cls, table: Mapping[str, Any], *, strict: bool = False) -> "Handlers":
        """
        Constrói a tabela a partir de um dict:

            {
                "success": fn,
                "fallback": fn,
                "steps": {"load_user": fn},
                "values": [("invalid_user_token", fn)],
            }

        `values` aceita lista de pares `(valor, handler)` ou um dict
        `{valor: handler}` quando os valores são hasheáveis.
        """
        allowed = {"success", "fallback", "steps", "values"}
        unknown = sorted(set(table) - allowed)
        if unknown:
            raise ValueError(f"Unknown handler table keys: {', '.join(unknown)}")

        handlers = cls(strict=strict)
        if table.get("success") is not None:
            handlers.on_success(table["success"])
        if table.get("fallback") is not None:
            handlers.fallback(table["fallback"])
        for name, fn in (table.get("steps") or {}).items():
            handlers.on_step(name, fn)
        values = table.get("values") or []
        pairs = values.items() if isinstance(values, Mapping) else values
        for pair in pairs:
            if not (isinstance(pair, (tuple, list)) and len(pair) == 2):
                raise ValueError(
                    f"Handler table 'values' entries must be (value, handler) pairs, got {pair!r}"
                )
            handlers.on_failure_value(pair[0], pair[1])
        return handlers

    def select(self, outcome: Outcome, step_name: Optional[str] = None) -> Tuple[DispatchMatch, Optional[Handler], Any]:
        """Avalia a lista de prioridades; retorna (regra, handler, argumento)."""
        if outcome.is_success():
            if self._success is None:
                return DispatchMatch.NONE, None, outcome.state
            return DispatchMatch.SUCCESS, self._success, outcome.state

        error = outcome.error
        failing_step = step_name
        if failing_step is None and isinstance(error, StepFailure):
            failing_step = error.step_name
        payload = _innermost(error)

        for value, fn in self._values:
            if _value_matches(value, payload):
                return DispatchMatch.FAILURE_VALUE, fn, payload

        if failing_step is not None and failing_step in self._steps:
            return DispatchMatch.STEP, self._steps[failing_step], payload

        if self._fallback is not None:
            return DispatchMatch.FALLBACK, self._fallback, payload

        return DispatchMatch.NONE, None, payload


def dispatch(
    outcome: Outcome,
    handlers: Handlers,
    *,
    step_name: Optional[str] = None,
    ctx: Optional[RunContext] = None,
) -> DispatchMatch:
    """Invoca exatamente um handler para `outcome` e retorna a regra que casou."""
    if not isinstance(outcome, Outcome):
        raise TypeError(f"dispatch() expects an Outcome, got {type(outcome).__name__}")

    match, fn, argument = handlers.select(outcome, step_name)
    failing_step = step_name
    if failing_step is None and outcome.is_failure() and isinstance(outcome.error, StepFailure):
        failing_step = outcome.error.step_name

    if fn is None:
        if outcome.is_failure():
            message = f"unhandled failure from step {failing_step!r}"
            if handlers.strict:
                raise UnhandledFailureError(
                    message=message,
                    details={"step": failing_step, "error": repr(argument)},
                    hint="Registre um handler de fallback na tabela",
                )
            logger.warning("Dropping %s: %r (no fallback handler registered)", message, argument)
            if ctx is not None:
                ctx.log(step_id=DISPATCH_STEP_ID, level="warning", message=message, failed_step=failing_step)
                ctx.add_warning(step_id=DISPATCH_STEP_ID, message=message)
        return match

    if ctx is not None:
        ctx.log(step_id=DISPATCH_STEP_ID, level="info", message="dispatched", rule=match.value, failed_step=failing_step)
    fn(argument)
    return match
