"""
Pipeline de execução do Trilho.

O `Pipeline` executa uma sequência ordenada de Steps nomeados, passando o
estado acumulado adiante e parando na PRIMEIRA falha:

    current = Success(initial_state)
    para cada (nome, adapter, step) na ordem declarada:
        se current é Failure: pare (nenhum Step posterior executa)
        current = adapter(step, current.state)
        se current é Failure: etiquete com o nome do Step e pare
    retorne current

Decisões arquiteturais:
    - Falhas de negócio são dados (Failure), nunca exceções
    - Exceções não declaradas propagam para o chamador sem conversão
    - O Pipeline não é mutado por `run`; pode ser executado por vários
      chamadores desde que cada um use o seu próprio RunContext
    - Eventos de execução são registrados no RunContext quando fornecido

Recursos adicionais:
    - `step_args`: keyword arguments extras por Step, válidos para uma run
    - `with_steps`: novo Pipeline com funções de Steps substituídas
      (injeção de dublês em testes), preservando ordem e adapters
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from trilho.core.exceptions import StateContractError, UnknownStepError
from trilho.core.pipeline.adapters import apply_adapter
from trilho.core.pipeline.context import RunContext
from trilho.core.pipeline.outcome import Failure, Outcome, Success
from trilho.core.pipeline.registry import StepRegistry, coerce_kind, normalize_catch
from trilho.core.pipeline.types import AdapterKind, StepFailure, StepSpec

PIPELINE_STEP_ID = "pipeline"


def _log(ctx: Optional[RunContext], *, step_id: str, level: str, message: str, **extra: Any) -> None:
    if ctx is not None:
        ctx.log(step_id=step_id, level=level, message=message, **extra)


class Pipeline:
    """Sequência ordenada de Steps com curto-circuito na primeira falha."""

    def __init__(self, steps: Iterable[StepSpec] = ()):
        self._registry = StepRegistry()
        for spec in steps:
            kind = coerce_kind(spec.kind)
            self._registry.add(replace(spec, kind=kind, catch=normalize_catch(kind, spec.catch or None)))

    # ------------------------------------------------------------------
    # Registro
    # ------------------------------------------------------------------
    def add_step(
        self,
        name: str,
        kind: AdapterKind | str,
        fn: Callable[..., Any],
        catch: Any = None,
    ) -> "Pipeline":
        """Registra um Step ao final do pipeline e retorna o próprio pipeline."""
        adapter = coerce_kind(kind)
        self._registry.add(StepSpec(name=name, kind=adapter, fn=fn, catch=normalize_catch(adapter, catch)))
        return self

    @property
    def steps(self) -> List[StepSpec]:
        return self._registry.list()

    @property
    def names(self) -> Tuple[str, ...]:
        return self._registry.names()

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Pipeline({', '.join(self.names)})"

    def step(self, name: str) -> StepSpec:
        """Retorna o StepSpec registrado com `name`."""
        self._require_known([name], purpose="lookup")
        return self._registry.get(name)

    def with_steps(self, replacements: Optional[Mapping] = None, /, **kwargs: Callable[..., Any]) -> "Pipeline":
        """Retorna um NOVO pipeline com as funções dos Steps indicados substituídas."""
        overrides: Dict[str, Callable[..., Any]] = dict(replacements or {})
        overrides.update(kwargs)
        self._require_known(overrides, purpose="override")
        return Pipeline(
            replace(self.step(name), fn=overrides[name]) if name in overrides else self.step(name)
            for name in self.names
        )

    def _require_known(self, names: Iterable[str], *, purpose: str) -> None:
        unknown = sorted(n for n in names if n not in self._registry)
        if unknown:
            raise UnknownStepError(
                message=f"Unknown step(s) for {purpose}: {', '.join(unknown)}",
                details={"unknown": unknown, "known": list(self.names)},
                hint="Use exatamente os nomes registrados no pipeline",
            )

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run(
        self,
        initial_state: Mapping,
        *,
        ctx: Optional[RunContext] = None,
        step_args: Optional[Mapping] = None,
    ) -> Outcome:
        if not isinstance(initial_state, Mapping):
            raise StateContractError(
                message="initial state must be a mapping",
                details={"received": type(initial_state).__name__},
            )

        args: Dict[str, Dict[str, Any]] = {}
        if step_args:
            self._require_known(step_args, purpose="step_args")
            for name, kwargs in step_args.items():
                if not isinstance(kwargs, Mapping):
                    raise TypeError(f"step_args['{name}'] must be a mapping of keyword arguments")
                args[name] = dict(kwargs)

        specs = self.steps
        current: Outcome = Success(dict(initial_state))

        for index, spec in enumerate(specs):
            _log(ctx, step_id=spec.name, level="debug", message="step started", adapter=spec.kind.value)
            try:
                outcome = apply_adapter(spec, current.state, args.get(spec.name))
            except Exception as exc:
                _log(
                    ctx,
                    step_id=spec.name,
                    level="error",
                    message="step raised",
                    adapter=spec.kind.value,
                    exception_class=exc.__class__.__name__,
                )
                raise

            if outcome.is_failure():
                current = Failure(StepFailure(step_name=spec.name, error=outcome.error))
                _log(
                    ctx,
                    step_id=spec.name,
                    level="info",
                    message="step failed",
                    adapter=spec.kind.value,
                    error_type=outcome.error.__class__.__name__,
                )
                for skipped in specs[index + 1:]:
                    _log(ctx, step_id=skipped.name, level="debug", message="step skipped", failed_step=spec.name)
                break

            current = outcome
            _log(ctx, step_id=spec.name, level="debug", message="step succeeded", adapter=spec.kind.value)

        _log(
            ctx,
            step_id=PIPELINE_STEP_ID,
            level="info",
            message="run finished",
            status="success" if current.is_success() else "failure",
            steps=len(specs),
        )
        return current
