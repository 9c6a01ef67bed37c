"""
Adapters de Step: políticas de propagação de falha.

Cada `AdapterKind` possui exatamente uma função neste módulo. O adapter é
o ÚNICO lugar onde a política de falha de um Step vive: trocar a
criticidade de um Step é trocar o seu adapter, não reescrever o Step.

Políticas (v1):
    - continue → o Step devolve um Outcome; Failure interrompe o pipeline
    - map      → o Step devolve um novo estado; exceções propagam (bug)
    - try      → como map; exceções declaradas viram Failure(exc)
    - tee      → o Step roda pelo efeito colateral; retorno descartado

Todos os adapters devolvem um Outcome com o payload de falha CRU; quem
etiqueta a falha com o nome do Step é o Pipeline.

Contrato de estado:
    - o novo estado deve ser um Mapping
    - o novo estado deve conter todas as chaves do estado anterior
    Violações levantam `StateContractError` (erro de programação).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Dict

from trilho.core.exceptions import StateContractError, StepContractError

from .outcome import Failure, Outcome, Success
from .types import AdapterKind, StepSpec


def _check_state(spec: StepSpec, previous: Mapping, produced: Any) -> Dict[str, Any]:
    if not isinstance(produced, Mapping):
        raise StateContractError(
            message=f"Step '{spec.name}' returned a non-mapping state",
            details={"step": spec.name, "received": type(produced).__name__},
            hint="Retorne um novo dict, por exemplo extend(state, chave=valor)",
        )
    missing = [k for k in previous if k not in produced]
    if missing:
        raise StateContractError(
            message=f"Step '{spec.name}' removed keys from the state",
            details={"step": spec.name, "missing_keys": sorted(missing)},
            hint="Steps só podem adicionar ou substituir chaves",
        )
    return dict(produced)


def _run_continue(spec: StepSpec, state: Dict[str, Any], kwargs: Dict[str, Any]) -> Outcome:
    result = spec.fn(MappingProxyType(dict(state)), **kwargs)
    if not isinstance(result, Outcome):
        raise StepContractError(
            message=f"Step '{spec.name}' must return an Outcome",
            details={"step": spec.name, "adapter": spec.kind.value, "received": type(result).__name__},
            hint="Use success(state)/failure(error) ou troque o adapter para 'map'",
        )
    if result.is_failure():
        return result
    return Success(_check_state(spec, state, result.state))


def _run_map(spec: StepSpec, state: Dict[str, Any], kwargs: Dict[str, Any]) -> Outcome:
    produced = spec.fn(MappingProxyType(dict(state)), **kwargs)
    return Success(_check_state(spec, state, produced))


def _run_try(spec: StepSpec, state: Dict[str, Any], kwargs: Dict[str, Any]) -> Outcome:
    try:
        produced = spec.fn(MappingProxyType(dict(state)), **kwargs)
    except spec.catch as exc:
        return Failure(exc)
    return Success(_check_state(spec, state, produced))


def _run_tee(spec: StepSpec, state: Dict[str, Any], kwargs: Dict[str, Any]) -> Outcome:
    spec.fn(MappingProxyType(dict(state)), **kwargs)
    return Success(state)


_ADAPTERS: Dict[AdapterKind, Callable[[StepSpec, Dict[str, Any], Dict[str, Any]], Outcome]] = {
    AdapterKind.CONTINUE: _run_continue,
    AdapterKind.MAP: _run_map,
    AdapterKind.TRY: _run_try,
    AdapterKind.TEE: _run_tee,
}


def apply_adapter(spec: StepSpec, state: Dict[str, Any], kwargs: Dict[str, Any] | None = None) -> Outcome:
    """Executa `spec` sob a política do seu adapter e devolve o próximo Outcome."""
    return _ADAPTERS[spec.kind](spec, state, dict(kwargs or {}))
