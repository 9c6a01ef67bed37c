"""
# Pipeline Core — Trilho

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
sobre as quais o Pipeline e o Dispatcher são construídos.

## Componentes

- **outcome**: `Outcome`, `Success`, `Failure`, `success()`, `failure()`
- **types**: `AdapterKind`, `StepSpec`, `StepFailure`
- **step**: `Step` (Protocol), `State`, `extend()`
- **adapters**: uma função por `AdapterKind` (`apply_adapter`)
- **registry**: `StepRegistry`, unicidade de nomes e ordem de declaração
- **context**: `RunContext`, eventos estruturados e warnings por run

## Invariantes

- Cada Step possui um nome único no pipeline
- A ordem de declaração é a ordem de execução
- Steps só adicionam ou substituem chaves do estado
"""

from .context import RunContext
from .outcome import Failure, Outcome, Success, failure, success
from .registry import DuplicateStepNameError, InvalidStepRegistrationError, StepRegistry
from .step import State, Step, extend
from .types import AdapterKind, StepFailure, StepSpec

__all__ = [
    "AdapterKind",
    "DuplicateStepNameError",
    "Failure",
    "InvalidStepRegistrationError",
    "Outcome",
    "RunContext",
    "State",
    "Step",
    "StepFailure",
    "StepRegistry",
    "StepSpec",
    "Success",
    "extend",
    "failure",
    "success",
]
