"""
Trilho — pipelines de transação em etapas com curto-circuito (railway).

Um pipeline executa uma sequência ordenada de Steps nomeados sobre um
estado acumulado. Cada Step continua o pipeline com um estado aumentado
ou o interrompe com um motivo de falha específico; o chamador associa
handlers distintos por Step ou por valor de falha.

Uso típico:

    pipeline = (
        Pipeline()
        .add_step("validate_parameters", "continue", validate_parameters)
        .add_step("load_user", "continue", load_user)
        .add_step("capture_log", "tee", capture_log)
    )
    outcome = pipeline.run({"token": token})
    dispatch(outcome, Handlers().on_success(render).on_step("load_user", deny).fallback(oops))
"""

from trilho.core.dispatch import DispatchMatch, Handlers, dispatch
from trilho.core.engine import Pipeline
from trilho.core.exceptions import (
    InvalidAccess,
    StateContractError,
    StepContractError,
    TrilhoException,
    UnhandledFailureError,
    UnknownStepError,
)
from trilho.core.pipeline import (
    AdapterKind,
    DuplicateStepNameError,
    Failure,
    InvalidStepRegistrationError,
    Outcome,
    RunContext,
    StepFailure,
    StepSpec,
    Success,
    extend,
    failure,
    success,
)

__all__ = [
    "AdapterKind",
    "DispatchMatch",
    "DuplicateStepNameError",
    "Failure",
    "Handlers",
    "InvalidAccess",
    "InvalidStepRegistrationError",
    "Outcome",
    "Pipeline",
    "RunContext",
    "StateContractError",
    "StepContractError",
    "StepFailure",
    "StepSpec",
    "Success",
    "TrilhoException",
    "UnhandledFailureError",
    "UnknownStepError",
    "dispatch",
    "extend",
    "failure",
    "success",
]
