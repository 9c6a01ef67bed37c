"""
Steps de checkout usados pelos testes (cenário validate → load_user → capture_log).

Os Steps registram cada chamada em `CALLS`, permitindo verificar ordem de
execução e curto-circuito. `reset()` deve ser chamado por cada teste.
"""

from __future__ import annotations

from trilho.core.pipeline.outcome import failure, success
from trilho.core.pipeline.step import extend

VALID_TOKEN = "tok-123"
USERS = {VALID_TOKEN: {"id": 7, "name": "ana"}}

CALLS = []
AUDIT_LOG = []


def reset() -> None:
    CALLS.clear()
    AUDIT_LOG.clear()


def validate_parameters(state):
    CALLS.append("validate_parameters")
    params = dict(state.get("input") or {})
    if "token" not in params:
        return failure({"token": ["is missing"]})
    return success(extend(state, params=params))


def load_user(state):
    CALLS.append("load_user")
    user = USERS.get(state["params"]["token"])
    if user is None:
        return failure("invalid_user_token")
    return success(extend(state, user=user))


def capture_log(state):
    CALLS.append("capture_log")
    AUDIT_LOG.append(state["user"]["id"])
    return "ignored"


class GatewayTimeout(Exception):
    pass


def charge(state, amount=10):
    CALLS.append("charge")
    if state.get("gateway_down"):
        raise GatewayTimeout("gateway timed out")
    return extend(state, charged=amount)
