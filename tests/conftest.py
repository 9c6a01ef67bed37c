"""
Fixtures compartilhados para testes do Trilho.

Este módulo define fixtures reutilizáveis que fornecem:
- contexto de execução controlado (RunContext)
- Steps de checkout (validate_parameters → load_user → capture_log)
- uma fábrica de Steps instrumentados para contagem de chamadas
- YAMLs de configuração semelhantes ao uso real

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Limites explícitos:
    - Nenhuma fixture executa pipeline
    - Nenhuma fixture realiza I/O
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# RunContext
# =====================================================

@pytest.fixture
def dummy_ctx():
    """
    Fixture que fornece um RunContext determinístico.

    `run_id` e `created_at` são fixos; o contexto inicia sem eventos
    nem warnings.

    Returns:
        RunContext: Contexto de execução isolado e previsível para testes.
    """
    from trilho.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )


# =====================================================
# Steps
# =====================================================

@pytest.fixture
def checkout():
    """Módulo de Steps de checkout com o registro de chamadas zerado."""
    from tests.fixtures.steps import checkout as module

    module.reset()
    yield module
    module.reset()


@pytest.fixture
def checkout_pipeline(checkout):
    """Pipeline do cenário: validate_parameters(continue) → load_user(continue) → capture_log(tee)."""
    from trilho.core.engine.engine import Pipeline

    return (
        Pipeline()
        .add_step("validate_parameters", "continue", checkout.validate_parameters)
        .add_step("load_user", "continue", checkout.load_user)
        .add_step("capture_log", "tee", checkout.capture_log)
    )


@pytest.fixture
def RecordingStep():
    """
    Fixture factory que fornece Steps instrumentados.

    Cada instância adiciona `key=value` ao estado, registra o próprio nome
    na lista compartilhada `calls` e, se `fail_with` for informado, devolve
    `failure(fail_with)` em vez de seguir adiante.

    Returns:
        type: Classe _RecordingStep que pode ser instanciada pelos testes.
    """
    from trilho.core.pipeline.outcome import failure, success
    from trilho.core.pipeline.step import extend

    _missing = object()

    class _RecordingStep:
        def __init__(self, name, calls, *, key=None, value=True, fail_with=_missing):
            self.name = name
            self.calls = calls
            self.key = key or name
            self.value = value
            self.fail_with = fail_with
            self.seen = []

        def __call__(self, state):
            self.calls.append(self.name)
            self.seen.append(dict(state))
            if self.fail_with is not _missing:
                return failure(self.fail_with)
            return success(extend(state, **{self.key: self.value}))

    return _RecordingStep


# =====================================================
# Config
# =====================================================

@pytest.fixture
def checkout_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) para o pipeline de checkout.

    Returns:
        str: Conteúdo YAML com a seção `pipeline` e a política de dispatch.
    """
    return """\
pipeline:
  steps:
    - name: validate_parameters
      adapter: continue
      fn: tests.fixtures.steps.checkout:validate_parameters
    - name: load_user
      adapter: continue
      fn: tests.fixtures.steps.checkout:load_user
    - name: capture_log
      adapter: tee
      fn: tests.fixtures.steps.checkout:capture_log
dispatch:
  strict: false
"""


@pytest.fixture
def checkout_config_local_yaml() -> str:
    """YAML local de override: apenas liga o modo estrito do dispatcher."""
    return """\
dispatch:
  strict: true
"""
