"""
Construção declarativa de pipelines a partir da configuração resolvida.

Formato esperado (após `load_config`):

    pipeline:
      steps:
        - name: validate_parameters
          adapter: continue
          fn: myapp.checkout:validate_parameters
        - name: charge
          adapter: try
          fn: myapp.payments:charge
          catch: [myapp.payments:GatewayTimeout, builtins:ConnectionError]
        - name: audit
          adapter: tee
          fn: myapp.audit:record
          enabled: false
    dispatch:
      strict: false

Regras (v1):
    - Referências usam o formato `modulo.importavel:atributo[.atributo]`
    - `enabled: false` omite o Step do pipeline construído (a ordem dos
      demais é preservada; nada muda em tempo de execução)
    - `catch` aceita uma referência ou uma lista de referências
    - Chaves desconhecidas são rejeitadas (nenhuma decisão silenciosa)

Toda violação estrutural levanta `PipelineConfigError`.
"""

from __future__ import annotations

import hashlib
import importlib
import json
from typing import Any, Callable, Dict, List, Mapping, Optional

from trilho.core.dispatch.dispatcher import Handlers
from trilho.core.engine.engine import Pipeline
from trilho.core.pipeline.context import RunContext

from .errors import PipelineConfigError

_STEP_KEYS = {"name", "adapter", "fn", "catch", "enabled"}


def resolve_reference(reference: str) -> Any:
    """Importa `modulo:atributo` e retorna o objeto referenciado."""
    if not isinstance(reference, str) or reference.count(":") != 1:
        raise PipelineConfigError(f"Invalid reference {reference!r}: expected 'module:attribute'")

    module_name, _, attr_path = reference.partition(":")
    if not module_name or not attr_path:
        raise PipelineConfigError(f"Invalid reference {reference!r}: expected 'module:attribute'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise PipelineConfigError(f"Cannot import module '{module_name}' for reference {reference!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            raise PipelineConfigError(f"Reference {reference!r} has no attribute '{attr}'") from None
    return target


def _step_entries(config: Mapping[str, Any]) -> List[Dict[str, Any]]:
    section = config.get("pipeline")
    if not isinstance(section, dict):
        raise PipelineConfigError("config.pipeline must be a mapping")
    steps = section.get("steps", [])
    if not isinstance(steps, list):
        raise PipelineConfigError("config.pipeline.steps must be a list")
    for i, entry in enumerate(steps):
        if not isinstance(entry, dict):
            raise PipelineConfigError(f"pipeline.steps[{i}] must be a mapping")
    return steps


def _resolve_catch(raw: Any, where: str) -> Optional[List[type]]:
    if raw is None:
        return None
    refs = [raw] if isinstance(raw, str) else raw
    if not isinstance(refs, list):
        raise PipelineConfigError(f"{where}.catch must be a reference or a list of references")
    return [resolve_reference(ref) for ref in refs]


def build_pipeline(config: Mapping[str, Any]) -> Pipeline:
    """Constrói um `Pipeline` a partir de `config["pipeline"]["steps"]`."""
    pipeline = Pipeline()

    for i, entry in enumerate(_step_entries(config)):
        where = f"pipeline.steps[{i}]"

        unknown = sorted(set(entry) - _STEP_KEYS)
        if unknown:
            raise PipelineConfigError(f"{where}: unknown keys {', '.join(unknown)}")

        missing = [k for k in ("name", "adapter", "fn") if k not in entry]
        if missing:
            raise PipelineConfigError(f"{where}: missing keys {', '.join(missing)}")

        enabled = entry.get("enabled", True)
        if not isinstance(enabled, bool):
            raise PipelineConfigError(f"{where}.enabled must be a bool")
        if not enabled:
            continue

        fn: Callable[..., Any] = resolve_reference(entry["fn"])
        catch = _resolve_catch(entry.get("catch"), where)

        try:
            pipeline.add_step(entry["name"], entry["adapter"], fn, catch=catch)
        except ValueError as e:
            raise PipelineConfigError(f"{where}: {e}") from e

    return pipeline


def build_handlers(config: Mapping[str, Any], table: Optional[Mapping[str, Any]] = None) -> Handlers:
    """Constrói `Handlers` aplicando a política `dispatch.strict` da configuração."""
    section = config.get("dispatch", {}) or {}
    if not isinstance(section, dict):
        raise PipelineConfigError("config.dispatch must be a mapping")
    strict = section.get("strict", False)
    if not isinstance(strict, bool):
        raise PipelineConfigError("config.dispatch.strict must be a bool")
    return Handlers.from_dict(table or {}, strict=strict)


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    SHA-256 do JSON canônico da configuração (chaves ordenadas, separadores
    compactos, UTF-8).

    Valores que o JSON não representa (ex.: datas lidas do YAML) entram pelo
    seu `str`, de modo que a mesma configuração sempre produz o mesmo hash.

    Raises:
        TypeError: Se `config` não for um mapping.
    """
    if not isinstance(config, Mapping):
        raise TypeError(f"config to hash must be a mapping, got {type(config).__name__}")
    canonical = json.dumps(dict(config), sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def new_run_context(config: Mapping[str, Any], *, meta: Optional[Dict[str, Any]] = None) -> RunContext:
    """Cria um RunContext cujo `meta` carrega o hash da configuração."""
    ctx = RunContext.new(meta=meta)
    ctx.meta["config_hash"] = compute_config_hash(config)
    return ctx
