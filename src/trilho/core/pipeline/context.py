"""
Contexto de execução de uma run do pipeline.

Este módulo define o `RunContext`, a estrutura canônica que acompanha uma
execução do pipeline registrando eventos estruturados e warnings.

O RunContext NÃO transporta o estado de negócio: o estado acumulado é
passado Step a Step pelo Pipeline. O contexto existe apenas para
rastreabilidade.

Responsabilidades do módulo:
    - Manter identidade e metadados da execução
    - Registrar eventos de log estruturados (pipeline e dispatcher)
    - Coletar warnings por Step

Invariantes:
    - Logs sempre incluem `run_id` e `step_id`
    - Timestamps são UTC em ISO-8601
    - Warnings são agrupados por `step_id`
    - Cada execução concorrente deve usar o seu próprio RunContext

Limites explícitos:
    - Não executa Steps
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class RunContext:
    """
    Contexto de execução de uma run do pipeline.

    Decisões arquiteturais:
        - Eventos são dicts simples, prontos para serialização JSON
        - `step_id` é o nome do Step (ou um rótulo como "pipeline"/"dispatch")
        - O contexto é mutável apenas durante a execução

    Este contexto existe para garantir isolamento e rastreabilidade
    da execução de pipelines.
    """
    run_id: str
    created_at: datetime
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def new(cls, *, meta: Optional[Dict[str, Any]] = None) -> "RunContext":
        return cls(
            run_id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            meta=dict(meta or {}),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)

    def messages_for(self, step_id: str) -> List[str]:
        return [e["message"] for e in self.events if e["step_id"] == step_id]
