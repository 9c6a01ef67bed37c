"""
Tipos canônicos do pipeline do Trilho.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Steps, adapters, Pipeline e Dispatcher.

Componentes principais:
    - AdapterKind → enum fechado de políticas de adapter (continue, map, try, tee)
    - StepSpec    → registro imutável (nome, adapter, função, exceções declaradas)
    - StepFailure → erro etiquetado com o nome do Step que falhou

Princípios fundamentais:
    - Tipos são estáveis e imutáveis
    - Enums possuem valores textuais canônicos (usados também na config)
    - Nenhuma lógica de execução vive neste módulo

Limites explícitos:
    - Não executa Steps
    - Não decide políticas de execução
    - Não contém lógica de domínio
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Tuple, Type


class AdapterKind(str, Enum):
    """
    Políticas de adapter que governam como o retorno de um Step afeta o pipeline.

    Tipos definidos:
        - CONTINUE: o Step retorna um Outcome; um Failure interrompe o pipeline
        - MAP: o Step retorna um novo estado; não pode falhar
        - TRY: como MAP, mas exceções declaradas viram Failure
        - TEE: o Step roda apenas pelo efeito colateral; o retorno é descartado

    Os valores são strings para permitir declaração direta em YAML/JSON.

    Invariantes:
        - O conjunto é fechado: nenhum outro tipo de adapter existe
        - O valor textual do enum é estável e canônico
    """
    CONTINUE = "continue"
    MAP = "map"
    TRY = "try"
    TEE = "tee"


@dataclass(frozen=True)
class StepSpec:
    """
    Registro imutável de um Step dentro de um pipeline.

    Campos:
        - name: identificador único do Step no pipeline
        - kind: política de adapter aplicada ao Step
        - fn: função do Step, recebe o estado atual
        - catch: exceções declaradas (não vazio apenas para TRY)

    A validação estrutural ocorre no `StepRegistry`, não aqui.
    """
    name: str
    kind: AdapterKind
    fn: Callable[..., Any]
    catch: Tuple[Type[BaseException], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StepFailure:
    """
    Erro etiquetado carregado por um `Failure` produzido pelo Pipeline.

    O Pipeline envolve o payload de falha de um Step com o nome desse Step,
    permitindo que o Dispatcher roteie por nome de Step ou por valor de falha.

    Campos:
        - step_name: nome do Step que falhou
        - error: payload original da falha (valor de negócio ou exceção capturada)
    """
    step_name: str
    error: Any

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável da falha (para renderização/logs)."""
        error = self.error
        if isinstance(error, BaseException):
            rendered: Any = str(error) or error.__class__.__name__
        elif isinstance(error, (str, int, float, bool, type(None), list, dict)):
            rendered = error
        else:
            rendered = repr(error)
        return {
            "step": self.step_name,
            "error": rendered,
            "error_type": error.__class__.__name__,
        }
