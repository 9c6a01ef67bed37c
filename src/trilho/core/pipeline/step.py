"""
Contrato canônico de Step do Trilho.

Um Step é a menor unidade executável do pipeline: uma função que recebe
o estado acumulado até aqui e devolve, conforme o seu adapter:

    - continue → um Outcome (Success com novo estado ou Failure com motivo)
    - map/try  → um novo estado
    - tee      → qualquer coisa (o retorno é descartado)

Princípios fundamentais:
    - Steps não conhecem o Pipeline nem os demais Steps
    - Steps não controlam ordem de execução
    - Steps recebem um snapshot somente-leitura do estado e devolvem um
      NOVO mapping; nunca removem chaves
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define política de falha (responsabilidade do adapter)
    - Não registra eventos (responsabilidade do Pipeline)
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol, runtime_checkable

State = Mapping[str, Any]


@runtime_checkable
class Step(Protocol):
    """
    Contrato mínimo de um Step: um callable sobre o estado.

    Argumentos extras por execução (`step_args`) chegam como keyword
    arguments.
    """

    def __call__(self, state: State, **kwargs: Any) -> Any:
        ...


def extend(state: State, **values: Any) -> Dict[str, Any]:
    """Retorna um novo dict com o conteúdo de `state` acrescido de `values`."""
    updated = dict(state)
    updated.update(values)
    return updated
