"""
Engine do Trilho.

Este pacote contém o `Pipeline`, responsável por executar Steps em ordem
declarada, aplicando a política de adapter de cada Step e interrompendo a
execução na primeira falha.

Invariantes:
    - Steps executam exatamente na ordem de declaração
    - Nenhum Step executa após a primeira falha
    - Um pipeline vazio devolve Success(initial_state)
"""

from .engine import Pipeline

__all__ = ["Pipeline"]
