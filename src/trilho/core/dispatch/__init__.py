"""
Dispatcher de Outcomes do Trilho.

Mapeia um Outcome finalizado para exatamente um handler fornecido pelo
chamador: sucesso, valor de falha, nome do Step que falhou ou fallback,
nesta ordem de prioridade.
"""

from .dispatcher import DispatchMatch, Handlers, dispatch

__all__ = ["DispatchMatch", "Handlers", "dispatch"]
