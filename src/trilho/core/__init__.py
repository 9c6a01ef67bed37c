"""
Core do Trilho.

Componentes principais:
    - pipeline   → Outcome, tipos, adapters, registry e RunContext
    - engine     → Pipeline: execução ordenada com curto-circuito
    - dispatch   → seleção de exatamente um handler por Outcome
    - config     → loader, merge e construção declarativa (com hash da config)
    - exceptions → erros de programação tipados

Princípios fundamentais:
    - Falhas de negócio são dados, não exceções
    - Erros de programação nunca são convertidos em Failure
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
"""
