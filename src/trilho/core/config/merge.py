"""
Deep-merge determinístico de configuração.

Política de merge (v1):
    - dict + dict       → merge recursivo por chave
    - list              → sobrescrita total (a lista de Steps do override
                          substitui a lista inteira da base)
    - escalar           → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError

Nenhum input é mutado; a mesma entrada sempre produz a mesma saída.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, _path: str = "") -> Dict[str, Any]:
    """
    Combina `base` com `override`, retornando um novo dicionário.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resolvida.

    Raises:
        ConfigTypeConflictError: Se uma mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        path = f"{_path}.{key}" if _path else str(key)

        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value, _path=path)
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{path}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        # list ou escalar -> sobrescrita
        result[key] = deepcopy(override_value)

    return result
