"""
Camada de configuração do Trilho.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução da configuração final via deep-merge determinístico
    - Hash canônico para rastreabilidade
    - Construção declarativa de pipelines e tabelas de handlers

Limites explícitos:
    - Não executa pipelines
    - Não valida semântica de negócio dos Steps
"""

from .builder import build_handlers, build_pipeline, compute_config_hash, new_run_context, resolve_reference
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    PipelineConfigError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, read_config_file
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "PipelineConfigError",
    "UnsupportedConfigFormatError",
    "build_handlers",
    "build_pipeline",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "new_run_context",
    "read_config_file",
    "resolve_reference",
]
