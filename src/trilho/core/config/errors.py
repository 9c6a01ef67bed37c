"""
Exceções da camada de configuração do Trilho.

Todas representam violações estruturais de configuração e são tratadas
como falhas fatais: nenhuma é convertida em `Failure` nem recuperada.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de negócio de um Step
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do Trilho."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe.

    O arquivo de defaults é obrigatório; o arquivo local de override é opcional.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"dispatch": {"strict": false}}
        - override: {"dispatch": "strict"}
    """


class PipelineConfigError(ConfigError):
    """
    A seção `pipeline` (ou `dispatch`) da configuração é estruturalmente inválida.

    Exemplos:
        - `pipeline.steps` ausente ou não-lista
        - Step sem `name`, `adapter` ou `fn`
        - referência `modulo:atributo` que não pode ser importada
    """
