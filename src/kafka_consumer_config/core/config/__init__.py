# src/kafka_consumer_config/core/config/__init__.py

"""
Camada de árvore de configuração.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
resolver, mesclar e consultar árvores de configuração aninhadas. Ele não
conhece o consumidor Kafka: apenas entrega uma árvore final sobre a qual
o resolver faz a extração tipada.

Responsabilidades do pacote:
    - Carregamento de arquivos e resources (YAML ou JSON)
    - Expansão de chaves pontuadas e resolução de referências `${...}`
    - Merge determinístico overlay-sobre-defaults
    - Lookups tipados que distinguem chave ausente de tipo incompatível
    - Hash canônico da árvore efetiva

Invariantes:
    - A árvore final é um dicionário puro
    - A mesma entrada sempre produz a mesma árvore
    - Conflitos estruturais são tratados como erro
"""

from .errors import (
    ConfigError,
    ConfigMissingKeyError,
    ConfigParseError,
    ConfigReferenceError,
    ConfigSourceError,
    ConfigSourceNotFoundError,
    ConfigTypeConflictError,
    ConfigTypeMismatchError,
    InvalidConfigRootTypeError,
    ReferenceCycleError,
    UnrecognizedEnumCodeError,
    UnresolvedReferenceError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import find_resource, parse_file, parse_resource
from .merge import deep_merge, expand_dotted_keys, with_fallback
from .references import resolve_references
from .tree import ConfigTree

__all__ = [
    "ConfigError",
    "ConfigMissingKeyError",
    "ConfigParseError",
    "ConfigReferenceError",
    "ConfigSourceError",
    "ConfigSourceNotFoundError",
    "ConfigTree",
    "ConfigTypeConflictError",
    "ConfigTypeMismatchError",
    "InvalidConfigRootTypeError",
    "ReferenceCycleError",
    "UnrecognizedEnumCodeError",
    "UnresolvedReferenceError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "expand_dotted_keys",
    "find_resource",
    "parse_file",
    "parse_resource",
    "resolve_references",
    "with_fallback",
]
