# src/kafka_consumer_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do consumidor Kafka.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento de fontes, resolução de referências, merge e extração
tipada da configuração do consumidor.

Taxonomia:
    - ConfigSourceError          → fonte inexistente, ilegível ou malformada
    - ConfigTypeConflictError    → conflito estrutural durante o merge
    - ConfigReferenceError       → referência `${...}` não resolvível
    - ConfigMissingKeyError      → chave obrigatória ausente na árvore final
    - ConfigTypeMismatchError    → valor presente, mas com tipo incompatível
    - UnrecognizedEnumCodeError  → código fora do conjunto fechado do enum

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Toda falha de resolução é fatal para a chamada (sem modelo parcial)
    - Mensagens identificam a chave e o valor ofensivos

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Os dados do erro ficam disponíveis como atributos, além da mensagem

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra logs
"""

from typing import Any, Iterable, Optional


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do consumidor.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falha de fonte, de merge e de extração
    """


# ---------------------------------------------------------------------------
# Fontes
# ---------------------------------------------------------------------------

class ConfigSourceError(ConfigError):
    """
    Exceção base para fontes de configuração que não podem ser usadas.

    Levantada antes de qualquer extração de campos: nenhuma árvore é
    produzida a partir de uma fonte inválida.
    """

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class ConfigSourceNotFoundError(ConfigSourceError):
    """
    Exceção levantada quando um arquivo ou resource nomeado não existe.

    Decisões arquiteturais:
        - Nenhuma fonte é inventada ou substituída silenciosamente
        - A ausência é detectada antes do parse
    """


class ConfigParseError(ConfigSourceError):
    """Exceção levantada quando o conteúdo da fonte não é YAML/JSON válido."""


class UnsupportedConfigFormatError(ConfigSourceError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigSourceError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Invariantes:
        - O loader só opera sobre estruturas do tipo dicionário
    """


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito estrutural durante o deep-merge.

    Este erro indica que uma mesma chave é um mapa em uma das árvores e
    um valor escalar (ou lista) na outra.

    Exemplo de conflito:
        - base:     {"kafka": {"ssl": {"protocol": "TLS"}}}
        - override: {"kafka": {"ssl": "TLS"}}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


# ---------------------------------------------------------------------------
# Referências
# ---------------------------------------------------------------------------

class ConfigReferenceError(ConfigError):
    """Exceção base para falhas de resolução de referências `${...}`."""

    def __init__(self, message: str, *, reference: str) -> None:
        super().__init__(message)
        self.reference = reference


class UnresolvedReferenceError(ConfigReferenceError):
    """
    Exceção levantada quando uma referência obrigatória não existe nem na
    árvore nem no ambiente do processo.
    """


class ReferenceCycleError(ConfigReferenceError):
    """Exceção levantada quando referências formam um ciclo."""


# ---------------------------------------------------------------------------
# Extração tipada
# ---------------------------------------------------------------------------

class ConfigMissingKeyError(ConfigError):
    """
    Exceção levantada quando uma chave obrigatória está ausente da
    árvore de configuração já mesclada.

    Decisões arquiteturais:
        - Um valor `null` é tratado como ausência
        - A falha ocorre no momento do lookup, não antes
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Chave de configuração obrigatória ausente: '{path}'")
        self.path = path


class ConfigTypeMismatchError(ConfigError):
    """
    Exceção levantada quando uma chave existe, mas seu valor não pode ser
    convertido para o tipo esperado (int, bool, string, mapa).
    """

    def __init__(self, path: str, expected: str, value: Any) -> None:
        super().__init__(
            f"Chave '{path}' deveria ser {expected}, recebido "
            f"{type(value).__name__}: {value!r}"
        )
        self.path = path
        self.expected = expected
        self.value = value


class UnrecognizedEnumCodeError(ConfigError):
    """
    Exceção levantada quando um campo enumerado recebe um código
    desconhecido.

    Decisões arquiteturais:
        - Códigos inválidos nunca são propagados como strings cruas
        - Nenhum valor default é aplicado silenciosamente
    """

    def __init__(self, field: str, value: Any, allowed: Iterable[str]) -> None:
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Código {value!r} não reconhecido para '{field}'; "
            f"valores permitidos: {', '.join(self.allowed)}"
        )
