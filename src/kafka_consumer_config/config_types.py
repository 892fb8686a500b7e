# src/kafka_consumer_config/config_types.py
"""
Enums canônicos da configuração do consumidor Kafka.

Cada família de valores enumerados da configuração é um conjunto fechado
de códigos textuais conhecidos em tempo de desenvolvimento. Os códigos
são exatamente os aceitos pelo cliente Kafka e são usados sem alteração
na renderização.

Componentes principais:
    - AutoOffsetReset  → `auto.offset.reset`
    - SecurityProtocol → `security.protocol`
    - SSLProtocol      → `ssl.protocol` e elementos de `ssl.enabled.protocols`
    - SaslMechanism    → `sasl.mechanism`

Invariantes:
    - O valor textual de cada membro é o código do cliente Kafka
    - `from_code` é a única porta de entrada a partir de strings externas
    - Códigos desconhecidos geram `UnrecognizedEnumCodeError`, nunca um
      default silencioso

Limites explícitos:
    - Não normaliza maiúsculas/minúsculas: o match é exato
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple, Type, TypeVar

from .core.config.errors import UnrecognizedEnumCodeError

E = TypeVar("E", bound="ConfigEnum")


class ConfigEnum(str, Enum):
    """Base dos enums de configuração: tabela código ↔ membro."""

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def codes(cls) -> Tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def from_code(cls: Type[E], code: str, *, field: Optional[str] = None) -> E:
        """
        Converte um código textual no membro correspondente.

        Args:
            code (str): Código lido da configuração.
            field (Optional[str]): Nome da chave, usado na mensagem de erro.

        Raises:
            UnrecognizedEnumCodeError: Se o código não pertencer ao enum.
        """
        try:
            return cls(code)
        except ValueError:
            raise UnrecognizedEnumCodeError(field or cls.__name__, code, cls.codes()) from None

    def __str__(self) -> str:
        return self.value


class AutoOffsetReset(ConfigEnum):
    """
    O que fazer quando não existe offset inicial para o grupo, ou quando
    o offset atual não existe mais no servidor.

        - EARLIEST: reposiciona no offset mais antigo
        - LATEST: reposiciona no offset mais recente
        - NONE: lança erro no consumidor
    """

    EARLIEST = "earliest"
    LATEST = "latest"
    NONE = "none"


class SecurityProtocol(ConfigEnum):
    """Protocolo usado para comunicação com os brokers."""

    PLAINTEXT = "PLAINTEXT"
    SSL = "SSL"
    SASL_PLAINTEXT = "SASL_PLAINTEXT"
    SASL_SSL = "SASL_SSL"


class SSLProtocol(ConfigEnum):
    """
    Protocolos SSL/TLS.

    TLS, TLSv1.1 e TLSv1.2 são os recomendados; SSL, SSLv2 e SSLv3
    existem apenas para brokers antigos e têm vulnerabilidades conhecidas.
    """

    TLS_V1_2 = "TLSv1.2"
    TLS_V1_1 = "TLSv1.1"
    TLS_V1 = "TLSv1"
    TLS = "TLS"
    SSL_V3 = "SSLv3"
    SSL_V2 = "SSLv2"
    SSL = "SSL"


class SaslMechanism(ConfigEnum):
    """Mecanismos SASL suportados pelo cliente."""

    GSSAPI = "GSSAPI"
    PLAIN = "PLAIN"
    SCRAM_SHA_256 = "SCRAM-SHA-256"
    SCRAM_SHA_512 = "SCRAM-SHA-512"
    OAUTHBEARER = "OAUTHBEARER"
