# src/kafka_consumer_config/__init__.py
"""
kafka-consumer-config — configuração tipada para consumidores Kafka.

Este pacote define o conjunto completo de parâmetros de um consumidor
Kafka (conexão, tempos, grupo, segurança e protocolo), resolve esses
parâmetros a partir de fontes em camadas (arquivo, resource nomeado ou
defaults embutidos) e os renderiza no mapa plano `str → str` consumido
pelo cliente Kafka.

Arquitetura em alto nível:
    - config_types    → enums fechados (offset reset, protocolos, SASL)
    - consumer_config → modelo imutável e renderização (`to_properties`)
    - resolver        → merge com defaults e extração tipada
    - core.config     → carregamento, referências, merge e lookups de árvores

Uso típico:

    from kafka_consumer_config import load

    props = load().to_properties()
"""

from .config_types import AutoOffsetReset, SaslMechanism, SecurityProtocol, SSLProtocol
from .consumer_config import KafkaConsumerConfig
from .resolver import (
    default_config,
    from_config,
    load,
    load_default,
    load_file,
    load_resource,
)

__all__ = [
    "AutoOffsetReset",
    "KafkaConsumerConfig",
    "SSLProtocol",
    "SaslMechanism",
    "SecurityProtocol",
    "default_config",
    "from_config",
    "load",
    "load_default",
    "load_file",
    "load_resource",
]
