# tests/conftest.py
"""
Fixtures compartilhados para testes do kafka-consumer-config.

Este módulo define fixtures reutilizáveis que fornecem:
- uma fonte YAML completa (todas as chaves obrigatórias, nenhum opcional)
- uma fonte YAML de override parcial (apenas `group.id`)
- uma factory para gravar fontes em `tmp_path`
- um ambiente de processo vazio e controlado

Decisões arquiteturais:
    - Conteúdo YAML fornecido como string; a gravação em disco é explícita
    - Os valores da fonte completa diferem dos defaults embutidos, para
      que testes consigam distinguir de onde cada valor veio
    - O cache da instância default é limpo a cada teste

Invariantes:
    - Nenhuma fixture depende de variáveis de ambiente reais
    - Nenhuma fixture altera `sys.path` de forma persistente
"""

from pathlib import Path
from typing import Callable

import pytest


REQUIRED_KEYS = frozenset(
    {
        "bootstrap.servers",
        "fetch.min.bytes",
        "group.id",
        "heartbeat.interval.ms",
        "max.partition.fetch.bytes",
        "session.timeout.ms",
        "auto.offset.reset",
        "connections.max.idle.ms",
        "enable.auto.commit",
        "exclude.internal.topics",
        "max.poll.records",
        "receive.buffer.bytes",
        "request.timeout.ms",
        "sasl.mechanism",
        "security.protocol",
        "send.buffer.bytes",
        "ssl.enabled.protocols",
        "ssl.keystore.type",
        "ssl.protocol",
        "ssl.truststore.type",
        "check.crcs",
        "client.id",
        "fetch.max.wait.ms",
        "metadata.max.age.ms",
        "reconnect.backoff.ms",
        "retry.backoff.ms",
    }
)

OPTIONAL_KEYS = frozenset(
    {
        "ssl.key.password",
        "ssl.keystore.password",
        "ssl.keystore.location",
        "ssl.truststore.location",
        "ssl.truststore.password",
        "sasl.kerberos.service.name",
        "ssl.provider",
    }
)


@pytest.fixture
def required_keys() -> frozenset:
    """Chaves do cliente Kafka que toda configuração resolvida contém."""
    return REQUIRED_KEYS


@pytest.fixture
def optional_keys() -> frozenset:
    """Chaves do cliente Kafka que só aparecem quando configuradas."""
    return OPTIONAL_KEYS


@pytest.fixture(autouse=True)
def _clear_default_cache():
    """Garante que cada teste observe uma instância default recém-calculada."""
    from kafka_consumer_config.resolver import default_config

    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def required_only_yaml() -> str:
    """
    Fonte completa com exatamente as chaves obrigatórias do consumidor.

    Usada para validar:
    - resolução sem defaults (`include_defaults=False`)
    - conjunto de chaves renderizadas por `to_properties`

    Returns:
        str: Conteúdo YAML com a raiz `kafka`.
    """
    return """\
kafka:
  bootstrap.servers: " broker-a:9092 ,broker-b:9092"
  fetch.min.bytes: 16
  group.id: "orders-consumer"
  heartbeat.interval.ms: 2000
  max.partition.fetch.bytes: 2097152
  session.timeout.ms: 15000
  auto.offset.reset: "earliest"
  connections.max.idle.ms: 600000
  enable.auto.commit: false
  exclude.internal.topics: false
  max.poll.records: 100
  receive.buffer.bytes: 32768
  request.timeout.ms: 45000
  sasl.mechanism: "PLAIN"
  security.protocol: "SASL_SSL"
  send.buffer.bytes: 65536
  ssl.enabled.protocols: "TLSv1.2"
  ssl.keystore.type: "PKCS12"
  ssl.protocol: "TLSv1.2"
  ssl.truststore.type: "PKCS12"
  check.crcs: false
  client.id: "orders-service"
  fetch.max.wait.ms: 250
  metadata.max.age.ms: 60000
  reconnect.backoff.ms: 200
  retry.backoff.ms: 300
"""


@pytest.fixture
def group_override_yaml() -> str:
    """Override parcial: sobrescreve apenas `group.id`."""
    return """\
kafka:
  group.id: "billing"
"""


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory que grava uma fonte de configuração em `tmp_path`.

    Returns:
        Callable[[str, str], Path]: `(conteúdo, nome)` → caminho gravado.
    """

    def _write(content: str, name: str = "consumer.yaml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def empty_environ() -> dict:
    """Ambiente de processo vazio, para `load(environ=...)`."""
    return {}
