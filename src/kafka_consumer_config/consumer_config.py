# src/kafka_consumer_config/consumer_config.py
"""
Modelo tipado da configuração do consumidor Kafka.

Este módulo define o `KafkaConsumerConfig`, o registro imutável com todos
os parâmetros reconhecidos de um consumidor, e sua renderização para o
formato plano `chave pontuada → string` esperado pelo cliente Kafka.

Para a documentação oficial de cada opção, ver "Consumer Configs" em
https://kafka.apache.org/documentation.html#consumerconfigs.

Política de renderização:
    - listas → elementos unidos por vírgula (enums pelo seu código)
    - durações (`timedelta`) → milissegundos inteiros
    - booleanos → "true" / "false"
    - enums → código textual
    - opcionais ausentes → `None` em `to_map`, omitidos em `to_properties`

Invariantes:
    - Todos os campos são obrigatórios na construção (sem construção parcial)
    - Opcionais ausentes são `None`, nunca string vazia
    - A instância é imutável e comparada por valor
    - A renderização é pura, determinística e não falha

Limites explícitos:
    - Não carrega fontes de configuração (papel do `resolver`)
    - Não valida valores além dos tipos
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

from .config_types import AutoOffsetReset, ConfigEnum, SaslMechanism, SecurityProtocol, SSLProtocol


def _key(name: str) -> Any:
    return field(metadata={"key": name})


def _render(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, ConfigEnum):
        return value.code
    if isinstance(value, timedelta):
        return str(value // timedelta(milliseconds=1))
    if isinstance(value, (list, tuple)):
        return ",".join(_render(item) or "" for item in value)
    return str(value)


@dataclass(frozen=True)
class KafkaConsumerConfig:
    """
    Configuração completa de um consumidor Kafka.

    Campos (chave do cliente entre parênteses):
        - servers (`bootstrap.servers`): lista host/porta usada para a
          conexão inicial com o cluster
        - fetch_min_bytes (`fetch.min.bytes`): mínimo de dados que o
          servidor deve retornar em um fetch
        - group_id (`group.id`): identificador do grupo de consumidores
        - heartbeat_interval (`heartbeat.interval.ms`): intervalo esperado
          entre heartbeats ao coordenador do grupo
        - max_partition_fetch_bytes (`max.partition.fetch.bytes`): máximo
          de dados por partição retornado pelo servidor
        - session_timeout (`session.timeout.ms`): timeout usado para
          detectar falhas de membros do grupo
        - ssl_key_password (`ssl.key.password`): senha da chave privada
          no key store (opcional)
        - ssl_keystore_password (`ssl.keystore.password`): senha do key
          store (opcional)
        - ssl_keystore_location (`ssl.keystore.location`): caminho do key
          store, usado em autenticação de duas vias (opcional)
        - ssl_truststore_location (`ssl.truststore.location`): caminho do
          trust store (opcional)
        - ssl_truststore_password (`ssl.truststore.password`): senha do
          trust store (opcional)
        - auto_offset_reset (`auto.offset.reset`): política quando não há
          offset inicial
        - connections_max_idle_time (`connections.max.idle.ms`): tempo até
          fechar conexões ociosas
        - enable_auto_commit (`enable.auto.commit`): commit periódico de
          offsets em background
        - exclude_internal_topics (`exclude.internal.topics`): tópicos
          internos só são recebidos por inscrição explícita
        - max_poll_records (`max.poll.records`): máximo de registros por
          chamada a poll()
        - receive_buffer_bytes (`receive.buffer.bytes`): SO_RCVBUF
        - request_timeout (`request.timeout.ms`): espera máxima pela
          resposta de uma requisição
        - sasl_kerberos_service_name (`sasl.kerberos.service.name`):
          principal Kerberos do broker (opcional)
        - sasl_mechanism (`sasl.mechanism`): mecanismo SASL
        - security_protocol (`security.protocol`): protocolo com os brokers
        - send_buffer_bytes (`send.buffer.bytes`): SO_SNDBUF
        - ssl_enabled_protocols (`ssl.enabled.protocols`): protocolos
          habilitados em conexões SSL
        - ssl_keystore_type (`ssl.keystore.type`): formato do key store
        - ssl_protocol (`ssl.protocol`): protocolo usado no SSLContext
        - ssl_provider (`ssl.provider`): provider de segurança (opcional)
        - ssl_truststore_type (`ssl.truststore.type`): formato do trust store
        - check_crcs (`check.crcs`): verifica o CRC32 dos registros
        - client_id (`client.id`): identificador lógico enviado ao servidor
        - fetch_max_wait_time (`fetch.max.wait.ms`): bloqueio máximo do
          servidor quando `fetch.min.bytes` não é atingido
        - metadata_max_age (`metadata.max.age.ms`): período de refresh
          forçado de metadados
        - reconnect_backoff_time (`reconnect.backoff.ms`): espera antes de
          reconectar a um host
        - retry_backoff_time (`retry.backoff.ms`): espera antes de repetir
          uma requisição que falhou

    Decisões arquiteturais:
        - Durações são `timedelta`, nunca inteiros crus
        - Enums são membros de `ConfigEnum`, nunca strings cruas
        - Listas são normalizadas para tuplas na construção
    """

    servers: Sequence[str] = _key("bootstrap.servers")
    fetch_min_bytes: int = _key("fetch.min.bytes")
    group_id: str = _key("group.id")
    heartbeat_interval: timedelta = _key("heartbeat.interval.ms")
    max_partition_fetch_bytes: int = _key("max.partition.fetch.bytes")
    session_timeout: timedelta = _key("session.timeout.ms")
    ssl_key_password: Optional[str] = _key("ssl.key.password")
    ssl_keystore_password: Optional[str] = _key("ssl.keystore.password")
    ssl_keystore_location: Optional[str] = _key("ssl.keystore.location")
    ssl_truststore_location: Optional[str] = _key("ssl.truststore.location")
    ssl_truststore_password: Optional[str] = _key("ssl.truststore.password")
    auto_offset_reset: AutoOffsetReset = _key("auto.offset.reset")
    connections_max_idle_time: timedelta = _key("connections.max.idle.ms")
    enable_auto_commit: bool = _key("enable.auto.commit")
    exclude_internal_topics: bool = _key("exclude.internal.topics")
    max_poll_records: int = _key("max.poll.records")
    receive_buffer_bytes: int = _key("receive.buffer.bytes")
    request_timeout: timedelta = _key("request.timeout.ms")
    sasl_kerberos_service_name: Optional[str] = _key("sasl.kerberos.service.name")
    sasl_mechanism: SaslMechanism = _key("sasl.mechanism")
    security_protocol: SecurityProtocol = _key("security.protocol")
    send_buffer_bytes: int = _key("send.buffer.bytes")
    ssl_enabled_protocols: Sequence[SSLProtocol] = _key("ssl.enabled.protocols")
    ssl_keystore_type: str = _key("ssl.keystore.type")
    ssl_protocol: SSLProtocol = _key("ssl.protocol")
    ssl_provider: Optional[str] = _key("ssl.provider")
    ssl_truststore_type: str = _key("ssl.truststore.type")
    check_crcs: bool = _key("check.crcs")
    client_id: str = _key("client.id")
    fetch_max_wait_time: timedelta = _key("fetch.max.wait.ms")
    metadata_max_age: timedelta = _key("metadata.max.age.ms")
    reconnect_backoff_time: timedelta = _key("reconnect.backoff.ms")
    retry_backoff_time: timedelta = _key("retry.backoff.ms")

    def __post_init__(self) -> None:
        # frozen: normalização via object.__setattr__
        object.__setattr__(self, "servers", tuple(self.servers))
        object.__setattr__(self, "ssl_enabled_protocols", tuple(self.ssl_enabled_protocols))

    @classmethod
    def keys(cls) -> List[str]:
        """Chaves do cliente Kafka, na ordem de declaração dos campos."""
        return [f.metadata["key"] for f in fields(cls)]

    def to_map(self) -> Dict[str, Optional[str]]:
        """
        Renderiza a configuração no formato chave pontuada → string.

        Produz exatamente uma entrada por campo; opcionais ausentes
        aparecem com valor `None`.
        """
        return {f.metadata["key"]: _render(getattr(self, f.name)) for f in fields(self)}

    def to_properties(self) -> Dict[str, str]:
        """
        Retorna o payload entregue ao cliente Kafka.

        Igual a `to_map`, mas sem as entradas ausentes: a chave de um
        opcional ausente não aparece (nem como string vazia).
        """
        return {key: value for key, value in self.to_map().items() if value is not None}

    @classmethod
    def from_config(cls, tree: Any) -> "KafkaConsumerConfig":
        """Constrói a configuração a partir de uma árvore já mesclada (ver `resolver.from_config`)."""
        from .resolver import from_config

        return from_config(tree)
