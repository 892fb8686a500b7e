# tests/test_consumer_config.py
"""
Testes do modelo `KafkaConsumerConfig` e de sua renderização.

Este módulo valida:
- a construção completa e imutável do modelo
- `to_map`: uma entrada por campo, com as conversões documentadas
- `to_properties`: somente entradas presentes, nunca string vazia
  no lugar de um opcional ausente

Decisões arquiteturais:
    - O modelo é construído diretamente, sem passar pelo resolver,
      para isolar a renderização da extração
"""

import dataclasses
from datetime import timedelta

import pytest

from kafka_consumer_config.config_types import (
    AutoOffsetReset,
    SaslMechanism,
    SecurityProtocol,
    SSLProtocol,
)
from kafka_consumer_config.consumer_config import KafkaConsumerConfig


@pytest.fixture
def config() -> KafkaConsumerConfig:
    """Configuração completa sem nenhum opcional presente."""
    return KafkaConsumerConfig(
        servers=["broker-a:9092", "broker-b:9092"],
        fetch_min_bytes=1,
        group_id="orders",
        heartbeat_interval=timedelta(seconds=3),
        max_partition_fetch_bytes=1048576,
        session_timeout=timedelta(seconds=10),
        ssl_key_password=None,
        ssl_keystore_password=None,
        ssl_keystore_location=None,
        ssl_truststore_location=None,
        ssl_truststore_password=None,
        auto_offset_reset=AutoOffsetReset.EARLIEST,
        connections_max_idle_time=timedelta(minutes=9),
        enable_auto_commit=True,
        exclude_internal_topics=False,
        max_poll_records=500,
        receive_buffer_bytes=65536,
        request_timeout=timedelta(milliseconds=40000),
        sasl_kerberos_service_name=None,
        sasl_mechanism=SaslMechanism.GSSAPI,
        security_protocol=SecurityProtocol.SASL_SSL,
        send_buffer_bytes=131072,
        ssl_enabled_protocols=[SSLProtocol.TLS_V1_2, SSLProtocol.TLS_V1_1],
        ssl_keystore_type="JKS",
        ssl_protocol=SSLProtocol.TLS,
        ssl_provider=None,
        ssl_truststore_type="JKS",
        check_crcs=True,
        client_id="orders-service",
        fetch_max_wait_time=timedelta(milliseconds=500),
        metadata_max_age=timedelta(minutes=5),
        reconnect_backoff_time=timedelta(milliseconds=50),
        retry_backoff_time=timedelta(milliseconds=100),
    )


def test_to_map_has_one_entry_per_field(config, required_keys, optional_keys):
    out = config.to_map()
    assert len(out) == len(dataclasses.fields(KafkaConsumerConfig))
    assert set(out) == required_keys | optional_keys
    assert list(out) == KafkaConsumerConfig.keys()


def test_to_map_renders_values(config):
    out = config.to_map()
    assert out["bootstrap.servers"] == "broker-a:9092,broker-b:9092"
    assert out["heartbeat.interval.ms"] == "3000"
    assert out["connections.max.idle.ms"] == "540000"
    assert out["enable.auto.commit"] == "true"
    assert out["exclude.internal.topics"] == "false"
    assert out["auto.offset.reset"] == "earliest"
    assert out["security.protocol"] == "SASL_SSL"
    assert out["sasl.mechanism"] == "GSSAPI"
    assert out["ssl.enabled.protocols"] == "TLSv1.2,TLSv1.1"
    assert out["ssl.protocol"] == "TLS"
    assert out["fetch.min.bytes"] == "1"
    assert out["ssl.key.password"] is None
    assert out["ssl.provider"] is None


def test_to_properties_drops_absent_optionals(config, required_keys, optional_keys):
    props = config.to_properties()
    assert set(props) == required_keys
    assert not (set(props) & optional_keys)
    assert all(isinstance(v, str) for v in props.values())


def test_present_optional_adds_exactly_one_key(config, required_keys):
    with_provider = dataclasses.replace(config, ssl_provider="SunJSSE")
    props = with_provider.to_properties()
    assert set(props) - required_keys == {"ssl.provider"}
    assert props["ssl.provider"] == "SunJSSE"


def test_empty_optional_string_is_kept_verbatim(config):
    # string vazia é um valor presente; só `None` representa ausência
    props = dataclasses.replace(config, ssl_key_password="").to_properties()
    assert props["ssl.key.password"] == ""


def test_model_is_immutable_and_value_equal(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.group_id = "other"  # type: ignore[misc]

    same = dataclasses.replace(config)
    assert same == config
    assert hash(same) == hash(config)
    assert config.servers == ("broker-a:9092", "broker-b:9092")
    assert isinstance(config.ssl_enabled_protocols, tuple)


def test_construction_requires_every_field():
    with pytest.raises(TypeError):
        KafkaConsumerConfig(servers=["localhost:9092"])  # type: ignore[call-arg]


def test_rendering_is_deterministic(config):
    assert config.to_map() == config.to_map()
    assert list(config.to_properties()) == list(config.to_properties())
