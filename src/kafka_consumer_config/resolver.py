# src/kafka_consumer_config/resolver.py
"""
Resolver da configuração do consumidor Kafka.

Este módulo produz um `KafkaConsumerConfig` completo a partir de fontes
de configuração em camadas:

    fonte do usuário (arquivo ou resource)  ─┐
                                             ├─ deep-merge (usuário vence)
    defaults embutidos (resources/default.yaml) ─┘
                         │
                         ▼
           árvore única → extração tipada → KafkaConsumerConfig

Pontos de entrada:
    - `load_default()`   → apenas os defaults embutidos
    - `default_config()` → `load_default()` memorizado por processo
    - `load_resource()`  → resource nomeado (+ defaults, por padrão)
    - `load_file()`      → arquivo (+ defaults, por padrão)
    - `load()`           → escolhe a fonte pelo ambiente do processo
    - `from_config()`    → extração a partir de uma árvore já mesclada

Precedência de `load()` (a primeira que se aplica vence):
    1. `KAFKA_CONFIG_FILE` definido e o arquivo existe → `load_file`
    2. `KAFKA_CONFIG_RESOURCE` definido → `load_resource`
    3. `default_config()`

Decisões arquiteturais:
    - O merge acontece antes da extração; a extração nunca conhece fallback
    - Todas as chaves vivem sob o prefixo raiz `kafka`
    - Qualquer falha interrompe a resolução inteira (sem modelo parcial)

Limites explícitos:
    - Não cria nem conecta o consumidor Kafka
    - Não faz cache além da instância default do processo
"""

import logging
import os
import re
from datetime import timedelta
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Union

from .config_types import AutoOffsetReset, SaslMechanism, SecurityProtocol, SSLProtocol
from .consumer_config import KafkaConsumerConfig
from .core.config.hashing import compute_config_hash
from .core.config.loader import parse_file, parse_resource
from .core.config.merge import with_fallback
from .core.config.tree import ConfigTree

logger = logging.getLogger(__name__)

ROOT = "kafka"

DEFAULT_RESOURCE = "kafka_consumer_config:resources/default.yaml"

CONFIG_FILE_ENV = "KAFKA_CONFIG_FILE"
CONFIG_RESOURCE_ENV = "KAFKA_CONFIG_RESOURCE"

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


# -----------------------------
# Extração tipada
# -----------------------------

def _path(key: str) -> str:
    return f"{ROOT}.{key}"


def _millis(tree: ConfigTree, key: str) -> timedelta:
    return timedelta(milliseconds=tree.get_int(_path(key)))


def _split(value: str) -> List[str]:
    return _LIST_SEPARATOR.split(value)


def from_config(tree: Union[ConfigTree, Dict[str, Any]]) -> KafkaConsumerConfig:
    """
    Extrai um `KafkaConsumerConfig` de uma árvore de configuração única.

    A árvore já deve conter o resultado do merge com os defaults (quando
    aplicável); aqui cada campo é apenas lido e convertido.

    Regras de extração:
        - escalares obrigatórios → lookup tipado (string/int/bool)
        - opcionais → `None` quando a chave não existe (ou é null)
        - `bootstrap.servers` → `strip()` e split por vírgula com espaços
          opcionais ao redor; elementos vazios são mantidos
        - durações → milissegundos inteiros convertidos em `timedelta`
        - enums → tabela de códigos do enum correspondente
        - `ssl.enabled.protocols` → mesmo `strip()` e split de
          `bootstrap.servers`, seguido da conversão de cada elemento;
          um único elemento inválido invalida a lista inteira

    Args:
        tree: `ConfigTree` ou dicionário com a raiz `kafka`.

    Returns:
        KafkaConsumerConfig: Configuração completa.

    Raises:
        ConfigMissingKeyError: Se uma chave obrigatória estiver ausente.
        ConfigTypeMismatchError: Se um valor não puder ser convertido.
        UnrecognizedEnumCodeError: Se um enum receber código desconhecido.
    """
    if not isinstance(tree, ConfigTree):
        tree = ConfigTree(tree)

    return KafkaConsumerConfig(
        servers=_split(tree.get_string(_path("bootstrap.servers")).strip()),
        fetch_min_bytes=tree.get_int(_path("fetch.min.bytes")),
        group_id=tree.get_string(_path("group.id")),
        heartbeat_interval=_millis(tree, "heartbeat.interval.ms"),
        max_partition_fetch_bytes=tree.get_int(_path("max.partition.fetch.bytes")),
        session_timeout=_millis(tree, "session.timeout.ms"),
        ssl_key_password=tree.get_optional_string(_path("ssl.key.password")),
        ssl_keystore_password=tree.get_optional_string(_path("ssl.keystore.password")),
        ssl_keystore_location=tree.get_optional_string(_path("ssl.keystore.location")),
        ssl_truststore_password=tree.get_optional_string(_path("ssl.truststore.password")),
        ssl_truststore_location=tree.get_optional_string(_path("ssl.truststore.location")),
        auto_offset_reset=AutoOffsetReset.from_code(
            tree.get_string(_path("auto.offset.reset")), field="auto.offset.reset"
        ),
        connections_max_idle_time=_millis(tree, "connections.max.idle.ms"),
        enable_auto_commit=tree.get_bool(_path("enable.auto.commit")),
        exclude_internal_topics=tree.get_bool(_path("exclude.internal.topics")),
        max_poll_records=tree.get_int(_path("max.poll.records")),
        receive_buffer_bytes=tree.get_int(_path("receive.buffer.bytes")),
        request_timeout=_millis(tree, "request.timeout.ms"),
        sasl_kerberos_service_name=tree.get_optional_string(_path("sasl.kerberos.service.name")),
        sasl_mechanism=SaslMechanism.from_code(
            tree.get_string(_path("sasl.mechanism")), field="sasl.mechanism"
        ),
        security_protocol=SecurityProtocol.from_code(
            tree.get_string(_path("security.protocol")), field="security.protocol"
        ),
        send_buffer_bytes=tree.get_int(_path("send.buffer.bytes")),
        ssl_enabled_protocols=[
            SSLProtocol.from_code(code, field="ssl.enabled.protocols")
            for code in _split(tree.get_string(_path("ssl.enabled.protocols")).strip())
        ],
        ssl_keystore_type=tree.get_string(_path("ssl.keystore.type")),
        ssl_protocol=SSLProtocol.from_code(
            tree.get_string(_path("ssl.protocol")), field="ssl.protocol"
        ),
        ssl_provider=tree.get_optional_string(_path("ssl.provider")),
        ssl_truststore_type=tree.get_string(_path("ssl.truststore.type")),
        check_crcs=tree.get_bool(_path("check.crcs")),
        client_id=tree.get_string(_path("client.id")),
        fetch_max_wait_time=_millis(tree, "fetch.max.wait.ms"),
        metadata_max_age=_millis(tree, "metadata.max.age.ms"),
        reconnect_backoff_time=_millis(tree, "reconnect.backoff.ms"),
        retry_backoff_time=_millis(tree, "retry.backoff.ms"),
    )


# -----------------------------
# Camadas
# -----------------------------

def _default_tree() -> Dict[str, Any]:
    return parse_resource(DEFAULT_RESOURCE)


def _resolve(tree: Dict[str, Any], *, include_defaults: bool, source: str) -> KafkaConsumerConfig:
    effective = with_fallback(tree, _default_tree()) if include_defaults else tree
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Resolvendo configuração do consumidor: source=%s include_defaults=%s config_hash=%s",
            source,
            include_defaults,
            compute_config_hash(effective),
        )
    return from_config(ConfigTree(effective))


def load_default() -> KafkaConsumerConfig:
    """
    Resolve apenas os defaults embutidos.

    Os defaults são a última camada de fallback e devem ser
    autossuficientes: qualquer falha aqui indica um pacote corrompido.

    Raises:
        ConfigError: Se o resource de defaults estiver malformado ou incompleto.
    """
    return _resolve(_default_tree(), include_defaults=False, source=DEFAULT_RESOURCE)


@lru_cache(maxsize=1)
def default_config() -> KafkaConsumerConfig:
    """Instância default do processo, calculada uma única vez."""
    return load_default()


def load_resource(name: str, include_defaults: bool = True) -> KafkaConsumerConfig:
    """
    Resolve a configuração a partir de um resource nomeado.

    Args:
        name (str): `"pacote:caminho"` ou caminho relativo a `sys.path`.
        include_defaults (bool): Se `True`, o resource é mesclado sobre os
            defaults embutidos; se `False`, o resource sozinho deve conter
            todas as chaves obrigatórias.

    Raises:
        ConfigSourceNotFoundError: Se o resource não existir.
        ConfigError: Demais falhas de parse, merge ou extração.
    """
    return _resolve(parse_resource(name), include_defaults=include_defaults, source=name)


def load_file(
    path: Union[str, "os.PathLike[str]"],
    include_defaults: bool = True,
) -> KafkaConsumerConfig:
    """
    Resolve a configuração a partir de um arquivo.

    O arquivo tem todas as referências `${...}` resolvidas antes do
    merge com os defaults.

    Args:
        path: Caminho do arquivo YAML ou JSON.
        include_defaults (bool): Mesmo contrato de `load_resource`.

    Raises:
        ConfigSourceNotFoundError: Se o arquivo não existir.
        ConfigError: Demais falhas de parse, merge ou extração.
    """
    return _resolve(parse_file(path), include_defaults=include_defaults, source=os.fspath(path))


def load(environ: Optional[Mapping[str, str]] = None) -> KafkaConsumerConfig:
    """
    Resolve a configuração escolhendo a fonte pelo ambiente do processo.

    Args:
        environ: Ambiente consultado; `os.environ` quando omitido.

    Returns:
        KafkaConsumerConfig: Configuração do arquivo, do resource ou default.
    """
    env = os.environ if environ is None else environ

    config_file = env.get(CONFIG_FILE_ENV)
    if config_file:
        if os.path.isfile(config_file):
            logger.info("Carregando configuração do consumidor do arquivo %s", config_file)
            return load_file(config_file, include_defaults=True)
        logger.warning(
            "%s aponta para um arquivo inexistente (%s); ignorando",
            CONFIG_FILE_ENV,
            config_file,
        )

    config_resource = env.get(CONFIG_RESOURCE_ENV)
    if config_resource:
        logger.info("Carregando configuração do consumidor do resource %s", config_resource)
        return load_resource(config_resource, include_defaults=True)

    logger.info("Usando configuração default do consumidor")
    return default_config()
