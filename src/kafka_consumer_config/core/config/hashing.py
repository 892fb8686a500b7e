# src/kafka_consumer_config/core/config/hashing.py
"""
Hashing canônico da árvore de configuração efetiva.

O hash identifica estruturalmente a árvore mesclada que deu origem a um
`KafkaConsumerConfig`, permitindo correlacionar logs de diferentes
processos que resolveram a mesma configuração sem registrar nenhum
valor (senhas incluídas).

Política de hashing:
    - `ConfigTree` é hasheado pela sua árvore expandida, então chaves
      pontuadas e aninhadas produzem o mesmo hash
    - JSON canônico: chaves ordenadas, separadores compactos, UTF-8
    - Datas e timestamps do YAML viram ISO-8601
    - SHA-256 em hexadecimal

Invariantes:
    - Árvores estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from datetime import date, datetime, time
from typing import Any, Mapping, Union

from .tree import ConfigTree


def _encode(value: Any) -> Any:
    # escalares não-JSON que o `safe_load` do PyYAML pode produzir
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, bytes):
        return value.hex()
    raise TypeError(f"Valor não serializável para hashing: {type(value).__name__}")


def canonical_json(tree: Union[ConfigTree, Mapping[str, Any]]) -> str:
    """Serialização canônica usada como entrada do hash."""
    if isinstance(tree, ConfigTree):
        tree = tree.to_dict()
    elif not isinstance(tree, Mapping):
        raise TypeError(
            f"Árvore para hashing deve ser mapa ou ConfigTree, recebido: {type(tree).__name__}"
        )

    return json.dumps(
        tree,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_encode,
    )


def compute_config_hash(tree: Union[ConfigTree, Mapping[str, Any]]) -> str:
    """
    Gera um hash determinístico de uma árvore de configuração.

    Args:
        tree: Árvore efetiva (já mesclada), como dicionário ou `ConfigTree`.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se `tree` não for um mapa, ou contiver valor sem
            representação canônica.
    """
    return hashlib.sha256(canonical_json(tree).encode("utf-8")).hexdigest()
