# src/kafka_consumer_config/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política de fallback usada para resolver a
árvore final do consumidor a partir da fonte do usuário (overlay) e da
fonte embutida de defaults (base).

Política de merge:
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - `None` no override → sobrescreve (a chave passa a ser ausente)
    - dict vs não-dict → erro estrutural explícito

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - O merge acontece antes de qualquer extração tipada

Também normaliza chaves pontuadas (`expand_dotted_keys`), já que
`ssl.keystore.type` e `ssl: {keystore: {type: ...}}` precisam colidir
no merge.

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não realiza coerção de tipos (isso é papel de `ConfigTree`)
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    O override sempre vence em caso de colisão de chaves; a base fornece
    toda chave que o override omite.

    Decisões arquiteturais:
        - Escalares de tipos diferentes não são conflito: o valor do
          override vence e a coerção fica para o lookup tipado
        - Um mapa nunca é substituído por um escalar (nem vice-versa)

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Configuração do usuário.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se uma chave for mapa em uma árvore e não na outra.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result or override_value is None:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # conflito estrutural
        if base_value is not None and (
            isinstance(base_value, dict) != isinstance(override_value, dict)
        ):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        # lista ou escalar -> sobrescrita
        result[key] = deepcopy(override_value)

    return result


def expand_dotted_keys(tree: Dict[str, Any]) -> Dict[str, Any]:
    """
    Expande chaves com pontos em mapas aninhados.

    `{"kafka": {"bootstrap.servers": "x"}}` e
    `{"kafka": {"bootstrap": {"servers": "x"}}}` passam a ser a mesma
    árvore. Chaves que colidem após a expansão são combinadas com
    `deep_merge`, na ordem em que aparecem.

    Raises:
        ConfigTypeConflictError: Se a expansão colidir com um escalar.
    """
    result: Dict[str, Any] = {}

    for key, value in tree.items():
        if isinstance(value, dict):
            value = expand_dotted_keys(value)

        parts = str(key).split(".")
        for part in reversed(parts[1:]):
            value = {part: value}

        head = parts[0]
        if head in result:
            result[head] = deep_merge({head: result[head]}, {head: value})[head]
        else:
            result[head] = value

    return result


def with_fallback(overlay: Dict[str, Any], fallback: Dict[str, Any]) -> Dict[str, Any]:
    """Mescla `overlay` sobre `fallback` (o overlay vence)."""
    return deep_merge(fallback, override=overlay)
