# src/kafka_consumer_config/core/config/tree.py
"""
Árvore de configuração com lookups tipados.

`ConfigTree` encapsula a árvore final (já mesclada e sem referências) e
oferece os únicos acessos usados pela extração de campos do consumidor:
string, inteiro, booleano, string opcional e sub-árvore.

Política de coerção (leniente, no estilo HOCON):
    - string  → aceita str, números e booleanos (`True` → "true")
    - int     → aceita int e strings decimais inteiras; rejeita bool e
                float com parte fracionária
    - bool    → aceita bool e as strings true/false/yes/no/on/off
                (sem diferenciar maiúsculas)

Decisões arquiteturais:
    - Valor `None` (null no YAML) é equivalente a chave ausente
    - Chave ausente e tipo incompatível são erros distintos
    - A árvore é copiada na construção; nenhum lookup a modifica

Limites explícitos:
    - Não conhece os campos do consumidor Kafka
    - Não aplica defaults: o fallback já aconteceu no merge
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Optional

from .errors import ConfigMissingKeyError, ConfigTypeMismatchError
from .merge import expand_dotted_keys
from .references import find_path, is_missing

_TRUE_STRINGS = frozenset({"true", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "off"})


class ConfigTree:
    """Visão somente-leitura de uma árvore de configuração aninhada."""

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = deepcopy(expand_dotted_keys(data)) if data else {}

    def __repr__(self) -> str:
        return f"ConfigTree(keys={sorted(self._data)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigTree):
            return NotImplemented
        return self._data == other._data

    def to_dict(self) -> Dict[str, Any]:
        """Retorna uma cópia da árvore como dicionário puro."""
        return deepcopy(self._data)

    # -----------------------------
    # Lookups
    # -----------------------------

    def _get(self, path: str) -> Any:
        value = find_path(self._data, path)
        if is_missing(value) or value is None:
            raise ConfigMissingKeyError(path)
        return value

    def has_path(self, path: str) -> bool:
        value = find_path(self._data, path)
        return not is_missing(value) and value is not None

    def get_string(self, path: str) -> str:
        value = self._get(path)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
        raise ConfigTypeMismatchError(path, "string", value)

    def get_optional_string(self, path: str) -> Optional[str]:
        if not self.has_path(path):
            return None
        return self.get_string(path)

    def get_int(self, path: str) -> int:
        value = self._get(path)
        if isinstance(value, bool):
            raise ConfigTypeMismatchError(path, "int", value)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip(), 10)
            except ValueError:
                raise ConfigTypeMismatchError(path, "int", value) from None
        raise ConfigTypeMismatchError(path, "int", value)

    def get_bool(self, path: str) -> bool:
        value = self._get(path)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _TRUE_STRINGS:
                return True
            if normalized in _FALSE_STRINGS:
                return False
        raise ConfigTypeMismatchError(path, "bool", value)

    def get_tree(self, path: str) -> "ConfigTree":
        value = self._get(path)
        if not isinstance(value, dict):
            raise ConfigTypeMismatchError(path, "mapa", value)
        return ConfigTree(value)
