# src/kafka_consumer_config/core/config/references.py
"""
Resolução de referências `${...}` dentro de uma árvore de configuração.

Uma fonte de configuração pode reutilizar valores de outras chaves da
mesma árvore, ou do ambiente do processo, por meio de referências:

    kafka:
      client.id: "${app.name}-consumer"
      group.id: ${app.name}
      ssl.truststore.password: ${?TRUSTSTORE_PASSWORD}

Política de resolução:
    - `${a.b}` ocupando o valor inteiro → recebe o valor referenciado,
      preservando seu tipo (int, bool, mapa, ...)
    - `${a.b}` embutido em texto → interpolado como string
    - caminho ausente na árvore → fallback para variável de ambiente com
      exatamente o mesmo nome
    - `${?a.b}` é opcional: se não resolver, a chave é removida (valor
      inteiro) ou interpolada como string vazia (embutida)
    - referência obrigatória não resolvida → `UnresolvedReferenceError`
    - ciclo entre referências → `ReferenceCycleError`
    - `$${a.b}` é um escape: vira o texto literal `${a.b}`, sem lookup
      (ex.: uma senha que contém `${`)

Invariantes:
    - A árvore de entrada nunca é mutada
    - A árvore retornada não contém mais nenhuma referência

Limites explícitos:
    - Referências são resolvidas dentro de uma única fonte; o merge com
      defaults acontece depois
    - Não há concatenação de listas ou mapas
"""

import os
import re
from typing import Any, Dict, List, Mapping, Optional

from .errors import (
    ConfigTypeMismatchError,
    ReferenceCycleError,
    UnresolvedReferenceError,
)

_REFERENCE = re.compile(r"(\$?)\$\{(\??)([^}]*)\}")

_MISSING = object()


def find_path(tree: Mapping[str, Any], path: str) -> Any:
    """Retorna o valor em `path` (separado por pontos) ou o sentinel interno de ausência."""
    node: Any = tree
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


def is_missing(value: Any) -> bool:
    return value is _MISSING


class _ReferenceResolver:
    """
    Resolve referências de uma árvore, uma chave por vez.

    O resolver mantém a pilha de chaves em resolução para detectar
    ciclos; referências já resolvidas não são memorizadas porque as
    árvores de configuração são pequenas.
    """

    def __init__(self, tree: Dict[str, Any], environ: Mapping[str, str]) -> None:
        self._tree = tree
        self._environ = environ
        self._stack: List[str] = []

    def resolve(self) -> Dict[str, Any]:
        return self._resolve_mapping(self._tree, prefix="")

    def _resolve_mapping(self, mapping: Mapping[str, Any], prefix: str) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, value in mapping.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            resolved = self._resolve_value(value, path)
            if resolved is _MISSING:
                continue
            out[key] = resolved
        return out

    def _resolve_value(self, value: Any, path: str) -> Any:
        if isinstance(value, Mapping):
            return self._resolve_mapping(value, path)
        if isinstance(value, list):
            items = [self._resolve_value(item, f"{path}[{i}]") for i, item in enumerate(value)]
            return [item for item in items if item is not _MISSING]
        if isinstance(value, str) and "${" in value:
            return self._substitute(value, path)
        return value

    def _substitute(self, text: str, path: str) -> Any:
        if path in self._stack:
            chain = " -> ".join(self._stack + [path])
            raise ReferenceCycleError(
                f"Ciclo de referências detectado: {chain}", reference=path
            )

        self._stack.append(path)
        try:
            whole = _REFERENCE.fullmatch(text)
            if whole and not whole.group(1):
                return self._lookup(whole.group(3).strip(), optional=bool(whole.group(2)))

            def _interpolate(match: "re.Match[str]") -> str:
                if match.group(1):
                    return match.group(0)[1:]
                value = self._lookup(match.group(3).strip(), optional=bool(match.group(2)))
                return _as_text(value, path)

            return _REFERENCE.sub(_interpolate, text)
        finally:
            self._stack.pop()

    def _lookup(self, reference: str, *, optional: bool) -> Any:
        raw = find_path(self._tree, reference)
        if raw is not _MISSING:
            return self._resolve_value(raw, reference)

        if reference in self._environ:
            return self._environ[reference]

        if optional:
            return _MISSING

        raise UnresolvedReferenceError(
            f"Referência '${{{reference}}}' não encontrada na configuração "
            f"nem no ambiente",
            reference=reference,
        )


def _as_text(value: Any, path: str) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list)):
        raise ConfigTypeMismatchError(path, "valor escalar para interpolação", value)
    return str(value)


def resolve_references(
    tree: Dict[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Expande todas as referências `${...}` de uma árvore de configuração.

    Args:
        tree (Dict[str, Any]): Árvore carregada de uma única fonte.
        environ (Optional[Mapping[str, str]]): Ambiente usado como fallback;
            `os.environ` quando omitido.

    Returns:
        Dict[str, Any]: Nova árvore, sem referências.

    Raises:
        UnresolvedReferenceError: Se uma referência obrigatória não resolver.
        ReferenceCycleError: Se referências formarem um ciclo.
        ConfigTypeMismatchError: Se um mapa/lista for interpolado em texto.
    """
    env = os.environ if environ is None else environ
    return _ReferenceResolver(tree, env).resolve()
