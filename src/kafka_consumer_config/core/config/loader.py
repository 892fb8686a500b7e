# src/kafka_consumer_config/core/config/loader.py
"""
Loader canônico de fontes de configuração.

Este módulo transforma uma fonte externa (arquivo no filesystem ou
resource nomeado) em uma árvore de configuração pura (`dict`), já com
chaves pontuadas expandidas e referências `${...}` resolvidas.

Fontes suportadas:
    - arquivo: caminho no filesystem
    - resource em pacote: `"pacote.importavel:caminho/arquivo.yaml"`,
      localizado com `importlib.resources`
    - resource em `sys.path`: `"caminho/relativo/arquivo"`, procurado em
      cada entrada de `sys.path`, na ordem (a primeira ocorrência vence)

Formatos suportados:
    - YAML (.yaml, .yml), via PyYAML `safe_load`
    - JSON (.json)

Um resource sem extensão é procurado como `.yaml`, `.yml` e `.json`,
nesta ordem.

Invariantes:
    - O retorno é sempre um dicionário
    - Handles de arquivo são sempre fechados, inclusive em erro
    - Uma fonte inválida nunca produz árvore parcial

Limites explícitos:
    - Não realiza merge com defaults (papel do resolver)
    - Não conhece os campos do consumidor Kafka
"""

import json
import logging
import os
import sys
from importlib import resources
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, Mapping, Optional, Union

import yaml  # PyYAML

from .errors import (
    ConfigParseError,
    ConfigSourceError,
    ConfigSourceNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import expand_dotted_keys
from .references import resolve_references

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)
SUPPORTED_SUFFIXES = YAML_SUFFIXES + JSON_SUFFIXES


def _load_file(source: Any, *, label: str) -> Dict[str, Any]:
    """
    Lê uma fonte (Path ou Traversable) e valida sua estrutura básica.

    Decisões arquiteturais:
        - O formato é determinado pela extensão do nome da fonte
        - Arquivos vazios são interpretados como dicionários vazios
        - Erros de sintaxe e de codificação (UTF-8) viram `ConfigParseError`
        - Falhas de I/O viram `ConfigSourceError`

    Args:
        source: Objeto com `.name` e `.open()` (Path ou Traversable).
        label (str): Identificação da fonte para mensagens e logs.

    Returns:
        Dict[str, Any]: Conteúdo da fonte, sem expansão nem resolução.

    Raises:
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        ConfigParseError: Se o conteúdo não for YAML/JSON válido em UTF-8.
        ConfigSourceError: Se a fonte não puder ser lida.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    suffix = PurePosixPath(source.name).suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {suffix or '(sem extensão)'} em {label}",
            source=label,
        )

    try:
        with source.open("r", encoding="utf-8") as f:
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigParseError(f"Conteúdo inválido em {label}: {exc}", source=label) from exc
    except OSError as exc:
        raise ConfigSourceError(f"Fonte ilegível {label}: {exc}", source=label) from exc

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__} em {label}",
            source=label,
        )

    logger.debug("Fonte de configuração carregada: %s", label)
    return data


def _prepare(data: Dict[str, Any], environ: Optional[Mapping[str, str]]) -> Dict[str, Any]:
    return resolve_references(expand_dotted_keys(data), environ)


def parse_file(
    path: Union[str, "os.PathLike[str]"],
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e resolve todas as suas referências.

    Args:
        path: Caminho do arquivo.
        environ: Ambiente usado no fallback de referências (`os.environ`
            quando omitido).

    Returns:
        Dict[str, Any]: Árvore expandida e resolvida.

    Raises:
        ConfigSourceNotFoundError: Se o arquivo não existir.
        ConfigSourceError: Demais falhas de formato ou parse.
        ConfigReferenceError: Se alguma referência não puder ser resolvida.
    """
    file = Path(path)
    if not file.is_file():
        raise ConfigSourceNotFoundError(
            f"Arquivo de configuração não encontrado: {file}", source=str(file)
        )
    return _prepare(_load_file(file, label=str(file)), environ)


def _candidate_names(name: str) -> Iterator[str]:
    if PurePosixPath(name).suffix.lower() in SUPPORTED_SUFFIXES:
        yield name
        return
    for suffix in SUPPORTED_SUFFIXES:
        yield name + suffix


def find_resource(name: str) -> Any:
    """
    Localiza um resource nomeado.

    `"pacote:caminho"` é procurado dentro do pacote importável; qualquer
    outro nome é procurado relativo a cada entrada de `sys.path`.

    Returns:
        Path ou Traversable apontando para o arquivo encontrado.

    Raises:
        ConfigSourceNotFoundError: Se nenhum candidato existir.
    """
    if ":" in name:
        package, _, relative = name.partition(":")
        try:
            root = resources.files(package)
        except ModuleNotFoundError as exc:
            raise ConfigSourceNotFoundError(
                f"Pacote do resource não encontrado: {package}", source=name
            ) from exc

        for candidate in _candidate_names(relative):
            node = root
            for part in PurePosixPath(candidate).parts:
                node = node.joinpath(part)
            if node.is_file():
                return node
    else:
        parts = PurePosixPath(name.lstrip("/")).parts
        for entry in sys.path:
            base = Path(entry or os.getcwd())
            for candidate in _candidate_names(str(PurePosixPath(*parts))):
                file = base.joinpath(*PurePosixPath(candidate).parts)
                if file.is_file():
                    return file

    raise ConfigSourceNotFoundError(f"Resource de configuração não encontrado: {name}", source=name)


def parse_resource(
    name: str,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Carrega um resource nomeado e resolve todas as suas referências.

    Raises:
        ConfigSourceNotFoundError: Se o resource não existir.
        ConfigSourceError: Demais falhas de formato ou parse.
        ConfigReferenceError: Se alguma referência não puder ser resolvida.
    """
    source = find_resource(name)
    return _prepare(_load_file(source, label=name), environ)
