# tests/core/config/test_references.py
"""
Testes da resolução de referências `${...}`.

Os testes asseguram que:
- referências de valor inteiro preservam o tipo do valor referenciado
- referências embutidas são interpoladas como texto
- o ambiente é usado como fallback para caminhos ausentes
- referências opcionais ausentes removem a chave
- ciclos e referências obrigatórias ausentes são erros explícitos
"""

import pytest

from kafka_consumer_config.core.config.errors import (
    ConfigTypeMismatchError,
    ReferenceCycleError,
    UnresolvedReferenceError,
)
from kafka_consumer_config.core.config.references import resolve_references


def test_whole_value_reference_keeps_type():
    tree = {"defaults": {"timeout": 30000, "strict": True}, "kafka": {"session": "${defaults.timeout}", "crc": "${defaults.strict}"}}
    out = resolve_references(tree, environ={})
    assert out["kafka"] == {"session": 30000, "crc": True}


def test_embedded_reference_is_interpolated():
    tree = {"app": {"name": "billing", "replica": 2}, "kafka": {"client": "${app.name}-${app.replica}"}}
    out = resolve_references(tree, environ={})
    assert out["kafka"]["client"] == "billing-2"


def test_environment_fallback():
    tree = {"kafka": {"servers": "${BROKERS}"}}
    out = resolve_references(tree, environ={"BROKERS": "b1:9092,b2:9092"})
    assert out["kafka"]["servers"] == "b1:9092,b2:9092"


def test_tree_value_wins_over_environment():
    tree = {"app": {"name": "from-tree"}, "kafka": {"group": "${app.name}"}}
    out = resolve_references(tree, environ={"app.name": "from-env"})
    assert out["kafka"]["group"] == "from-tree"


def test_optional_reference_missing_removes_key():
    tree = {"kafka": {"password": "${?TRUSTSTORE_PASSWORD}", "group": "g"}}
    out = resolve_references(tree, environ={})
    assert out == {"kafka": {"group": "g"}}


def test_optional_embedded_reference_missing_is_empty():
    tree = {"kafka": {"client": "svc${?SUFFIX}"}}
    assert resolve_references(tree, environ={})["kafka"]["client"] == "svc"


def test_chained_references():
    tree = {"a": "${b}", "b": "${c}", "c": "end"}
    assert resolve_references(tree, environ={}) == {"a": "end", "b": "end", "c": "end"}


def test_missing_required_reference_raises():
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolve_references({"kafka": {"group": "${app.name}"}}, environ={})
    assert exc_info.value.reference == "app.name"


def test_cycle_raises():
    with pytest.raises(ReferenceCycleError):
        resolve_references({"a": "${b}", "b": "${a}"}, environ={})

    with pytest.raises(ReferenceCycleError):
        resolve_references({"a": "x-${a}"}, environ={})


def test_interpolating_a_mapping_raises():
    tree = {"app": {"name": "billing"}, "kafka": {"client": "id-${app}"}}
    with pytest.raises(ConfigTypeMismatchError):
        resolve_references(tree, environ={})


def test_escaped_reference_is_kept_literal():
    tree = {"app": {"name": "billing"}, "kafka": {"password": "$${x}", "pin": "p$${app.name}-${app.name}"}}
    out = resolve_references(tree, environ={})
    assert out["kafka"]["password"] == "${x}"
    assert out["kafka"]["pin"] == "p${app.name}-billing"


def test_escaped_reference_through_chain_stays_literal():
    tree = {"secret": "a$${b}c", "kafka": {"password": "${secret}"}}
    assert resolve_references(tree, environ={})["kafka"]["password"] == "a${b}c"


def test_input_is_not_mutated():
    tree = {"app": {"name": "billing"}, "kafka": {"group": "${app.name}"}}
    resolve_references(tree, environ={})
    assert tree["kafka"]["group"] == "${app.name}"
