from enum import Enum

import pytest
from pydantic import BaseModel, ValidationError

from relayhook.core.utility import (
    decode_keyspace,
    decode_state,
    deep_merge,
    encode_keyspace,
    encode_state,
    insert_path,
    to_jsonable,
    validation_error_parser,
)
from relayhook.types.types import PendingEntry


class Color(Enum):
    RED = "red"


def test_deep_merge_nested():
    base = {"hook": {"owner": "a", "default_threshold": 1}, "fee": {"divisor": 100}}
    merged = deep_merge(base, {"hook": {"default_threshold": 2}})
    assert merged == {"hook": {"owner": "a", "default_threshold": 2}, "fee": {"divisor": 100}}
    assert base["hook"]["default_threshold"] == 1


def test_to_jsonable_normalizes_values():
    entry = PendingEntry(requester="0xuser", amount=-(2**200), zero_for_one=True)
    assert to_jsonable(entry) == {
        "requester": "0xuser",
        "amount": str(-(2**200)),
        "zero_for_one": True,
        "active": True,
    }
    assert to_jsonable(Color.RED) == "red"
    assert to_jsonable(b"\x01\xff") == "0x01ff"
    assert to_jsonable((1, 2**64)) == [1, str(2**64)]


def test_state_encoding_is_reversible():
    state = {"metrics": {"v1": {"cumulative_reported_savings": 2**300, "relayed_count": 3}}}
    encoded = encode_state(state)
    assert encoded["metrics"]["v1"]["cumulative_reported_savings"] == {"__int__": str(2**300)}
    assert decode_state(encoded) == state


def test_encode_state_rejects_unknown_types():
    with pytest.raises(TypeError):
        encode_state({"x": object()})


def test_insert_path():
    tree = {}
    insert_path(tree, "storage.state_path", "state.json")
    insert_path(tree, "storage.journal_path", "journal.jsonl")
    assert tree == {"storage": {"state_path": "state.json", "journal_path": "journal.jsonl"}}

    with pytest.raises(ValueError):
        insert_path(tree, "storage", "flat")
    with pytest.raises(ValueError):
        insert_path(tree, " . ", "x")


def test_bigint_tag_requires_digit_string():
    assert decode_state({"__int__": "-42"}) == -42
    assert decode_state({"__int__": {"executed_count": 1}}) == {"__int__": {"executed_count": 1}}
    assert decode_state({"__int__": "abc"}) == {"__int__": "abc"}


def test_keyspace_codec_leaves_keys_alone():
    data = {"auth": {"__int__": True}, "metrics": {"v1": 2**100}}
    encoded = encode_keyspace(data)
    assert encoded == {"auth": {"__int__": True}, "metrics": {"v1": {"__int__": str(2**100)}}}
    assert decode_keyspace(encoded) == data

    with pytest.raises(ValueError):
        decode_keyspace({"auth": "not-a-bucket"})


def test_validation_error_parser_component():
    class Model(BaseModel):
        value: int

    with pytest.raises(ValidationError) as exc_info:
        Model.model_validate({"value": "x"})

    (parsed,) = validation_error_parser(exc_info.value, component="hook.settings")
    assert parsed["component"] == "hook.settings"
    assert parsed["path"] == "value"
