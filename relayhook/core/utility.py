from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Mapping

from pydantic import ValidationError

# orjson only encodes integers in the signed/unsigned 64-bit range
_JSON_INT_MIN = -(2**63)
_JSON_INT_MAX = 2**64 - 1
_BIGINT_TAG = "__int__"


def deep_merge(a: Mapping[str, Any], b: Mapping[str, Any]) -> Mapping[str, Any]:
    out = dict(a)
    for k, v in b.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def validation_error_parser(
    error: ValidationError, component: str = "config.settings"
) -> list[dict[str, str]]:
    parsed_error = [
        {
            "component": component,
            "path": ".".join(map(str, err["loc"])),
            "message": err["msg"],
            "error_type": err["type"],
        }
        for err in error.errors()
    ]
    return parsed_error


# --- JSON normalization ---


def to_jsonable(value: Any) -> Any:
    """
    Normalize notification payloads and telemetry fields for orjson.
    - dataclasses -> dict, Enum -> value, bytes -> 0x-hex
    - integers outside the 64-bit range -> decimal string (lossless, human readable)
    """
    if value is None or isinstance(value, (bool, str, float)):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, int):
        if _JSON_INT_MIN <= value <= _JSON_INT_MAX:
            return value
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return str(value)


def encode_state(value: Any) -> Any:
    """
    Encode state-store content for JSON persistence.
    Unlike to_jsonable this is reversible: big integers become {"__int__": "<digits>"}.
    """
    if isinstance(value, bool) or value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, int):
        if _JSON_INT_MIN <= value <= _JSON_INT_MAX:
            return value
        return {_BIGINT_TAG: str(value)}
    if isinstance(value, Mapping):
        return {str(k): encode_state(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_state(v) for v in value]
    raise TypeError(f"Unsupported state value type: {type(value).__name__}")


def _is_bigint_tag(value: dict) -> bool:
    if len(value) != 1 or _BIGINT_TAG not in value:
        return False
    digits = value[_BIGINT_TAG]
    return isinstance(digits, str) and digits.lstrip("-").isdigit()


def decode_state(value: Any) -> Any:
    if isinstance(value, dict):
        if _is_bigint_tag(value):
            return int(value[_BIGINT_TAG])
        return {k: decode_state(v) for k, v in value.items()}
    if isinstance(value, list):
        return [decode_state(v) for v in value]
    return value


def encode_keyspace(data: Mapping[str, Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    """
    Encode a whole {namespace: {key: value}} store.
    Namespace and key levels are host-owned ids (venues, principals) and are
    written verbatim; only the stored values go through encode_state.
    """
    return {
        str(ns): {str(key): encode_state(value) for key, value in bucket.items()}
        for ns, bucket in data.items()
    }


def decode_keyspace(raw: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Inverse of encode_keyspace. Raises ValueError on a malformed layout."""
    out: dict[str, dict[str, Any]] = {}
    for ns, bucket in raw.items():
        if not isinstance(bucket, dict):
            raise ValueError(f"namespace {ns!r} must map to an object")
        out[ns] = {key: decode_state(value) for key, value in bucket.items()}
    return out


def insert_path(tree: dict[str, Any], dotted_path: str, value: Any) -> None:
    """Populate ``tree`` with ``value`` located at ``dotted_path``."""

    segments = [segment.strip() for segment in dotted_path.split(".") if segment.strip()]
    if not segments:
        raise ValueError("Override keys must contain at least one non-empty segment")

    cursor: dict[str, Any] = tree
    for segment in segments[:-1]:
        existing = cursor.get(segment)
        if existing is None:
            next_node: dict[str, Any] = {}
            cursor[segment] = next_node
            cursor = next_node
        elif isinstance(existing, dict):
            cursor = existing
        else:
            raise ValueError(
                f"Cannot override nested path '{dotted_path}': segment '{segment}' is already a value"
            )

    leaf = segments[-1]
    if isinstance(cursor.get(leaf), dict):
        raise ValueError(f"Cannot assign value to '{dotted_path}': existing node at '{leaf}' is a mapping")
    cursor[leaf] = value
