"""Static catalog of recognized response fields and where they decode to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class Position(str, Enum):
    RESPONSE = "response"
    CHOICE = "choice"


class FieldKind(str, Enum):
    BASE = "base"
    EXTENSION = "extension"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    json_kind: str
    required: bool = False


def _table(specs: Iterable[FieldSpec]) -> Mapping[str, FieldSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


# Order here is the order the encoder writes keys in.
RESPONSE_FIELDS: Mapping[str, FieldSpec] = _table(
    [
        FieldSpec("id", FieldKind.BASE, "string", required=True),
        FieldSpec("object", FieldKind.BASE, "string", required=True),
        FieldSpec("created", FieldKind.BASE, "integer", required=True),
        FieldSpec("model", FieldKind.BASE, "string", required=True),
        FieldSpec("service_tier", FieldKind.BASE, "string"),
        FieldSpec("system_fingerprint", FieldKind.BASE, "string"),
        FieldSpec("prompt_filter_results", FieldKind.EXTENSION, "array"),
        FieldSpec("choices", FieldKind.BASE, "array", required=True),
        FieldSpec("usage", FieldKind.BASE, "object"),
    ]
)

CHOICE_FIELDS: Mapping[str, FieldSpec] = _table(
    [
        FieldSpec("index", FieldKind.BASE, "integer", required=True),
        FieldSpec("message", FieldKind.BASE, "object", required=True),
        FieldSpec("finish_reason", FieldKind.BASE, "string"),
        FieldSpec("logprobs", FieldKind.BASE, "object"),
        FieldSpec("content_filter_results", FieldKind.EXTENSION, "object"),
    ]
)

_TABLES: Mapping[Position, Mapping[str, FieldSpec]] = MappingProxyType(
    {
        Position.RESPONSE: RESPONSE_FIELDS,
        Position.CHOICE: CHOICE_FIELDS,
    }
)


def fields_for(position: Position) -> Mapping[str, FieldSpec]:
    return _TABLES[position]


def classify(position: Position, name: str) -> FieldKind:
    """Return the decode target of ``name`` at ``position``.

    Names missing from the table are ``UNKNOWN``; callers skip them rather
    than fail so that additions on the service side do not break decoding.
    """
    spec = _TABLES[position].get(name)
    if spec is None:
        return FieldKind.UNKNOWN
    return spec.kind


def required_fields(position: Position) -> tuple[str, ...]:
    return tuple(name for name, spec in _TABLES[position].items() if spec.required)


def field_names(position: Position, kind: FieldKind | None = None) -> tuple[str, ...]:
    table = _TABLES[position]
    if kind is None:
        return tuple(table)
    return tuple(name for name, spec in table.items() if spec.kind is kind)
