from __future__ import annotations

import pytest

from azchat import catalog
from azchat.catalog import FieldKind, Position


def test_classify_response_fields() -> None:
    assert catalog.classify(Position.RESPONSE, "id") is FieldKind.BASE
    assert catalog.classify(Position.RESPONSE, "choices") is FieldKind.BASE
    assert catalog.classify(Position.RESPONSE, "prompt_filter_results") is FieldKind.EXTENSION
    assert catalog.classify(Position.RESPONSE, "beta_flag") is FieldKind.UNKNOWN


def test_classify_depends_on_position() -> None:
    assert catalog.classify(Position.CHOICE, "content_filter_results") is FieldKind.EXTENSION
    assert catalog.classify(Position.RESPONSE, "content_filter_results") is FieldKind.UNKNOWN
    assert catalog.classify(Position.CHOICE, "id") is FieldKind.UNKNOWN


def test_required_fields() -> None:
    assert set(catalog.required_fields(Position.RESPONSE)) == {"id", "choices", "created", "model", "object"}
    assert set(catalog.required_fields(Position.CHOICE)) == {"index", "message"}


def test_field_names_by_kind() -> None:
    assert catalog.field_names(Position.CHOICE, FieldKind.EXTENSION) == ("content_filter_results",)
    assert "logprobs" in catalog.field_names(Position.CHOICE, FieldKind.BASE)


def test_tables_are_read_only() -> None:
    table = catalog.fields_for(Position.RESPONSE)
    with pytest.raises(TypeError):
        table["beta_flag"] = table["id"]  # type: ignore[index]
