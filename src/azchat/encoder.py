"""Flatten merged records back into the single-object wire shape."""

from __future__ import annotations

import copy
import json
from typing import Any, Mapping

from azchat import catalog
from azchat.catalog import Position
from azchat.types.merged import MergedChoice, MergedResponse


def _choice_values(choice: MergedChoice) -> dict[str, Any]:
    return {
        "index": choice.index,
        "message": choice.message.to_dict(),
        "finish_reason": choice.finish_reason.value if choice.finish_reason is not None else None,
        "logprobs": choice.logprobs.to_dict() if choice.logprobs is not None else None,
        "content_filter_results": (
            choice.content_filter_results.to_dict() if choice.content_filter_results is not None else None
        ),
    }


def _response_values(record: MergedResponse) -> dict[str, Any]:
    return {
        "id": record.id,
        "object": record.object,
        "created": record.created,
        "model": record.model,
        "service_tier": record.service_tier.value if record.service_tier is not None else None,
        "system_fingerprint": record.system_fingerprint,
        "prompt_filter_results": (
            [entry.to_dict() for entry in record.prompt_filter_results]
            if record.prompt_filter_results is not None
            else None
        ),
        "choices": [encode_choice(choice) for choice in record.choices],
        "usage": record.usage.to_dict() if record.usage is not None else None,
    }


def _flatten(position: Position, values: dict[str, Any], extras: Mapping[str, Any]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for name in catalog.fields_for(position):
        value = values[name]
        if value is not None:
            data[name] = value
    for name, value in extras.items():
        if name not in data:
            data[name] = copy.deepcopy(value)
    return data


def encode_choice(choice: MergedChoice) -> dict[str, Any]:
    return _flatten(Position.CHOICE, _choice_values(choice), choice.extras)


def encode(record: MergedResponse) -> dict[str, Any]:
    """Return ``record`` as one flat JSON object.

    Base and extension fields sit side by side at the level they were read
    from. Absent optional fields are omitted rather than written as null.
    """
    return _flatten(Position.RESPONSE, _response_values(record), record.extras)


def dumps(record: MergedResponse, *, indent: int | None = None) -> str:
    # NaN and Infinity are not JSON
    return json.dumps(encode(record), indent=indent, ensure_ascii=False, allow_nan=False)
