from __future__ import annotations

import json

import pytest

from azchat.config import DecoderOptions
from azchat.decoder import decode
from azchat.encoder import dumps, encode
from azchat.types.chat import ChatChoice, ChatCompletionResponse, CompletionUsage, ResponseMessage, Role, ServiceTier
from azchat.types.content_filtering import (
    ChoiceFilterResults,
    FilterError,
    PromptFilterCategories,
    PromptFilterResult,
    Severity,
    SeverityResult,
)
from azchat.types.merged import ExtensionBundle, ExtensionChoice
from azchat.zipper import merge
from tests.utils import CONCRETE_DOCUMENT, azure_document, plain_document, to_text


def test_concrete_document_stays_flat(options: DecoderOptions) -> None:
    encoded = encode(decode(CONCRETE_DOCUMENT, options))
    assert set(encoded) == {"id", "object", "created", "model", "choices"}
    assert len(encoded["choices"]) == 1
    assert encoded["choices"][0]["content_filter_results"] == {"hate": {"filtered": False, "severity": "safe"}}
    assert encoded == json.loads(CONCRETE_DOCUMENT)


def test_choice_objects_carry_both_schemas(options: DecoderOptions) -> None:
    encoded = encode(decode(to_text(azure_document()), options))
    first = encoded["choices"][0]
    assert {"index", "message", "finish_reason", "logprobs", "content_filter_results"} <= set(first)
    assert "vanilla" not in encoded
    assert "extra" not in encoded
    assert encoded["prompt_filter_results"][0]["prompt_index"] == 0


def test_decode_after_encode_is_identity(options: DecoderOptions) -> None:
    record = decode(to_text(azure_document()), options)
    assert decode(to_text(encode(record)), options) == record


def test_encode_is_idempotent(options: DecoderOptions) -> None:
    record = decode(to_text(azure_document()), options)
    once = encode(record)
    assert encode(decode(to_text(once), options)) == once


def test_built_record_round_trips(options: DecoderOptions) -> None:
    base = ChatCompletionResponse(
        id="c9",
        choices=(
            ChatChoice(index=0, message=ResponseMessage(role=Role.ASSISTANT, content="a")),
            ChatChoice(index=1, message=ResponseMessage(role=Role.ASSISTANT, refusal="no")),
        ),
        created=1700000001,
        model="gpt-4o",
        object="chat.completion",
        service_tier=ServiceTier.DEFAULT,
        usage=CompletionUsage(prompt_tokens=3, completion_tokens=4, total_tokens=7),
    )
    bundle = ExtensionBundle(
        choices=(
            ExtensionChoice(ChoiceFilterResults(sexual=SeverityResult(filtered=False, severity=Severity.LOW))),
            ExtensionChoice(FilterError(code="429", message="busy")),
        ),
        prompt_filter_results=(PromptFilterResult(prompt_index=0, content_filter_results=PromptFilterCategories()),),
    )
    record = merge(base, bundle)
    assert decode(dumps(record), options) == record


def test_absent_optionals_are_omitted(options: DecoderOptions) -> None:
    encoded = encode(decode(to_text(plain_document(system_fingerprint=None)), options))
    assert "system_fingerprint" not in encoded
    assert "usage" not in encoded
    assert "content_filter_results" not in encoded["choices"][0]


def test_dumps_is_json_text(options: DecoderOptions) -> None:
    record = decode(CONCRETE_DOCUMENT, options)
    assert json.loads(dumps(record, indent=2)) == encode(record)


def test_absent_logprob_fields_are_omitted(options: DecoderOptions) -> None:
    encoded = encode(decode(to_text(azure_document()), options))
    logprobs = encoded["choices"][0]["logprobs"]
    assert "refusal" not in logprobs
    assert "bytes" not in logprobs["content"][0]["top_logprobs"][0]
    assert logprobs["content"][0]["bytes"] == [80, 97, 114, 105, 115]


def test_encoded_extras_are_copies(preserving_options: DecoderOptions) -> None:
    record = decode(to_text(plain_document(beta={"tags": ["a"]})), preserving_options)
    encode(record)["beta"]["tags"].append("b")
    assert record.extras["beta"] == {"tags": ["a"]}


def test_dumps_refuses_non_finite_extras() -> None:
    document = plain_document(beta=float("nan"))
    record = decode(document, DecoderOptions(unknown_fields="preserve"))
    with pytest.raises(ValueError):
        dumps(record)
