from __future__ import annotations

import pytest

from azchat.errors import CardinalityMismatch
from azchat.types.chat import ChatChoice, ChatCompletionResponse, ResponseMessage, Role
from azchat.types.content_filtering import ChoiceFilterResults, FilterError, Severity, SeverityResult
from azchat.types.merged import ExtensionBundle, ExtensionChoice
from azchat.zipper import merge, zip_choices


def _choices(count: int) -> tuple[ChatChoice, ...]:
    return tuple(
        ChatChoice(index=index, message=ResponseMessage(role=Role.ASSISTANT, content=f"answer {index}"))
        for index in range(count)
    )


def test_no_extension_leaves_slots_empty() -> None:
    merged = zip_choices(_choices(3), None)
    assert len(merged) == 3
    assert all(choice.content_filter_results is None for choice in merged)
    assert [choice.index for choice in merged] == [0, 1, 2]


def test_length_mismatch_reports_both_lengths() -> None:
    extension = (ExtensionChoice(), ExtensionChoice(), ExtensionChoice())
    with pytest.raises(CardinalityMismatch) as excinfo:
        zip_choices(_choices(2), extension)
    assert excinfo.value == CardinalityMismatch(base_len=2, extension_len=3)


def test_empty_extension_for_non_empty_base_is_a_mismatch() -> None:
    with pytest.raises(CardinalityMismatch) as excinfo:
        zip_choices(_choices(1), ())
    assert (excinfo.value.base_len, excinfo.value.extension_len) == (1, 0)


def test_positional_zip() -> None:
    safe = ChoiceFilterResults(hate=SeverityResult(filtered=False, severity=Severity.SAFE))
    failure = FilterError(code="500", message="filter unavailable")
    merged = zip_choices(_choices(2), (ExtensionChoice(safe), ExtensionChoice(failure)))
    assert merged[0].content_filter_results == safe
    assert merged[1].content_filter_results == failure
    assert merged[1].message.content == "answer 1"


def test_merge_splits_back_into_parts() -> None:
    base = ChatCompletionResponse(id="c1", choices=_choices(2), created=1, model="m", object="chat.completion")
    bundle = ExtensionBundle(
        choices=(ExtensionChoice(ChoiceFilterResults()), ExtensionChoice()),
        prompt_filter_results=None,
    )
    record = merge(base, bundle)
    assert record.base() == base
    assert record.extension() == bundle


def test_merge_without_bundle_has_no_extension() -> None:
    base = ChatCompletionResponse(id="c1", choices=_choices(1), created=1, model="m", object="chat.completion")
    record = merge(base, None)
    assert record.extension() is None
    assert record.base() == base
