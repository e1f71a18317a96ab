"""Positional pairing of base choices with their extension counterparts."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from azchat.errors import CardinalityMismatch
from azchat.types.chat import ChatChoice, ChatCompletionResponse
from azchat.types.merged import ExtensionBundle, ExtensionChoice, MergedChoice, MergedResponse, freeze_extras


def zip_choices(
    base: Sequence[ChatChoice],
    extension: Sequence[ExtensionChoice] | None,
    extras: Sequence[Mapping[str, Any]] | None = None,
) -> tuple[MergedChoice, ...]:
    """Merge ``extension[i]`` into ``base[i]`` for every choice.

    The wire format has no key linking the two lists, so a length mismatch
    is an error rather than something to pad or truncate.
    """
    if extension is not None and len(extension) != len(base):
        raise CardinalityMismatch(base_len=len(base), extension_len=len(extension))
    merged: list[MergedChoice] = []
    for position, choice in enumerate(base):
        slot = extension[position] if extension is not None else None
        choice_extras = extras[position] if extras is not None else None
        merged.append(MergedChoice.from_parts(choice, slot, choice_extras))
    return tuple(merged)


def merge(
    base: ChatCompletionResponse,
    bundle: ExtensionBundle | None,
    *,
    extras: Mapping[str, Any] | None = None,
    choice_extras: Sequence[Mapping[str, Any]] | None = None,
) -> MergedResponse:
    choices = zip_choices(base.choices, bundle.choices if bundle is not None else None, choice_extras)
    return MergedResponse(
        id=base.id,
        choices=choices,
        created=base.created,
        model=base.model,
        object=base.object,
        service_tier=base.service_tier,
        system_fingerprint=base.system_fingerprint,
        usage=base.usage,
        prompt_filter_results=bundle.prompt_filter_results if bundle is not None else None,
        extras=freeze_extras(extras),
    )
