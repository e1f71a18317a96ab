"""Merged view combining the base response with its extension bundle."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from azchat.types.chat import (
    ChatChoice,
    ChatCompletionResponse,
    ChoiceLogprobs,
    CompletionUsage,
    FinishReason,
    ResponseMessage,
    ServiceTier,
)
from azchat.types.content_filtering import ChoiceFilterOutcome, PromptFilterResult


def freeze_extras(extras: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    """Read-only view over a copy of ``extras``; the values themselves are shared."""
    return MappingProxyType(dict(extras or {}))


@dataclass(frozen=True)
class ExtensionChoice:
    content_filter_results: ChoiceFilterOutcome | None = None


@dataclass(frozen=True)
class ExtensionBundle:
    """Vendor fields of one response.

    ``choices`` runs parallel to the base choices: same length, same order.
    ``prompt_filter_results`` has one entry per input prompt instead.
    """

    choices: tuple[ExtensionChoice, ...]
    prompt_filter_results: tuple[PromptFilterResult, ...] | None = None


@dataclass(frozen=True)
class MergedChoice:
    index: int
    message: ResponseMessage
    finish_reason: FinishReason | None = None
    logprobs: ChoiceLogprobs | None = None
    content_filter_results: ChoiceFilterOutcome | None = None
    # not hashed: preserved values may be lists or objects
    extras: Mapping[str, Any] = field(default_factory=freeze_extras, hash=False)

    @classmethod
    def from_parts(
        cls,
        choice: ChatChoice,
        extension: ExtensionChoice | None,
        extras: Mapping[str, Any] | None = None,
    ) -> "MergedChoice":
        return cls(
            index=choice.index,
            message=choice.message,
            finish_reason=choice.finish_reason,
            logprobs=choice.logprobs,
            content_filter_results=extension.content_filter_results if extension is not None else None,
            extras=freeze_extras(extras),
        )

    def base(self) -> ChatChoice:
        return ChatChoice(
            index=self.index,
            message=self.message,
            finish_reason=self.finish_reason,
            logprobs=self.logprobs,
        )

    def extension(self) -> ExtensionChoice:
        return ExtensionChoice(content_filter_results=self.content_filter_results)


@dataclass(frozen=True)
class MergedResponse:
    id: str
    choices: tuple[MergedChoice, ...]
    created: int
    model: str
    object: str
    service_tier: ServiceTier | None = None
    system_fingerprint: str | None = None
    usage: CompletionUsage | None = None
    prompt_filter_results: tuple[PromptFilterResult, ...] | None = None
    # not hashed: preserved values may be lists or objects
    extras: Mapping[str, Any] = field(default_factory=freeze_extras, hash=False)

    def base(self) -> ChatCompletionResponse:
        return ChatCompletionResponse(
            id=self.id,
            choices=tuple(choice.base() for choice in self.choices),
            created=self.created,
            model=self.model,
            object=self.object,
            service_tier=self.service_tier,
            system_fingerprint=self.system_fingerprint,
            usage=self.usage,
        )

    def extension(self) -> ExtensionBundle | None:
        """Return the extension bundle, or None when the response carried no vendor fields."""
        if not self.has_extension:
            return None
        return ExtensionBundle(
            choices=tuple(choice.extension() for choice in self.choices),
            prompt_filter_results=self.prompt_filter_results,
        )

    @property
    def has_extension(self) -> bool:
        if self.prompt_filter_results is not None:
            return True
        return any(choice.content_filter_results is not None for choice in self.choices)
