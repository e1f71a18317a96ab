"""Base chat-completion response types shared by every deployment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    FUNCTION = "function"


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"


class ServiceTier(str, Enum):
    SCALE = "scale"
    DEFAULT = "default"


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "arguments": self.arguments,
        }


@dataclass(frozen=True)
class ToolCall:
    id: str
    type: str
    function: FunctionCall

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": self.function.to_dict(),
        }


@dataclass(frozen=True)
class ResponseMessage:
    role: Role
    content: str | None = None
    refusal: str | None = None
    tool_calls: tuple[ToolCall, ...] | None = None
    # Deprecated upstream in favour of tool_calls, still emitted by older deployments.
    function_call: FunctionCall | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role.value}
        if self.content is not None:
            data["content"] = self.content
        if self.refusal is not None:
            data["refusal"] = self.refusal
        if self.tool_calls is not None:
            data["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        if self.function_call is not None:
            data["function_call"] = self.function_call.to_dict()
        return data


@dataclass(frozen=True)
class TopLogprob:
    token: str
    logprob: float
    bytes: tuple[int, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"token": self.token, "logprob": self.logprob}
        if self.bytes is not None:
            data["bytes"] = list(self.bytes)
        return data


@dataclass(frozen=True)
class TokenLogprob:
    token: str
    logprob: float
    bytes: tuple[int, ...] | None
    top_logprobs: tuple[TopLogprob, ...]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"token": self.token, "logprob": self.logprob}
        if self.bytes is not None:
            data["bytes"] = list(self.bytes)
        data["top_logprobs"] = [item.to_dict() for item in self.top_logprobs]
        return data


@dataclass(frozen=True)
class ChoiceLogprobs:
    content: tuple[TokenLogprob, ...] | None = None
    refusal: tuple[TokenLogprob, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.content is not None:
            data["content"] = [item.to_dict() for item in self.content]
        if self.refusal is not None:
            data["refusal"] = [item.to_dict() for item in self.refusal]
        return data


@dataclass(frozen=True)
class CompletionUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class ChatChoice:
    index: int
    message: ResponseMessage
    finish_reason: FinishReason | None = None
    logprobs: ChoiceLogprobs | None = None


@dataclass(frozen=True)
class ChatCompletionResponse:
    """Canonical response as documented for the vendor-neutral API."""

    id: str
    choices: tuple[ChatChoice, ...]
    created: int
    model: str
    object: str
    service_tier: ServiceTier | None = None
    system_fingerprint: str | None = None
    usage: CompletionUsage | None = None
