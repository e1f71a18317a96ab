"""Conversion of decoded JSON values into typed response values."""

from __future__ import annotations

from enum import Enum
import math
from typing import Any, Callable, Mapping, TypeVar

from azchat.errors import DecodeError, MissingRequiredField, TypeMismatch, UnsupportedSchemaShape
from azchat.types.chat import (
    ChoiceLogprobs,
    CompletionUsage,
    FinishReason,
    FunctionCall,
    ResponseMessage,
    Role,
    ServiceTier,
    TokenLogprob,
    ToolCall,
    TopLogprob,
)
from azchat.types.content_filtering import (
    CHOICE_CATEGORIES,
    PROMPT_CATEGORIES,
    ChoiceFilterOutcome,
    ChoiceFilterResults,
    Citation,
    DetectedResult,
    DetectedWithCitationResult,
    FilterError,
    PromptFilterCategories,
    PromptFilterOutcome,
    PromptFilterResult,
    Severity,
    SeverityResult,
)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


def json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def child(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def item(path: str, index: int) -> str:
    return f"{path}[{index}]"


def require_string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise TypeMismatch(path, "string", json_kind(value))
    return value


def require_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatch(path, "integer", json_kind(value))
    return value


def require_number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatch(path, "number", json_kind(value))
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    # overflowing literals such as 1e400 parse to inf, which JSON cannot carry back out
    if not math.isfinite(number):
        raise TypeMismatch(path, "number", "non-finite")
    return number


def require_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise TypeMismatch(path, "boolean", json_kind(value))
    return value


def require_object(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatch(path, "object", json_kind(value))
    return value


def require_array(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise TypeMismatch(path, "array", json_kind(value))
    return value


def require_enum(enum_cls: type[E], value: Any, path: str) -> E:
    text = require_string(value, path)
    try:
        return enum_cls(text)
    except ValueError:
        allowed = "|".join(member.value for member in enum_cls)
        raise TypeMismatch(path, f"one of {allowed}", repr(text)) from None


def optional(value: Any, path: str, parse: Callable[[Any, str], T]) -> T | None:
    if value is None:
        return None
    return parse(value, path)


def required(obj: Mapping[str, Any], name: str, path: str, parse: Callable[[Any, str], T]) -> T:
    value = obj.get(name)
    field_path = child(path, name)
    if value is None:
        raise MissingRequiredField(field_path)
    return parse(value, field_path)


def array_of(parse: Callable[[Any, str], T]) -> Callable[[Any, str], tuple[T, ...]]:
    def _parse(value: Any, path: str) -> tuple[T, ...]:
        return tuple(parse(entry, item(path, index)) for index, entry in enumerate(require_array(value, path)))

    return _parse


def parse_finish_reason(value: Any, path: str) -> FinishReason:
    return require_enum(FinishReason, value, path)


def parse_service_tier(value: Any, path: str) -> ServiceTier:
    return require_enum(ServiceTier, value, path)


def parse_function_call(value: Any, path: str) -> FunctionCall:
    obj = require_object(value, path)
    return FunctionCall(
        name=required(obj, "name", path, require_string),
        arguments=required(obj, "arguments", path, require_string),
    )


def parse_tool_call(value: Any, path: str) -> ToolCall:
    obj = require_object(value, path)
    return ToolCall(
        id=required(obj, "id", path, require_string),
        type=required(obj, "type", path, require_string),
        function=required(obj, "function", path, parse_function_call),
    )


def parse_message(value: Any, path: str) -> ResponseMessage:
    obj = require_object(value, path)
    return ResponseMessage(
        role=required(obj, "role", path, lambda raw, at: require_enum(Role, raw, at)),
        content=optional(obj.get("content"), child(path, "content"), require_string),
        refusal=optional(obj.get("refusal"), child(path, "refusal"), require_string),
        tool_calls=optional(obj.get("tool_calls"), child(path, "tool_calls"), array_of(parse_tool_call)),
        function_call=optional(obj.get("function_call"), child(path, "function_call"), parse_function_call),
    )


def _parse_bytes(value: Any, path: str) -> tuple[int, ...]:
    return array_of(require_int)(value, path)


def parse_top_logprob(value: Any, path: str) -> TopLogprob:
    obj = require_object(value, path)
    return TopLogprob(
        token=required(obj, "token", path, require_string),
        logprob=required(obj, "logprob", path, require_number),
        bytes=optional(obj.get("bytes"), child(path, "bytes"), _parse_bytes),
    )


def parse_token_logprob(value: Any, path: str) -> TokenLogprob:
    obj = require_object(value, path)
    return TokenLogprob(
        token=required(obj, "token", path, require_string),
        logprob=required(obj, "logprob", path, require_number),
        bytes=optional(obj.get("bytes"), child(path, "bytes"), _parse_bytes),
        top_logprobs=required(obj, "top_logprobs", path, array_of(parse_top_logprob)),
    )


def parse_logprobs(value: Any, path: str) -> ChoiceLogprobs:
    obj = require_object(value, path)
    return ChoiceLogprobs(
        content=optional(obj.get("content"), child(path, "content"), array_of(parse_token_logprob)),
        refusal=optional(obj.get("refusal"), child(path, "refusal"), array_of(parse_token_logprob)),
    )


def parse_usage(value: Any, path: str) -> CompletionUsage:
    obj = require_object(value, path)
    return CompletionUsage(
        prompt_tokens=required(obj, "prompt_tokens", path, require_int),
        completion_tokens=required(obj, "completion_tokens", path, require_int),
        total_tokens=required(obj, "total_tokens", path, require_int),
    )


def _parse_severity_result(value: Any, path: str) -> SeverityResult:
    obj = require_object(value, path)
    return SeverityResult(
        filtered=required(obj, "filtered", path, require_bool),
        severity=optional(obj.get("severity"), child(path, "severity"), lambda raw, at: require_enum(Severity, raw, at)),
    )


def _parse_detected_result(value: Any, path: str) -> DetectedResult:
    obj = require_object(value, path)
    return DetectedResult(
        filtered=required(obj, "filtered", path, require_bool),
        detected=required(obj, "detected", path, require_bool),
    )


def _parse_citation(value: Any, path: str) -> Citation:
    obj = require_object(value, path)
    return Citation(
        url=required(obj, "URL", path, require_string),
        license=required(obj, "license", path, require_string),
    )


def _parse_detected_with_citation(value: Any, path: str) -> DetectedWithCitationResult:
    obj = require_object(value, path)
    return DetectedWithCitationResult(
        filtered=required(obj, "filtered", path, require_bool),
        detected=required(obj, "detected", path, require_bool),
        citation=optional(obj.get("citation"), child(path, "citation"), _parse_citation),
    )


_REPORT_PARSERS: dict[type, Callable[[Any, str], Any]] = {
    SeverityResult: _parse_severity_result,
    DetectedResult: _parse_detected_result,
    DetectedWithCitationResult: _parse_detected_with_citation,
}


def _resolve_filter_outcome(
    value: Any,
    path: str,
    categories: dict[str, type],
    results_cls: type[T],
) -> T | FilterError:
    """Pick the success or error variant of a filtering outcome by its shape.

    Success: the object is empty or names at least one known category and
    every known category parses. Error: ``code`` and ``message`` are strings.
    """
    obj = require_object(value, path)
    known = [name for name in obj if name in categories]
    success_failure: DecodeError | None = None
    if known or not obj:
        try:
            reports = {
                name: _REPORT_PARSERS[categories[name]](obj[name], child(path, name))
                for name in known
                if obj[name] is not None
            }
            return results_cls(**reports)
        except DecodeError as exc:
            success_failure = exc

    code = obj.get("code")
    message = obj.get("message")
    if isinstance(code, str) and isinstance(message, str):
        return FilterError(code=code, message=message)

    raise UnsupportedSchemaShape(path, tuple(obj)) from success_failure


def parse_choice_filter_outcome(value: Any, path: str) -> ChoiceFilterOutcome:
    return _resolve_filter_outcome(value, path, CHOICE_CATEGORIES, ChoiceFilterResults)


def parse_prompt_filter_outcome(value: Any, path: str) -> PromptFilterOutcome:
    return _resolve_filter_outcome(value, path, PROMPT_CATEGORIES, PromptFilterCategories)


def parse_prompt_filter_result(value: Any, path: str) -> PromptFilterResult:
    obj = require_object(value, path)
    return PromptFilterResult(
        prompt_index=required(obj, "prompt_index", path, require_int),
        content_filter_results=optional(
            obj.get("content_filter_results"),
            child(path, "content_filter_results"),
            parse_prompt_filter_outcome,
        ),
    )


parse_prompt_filter_results = array_of(parse_prompt_filter_result)
