"""Decode chat-completion documents into merged base + extension records.

Two strategies share the same field routing and produce identical results:

* value-first: parse the whole document once into an ordered tree, then walk
  the response object and each choice object through the field catalog.
* streaming: walk the raw text key by key. Response and choice objects are
  never built as generic trees; only individual field values are decoded.

Both reject duplicate keys, apply the same null and unknown-field policies and
raise the same :class:`~azchat.errors.DecodeError` subclasses.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
import json
from json.decoder import scanstring
import logging
import re
from typing import Any, Callable, Iterator, Mapping, Union

from azchat import catalog
from azchat.catalog import FieldKind, Position
from azchat.config import DecoderOptions
from azchat.convert import (
    child,
    item,
    json_kind,
    optional,
    parse_choice_filter_outcome,
    parse_finish_reason,
    parse_logprobs,
    parse_message,
    parse_prompt_filter_results,
    parse_service_tier,
    parse_usage,
    require_array,
    require_int,
    require_object,
    require_string,
)
from azchat.errors import ChoiceIndexMismatch, DuplicateField, MalformedJson, MissingRequiredField, TypeMismatch
from azchat.types.chat import ChatChoice, ChatCompletionResponse
from azchat.types.merged import ExtensionBundle, ExtensionChoice, MergedResponse
from azchat.zipper import merge

logger = logging.getLogger(__name__)

Document = Union[str, bytes, bytearray, Mapping[str, Any]]

ROOT = "$"

_RESPONSE_PARSERS: Mapping[str, Callable[[Any, str], Any]] = {
    "id": require_string,
    "object": require_string,
    "created": require_int,
    "model": require_string,
    "service_tier": parse_service_tier,
    "system_fingerprint": require_string,
    "usage": parse_usage,
    "prompt_filter_results": parse_prompt_filter_results,
}

_CHOICE_PARSERS: Mapping[str, Callable[[Any, str], Any]] = {
    "index": require_int,
    "message": parse_message,
    "finish_reason": parse_finish_reason,
    "logprobs": parse_logprobs,
    "content_filter_results": parse_choice_filter_outcome,
}


def _unique_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise DuplicateField(key)
        obj[key] = value
    return obj


def _reject_constant(name: str) -> Any:
    raise MalformedJson(f"Invalid constant {name}")


_JSON = json.JSONDecoder(object_pairs_hook=_unique_pairs, parse_constant=_reject_constant)
_WHITESPACE = re.compile(r"[ \t\n\r]*")


class _Fields:
    """Classified fields of one JSON object at a known position."""

    def __init__(
        self,
        position: Position,
        path: str,
        parsers: Mapping[str, Callable[[Any, str], Any]],
        options: DecoderOptions,
    ) -> None:
        self.position = position
        self.path = path
        self.values: dict[str, Any] = {}
        self.extras: dict[str, Any] = {}
        self._parsers = parsers
        self._seen: set[str] = set()
        self._preserve = options.preserve_unknown

    def observe(self, name: str) -> FieldKind:
        if name in self._seen:
            raise DuplicateField(name)
        self._seen.add(name)
        return catalog.classify(self.position, name)

    def skip(self, name: str, value: Any) -> None:
        if self._preserve:
            # mapping input is owned by the caller
            try:
                self.extras[name] = copy.deepcopy(value)
            except RecursionError as exc:
                raise MalformedJson("Nesting too deep") from exc
        else:
            logger.debug("Ignoring unknown field %s", child(self.path, name))

    def put(self, name: str, value: Any) -> None:
        self.values[name] = value

    def put_value(self, name: str, raw: Any) -> None:
        # null and absent both leave the slot empty
        self.values[name] = optional(raw, child(self.path, name), self._parsers[name])

    def check_required(self) -> None:
        for name in catalog.required_fields(self.position):
            if self.values.get(name) is None:
                raise MissingRequiredField(child(self.path, name))


@dataclass
class _ChoiceParts:
    choice: ChatChoice
    extension: ExtensionChoice
    extras: dict[str, Any] = field(default_factory=dict)


def _finish_choice(fields: _Fields, position: int) -> _ChoiceParts:
    fields.check_required()
    values = fields.values
    if values["index"] != position:
        raise ChoiceIndexMismatch(position=position, index=values["index"])
    return _ChoiceParts(
        choice=ChatChoice(
            index=values["index"],
            message=values["message"],
            finish_reason=values.get("finish_reason"),
            logprobs=values.get("logprobs"),
        ),
        extension=ExtensionChoice(content_filter_results=values.get("content_filter_results")),
        extras=fields.extras,
    )


def _finish_response(fields: _Fields) -> MergedResponse:
    fields.check_required()
    values = fields.values
    parts: list[_ChoiceParts] = values["choices"]
    base = ChatCompletionResponse(
        id=values["id"],
        choices=tuple(part.choice for part in parts),
        created=values["created"],
        model=values["model"],
        object=values["object"],
        service_tier=values.get("service_tier"),
        system_fingerprint=values.get("system_fingerprint"),
        usage=values.get("usage"),
    )
    prompt_filter_results = values.get("prompt_filter_results")
    present = prompt_filter_results is not None or any(
        part.extension.content_filter_results is not None for part in parts
    )
    bundle = None
    if present:
        bundle = ExtensionBundle(
            choices=tuple(part.extension for part in parts),
            prompt_filter_results=prompt_filter_results,
        )
    return merge(base, bundle, extras=fields.extras, choice_extras=[part.extras for part in parts])


def _response_fields(options: DecoderOptions) -> _Fields:
    return _Fields(Position.RESPONSE, "", _RESPONSE_PARSERS, options)


def _choice_fields(position: int, options: DecoderOptions) -> _Fields:
    return _Fields(Position.CHOICE, item("choices", position), _CHOICE_PARSERS, options)


def _as_text(document: str | bytes | bytearray) -> str:
    if isinstance(document, str):
        return document
    if isinstance(document, (bytes, bytearray)):
        try:
            return bytes(document).decode(json.detect_encoding(document), "surrogatepass")
        except UnicodeDecodeError as exc:
            raise MalformedJson(f"Invalid {exc.encoding}: {exc.reason}", exc.start) from exc
    raise TypeError(f"Unsupported document type: {type(document).__name__}")


# Value-first strategy


def _parse_tree(document: str | bytes | bytearray) -> Any:
    text = _as_text(document)
    try:
        return _JSON.decode(text)
    except json.JSONDecodeError as exc:
        raise MalformedJson(exc.msg, exc.pos) from exc
    except RecursionError as exc:
        raise MalformedJson("Nesting too deep") from exc


def _walk_choice(value: Any, position: int, options: DecoderOptions) -> _ChoiceParts:
    fields = _choice_fields(position, options)
    obj = require_object(value, fields.path)
    for name, raw in obj.items():
        if fields.observe(name) is FieldKind.UNKNOWN:
            fields.skip(name, raw)
        else:
            fields.put_value(name, raw)
    return _finish_choice(fields, position)


def _walk_response(tree: Mapping[str, Any], options: DecoderOptions) -> MergedResponse:
    fields = _response_fields(options)
    for name, value in tree.items():
        kind = fields.observe(name)
        if kind is FieldKind.UNKNOWN:
            fields.skip(name, value)
        elif name == "choices":
            if value is None:
                fields.put(name, None)
                continue
            elements = require_array(value, name)
            fields.put(name, [_walk_choice(entry, position, options) for position, entry in enumerate(elements)])
        else:
            fields.put_value(name, value)
    return _finish_response(fields)


def decode_value_first(document: Document, options: DecoderOptions | None = None) -> MergedResponse:
    options = options or DecoderOptions()
    tree = document if isinstance(document, Mapping) else _parse_tree(document)
    if not isinstance(tree, Mapping):
        raise TypeMismatch(ROOT, "object", json_kind(tree))
    return _walk_response(tree, options)


# Streaming strategy


class _Scanner:
    """Cursor over JSON text that hands out object keys and array slots one at a time."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def peek(self) -> str:
        self._pos = _WHITESPACE.match(self._text, self._pos).end()
        return self._text[self._pos : self._pos + 1]

    def value(self) -> Any:
        self.peek()
        try:
            value, self._pos = _JSON.raw_decode(self._text, self._pos)
        except json.JSONDecodeError as exc:
            raise MalformedJson(exc.msg, exc.pos) from exc
        except RecursionError as exc:
            raise MalformedJson("Nesting too deep", self._pos) from exc
        return value

    def fields(self) -> Iterator[str]:
        """Yield each key of the object at the cursor.

        The caller must consume the key's value before advancing the iterator.
        """
        self._expect("{")
        if self.peek() == "}":
            self._pos += 1
            return
        while True:
            if self.peek() != '"':
                raise MalformedJson("Expecting property name enclosed in double quotes", self._pos)
            try:
                name, self._pos = scanstring(self._text, self._pos + 1)
            except json.JSONDecodeError as exc:
                raise MalformedJson(exc.msg, exc.pos) from exc
            self._expect(":")
            yield name
            if self._separator("}"):
                return

    def elements(self) -> Iterator[int]:
        self._expect("[")
        if self.peek() == "]":
            self._pos += 1
            return
        position = 0
        while True:
            yield position
            position += 1
            if self._separator("]"):
                return

    def finish(self) -> None:
        if self.peek():
            raise MalformedJson("Extra data", self._pos)

    def _expect(self, char: str) -> None:
        if self.peek() != char:
            raise MalformedJson(f"Expecting '{char}' delimiter", self._pos)
        self._pos += 1

    def _separator(self, closing: str) -> bool:
        char = self.peek()
        if char == closing:
            self._pos += 1
            return True
        if char == ",":
            self._pos += 1
            return False
        raise MalformedJson("Expecting ',' delimiter", self._pos)


def _stream_choices(scanner: _Scanner, options: DecoderOptions) -> list[_ChoiceParts] | None:
    if scanner.peek() != "[":
        value = scanner.value()
        if value is None:
            return None
        raise TypeMismatch("choices", "array", json_kind(value))
    parts: list[_ChoiceParts] = []
    for position in scanner.elements():
        fields = _choice_fields(position, options)
        if scanner.peek() != "{":
            raise TypeMismatch(fields.path, "object", json_kind(scanner.value()))
        for name in scanner.fields():
            if fields.observe(name) is FieldKind.UNKNOWN:
                fields.skip(name, scanner.value())
            else:
                fields.put_value(name, scanner.value())
        parts.append(_finish_choice(fields, position))
    return parts


def decode_streaming(document: str | bytes | bytearray, options: DecoderOptions | None = None) -> MergedResponse:
    options = options or DecoderOptions()
    scanner = _Scanner(_as_text(document))
    if scanner.peek() != "{":
        value = scanner.value()
        scanner.finish()
        raise TypeMismatch(ROOT, "object", json_kind(value))
    fields = _response_fields(options)
    for name in scanner.fields():
        kind = fields.observe(name)
        if kind is FieldKind.UNKNOWN:
            fields.skip(name, scanner.value())
        elif name == "choices":
            fields.put(name, _stream_choices(scanner, options))
        else:
            fields.put_value(name, scanner.value())
    scanner.finish()
    return _finish_response(fields)


def decode(document: Document, options: DecoderOptions | None = None) -> MergedResponse:
    """Decode one buffered response document into a :class:`MergedResponse`.

    Already-parsed mappings always take the value-first path.
    """
    options = options or DecoderOptions()
    if isinstance(document, Mapping):
        return decode_value_first(document, options)
    logger.debug("Decoding response document with %s strategy", options.strategy)
    if options.strategy == "streaming":
        return decode_streaming(document, options)
    return decode_value_first(document, options)
