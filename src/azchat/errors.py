"""Typed decode failures for merged chat-completion responses."""

from __future__ import annotations

from dataclasses import dataclass


class DecodeError(ValueError):
    """Base class for every failure raised while decoding a response document."""


@dataclass
class MalformedJson(DecodeError):
    message: str
    position: int | None = None

    def __str__(self) -> str:
        if self.position is None:
            return f"MalformedJson({self.message})"
        return f"MalformedJson({self.message}, position={self.position})"


@dataclass
class MissingRequiredField(DecodeError):
    field: str

    def __str__(self) -> str:
        return f"MissingRequiredField({self.field})"


@dataclass
class DuplicateField(DecodeError):
    field: str

    def __str__(self) -> str:
        return f"DuplicateField({self.field})"


@dataclass
class CardinalityMismatch(DecodeError):
    base_len: int
    extension_len: int

    def __str__(self) -> str:
        return f"CardinalityMismatch(base_len={self.base_len}, extension_len={self.extension_len})"


@dataclass
class TypeMismatch(DecodeError):
    field: str
    expected_kind: str
    observed_kind: str | None = None

    def __str__(self) -> str:
        observed = f", observed={self.observed_kind}" if self.observed_kind else ""
        return f"TypeMismatch({self.field}: expected {self.expected_kind}{observed})"


@dataclass
class UnsupportedSchemaShape(DecodeError):
    field: str
    keys: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"UnsupportedSchemaShape({self.field}, keys={list(self.keys)})"


@dataclass
class ChoiceIndexMismatch(DecodeError):
    position: int
    index: int

    def __str__(self) -> str:
        return f"ChoiceIndexMismatch(position={self.position}, index={self.index})"
