"""Decode Azure-augmented chat-completion responses into merged records."""

from azchat.config import AzureConfig, DecoderOptions
from azchat.decoder import decode, decode_streaming, decode_value_first
from azchat.encoder import dumps, encode
from azchat.errors import (
    CardinalityMismatch,
    ChoiceIndexMismatch,
    DecodeError,
    DuplicateField,
    MalformedJson,
    MissingRequiredField,
    TypeMismatch,
    UnsupportedSchemaShape,
)
from azchat.types.merged import ExtensionBundle, ExtensionChoice, MergedChoice, MergedResponse
from azchat.zipper import merge, zip_choices

__all__ = [
    "AzureConfig",
    "CardinalityMismatch",
    "ChoiceIndexMismatch",
    "DecodeError",
    "DecoderOptions",
    "DuplicateField",
    "ExtensionBundle",
    "ExtensionChoice",
    "MalformedJson",
    "MergedChoice",
    "MergedResponse",
    "MissingRequiredField",
    "TypeMismatch",
    "UnsupportedSchemaShape",
    "decode",
    "decode_streaming",
    "decode_value_first",
    "dumps",
    "encode",
    "merge",
    "zip_choices",
]
