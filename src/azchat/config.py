"""Decoder options and Azure endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

STRATEGIES = ("value", "streaming")
UNKNOWN_FIELD_POLICIES = ("ignore", "preserve")
DEFAULT_API_VERSION = "2024-06-01"


@dataclass(frozen=True)
class DecoderOptions:
    """How a response document is decoded.

    ``unknown_fields="ignore"`` drops keys the catalog does not know, so they
    never reach the encoder. ``"preserve"`` keeps response- and choice-level
    unknown keys verbatim in ``extras`` for lossless re-encoding.
    """

    strategy: str = "value"
    unknown_fields: str = "ignore"

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unsupported decoder strategy: {self.strategy}")
        if self.unknown_fields not in UNKNOWN_FIELD_POLICIES:
            raise ValueError(f"Unsupported unknown field policy: {self.unknown_fields}")

    @property
    def preserve_unknown(self) -> bool:
        return self.unknown_fields == "preserve"

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "unknown_fields": self.unknown_fields,
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DecoderOptions":
        env = os.environ if environ is None else environ
        return cls(
            strategy=env.get("AZCHAT_DECODER_STRATEGY", "value"),
            unknown_fields=env.get("AZCHAT_UNKNOWN_FIELDS", "ignore"),
        )


@dataclass(frozen=True)
class AzureConfig:
    endpoint: str
    deployment: str
    api_key: str
    api_version: str = DEFAULT_API_VERSION

    @property
    def chat_completions_path(self) -> str:
        return f"/openai/deployments/{self.deployment}/chat/completions"

    def to_dict(self) -> dict:
        return {
            "endpoint": self.endpoint,
            "deployment": self.deployment,
            "api_version": self.api_version,
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AzureConfig":
        env = os.environ if environ is None else environ
        endpoint = env.get("AZURE_OPENAI_ENDPOINT")
        if not endpoint:
            raise ValueError("AZURE_OPENAI_ENDPOINT is required for AzureConfig.")
        deployment = env.get("AZURE_OPENAI_DEPLOYMENT")
        if not deployment:
            raise ValueError("AZURE_OPENAI_DEPLOYMENT is required for AzureConfig.")
        api_key = env.get("AZURE_OPENAI_API_KEY")
        if not api_key:
            raise ValueError("AZURE_OPENAI_API_KEY is required for AzureConfig.")
        return cls(
            endpoint=endpoint.rstrip("/"),
            deployment=deployment,
            api_key=api_key,
            api_version=env.get("AZURE_OPENAI_API_VERSION", DEFAULT_API_VERSION),
        )
