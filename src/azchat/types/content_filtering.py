"""Content filtering annotations added by Azure deployments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class Severity(str, Enum):
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class SeverityResult:
    filtered: bool
    severity: Severity | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"filtered": self.filtered}
        if self.severity is not None:
            data["severity"] = self.severity.value
        return data


@dataclass(frozen=True)
class DetectedResult:
    filtered: bool
    detected: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "filtered": self.filtered,
            "detected": self.detected,
        }


@dataclass(frozen=True)
class Citation:
    url: str
    license: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "URL": self.url,
            "license": self.license,
        }


@dataclass(frozen=True)
class DetectedWithCitationResult:
    filtered: bool
    detected: bool
    citation: Citation | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "filtered": self.filtered,
            "detected": self.detected,
        }
        if self.citation is not None:
            data["citation"] = self.citation.to_dict()
        return data


@dataclass(frozen=True)
class ChoiceFilterResults:
    hate: SeverityResult | None = None
    self_harm: SeverityResult | None = None
    sexual: SeverityResult | None = None
    violence: SeverityResult | None = None
    profanity: DetectedResult | None = None
    protected_material_text: DetectedResult | None = None
    protected_material_code: DetectedWithCitationResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return _categories_to_dict(self, CHOICE_CATEGORIES)

    @property
    def filtered(self) -> bool:
        return _any_filtered(self, CHOICE_CATEGORIES)


@dataclass(frozen=True)
class PromptFilterCategories:
    hate: SeverityResult | None = None
    self_harm: SeverityResult | None = None
    sexual: SeverityResult | None = None
    violence: SeverityResult | None = None
    profanity: DetectedResult | None = None
    jailbreak: DetectedResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return _categories_to_dict(self, PROMPT_CATEGORIES)

    @property
    def filtered(self) -> bool:
        return _any_filtered(self, PROMPT_CATEGORIES)


@dataclass(frozen=True)
class FilterError:
    """Reported in place of category results when the filtering backend failed."""

    code: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
        }


# Wire format carries no tag; the decoder tells the variants apart by shape.
ChoiceFilterOutcome = Union[ChoiceFilterResults, FilterError]
PromptFilterOutcome = Union[PromptFilterCategories, FilterError]


@dataclass(frozen=True)
class PromptFilterResult:
    prompt_index: int
    content_filter_results: PromptFilterOutcome | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"prompt_index": self.prompt_index}
        if self.content_filter_results is not None:
            data["content_filter_results"] = self.content_filter_results.to_dict()
        return data


SEVERITY_CATEGORIES = ("hate", "self_harm", "sexual", "violence")

# category name -> report type, in wire order
CHOICE_CATEGORIES: dict[str, type] = {
    "hate": SeverityResult,
    "self_harm": SeverityResult,
    "sexual": SeverityResult,
    "violence": SeverityResult,
    "profanity": DetectedResult,
    "protected_material_text": DetectedResult,
    "protected_material_code": DetectedWithCitationResult,
}

PROMPT_CATEGORIES: dict[str, type] = {
    "hate": SeverityResult,
    "self_harm": SeverityResult,
    "sexual": SeverityResult,
    "violence": SeverityResult,
    "profanity": DetectedResult,
    "jailbreak": DetectedResult,
}


def _categories_to_dict(results: Any, categories: dict[str, type]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for name in categories:
        value = getattr(results, name)
        if value is not None:
            data[name] = value.to_dict()
    return data


def _any_filtered(results: Any, categories: dict[str, type]) -> bool:
    return any(getattr(results, name) is not None and getattr(results, name).filtered for name in categories)
