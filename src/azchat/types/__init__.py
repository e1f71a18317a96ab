"""Value types for base, extension and merged chat-completion responses."""

from azchat.types.chat import (
    ChatChoice,
    ChatCompletionResponse,
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
from azchat.types.merged import ExtensionBundle, ExtensionChoice, MergedChoice, MergedResponse

__all__ = [
    "ChatChoice",
    "ChatCompletionResponse",
    "ChoiceFilterOutcome",
    "ChoiceFilterResults",
    "ChoiceLogprobs",
    "Citation",
    "CompletionUsage",
    "DetectedResult",
    "DetectedWithCitationResult",
    "ExtensionBundle",
    "ExtensionChoice",
    "FilterError",
    "FinishReason",
    "FunctionCall",
    "MergedChoice",
    "MergedResponse",
    "PromptFilterCategories",
    "PromptFilterOutcome",
    "PromptFilterResult",
    "ResponseMessage",
    "Role",
    "ServiceTier",
    "Severity",
    "SeverityResult",
    "TokenLogprob",
    "ToolCall",
    "TopLogprob",
]
