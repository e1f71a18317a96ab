from __future__ import annotations

import copy
import json
from typing import Any

CONCRETE_DOCUMENT = (
    '{"id":"c1","object":"chat.completion","created":1700000000,"model":"m",'
    '"choices":[{"index":0,"message":{"role":"assistant","content":"hi"},'
    '"content_filter_results":{"hate":{"filtered":false,"severity":"safe"}}}]}'
)

_SAFE = {"filtered": False, "severity": "safe"}

AZURE_DOCUMENT: dict[str, Any] = {
    "id": "chatcmpl-9x",
    "object": "chat.completion",
    "created": 1717000000,
    "model": "gpt-4o-2024-05-13",
    "system_fingerprint": "fp_abc123",
    "prompt_filter_results": [
        {
            "prompt_index": 0,
            "content_filter_results": {
                "hate": _SAFE,
                "self_harm": _SAFE,
                "sexual": _SAFE,
                "violence": _SAFE,
                "jailbreak": {"filtered": False, "detected": False},
            },
        }
    ],
    "choices": [
        {
            "index": 0,
            "finish_reason": "stop",
            "message": {"role": "assistant", "content": "Paris is the capital of France."},
            "logprobs": {
                "content": [
                    {
                        "token": "Paris",
                        "logprob": -0.25,
                        "bytes": [80, 97, 114, 105, 115],
                        "top_logprobs": [{"token": "Paris", "logprob": -0.25, "bytes": None}],
                    }
                ],
                "refusal": None,
            },
            "content_filter_results": {
                "hate": _SAFE,
                "self_harm": _SAFE,
                "sexual": _SAFE,
                "violence": {"filtered": True, "severity": "medium"},
                "protected_material_text": {"filtered": False, "detected": False},
                "protected_material_code": {
                    "filtered": False,
                    "detected": True,
                    "citation": {"URL": "https://example.com/repo", "license": "MIT"},
                },
            },
        },
        {
            "index": 1,
            "finish_reason": "tool_calls",
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "lookup", "arguments": "{\"city\": \"Paris\"}"},
                    }
                ],
            },
            "content_filter_results": {
                "code": "content_filter_error",
                "message": "The contents are not filtered",
            },
        },
    ],
    "usage": {"prompt_tokens": 12, "completion_tokens": 9, "total_tokens": 21},
}


def plain_choice(index: int, content: str = "hi") -> dict[str, Any]:
    return {
        "index": index,
        "message": {"role": "assistant", "content": content},
        "finish_reason": "stop",
    }


def plain_document(choice_count: int = 1, **overrides: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "id": "c1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "m",
        "choices": [plain_choice(index) for index in range(choice_count)],
    }
    document.update(overrides)
    return document


def azure_document() -> dict[str, Any]:
    return copy.deepcopy(AZURE_DOCUMENT)


def to_text(document: dict[str, Any]) -> str:
    return json.dumps(document)
