from __future__ import annotations

import pytest

from azchat.config import DecoderOptions


@pytest.fixture(params=["value", "streaming"])
def options(request: pytest.FixtureRequest) -> DecoderOptions:
    return DecoderOptions(strategy=request.param)


@pytest.fixture(params=["value", "streaming"])
def preserving_options(request: pytest.FixtureRequest) -> DecoderOptions:
    return DecoderOptions(strategy=request.param, unknown_fields="preserve")
