from __future__ import annotations

import pytest

from pitchside.config import APISettings


@pytest.fixture
def settings(tmp_path) -> APISettings:
    return APISettings(
        besoccer_base_url="https://besoccer.test/v1",
        besoccer_token="token",
        enable_mocks=True,
        max_tool_rounds=6,
        cache_dir=str(tmp_path),
        cache_ttl=None,
        http_timeout=5,
    )
