from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch) -> None:
    """Keep settings reads and writes inside the test's temporary directory."""

    monkeypatch.setenv("LIUYAO_HOME", str(tmp_path / "liuyao-home"))
    monkeypatch.delenv("LIUYAO_LOG_LEVEL", raising=False)
