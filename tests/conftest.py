from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _no_default_network_override(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests that exercise JPYCPAY_DEFAULT_NETWORK set it explicitly.
    monkeypatch.delenv("JPYCPAY_DEFAULT_NETWORK", raising=False)
