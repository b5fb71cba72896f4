from __future__ import annotations

from typing import Callable

import httpx
import pytest

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def mock_client() -> Callable[[Handler], httpx.AsyncClient]:
    """
    Returns a factory building an AsyncClient whose requests are answered by
    the given handler. No test touches the real network.
    """

    def _build(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build
