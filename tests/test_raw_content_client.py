import httpx
import pytest

from repo_exporter.domain.exceptions import RateLimitedError
from repo_exporter.infrastructure.raw_content_client import RawContentClient

pytestmark = pytest.mark.asyncio

GITHUB_BLOB = "https://api.github.com/repos/acme/widgets/git/blobs/b1"
GITLAB_RAW = "https://gitlab.com/api/v4/projects/a%2Fb/repository/files/x.py/raw?ref=main"


async def test_github_url_gets_token_scheme_and_raw_accept(mock_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.headers)
        return httpx.Response(200, text="print('hi')\n")

    client = RawContentClient(mock_client(handler))
    assert await client.fetch_raw(GITHUB_BLOB, "abc") == "print('hi')\n"
    assert seen["authorization"] == "token abc"
    assert seen["accept"] == "application/vnd.github.v3.raw"


async def test_github_url_without_token_still_asks_for_raw(mock_client):
    client = RawContentClient(mock_client(lambda r: httpx.Response(200)))
    headers = client.headers_for(GITHUB_BLOB, None)
    assert headers["Accept"] == "application/vnd.github.v3.raw"
    assert "Authorization" not in headers


async def test_gitlab_url_gets_bearer_and_no_github_accept(mock_client):
    client = RawContentClient(mock_client(lambda r: httpx.Response(200)))
    headers = client.headers_for(GITLAB_RAW, "glpat")
    assert headers["Authorization"] == "Bearer glpat"
    assert "Accept" not in headers


async def test_failure_is_classified(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, headers={"x-ratelimit-remaining": "0"})

    client = RawContentClient(mock_client(handler))
    with pytest.raises(RateLimitedError):
        await client.fetch_raw(GITHUB_BLOB, None)
