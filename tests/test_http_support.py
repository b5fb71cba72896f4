import httpx
import pytest

from repo_exporter.domain.entities import EntryKind
from repo_exporter.domain.exceptions import TransportError
from repo_exporter.infrastructure.http_support import build_http_client, entry_kind
from repo_exporter.infrastructure.raw_content_client import RawContentClient

OLD_BLOB = "https://api.github.com/repos/acme/old-name/git/blobs/b1"
NEW_BLOB = "https://api.github.com/repos/acme/new-name/git/blobs/b1"


@pytest.mark.asyncio
async def test_shared_client_follows_moved_repository():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if str(request.url) == OLD_BLOB:
            return httpx.Response(301, headers={"Location": NEW_BLOB})
        return httpx.Response(200, text="moved content")

    client = build_http_client(5.0, transport=httpx.MockTransport(handler))
    reader = RawContentClient(client)

    assert await reader.fetch_raw(OLD_BLOB, "tok") == "moved content"
    assert requested == [OLD_BLOB, NEW_BLOB]
    await client.aclose()


@pytest.mark.asyncio
async def test_redirect_to_other_host_drops_credentials():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.host, request.headers.get("Authorization")))
        if request.url.host == "api.github.com":
            return httpx.Response(302, headers={"Location": "https://elsewhere.example/x"})
        return httpx.Response(200, text="ok")

    client = build_http_client(5.0, transport=httpx.MockTransport(handler))
    await RawContentClient(client).fetch_raw(OLD_BLOB, "tok")

    assert seen == [("api.github.com", "token tok"), ("elsewhere.example", None)]
    await client.aclose()


@pytest.mark.parametrize(
    "value, kind",
    [("tree", EntryKind.TREE), ("blob", EntryKind.BLOB), ("commit", EntryKind.COMMIT), (None, EntryKind.BLOB)],
)
def test_entry_kind_known_types(value, kind):
    assert entry_kind(value, "x") is kind


def test_entry_kind_unknown_type_is_transport_error():
    with pytest.raises(TransportError) as excinfo:
        entry_kind("symlink", "docs/link")
    assert "symlink" in str(excinfo.value)
    assert "docs/link" in str(excinfo.value)
