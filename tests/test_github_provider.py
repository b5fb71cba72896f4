import asyncio
import json

import httpx
import pytest

from repo_exporter.domain.entities import EntryKind
from repo_exporter.domain.exceptions import NotFoundError, RateLimitedError, TransportError
from repo_exporter.domain.value_objects import ResolvedLocation
from repo_exporter.infrastructure.github_provider import GitHubProvider

pytestmark = pytest.mark.asyncio

API = "https://api.github.com/repos/acme/widgets"


def _json(data, status=200, headers=None):
    return httpx.Response(status, content=json.dumps(data), headers=headers)


async def test_list_references_strips_ref_prefixes(mock_client):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/git/matching-refs/heads/"):
            return _json([{"ref": "refs/heads/main"}, {"ref": "refs/heads/feature/x"}])
        if request.url.path.endswith("/git/matching-refs/tags/"):
            return _json([{"ref": "refs/tags/v1.0"}])
        return httpx.Response(500)

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    listing = await provider.list_references("abc")

    assert listing.branches == ["main", "feature/x"]
    assert listing.tags == ["v1.0"]
    assert len(requests) == 2
    for request in requests:
        assert request.headers["Authorization"] == "token abc"
        assert request.headers["Accept"] == "application/vnd.github+json"


async def test_list_references_fails_when_either_call_fails(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/tags/"):
            return httpx.Response(404)
        return _json([{"ref": "refs/heads/main"}])

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    with pytest.raises(NotFoundError):
        await provider.list_references(None)


async def test_list_tree_resolves_handle_then_fetches_recursively(mock_client):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/repos/acme/widgets/contents/src":
            return _json({"type": "dir", "sha": "tree-sha"})
        if request.url.path == "/repos/acme/widgets/git/trees/tree-sha":
            return _json(
                {
                    "sha": "tree-sha",
                    "truncated": False,
                    "tree": [
                        {"path": "pkg", "type": "tree", "sha": "t1", "url": f"{API}/git/trees/t1"},
                        {"path": "pkg/app.py", "type": "blob", "sha": "b1", "size": 12, "url": f"{API}/git/blobs/b1"},
                    ],
                }
            )
        return httpx.Response(500)

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    entries = await provider.list_tree(ResolvedLocation(ref="main", subpath="src"), None)

    contents_req, tree_req = requests
    assert contents_req.url.params["ref"] == "main"
    assert contents_req.headers["Accept"] == "application/vnd.github.object+json"
    assert "Authorization" not in contents_req.headers
    assert tree_req.url.params["recursive"] == "1"

    assert [e.path for e in entries] == ["src/pkg", "src/pkg/app.py"]
    assert [e.kind for e in entries] == [EntryKind.TREE, EntryKind.BLOB]
    assert entries[1].content_url == f"{API}/git/blobs/b1"
    assert entries[1].handle == "b1"
    assert entries[1].size == 12


async def test_root_tree_without_ref(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/repos/acme/widgets/contents/":
            assert "ref" not in request.url.params
            return _json({"type": "dir", "sha": "root"})
        if request.url.path == "/repos/acme/widgets/git/trees/root":
            return _json({"tree": [{"path": "README.md", "type": "blob", "sha": "r"}]})
        return httpx.Response(500)

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    entries = await provider.list_tree(ResolvedLocation(), "tok")

    assert [e.path for e in entries] == ["README.md"]
    # Rows without a url fall back to the contents endpoint.
    assert entries[0].content_url == f"{API}/contents/README.md"


async def test_missing_path_is_not_found(mock_client):
    provider = GitHubProvider(mock_client(lambda r: httpx.Response(404)), "acme", "widgets")
    with pytest.raises(NotFoundError):
        await provider.list_tree(ResolvedLocation(ref="main", subpath="nope"), None)


async def test_exhausted_quota_is_rate_limited(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, headers={"X-RateLimit-Remaining": "0"})

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    with pytest.raises(RateLimitedError):
        await provider.list_tree(ResolvedLocation(), None)


async def test_network_failure_is_transport_error(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    with pytest.raises(TransportError) as excinfo:
        await provider.list_tree(ResolvedLocation(), None)
    assert excinfo.value.status_code is None


async def test_raw_content_url(mock_client):
    provider = GitHubProvider(mock_client(lambda r: httpx.Response(500)), "acme", "widgets")
    assert provider.raw_content_url("src/a b.py", "v1.0") == f"{API}/contents/src/a%20b.py?ref=v1.0"
    assert provider.raw_content_url("x.py", "") == f"{API}/contents/x.py"


async def test_branch_and_tag_listings_run_concurrently(mock_client):
    tags_requested = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/tags/"):
            tags_requested.set()
            return _json([{"ref": "refs/tags/v1"}])
        # Only returns once the tag listing is in flight too.
        await asyncio.wait_for(tags_requested.wait(), timeout=2.0)
        return _json([{"ref": "refs/heads/main"}])

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    listing = await provider.list_references(None)
    assert (listing.branches, listing.tags) == (["main"], ["v1"])


async def test_unknown_row_type_is_transport_error(mock_client):
    def handler(request: httpx.Request) -> httpx.Response:
        if "/contents/" in request.url.path:
            return _json({"sha": "root"})
        return _json({"tree": [{"path": "odd", "type": "weird", "sha": "x"}]})

    provider = GitHubProvider(mock_client(handler), "acme", "widgets")
    with pytest.raises(TransportError):
        await provider.list_tree(ResolvedLocation(), None)
