import pytest

from assistkit.runs import Pagination
from assistkit.vector_stores import (
    VectorStore,
    VectorStoreDeleteResponse,
    VectorStoreExpires,
    VectorStoreFileBatchRequest,
    VectorStoreFileCount,
    VectorStoreFileRequest,
    VectorStoreRequest,
    VectorStoresAPI,
    VectorStoresList,
)

VECTOR_STORE_ID = "vs_abc123"
VECTOR_STORE_NAME = "TestStore"
FILE_ID = "file-abc123"
BATCH_ID = "vsfb_abc123"
PAGINATION = Pagination(limit=20, order="desc", after="vs_abc122", before="vs_abc123")
QUERY = "?after=vs_abc122&before=vs_abc123&limit=20&order=desc"


class FakeServer:
    """Answers requests like the mocked server of the original tests."""

    def __init__(self):
        self.calls = []

    def __call__(self, method, path, body):
        self.calls.append((method, path, body))
        route = path.split("?", 1)[0]
        store = f"/vector_stores/{VECTOR_STORE_ID}"
        batch = f"{store}/file_batches/{BATCH_ID}"
        if route == "/vector_stores":
            if method == "POST":
                return {
                    "id": VECTOR_STORE_ID,
                    "object": "vector_store",
                    "created_at": 1234567890,
                    "name": body.get("name", ""),
                    "file_counts": {"in_progress": 0, "completed": 0, "failed": 0,
                                    "cancelled": 0, "total": 0},
                }
            return {
                "data": [{"id": VECTOR_STORE_ID, "object": "vector_store",
                          "created_at": 1234567890, "name": VECTOR_STORE_NAME}],
                "last_id": VECTOR_STORE_ID,
                "first_id": VECTOR_STORE_ID,
                "has_more": False,
            }
        if route == store:
            if method == "DELETE":
                return {"id": "vectorstore_abc123", "object": "vector_store.deleted",
                        "deleted": True}
            name = body.get("name", "") if method == "POST" else VECTOR_STORE_NAME
            return {"id": VECTOR_STORE_ID, "object": "vector_store",
                    "created_at": 1234567890, "name": name}
        if route == f"{store}/files":
            if method == "POST":
                return {"id": body["file_id"], "object": "vector_store.file",
                        "created_at": 1234567890, "vector_store_id": VECTOR_STORE_ID}
            return {"data": [{"id": FILE_ID, "object": "vector_store.file",
                              "created_at": 1234567890,
                              "vector_store_id": VECTOR_STORE_ID}]}
        if route == f"{store}/files/{FILE_ID}":
            if method == "DELETE":
                return "not json at all"
            return {"id": FILE_ID, "object": "vector_store.file", "created_at": 1234567890,
                    "vector_store_id": VECTOR_STORE_ID, "status": "completed"}
        if route == f"{store}/file_batches":
            return {"id": BATCH_ID, "object": "vector_store.file_batch",
                    "created_at": 1234567890, "vector_store_id": VECTOR_STORE_ID,
                    "status": "completed",
                    "file_counts": {"completed": len(body["file_ids"])}}
        if route == batch:
            return {"id": BATCH_ID, "object": "vector_store.file_batch",
                    "created_at": 1234567890, "vector_store_id": VECTOR_STORE_ID,
                    "status": "completed", "file_counts": {"completed": 1}}
        if route == f"{batch}/cancel":
            return {"id": BATCH_ID, "object": "vector_store.file_batch",
                    "created_at": 1234567890, "vector_store_id": VECTOR_STORE_ID,
                    "status": "cancelling", "file_counts": {"completed": 1}}
        if route == f"{batch}/files":
            return {"data": [{"id": FILE_ID, "object": "vector_store.file",
                              "created_at": 1234567890,
                              "vector_store_id": VECTOR_STORE_ID}]}
        raise LookupError(f"no handler for {method} {path}")


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def api(server):
    return VectorStoresAPI(server)


def test_create_vector_store(api, server):
    store = api.create(VectorStoreRequest(name=VECTOR_STORE_NAME))
    assert store.id == VECTOR_STORE_ID
    assert store.name == VECTOR_STORE_NAME
    assert store.file_counts == VectorStoreFileCount()
    assert server.calls[-1] == ("POST", "/vector_stores", {"name": VECTOR_STORE_NAME})


def test_retrieve_vector_store(api, server):
    store = api.retrieve(VECTOR_STORE_ID)
    assert store.object == "vector_store"
    assert store.created_at == 1234567890
    assert store.expires_after is None
    assert server.calls[-1] == ("GET", f"/vector_stores/{VECTOR_STORE_ID}", None)


def test_delete_vector_store(api, server):
    result = api.delete(VECTOR_STORE_ID)
    assert result == VectorStoreDeleteResponse(
        id="vectorstore_abc123", object="vector_store.deleted", deleted=True
    )
    assert server.calls[-1][0] == "DELETE"


def test_list_vector_stores(api, server):
    result = api.list(PAGINATION)
    assert server.calls[-1] == ("GET", f"/vector_stores{QUERY}", None)
    assert result.first_id == VECTOR_STORE_ID
    assert result.last_id == VECTOR_STORE_ID
    assert [store.name for store in result.vector_stores] == [VECTOR_STORE_NAME]


def test_list_vector_stores_without_pagination(api, server):
    result = api.list()
    assert [store.id for store in result.vector_stores] == [VECTOR_STORE_ID]
    assert result.has_more is False
    assert server.calls[-1][1] == "/vector_stores"


def test_create_vector_store_file(api, server):
    result = api.create_file(VECTOR_STORE_ID, VectorStoreFileRequest(file_id=FILE_ID))
    assert result.id == FILE_ID
    assert result.vector_store_id == VECTOR_STORE_ID
    assert server.calls[-1] == (
        "POST", f"/vector_stores/{VECTOR_STORE_ID}/files", {"file_id": FILE_ID}
    )


def test_list_vector_store_files(api, server):
    result = api.list_files(VECTOR_STORE_ID, PAGINATION)
    assert server.calls[-1][1] == f"/vector_stores/{VECTOR_STORE_ID}/files{QUERY}"
    assert [item.id for item in result.vector_store_files] == [FILE_ID]


def test_retrieve_vector_store_file(api, server):
    result = api.retrieve_file(VECTOR_STORE_ID, FILE_ID)
    assert result.status == "completed"
    assert server.calls[-1][1] == f"/vector_stores/{VECTOR_STORE_ID}/files/{FILE_ID}"


def test_delete_vector_store_file_ignores_body(api, server):
    assert api.delete_file(VECTOR_STORE_ID, FILE_ID) is None
    assert server.calls[-1] == (
        "DELETE", f"/vector_stores/{VECTOR_STORE_ID}/files/{FILE_ID}", None
    )


def test_modify_vector_store(api, server):
    result = api.modify(VECTOR_STORE_ID, VectorStoreRequest(name=VECTOR_STORE_NAME))
    assert result.name == VECTOR_STORE_NAME
    assert server.calls[-1][:2] == ("POST", f"/vector_stores/{VECTOR_STORE_ID}")


def test_create_file_batch(api, server):
    result = api.create_file_batch(
        VECTOR_STORE_ID, VectorStoreFileBatchRequest(file_ids=[FILE_ID])
    )
    assert result.id == BATCH_ID
    assert result.file_counts.completed == 1
    assert server.calls[-1][2] == {"file_ids": [FILE_ID]}


def test_retrieve_file_batch(api, server):
    result = api.retrieve_file_batch(VECTOR_STORE_ID, BATCH_ID)
    assert result.status == "completed"
    assert server.calls[-1][1] == f"/vector_stores/{VECTOR_STORE_ID}/file_batches/{BATCH_ID}"


def test_list_files_in_batch(api, server):
    result = api.list_files_in_batch(VECTOR_STORE_ID, BATCH_ID, PAGINATION)
    assert server.calls[-1][1] == (
        f"/vector_stores/{VECTOR_STORE_ID}/file_batches/{BATCH_ID}/files{QUERY}"
    )
    assert len(result.vector_store_files) == 1


def test_cancel_file_batch(api, server):
    result = api.cancel_file_batch(VECTOR_STORE_ID, BATCH_ID)
    assert result.status == "cancelling"
    assert server.calls[-1] == (
        "POST", f"/vector_stores/{VECTOR_STORE_ID}/file_batches/{BATCH_ID}/cancel", None
    )


def test_request_omits_empty_fields():
    assert VectorStoreRequest().to_dict() == {}
    full = VectorStoreRequest(
        name="n",
        file_ids=["a"],
        expires_after=VectorStoreExpires(anchor="last_active_at", days=7),
        metadata={"k": "v"},
    )
    assert full.to_dict() == {
        "name": "n",
        "file_ids": ["a"],
        "expires_after": {"anchor": "last_active_at", "days": 7},
        "metadata": {"k": "v"},
    }


def test_vector_store_parses_expiry():
    store = VectorStore.from_dict(
        {"id": "x", "expires_after": {"anchor": "last_active_at", "days": 3},
         "expires_at": 99}
    )
    assert store.expires_after == VectorStoreExpires(anchor="last_active_at", days=3)
    assert store.expires_at == 99


def test_list_missing_ids_are_none():
    result = VectorStoresList.from_dict({"data": []})
    assert result.first_id is None
    assert result.last_id is None
    assert result.vector_stores == []


def test_file_count_round_trip():
    counts = VectorStoreFileCount(in_progress=1, completed=2, failed=3, cancelled=4, total=10)
    assert VectorStoreFileCount.from_dict(counts.to_dict()) == counts


def test_unknown_path_raises(server):
    with pytest.raises(LookupError):
        VectorStoresAPI(server).retrieve("other")