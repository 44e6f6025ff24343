"""Vector stores, their files and file batches: types and calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from assistkit.runs import Pagination

__all__ = [
    "VectorStore",
    "VectorStoreDeleteResponse",
    "VectorStoreExpires",
    "VectorStoreFile",
    "VectorStoreFileBatch",
    "VectorStoreFileBatchRequest",
    "VectorStoreFileCount",
    "VectorStoreFileRequest",
    "VectorStoreFilesList",
    "VectorStoreRequest",
    "VectorStoresAPI",
    "VectorStoresList",
]

VECTOR_STORES_PATH = "/vector_stores"
FILES_PATH = "/files"
FILE_BATCHES_PATH = "/file_batches"

Send = Callable[[str, str, Any], Any]


@dataclass
class VectorStoreFileCount:
    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "in_progress": self.in_progress,
            "completed": self.completed,
            "failed": self.failed,
            "cancelled": self.cancelled,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> VectorStoreFileCount:
        data = data or {}
        return cls(
            in_progress=data.get("in_progress", 0),
            completed=data.get("completed", 0),
            failed=data.get("failed", 0),
            cancelled=data.get("cancelled", 0),
            total=data.get("total", 0),
        )


@dataclass
class VectorStoreExpires:
    anchor: str = ""
    days: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"anchor": self.anchor, "days": self.days}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> VectorStoreExpires | None:
        if data is None:
            return None
        return cls(anchor=data.get("anchor", ""), days=data.get("days", 0))


@dataclass
class VectorStore:
    id: str = ""
    object: str = ""
    created_at: int = 0
    name: str = ""
    usage_bytes: int = 0
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    status: str = ""
    expires_after: VectorStoreExpires | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStore:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            created_at=data.get("created_at", 0),
            name=data.get("name", ""),
            usage_bytes=data.get("usage_bytes", 0),
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts")),
            status=data.get("status", ""),
            expires_after=VectorStoreExpires.from_dict(data.get("expires_after")),
            expires_at=data.get("expires_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class VectorStoreRequest:
    """Parameters to create or modify a vector store; unset fields are left out."""

    name: str = ""
    file_ids: list[str] = field(default_factory=list)
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.expires_after is not None:
            out["expires_after"] = self.expires_after.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class VectorStoresList:
    vector_stores: list[VectorStore] = field(default_factory=list)
    last_id: str | None = None
    first_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoresList:
        return cls(
            vector_stores=[VectorStore.from_dict(item) for item in data.get("data") or []],
            last_id=data.get("last_id"),
            first_id=data.get("first_id"),
            has_more=bool(data.get("has_more", False)),
        )


@dataclass
class VectorStoreDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreDeleteResponse:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            deleted=bool(data.get("deleted", False)),
        )


@dataclass
class VectorStoreFile:
    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFile:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            created_at=data.get("created_at", 0),
            vector_store_id=data.get("vector_store_id", ""),
            usage_bytes=data.get("usage_bytes", 0),
            status=data.get("status", ""),
        )


@dataclass
class VectorStoreFileRequest:
    file_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id}


@dataclass
class VectorStoreFilesList:
    vector_store_files: list[VectorStoreFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFilesList:
        return cls(
            vector_store_files=[
                VectorStoreFile.from_dict(item) for item in data.get("data") or []
            ]
        )


@dataclass
class VectorStoreFileBatch:
    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    status: str = ""
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VectorStoreFileBatch:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            created_at=data.get("created_at", 0),
            vector_store_id=data.get("vector_store_id", ""),
            status=data.get("status", ""),
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts")),
        )


@dataclass
class VectorStoreFileBatchRequest:
    file_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_ids": list(self.file_ids)}


def _store_path(vector_store_id: str) -> str:
    return f"{VECTOR_STORES_PATH}/{vector_store_id}"


def _query(pagination: Pagination | None) -> str:
    return (pagination or Pagination()).to_query()


class VectorStoresAPI:
    """Vector store calls; ``send(method, path, body)`` performs a request and returns its JSON."""

    def __init__(self, send: Send) -> None:
        self._send = send

    def create(self, request: VectorStoreRequest) -> VectorStore:
        return VectorStore.from_dict(
            self._send("POST", VECTOR_STORES_PATH, request.to_dict())
        )

    def retrieve(self, vector_store_id: str) -> VectorStore:
        return VectorStore.from_dict(self._send("GET", _store_path(vector_store_id), None))

    def modify(self, vector_store_id: str, request: VectorStoreRequest) -> VectorStore:
        return VectorStore.from_dict(
            self._send("POST", _store_path(vector_store_id), request.to_dict())
        )

    def delete(self, vector_store_id: str) -> VectorStoreDeleteResponse:
        return VectorStoreDeleteResponse.from_dict(
            self._send("DELETE", _store_path(vector_store_id), None)
        )

    def list(self, pagination: Pagination | None = None) -> VectorStoresList:
        path = f"{VECTOR_STORES_PATH}{_query(pagination)}"
        return VectorStoresList.from_dict(self._send("GET", path, None))

    def create_file(
        self, vector_store_id: str, request: VectorStoreFileRequest
    ) -> VectorStoreFile:
        path = f"{_store_path(vector_store_id)}{FILES_PATH}"
        return VectorStoreFile.from_dict(self._send("POST", path, request.to_dict()))

    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        path = f"{_store_path(vector_store_id)}{FILES_PATH}/{file_id}"
        return VectorStoreFile.from_dict(self._send("GET", path, None))

    def delete_file(self, vector_store_id: str, file_id: str) -> None:
        """Delete a file from a vector store; the response body is not read."""
        path = f"{_store_path(vector_store_id)}{FILES_PATH}/{file_id}"
        self._send("DELETE", path, None)

    def list_files(
        self, vector_store_id: str, pagination: Pagination | None = None
    ) -> VectorStoreFilesList:
        path = f"{_store_path(vector_store_id)}{FILES_PATH}{_query(pagination)}"
        return VectorStoreFilesList.from_dict(self._send("GET", path, None))

    def create_file_batch(
        self, vector_store_id: str, request: VectorStoreFileBatchRequest
    ) -> VectorStoreFileBatch:
        path = f"{_store_path(vector_store_id)}{FILE_BATCHES_PATH}"
        return VectorStoreFileBatch.from_dict(self._send("POST", path, request.to_dict()))

    def retrieve_file_batch(self, vector_store_id: str, batch_id: str) -> VectorStoreFileBatch:
        path = f"{_store_path(vector_store_id)}{FILE_BATCHES_PATH}/{batch_id}"
        return VectorStoreFileBatch.from_dict(self._send("GET", path, None))

    def cancel_file_batch(self, vector_store_id: str, batch_id: str) -> VectorStoreFileBatch:
        path = f"{_store_path(vector_store_id)}{FILE_BATCHES_PATH}/{batch_id}/cancel"
        return VectorStoreFileBatch.from_dict(self._send("POST", path, None))

    def list_files_in_batch(
        self,
        vector_store_id: str,
        batch_id: str,
        pagination: Pagination | None = None,
    ) -> VectorStoreFilesList:
        path = (
            f"{_store_path(vector_store_id)}{FILE_BATCHES_PATH}/{batch_id}"
            f"{FILES_PATH}{_query(pagination)}"
        )
        return VectorStoreFilesList.from_dict(self._send("GET", path, None))