"""Threads of the assistants API: request and response types and calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

__all__ = [
    "ChunkingStrategy",
    "ChunkingStrategyType",
    "ModifyThreadRequest",
    "StaticChunkingStrategy",
    "Thread",
    "ThreadAttachment",
    "ThreadDeleteResponse",
    "ThreadMessage",
    "ThreadMessageRole",
    "ThreadRequest",
    "ThreadsAPI",
    "ToolResources",
    "ToolResourcesRequest",
    "VectorStoreToolResources",
]

THREADS_PATH = "/threads"

Send = Callable[[str, str, Any], Mapping[str, Any]]


def _text(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class ThreadMessageRole(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


class ChunkingStrategyType(str, Enum):
    AUTO = "auto"
    STATIC = "static"


@dataclass
class StaticChunkingStrategy:
    max_chunk_size_tokens: int
    chunk_overlap_tokens: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_chunk_size_tokens": self.max_chunk_size_tokens,
            "chunk_overlap_tokens": self.chunk_overlap_tokens,
        }


@dataclass
class ChunkingStrategy:
    type: ChunkingStrategyType | str
    static: StaticChunkingStrategy | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": _text(self.type)}
        if self.static is not None:
            out["static"] = self.static.to_dict()
        return out


@dataclass
class VectorStoreToolResources:
    file_ids: list[str] = field(default_factory=list)
    chunking_strategy: ChunkingStrategy | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.chunking_strategy is not None:
            out["chunking_strategy"] = self.chunking_strategy.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


def _ids_section(key: str, ids: list[str] | None) -> dict[str, Any]:
    return {key: list(ids)} if ids else {}


@dataclass
class ToolResources:
    """Resources attached to a thread; None means the tool section is absent."""

    code_interpreter_file_ids: list[str] | None = None
    file_search_vector_store_ids: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            out["code_interpreter"] = _ids_section("file_ids", self.code_interpreter_file_ids)
        if self.file_search_vector_store_ids is not None:
            out["file_search"] = _ids_section(
                "vector_store_ids", self.file_search_vector_store_ids
            )
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ToolResources:
        data = data or {}
        code = data.get("code_interpreter")
        search = data.get("file_search")
        return cls(
            code_interpreter_file_ids=(
                list(code.get("file_ids") or []) if code is not None else None
            ),
            file_search_vector_store_ids=(
                list(search.get("vector_store_ids") or []) if search is not None else None
            ),
        )


@dataclass
class ToolResourcesRequest:
    """Resources to create with a thread; None means the section is absent."""

    code_interpreter_file_ids: list[str] | None = None
    file_search_vector_store_ids: list[str] | None = None
    file_search_vector_stores: list[VectorStoreToolResources] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            out["code_interpreter"] = _ids_section("file_ids", self.code_interpreter_file_ids)
        if (
            self.file_search_vector_store_ids is not None
            or self.file_search_vector_stores is not None
        ):
            search = _ids_section("vector_store_ids", self.file_search_vector_store_ids)
            if self.file_search_vector_stores:
                search["vector_stores"] = [
                    store.to_dict() for store in self.file_search_vector_stores
                ]
            out["file_search"] = search
        return out


@dataclass
class ThreadAttachment:
    file_id: str
    tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_id": self.file_id,
            "tools": [{"type": _text(tool)} for tool in self.tools],
        }


@dataclass
class ThreadMessage:
    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] = field(default_factory=list)
    attachments: list[ThreadAttachment] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _text(self.role), "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.attachments:
            out["attachments"] = [item.to_dict() for item in self.attachments]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class ThreadRequest:
    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResourcesRequest | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.messages:
            out["messages"] = [message.to_dict() for message in self.messages]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class ModifyThreadRequest:
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "metadata": dict(self.metadata) if self.metadata is not None else None
        }
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class Thread:
    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources = field(default_factory=ToolResources)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Thread:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            created_at=data.get("created_at", 0),
            metadata=data.get("metadata"),
            tool_resources=ToolResources.from_dict(data.get("tool_resources")),
        )


@dataclass
class ThreadDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThreadDeleteResponse:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            deleted=bool(data.get("deleted", False)),
        )


class ThreadsAPI:
    """Thread calls; ``send(method, path, body)`` performs a request and returns its JSON."""

    def __init__(self, send: Send) -> None:
        self._send = send

    def create(self, request: ThreadRequest) -> Thread:
        return Thread.from_dict(self._send("POST", THREADS_PATH, request.to_dict()))

    def retrieve(self, thread_id: str) -> Thread:
        return Thread.from_dict(self._send("GET", f"{THREADS_PATH}/{thread_id}", None))

    def modify(self, thread_id: str, request: ModifyThreadRequest) -> Thread:
        return Thread.from_dict(
            self._send("POST", f"{THREADS_PATH}/{thread_id}", request.to_dict())
        )

    def delete(self, thread_id: str) -> ThreadDeleteResponse:
        return ThreadDeleteResponse.from_dict(
            self._send("DELETE", f"{THREADS_PATH}/{thread_id}", None)
        )