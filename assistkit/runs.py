"""Runs and run steps of the assistants API: types and calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import urlencode

from assistkit.threads import ThreadRequest

__all__ = [
    "CreateThreadAndRunRequest",
    "Pagination",
    "RequiredActionType",
    "Run",
    "RunError",
    "RunLastError",
    "RunList",
    "RunModifyRequest",
    "RunRequest",
    "RunRequiredAction",
    "RunStatus",
    "RunStep",
    "RunStepList",
    "RunStepStatus",
    "RunStepType",
    "RunsAPI",
    "StepDetails",
    "SubmitToolOutputsRequest",
    "ThreadTruncationStrategy",
    "ToolOutput",
    "TruncationStrategy",
]

Send = Callable[[str, str, Any], Mapping[str, Any]]

E = TypeVar("E", bound=Enum)


def _text(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _enum(kind: type[E], value: Any) -> E | Any:
    """Convert a known value to its enum member; keep unknown values as they are."""
    try:
        return kind(value)
    except ValueError:
        return value


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class RequiredActionType(str, Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class TruncationStrategy(str, Enum):
    """How a thread is cut to fit the model's context."""

    AUTO = "auto"
    LAST_MESSAGES = "last_messages"


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


@dataclass
class Pagination:
    """Optional paging parameters of list calls."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def to_query(self) -> str:
        """Return ``"?key=value&..."`` sorted by key, or ``""`` when nothing is set."""
        params: dict[str, str] = {}
        if self.limit is not None:
            params["limit"] = str(int(self.limit))
        if self.order is not None:
            params["order"] = self.order
        if self.after is not None:
            params["after"] = self.after
        if self.before is not None:
            params["before"] = self.before
        if not params:
            return ""
        return "?" + urlencode(sorted(params.items()))


@dataclass
class ThreadTruncationStrategy:
    type: TruncationStrategy | str = ""
    last_messages: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = _text(self.type)
        if self.last_messages is not None:
            out["last_messages"] = self.last_messages
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ThreadTruncationStrategy | None:
        if data is None:
            return None
        return cls(
            type=_enum(TruncationStrategy, data.get("type", "")),
            last_messages=data.get("last_messages"),
        )


@dataclass
class RunLastError:
    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RunLastError | None:
        if data is None:
            return None
        return cls(
            code=_enum(RunError, data.get("code", "")),
            message=data.get("message", ""),
        )


@dataclass
class RunRequiredAction:
    """What the run waits for; ``tool_calls`` is None when no outputs are asked."""

    type: RequiredActionType | str = ""
    tool_calls: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RunRequiredAction | None:
        if data is None:
            return None
        submit = data.get("submit_tool_outputs")
        return cls(
            type=_enum(RequiredActionType, data.get("type", "")),
            tool_calls=list(submit.get("tool_calls") or []) if submit is not None else None,
        )


@dataclass
class Run:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[dict[str, Any]] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    usage: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Run:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            created_at=data.get("created_at", 0),
            thread_id=data.get("thread_id", ""),
            assistant_id=data.get("assistant_id", ""),
            status=_enum(RunStatus, data.get("status", "")),
            required_action=RunRequiredAction.from_dict(data.get("required_action")),
            last_error=RunLastError.from_dict(data.get("last_error")),
            expires_at=data.get("expires_at", 0),
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=data.get("model", ""),
            instructions=data.get("instructions", ""),
            tools=list(data.get("tools") or []),
            file_ids=list(data.get("file_ids") or []),
            metadata=data.get("metadata"),
            usage=dict(data.get("usage") or {}),
            temperature=data.get("temperature"),
            max_prompt_tokens=data.get("max_prompt_tokens", 0),
            max_completion_tokens=data.get("max_completion_tokens", 0),
            truncation_strategy=ThreadTruncationStrategy.from_dict(
                data.get("truncation_strategy")
            ),
        )


@dataclass
class RunRequest:
    """Parameters of a new run; unset fields are left out of the request."""

    assistant_id: str
    model: str = ""
    instructions: str = ""
    additional_instructions: str = ""
    tools: list[dict[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    tool_choice: Any = None
    response_format: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"assistant_id": self.assistant_id}
        for key in ("model", "instructions", "additional_instructions"):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.tools:
            out["tools"] = list(self.tools)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.top_p is not None:
            out["top_p"] = self.top_p
        if self.max_prompt_tokens:
            out["max_prompt_tokens"] = self.max_prompt_tokens
        if self.max_completion_tokens:
            out["max_completion_tokens"] = self.max_completion_tokens
        if self.truncation_strategy is not None:
            out["truncation_strategy"] = self.truncation_strategy.to_dict()
        if self.tool_choice is not None:
            out["tool_choice"] = _text(self.tool_choice)
        if self.response_format is not None:
            out["response_format"] = _text(self.response_format)
        return out


@dataclass
class RunModifyRequest:
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class ToolOutput:
    tool_call_id: str
    output: Any

    def to_dict(self) -> dict[str, Any]:
        return {"tool_call_id": self.tool_call_id, "output": self.output}


@dataclass
class SubmitToolOutputsRequest:
    tool_outputs: list[ToolOutput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tool_outputs": [item.to_dict() for item in self.tool_outputs]}


@dataclass
class CreateThreadAndRunRequest(RunRequest):
    """A run request that also creates the thread it runs on."""

    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["thread"] = self.thread.to_dict()
        return out


@dataclass
class StepDetails:
    type: RunStepType | str = ""
    message_id: str | None = None
    tool_calls: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> StepDetails:
        data = data or {}
        creation = data.get("message_creation")
        return cls(
            type=_enum(RunStepType, data.get("type", "")),
            message_id=creation.get("message_id", "") if creation is not None else None,
            tool_calls=list(data.get("tool_calls") or []),
        )


@dataclass
class RunStep:
    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunStep:
        return cls(
            id=data.get("id", ""),
            object=data.get("object", ""),
            created_at=data.get("created_at", 0),
            assistant_id=data.get("assistant_id", ""),
            thread_id=data.get("thread_id", ""),
            run_id=data.get("run_id", ""),
            type=_enum(RunStepType, data.get("type", "")),
            status=_enum(RunStepStatus, data.get("status", "")),
            step_details=StepDetails.from_dict(data.get("step_details")),
            last_error=RunLastError.from_dict(data.get("last_error")),
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class RunList:
    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunList:
        return cls(runs=[Run.from_dict(item) for item in data.get("data") or []])


@dataclass
class RunStepList:
    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunStepList:
        return cls(
            run_steps=[RunStep.from_dict(item) for item in data.get("data") or []],
            first_id=data.get("first_id") or "",
            last_id=data.get("last_id") or "",
            has_more=bool(data.get("has_more", False)),
        )


class RunsAPI:
    """Run calls; ``send(method, path, body)`` performs a request and returns its JSON."""

    def __init__(self, send: Send) -> None:
        self._send = send

    def create(self, thread_id: str, request: RunRequest) -> Run:
        return Run.from_dict(
            self._send("POST", f"/threads/{thread_id}/runs", request.to_dict())
        )

    def retrieve(self, thread_id: str, run_id: str) -> Run:
        return Run.from_dict(self._send("GET", f"/threads/{thread_id}/runs/{run_id}", None))

    def modify(self, thread_id: str, run_id: str, request: RunModifyRequest) -> Run:
        return Run.from_dict(
            self._send("POST", f"/threads/{thread_id}/runs/{run_id}", request.to_dict())
        )

    def list(self, thread_id: str, pagination: Pagination | None = None) -> RunList:
        query = (pagination or Pagination()).to_query()
        return RunList.from_dict(self._send("GET", f"/threads/{thread_id}/runs{query}", None))

    def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest
    ) -> Run:
        path = f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs"
        return Run.from_dict(self._send("POST", path, request.to_dict()))

    def cancel(self, thread_id: str, run_id: str) -> Run:
        return Run.from_dict(
            self._send("POST", f"/threads/{thread_id}/runs/{run_id}/cancel", None)
        )

    def create_thread_and_run(self, request: CreateThreadAndRunRequest) -> Run:
        return Run.from_dict(self._send("POST", "/threads/runs", request.to_dict()))

    def retrieve_step(self, thread_id: str, run_id: str, step_id: str) -> RunStep:
        path = f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}"
        return RunStep.from_dict(self._send("GET", path, None))

    def list_steps(
        self, thread_id: str, run_id: str, pagination: Pagination | None = None
    ) -> RunStepList:
        query = (pagination or Pagination()).to_query()
        path = f"/threads/{thread_id}/runs/{run_id}/steps{query}"
        return RunStepList.from_dict(self._send("GET", path, None))