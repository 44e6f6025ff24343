# assistkit

Typed models and thin endpoint wrappers for an assistant-style HTTP API:
threads, runs and run steps, vector stores with their files and file batches,
text-to-speech requests, a reader for server-sent event streams, and parsing
of rate-limit response headers.

It has no dependencies beyond the standard library.

## Installation

```
pip install assistkit
```

To run the test suite:

```
pip install "assistkit[test]"
pytest
```

## Modules

| Module | What it holds |
| --- | --- |
| `assistkit.threads` | `ThreadsAPI`; `Thread`, `ThreadRequest`, `ModifyThreadRequest`, `ThreadMessage`, `ThreadMessageRole`, `ThreadAttachment`, `ToolResources`, `ToolResourcesRequest`, `VectorStoreToolResources`, `ChunkingStrategy`, `ChunkingStrategyType`, `StaticChunkingStrategy`, `ThreadDeleteResponse` |
| `assistkit.runs` | `RunsAPI`; `Run`, `RunRequest`, `RunModifyRequest`, `RunList`, `RunStep`, `RunStepList`, `StepDetails`, `RunRequiredAction`, `RunLastError`, `ThreadTruncationStrategy`, `SubmitToolOutputsRequest`, `ToolOutput`, `CreateThreadAndRunRequest`, `Pagination`; the enums `RunStatus`, `RequiredActionType`, `RunError`, `TruncationStrategy`, `RunStepStatus`, `RunStepType` |
| `assistkit.vector_stores` | `VectorStoresAPI`; `VectorStore`, `VectorStoreRequest`, `VectorStoresList`, `VectorStoreDeleteResponse`, `VectorStoreExpires`, `VectorStoreFileCount`, `VectorStoreFile`, `VectorStoreFileRequest`, `VectorStoreFilesList`, `VectorStoreFileBatch`, `VectorStoreFileBatchRequest` |
| `assistkit.speech` | `SpeechAPI`, `CreateSpeechRequest`, `SpeechModel`, `SpeechVoice`, `SpeechResponseFormat` |
| `assistkit.streaming` | `StreamReader`, `TooManyEmptyStreamMessages`, `StreamAPIError`, `DEFAULT_EMPTY_MESSAGES_LIMIT` |
| `assistkit.ratelimit` | `RateLimitHeaders`, `ResetTime`, `parse_duration` |

## The `send` callable

The endpoint wrappers (`ThreadsAPI`, `RunsAPI`, `VectorStoresAPI`) do not make
HTTP requests themselves. Each takes a callable `send(method, path, body)`:

- `method` is `"GET"`, `"POST"` or `"DELETE"`;
- `path` is the path below the API root, e.g. `"/threads/thread_abc123"`,
  with any query string already appended;
- `body` is a dict to send as JSON, or `None` when the call has no body.

It returns the decoded JSON response as a mapping, which the wrapper turns into
the matching dataclass. A fake is enough for tests:

```python
def send(method, path, body):
    print(method, path, body)
    return {"id": "thread_abc123", "object": "thread", "created_at": 1234567890}
```

`SpeechAPI` takes `send_raw(method, path, body, model=...)` instead, which
should return the raw response content (the audio bytes, or a stream of them).

## Threads

```python
from assistkit.threads import (
    ModifyThreadRequest, ThreadMessage, ThreadMessageRole, ThreadRequest, ThreadsAPI,
)

threads = ThreadsAPI(send)
thread = threads.create(
    ThreadRequest(messages=[ThreadMessage(role=ThreadMessageRole.USER, content="Hello, World!")])
)
thread = threads.retrieve(thread.id)
thread = threads.modify(thread.id, ModifyThreadRequest(metadata={"key": "value"}))
deleted = threads.delete(thread.id)      # ThreadDeleteResponse
```

Request models have `to_dict()`, which leaves out fields that are unset or
empty. Response models have `from_dict()`, which fills missing fields with
empty defaults.

## Runs and pagination

```python
from assistkit.runs import (
    CreateThreadAndRunRequest, Pagination, RunRequest, RunsAPI, SubmitToolOutputsRequest,
)
from assistkit.threads import ThreadMessage, ThreadRequest

runs = RunsAPI(send)
run = runs.create("thread_abc123", RunRequest(assistant_id="asst_abc123"))
page = runs.list("thread_abc123", Pagination(limit=20, order="desc"))
run = runs.submit_tool_outputs("thread_abc123", run.id, SubmitToolOutputsRequest())
run = runs.cancel("thread_abc123", run.id)
run = runs.create_thread_and_run(
    CreateThreadAndRunRequest(
        assistant_id="asst_abc123",
        thread=ThreadRequest(messages=[ThreadMessage(role="user", content="Hi")]),
    )
)
steps = runs.list_steps("thread_abc123", run.id, Pagination(limit=5))
step = runs.retrieve_step("thread_abc123", run.id, "step_abc123")
```

`Pagination.to_query()` renders only the fields that are set, sorted by key,
as `"?after=...&before=...&limit=...&order=..."`, or `""` when none is set.
Known status and type strings in responses are turned into enum members;
unknown ones are kept as plain strings.

## Vector stores

```python
from assistkit.vector_stores import (
    VectorStoreFileBatchRequest, VectorStoreFileRequest, VectorStoreRequest, VectorStoresAPI,
)

stores = VectorStoresAPI(send)
store = stores.create(VectorStoreRequest(name="TestStore"))
stores.create_file(store.id, VectorStoreFileRequest(file_id="file-abc123"))
batch = stores.create_file_batch(store.id, VectorStoreFileBatchRequest(file_ids=["file-abc123"]))
files = stores.list_files_in_batch(store.id, batch.id)
stores.cancel_file_batch(store.id, batch.id)
stores.delete_file(store.id, "file-abc123")   # returns None; the body is not read
```

Also available: `retrieve`, `modify`, `delete`, `list`, `retrieve_file`,
`list_files` and `retrieve_file_batch`.

## Speech

```python
from assistkit.speech import CreateSpeechRequest, SpeechAPI, SpeechModel, SpeechVoice

speech = SpeechAPI(send_raw)
audio = speech.create(
    CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
)
```

`response_format` and `speed` are sent only when set.

## Streaming

`StreamReader` reads lines of a server-sent event stream. Each line must keep
its trailing newline; a final line without one is treated as the end of the
stream. Lines may be `bytes` or `str`.

```python
from assistkit.streaming import StreamReader

lines = [
    b"event: message\n",
    b'data: {"id": "1", "choices": [{"text": "response1"}]}\n',
    b"\n",
    b"data: [DONE]\n",
]
with StreamReader(lines) as stream:
    for message in stream:
        print(message["id"])
```

- `recv()` returns the next decoded `data:` payload (by default with
  `json.loads`; pass `decode=` to change it) and raises `EOFError` after
  `data: [DONE]` or at the end of input. Iterating stops at the same point.
- Lines that are not `data:` lines are collected; if the stream ends and they
  form a JSON error object, `StreamAPIError` is raised with `message`,
  `error_type`, `param` and `code`. A `data: {"error": ...}` line is handled the
  same way.
- More than `empty_messages_limit` (default 300) such lines within one
  `recv()` raise `TooManyEmptyStreamMessages`.
- Decoding errors from `decode` propagate unchanged.
- `close()` (also on leaving the `with` block) calls `close()` on the source
  if it has one.

## Rate limits

```python
from assistkit.ratelimit import RateLimitHeaders, parse_duration

limits = RateLimitHeaders.from_headers({"X-RateLimit-Remaining-Requests": "59",
                                        "x-ratelimit-reset-requests": "1s"})
limits.remaining_requests        # 59
limits.reset_requests.time()     # now plus one second
parse_duration("1h2m3.5s")       # timedelta(seconds=3723, microseconds=500000)
```

Header names are matched case-insensitively. Missing or non-integer numeric
headers read as `0`. `ResetTime` is a `str`; its `time()` returns the current
time when the value cannot be parsed. `parse_duration` accepts the units
`ns`, `us`, `µs`, `ms`, `s`, `m` and `h` and raises `ValueError` on bad input.

## What it does not do

- It has no HTTP client: no connections, base URLs, authentication headers,
  retries or timeouts. You supply those in `send` / `send_raw`.
- It has no chat or text-completion request and response models; a stream is
  decoded into plain JSON values unless you pass your own `decode`.
- It has no command-line tool.