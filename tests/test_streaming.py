import io
import json

import pytest

from assistkit.streaming import StreamAPIError, StreamReader, TooManyEmptyStreamMessages

DATA_1 = (
    '{"id":"1","object":"completion","created":1598069254,"model":"text-davinci-002",'
    '"choices":[{"text":"response1","finish_reason":"max_tokens"}]}'
)
DATA_2 = (
    '{"id":"2","object":"completion","created":1598069255,"model":"text-davinci-002",'
    '"choices":[{"text":"response2","finish_reason":"max_tokens"}]}'
)
EXPECTED_1 = {
    "id": "1",
    "object": "completion",
    "created": 1598069254,
    "model": "text-davinci-002",
    "choices": [{"text": "response1", "finish_reason": "max_tokens"}],
}
EXPECTED_2 = {
    "id": "2",
    "object": "completion",
    "created": 1598069255,
    "model": "text-davinci-002",
    "choices": [{"text": "response2", "finish_reason": "max_tokens"}],
}


def _stream(text, **kwargs):
    return StreamReader(io.BytesIO(text.encode()), **kwargs)


def _message(data):
    return "event: message\n" + "data: " + data + "\n\n"


DONE = "event: done\ndata: [DONE]\n\n"


def test_reads_messages_then_eof():
    stream = _stream(_message(DATA_1) + _message(DATA_2) + DONE)
    assert stream.recv() == EXPECTED_1
    assert stream.recv() == EXPECTED_2
    with pytest.raises(EOFError):
        stream.recv()
    with pytest.raises(EOFError):
        stream.recv()


def test_iteration_yields_all_messages():
    stream = _stream(_message(DATA_1) + _message(DATA_2) + DONE)
    assert list(stream) == [EXPECTED_1, EXPECTED_2]


def test_error_body_raises_api_error():
    body = "".join(
        line + "\n"
        for line in [
            "{",
            '"error": {',
            '"message": "Incorrect API key provided: sk-***************************************",',
            '"type": "invalid_request_error",',
            '"param": null,',
            '"code": "invalid_api_key"',
            "}",
            "}",
        ]
    )
    stream = _stream(body)
    with pytest.raises(StreamAPIError) as caught:
        stream.recv()
    assert caught.value.code == "invalid_api_key"
    assert caught.value.error_type == "invalid_request_error"
    assert caught.value.param is None


def test_too_many_empty_messages():
    text = _message(DATA_1) + "\n" * 299 + _message(DATA_2) + DONE
    stream = _stream(text)
    assert stream.recv() == EXPECTED_1
    with pytest.raises(TooManyEmptyStreamMessages):
        stream.recv()


def test_small_limit_exceeded():
    stream = StreamReader(io.BytesIO(b"\n\n\n\n"), empty_messages_limit=3)
    with pytest.raises(TooManyEmptyStreamMessages):
        stream.recv()


def test_limit_reached_but_not_exceeded_ends_stream():
    stream = StreamReader(io.BytesIO(b"\n\n\n"), empty_messages_limit=3)
    with pytest.raises(EOFError):
        stream.recv()


def test_unexpected_termination_is_eof():
    stream = _stream(_message(DATA_1))
    assert stream.recv() == EXPECTED_1
    with pytest.raises(EOFError):
        stream.recv()


def test_broken_json_raises_decode_error():
    broken = '{"id":"2","object":"completion","created":1598069255,"model":'
    stream = _stream(_message(DATA_1) + _message(broken) + DONE)
    assert stream.recv() == EXPECTED_1
    with pytest.raises(json.JSONDecodeError):
        stream.recv()


def test_unparsable_error_body_is_eof():
    stream = StreamReader([b"{\n"])
    with pytest.raises(EOFError):
        stream.recv()


def test_error_prefixed_data_line():
    lines = [b'data: {"error": {"message": "boom", "type": "server_error"}}\n', b"\n"]
    stream = StreamReader(lines)
    with pytest.raises(StreamAPIError) as caught:
        stream.recv()
    assert caught.value.message == "boom"
    assert str(caught.value) == "error, boom"


def test_final_line_without_newline_is_dropped():
    stream = StreamReader(["data: " + DATA_1])
    with pytest.raises(EOFError):
        stream.recv()


def test_custom_decoder():
    stream = _stream(_message(DATA_1) + DONE, decode=lambda raw: json.loads(raw)["id"])
    assert list(stream) == ["1"]


def test_context_manager_closes_source():
    source = io.BytesIO((_message(DATA_1) + DONE).encode())
    with StreamReader(source) as stream:
        assert stream.recv() == EXPECTED_1
    assert source.closed