"""Text-to-speech requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

__all__ = [
    "CreateSpeechRequest",
    "SpeechAPI",
    "SpeechModel",
    "SpeechResponseFormat",
    "SpeechVoice",
]

SPEECH_PATH = "/audio/speech"


def _text(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class SpeechModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY_TTS = "canary-tts"


class SpeechVoice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


@dataclass
class CreateSpeechRequest:
    """A speech request; format and speed are left to the server when unset."""

    model: SpeechModel | str
    input: str
    voice: SpeechVoice | str
    response_format: SpeechResponseFormat | str = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "model": _text(self.model),
            "input": self.input,
            "voice": _text(self.voice),
        }
        if self.response_format:
            out["response_format"] = _text(self.response_format)
        if self.speed:
            out["speed"] = self.speed
        return out


class SpeechAPI:
    """Speech calls.

    ``send_raw(method, path, body, model=...)`` posts ``body`` as JSON and
    returns the raw response content.
    """

    def __init__(self, send_raw: Callable[..., Any]) -> None:
        self._send_raw = send_raw

    def create(self, request: CreateSpeechRequest) -> Any:
        return self._send_raw(
            "POST", SPEECH_PATH, request.to_dict(), model=_text(request.model)
        )