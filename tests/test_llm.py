"""Tests for pausepaws.llm — HttpDialogue, OfflineDialogue and EchoDialogue."""

import base64

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from pausepaws.llm import (
    DialogueError,
    EchoDialogue,
    HttpDialogue,
    MalformedResponseError,
    OfflineDialogue,
    QuotaExceededError,
    TransportError,
)


def _mock_response(body, status: int = 200, content: bytes = b"") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    resp.content = content
    resp.raise_for_status = MagicMock(
        side_effect=None if status < 400 else httpx.HTTPStatusError(
            "", request=MagicMock(), response=resp
        )
    )
    return resp


def _gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


# ---------------------------------------------------------------------------
# EchoDialogue / OfflineDialogue
# ---------------------------------------------------------------------------

class TestEchoDialogue:
    async def test_returns_text_unchanged(self) -> None:
        assert await EchoDialogue().generate("framing", "hello world") == "hello world"

    async def test_no_speech(self) -> None:
        assert await EchoDialogue().generate_speech("hi", "Kore") is None


class TestOfflineDialogue:
    async def test_generate_raises_transport_error(self) -> None:
        with pytest.raises(TransportError):
            await OfflineDialogue().generate("framing", "hi")

    async def test_no_speech(self) -> None:
        assert await OfflineDialogue().generate_speech("hi", "Kore") is None


# ---------------------------------------------------------------------------
# HttpDialogue — Gemini format
# ---------------------------------------------------------------------------

class TestHttpDialogueGemini:
    @pytest.fixture
    def dialogue(self) -> HttpDialogue:
        return HttpDialogue(api_key="secret", model="gemini-test")

    async def test_happy_path(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(_gemini_body("  Woof!  ")))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate("You are Buddy.", "hi") == "Woof!"

    async def test_posts_to_default_url(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(_gemini_body("ok")))
        with patch("httpx.AsyncClient.post", mock_post):
            await dialogue.generate("framing", "hi")
        url = mock_post.call_args[0][0]
        assert url == "https://generativelanguage.googleapis.com/v1beta/models/gemini-test:generateContent"

    async def test_sends_framing_as_system_instruction(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(_gemini_body("ok")))
        with patch("httpx.AsyncClient.post", mock_post):
            await dialogue.generate("You are Buddy.", "hi there")
        sent = mock_post.call_args.kwargs["json"]
        assert sent["systemInstruction"] == {"parts": [{"text": "You are Buddy."}]}
        assert sent["contents"][0]["parts"][0]["text"] == "hi there"

    async def test_api_key_header(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(_gemini_body("ok")))
        with patch("httpx.AsyncClient.post", mock_post):
            await dialogue.generate("framing", "hi")
        headers = mock_post.call_args.kwargs["headers"]
        assert headers["x-goog-api-key"] == "secret"
        assert "Authorization" not in headers

    async def test_429_raises_quota_exceeded(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response({}, status=429))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(QuotaExceededError) as exc:
                await dialogue.generate("framing", "hi")
        assert exc.value.kind == "quota_exceeded"

    async def test_missing_candidates_is_malformed(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response({"candidates": []}))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(MalformedResponseError, match="Unexpected response format"):
                await dialogue.generate("framing", "hi")

    async def test_empty_text_is_malformed(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(_gemini_body("   ")))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(MalformedResponseError, match="empty"):
                await dialogue.generate("framing", "hi")

    async def test_non_json_body_is_malformed(self, dialogue: HttpDialogue) -> None:
        resp = _mock_response(None)
        resp.json.side_effect = ValueError("no json")
        with patch("httpx.AsyncClient.post", AsyncMock(return_value=resp)):
            with pytest.raises(MalformedResponseError):
                await dialogue.generate("framing", "hi")

    async def test_speech_decodes_inline_audio(self, dialogue: HttpDialogue) -> None:
        audio = b"\x00\x01pcm"
        body = {"candidates": [{"content": {"parts": [
            {"inlineData": {"data": base64.b64encode(audio).decode()}}
        ]}}]}
        mock_post = AsyncMock(return_value=_mock_response(body))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate_speech("Hello", "Kore") == audio
        sent = mock_post.call_args.kwargs["json"]
        voice = sent["generationConfig"]["speechConfig"]["voiceConfig"]["prebuiltVoiceConfig"]
        assert voice == {"voiceName": "Kore"}

    async def test_speech_failure_returns_none(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate_speech("Hello", "Kore") is None

    async def test_speech_without_audio_returns_none(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(_gemini_body("no audio")))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate_speech("Hello", "Kore") is None


# ---------------------------------------------------------------------------
# HttpDialogue — OpenAI format
# ---------------------------------------------------------------------------

class TestHttpDialogueOpenAI:
    @pytest.fixture
    def dialogue(self) -> HttpDialogue:
        return HttpDialogue(
            provider_url="http://localhost:8080/",
            api_key="secret",
            provider_format="openai",
            model="mistral-7b",
            speech_model="tts-1",
        )

    async def test_posts_chat_completion(self, dialogue: HttpDialogue) -> None:
        body = {"choices": [{"message": {"content": "Purr."}}]}
        mock_post = AsyncMock(return_value=_mock_response(body))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate("You are Luna.", "hi") == "Purr."
        assert mock_post.call_args[0][0] == "http://localhost:8080/v1/chat/completions"
        sent = mock_post.call_args.kwargs["json"]
        assert sent["model"] == "mistral-7b"
        assert sent["messages"][0] == {"role": "system", "content": "You are Luna."}
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"

    async def test_missing_choices_is_malformed(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response({"choices": []}))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(MalformedResponseError):
                await dialogue.generate("framing", "hi")

    async def test_speech_returns_raw_body(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response(None, content=b"mp3"))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate_speech("Hello", "Puck") == b"mp3"
        assert mock_post.call_args[0][0] == "http://localhost:8080/v1/audio/speech"
        assert mock_post.call_args.kwargs["json"] == {"model": "tts-1", "input": "Hello", "voice": "puck"}


# ---------------------------------------------------------------------------
# HttpDialogue — KoboldCpp format and transport errors
# ---------------------------------------------------------------------------

class TestHttpDialogueKoboldCpp:
    @pytest.fixture
    def dialogue(self) -> HttpDialogue:
        return HttpDialogue(provider_url="http://localhost:5001", provider_format="koboldcpp")

    async def test_happy_path(self, dialogue: HttpDialogue) -> None:
        body = {"results": [{"text": "Woof!"}]}
        mock_post = AsyncMock(return_value=_mock_response(body))
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate("framing", "hi") == "Woof!"
        assert mock_post.call_args[0][0] == "http://localhost:5001/api/v1/generate"
        assert mock_post.call_args.kwargs["json"] == {"prompt": "framing\n\nhi\n"}

    async def test_no_auth_header_without_api_key(self, dialogue: HttpDialogue) -> None:
        body = {"results": [{"text": "ok"}]}
        mock_post = AsyncMock(return_value=_mock_response(body))
        with patch("httpx.AsyncClient.post", mock_post):
            await dialogue.generate("framing", "hi")
        assert "Authorization" not in mock_post.call_args.kwargs["headers"]

    async def test_speech_unsupported(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock()
        with patch("httpx.AsyncClient.post", mock_post):
            assert await dialogue.generate_speech("Hello", "Kore") is None
        mock_post.assert_not_called()

    async def test_connect_error(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(TransportError, match="Cannot connect"):
                await dialogue.generate("framing", "hi")

    async def test_timeout(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(side_effect=httpx.TimeoutException("timeout"))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(TransportError, match="timed out"):
                await dialogue.generate("framing", "hi")

    async def test_http_error(self, dialogue: HttpDialogue) -> None:
        mock_post = AsyncMock(return_value=_mock_response({}, status=503))
        with patch("httpx.AsyncClient.post", mock_post):
            with pytest.raises(TransportError, match="HTTP 503") as exc:
                await dialogue.generate("framing", "hi")
        assert isinstance(exc.value, DialogueError)
        assert exc.value.kind == "transport_failure"
