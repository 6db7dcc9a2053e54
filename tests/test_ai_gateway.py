import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from resmo.errors import InvalidResponseKind, RemoteCallFailure
from resmo.schemas.analysis import EmailDraft
from resmo.schemas.candidate import ResumeImage
from resmo.services.ai_gateway import AIGateway
from resmo.utils.helpers import run_sync


class FakeCompletions:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _gateway(reply=None, error=None):
    completions = FakeCompletions(reply, error)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return AIGateway(client=client, model="test-model"), completions


async def test_structured_reply_is_validated():
    gateway, completions = _gateway(json.dumps({"subject": "Hi", "body": "Hello there"}))
    draft = await gateway.generate_structured("write an email", EmailDraft)

    assert draft.subject == "Hi"
    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert request["response_format"] == {"type": "json_object"}
    assert "subject" in request["messages"][0]["content"]
    assert request["messages"][1]["content"] == "write an email"


async def test_code_fences_are_stripped():
    gateway, _ = _gateway('```json\n{"subject": "S", "body": "B"}\n```')
    draft = await gateway.generate_structured("p", EmailDraft)
    assert draft.body == "B"


async def test_non_json_reply_is_invalid():
    gateway, _ = _gateway("Sure! Here is your email.")
    with pytest.raises(InvalidResponseKind):
        await gateway.generate_structured("p", EmailDraft)


async def test_schema_mismatch_is_invalid():
    gateway, _ = _gateway(json.dumps({"title": "wrong shape"}))
    with pytest.raises(InvalidResponseKind):
        await gateway.generate_structured("p", EmailDraft)


async def test_empty_reply_is_invalid():
    gateway, _ = _gateway("")
    with pytest.raises(InvalidResponseKind):
        await gateway.generate_text("p")


async def test_transport_error_is_remote_failure():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    gateway, _ = _gateway(error=APIConnectionError(request=request))
    with pytest.raises(RemoteCallFailure):
        await gateway.generate_text("p")


async def test_missing_api_key_is_remote_failure():
    gateway = AIGateway(api_key="")
    with pytest.raises(RemoteCallFailure, match="OPENAI_API_KEY"):
        await gateway.generate_text("p")


async def test_images_are_sent_as_data_urls():
    gateway, completions = _gateway("  Jane Doe\nEngineer  ")
    text = await gateway.generate_text("transcribe", images=[ResumeImage(mime_type="image/png", data="QUJD")])

    assert text == "Jane Doe\nEngineer"
    parts = completions.requests[0]["messages"][1]["content"]
    assert parts[0] == {"type": "text", "text": "transcribe"}
    assert parts[1]["image_url"]["url"] == "data:image/png;base64,QUJD"
    assert "response_format" not in completions.requests[0]


class _ChatCompletionHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"  # keep-alive, so the client pools the connection

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        body = json.dumps(
            {
                "id": "chatcmpl-local",
                "object": "chat.completion",
                "created": 0,
                "model": "test-model",
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": "hello"},
                        "finish_reason": "stop",
                    }
                ],
            }
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_openai_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _ChatCompletionHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/v1"
    server.shutdown()
    server.server_close()


def test_gateway_survives_one_event_loop_per_call(local_openai_url):
    gateway = AIGateway(api_key="test-key", model="test-model", base_url=local_openai_url)

    assert run_sync(gateway.generate_text("first")) == "hello"
    assert run_sync(gateway.generate_text("second")) == "hello"
