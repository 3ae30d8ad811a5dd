import os
import sys
from pathlib import Path
import pytest

# Ensure project root is importable as a package
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Never talk to the real cleanup service from tests
os.environ.pop("MISTRAL_API_KEY", None)

import httpx  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402


FRONT_TEXT = "Government of India\nRAJ KUMAR\nDOB: 15/08/1990\nMALE\n1234 5678 9012"
BACK_TEXT = "Unique Identification Authority of India\nAddress: S/O Ram Kumar, 221B Baker Street, Bengaluru 560001"


class FakeOCRAdapter:
    """Returns canned text keyed by the uploaded bytes and records every call."""

    def __init__(self, texts=None, error=None):
        self.texts = texts or {}
        self.error = error
        self.calls = []

    async def recognize(self, image_bytes, langs):
        self.calls.append((image_bytes, langs))
        if self.error is not None:
            raise self.error
        return self.texts.get(image_bytes, "")


def mistral_reply(content, status_code=200):
    """MockTransport handler answering every request with one chat completion."""
    def handler(request):
        return httpx.Response(status_code, json={"choices": [{"message": {"role": "assistant", "content": content}}]})
    return handler


def echo_reply(request):
    """Answers with the user message unchanged, like a cleanup that found nothing to fix."""
    import json

    body = json.loads(request.content)
    return httpx.Response(200, json={"choices": [{"message": {"content": body["messages"][1]["content"]}}]})


@pytest.fixture()
def fake_ocr():
    return FakeOCRAdapter(texts={b"front-image": FRONT_TEXT, b"back-image": BACK_TEXT})


@pytest.fixture()
def make_client(fake_ocr):
    from aadhaar_ocr.cleanup_client import MistralCleanupClient
    from aadhaar_ocr.main import app, get_processor
    from aadhaar_ocr.ocr_service import AadhaarOCRProcessor, TextExtractor

    def _make(handler=echo_reply, ocr=None, api_key="test-key"):
        cleanup = MistralCleanupClient(api_key=api_key, transport=httpx.MockTransport(handler))
        processor = AadhaarOCRProcessor(extractor=TextExtractor(ocr or fake_ocr), cleanup_client=cleanup)
        app.dependency_overrides[get_processor] = lambda: processor
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
