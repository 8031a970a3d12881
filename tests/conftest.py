"""Pytest configuration and fixtures."""

from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from app.docanalysis.config import Credentials
from app.docanalysis.main import app
from app.docanalysis.services.analysis import DocumentAnalyzer, get_document_analyzer
from app.docanalysis.services.completion_client import MistralCompletionClient
from app.docanalysis.services.exceptions import ExtractionError
from app.docanalysis.services.prompts import PromptTemplates


class FakeExtractor:
    """Text extractor returning canned text and recording calls."""

    def __init__(self, text: str = "Rechnung Nr. 4711\nGesamt: 42,00 EUR", error: str | None = None):
        self.text = text
        self.error = error
        self.calls: list[str] = []

    def extract(self, path: str) -> str:
        self.calls.append(path)
        if self.error is not None:
            raise ExtractionError(f"Error reading PDF (pdftotext): {self.error}")
        return self.text


class StubCompletionClient:
    """Completion client returning canned content or raising an error."""

    def __init__(self, content: str = '{"total": 42}', error: Exception | None = None):
        self.content = content
        self.error = error
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def templates() -> PromptTemplates:
    """Small fixed templates so prompts are easy to assert on."""
    return PromptTemplates(order="ORDER TEMPLATE", invoice="INVOICE TEMPLATE")


@pytest.fixture
def credentials() -> Credentials:
    """Resolved test credential."""
    return Credentials(api_key=SecretStr("test-key"))


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def stub_client() -> StubCompletionClient:
    return StubCompletionClient()


@pytest.fixture
def make_analyzer(
    templates: PromptTemplates, credentials: Credentials
) -> Callable[..., DocumentAnalyzer]:
    """Factory for analyzers wired to fakes."""

    def _make(
        extractor: FakeExtractor,
        completion_client: StubCompletionClient,
        credentials_loader: Callable[[], Credentials] | None = None,
        log_extracted_text: bool = True,
    ) -> DocumentAnalyzer:
        return DocumentAnalyzer(
            templates=templates,
            extractor=extractor,
            client_factory=lambda creds: completion_client,
            credentials_loader=credentials_loader or (lambda: credentials),
            log_extracted_text=log_extracted_text,
        )

    return _make


@pytest.fixture
def client(
    make_analyzer: Callable[..., DocumentAnalyzer],
    fake_extractor: FakeExtractor,
    stub_client: StubCompletionClient,
) -> Generator[TestClient, None, None]:
    """Create a test client whose analyzer uses the fake collaborators."""
    analyzer = make_analyzer(fake_extractor, stub_client)
    app.dependency_overrides[get_document_analyzer] = lambda: analyzer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_api() -> Callable[[Callable[[httpx.Request], httpx.Response]], MistralCompletionClient]:
    """
    Build a MistralCompletionClient whose HTTP traffic goes to a handler.

    The handler receives every request; captured requests are stored on
    the returned client as ``requests``.
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> MistralCompletionClient:
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(_record))
        completion_client = MistralCompletionClient(
            api_key="test-key",
            base_url="https://api.mistral.ai/v1",
            model="mistral-large-latest",
            http_client=http_client,
        )
        completion_client.requests = requests
        return completion_client

    return _make
