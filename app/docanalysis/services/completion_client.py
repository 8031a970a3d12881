"""
Chat completion client for the Mistral API.

Mistral speaks the OpenAI chat completions wire format, so the OpenAI SDK
is used with Mistral's base URL. The raw response is decoded here so that
envelope problems map onto the pipeline's own error types.
"""

import json
import logging
from typing import Any, Protocol

import httpx
import openai

try:
    from .exceptions import ApiError, DecodeError, MissingContentError
except ImportError:
    from services.exceptions import ApiError, DecodeError, MissingContentError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
DEFAULT_MODEL = "mistral-large-latest"


class CompletionClient(Protocol):
    """Anything that turns a prompt into the model's raw reply text."""

    def complete(self, prompt: str) -> str: ...


def build_request_body(prompt: str, model: str = DEFAULT_MODEL) -> dict[str, Any]:
    """Request body: one user message and a JSON object response format."""
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "response_format": {"type": "json_object"},
    }


def extract_message_content(envelope: Any) -> str:
    """
    Return ``choices[0].message.content`` from a decoded response.

    Raises:
        MissingContentError: If the field is absent or not a string.
    """
    try:
        content = envelope["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MissingContentError("No content in the API response") from e

    if not isinstance(content, str):
        raise MissingContentError("No content in the API response")
    return content


class MistralCompletionClient:
    """
    Completion client for Mistral's chat completions endpoint.

    One request per call: the SDK client is created with max_retries=0 and
    keeps the SDK's default timeout.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Mistral API key, sent as a bearer token.
            base_url: API root; requests go to {base_url}/chat/completions.
            model: Model identifier.
            http_client: Optional httpx client (tests pass a MockTransport).
        """
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self._http_client = http_client
        self._client = None

    @property
    def client(self):
        """Lazy-load the OpenAI SDK client."""
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    def complete(self, prompt: str) -> str:
        """
        Send the prompt and return the model's reply text.

        Args:
            prompt: Full prompt (template plus document text).

        Returns:
            Content of the first choice, expected to be a JSON string.

        Raises:
            ApiError: On a non-success status or a transport failure.
            DecodeError: If the response body is not JSON.
            MissingContentError: If the reply has no text content.
        """
        body = build_request_body(prompt, self.model)
        logger.info(
            "Requesting completion from %s (model=%s, prompt=%d chars)",
            self.base_url,
            self.model,
            len(prompt),
        )

        try:
            raw = self.client.chat.completions.with_raw_response.create(
                model=body["model"],
                messages=body["messages"],
                response_format=body["response_format"],
            )
        except openai.APIStatusError as e:
            logger.error("API returned status %d", e.status_code)
            raise ApiError(f"API error: {e.status_code}", status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error("API request failed: %s", e)
            raise ApiError(f"API request failed: {e}") from e

        try:
            envelope = json.loads(raw.http_response.text)
        except ValueError as e:
            logger.error("Could not decode API response: %s", e)
            raise DecodeError(f"Could not decode API response: {e}") from e

        return extract_message_content(envelope)
