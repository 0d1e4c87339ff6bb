import logging
from typing import Any, Dict, List, Optional

import requests

from config import Settings
from errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


def _provider_message(response: requests.Response) -> str:
    """Pull the provider's own error message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or f"HTTP {response.status_code}"
    return response.text or f"HTTP {response.status_code}"


class GeminiClient:
    """Thin single-shot client for the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.model_name,
            base_url=settings.gemini_base_url,
            timeout=settings.llm_timeout,
            session=session,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, segments: List[str], response_schema: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": s} for s in segments]}],
        }
        if response_schema is not None:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }
        return payload

    def generate(self, segments: List[str], response_schema: Optional[Dict[str, Any]] = None) -> str:
        """
        Send one request and return the text of the first candidate.
        No retries: any transport/provider failure becomes a TransportError.
        """
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable is not set.")

        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        payload = self.build_payload(segments, response_schema)
        logger.info(f"Calling {self.model} with {len(segments)} segment(s)")

        try:
            response = self.session.post(self.url, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise TransportError(str(e)) from e

        if response.status_code >= 400:
            message = _provider_message(response)
            logger.error(f"Gemini API error {response.status_code}: {message}")
            raise TransportError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Malformed response from model provider: {e}") from e

        return self.extract_text(data)

    @staticmethod
    def extract_text(data: Dict[str, Any]) -> str:
        # blocked prompts come back without candidates; callers treat "" as empty
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts)
