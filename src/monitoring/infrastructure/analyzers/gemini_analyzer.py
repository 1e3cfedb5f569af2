"""
Gemini vision analyzer over the generateContent REST endpoint.
"""
import base64
import json
import logging
from typing import Any, Dict, Optional

import httpx

from ....common.exceptions import AnalysisServiceError, ConfigurationError
from ....common.logging import setup_logger, log_execution_time
from ....common.schemas.analysis import ANALYSIS_RESPONSE_SCHEMA

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"


class GeminiAnalyzer:
    """
    Submits one JPEG frame with the privacy directive and returns the decoded
    JSON answer. Schema validation is left to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        if not api_key:
            raise ConfigurationError("Analyzer API key is not configured (set GEMINI_API_KEY)")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.logger = setup_logger(__name__)
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_request(self, image: bytes, instruction: str) -> Dict:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": instruction},
                        {
                            "inlineData": {
                                "mimeType": "image/jpeg",
                                "data": base64.b64encode(image).decode("ascii")
                            }
                        }
                    ]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": ANALYSIS_RESPONSE_SCHEMA
            }
        }

    @log_execution_time(logging.getLogger(__name__))
    async def analyze(self, image: bytes, instruction: str) -> Any:
        try:
            response = await self._client.post(
                self.endpoint,
                json=self.build_request(image, instruction),
                headers={"x-goog-api-key": self.api_key}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AnalysisServiceError(
                f"Analysis service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise AnalysisServiceError(f"Analysis service unreachable: {e}") from e

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            body = response.json()
            parts = body["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise AnalysisServiceError("Unexpected analysis response envelope") from e

        try:
            return json.loads(text or "{}")
        except ValueError as e:
            raise AnalysisServiceError("Analysis response is not valid JSON") from e

    async def aclose(self):
        await self._client.aclose()
