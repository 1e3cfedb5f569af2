import base64
import json
import httpx
import pytest
from src.common.exceptions import AnalysisServiceError, ConfigurationError
from src.common.schemas.analysis import ANALYSIS_INSTRUCTION, ANALYSIS_RESPONSE_SCHEMA
from src.monitoring.infrastructure.analyzers import GeminiAnalyzer
from tests.helpers import make_payload


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_analyzer(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiAnalyzer(api_key="test-key", model="test-model", base_url="https://example.test/v1beta", client=client)


def test_requires_api_key():
    with pytest.raises(ConfigurationError):
        GeminiAnalyzer(api_key="")


def test_request_carries_instruction_image_and_schema():
    analyzer = GeminiAnalyzer(api_key="k", client=httpx.AsyncClient())
    body = analyzer.build_request(b"jpeg-bytes", ANALYSIS_INSTRUCTION)

    text_part, image_part = body["contents"][0]["parts"]
    assert text_part == {"text": ANALYSIS_INSTRUCTION}
    assert image_part["inlineData"]["mimeType"] == "image/jpeg"
    assert base64.b64decode(image_part["inlineData"]["data"]) == b"jpeg-bytes"
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert body["generationConfig"]["responseSchema"] == ANALYSIS_RESPONSE_SCHEMA


@pytest.mark.asyncio
async def test_analyze_returns_decoded_json():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-goog-api-key"]
        return httpx.Response(200, json=gemini_body(json.dumps(make_payload(risk_score=81))))

    analyzer = make_analyzer(handler)
    data = await analyzer.analyze(b"jpeg", ANALYSIS_INSTRUCTION)

    assert data["riskScore"] == 81
    assert seen["url"] == "https://example.test/v1beta/models/test-model:generateContent"
    assert seen["key"] == "test-key"
    await analyzer.aclose()


@pytest.mark.asyncio
async def test_http_error_status():
    analyzer = make_analyzer(lambda request: httpx.Response(503, json={"error": "overloaded"}))
    with pytest.raises(AnalysisServiceError, match="503"):
        await analyzer.analyze(b"jpeg", ANALYSIS_INSTRUCTION)


@pytest.mark.asyncio
async def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    analyzer = make_analyzer(handler)
    with pytest.raises(AnalysisServiceError, match="unreachable"):
        await analyzer.analyze(b"jpeg", ANALYSIS_INSTRUCTION)


@pytest.mark.asyncio
async def test_unexpected_envelope():
    analyzer = make_analyzer(lambda request: httpx.Response(200, json={"candidates": []}))
    with pytest.raises(AnalysisServiceError, match="envelope"):
        await analyzer.analyze(b"jpeg", ANALYSIS_INSTRUCTION)


@pytest.mark.asyncio
async def test_non_json_text():
    analyzer = make_analyzer(lambda request: httpx.Response(200, json=gemini_body("not json")))
    with pytest.raises(AnalysisServiceError, match="valid JSON"):
        await analyzer.analyze(b"jpeg", ANALYSIS_INSTRUCTION)


@pytest.mark.asyncio
async def test_empty_text_decodes_to_empty_object():
    analyzer = make_analyzer(lambda request: httpx.Response(200, json=gemini_body("")))
    assert await analyzer.analyze(b"jpeg", ANALYSIS_INSTRUCTION) == {}
