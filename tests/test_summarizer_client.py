import asyncio
import json

import httpx
import pytest

from gutory.summarizer.client import SummarizerClient, build_request_body
from gutory.summarizer.exceptions import SummarizerCallError, SummarizerResponseError
from tests.conftest import make_log

REPORT_BODY = {
    "summary": "Symptoms were mild",
    "key_takeaways": ["Mild week"],
    "patterns": [],
    "action_items": ["Keep logging"],
}


def _run(coroutine):
    return asyncio.run(coroutine)


def _client(settings, handler) -> SummarizerClient:
    transport = httpx.MockTransport(handler)
    return SummarizerClient(settings, httpx.AsyncClient(transport=transport))


def test_request_body_omits_user_and_empty_values() -> None:
    logs = [make_log("2024-01-02", bloating=3)]
    body = build_request_body(logs, logs, "  Reduce bloating \n")

    assert body["period_logs"] == [{"log_date": "2024-01-02", "bloating": 3}]
    assert body["goals_text"] == "Reduce bloating"
    assert build_request_body([], [], None)["goals_text"] is None


def test_summarize_posts_to_function_and_maps_report(settings) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=REPORT_BODY)

    logs = [make_log("2024-01-02", gas=1), make_log("2024-01-01", gas=2)]
    report = _run(_client(settings, handler).summarize(logs, logs, "Sleep better"))

    assert seen["url"] == "https://example.supabase.co/functions/v1/generate-gut-report"
    assert seen["auth"] == "Bearer anon-key"
    assert [row["log_date"] for row in seen["body"]["period_logs"]] == ["2024-01-02", "2024-01-01"]
    assert seen["body"]["goals_text"] == "Sleep better"
    assert report.summary == "Symptoms were mild"
    assert report.patterns == []
    assert report.action_items == ["Keep logging"]


def test_non_2xx_status_is_call_error(settings) -> None:
    client = _client(settings, lambda request: httpx.Response(503, text="down"))

    with pytest.raises(SummarizerCallError) as excinfo:
        _run(client.summarize([], []))

    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "AI backend returned status 503."


def test_transport_failure_is_call_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SummarizerCallError):
        _run(_client(settings, handler).summarize([], []))


def test_timeout_is_call_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(SummarizerCallError, match="timed out"):
        _run(_client(settings, handler).summarize([], [], timeout=1.0))


@pytest.mark.parametrize(
    "content",
    [b"not json", json.dumps({"summary": "missing lists"}).encode()],
)
def test_malformed_body_is_response_error(settings, content) -> None:
    client = _client(settings, lambda request: httpx.Response(200, content=content))
    with pytest.raises(SummarizerResponseError):
        _run(client.summarize([], []))
