import asyncio
import json

import pytest
import requests
from pydantic import ValidationError

from lottopick.config import Config
from lottopick.insight import (
    FALLBACK_INSIGHT,
    AIInsight,
    InsightClient,
    build_payload,
    get_number_insights,
)

GOOD = {"analysis": "Boa mistura.", "funFact": "7 é primo.", "patternObserved": "Dois pares."}


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_no_key_returns_fallback():
    session = FakeSession()
    client = InsightClient(api_key="", session=session)
    assert client.fetch([1, 2, 3]) == FALLBACK_INSIGHT
    assert session.calls == []


def test_get_number_insights_without_key():
    assert get_number_insights([4, 8, 15], config=Config(api_key="")) is FALLBACK_INSIGHT


def test_empty_numbers_send_nothing():
    session = FakeSession()
    assert InsightClient(api_key="k", session=session).fetch([]) is None
    assert session.calls == []


def test_successful_fetch():
    session = FakeSession(FakeResponse(_reply(json.dumps(GOOD))))
    client = InsightClient(api_key="secret", model="m-1", endpoint="https://host/models/", session=session)

    insight = client.fetch([3, 14, 22])

    assert insight == AIInsight(**GOOD)
    assert len(session.calls) == 1
    url, kwargs = session.calls[0]
    assert url == "https://host/models/m-1:generateContent"
    assert kwargs["headers"] == {"x-goog-api-key": "secret"}
    assert "3, 14, 22" in kwargs["json"]["contents"][0]["parts"][0]["text"]


def test_payload_declares_schema():
    payload = build_payload([1, 2])
    gen = payload["generationConfig"]
    assert gen["responseMimeType"] == "application/json"
    assert sorted(gen["responseSchema"]["required"]) == ["analysis", "funFact", "patternObserved"]


def test_transport_error_is_swallowed():
    session = FakeSession(error=requests.ConnectionError("down"))
    assert InsightClient(api_key="k", session=session).fetch([1]) is None


def test_http_error_is_swallowed():
    session = FakeSession(FakeResponse({"error": "denied"}, status=403))
    assert InsightClient(api_key="k", session=session).fetch([1]) is None


def test_missing_field_is_rejected():
    partial = {"analysis": "x", "funFact": "y"}
    session = FakeSession(FakeResponse(_reply(json.dumps(partial))))
    assert InsightClient(api_key="k", session=session).fetch([1]) is None


def test_bad_json_text_is_rejected():
    session = FakeSession(FakeResponse(_reply("not json {")))
    assert InsightClient(api_key="k", session=session).fetch([1]) is None


def test_unexpected_envelope_is_rejected():
    session = FakeSession(FakeResponse({"candidates": []}))
    assert InsightClient(api_key="k", session=session).fetch([1]) is None


def test_body_not_json_is_rejected():
    session = FakeSession(FakeResponse(ValueError("no body")))
    assert InsightClient(api_key="k", session=session).fetch([1]) is None


def test_no_retry_after_failure():
    session = FakeSession(error=requests.Timeout("slow"))
    InsightClient(api_key="k", session=session).fetch([1, 2])
    assert len(session.calls) == 1


def test_fetch_async():
    session = FakeSession(FakeResponse(_reply(json.dumps(GOOD))))
    client = InsightClient(api_key="k", session=session)
    assert asyncio.run(client.fetch_async([5, 6])) == AIInsight(**GOOD)


def test_fallback_cannot_be_mutated():
    with pytest.raises(ValidationError):
        FALLBACK_INSIGHT.analysis = "changed"
    assert InsightClient(api_key="").fetch([1]).analysis.startswith("Estes números")
