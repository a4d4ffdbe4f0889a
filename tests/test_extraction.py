import json

import pytest
import requests

from rxnotes.core import config
from rxnotes.schemas.validation import ShapeError
from rxnotes.services import ollama_client
from rxnotes.services.llm import extraction
from rxnotes.services.llm.extraction_schema import PRESCRIPTION_SCHEMA
from rxnotes.services.ollama_client import ExtractionError, _safe_json_parse, ollama_chat_json

class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    def json(self):
        return self._payload

def _chat_reply(content):
    return FakeResponse(payload={"message": {"role": "assistant", "content": content}})

def test_safe_json_parse_plain():
    assert _safe_json_parse('{"medications": []}') == {"medications": []}

def test_safe_json_parse_with_prose_around():
    text = 'Sure! Here it is:\n{"medications": [{"name": "X"}]}\nHope this helps.'
    assert _safe_json_parse(text) == {"medications": [{"name": "X"}]}

@pytest.mark.parametrize("text", ["", "no json here", "[1, 2]", "{broken"])
def test_safe_json_parse_rejects_non_objects(text):
    with pytest.raises(ExtractionError):
        _safe_json_parse(text)

def test_ollama_chat_json_sends_schema(monkeypatch):
    seen = {}

    def fake_post(url, json=None, timeout=None):
        seen.update(url=url, payload=json, timeout=timeout)
        return _chat_reply('{"medications": []}')

    monkeypatch.setattr(ollama_client.requests, "post", fake_post)
    out = ollama_chat_json(model="m", system="sys", user="usr", schema=PRESCRIPTION_SCHEMA, timeout_s=5)

    assert out == {"medications": []}
    assert seen["url"].endswith("/chat")
    assert seen["payload"]["model"] == "m"
    assert seen["payload"]["format"] is PRESCRIPTION_SCHEMA
    assert seen["payload"]["stream"] is False
    assert seen["timeout"] == 5

def test_ollama_http_error(monkeypatch):
    monkeypatch.setattr(ollama_client.requests, "post", lambda *a, **k: FakeResponse(500, text="boom"))
    with pytest.raises(ExtractionError):
        ollama_chat_json(model="m", system="s", user="u")

def test_ollama_unreachable(monkeypatch):
    def fail(*a, **k):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(ollama_client.requests, "post", fail)
    with pytest.raises(ExtractionError):
        ollama_chat_json(model="m", system="s", user="u")

def test_extract_validates_model_output(monkeypatch):
    raw = {
        "medications": [
            {"name": "Metformin", "strength": "500mg", "frequency": "BD",
             "confidence": {"name": 0.95}, "needs_confirmation": []},
        ],
        "follow_up": "After 1 month",
        "unexpected": "ignored",
    }
    monkeypatch.setattr(extraction, "ollama_chat_json", lambda **kw: raw)

    extract = extraction.llm_extract_prescription("Tab Metformin 500mg BD", "rx-7")
    assert extract.prescription_id == "rx-7"
    assert extract.ocr_text == "Tab Metformin 500mg BD"
    assert extract.medications[0].name == "Metformin"
    assert extract.follow_up == "After 1 month"

def test_extract_rejects_nameless_medication(monkeypatch):
    raw = {"medications": [{"name": None, "strength": "5mg"}]}
    monkeypatch.setattr(extraction, "ollama_chat_json", lambda **kw: raw)
    with pytest.raises(ShapeError) as exc:
        extraction.llm_extract_prescription("?? 5mg", "rx-8")
    assert exc.value.field == "medications.0.name"

def test_extract_passes_prompt_and_locale(monkeypatch):
    seen = {}

    def fake_chat(**kw):
        seen.update(kw)
        return {"medications": []}

    monkeypatch.setattr(extraction, "ollama_chat_json", fake_chat)
    extraction.llm_extract_prescription("Tab X OD", "rx-9", locale="hi")
    assert "LOCALE: hi" in seen["user"]
    assert "Tab X OD" in seen["user"]
    assert seen["schema"] is PRESCRIPTION_SCHEMA

def test_build_extract_payload_keeps_envelope():
    payload = extraction.build_extract_payload({"diagnosis": "HTN"}, "rx-1", "text", "pdf")
    assert payload["prescription_id"] == "rx-1"
    assert payload["source_type"] == "pdf"
    assert payload["medications"] == []
    assert payload["diagnosis"] == "HTN"

def test_mock_mode_skips_model(monkeypatch):
    monkeypatch.setattr(config, "MOCK_MODE", True)

    def boom(**kw):
        raise AssertionError("model must not be called in mock mode")

    monkeypatch.setattr(extraction, "ollama_chat_json", boom)
    extract = extraction.llm_extract_prescription("anything", "rx-mock")
    assert extract.prescription_id == "rx-mock"
    assert [m.name for m in extract.medications] == ["Metformin", "Amlodipine", "Omeprazole", "Paracetamol"]
    assert json.loads(extract.model_dump_json())["medications"][3]["needs_confirmation"] == ["duration_days"]

class HtmlResponse(FakeResponse):
    def json(self):
        raise requests.JSONDecodeError("Expecting value", self.text, 0)

def test_ollama_chat_json_non_json_body(monkeypatch):
    monkeypatch.setattr(ollama_client.requests, "post", lambda *a, **k: HtmlResponse(text="<html>proxy</html>"))
    with pytest.raises(ExtractionError):
        ollama_chat_json(model="m", system="s", user="u")

def test_ollama_chat_json_list_body(monkeypatch):
    monkeypatch.setattr(ollama_client.requests, "post", lambda *a, **k: FakeResponse(payload=[{"message": {}}]))
    with pytest.raises(ExtractionError):
        ollama_chat_json(model="m", system="s", user="u")
