# tests/test_generate_endpoint.py
# Provider is stubbed; no network traffic.
from fastapi.testclient import TestClient

from instacaption.api import generate as generate_mod
from instacaption.errors import ProviderError
from instacaption.main import app

client = TestClient(app)

IMG = "data:image/png;base64,iVBORw0KGgo="


def test_success_returns_text(monkeypatch):
    seen = {}

    def fake(prompt, images):
        seen["prompt"], seen["images"] = prompt, images
        return "Great caption! #fun"

    monkeypatch.setattr(generate_mod, "generate_text", fake)
    resp = client.post("/api/generate", json={"prompt": "caption this", "images": [IMG, IMG]})
    assert resp.status_code == 200
    assert resp.json() == {"text": "Great caption! #fun"}
    assert seen == {"prompt": "caption this", "images": [IMG, IMG]}


def test_empty_image_list_is_allowed(monkeypatch):
    monkeypatch.setattr(generate_mod, "generate_text", lambda p, i: "text only")
    resp = client.post("/api/generate", json={"prompt": "hi", "images": []})
    assert resp.status_code == 200
    assert resp.json() == {"text": "text only"}


def test_provider_failure_is_generic_500(monkeypatch, caplog):
    def fail(prompt, images):
        raise ProviderError("401 invalid api key sk-secret")

    monkeypatch.setattr(generate_mod, "generate_text", fail)
    resp = client.post("/api/generate", json={"prompt": "hi", "images": [IMG]})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate caption"}
    assert "sk-secret" not in resp.text
    # detail stays server-side
    assert any("Error generating caption" in r.message for r in caplog.records)


def test_any_exception_is_generic_500(monkeypatch):
    def fail(prompt, images):
        raise KeyError("choices")

    monkeypatch.setattr(generate_mod, "generate_text", fail)
    resp = client.post("/api/generate", json={"prompt": "hi", "images": []})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate caption"}


def test_missing_or_empty_prompt_rejected(monkeypatch):
    called = []
    monkeypatch.setattr(generate_mod, "generate_text", lambda p, i: called.append(1) or "x")
    assert client.post("/api/generate", json={"images": [IMG]}).status_code == 422
    assert client.post("/api/generate", json={"prompt": "", "images": []}).status_code == 422
    assert called == []
