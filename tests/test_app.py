"""Tests for the HTTP service."""

import pytest
from fastapi.testclient import TestClient

import main
from config import Settings
from simplify.errors import UnfoldRootError

HTML = '<html><body><div><div><a href="/x">Go</a></div></div><script>x()</script></body></html>'


@pytest.fixture
def client() -> TestClient:
    return TestClient(main.app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_simplify(client: TestClient) -> None:
    response = client.post("/simplify", json={"html": HTML, "pretty": False})

    assert response.status_code == 200
    body = response.json()
    assert body["html"] == '<body><a href="/x">Go</a></body>'
    assert body["simplified_node_count"] < body["source_node_count"]
    assert body["original_html"] is None


def test_simplify_with_original_and_viewport(client: TestClient) -> None:
    response = client.post(
        "/simplify",
        json={"html": HTML, "include_original": True, "viewport": {"width": 800, "height": 600}},
    )

    assert response.status_code == 200
    assert "x()" in response.json()["original_html"]


def test_unknown_field_is_rejected(client: TestClient) -> None:
    response = client.post("/simplify", json={"html": HTML, "mode": "fast"})
    assert response.status_code == 422


def test_empty_html_is_rejected(client: TestClient) -> None:
    response = client.post("/simplify", json={"html": ""})
    assert response.status_code == 422


def test_invalid_viewport_is_rejected(client: TestClient) -> None:
    response = client.post("/simplify", json={"html": HTML, "viewport": {"width": 0, "height": 10}})
    assert response.status_code == 422


def test_oversized_snapshot_is_rejected(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "settings", Settings(max_html_bytes=10))

    response = client.post("/simplify", json={"html": HTML})

    assert response.status_code == 413


def test_failed_pass_is_reported(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(*args, **kwargs):
        raise UnfoldRootError("cannot unfold <body>: it has no parent")

    monkeypatch.setattr(main, "simplify_html", failing)

    response = client.post("/simplify", json={"html": HTML})

    assert response.status_code == 422
    assert response.json() == {
        "error": "UnfoldRootError",
        "detail": "cannot unfold <body>: it has no parent",
    }
