"""
Service Tests
=============

HTTP surface of the FastAPI adapter.
"""

import pytest
from fastapi.testclient import TestClient

from safety_scanner.main import app
from safety_scanner.orchestrator import graph as scan_graph


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestProbes:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "SafetyScanner"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_reports_backend_state(self, client):
        response = client.get("/ready")
        body = response.json()

        assert response.status_code == 200
        assert body["status"] == "ready"
        assert body["accelerated_backend"] in {"uninitialized", "initializing", "ready", "failed"}

    def test_metrics(self, client):
        body = client.get("/metrics").json()
        assert body["orchestrator"]["state"] == "idle"


class TestScanEndpoint:

    def test_scan_png(self, client, white_frame, encode_png):
        response = client.post("/scan", json={"image": encode_png(white_frame)})
        body = response.json()

        assert response.status_code == 200
        assert body["method"] in {"basic", "accelerated"}
        assert 0 <= body["safety_score"] <= 100
        assert body["recommendations"]
        assert body["error"] is None

    def test_scan_data_url(self, client, black_frame, encode_png):
        image = "data:image/png;base64," + encode_png(black_frame)
        body = client.post("/scan", json={"image": image}).json()

        assert body["brightness"]["status"] == "dark"
        assert body["safety_score"] <= 60

    def test_empty_image_is_error_result(self, client):
        response = client.post("/scan", json={"image": ""})
        body = response.json()

        assert response.status_code == 200
        assert body["method"] == "error"
        assert body["safety_score"] == 50
        assert len(body["recommendations"]) == 1

    def test_garbage_image_is_error_result(self, client):
        body = client.post("/scan", json={"image": "%%% not an image %%%"}).json()
        assert body["method"] == "error"

    def test_back_to_back_scans(self, client, white_frame, encode_png):
        """The service resets after every scan."""
        image = encode_png(white_frame)
        assert client.post("/scan", json={"image": image}).status_code == 200
        assert client.post("/scan", json={"image": image}).status_code == 200
        assert client.get("/metrics").json()["orchestrator"]["state"] == "idle"


class TestRecovery:
    """An unexpected scan error must not wedge the service."""

    def test_unexpected_error_then_successful_scans(self, monkeypatch, white_frame, encode_png):
        real_score = scan_graph.compute_safety_score
        calls = []

        def fail_first_time(*args):
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("transient scoring failure")
            return real_score(*args)

        monkeypatch.setattr(scan_graph, "compute_safety_score", fail_first_time)
        image = encode_png(white_frame)

        with TestClient(app, raise_server_exceptions=False) as client:
            statuses = [
                client.post("/scan", json={"image": image}).status_code
                for _ in range(3)
            ]
            state = client.get("/metrics").json()["orchestrator"]["state"]

        assert statuses == [500, 200, 200]
        assert state == "idle"
