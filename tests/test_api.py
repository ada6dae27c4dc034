import base64

import pytest
from fastapi.testclient import TestClient

from hamlab.config import Settings
from hamlab.main import create_app


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(data_dir=tmp_path, flip_probability=0.0))
    return TestClient(app)


def test_encode_then_clean_decode(client):
    response = client.post("/api/encode", json={"data": b64(b"\x00\xFF")})
    assert response.status_code == 200
    body = response.json()
    assert base64.b64decode(body["encoded"]) == b"\x00\x00\xFF\xFF"
    assert body["output_bytes"] == 4

    response = client.post("/api/decode", json={"encoded": body["encoded"]})
    assert response.status_code == 200
    body = response.json()
    assert base64.b64decode(body["decoded"]) == b"\x00\xFF"
    assert body["corrected"] == 0
    assert body["events"] == []


def test_decode_reports_correction_events(client):
    damaged = bytes([255 ^ 0b00100000, 255])
    response = client.post("/api/decode", json={"encoded": b64(damaged)})
    body = response.json()
    assert base64.b64decode(body["decoded"]) == b"\xFF"
    assert body["events"] == [
        {"codeword_index": 0, "byte_index": 0, "kind": "corrected", "position": 3}
    ]


def test_seeded_decode_is_reproducible(client):
    encoded = client.post("/api/encode", json={"data": b64(bytes(range(64)))}).json()["encoded"]
    request = {"encoded": encoded, "seed": 17, "flip_probability": 0.4, "double_flip": 0.3}
    first = client.post("/api/decode", json=request).json()
    second = client.post("/api/decode", json=request).json()
    assert first == second
    assert first["channel"]["codewords"] == 128


def test_odd_length_is_bad_request(client):
    response = client.post("/api/decode", json={"encoded": b64(b"\x00\x1e\x2d")})
    assert response.status_code == 400


def test_invalid_base64_is_bad_request(client):
    response = client.post("/api/encode", json={"data": "not base64!"})
    assert response.status_code == 400


def test_transmit_and_download_artifacts(client):
    assert client.get("/api/artifacts/decoded").status_code == 404

    response = client.post("/api/transmit", json={"data": b64(b"hello"), "seed": 1})
    assert response.status_code == 200
    body = response.json()
    assert base64.b64decode(body["decoded"]) == b"hello"
    assert body["codewords"] == 10

    encoded = client.get("/api/artifacts/encoded")
    assert encoded.status_code == 200
    assert len(encoded.content) == 10
    assert client.get("/api/artifacts/decoded").content == b"hello"


def test_channel_config_roundtrip(client):
    assert client.get("/api/config/channel").json() == {"flip_probability": 0.0, "double_flip": 0.0}

    response = client.post("/api/config/channel", json={"flip_probability": 2.0, "double_flip": 0.5})
    assert response.json() == {"flip_probability": 1.0, "double_flip": 0.5}
    assert client.get("/api/config/channel").json()["flip_probability"] == 1.0


def test_metrics_snapshot(client):
    client.post("/api/transmit", json={"data": b64(b"abc")})
    snapshot = client.get("/api/metrics").json()
    assert snapshot["totals"]["codewords"] == 6
    assert snapshot["samples"]["encode"] == 1
