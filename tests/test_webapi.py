import pytest

from insulplan.webapi import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


VALID = {"length": "1", "height": "1", "width": "0.1", "velocity": "1"}


def test_hello(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.data == b"Hello world!"


def test_hey(client):
    response = client.get("/hey")
    assert response.status_code == 200
    assert response.data == b"Hey there!"


def test_echo_returns_body(client):
    response = client.post("/echo", data=b"some body text")
    assert response.status_code == 200
    assert response.data == b"some body text"


def test_hello_rejects_post(client):
    assert client.post("/").status_code == 405


def test_generateplan_requires_parameters(client):
    response = client.get("/generateplan")
    assert response.status_code == 400
    assert b"request_id" in response.data


def test_generateplan_rejects_non_numeric(client):
    response = client.get("/generateplan", query_string={**VALID, "request_id": "1", "length": "x"})
    assert response.status_code == 400


def test_generateplan_rejects_unknown_building(client):
    response = client.get("/generateplan", query_string={**VALID, "request_id": "7"})
    assert response.status_code == 400
    assert b"unsupported request id" in response.data


def test_cors_header_sent_for_cross_origin_requests(client):
    response = client.get("/", headers={"Origin": "http://app.example.com"})
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "Access-Control-Allow-Origin" not in client.get("/").headers