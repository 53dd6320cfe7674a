import pytest
from fastapi.testclient import TestClient

from addrbook.main import create_app
from addrbook.models.contact import AddressType, PartyType


@pytest.fixture()
def client(gateway):
    with TestClient(create_app(gateway=gateway)) as client:
        yield client


def _create_party(client, token):
    response = client.post(
        "/addrbook/CreateParty",
        headers={"token": token},
        json={
            "party_type": PartyType.person,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
        },
    )
    assert response.status_code == 200
    return response.json()


def test_health_needs_no_token(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_and_fetch_party(client, make_token):
    created = _create_party(client, make_token())
    assert created["error_code"] == 0
    assert created["error_message"] == ""
    party_id = created["data"]["party_id"]

    response = client.post(
        "/addrbook/GetParty",
        headers={"token": make_token(role="addrro")},
        json={"party_id": party_id},
    )
    body = response.json()
    assert body["error_code"] == 0
    assert body["data"]["last_name"] == "Lovelace"
    assert body["data"]["party_type_name"] == "person"
    assert body["data"]["version"] == 1


def test_failures_are_reported_in_the_body(client, make_token):
    response = client.post(
        "/addrbook/CreateParty",
        headers={"token": make_token(role="addrrw")},
        json={"party_type": PartyType.person, "first_name": "Ada"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "error_code": 401,
        "error_message": "not authorized",
        "data": None,
    }


def test_missing_token_header(client):
    response = client.post("/addrbook/GetParties", json={})
    assert response.json()["error_code"] == 401


def test_expired_token(client, make_token):
    response = client.post(
        "/addrbook/GetParties", headers={"token": make_token(expires_in=-5)}, json={}
    )
    assert response.json()["error_code"] == 498


def test_invalid_fields_message(client, make_token):
    response = client.post(
        "/addrbook/CreateParty",
        headers={"token": make_token()},
        json={"party_type": PartyType.person, "first_name": "Ada", "last_name": "L0velace"},
    )
    body = response.json()
    assert body["error_code"] == 406
    assert body["error_message"] == "invalid fields: last_name,email"


def test_malformed_body_gets_error_envelope(client, make_token):
    response = client.post("/addrbook/GetParty", headers={"token": make_token()}, json={})
    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == 406
    assert body["data"] is None
    assert "body.party_id" in body["details"]


def test_wrapper_round_trip(client, make_token):
    token = make_token()
    party_id = _create_party(client, token)["data"]["party_id"]
    address = client.post(
        "/addrbook/CreateAddress",
        headers={"token": token},
        json={
            "party_id": party_id,
            "address_type": AddressType.shipping,
            "address_1": "1 Market St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94105",
        },
    ).json()
    assert address["error_code"] == 0
    assert address["data"] == {"party_id": party_id, "address_type": 2, "version": 1}

    wrapper = client.post(
        "/addrbook/GetPartyWrapper", headers={"token": token}, json={"party_id": party_id}
    ).json()
    assert wrapper["error_code"] == 0
    assert [a["address_type_name"] for a in wrapper["data"]["addresses"]] == ["shipping"]
    assert wrapper["data"]["phones"] == []


def test_expired_request_timeout_header(client, make_token):
    response = client.post(
        "/addrbook/GetParties",
        headers={"token": make_token(), "x-request-timeout": "0"},
        json={},
    )
    body = response.json()
    assert body["error_code"] == 500
    assert body["error_message"] == "deadline exceeded"


def test_server_version_without_body_or_token(client):
    body = client.post("/addrbook/GetServerVersion").json()
    assert body["error_code"] == 0
    assert body["data"]["server_version"] == "v0.9.1"


def test_metrics_expose_call_counts(client, make_token):
    client.post("/addrbook/GetParties", headers={"token": make_token()}, json={})
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "addrbook_calls_total" in response.text
    assert 'endpoint="GetParties"' in response.text
