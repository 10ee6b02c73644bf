import json

import pytest
from django.db import DatabaseError

from conftest import FakeForwarder
from src.accounts import services
from src.accounts.models import Account
from src.homeserver.client import HomeserverError


@pytest.fixture
def fake_homeserver(monkeypatch):
    fake = FakeForwarder()
    monkeypatch.setattr(services, "get_homeserver_client", lambda: fake)
    return fake


def post_register(client, body, **extra):
    data = body if isinstance(body, str) else json.dumps(body)
    return client.post("/register", data=data, content_type="application/json", **extra)


def payload_for(holder, **overrides):
    body = {
        "localpart": holder.address,
        "displayname": holder.displayname,
        "password": holder.password,
    }
    body.update(overrides)
    return body


@pytest.mark.django_db
def test_register_relays_homeserver_response(client, holder, fake_homeserver):
    resp = post_register(client, payload_for(holder))

    assert resp.status_code == 200
    assert resp.json() == {
        "access_token": "syt_token",
        "home_server": "hs.test",
        "user_id": f"@{holder.address.lower()}:hs.test",
    }
    assert Account.objects.filter(pk=holder.address.lower()).exists()


@pytest.mark.django_db
def test_caller_password_hash_is_ignored(client, holder, fake_homeserver):
    resp = post_register(client, payload_for(holder, password_hash="$2b$12$attacker-chosen"))

    assert resp.status_code == 200
    assert fake_homeserver.calls[0]["password_hash"] != "$2b$12$attacker-chosen"


@pytest.mark.django_db
def test_second_registration_is_409(client, holder, fake_homeserver):
    assert post_register(client, payload_for(holder)).status_code == 200

    resp = post_register(client, payload_for(holder))

    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["code"] == "ACCOUNT_EXISTS"
    assert len(fake_homeserver.calls) == 1


@pytest.mark.django_db
def test_insert_lost_to_a_concurrent_winner_is_409(client, holder, fake_homeserver, monkeypatch):
    # the winner lands between our existence check and our insert
    monkeypatch.setattr(services, "account_exists", lambda *, address: False)
    Account.objects.create(address=holder.address.lower(), display_name="winner", password_hash="h")

    resp = post_register(client, payload_for(holder))

    assert resp.status_code == 409
    body = resp.json()
    assert body["code"] == "ACCOUNT_EXISTS"
    assert body["extra"] == {"address": holder.address}
    assert len(fake_homeserver.calls) == 1


def test_malformed_json_is_400(client, fake_homeserver):
    resp = post_register(client, "{not json")

    assert resp.status_code == 400
    assert resp.json()["code"] == "BAD_REQUEST"
    assert fake_homeserver.calls == []


def test_missing_field_is_400(client, holder, fake_homeserver):
    body = payload_for(holder)
    del body["password"]

    resp = post_register(client, body)

    assert resp.status_code == 400
    assert resp.json()["code"] == "BAD_REQUEST"


def test_bad_address_length_is_400(client, holder, fake_homeserver):
    resp = post_register(client, payload_for(holder, localpart="0xabc"))

    assert resp.status_code == 400
    assert resp.json()["code"] == "ADDRESS_LENGTH_INVALID"
    assert fake_homeserver.calls == []


def test_bad_password_signature_is_400(client, holder, other_holder, fake_homeserver):
    resp = post_register(client, payload_for(holder, password=other_holder.password))

    assert resp.status_code == 400
    assert resp.json()["code"] == "PASSWORD_SIGNATURE_INVALID"


def test_bad_display_name_is_400(client, holder, fake_homeserver):
    resp = post_register(client, payload_for(holder, displayname="alice"))

    assert resp.status_code == 400
    assert resp.json()["code"] == "DISPLAYNAME_FORMAT_INVALID"


@pytest.mark.django_db
def test_homeserver_failure_is_502(client, holder, monkeypatch):
    fake = FakeForwarder(error=HomeserverError("homeserver answered 500: boom"))
    monkeypatch.setattr(services, "get_homeserver_client", lambda: fake)

    resp = post_register(client, payload_for(holder))

    assert resp.status_code == 502
    assert resp.json()["code"] == "HOMESERVER_UNAVAILABLE"
    assert not Account.objects.exists()


def test_registry_failure_is_500_not_a_registration(client, holder, fake_homeserver, monkeypatch):
    def broken(*, address):
        raise DatabaseError("connection lost")

    monkeypatch.setattr(services, "account_exists", broken)

    resp = post_register(client, payload_for(holder))

    assert resp.status_code == 500
    assert resp.json()["code"] == "INTERNAL_ERROR"
    assert fake_homeserver.calls == []


def test_request_id_is_echoed_in_errors(client, holder, fake_homeserver):
    resp = post_register(client, payload_for(holder, localpart="0x1"), HTTP_X_REQUEST_ID="req-42")

    assert resp.json()["request_id"] == "req-42"
