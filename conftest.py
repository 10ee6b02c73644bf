from types import SimpleNamespace as NS

import pytest
from eth_keys import keys
from eth_utils import keccak

from src.homeserver.client import HomeserverError, RegistrationResult


def sign_hex(private_key: keys.PrivateKey, message: str) -> str:
    return private_key.sign_msg_hash(keccak(text=message)).to_bytes().hex()


def make_holder(seed: int = 1, label: str = "alice"):
    private_key = keys.PrivateKey(bytes([seed]) * 32)
    address = private_key.public_key.to_checksum_address()
    signature = sign_hex(private_key, address)
    return NS(
        private_key=private_key,
        address=address,
        password=signature,
        displayname=f"{label}-{signature}",
    )


class FakeForwarder:
    """Stands in for HomeserverClient; records every call."""

    def __init__(self, *, error: Exception | None = None, home_server: str = "hs.test"):
        self.calls = []
        self.error = error
        self.home_server = home_server

    def register(self, *, localpart, displayname, password_hash):
        self.calls.append(
            {"localpart": localpart, "displayname": displayname, "password_hash": password_hash}
        )
        if self.error is not None:
            raise self.error
        return RegistrationResult(
            access_token="syt_token",
            home_server=self.home_server,
            user_id=f"@{localpart.lower()}:{self.home_server}",
        )


@pytest.fixture
def holder():
    return make_holder()


@pytest.fixture
def other_holder():
    return make_holder(seed=2, label="bob")


@pytest.fixture
def forwarder():
    return FakeForwarder()


@pytest.fixture
def failing_forwarder():
    return FakeForwarder(error=HomeserverError("homeserver request failed: ReadTimeout"))
