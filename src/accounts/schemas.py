from ninja import Schema
from pydantic import field_validator


class RegistrationPayload(Schema):
    """
    {
        "localpart": "0x...",            # the claimed address
        "displayname": "alice-<sig>",    # label plus signature of the address
        "password": "<sig>",             # signature of the address, hex
        "password_hash": "..."           # ignored, computed server side
    }
    """

    localpart: str
    displayname: str
    password: str
    password_hash: str | None = None

    @field_validator("localpart", "displayname", "password")
    @classmethod
    def _not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("field is required")
        return v


class RegistrationResponse(Schema):
    access_token: str
    home_server: str
    user_id: str
