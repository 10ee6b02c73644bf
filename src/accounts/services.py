import logging
from dataclasses import dataclass

import bcrypt
from django.db import IntegrityError, transaction
from eth_utils import is_hex_address

from src.accounts.models import Account
from src.accounts.selectors import account_exists, normalize_address
from src.accounts.signatures import (
    DisplayNameFormatError,
    SignatureError,
    verify_display_name,
    verify_password_signature,
)
from src.core.exceptions import BadGatewayError, BadRequestError, DomainConflictError
from src.homeserver.client import (
    HomeserverClient,
    HomeserverError,
    RegistrationResult,
    get_homeserver_client,
)

logger = logging.getLogger(__name__)

# len("0x" + 40 hex digits)
ADDRESS_LENGTH = 42
# bcrypt only reads the first 72 bytes; recent releases reject longer input
BCRYPT_MAX_BYTES = 72


class AccountConflictError(DomainConflictError):
    def __init__(self, address: str):
        super().__init__(
            message="already exists",
            code="ACCOUNT_EXISTS",
            errors={"localpart": ["already registered"]},
            extra={"address": address},
        )


@dataclass
class RegistrationRequest:
    address: str
    display_name: str
    raw_secret: str


def hash_secret(secret: str) -> str:
    raw = secret.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("ascii")


def account_create(*, address: str, display_name: str, password_hash: str) -> Account:
    """
    Insert-if-absent. The primary key is the only authority on uniqueness:
    a racing second insert for the same address fails with AccountConflictError.
    """
    try:
        with transaction.atomic():
            return Account.objects.create(
                address=normalize_address(address),
                display_name=display_name,
                password_hash=password_hash,
            )
    except IntegrityError as exc:
        raise AccountConflictError(address) from exc


def _validate_address(address: str) -> None:
    if len(address) != ADDRESS_LENGTH:
        raise BadRequestError(
            message=f"localpart length err got={address}",
            code="ADDRESS_LENGTH_INVALID",
        )
    if not is_hex_address(address):
        raise BadRequestError(message=f"localpart is not an address got={address}", code="ADDRESS_INVALID")


def _verify_proofs(req: RegistrationRequest) -> None:
    try:
        verify_password_signature(req.address, req.raw_secret)
    except SignatureError as exc:
        raise BadRequestError(message=str(exc), code="PASSWORD_SIGNATURE_INVALID") from exc

    try:
        verify_display_name(req.address, req.display_name)
    except DisplayNameFormatError as exc:
        raise BadRequestError(message=str(exc), code="DISPLAYNAME_FORMAT_INVALID") from exc
    except SignatureError as exc:
        raise BadRequestError(message=str(exc), code="DISPLAYNAME_SIGNATURE_INVALID") from exc


def account_register(
    *,
    localpart: str,
    displayname: str,
    password: str,
    forwarder: HomeserverClient | None = None,
) -> RegistrationResult:
    """
    Claim a homeserver account for an address.

    Order matters: format checks, then both signatures, then the registry,
    then the single forward. Nothing touches the database or the network
    for a malformed or unauthenticated request.

    The "password" is itself the signature of the address; that hex string is
    what gets bcrypt-hashed and forwarded as password_hash.
    """
    req = RegistrationRequest(address=localpart, display_name=displayname, raw_secret=password)

    _validate_address(req.address)
    _verify_proofs(req)

    if account_exists(address=req.address):
        raise AccountConflictError(req.address)

    password_hash = hash_secret(req.raw_secret)
    req.raw_secret = ""

    forwarder = forwarder or get_homeserver_client()
    try:
        result = forwarder.register(
            localpart=req.address,
            displayname=req.display_name,
            password_hash=password_hash,
        )
    except HomeserverError as exc:
        logger.error("homeserver registration failed for %s: %s", req.address, exc)
        raise BadGatewayError(message=str(exc), code="HOMESERVER_UNAVAILABLE") from exc

    # The homeserver accepted; a concurrent winner surfaces here as a conflict.
    account_create(address=req.address, display_name=req.display_name, password_hash=password_hash)
    logger.info("registered %s as %s", req.address, result.user_id)
    return result
