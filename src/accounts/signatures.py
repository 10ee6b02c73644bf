from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError as EthKeysValidationError
from eth_utils import decode_hex, is_0x_prefixed, keccak

SIGNATURE_LENGTH = 65  # r (32) || s (32) || v (1)
SIGNATURE_HEX_LENGTH = SIGNATURE_LENGTH * 2
DISPLAY_NAME_SEPARATOR = "-"


class SignatureError(ValueError):
    pass


class DisplayNameFormatError(ValueError):
    pass


def decode_signature(value: str) -> bytes:
    """Bare hex (no 0x prefix) -> 65 signature bytes."""
    if is_0x_prefixed(value):
        raise SignatureError("signature must be bare hex without a 0x prefix")
    try:
        raw = decode_hex(value)
    except (TypeError, ValueError) as exc:
        raise SignatureError(f"signature is not valid hex: {exc}") from exc
    if len(raw) != SIGNATURE_LENGTH:
        raise SignatureError(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
    return raw


def recover_address(message: str, signature: bytes) -> str:
    """
    Recover the checksum address that signed keccak256(message).
    Accepts v in {0, 1} (raw secp256k1) as well as {27, 28} (Ethereum style).
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise SignatureError(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
    v = signature[-1]
    if v >= 27:
        signature = signature[:-1] + bytes([v - 27])
    try:
        sig = keys.Signature(signature_bytes=signature)
        public_key = sig.recover_public_key_from_msg_hash(keccak(text=message))
    except (BadSignature, EthKeysValidationError) as exc:
        raise SignatureError(f"signature recovery failed: {exc}") from exc
    return public_key.to_checksum_address()


def verify_signature(address: str, signature: bytes, message: str) -> None:
    recovered = recover_address(message, signature)
    if recovered.lower() != address.lower():
        raise SignatureError(f"signature does not match address {address}")


def verify_password_signature(address: str, password: str) -> bytes:
    """
    The password field is a signature of the literal address string.
    Returns the decoded signature bytes.
    """
    signature = decode_signature(password)
    verify_signature(address, signature, address)
    return signature


def signature_from_display_name(display_name: str) -> bytes:
    # <label>-<130 hex chars>
    segments = display_name.split(DISPLAY_NAME_SEPARATOR)
    if len(segments) != 2:
        raise DisplayNameFormatError(f"display name format error {display_name}")
    sig_hex = segments[1]
    if len(sig_hex) != SIGNATURE_HEX_LENGTH:
        raise DisplayNameFormatError(
            f"display name signature must be {SIGNATURE_HEX_LENGTH} hex characters, got {len(sig_hex)}"
        )
    return decode_signature(sig_hex)


def verify_display_name(address: str, display_name: str) -> None:
    signature = signature_from_display_name(display_name)
    verify_signature(address, signature, address)
