import pytest

from conftest import make_holder, sign_hex
from src.accounts.signatures import (
    DisplayNameFormatError,
    SignatureError,
    decode_signature,
    recover_address,
    signature_from_display_name,
    verify_display_name,
    verify_password_signature,
    verify_signature,
)


def test_recover_address_returns_the_signer(holder):
    sig = bytes.fromhex(holder.password)
    assert recover_address(holder.address, sig) == holder.address


def test_verify_signature_accepts_ethereum_style_v(holder):
    sig = bytearray(bytes.fromhex(holder.password))
    sig[-1] += 27
    verify_signature(holder.address, bytes(sig), holder.address)


def test_verify_signature_is_case_insensitive_on_address(holder):
    sig = bytes.fromhex(holder.password)
    verify_signature(holder.address.lower(), sig, holder.address)


def test_signature_over_other_message_is_rejected(holder):
    sig = bytes.fromhex(sign_hex(holder.private_key, "something else"))
    with pytest.raises(SignatureError):
        verify_signature(holder.address, sig, holder.address)


def test_signature_from_other_key_is_rejected(holder, other_holder):
    # bob signs alice's address
    sig = bytes.fromhex(sign_hex(other_holder.private_key, holder.address))
    with pytest.raises(SignatureError):
        verify_signature(holder.address, sig, holder.address)


def test_decode_signature_rejects_non_hex():
    with pytest.raises(SignatureError):
        decode_signature("zz" * 65)


def test_decode_signature_rejects_wrong_length():
    with pytest.raises(SignatureError):
        decode_signature("ab" * 64)


def test_decode_signature_rejects_0x_prefix(holder):
    with pytest.raises(SignatureError):
        decode_signature("0x" + holder.password)


def test_display_name_segment_with_0x_prefix_fails_decoding(holder):
    # 130 characters, but only 128 of them are hex digits
    display_name = "alice-0x" + holder.password[:128]
    with pytest.raises(SignatureError):
        signature_from_display_name(display_name)


def test_verify_password_signature_returns_decoded_bytes(holder):
    assert verify_password_signature(holder.address, holder.password) == bytes.fromhex(holder.password)


def test_verify_password_signature_rejects_garbage(holder):
    with pytest.raises(SignatureError):
        verify_password_signature(holder.address, "not-hex")


def test_display_name_with_label_and_signature_parses(holder):
    assert signature_from_display_name(holder.displayname) == bytes.fromhex(holder.password)


@pytest.mark.parametrize(
    "display_name",
    [
        "foo",
        "foo-bar-baz",
        "foo-" + "a" * 129,
        "foo-" + "a" * 131,
    ],
)
def test_display_name_format_errors_are_never_signature_errors(display_name):
    with pytest.raises(DisplayNameFormatError):
        signature_from_display_name(display_name)


def test_display_name_with_dash_in_label_is_a_format_error(holder):
    with pytest.raises(DisplayNameFormatError):
        signature_from_display_name(f"alice-smith-{holder.password}")


def test_display_name_with_non_hex_signature_is_a_signature_error():
    with pytest.raises(SignatureError):
        signature_from_display_name("foo-" + "z" * 130)


def test_verify_display_name_for_other_address_fails(holder, other_holder):
    with pytest.raises(SignatureError):
        verify_display_name(other_holder.address, holder.displayname)


def test_verify_display_name_ok(holder):
    verify_display_name(holder.address, holder.displayname)


def test_each_holder_signs_its_own_address():
    a, b = make_holder(seed=3), make_holder(seed=4)
    assert a.address != b.address
    verify_password_signature(a.address, a.password)
    with pytest.raises(SignatureError):
        verify_password_signature(b.address, a.password)
