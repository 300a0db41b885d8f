import logging
import re

import pytest

from hrms_auth.app.services.field_cipher import (
    FieldCipher,
    FieldDecryptionError,
    decrypt_sensitive_fields,
    encrypt_sensitive_fields,
)

CIPHERTEXT_FORMAT = re.compile(r"^[0-9a-f]{32}:[0-9a-f]+$")


@pytest.mark.parametrize("value", ["ABCDE1234F", "1234-5678-9012", "ünïcødé ✓", "x" * 500])
def test_encrypt_then_decrypt_returns_original(cipher, value):
    encrypted = cipher.encrypt(value)

    assert encrypted != value
    assert CIPHERTEXT_FORMAT.match(encrypted)
    assert cipher.decrypt(encrypted) == value


def test_encrypt_uses_fresh_iv_per_call(cipher):
    first = cipher.encrypt("ABCDE1234F")
    second = cipher.encrypt("ABCDE1234F")

    assert first != second
    assert first.split(":")[0] != second.split(":")[0]


@pytest.mark.parametrize("value", [None, ""])
def test_encrypt_empty_returns_none(cipher, value):
    assert cipher.encrypt(value) is None


@pytest.mark.parametrize("value", [None, ""])
def test_decrypt_empty_returns_none(cipher, value):
    assert cipher.decrypt(value) is None


@pytest.mark.parametrize("value", [" ", "   ", "\t\n"])
def test_whitespace_only_values_round_trip(cipher, value):
    encrypted = cipher.encrypt(value)

    assert CIPHERTEXT_FORMAT.match(encrypted)
    assert cipher.decrypt(encrypted) == value


def test_decrypt_whitespace_legacy_value_passes_through(cipher):
    assert cipher.decrypt("  ") == "  "


def test_decrypt_legacy_plain_text_passes_through(cipher):
    assert cipher.decrypt("ABCDE1234F") == "ABCDE1234F"


@pytest.mark.parametrize(
    "value",
    [
        "a:b:c",  # too many parts
        "zz:yy",  # not hex
        "00ff:00ff",  # IV too short
        "00112233445566778899aabbccddeeff:0011",  # partial block
    ],
)
def test_decrypt_malformed_fails_open(cipher, value, caplog):
    with caplog.at_level(logging.WARNING, logger="hrms_auth.security"):
        result = cipher.decrypt(value)

    assert result == value
    assert "FIELD_DECRYPTION_FAILED" in caplog.text


def test_decrypt_with_wrong_key_fails_open():
    """Ciphertext from another key is returned as-is instead of garbage or an exception"""
    encrypted = FieldCipher("key-one", "salt").encrypt("secret-value")
    other = FieldCipher("key-two", "salt")

    result = other.decrypt(encrypted)

    # Wrong-key CBC can occasionally unpad cleanly; it must never equal the plaintext
    assert result != "secret-value"


def test_security_log_truncates_ciphertext(cipher, caplog):
    value = "00112233445566778899aabbccddeeff:" + "ab" * 40 + "0"

    with caplog.at_level(logging.WARNING, logger="hrms_auth.security"):
        cipher.decrypt(value)

    assert value not in caplog.text
    assert value[:20] + "..." in caplog.text


def test_strict_cipher_raises_on_malformed():
    strict = FieldCipher("unit-test-encryption-key", "salt", strict=True)

    with pytest.raises(FieldDecryptionError):
        strict.decrypt("a:b:c")

    # Legacy plain text is still accepted in strict mode
    assert strict.decrypt("ABCDE1234F") == "ABCDE1234F"


def test_same_secret_and_salt_interoperate():
    encrypted = FieldCipher("shared", "salt").encrypt("payload")

    assert FieldCipher("shared", "salt").decrypt(encrypted) == "payload"


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        FieldCipher("", "salt")


def test_sensitive_field_helpers(cipher):
    data = {
        "name": "Asha",
        "pan_card_number": "ABCDE1234F",
        "bank_account_number": "",
        "aadhaar_card_number": None,
        "pf_account_number": "PF-001",
    }

    encrypted = encrypt_sensitive_fields(cipher, data)

    assert encrypted["name"] == "Asha"
    assert encrypted["pan_card_number"] != "ABCDE1234F"
    assert encrypted["bank_account_number"] is None
    assert encrypted["aadhaar_card_number"] is None

    decrypted = decrypt_sensitive_fields(cipher, encrypted)

    assert decrypted["pan_card_number"] == "ABCDE1234F"
    assert decrypted["pf_account_number"] == "PF-001"
    assert decrypted["bank_account_number"] is None
    assert data["pan_card_number"] == "ABCDE1234F"  # input not mutated
