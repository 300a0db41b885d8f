"""
Field Cipher

Symmetric encryption of individual PII strings at rest.

Stored format is ``hex(iv):hex(ciphertext)`` using AES-256-CBC with PKCS7
padding. The key is derived once per cipher instance with scrypt from the
server secret and a fixed salt; every call draws a fresh IV, so equal
plaintexts never produce equal ciphertexts.

Values written before encryption was introduced are plain text. decrypt()
hands those back untouched.
"""

import logging
import os
from typing import Any, Dict, Iterable, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from hrms_auth.app.services.security_log import log_security_event, preview
from hrms_auth.domain.entities import SENSITIVE_FIELDS

logger = logging.getLogger(__name__)

IV_LENGTH = 16
KEY_LENGTH = 32
SEPARATOR = ":"


class FieldDecryptionError(ValueError):
    """Raised by a strict cipher when a value looks encrypted but cannot be decrypted"""


class FieldCipher:
    """
    AES-256-CBC field cipher.

    By default decryption fails open: anything that cannot be decrypted is
    returned as given and a security event is logged. With strict=True the
    same cases raise FieldDecryptionError instead.
    """

    def __init__(self, secret: str, salt: str, strict: bool = False):
        if not secret:
            raise ValueError("Field cipher secret must not be empty")
        kdf = Scrypt(salt=salt.encode("utf-8"), length=KEY_LENGTH, n=2**14, r=8, p=1)
        self._key = kdf.derive(secret.encode("utf-8"))
        self.strict = strict

    @classmethod
    def from_settings(cls, settings) -> "FieldCipher":
        return cls(
            settings.encryption_key,
            settings.encryption_salt,
            strict=settings.field_cipher_strict,
        )

    def encrypt(self, plaintext: Optional[str]) -> Optional[str]:
        """Encrypt a value; None or "" yields None"""
        if not plaintext:
            return None

        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError as exc:
            log_security_event("FIELD_ENCRYPTION_FAILED", "high", reason=type(exc).__name__)
            return None

        iv = os.urandom(IV_LENGTH)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(data) + padder.finalize()
        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return f"{iv.hex()}{SEPARATOR}{ciphertext.hex()}"

    def decrypt(self, value: Optional[str]) -> Optional[str]:
        """
        Decrypt a stored value.

        - None or "": None
        - no separator: legacy plain text, returned unchanged
        - anything else that fails to decrypt: the input (or FieldDecryptionError when strict)
        """
        if not value:
            return None

        if SEPARATOR not in value:
            logger.debug("Field value has no separator, treating as legacy plain text")
            return value

        parts = value.split(SEPARATOR)
        if len(parts) != 2:
            return self._fail(value, "unexpected_format", parts=len(parts))

        try:
            iv = bytes.fromhex(parts[0])
            ciphertext = bytes.fromhex(parts[1])
            decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
            return plaintext.decode("utf-8")
        except ValueError as exc:
            # bad hex, wrong IV size, partial block, bad padding and bad UTF-8 all land here
            return self._fail(value, "decryption_failed", error=type(exc).__name__)

    def _fail(self, value: str, reason: str, **context: Any) -> str:
        log_security_event(
            "FIELD_DECRYPTION_FAILED",
            "medium",
            reason=reason,
            data_format=preview(value, 20),
            **context,
        )
        if self.strict:
            raise FieldDecryptionError(reason)
        return value


def encrypt_sensitive_fields(
    cipher: FieldCipher, data: Dict[str, Any], fields: Iterable[str] = SENSITIVE_FIELDS
) -> Dict[str, Any]:
    """Copy of data with each PII field encrypted; empty values become None"""
    result = dict(data)
    for field in fields:
        if field in result:
            result[field] = cipher.encrypt(result[field]) if result[field] else None
    return result


def decrypt_sensitive_fields(
    cipher: FieldCipher, data: Dict[str, Any], fields: Iterable[str] = SENSITIVE_FIELDS
) -> Dict[str, Any]:
    """Copy of data with each PII field decrypted; empty values become None"""
    result = dict(data)
    for field in fields:
        if field in result:
            result[field] = cipher.decrypt(result[field]) if result[field] else None
    return result
