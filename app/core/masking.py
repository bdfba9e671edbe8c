# app/core/masking.py
"""
Masking of credentials before request/response bodies reach the logs.

Partner passwords and signatures travel in the JSON body, so every body the
middleware logs goes through ``SensitiveDataMasker.mask_sensitive_data`` first.
The partner password is written as ``[ENCRYPTED:<base64>]`` (AES-256-CBC, key
derived from ``log_encryption_key``) so it can be recovered for audits; every
other sensitive value becomes ``[MASKED]``.
"""
import base64
import hashlib
import json
import logging
import os
import re
from typing import Any, Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

MASK = "[MASKED]"
EMPTY = "[EMPTY]"
ENCRYPTION_ERROR = "[ENCRYPTION_ERROR]"

ENCRYPTED_FIELDS = ("partnerpassword",)

SENSITIVE_FIELDS = (
    "password", "partnerpassword", "sig", "signature",
    "token", "apikey", "secret", "authorization",
)

SENSITIVE_HEADERS = (
    "authorization", "api-key", "x-api-key", "cookie", "set-cookie",
)

_PASSWORD_PATTERN = re.compile(r'"((?:partner)?password)"\s*:\s*"([^"]*)"', re.IGNORECASE)
_SIGNATURE_PATTERN = re.compile(r'"(sig|signature)"\s*:\s*"[^"]*"', re.IGNORECASE)

_IV_SIZE = 16


def is_sensitive_field(name: str) -> bool:
    lowered = name.lower()
    return any(field in lowered for field in SENSITIVE_FIELDS)


def is_sensitive_header(name: str) -> bool:
    return name.lower() in SENSITIVE_HEADERS


def mask_headers(headers: Any) -> dict:
    return {
        key: MASK if is_sensitive_header(key) else value
        for key, value in headers.items()
    }


class SensitiveDataMasker:
    """Encrypts partner passwords and masks other credentials in logged bodies"""

    def __init__(self, encryption_key: str):
        # 256-bit AES key from the configured passphrase
        self._key = hashlib.sha256(encryption_key.encode("utf-8")).digest()

    def encrypt_for_logging(self, value: Optional[str]) -> str:
        """AES-256-CBC, random IV prepended to the ciphertext, base64 encoded"""
        if not value:
            return EMPTY

        try:
            iv = os.urandom(_IV_SIZE)
            padder = padding.PKCS7(algorithms.AES.block_size).padder()
            padded = padder.update(value.encode("utf-8")) + padder.finalize()
            encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
            ciphertext = encryptor.update(padded) + encryptor.finalize()
            return base64.b64encode(iv + ciphertext).decode("ascii")
        except (ValueError, TypeError):
            logger.warning("Could not encrypt value for logging", exc_info=True)
            return ENCRYPTION_ERROR

    def decrypt_from_logging(self, token: str) -> str:
        """Recover a value written by ``encrypt_for_logging`` (audit use)"""
        raw = base64.b64decode(token)
        iv, ciphertext = raw[:_IV_SIZE], raw[_IV_SIZE:]
        decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")

    def _encrypted(self, value: Any) -> str:
        return f"[ENCRYPTED:{self.encrypt_for_logging(None if value is None else str(value))}]"

    def _mask_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            masked = {}
            for key, item in value.items():
                if key.lower() in ENCRYPTED_FIELDS:
                    masked[key] = self._encrypted(item)
                elif is_sensitive_field(key):
                    masked[key] = MASK
                else:
                    masked[key] = self._mask_value(item)
            return masked
        if isinstance(value, list):
            return [self._mask_value(item) for item in value]
        return value

    def mask_sensitive_data(self, content: str) -> str:
        """Return ``content`` with credentials encrypted or masked.

        Non-JSON content (truncated bodies, form data) falls back to regex
        handling of the password and signature fields.
        """
        if not content:
            return content

        try:
            parsed = json.loads(content)
        except ValueError:
            masked = _PASSWORD_PATTERN.sub(
                lambda m: f'"{m.group(1)}": "{self._encrypted(m.group(2))}"', content
            )
            return _SIGNATURE_PATTERN.sub(lambda m: f'"{m.group(1)}": "{MASK}"', masked)

        return json.dumps(self._mask_value(parsed), ensure_ascii=False)
