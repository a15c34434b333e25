"""
Signed continuation tokens.

The continuation protocol is stateless on the server: everything needed to
generate the next segment travels inside the token. Tokens are base64url JSON
with an HMAC-SHA256 signature so clients cannot alter the carried state.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Dict

from .exceptions import ValidationError

TOKEN_VERSION = 1


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    padding = "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(text + padding)


class ContinuationTokenCodec:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Continuation token secret must not be empty")
        self._key = secret.encode("utf-8")

    def _sign(self, body: str) -> str:
        return hmac.new(self._key, body.encode("utf-8"), hashlib.sha256).hexdigest()

    def encode(self, payload: Dict[str, Any]) -> str:
        document = {"v": TOKEN_VERSION, "data": payload}
        body = _b64encode(json.dumps(document, separators=(",", ":"), sort_keys=True).encode("utf-8"))
        return f"{body}.{self._sign(body)}"

    def decode(self, token: str) -> Dict[str, Any]:
        if not token or token.count(".") != 1:
            raise ValidationError("Malformed continuation token")

        body, signature = token.split(".")
        if not hmac.compare_digest(signature.encode("utf-8"), self._sign(body).encode("utf-8")):
            raise ValidationError("Continuation token signature mismatch")

        try:
            document = json.loads(_b64decode(body))
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("Malformed continuation token") from exc

        if not isinstance(document, dict) or document.get("v") != TOKEN_VERSION:
            raise ValidationError("Unsupported continuation token version")
        data = document.get("data")
        if not isinstance(data, dict):
            raise ValidationError("Malformed continuation token")
        return data
