from __future__ import annotations

import base64
import hashlib
import json
from typing import Any

CHECKSUM_SEPARATOR = "###"


def encode_payload(payload: dict[str, Any]) -> str:
    """Base64 of the compact JSON form of `payload`, as sent in the request body."""
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def compute_checksum(payload: str | bytes, route: str, secret: str, key_index: int) -> str:
    payload_bytes = payload if isinstance(payload, bytes) else payload.encode("utf-8")
    digest = hashlib.sha256(payload_bytes + route.encode("utf-8") + secret.encode("utf-8")).hexdigest()
    return f"{digest}{CHECKSUM_SEPARATOR}{key_index}"


class ChecksumSigner:
    def __init__(self, secret: str, key_index: int = 1) -> None:
        if not secret:
            raise ValueError("Checksum secret is required")
        self._secret = secret
        self._key_index = key_index

    @property
    def key_index(self) -> int:
        return self._key_index

    def sign(self, payload: str | bytes, route: str) -> str:
        return compute_checksum(payload, route, self._secret, self._key_index)
