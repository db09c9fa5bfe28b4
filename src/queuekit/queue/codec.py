"""Payload codec for queue message bodies.

Wire format, applied in this order and reversed symmetrically:

1. serialize the value (pickle by default, or JSON)
2. compress with zlib (level 9 by default)
3. base64-encode into ASCII text

The receiving side checks the provider-supplied MD5 of the raw body with
:func:`body_checksum` before calling :meth:`PayloadCodec.decode`.
"""

import base64
import binascii
import hashlib
import json
import pickle
import zlib
from typing import Any

from queuekit.exceptions import ConfigurationError, DecodeError

SERIALIZERS = ("pickle", "json")


def body_checksum(body: str) -> str:
    """Return the hex MD5 digest of a message body, as SQS computes MD5OfBody."""
    return hashlib.md5(body.encode("utf-8")).hexdigest()


class PayloadCodec:
    """Turns application values into text-safe message bodies and back."""

    def __init__(self, serializer: str = "pickle", compression_level: int = 9):
        """
        Initialize codec.

        Args:
            serializer: ``"pickle"`` or ``"json"``
            compression_level: zlib level, 0-9

        Raises:
            ConfigurationError: If the serializer or level is not supported
        """
        if serializer not in SERIALIZERS:
            raise ConfigurationError(
                f"Unknown serializer: {serializer}. Available: {', '.join(SERIALIZERS)}"
            )
        if not 0 <= compression_level <= 9:
            raise ConfigurationError(f"Invalid compression level: {compression_level}")

        self.serializer = serializer
        self.compression_level = compression_level

    def encode(self, value: Any) -> str:
        """Serialize, compress and base64-encode a value."""
        compressed = zlib.compress(self._serialize(value), self.compression_level)
        return base64.b64encode(compressed).decode("ascii")

    def decode(self, body: str) -> Any:
        """
        Reverse :meth:`encode`.

        Raises:
            DecodeError: If any stage of the pipeline fails
        """
        try:
            compressed = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 body: {e}") from e

        try:
            data = zlib.decompress(compressed)
        except zlib.error as e:
            raise DecodeError(f"Failed to decompress body: {e}") from e

        return self._deserialize(data)

    def _serialize(self, value: Any) -> bytes:
        if self.serializer == "json":
            return json.dumps(value, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def _deserialize(self, data: bytes) -> Any:
        try:
            if self.serializer == "json":
                return json.loads(data.decode("utf-8"))
            return pickle.loads(data)
        except Exception as e:
            # pickle can raise almost anything on foreign input
            raise DecodeError(f"Failed to deserialize body: {e}") from e
