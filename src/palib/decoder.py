"""Decoder for the simplified configuration exported by PowerAuth Server 1.5+.

Layout (big-endian, ``count`` is the 1/2/4 byte length encoding of
:class:`palib.reader.ByteCursor`)::

    byte    version         must be 1
    block   appKey          non-empty
    block   appSecret       non-empty
    count   numberOfKeys
    repeat numberOfKeys times:
        byte    keyId
        block   keyData
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional

from .errors import InvalidEncoding, MalformedPayload, MissingRequiredKey, UnsupportedVersion
from .reader import ByteCursor, CursorExhausted

log = logging.getLogger("palib.decoder")

CONFIG_VERSION_1 = 1


class KeyId(IntEnum):
    P256 = 1


@dataclass(frozen=True)
class DecodedConfig:
    app_key: bytes
    app_secret: bytes
    master_public_key: bytes

    def to_base64(self) -> Dict[str, str]:
        """Return the legacy parameters, each encoded as Base64."""
        return {
            "appKey": _b64(self.app_key),
            "appSecret": _b64(self.app_secret),
            "masterServerPublicKey": _b64(self.master_public_key),
        }


def _b64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def decode(text: str) -> DecodedConfig:
    """Decode a Base64 configuration string.

    Raises a :class:`palib.errors.DecodeError` subclass on failure.
    """
    try:
        data = base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(str(e)) from e
    return decode_bytes(data)


def decode_bytes(data: bytes) -> DecodedConfig:
    reader = ByteCursor(data)
    log.debug("Decoding %d bytes of configuration", len(data))

    try:
        version = reader.read_byte()
    except CursorExhausted as e:
        raise MalformedPayload("Missing version byte") from e
    if version != CONFIG_VERSION_1:
        raise UnsupportedVersion(version)

    try:
        app_key = reader.read_block()
        app_secret = reader.read_block()
    except CursorExhausted as e:
        raise MalformedPayload(str(e)) from e
    if not app_key or not app_secret:
        raise MalformedPayload("Empty application key or secret")

    master_public_key: Optional[bytes] = None
    try:
        count = reader.read_count()
        log.debug("Configuration declares %d keys", count)
        # bounded by the declared count, stops at the first failed read
        while count > 0:
            key_id = reader.read_byte()
            key_data = reader.read_block()
            if key_id == KeyId.P256:
                master_public_key = key_data
            else:
                log.debug("Skipping key with id %d (%d bytes)", key_id, len(key_data))
            count -= 1
    except CursorExhausted as e:
        log.debug("Key list truncated: %s", e)

    if not master_public_key:
        raise MissingRequiredKey()
    if reader.exhausted:
        raise MalformedPayload("Truncated key list")

    return DecodedConfig(
        app_key=app_key,
        app_secret=app_secret,
        master_public_key=master_public_key,
    )
