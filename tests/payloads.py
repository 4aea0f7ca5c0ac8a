from __future__ import annotations

import base64
from typing import Iterable, Tuple


def count(n: int) -> bytes:
    if n < 0x80:
        return bytes([n])
    if n < 0x4000:
        return bytes([0x80 | (n >> 8), n & 0xFF])
    return bytes([0xC0 | (n >> 24), (n >> 16) & 0xFF, (n >> 8) & 0xFF, n & 0xFF])


def block(data: bytes) -> bytes:
    return count(len(data)) + data


def payload(
    app_key: bytes = b"AB",
    app_secret: bytes = b"CD",
    keys: Iterable[Tuple[int, bytes]] = ((1, b"XYZ"),),
    version: int = 1,
) -> bytes:
    keys = list(keys)
    out = bytes([version]) + block(app_key) + block(app_secret) + count(len(keys))
    for key_id, data in keys:
        out += bytes([key_id]) + block(data)
    return out


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
