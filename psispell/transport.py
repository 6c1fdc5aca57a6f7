#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""URL-safe text form of encoded spells: gzip, then padded base64url."""

from __future__ import annotations

import base64
import binascii
import gzip
import re
import zlib

from psispell.codec import SpellCodecError, decode, encode
from psispell.model import Spell

GZIP_LEVEL = 1

URL_SAFE_RE = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


class TransportError(SpellCodecError):
    pass


def bytes_to_text(data: bytes, level: int = GZIP_LEVEL) -> str:
    level = int(level)
    if not 0 <= level <= 9:
        raise TransportError(f"gzip level must be 0..9, got {level}")
    packed = gzip.compress(bytes(data), compresslevel=level, mtime=0)
    return base64.urlsafe_b64encode(packed).decode("ascii")


def text_to_bytes(text: str) -> bytes:
    if not isinstance(text, str):
        raise TransportError("transport text must be str")
    payload = text.strip()
    if not payload:
        raise TransportError("empty transport text")
    if not URL_SAFE_RE.match(payload):
        raise TransportError("text is not URL-safe base64")
    try:
        packed = base64.urlsafe_b64decode(payload.encode("ascii"))
    except (binascii.Error, ValueError) as exc:
        raise TransportError(f"invalid base64: {exc}") from exc
    if not packed:
        raise TransportError("empty gzip stream")
    try:
        return gzip.decompress(packed)
    except (OSError, EOFError, zlib.error) as exc:
        raise TransportError(f"invalid gzip stream: {exc}") from exc


def spell_to_text(spell: Spell, level: int = GZIP_LEVEL) -> str:
    return bytes_to_text(encode(spell), level=level)


def text_to_spell(text: str) -> Spell:
    return decode(text_to_bytes(text))
