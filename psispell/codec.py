#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Compact binary encoding of a Spell.

Layout (all text is UTF-8):

    name NUL
    mod_name "," mod_version ";" ... mod_name "," mod_version "]"
    piece*                                  (until end of input)

    piece := xy key NUL comment NUL payload
    xy    := (x << 4) | y                   (4 bits each)
    key   := key without a leading "psi:" (kept when the rest has a ":")
    payload := 255 constant NUL
             | 254
             | n (param_ref side){n}       (n in 0..253)
    param_ref := builtin index | 255 name NUL

There is no piece count: the piece list ends at end of input.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from psispell.model import ModRequirement, Piece, PieceData, Spell
from psispell.params import BUILTIN_PARAMS, index_of, name_at

NUL = 0x00
MOD_FIELD_SEP = ord(",")
MOD_RECORD_SEP = ord(";")
MOD_LIST_END = ord("]")

DEFAULT_NAMESPACE = "psi:"
NAMESPACE_SEP = ":"

MAX_PARAMS = 253


class PieceDiscriminator(IntEnum):
    """First payload byte of a piece when it is not a parameter count."""

    BARE = 254
    CONSTANT = 255


class ParameterKeyTag(IntEnum):
    """Parameter reference byte that is not a builtin index."""

    CUSTOM = 255


class SpellCodecError(ValueError):
    pass


class SpellEncodeError(SpellCodecError):
    pass


class SpellFormatError(SpellCodecError):
    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} (at byte {offset})")
        self.offset = offset


def pack_xy(x: int, y: int) -> int:
    return ((int(x) & 0x0F) << 4) | (int(y) & 0x0F)


def unpack_xy(b: int) -> Tuple[int, int]:
    return b >> 4, b & 0x0F


def compress_key(key: str) -> str:
    # "psi:a:b" stays whole: "a:b" would read back as namespace "a".
    if key.startswith(DEFAULT_NAMESPACE):
        rest = key[len(DEFAULT_NAMESPACE):]
        if NAMESPACE_SEP not in rest:
            return rest
    return key


def expand_key(key: str) -> str:
    # Keys without any namespace are always read as psi keys.
    if NAMESPACE_SEP not in key:
        return DEFAULT_NAMESPACE + key
    return key


def _write_str(out: bytearray, text: str) -> None:
    out.extend(text.encode("utf-8"))


def _encode_payload(out: bytearray, data: PieceData) -> None:
    if data.parameters is not None:
        if len(data.parameters) > MAX_PARAMS:
            raise SpellEncodeError(
                f"piece {data.key!r} has {len(data.parameters)} parameters (max {MAX_PARAMS})"
            )
        out.append(len(data.parameters))
        for param, side in data.parameters.items():
            idx = index_of(param)
            if idx is not None:
                out.append(idx)
            else:
                out.append(ParameterKeyTag.CUSTOM)
                _write_str(out, param)
                out.append(NUL)
            out.append(int(side) & 0xFF)
    elif data.constant is not None:
        out.append(PieceDiscriminator.CONSTANT)
        _write_str(out, data.constant)
        out.append(NUL)
    else:
        out.append(PieceDiscriminator.BARE)


def encode(spell: Spell) -> bytes:
    """Encode `spell` to its binary form.

    Text fields must not contain the delimiter they are terminated by; this is
    not checked and produces a stream that decodes to something else.
    """
    if not spell.mods:
        raise SpellEncodeError("spell must require at least one mod")

    out = bytearray()
    _write_str(out, spell.name)
    out.append(NUL)

    for mod in spell.mods:
        _write_str(out, mod.name)
        out.append(MOD_FIELD_SEP)
        _write_str(out, mod.version)
        out.append(MOD_RECORD_SEP)
    out[-1] = MOD_LIST_END

    for piece in spell.pieces:
        data = piece.data
        out.append(pack_xy(piece.x, piece.y))
        _write_str(out, compress_key(data.key))
        out.append(NUL)
        if data.comment:
            _write_str(out, data.comment)
        out.append(NUL)
        _encode_payload(out, data)

    return bytes(out)


class _ByteReader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    @property
    def pos(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read_byte(self, what: str) -> int:
        if self._pos >= len(self._data):
            raise SpellFormatError(f"unexpected end of data reading {what}", self._pos)
        b = self._data[self._pos]
        self._pos += 1
        return b

    def read_until(self, delim: int, what: str) -> bytes:
        end = self._data.find(bytes([delim]), self._pos)
        if end < 0:
            raise SpellFormatError(f"missing terminator 0x{delim:02x} after {what}", len(self._data))
        raw = self._data[self._pos:end]
        self._pos = end + 1
        return raw

    def read_str(self, what: str, delim: int = NUL) -> str:
        start = self._pos
        return _to_str(self.read_until(delim, what), what, start)


def _to_str(raw: bytes, what: str, offset: int) -> str:
    try:
        return raw.decode("utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise SpellFormatError(f"invalid UTF-8 in {what}", offset + exc.start) from exc


def _decode_mods(raw: bytes, offset: int) -> List[ModRequirement]:
    mods: List[ModRequirement] = []
    pos = offset
    for segment in raw.split(bytes([MOD_RECORD_SEP])):
        name, _sep, version = segment.partition(bytes([MOD_FIELD_SEP]))
        mods.append(
            ModRequirement(
                name=_to_str(name, "mod name", pos),
                version=_to_str(version, "mod version", pos + len(name) + 1),
            )
        )
        pos += len(segment) + 1
    return mods


def _decode_parameters(reader: _ByteReader, count: int) -> Dict[str, int]:
    params: Dict[str, int] = {}
    for _ in range(count):
        ref_pos = reader.pos
        ref = reader.read_byte("parameter reference")
        if ref == ParameterKeyTag.CUSTOM:
            param = reader.read_str("custom parameter name")
        elif ref < len(BUILTIN_PARAMS):
            param = name_at(ref)
        else:
            raise SpellFormatError(f"invalid builtin parameter index: {ref}", ref_pos)
        params[param] = reader.read_byte("parameter side")
    return params


def _decode_piece(reader: _ByteReader) -> Piece:
    x, y = unpack_xy(reader.read_byte("piece position"))
    key = expand_key(reader.read_str("piece key"))
    comment: Optional[str] = reader.read_str("piece comment") or None

    parameters: Optional[Dict[str, int]] = None
    constant: Optional[str] = None
    tag = reader.read_byte("piece payload tag")
    if tag == PieceDiscriminator.CONSTANT:
        constant = reader.read_str("constant value")
    elif tag != PieceDiscriminator.BARE:
        parameters = _decode_parameters(reader, tag) or None

    return Piece(x=x, y=y, data=PieceData(key=key, parameters=parameters, constant=constant, comment=comment))


def decode(data: bytes) -> Spell:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise SpellFormatError("spell data must be bytes", 0)
    reader = _ByteReader(bytes(data))

    name = reader.read_str("spell name")
    mods_start = reader.pos
    mods = _decode_mods(reader.read_until(MOD_LIST_END, "mod list"), mods_start)

    pieces: List[Piece] = []
    while not reader.at_end():
        pieces.append(_decode_piece(reader))

    return Spell(name=name, mods=tuple(mods), pieces=tuple(pieces))
