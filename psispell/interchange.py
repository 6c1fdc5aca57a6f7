#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""SNBT / NBT form of a Spell.

Tag names are shared with the game-side serializer and must not change:

    {
        spellName: "...",
        modsRequired: [{modName: "...", modVersion: "..."}, ...],
        spellList: [
            {x: 0b, y: 0b, data: {key: "...", params: {...}, constant_value: "...", comment: "..."}},
            ...
        ]
    }

`params`, `constant_value` and `comment` are omitted when absent.
"""

from __future__ import annotations

import io
from typing import Dict, List, Mapping, Optional

import nbtlib
from nbtlib import Byte, Compound, List as NbtList, String

from psispell.codec import SpellCodecError
from psispell.model import ModRequirement, Piece, PieceData, Spell

TAG_SPELL_NAME = "spellName"
TAG_MODS = "modsRequired"
TAG_PIECES = "spellList"
TAG_MOD_NAME = "modName"
TAG_MOD_VERSION = "modVersion"
TAG_DATA = "data"
TAG_X = "x"
TAG_Y = "y"
TAG_KEY = "key"
TAG_PARAMS = "params"
TAG_CONSTANT = "constant_value"
TAG_COMMENT = "comment"

SPELL_TAGS = frozenset((TAG_SPELL_NAME, TAG_MODS, TAG_PIECES))
MOD_TAGS = frozenset((TAG_MOD_NAME, TAG_MOD_VERSION))
PIECE_TAGS = frozenset((TAG_DATA, TAG_X, TAG_Y))
DATA_TAGS = frozenset((TAG_KEY, TAG_PARAMS, TAG_CONSTANT, TAG_COMMENT))


class InterchangeError(SpellCodecError):
    pass


def _signed_byte(value: int) -> Byte:
    return Byte(((int(value) & 0xFF) ^ 0x80) - 0x80)


def spell_to_compound(spell: Spell) -> Compound:
    mods = NbtList[Compound](
        Compound({TAG_MOD_NAME: String(m.name), TAG_MOD_VERSION: String(m.version)}) for m in spell.mods
    )
    pieces = NbtList[Compound](_piece_to_compound(p) for p in spell.pieces)
    return Compound(
        {
            TAG_SPELL_NAME: String(spell.name),
            TAG_MODS: mods,
            TAG_PIECES: pieces,
        }
    )


def _piece_to_compound(piece: Piece) -> Compound:
    data = piece.data
    tag = Compound({TAG_KEY: String(data.key)})
    if data.parameters is not None:
        tag[TAG_PARAMS] = Compound({name: _signed_byte(side) for name, side in data.parameters.items()})
    if data.constant is not None:
        tag[TAG_CONSTANT] = String(data.constant)
    if data.comment is not None:
        tag[TAG_COMMENT] = String(data.comment)
    return Compound({TAG_DATA: tag, TAG_X: _signed_byte(piece.x), TAG_Y: _signed_byte(piece.y)})


def _check_fields(tag: object, allowed: frozenset, required: frozenset, where: str) -> Mapping:
    if not isinstance(tag, dict):
        raise InterchangeError(f"{where}: expected compound, got {type(tag).__name__}")
    missing = sorted(required - set(tag))
    if missing:
        raise InterchangeError(f"{where}: missing field(s) {', '.join(missing)}")
    extra = sorted(set(tag) - allowed)
    if extra:
        raise InterchangeError(f"{where}: unknown field(s) {', '.join(extra)}")
    return tag


def _get_str(tag: Mapping, name: str, where: str) -> str:
    value = tag[name]
    if not isinstance(value, str):
        raise InterchangeError(f"{where}.{name}: expected string, got {type(value).__name__}")
    return str(value)


def _opt_str(tag: Mapping, name: str, where: str) -> Optional[str]:
    if name not in tag:
        return None
    return _get_str(tag, name, where)


def _get_byte(value: object, where: str) -> int:
    if not isinstance(value, int):
        raise InterchangeError(f"{where}: expected integer, got {type(value).__name__}")
    return int(value) & 0xFF


def _get_list(tag: Mapping, name: str, where: str) -> list:
    value = tag[name]
    if not isinstance(value, list):
        raise InterchangeError(f"{where}.{name}: expected list, got {type(value).__name__}")
    return value


def _params_from_tag(tag: object, where: str) -> Dict[str, int]:
    if not isinstance(tag, dict):
        raise InterchangeError(f"{where}: expected compound, got {type(tag).__name__}")
    return {str(name): _get_byte(side, f"{where}.{name}") for name, side in tag.items()}


def _piece_from_compound(tag: object, where: str) -> Piece:
    tag = _check_fields(tag, PIECE_TAGS, PIECE_TAGS, where)
    data_where = f"{where}.{TAG_DATA}"
    data = _check_fields(tag[TAG_DATA], DATA_TAGS, frozenset((TAG_KEY,)), data_where)
    params = None
    if TAG_PARAMS in data:
        params = _params_from_tag(data[TAG_PARAMS], f"{data_where}.{TAG_PARAMS}")
    try:
        piece_data = PieceData(
            key=_get_str(data, TAG_KEY, data_where),
            parameters=params,
            constant=_opt_str(data, TAG_CONSTANT, data_where),
            comment=_opt_str(data, TAG_COMMENT, data_where),
        )
    except ValueError as exc:
        raise InterchangeError(f"{data_where}: {exc}") from exc
    return Piece(
        x=_get_byte(tag[TAG_X], f"{where}.{TAG_X}"),
        y=_get_byte(tag[TAG_Y], f"{where}.{TAG_Y}"),
        data=piece_data,
    )


def compound_to_spell(tag: object) -> Spell:
    tag = _check_fields(tag, SPELL_TAGS, SPELL_TAGS, "spell")
    mods: List[ModRequirement] = []
    for i, mod in enumerate(_get_list(tag, TAG_MODS, "spell")):
        where = f"spell.{TAG_MODS}[{i}]"
        mod = _check_fields(mod, MOD_TAGS, MOD_TAGS, where)
        mods.append(
            ModRequirement(
                name=_get_str(mod, TAG_MOD_NAME, where),
                version=_get_str(mod, TAG_MOD_VERSION, where),
            )
        )
    pieces = [
        _piece_from_compound(p, f"spell.{TAG_PIECES}[{i}]")
        for i, p in enumerate(_get_list(tag, TAG_PIECES, "spell"))
    ]
    return Spell(name=_get_str(tag, TAG_SPELL_NAME, "spell"), mods=tuple(mods), pieces=tuple(pieces))


def spell_to_snbt(spell: Spell) -> str:
    return nbtlib.serialize_tag(spell_to_compound(spell))


def snbt_to_spell(text: str) -> Spell:
    if not isinstance(text, str):
        raise InterchangeError("SNBT must be str")
    try:
        tag = nbtlib.parse_nbt(text)
    except ValueError as exc:
        raise InterchangeError(f"invalid SNBT: {exc}") from exc
    return compound_to_spell(tag)


def spell_to_nbt(spell: Spell) -> bytes:
    """Binary NBT: unnamed root compound, big-endian, uncompressed."""
    buf = io.BytesIO()
    nbtlib.File(spell_to_compound(spell), root_name="").write(buf, byteorder="big")
    return buf.getvalue()


def nbt_to_spell(data: bytes) -> Spell:
    try:
        tag = nbtlib.File.parse(io.BytesIO(bytes(data)), byteorder="big")
    except Exception as exc:
        raise InterchangeError(f"invalid NBT: {type(exc).__name__}: {exc}") from exc
    return compound_to_spell(tag)
