#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
psispell package

Binary, URL-safe text and SNBT/NBT representations of Psi spells. The binary
codec lives in psispell.codec; spellTool.py is the command-line entrypoint.
"""

from __future__ import annotations

from psispell.codec import (
    ParameterKeyTag,
    PieceDiscriminator,
    SpellCodecError,
    SpellEncodeError,
    SpellFormatError,
    decode,
    encode,
)
from psispell.interchange import (
    InterchangeError,
    nbt_to_spell,
    snbt_to_spell,
    spell_to_nbt,
    spell_to_snbt,
)
from psispell.model import ModRequirement, Piece, PieceData, Spell
from psispell.transport import (
    TransportError,
    bytes_to_text,
    spell_to_text,
    text_to_bytes,
    text_to_spell,
)

__version__ = "0.1.0"

__all__ = [
    "InterchangeError",
    "ModRequirement",
    "ParameterKeyTag",
    "Piece",
    "PieceData",
    "PieceDiscriminator",
    "Spell",
    "SpellCodecError",
    "SpellEncodeError",
    "SpellFormatError",
    "TransportError",
    "bytes_to_text",
    "decode",
    "encode",
    "nbt_to_spell",
    "snbt_to_spell",
    "spell_to_nbt",
    "spell_to_snbt",
    "spell_to_text",
    "text_to_bytes",
    "text_to_spell",
]
