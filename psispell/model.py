#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ModRequirement:
    name: str
    version: str


@dataclass(frozen=True)
class PieceData:
    """Payload of one placed piece.

    At most one of `parameters` / `constant` is set. A piece with neither is a
    bare piece. `parameters` is a read-only mapping from a parameter name to its
    side byte (0-255); it is left out of the hash.
    """

    key: str
    parameters: Optional[Mapping[str, int]] = field(default=None, hash=False)
    constant: Optional[str] = None
    comment: Optional[str] = None

    def __post_init__(self) -> None:
        if self.parameters is not None and self.constant is not None:
            raise ValueError(f"piece {self.key!r} has both parameters and a constant")
        if self.parameters is not None:
            object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def is_bare(self) -> bool:
        return self.parameters is None and self.constant is None


@dataclass(frozen=True)
class Piece:
    x: int
    y: int
    data: PieceData


@dataclass(frozen=True)
class Spell:
    name: str
    mods: Tuple[ModRequirement, ...] = ()
    pieces: Tuple[Piece, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "mods", tuple(self.mods))
        object.__setattr__(self, "pieces", tuple(self.pieces))


def make_piece(
    x: int,
    y: int,
    key: str,
    parameters: Optional[Mapping[str, int]] = None,
    constant: Optional[str] = None,
    comment: Optional[str] = None,
) -> Piece:
    params = dict(parameters) if parameters is not None else None
    return Piece(x=x, y=y, data=PieceData(key=key, parameters=params, constant=constant, comment=comment))


def make_spell(name: str, mods: Sequence[Tuple[str, str]], pieces: Sequence[Piece] = ()) -> Spell:
    """Shorthand for tests and scripts: mods given as (name, version) pairs."""
    return Spell(
        name=name,
        mods=tuple(ModRequirement(name=n, version=v) for n, v in mods),
        pieces=tuple(pieces),
    )
