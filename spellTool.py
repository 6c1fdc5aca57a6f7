#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import datetime as _dt
import sys
from typing import List, Optional

from psispell import __version__ as VERSION
from psispell.codec import SpellCodecError, encode
from psispell.interchange import nbt_to_spell, snbt_to_spell, spell_to_snbt
from psispell.model import Spell
from psispell.transport import bytes_to_text, text_to_spell

DEFAULTS = {
    "level": 1,
    "format": "snbt",
}

QUIET = False


def ts_now() -> str:
    return _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def out(msg: str) -> None:
    sys.stdout.write(msg + "\n")
    sys.stdout.flush()


def info(msg: str) -> None:
    if not QUIET:
        out(msg)


def error(msg: str) -> None:
    out(f"{ts_now()} ERROR: {msg}")


def read_spell_file(path: str, fmt: str) -> Spell:
    if fmt == "nbt":
        if path == "-":
            return nbt_to_spell(sys.stdin.buffer.read())
        with open(path, "rb") as f:
            return nbt_to_spell(f.read())
    if path == "-":
        return snbt_to_spell(sys.stdin.read())
    with open(path, "r", encoding="utf-8") as f:
        return snbt_to_spell(f.read())


def read_text_arg(value: str) -> str:
    if value == "-":
        return sys.stdin.read().strip()
    return value.strip()


def main(argv: Optional[List[str]] = None) -> int:
    global QUIET
    ap = argparse.ArgumentParser(
        prog="spellTool.py",
        description="Convert Psi spells between SNBT/NBT and the compact URL-safe text form.",
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--to-text", metavar="FILE", default=None, help="read a spell (SNBT/NBT, '-' for stdin) and print its URL-safe text")
    mode.add_argument("--to-snbt", metavar="TEXT", default=None, help="decode URL-safe text ('-' for stdin) and print SNBT")
    mode.add_argument("--hex", metavar="FILE", default=None, help="read a spell (SNBT/NBT) and print the raw codec bytes as hex")
    ap.add_argument(
        "--input-format",
        choices=("snbt", "nbt"),
        default=DEFAULTS["format"],
        help=f"format of FILE for --to-text/--hex (default: {DEFAULTS['format']})",
    )
    ap.add_argument("--level", type=int, default=DEFAULTS["level"], help=f"gzip level 1-9 (default: {DEFAULTS['level']})")
    ap.add_argument("--quiet", action="store_true", help="print only the result")
    ap.add_argument("--version", action="store_true", help="print version and exit")

    args = ap.parse_args(argv)
    QUIET = bool(args.quiet)

    if args.version:
        out(f"spellTool.py v{VERSION}")
        return 0
    if not 1 <= args.level <= 9:
        error("--level must be in 1..9")
        return 2

    try:
        if args.to_text is not None:
            spell = read_spell_file(args.to_text, args.input_format)
            raw = encode(spell)
            text = bytes_to_text(raw, level=args.level)
            info(f"{spell.name}: {len(spell.pieces)} pieces, {len(raw)} bytes raw, {len(text)} chars text")
            out(text)
            return 0
        if args.to_snbt is not None:
            spell = text_to_spell(read_text_arg(args.to_snbt))
            info(f"{spell.name}: {len(spell.pieces)} pieces")
            out(spell_to_snbt(spell))
            return 0
        if args.hex is not None:
            spell = read_spell_file(args.hex, args.input_format)
            out(encode(spell).hex())
            return 0
    except OSError as ex:
        error(f"cannot read input: {ex}")
        return 2
    except SpellCodecError as ex:
        error(f"{type(ex).__name__}: {ex}")
        return 2

    ap.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
