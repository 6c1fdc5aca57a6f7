#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Builtin parameter names.

The position of each name is its wire index. Reordering, inserting or removing
entries breaks every spell encoded with the previous table.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

BUILTIN_PARAMS: Tuple[str, ...] = (
    "_target",
    "_number",
    "_number1",
    "_number2",
    "_number3",
    "_number4",
    "_vector1",
    "_vector2",
    "_vector3",
    "_vector4",
    "_position",
    "_min",
    "_max",
    "_power",
    "_x",
    "_y",
    "_z",
    "_radius",
    "_distance",
    "_time",
    "_base",
    "_ray",
    "_vector",
    "_axis",
    "_angle",
    "_pitch",
    "_instrument",
    "_volume",
    "_list1",
    "_list2",
    "_list",
    "_direction",
    "_from1",
    "_from2",
    "_to1",
    "_to2",
    "_root",
    "_toggle",
    "_mask",
    "_channel",
    "_slot",
    "_ray_end",
    "_ray_start",
)

PARAM_TO_INDEX: Dict[str, int] = {name: i for i, name in enumerate(BUILTIN_PARAMS)}


def index_of(name: str) -> Optional[int]:
    return PARAM_TO_INDEX.get(name)


def name_at(index: int) -> str:
    # Callers range-check untrusted indices first.
    return BUILTIN_PARAMS[index]
