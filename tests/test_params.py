#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest

from psispell.params import BUILTIN_PARAMS, PARAM_TO_INDEX, index_of, name_at


class ParameterDictionaryTests(unittest.TestCase):
    def test_table_size_and_ends(self) -> None:
        self.assertEqual(len(BUILTIN_PARAMS), 43)
        self.assertEqual(BUILTIN_PARAMS[0], "_target")
        self.assertEqual(BUILTIN_PARAMS[-1], "_ray_start")

    def test_names_are_unique(self) -> None:
        self.assertEqual(len(set(BUILTIN_PARAMS)), len(BUILTIN_PARAMS))
        self.assertEqual(len(PARAM_TO_INDEX), len(BUILTIN_PARAMS))

    def test_wire_indices_are_stable(self) -> None:
        self.assertEqual(index_of("_target"), 0)
        self.assertEqual(index_of("_position"), 10)
        self.assertEqual(index_of("_radius"), 17)
        self.assertEqual(index_of("_ray_end"), 41)
        self.assertEqual(index_of("_ray_start"), 42)

    def test_index_of_unknown(self) -> None:
        self.assertIsNone(index_of("_custom_thing"))
        self.assertIsNone(index_of("target"))
        self.assertIsNone(index_of("_TARGET"))

    def test_name_at_inverts_index_of(self) -> None:
        for i, name in enumerate(BUILTIN_PARAMS):
            self.assertEqual(index_of(name), i)
            self.assertEqual(name_at(i), name)

    def test_neighbouring_names_are_not_builtin(self) -> None:
        self.assertEqual(index_of("_number1"), 2)
        self.assertIsNone(index_of("_number5"))


if __name__ == "__main__":
    unittest.main()
