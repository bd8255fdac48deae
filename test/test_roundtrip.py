"""Round-trip tests between TypeScript type annotations and JSON Schema."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from typeschema.roundtrip import (RoundTripError, check_round_trip_file,
                                  is_round_trip_stable, normalize_open_objects,
                                  round_trip, schemas_match)


class TestRoundTrip(unittest.TestCase):
    """Test cases for round-trip stability."""

    def test_supported_constructs_are_stable(self):
        """Every construct of the supported grammar survives a round trip"""
        type_strings = [
            'string',
            'number',
            'boolean',
            'null',
            'unknown',
            'never',
            'object',
            'string | null',
            'string | number',
            'A & B',
            'string[]',
            'Array<number | null>',
            'Record<string, number>',
            'Record<string, unknown>',
            'Promise<{ ok: boolean }>',
            '"draft" | "published"',
            '"a" | 1',
            '3.25',
            '{}',
            '{ id: string; count?: number }[]',
            '{ "content-type": string; nested: { deep?: string[] } }',
            '{ /** The identifier */ id: string }',
            '{ a: string } & { b: number }',
            'Frobnicate<X>',
        ]
        for type_str in type_strings:
            with self.subTest(type_str=type_str):
                self.assertTrue(is_round_trip_stable(type_str))

    def test_round_trip_returns_regenerated_type(self):
        """round_trip exposes both schemas and the regenerated text"""
        schema, regenerated, reparsed = round_trip('Promise<{ id: string; count?: number }[]>')
        self.assertEqual(regenerated, '{\n  id: string;\n  count?: number;\n}[]')
        self.assertEqual(schema, reparsed)

    def test_open_object_spellings_match(self):
        """object regenerates as Record<string, unknown>, which means the same"""
        schema, regenerated, reparsed = round_trip('object')
        self.assertEqual(schema, {'type': 'object'})
        self.assertEqual(regenerated, 'Record<string, unknown>')
        self.assertEqual(reparsed, {'type': 'object', 'additionalProperties': {}})
        self.assertTrue(schemas_match(schema, reparsed))
        self.assertFalse(schemas_match({'type': 'object'}, {'type': 'object', 'additionalProperties': {'type': 'string'}}))

    def test_normalize_keeps_property_named_additional_properties(self):
        """Only object schemas lose an empty additionalProperties"""
        schema = {'type': 'object', 'properties': {'additionalProperties': {}}}
        self.assertEqual(normalize_open_objects(schema), schema)

    def test_nested_union_is_flattened(self):
        """A nullable group of a union regenerates as a flat union"""
        self.assertFalse(is_round_trip_stable('(string | number) | null'))

    def test_check_round_trip_file(self):
        """The file check reports the regenerated annotation"""
        ts_path = os.path.join(os.path.dirname(__file__), 'ts', 'order.ts')
        report = check_round_trip_file(ts_path)
        self.assertTrue(report.startswith('Round trip stable:\n{\n  /** Order identifier */\n  id: string;'))

    def test_check_round_trip_file_raises(self):
        """An unstable annotation raises RoundTripError"""
        ts_path = os.path.join(os.path.dirname(__file__), 'ts', 'unstable.ts')
        with self.assertRaises(RoundTripError) as ctx:
            check_round_trip_file(ts_path)
        self.assertEqual(ctx.exception.type_str.strip(), '(string | number) | null')
        self.assertEqual(len(ctx.exception.reparsed_schema['anyOf']), 3)


if __name__ == '__main__':
    unittest.main()
