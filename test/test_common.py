"""Tests for the top-level splitter and the shared helpers."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from typeschema.common import (MEMBER_CLOSERS, MEMBER_OPENERS, encloses,
                               find_closing_bracket, is_identifier,
                               process_template, schemas_equal,
                               split_top_level, unwrap_generic)


class TestSplitTopLevel(unittest.TestCase):
    """Test cases for split_top_level."""

    def test_split_ignores_nested_generic(self):
        """The separator inside <> is not a split point"""
        self.assertEqual(split_top_level("Array<A | B> | C", '|'), ["Array<A | B>", "C"])

    def test_split_simple_union(self):
        """Segments are trimmed"""
        self.assertEqual(split_top_level(" string |number|  null ", '|'), ["string", "number", "null"])

    def test_split_intersection(self):
        """Intersections split on & only"""
        self.assertEqual(split_top_level("{ a: A | B } & C", '&'), ["{ a: A | B }", "C"])

    def test_split_drops_empty_segments(self):
        """Leading, trailing and doubled separators produce no empty segments"""
        self.assertEqual(split_top_level("| A || B |", '|'), ["A", "B"])
        self.assertEqual(split_top_level("", '|'), [])
        self.assertEqual(split_top_level("   ", '|'), [])

    def test_split_without_separator(self):
        """A trailing remainder is always emitted"""
        self.assertEqual(split_top_level("Record<string, number>", '|'), ["Record<string, number>"])

    def test_split_respects_quotes(self):
        """Separators inside string literals do not split"""
        self.assertEqual(split_top_level('"a | b" | \'c | d\' | e', '|'), ['"a | b"', "'c | d'", "e"])

    def test_split_quote_must_match_opening_character(self):
        """A double quote inside a single quoted string does not close it"""
        self.assertEqual(split_top_level("'say \"hi | there' | x", '|'), ["'say \"hi | there'", "x"])

    def test_split_escaped_quote(self):
        """A backslash escaped quote does not end the string"""
        self.assertEqual(split_top_level('"a \\" | b" | c', '|'), ['"a \\" | b"', "c"])

    def test_split_ignores_comments(self):
        """Apostrophes and separators inside comments are ignored"""
        text = "/** the user's id; unique */ id: string; name: string"
        self.assertEqual(split_top_level(text, ';'), ["/** the user's id; unique */ id: string", "name: string"])
        self.assertEqual(split_top_level("// a; b\nid: string; x: number", ';'), ["// a; b\nid: string", "x: number"])

    def test_split_arrow_does_not_close_bracket(self):
        """The > of => is not a closing bracket"""
        self.assertEqual(split_top_level("Foo<() => A | B> | C", '|'), ["Foo<() => A | B>", "C"])

    def test_split_unbalanced_closing_brackets(self):
        """Surplus closing brackets do not suppress later splits"""
        self.assertEqual(split_top_level("A>> | B", '|'), ["A>>", "B"])
        self.assertEqual(split_top_level("}) | C | D", '|'), ["})", "C", "D"])

    def test_split_unbalanced_opening_brackets(self):
        """An unclosed bracket keeps the rest of the input together"""
        self.assertEqual(split_top_level("Array<A | B", '|'), ["Array<A | B"])

    def test_split_unterminated_quote(self):
        """An unterminated quote swallows the rest of the input"""
        self.assertEqual(split_top_level('A | "B | C', '|'), ["A", '"B | C'])

    def test_split_members_counts_square_brackets(self):
        """Object members treat [] as brackets"""
        self.assertEqual(split_top_level("a: [x, y]; b: z", ',', MEMBER_OPENERS, MEMBER_CLOSERS), ["a: [x, y]; b: z"])
        self.assertEqual(split_top_level("a: [x; y]; b: z", ';', MEMBER_OPENERS, MEMBER_CLOSERS), ["a: [x; y]", "b: z"])


class TestBrackets(unittest.TestCase):
    """Test cases for bracket matching helpers."""

    def test_find_closing_bracket(self):
        """The matching bracket is found across nesting"""
        self.assertEqual(find_closing_bracket("Array<Map<A, B>>", 5), 15)
        self.assertEqual(find_closing_bracket("(a) | (b)", 0), 2)
        self.assertEqual(find_closing_bracket("Array<A", 5), -1)
        self.assertEqual(find_closing_bracket("abc", 1), -1)
        self.assertEqual(find_closing_bracket("", 0), -1)

    def test_find_closing_bracket_skips_quoted_text(self):
        """Brackets inside string literals do not count"""
        self.assertEqual(find_closing_bracket('Foo<">">', 3), 7)

    def test_encloses(self):
        """encloses checks that the bracket closes at the end"""
        self.assertTrue(encloses("(a | b)", 0))
        self.assertFalse(encloses("(a) | (b)", 0))

    def test_unwrap_generic(self):
        """The argument text of a single generic application is returned"""
        self.assertEqual(unwrap_generic("Array<string>", "Array"), "string")
        self.assertEqual(unwrap_generic("Promise<Array<A>>", "Promise"), "Array<A>")
        self.assertIsNone(unwrap_generic("Array<A> & Array<B>", "Array"))
        self.assertIsNone(unwrap_generic("ArrayLike<A>", "Array"))
        self.assertIsNone(unwrap_generic("Array<>", "Array"))
        self.assertIsNone(unwrap_generic("Array<A", "Array"))


class TestHelpers(unittest.TestCase):
    """Test cases for the remaining helpers."""

    def test_is_identifier(self):
        """Identifiers can be written unquoted"""
        self.assertTrue(is_identifier("userId"))
        self.assertTrue(is_identifier("$meta"))
        self.assertTrue(is_identifier("_x1"))
        self.assertFalse(is_identifier("content-type"))
        self.assertFalse(is_identifier("1st"))
        self.assertFalse(is_identifier(""))

    def test_schemas_equal(self):
        """Schema documents compare structurally in both directions"""
        self.assertTrue(schemas_equal({"type": "string"}, {"type": "string"}))
        self.assertFalse(schemas_equal({"type": "string"}, {"type": "number"}))
        self.assertFalse(schemas_equal({"type": "string"}, {"type": "string", "enum": ["a"]}))
        self.assertFalse(schemas_equal({"type": "string", "enum": ["a"]}, {"type": "string"}))
        self.assertTrue(schemas_equal({}, {}))

    def test_process_template(self):
        """The interface template wraps a body without escaping it"""
        out = process_template("jsonstots/interface.ts.jinja", type_name="Output", body='"a" | "b"')
        self.assertEqual(out, 'interface Output "a" | "b"')


if __name__ == '__main__':
    unittest.main()
