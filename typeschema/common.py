"""
Common utility functions for typeschema.
"""

# pylint: disable=too-many-branches, line-too-long

import os
import re
from typing import Any, Iterator, List, Tuple

import jinja2
from jsoncomparison import NO_DIFF, Compare


# Brackets that nest a union/intersection member
TYPE_OPENERS = '<{('
TYPE_CLOSERS = '>})'

# Object members may also hold tuple/array brackets
MEMBER_OPENERS = '<{(['
MEMBER_CLOSERS = '>})]'

QUOTE_CHARS = '"\'`'


def scan_type_string(type_str: str, openers: str = TYPE_OPENERS, closers: str = TYPE_CLOSERS) -> Iterator[Tuple[int, str, int, bool]]:
    """
    Walks a type string and tracks bracket nesting and quoted text.

    Yields a tuple for every character: its index, the character itself, the
    bracket depth after the character was consumed, and whether the character
    belongs to a quoted string or a comment.

    The depth never drops below zero; surplus closing brackets are ignored so
    that they cannot suppress later top-level separators.

    Args:
        type_str (str): The type string to scan.
        openers (str): Characters that open a nesting level.
        closers (str): Characters that close a nesting level.
    """
    depth = 0
    quote_char = ''
    comment = ''
    comment_start = 0
    for i, char in enumerate(type_str):
        prev_char = type_str[i - 1] if i > 0 else ''
        if comment:
            if comment == '//' and char == '\n':
                comment = ''
            elif comment == '/*' and char == '/' and prev_char == '*' and i > comment_start + 2:
                comment = ''
            yield i, char, depth, True
            continue
        if quote_char:
            if char == quote_char and prev_char != '\\':
                quote_char = ''
            yield i, char, depth, True
            continue
        if char in QUOTE_CHARS and prev_char != '\\':
            quote_char = char
            yield i, char, depth, True
            continue
        if char == '/' and type_str[i + 1:i + 2] in ('/', '*'):
            comment = '/' + type_str[i + 1]
            comment_start = i
            yield i, char, depth, True
            continue
        if char in openers:
            depth += 1
        elif char in closers and not (char == '>' and prev_char == '='):
            # '=>' of a function type is not a closing bracket
            depth = max(depth - 1, 0)
        yield i, char, depth, False


def split_top_level(type_str: str, separator: str, openers: str = TYPE_OPENERS, closers: str = TYPE_CLOSERS) -> List[str]:
    """
    Splits a type string on a separator that is not nested in brackets or quotes.

    Args:
        type_str (str): The type string, e.g. 'Array<A | B> | C'.
        separator (str): The separator character, e.g. '|' or '&'.
        openers (str): Characters that open a nesting level.
        closers (str): Characters that close a nesting level.

    Returns:
        List[str]: The trimmed, non-empty segments, e.g. ['Array<A | B>', 'C'].
    """
    parts = []
    start = 0
    for i, char, depth, quoted in scan_type_string(type_str, openers, closers):
        if char == separator and depth == 0 and not quoted:
            parts.append(type_str[start:i])
            start = i + 1
    parts.append(type_str[start:])
    return [part.strip() for part in parts if part.strip()]


def find_closing_bracket(type_str: str, open_index: int, openers: str = TYPE_OPENERS, closers: str = TYPE_CLOSERS) -> int:
    """
    Finds the bracket that closes the bracket at open_index.

    Returns:
        int: The index of the closing bracket in type_str, or -1 if it is never closed.
    """
    if open_index < 0 or open_index >= len(type_str) or type_str[open_index] not in openers:
        return -1
    for i, char, depth, quoted in scan_type_string(type_str[open_index:], openers, closers):
        if i > 0 and not quoted and char in closers and depth == 0:
            return open_index + i
    return -1


def encloses(type_str: str, open_index: int, openers: str = TYPE_OPENERS, closers: str = TYPE_CLOSERS) -> bool:
    """ Checks whether the bracket at open_index closes on the last character of type_str. """
    return len(type_str) > 0 and find_closing_bracket(type_str, open_index, openers, closers) == len(type_str) - 1


def unwrap_generic(type_str: str, generic_name: str) -> str | None:
    """
    Returns the argument text of a generic type like 'Array<T>' or None if
    type_str is not exactly one application of generic_name.
    """
    prefix = generic_name + '<'
    if not type_str.startswith(prefix) or not encloses(type_str, len(generic_name)):
        return None
    inner = type_str[len(prefix):-1].strip()
    return inner if inner else None


def is_identifier(name: str) -> bool:
    """ Checks whether a property name can be written without quotes """
    return re.match(r'^[A-Za-z_$][\w$]*$', name) is not None


def schemas_equal(left: Any, right: Any) -> bool:
    """
    Checks whether two JSON schema documents are structurally equal.

    Args:
        left (Any): The expected schema document.
        right (Any): The actual schema document.

    Returns:
        bool: True if no difference was found.
    """
    if isinstance(left, dict) and isinstance(right, dict):
        # the comparison only walks the keys of the expected side
        return Compare().check(left, right) == NO_DIFF and Compare().check(right, left) == NO_DIFF
    return left == right


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader)
    template = template_env.get_template(file_path)
    return template.render(**kvargs)
