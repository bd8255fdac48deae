# pylint: disable=line-too-long

""" Converts TypeScript type annotations to JSON Schema """

import json
import logging
import math
import os
import re
from typing import Dict, List, Optional, Tuple

from typeschema.common import (MEMBER_CLOSERS, MEMBER_OPENERS, encloses,
                               split_top_level, unwrap_generic)
from typeschema.schemanodes import (PRIMITIVE_KINDS, AdditionalPropertiesNode,
                                    ArrayNode, IntersectionNode, LiteralNode,
                                    NeverNode, NullableNode, ObjectNode,
                                    PrimitiveNode, SchemaNode, UnionNode,
                                    UnknownNode, schema_node_to_json)

logger = logging.getLogger(__name__)

# Maximum nesting depth before a fragment is given up as unknown
MAX_PARSE_DEPTH = 100

NULLISH_TYPES = ('null', 'undefined')

# name, optional marker and value of an object member
MEMBER_PATTERN = re.compile(r'^(?:readonly\s+)?([A-Za-z_$][\w$]*|"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\')\s*(\?)?\s*:\s*(.+)$', re.DOTALL)
INDEX_SIGNATURE_PATTERN = re.compile(r'^(?:readonly\s+)?\[\s*[A-Za-z_$][\w$]*\s*:\s*string\s*\]\s*:\s*(.+)$', re.DOTALL)
LEADING_COMMENT_PATTERN = re.compile(r'^\s*(/\*.*?\*/|//[^\n]*)', re.DOTALL)
NUMBER_PATTERN = re.compile(r'^-?\d+(\.\d+)?$')


class TypeScriptToJsonSchema:
    """ Parses TypeScript type annotations into schema nodes """

    def __init__(self, max_depth: int = MAX_PARSE_DEPTH) -> None:
        self.max_depth = max_depth
        self._depth = 0

    def parse(self, type_str: str) -> SchemaNode:
        """ Parses a type annotation; anything outside the supported grammar becomes an UnknownNode """
        if not isinstance(type_str, str):
            return UnknownNode()
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                logger.warning("Maximum parse depth (%d) exceeded, treating fragment as unknown", self.max_depth)
                return UnknownNode()
            return self._parse(type_str.strip())
        finally:
            self._depth -= 1

    def _parse(self, type_str: str) -> SchemaNode:
        if not type_str:
            return UnknownNode()

        union = self.parse_union(type_str)
        if union is not None:
            return union

        parts = split_top_level(type_str, '&')
        if len(parts) > 1:
            return IntersectionNode(members=[self.parse(part) for part in parts])
        if len(parts) == 1 and parts[0] != type_str:
            return self.parse(parts[0])

        # ( T )
        if type_str.startswith('(') and encloses(type_str, 0):
            return self.parse(type_str[1:-1])

        if type_str.endswith('[]'):
            return ArrayNode(items=self.parse(type_str[:-2]))
        for generic_name in ('Array', 'ReadonlyArray'):
            item_type = unwrap_generic(type_str, generic_name)
            if item_type is not None:
                return ArrayNode(items=self.parse(item_type))

        record_args = unwrap_generic(type_str, 'Record')
        if record_args is not None:
            record = self.parse_record(record_args)
            if record is not None:
                return record

        awaited_type = unwrap_generic(type_str, 'Promise')
        if awaited_type is not None:
            return self.parse(awaited_type)

        if type_str.startswith('{') and type_str.endswith('}'):
            return self.parse_inline_object(type_str)

        literal = self.parse_literal(type_str)
        if literal is not None:
            return literal

        return self.parse_keyword(type_str)

    def parse_union(self, type_str: str) -> Optional[SchemaNode]:
        """ Parses A | B | C, telling apart the nullable form T | null """
        parts = split_top_level(type_str, '|')
        if len(parts) == 1 and parts[0] != type_str:
            # leading '|' of a multi-line union
            return self.parse(parts[0])
        if len(parts) < 2:
            return None
        non_null_parts = [part for part in parts if part not in NULLISH_TYPES]
        if len(non_null_parts) == 1 and len(non_null_parts) < len(parts):
            return NullableNode(base=self.parse(non_null_parts[0]))
        return UnionNode(members=[self.parse(part) for part in parts])

    def parse_record(self, record_args: str) -> Optional[SchemaNode]:
        """ Parses the arguments of Record<string, V>; other key types are not supported """
        args = split_top_level(record_args, ',')
        if len(args) != 2 or args[0] != 'string':
            logger.debug("Unsupported record key type in Record<%s>", record_args)
            return None
        return AdditionalPropertiesNode(values=self.parse(args[1]))

    def parse_inline_object(self, type_str: str) -> SchemaNode:
        """ Parses an object literal type: { name: type; other?: type } """
        inner = type_str[1:-1].strip()
        node = ObjectNode()
        if not inner:
            return node

        index_values: List[SchemaNode] = []
        for segment in self.split_members(inner):
            description, member = self.strip_leading_comments(segment)
            if not member:
                continue
            index_match = INDEX_SIGNATURE_PATTERN.match(member)
            if index_match:
                index_values.append(self.parse(index_match.group(1)))
                continue
            match = MEMBER_PATTERN.match(member)
            if not match:
                logger.debug("Skipping unparsable object member: %s", member)
                continue
            name, optional, value_type = match.groups()
            if name[0] in '"\'':
                name = self.unquote(name)
            prop = self.parse(value_type)
            if description:
                prop.description = description
            node.properties[name] = prop
            if optional:
                if name in node.required:
                    node.required.remove(name)
            elif name not in node.required:
                node.required.append(name)

        if index_values and not node.properties:
            return AdditionalPropertiesNode(values=index_values[-1])
        if index_values:
            logger.debug("Ignoring index signature next to named properties")
        return node

    def split_members(self, inner: str) -> List[str]:
        """ Splits an object literal body into members on top-level ';' and ',' """
        members = []
        for segment in split_top_level(inner, ';', MEMBER_OPENERS, MEMBER_CLOSERS):
            members.extend(split_top_level(segment, ',', MEMBER_OPENERS, MEMBER_CLOSERS))
        return members

    def strip_leading_comments(self, segment: str) -> Tuple[Optional[str], str]:
        """ Removes comments in front of a member and returns the last JSDoc text as description """
        description = None
        match = LEADING_COMMENT_PATTERN.match(segment)
        while match:
            comment = match.group(1)
            if comment.startswith('/**'):
                text = comment[3:-2]
                lines = [line.strip().lstrip('*').strip() for line in text.splitlines()]
                description = ' '.join(line for line in lines if line) or None
            segment = segment[match.end():]
            match = LEADING_COMMENT_PATTERN.match(segment)
        return description, segment.strip()

    def parse_literal(self, type_str: str) -> Optional[SchemaNode]:
        """ Parses string and number literal types """
        quote = type_str[0]
        if quote in '"\'`':
            if len(type_str) < 2 or type_str[-1] != quote:
                return None
            return LiteralNode(value=self.unquote(type_str))
        if NUMBER_PATTERN.match(type_str):
            try:
                value = float(type_str) if '.' in type_str else int(type_str)
            except ValueError:
                # beyond the integer string conversion limit
                logger.debug("Number literal too long, treating as unknown: %.40s...", type_str)
                return None
            if isinstance(value, float) and not math.isfinite(value):
                logger.debug("Number literal out of range, treating as unknown: %.40s...", type_str)
                return None
            return LiteralNode(value=value)
        if type_str in ('true', 'false'):
            return PrimitiveNode(kind='boolean')
        return None

    def unquote(self, quoted: str) -> str:
        """ Removes the quotes of a string literal and resolves escaped quotes """
        if quoted[0] == '"':
            try:
                return json.loads(quoted)
            except json.JSONDecodeError:
                pass
        quote = quoted[0]
        return quoted[1:-1].replace('\\' + quote, quote)

    def parse_keyword(self, type_str: str) -> SchemaNode:
        """ Maps primitive keywords; everything else is unknown """
        if type_str in PRIMITIVE_KINDS:
            return PrimitiveNode(kind=type_str)
        if type_str in ('undefined', 'void'):
            # JSON Schema has no undefined
            return PrimitiveNode(kind='null')
        if type_str in ('any', 'unknown'):
            return UnknownNode()
        if type_str == 'never':
            return NeverNode()
        if type_str == 'object':
            return ObjectNode()
        logger.debug("Unsupported type, treating as unknown: %s", type_str)
        return UnknownNode()


def parse_type_to_schema(type_str: str) -> SchemaNode:
    """
    Parses a TypeScript type annotation into a schema node.

    The function never raises; fragments outside the supported grammar are
    returned as UnknownNode.

    Args:
        type_str (str): The type annotation, e.g. '{ id: string; count?: number }[]'.

    Returns:
        SchemaNode: The root of the schema tree.
    """
    return TypeScriptToJsonSchema().parse(type_str)


def convert_ts_type_to_json_schema(type_str: str) -> Dict:
    """ Parses a TypeScript type annotation and returns its JSON Schema document """
    return schema_node_to_json(parse_type_to_schema(type_str))


def convert_ts_to_json_schema(ts_file_path: str, json_schema_file_path: str) -> None:
    """
    Converts a file holding a TypeScript type annotation to a JSON Schema file.

    Args:
        ts_file_path (str): Path of the file with the type annotation.
        json_schema_file_path (str): Output path for the JSON Schema.
    """
    with open(ts_file_path, 'r', encoding='utf-8') as f:
        type_str = f.read()

    schema = convert_ts_type_to_json_schema(type_str)

    output_dir = os.path.dirname(json_schema_file_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(json_schema_file_path, 'w', encoding='utf-8') as f:
        json.dump(schema, f, indent=2)
