# pylint: disable=line-too-long

""" JsonSchemaToTypeScript class for rendering JSON Schema as TypeScript type annotations """

import json
import os
import re
from typing import Any, Dict, List, Union

from typeschema.common import (is_identifier, process_template,
                               split_top_level)
from typeschema.schemanodes import JsonNode, SchemaNode, schema_node_to_json

INDENT = '  '

DEFAULT_TYPE_NAME = 'Output'

# Maximum nesting depth before a subschema is rendered as unknown
MAX_RENDER_DEPTH = 100


class JsonSchemaToTypeScript:
    """ Renders JSON Schema documents as TypeScript type annotations """

    def __init__(self, indent: str = INDENT, max_depth: int = MAX_RENDER_DEPTH) -> None:
        self.indent = indent
        self.max_depth = max_depth

    def map_primitive_to_typescript(self, json_type: Any) -> str:
        """ Maps JSON Schema primitive type names to TypeScript types """
        mapping = {
            'string': 'string',
            'number': 'number',
            'integer': 'number',
            'boolean': 'boolean',
            'null': 'null',
        }
        return mapping.get(json_type, 'unknown') if isinstance(json_type, str) else 'unknown'

    def render_literal(self, value: Any) -> str:
        """ Renders an enum or const value as a literal type """
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if value is None:
            return 'null'
        return json.dumps(value, ensure_ascii=False, default=str)

    def render(self, schema: JsonNode, depth: int = 0) -> str:
        """ Renders a schema as a TypeScript type """
        if schema is False:
            return 'never'
        if not isinstance(schema, dict) or depth > self.max_depth:
            return 'unknown'

        json_type = schema.get('type')

        if isinstance(json_type, list):
            return ' | '.join(self.map_primitive_to_typescript(t) for t in json_type) or 'unknown'

        if 'const' in schema:
            return self.render_literal(schema['const'])

        if json_type in ('string', 'number', 'integer', None) and isinstance(schema.get('enum'), list) and schema['enum']:
            return ' | '.join(self.render_literal(value) for value in schema['enum'])

        if json_type == 'array':
            items = schema.get('items')
            if not isinstance(items, dict):
                return 'unknown[]'
            item_type = self.render(items, depth + 1)
            if self.is_compound(item_type):
                item_type = f'({item_type})'
            return f'{item_type}[]'

        if json_type == 'object' or (json_type is None and isinstance(schema.get('properties'), dict)):
            return self.render_object(schema, depth)

        if json_type is not None:
            return self.map_primitive_to_typescript(json_type)

        for union_key in ('anyOf', 'oneOf'):
            if isinstance(schema.get(union_key), list) and schema[union_key]:
                return ' | '.join(self.render(member, depth + 1) for member in schema[union_key])

        if isinstance(schema.get('allOf'), list) and schema['allOf']:
            members = []
            for member in schema['allOf']:
                member_type = self.render(member, depth + 1)
                if len(split_top_level(member_type, '|')) > 1:
                    member_type = f'({member_type})'
                members.append(member_type)
            return ' & '.join(members)

        if 'not' in schema:
            return 'never'

        return 'unknown'

    def render_object(self, schema: Dict[str, Any], depth: int) -> str:
        """ Renders an object schema as an inline object type or a Record """
        properties = schema.get('properties')
        if not isinstance(properties, dict) or not properties:
            additional_properties = schema.get('additionalProperties')
            if isinstance(additional_properties, dict):
                return f'Record<string, {self.render(additional_properties, depth + 1)}>'
            return 'Record<string, unknown>'

        required = schema.get('required')
        required_props = {name for name in required if isinstance(name, str)} if isinstance(required, list) else set()
        lines: List[str] = []
        for prop_name, prop_schema in properties.items():
            prop_name = str(prop_name)
            name = prop_name if is_identifier(prop_name) else json.dumps(prop_name, ensure_ascii=False)
            optional = '' if prop_name in required_props else '?'
            prop_type = self.render(prop_schema, depth + 1).replace('\n', '\n' + self.indent)
            description = prop_schema.get('description') if isinstance(prop_schema, dict) else None
            if description and isinstance(description, str):
                lines.append(f'{self.indent}/** {self.format_description(description)} */')
            lines.append(f'{self.indent}{name}{optional}: {prop_type};')
        return '{\n' + '\n'.join(lines) + '\n}'

    def format_description(self, description: str) -> str:
        """ Collapses a description to a single line that is safe inside a comment """
        return re.sub(r'\s+', ' ', description).strip().replace('*/', '*\\/')

    def is_compound(self, ts_type: str) -> bool:
        """ Checks whether a type needs parentheses before an array suffix """
        return len(split_top_level(ts_type, '|')) > 1 or len(split_top_level(ts_type, '&')) > 1

    def generate(self, schema: JsonNode, type_name: str = DEFAULT_TYPE_NAME) -> str:
        """ Generates a named interface declaration for a schema """
        body = '{}' if schema is None else self.render(schema)
        return process_template('jsonstots/interface.ts.jinja', type_name=type_name, body=body)


def render_schema_type(schema: Union[SchemaNode, JsonNode]) -> str:
    """
    Renders a schema node or JSON Schema document as a TypeScript type.

    Args:
        schema: The schema to render.

    Returns:
        str: The type annotation, e.g. 'string | null'.
    """
    if isinstance(schema, SchemaNode):
        schema = schema_node_to_json(schema)
    return JsonSchemaToTypeScript().render(schema)


def generate_type_from_schema(schema: Union[SchemaNode, JsonNode], root_name: str = DEFAULT_TYPE_NAME) -> str:
    """
    Generates a TypeScript interface declaration from a schema.

    Args:
        schema: A schema node or a JSON Schema document.
        root_name (str): The name of the generated interface.

    Returns:
        str: The declaration, e.g. 'interface Output {\\n  id: string;\\n}'.
    """
    if isinstance(schema, SchemaNode):
        schema = schema_node_to_json(schema)
    return JsonSchemaToTypeScript().generate(schema, root_name)


def convert_json_schema_to_typescript(json_schema_file_path: str, ts_file_path: str, type_name: str = DEFAULT_TYPE_NAME) -> None:
    """
    Converts a JSON Schema file to a TypeScript interface file.

    Args:
        json_schema_file_path (str): Path of the JSON Schema file.
        ts_file_path (str): Output path for the TypeScript file.
        type_name (str): Name of the generated interface.
    """
    with open(json_schema_file_path, 'r', encoding='utf-8') as f:
        schema = json.load(f)

    if not isinstance(schema, (dict, bool)):
        raise ValueError(f"Expected a JSON Schema object in {json_schema_file_path}, found {type(schema).__name__}")

    ts_content = generate_type_from_schema(schema, type_name or DEFAULT_TYPE_NAME)

    output_dir = os.path.dirname(ts_file_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(ts_file_path, 'w', encoding='utf-8') as f:
        f.write(ts_content + '\n')
