""" Schema node model shared by the TypeScript parser and the TypeScript generator """

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

JsonNode = Dict[str, 'JsonNode'] | List['JsonNode'] | str | int | float | bool | None

PRIMITIVE_KINDS = ('string', 'number', 'boolean', 'null')

# Maximum nesting depth before a subtree is serialized as {}
MAX_SERIALIZE_DEPTH = 100


@dataclass
class SchemaNode:
    """Base class for all schema nodes."""

    description: Optional[str] = None


@dataclass
class PrimitiveNode(SchemaNode):
    """A primitive type: string, number, boolean or null."""

    kind: str = 'null'


@dataclass
class UnknownNode(SchemaNode):
    """Any value; also the result for fragments that could not be parsed."""


@dataclass
class NeverNode(SchemaNode):
    """The uninhabited type."""


@dataclass
class ArrayNode(SchemaNode):
    """An ordered, homogeneous collection."""

    items: SchemaNode = field(default_factory=UnknownNode)


@dataclass
class ObjectNode(SchemaNode):
    """An object with a fixed, ordered set of properties."""

    properties: Dict[str, SchemaNode] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)


@dataclass
class AdditionalPropertiesNode(SchemaNode):
    """An open-ended map with string keys, as in Record<string, V>."""

    values: SchemaNode = field(default_factory=UnknownNode)


@dataclass
class UnionNode(SchemaNode):
    """A disjunction of two or more members."""

    members: List[SchemaNode] = field(default_factory=list)


@dataclass
class NullableNode(SchemaNode):
    """A union of exactly one concrete type with null or undefined."""

    base: SchemaNode = field(default_factory=UnknownNode)


@dataclass
class IntersectionNode(SchemaNode):
    """A conjunction of two or more members."""

    members: List[SchemaNode] = field(default_factory=list)


@dataclass
class LiteralNode(SchemaNode):
    """Exactly one string or number value."""

    value: Union[str, int, float] = ''


def schema_node_to_json(node: SchemaNode, depth: int = 0) -> Dict[str, Any]:
    """
    Serializes a schema node into its JSON Schema form.

    Args:
        node (SchemaNode): The node to serialize.
        depth (int): Nesting level of the node; subtrees deeper than
            MAX_SERIALIZE_DEPTH are serialized as {}.

    Returns:
        Dict[str, Any]: A JSON Schema document using the keys type, properties,
        items, required, enum, anyOf, allOf, additionalProperties, description and not.
    """
    schema: Dict[str, Any]
    if depth > MAX_SERIALIZE_DEPTH:
        return {}
    if isinstance(node, PrimitiveNode):
        schema = {'type': node.kind}
    elif isinstance(node, NeverNode):
        schema = {'not': {}}
    elif isinstance(node, ArrayNode):
        schema = {'type': 'array', 'items': schema_node_to_json(node.items, depth + 1)}
    elif isinstance(node, ObjectNode):
        schema = {'type': 'object'}
        if node.properties:
            schema['properties'] = {name: schema_node_to_json(prop, depth + 1) for name, prop in node.properties.items()}
            required = [name for name in node.required if name in node.properties]
            if required:
                schema['required'] = required
    elif isinstance(node, AdditionalPropertiesNode):
        schema = {'type': 'object', 'additionalProperties': schema_node_to_json(node.values, depth + 1)}
    elif isinstance(node, NullableNode):
        schema = {'anyOf': [schema_node_to_json(node.base, depth + 1), {'type': 'null'}]}
    elif isinstance(node, UnionNode):
        schema = {'anyOf': [schema_node_to_json(member, depth + 1) for member in node.members]}
    elif isinstance(node, IntersectionNode):
        schema = {'allOf': [schema_node_to_json(member, depth + 1) for member in node.members]}
    elif isinstance(node, LiteralNode):
        literal_type = 'string' if isinstance(node.value, str) else 'number'
        schema = {'type': literal_type, 'enum': [node.value]}
    else:
        schema = {}
    if node.description:
        schema['description'] = node.description
    return schema
