""" Round-trip checks between TypeScript type annotations and JSON Schema """

from typing import Any, Dict, Tuple

from typeschema.common import schemas_equal
from typeschema.jsonstots import render_schema_type
from typeschema.tstojsons import convert_ts_type_to_json_schema


class RoundTripError(Exception):
    """
    Exception raised when a type annotation does not survive a round trip.

    Attributes:
        type_str: The type annotation that was checked
        schema: The schema parsed from the original annotation
        reparsed_schema: The schema parsed from the regenerated annotation
    """

    def __init__(self, type_str: str, schema: Dict[str, Any], reparsed_schema: Dict[str, Any]):
        self.type_str = type_str
        self.schema = schema
        self.reparsed_schema = reparsed_schema
        super().__init__(f"Type is not round-trip stable: {type_str.strip()}")


def normalize_open_objects(schema: Any) -> Any:
    """
    Drops additionalProperties that allow any value, so that {"type": "object"}
    and {"type": "object", "additionalProperties": {}} compare as equal.
    """
    if isinstance(schema, list):
        return [normalize_open_objects(item) for item in schema]
    if not isinstance(schema, dict):
        return schema
    normalized = {key: normalize_open_objects(value) for key, value in schema.items()}
    if normalized.get('type') == 'object' and normalized.get('additionalProperties') in ({}, True):
        del normalized['additionalProperties']
    return normalized


def schemas_match(schema: Dict[str, Any], reparsed_schema: Dict[str, Any]) -> bool:
    """ Compares two schemas, treating both spellings of an open object as the same """
    return schemas_equal(normalize_open_objects(schema), normalize_open_objects(reparsed_schema))


def round_trip(type_str: str) -> Tuple[Dict[str, Any], str, Dict[str, Any]]:
    """
    Parses a type annotation, renders the schema back to TypeScript and parses it again.

    Returns:
        Tuple[Dict[str, Any], str, Dict[str, Any]]: The schema of the original
        annotation, the regenerated annotation and the schema of the regenerated annotation.
    """
    schema = convert_ts_type_to_json_schema(type_str)
    regenerated = render_schema_type(schema)
    reparsed_schema = convert_ts_type_to_json_schema(regenerated)
    return schema, regenerated, reparsed_schema


def is_round_trip_stable(type_str: str) -> bool:
    """ Checks whether the regenerated annotation parses to the same schema as the original """
    schema, _, reparsed_schema = round_trip(type_str)
    return schemas_match(schema, reparsed_schema)


def check_round_trip_file(ts_file_path: str) -> str:
    """
    Checks the type annotation in a file for round-trip stability.

    Args:
        ts_file_path (str): Path of the file with the type annotation.

    Returns:
        str: A report with the regenerated annotation.

    Raises:
        RoundTripError: If the regenerated annotation parses to a different schema.
    """
    with open(ts_file_path, 'r', encoding='utf-8') as f:
        type_str = f.read()

    schema, regenerated, reparsed_schema = round_trip(type_str)
    if not schemas_match(schema, reparsed_schema):
        raise RoundTripError(type_str, schema, reparsed_schema)
    return f"Round trip stable:\n{regenerated}"
