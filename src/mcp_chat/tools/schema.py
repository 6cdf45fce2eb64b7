"""Runtime validation of tool arguments against declarative input schemas.

A tool's JSON-Schema-like input description is compiled once into a pydantic
model. Declared properties are coerced to their declared kind, unknown
properties pass through untouched, and missing required properties fail
validation. Only the keys present in the candidate are returned, so
well-formed arguments come back unchanged.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from mcp_chat.errors import ValidationError

logger = logging.getLogger(__name__)

_PERMISSIVE_CONFIG = ConfigDict(extra="allow")


def _annotation_for(node: Any, model_name: str) -> Any:
    """Map a schema node to a Python type annotation.

    Args:
        node: The schema node (a dict with a "type" key)
        model_name: Name to use if the node compiles to a nested model

    Returns:
        The annotation; Any for unrecognized kinds
    """
    if not isinstance(node, dict):
        return Any

    kind = node.get("type")
    if kind == "string":
        return str
    if kind == "number":
        # int | float keeps integers as integers
        return int | float
    if kind == "integer":
        return int
    if kind == "boolean":
        return bool
    if kind == "object":
        if node.get("properties") or node.get("required"):
            return _compile_model(node, model_name)
        return dict[str, Any]
    if kind == "array":
        return list[_annotation_for(node.get("items"), f"{model_name}Item")]
    return Any


def _compile_model(schema: dict[str, Any], model_name: str) -> type[BaseModel]:
    """Compile an object schema into a permissive pydantic model.

    Fields are registered under generated names with the property name as
    alias, so property names that are not identifiers (or that clash with
    BaseModel attributes) still work.
    """
    properties = schema.get("properties") or {}
    required = set(schema.get("required") or [])

    names = list(properties)
    names.extend(sorted(name for name in required if name not in properties))

    fields: dict[str, Any] = {}
    for index, prop_name in enumerate(names):
        annotation = _annotation_for(properties.get(prop_name), f"{model_name}_{index}")
        if prop_name in required:
            fields[f"field_{index}"] = (annotation, Field(..., alias=prop_name))
        else:
            fields[f"field_{index}"] = (
                Optional[annotation],
                Field(default=None, alias=prop_name),
            )

    return create_model(model_name, __config__=_PERMISSIVE_CONFIG, **fields)


class SchemaValidator:
    """Validates candidate argument maps against one compiled schema.

    Attributes:
        schema: The declarative schema this validator was built from
        model: The compiled pydantic model, or None when there is no schema
    """

    def __init__(self, schema: dict[str, Any] | None, name: str = "ToolArguments"):
        self.schema = schema
        self.model: type[BaseModel] | None = None

        if isinstance(schema, dict) and (
            schema.get("properties") or schema.get("required")
        ):
            self.model = _compile_model(schema, name)
            logger.debug(
                f"Compiled argument model {name} with {len(self.model.model_fields)} fields"
            )

    def validate(self, candidate: Any) -> dict[str, Any]:
        """Validate and normalize a candidate argument map.

        Args:
            candidate: The extracted arguments

        Returns:
            dict: The validated arguments

        Raises:
            ValidationError: If the candidate is not a mapping, a required
                property is missing, or a property has the wrong kind
        """
        if not isinstance(candidate, dict):
            raise ValidationError(
                f"Arguments must be an object, got {type(candidate).__name__}"
            )

        if self.model is None:
            return dict(candidate)

        try:
            instance = self.model.model_validate(candidate)
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise ValidationError(
                f"Arguments do not match schema: {'; '.join(errors)}", errors
            ) from e

        return instance.model_dump(by_alias=True, exclude_unset=True)


def build_validator(schema: dict[str, Any] | None, name: str = "ToolArguments") -> SchemaValidator:
    """Build a validator for a tool's input schema.

    Args:
        schema: The declarative schema, or None
        name: Name for the compiled model (shows up in error messages)

    Returns:
        SchemaValidator: A reusable validator
    """
    return SchemaValidator(schema, name=name)


def fallback_arguments(message: str) -> dict[str, Any]:
    """Minimal arguments used when validation fails."""
    if message:
        return {"message": message}
    return {}
