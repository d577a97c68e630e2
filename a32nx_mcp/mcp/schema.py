"""Tool/Resource Descriptors and the Request Validator

Descriptors are plain immutable values built from the catalogue literals
in tools.py and resources.py. SchemaNode only describes arguments;
validate_arguments() interprets it before any handler runs.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional


class _NoDefault:
    """Marker for a schema node that declares no default."""

    def __repr__(self):
        return "NO_DEFAULT"


NO_DEFAULT = _NoDefault()


@dataclass(frozen=True)
class SchemaNode:
    """One node of a JSON-Schema-style argument description."""
    type: str
    description: Optional[str] = None
    properties: Mapping = field(default_factory=lambda: MappingProxyType({}))
    required: tuple = ()
    items: Optional["SchemaNode"] = None
    enum: Optional[tuple] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None
    default: Any = NO_DEFAULT

    @classmethod
    def from_dict(cls, schema: dict) -> "SchemaNode":
        """Build a node (recursively) from a JSON Schema literal."""
        properties = {
            name: cls.from_dict(sub)
            for name, sub in schema.get("properties", {}).items()
        }
        items = schema.get("items")
        enum = schema.get("enum")
        return cls(
            type=schema["type"],
            description=schema.get("description"),
            properties=MappingProxyType(properties),
            required=tuple(schema.get("required", ())),
            items=cls.from_dict(items) if items is not None else None,
            enum=tuple(enum) if enum is not None else None,
            minimum=schema.get("minimum"),
            maximum=schema.get("maximum"),
            pattern=schema.get("pattern"),
            default=schema.get("default", NO_DEFAULT)
        )

    def to_dict(self) -> dict:
        """JSON Schema literal as published to clients."""
        out: dict[str, Any] = {"type": self.type}
        if self.description is not None:
            out["description"] = self.description
        if self.enum is not None:
            out["enum"] = list(self.enum)
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.pattern is not None:
            out["pattern"] = self.pattern
        if self.default is not NO_DEFAULT:
            out["default"] = self.default
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.type == "object":
            out["properties"] = {name: sub.to_dict() for name, sub in self.properties.items()}
        if self.required:
            out["required"] = list(self.required)
        return out

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class ToolDescriptor:
    """A callable tool: unique name, description, input contract."""
    name: str
    description: str
    input_schema: SchemaNode

    @classmethod
    def from_dict(cls, tool: dict) -> "ToolDescriptor":
        return cls(
            name=tool["name"],
            description=tool["description"],
            input_schema=SchemaNode.from_dict(tool["inputSchema"])
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.to_dict()
        }


@dataclass(frozen=True)
class ResourceDescriptor:
    """A readable resource addressed by URI."""
    uri: str
    name: str
    description: str
    mime_type: str = "application/json"

    def to_dict(self) -> dict:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type
        }


# =============================================================================
# VALIDATION
# =============================================================================

def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


TYPE_CHECKS = {
    "boolean": lambda v: isinstance(v, bool),
    "integer": _is_integer,
    "number": _is_number,
    "string": lambda v: isinstance(v, str),
    "array": lambda v: isinstance(v, (list, tuple)),
    "object": lambda v: isinstance(v, Mapping),
}


@dataclass
class ValidationResult:
    """Outcome of checking arguments against a schema."""
    violations: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.violations) == 0


def _format_range(node: SchemaNode) -> str:
    if node.minimum is not None and node.maximum is not None:
        return f"[{node.minimum}, {node.maximum}]"
    if node.minimum is not None:
        return f">= {node.minimum}"
    return f"<= {node.maximum}"


def _check_value(node: SchemaNode, value: Any, path: str, violations: list[str]):
    check = TYPE_CHECKS.get(node.type)
    if check is not None and not check(value):
        violations.append(
            f"Invalid type for {path}: expected {node.type}, got {type(value).__name__}"
        )
        return

    if node.enum is not None and value not in node.enum:
        violations.append(f"Invalid value for {path}: {value!r} not in {list(node.enum)}")

    if node.type in ("number", "integer"):
        bounded = node.minimum is not None or node.maximum is not None
        too_low = node.minimum is not None and value < node.minimum
        too_high = node.maximum is not None and value > node.maximum
        # NaN compares False against both bounds
        if not math.isfinite(value) and not bounded:
            violations.append(f"Out of range for {path}: {value} is not finite")
        elif too_low or too_high or not math.isfinite(value):
            violations.append(f"Out of range for {path}: {value} not in {_format_range(node)}")

    if node.pattern is not None and isinstance(value, str):
        if re.fullmatch(node.pattern, value) is None:
            violations.append(
                f"Pattern mismatch for {path}: {value!r} does not match {node.pattern}"
            )

    if node.type == "array" and node.items is not None:
        for i, item in enumerate(value):
            _check_value(node.items, item, f"{path}[{i}]", violations)

    if node.type == "object":
        _check_object(node, value, f"{path}.", violations)


def _check_object(node: SchemaNode, value: Mapping, prefix: str, violations: list[str]):
    for name in node.required:
        if name not in value:
            violations.append(f"Missing required argument: {prefix}{name}")

    for name, sub in node.properties.items():
        if name in value:
            _check_value(sub, value[name], f"{prefix}{name}", violations)


def validate_arguments(descriptor: ToolDescriptor, arguments: Any) -> ValidationResult:
    """Check call arguments against a tool's input schema.

    Declared properties are type/enum/range/pattern checked when present,
    required properties must be present, undeclared extras are ignored.

    Args:
        descriptor: Tool being called
        arguments: Argument mapping from the request

    Returns:
        ValidationResult listing every violation found
    """
    result = ValidationResult()

    if not isinstance(arguments, Mapping):
        result.violations.append(
            f"Invalid arguments: expected object, got {type(arguments).__name__}"
        )
        return result

    _check_object(descriptor.input_schema, arguments, "", result.violations)
    return result
