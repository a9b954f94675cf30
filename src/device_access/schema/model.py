"""Thing schema data model.

A thing schema describes one device interface: its properties and methods,
with a JSON schema for each value. Schemas are loaded from JSON documents of
the form::

    {
        "name": "org.opent2t.sample.thermostat.Thermostat",
        "description": "A thermostat",
        "references": ["org.opent2t.sample.Device"],
        "properties": [
            {"name": "temperature", "type": {"type": "number"},
             "canRead": true, "canWrite": false}
        ],
        "methods": [
            {"name": "setMode", "parameters": [
                {"name": "mode", "type": {"type": "string"}},
                {"name": "ok", "type": {"type": "boolean"}, "isOut": true}
            ]}
        ]
    }

A file may hold a single schema object or a list of them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
import json
import logging

logger = logging.getLogger(__name__)

JsonSchema = dict[str, Any]


def _require_name(data: dict, kind: str) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError(f"{kind} is missing a name: {data!r}")
    return name


@dataclass
class ThingParameter:
    """A method parameter; out parameters become the method result."""

    name: str
    parameter_type: Optional[JsonSchema] = None
    is_out: bool = False
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ThingParameter":
        return cls(
            name=_require_name(data, "Parameter"),
            parameter_type=data.get("type"),
            is_out=bool(data.get("isOut", False)),
            description=data.get("description"),
        )


@dataclass
class ThingProperty:
    """A property of a thing interface."""

    name: str
    property_type: Optional[JsonSchema] = None
    can_read: bool = True
    can_write: bool = False
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ThingProperty":
        return cls(
            name=_require_name(data, "Property"),
            property_type=data.get("type"),
            can_read=bool(data.get("canRead", True)),
            can_write=bool(data.get("canWrite", False)),
            description=data.get("description"),
        )


@dataclass
class ThingMethod:
    """A method of a thing interface."""

    name: str
    parameters: list[ThingParameter] = field(default_factory=list)
    description: Optional[str] = None

    @property
    def in_parameters(self) -> list[ThingParameter]:
        return [p for p in self.parameters if not p.is_out]

    @property
    def out_parameters(self) -> list[ThingParameter]:
        return [p for p in self.parameters if p.is_out]

    @classmethod
    def from_dict(cls, data: dict) -> "ThingMethod":
        return cls(
            name=_require_name(data, "Method"),
            parameters=[ThingParameter.from_dict(p) for p in data.get("parameters", [])],
            description=data.get("description"),
        )


@dataclass
class ThingSchema:
    """A named thing interface.

    A ThingSchema can be passed anywhere an interface designator is
    expected, since it carries the interface name.
    """

    name: str
    references: list[str] = field(default_factory=list)
    properties: list[ThingProperty] = field(default_factory=list)
    methods: list[ThingMethod] = field(default_factory=list)
    description: Optional[str] = None

    @property
    def short_name(self) -> str:
        """Get the last component of the dotted name."""
        return self.name.rsplit(".", 1)[-1]

    @property
    def namespace(self) -> Optional[str]:
        """Get the dotted name without its last component, if any."""
        if "." not in self.name:
            return None
        return self.name.rsplit(".", 1)[0]

    def get_property(self, name: str) -> Optional[ThingProperty]:
        return next((p for p in self.properties if p.name == name), None)

    def get_method(self, name: str) -> Optional[ThingMethod]:
        return next((m for m in self.methods if m.name == name), None)

    @classmethod
    def from_dict(cls, data: dict) -> "ThingSchema":
        """Build a schema from its JSON form.

        Raises:
            ValueError: If the schema or one of its members has no name
        """
        if not isinstance(data, dict):
            raise ValueError(f"Schema must be an object, got {type(data).__name__}")

        return cls(
            name=_require_name(data, "Schema"),
            references=list(data.get("references", [])),
            properties=[ThingProperty.from_dict(p) for p in data.get("properties", [])],
            methods=[ThingMethod.from_dict(m) for m in data.get("methods", [])],
            description=data.get("description"),
        )


def load_thing_schemas(path: Union[str, Path]) -> list[ThingSchema]:
    """Load one or more thing schemas from a JSON file.

    Args:
        path: Path to a file holding a schema object or a list of them

    Returns:
        The schemas, in file order

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON or a schema is malformed
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    items = data if isinstance(data, list) else [data]
    schemas = [ThingSchema.from_dict(item) for item in items]
    logger.info(f"Loaded {len(schemas)} schema(s) from {path}")
    return schemas
