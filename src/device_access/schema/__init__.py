"""Thing schemas and declaration writing."""

from .model import (
    ThingMethod,
    ThingParameter,
    ThingProperty,
    ThingSchema,
    load_thing_schemas,
)
from .writer import (
    json_schema_to_python_type,
    write_thing_schemas,
    write_thing_schemas_to_file,
)

__all__ = [
    "ThingMethod",
    "ThingParameter",
    "ThingProperty",
    "ThingSchema",
    "load_thing_schemas",
    "json_schema_to_python_type",
    "write_thing_schemas",
    "write_thing_schemas_to_file",
]
