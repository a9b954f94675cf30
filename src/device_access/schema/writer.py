"""Writes thing schemas as Python Protocol declarations.

Device implementations can type-check against the generated protocols to
make sure they provide every member of the interfaces they claim.
"""

from pathlib import Path
from typing import Iterable, Optional, Union
import keyword
import logging

from .model import JsonSchema, ThingMethod, ThingProperty, ThingSchema
from ..core.errors import UnsupportedContractError

logger = logging.getLogger(__name__)

DEFAULT_HEADER = "# Generated by device-access"

# Names the generated module imports itself
_RESERVED_NAMES = {"Any", "Protocol"}

_TYPE_MAP = {
    "integer": "int",
    "number": "float",
    "string": "str",
    "boolean": "bool",
    "array": "list",
    "object": "dict",
}


def json_schema_to_python_type(schema: Optional[JsonSchema]) -> str:
    """Convert a JSON schema to the name of a Python type.

    Only the top-level ``type`` keyword is considered; anything that is
    missing or not understood becomes ``Any``.
    """
    if not schema or not isinstance(schema.get("type"), str):
        return "Any"
    return _TYPE_MAP.get(schema["type"], "Any")


def _check_identifier(name: str, kind: str) -> None:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise UnsupportedContractError(f"{kind} name '{name}' is not a valid Python identifier")


def _docstring(text: str, pad: str) -> list[str]:
    text = text.replace("\\", "\\\\").replace('"', '\\"')
    first, *rest = text.splitlines() or [""]
    if not rest:
        return [f'{pad}"""{first}"""']
    return [f'{pad}"""{first}'] + [f"{pad}{line}".rstrip() for line in rest] + [f'{pad}"""']


def _comment(text: str, pad: str) -> list[str]:
    return [f"{pad}#: {line}".rstrip() for line in text.splitlines()]


def _write_property(prop: ThingProperty, pad: str) -> list[str]:
    _check_identifier(prop.name, "Property")
    type_name = json_schema_to_python_type(prop.property_type)

    if prop.can_read and not prop.can_write:
        lines = [f"{pad}@property", f"{pad}def {prop.name}(self) -> {type_name}:"]
        if prop.description:
            lines += _docstring(prop.description, pad * 2)
        lines.append(f"{pad * 2}...")
        return lines

    if prop.can_read or prop.can_write:
        # Protocols have no write-only attributes
        lines = _comment(prop.description, pad) if prop.description else []
        lines.append(f"{pad}{prop.name}: {type_name}")
        return lines

    return []


def _write_method(method: ThingMethod, pad: str) -> list[str]:
    _check_identifier(method.name, "Method")
    parameters = ["self"]
    return_type = "None"
    has_out = False

    for p in method.parameters:
        type_name = json_schema_to_python_type(p.parameter_type)
        if p.is_out:
            if has_out:
                raise UnsupportedContractError(
                    f"Method '{method.name}' has multiple out parameters, "
                    "which are not supported"
                )
            has_out = True
            return_type = type_name
        else:
            _check_identifier(p.name, "Parameter")
            parameters.append(f"{p.name}: {type_name}")

    lines = [f"{pad}def {method.name}({', '.join(parameters)}) -> {return_type}:"]
    if method.description:
        lines += _docstring(method.description, pad * 2)
    lines.append(f"{pad * 2}...")
    return lines


def _order_schemas(schemas: Iterable[ThingSchema]) -> list[ThingSchema]:
    """Order schemas so every referenced schema is declared before its users.

    Raises:
        UnsupportedContractError: If two schemas share a class name or
            references form a cycle
    """
    schemas = list(schemas)
    by_name: dict[str, ThingSchema] = {}
    class_names: dict[str, str] = {}

    for schema in schemas:
        short_name = schema.short_name
        _check_identifier(short_name, "Schema")
        if short_name in _RESERVED_NAMES:
            raise UnsupportedContractError(f"Schema name '{short_name}' is reserved")
        if short_name in class_names:
            raise UnsupportedContractError(
                f"Schemas '{class_names[short_name]}' and '{schema.name}' "
                f"would both be declared as class {short_name}"
            )
        class_names[short_name] = schema.name
        by_name[schema.name] = schema

    ordered: list[ThingSchema] = []
    visiting: set[str] = set()
    done: set[str] = set()

    def visit(schema: ThingSchema) -> None:
        if schema.name in done:
            return
        if schema.name in visiting:
            raise UnsupportedContractError(f"Schema '{schema.name}' is part of a reference cycle")
        visiting.add(schema.name)
        for ref in schema.references:
            if ref in by_name:
                visit(by_name[ref])
        visiting.discard(schema.name)
        done.add(schema.name)
        ordered.append(schema)

    for schema in schemas:
        visit(schema)

    return ordered


def _write_schema(schema: ThingSchema, pad: str, declared: set[str]) -> list[str]:
    lines = []
    if schema.namespace:
        lines.append(f"# namespace: {schema.namespace}")

    bases = []
    for ref in schema.references:
        if ref in declared:
            bases.append(ref.rsplit(".", 1)[-1])
        else:
            lines.append(f"# extends {ref} (not declared here)")
    lines.append(f"class {schema.short_name}({', '.join(bases + ['Protocol'])}):")

    blocks = []
    if schema.description:
        blocks.append(_docstring(schema.description, pad))
    for prop in schema.properties:
        block = _write_property(prop, pad)
        if block:
            blocks.append(block)
    for method in schema.methods:
        blocks.append(_write_method(method, pad))

    if not blocks:
        blocks.append([f"{pad}..."])

    for i, block in enumerate(blocks):
        if i:
            lines.append("")
        lines.extend(block)

    return lines


def write_thing_schemas(
    schemas: Iterable[ThingSchema],
    header: Optional[str] = None,
    indent: int = 4,
) -> str:
    """Write thing schemas as Python declaration source.

    Schemas are declared in an order where referenced schemas come first.
    References to schemas outside the batch are kept as comments, since
    there is no class to derive from.

    Args:
        schemas: One or more schemas to write
        header: Comment text at the top of the output
        indent: Number of spaces per indentation level

    Returns:
        Python source declaring one Protocol class per schema

    Raises:
        UnsupportedContractError: If a method has more than one out parameter,
            a name is not a Python identifier, two schemas share a class
            name, or references form a cycle
        ValueError: If indent is less than 1
    """
    if indent < 1:
        raise ValueError("Indent must be at least 1")

    pad = " " * indent
    header = header if header is not None else DEFAULT_HEADER
    lines = [line if line.startswith("#") else f"# {line}".rstrip() for line in header.splitlines()]
    lines += ["", "from typing import Any, Protocol"]

    ordered = _order_schemas(schemas)
    declared = {schema.name for schema in ordered}
    for schema in ordered:
        lines += ["", ""]
        lines += _write_schema(schema, pad, declared)

    return "\n".join(lines) + "\n"


def write_thing_schemas_to_file(
    schemas: Iterable[ThingSchema],
    file_path: Union[str, Path],
    header: Optional[str] = None,
    indent: int = 4,
) -> None:
    """Write thing schemas to a Python declaration (.pyi) file.

    Args:
        schemas: One or more schemas to write
        file_path: Path to the target file
        header: Comment line at the top of the output
        indent: Number of spaces per indentation level
    """
    source = write_thing_schemas(schemas, header=header, indent=indent)
    path = Path(file_path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(source)
    logger.info(f"Declarations written to {path}")
