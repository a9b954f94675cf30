"""Tests for thing schemas and the declaration writer."""

import ast
import json

import pytest

from device_access import UnsupportedContractError
from device_access.schema import (
    ThingMethod,
    ThingParameter,
    ThingProperty,
    ThingSchema,
    json_schema_to_python_type,
    load_thing_schemas,
    write_thing_schemas,
    write_thing_schemas_to_file,
)

THERMOSTAT_JSON = {
    "name": "org.sample.Thermostat",
    "description": "A thermostat.",
    "references": ["org.sample.Device"],
    "properties": [
        {
            "name": "temperature",
            "type": {"type": "number"},
            "canRead": True,
            "canWrite": False,
            "description": "Current temperature.",
        },
        {"name": "target", "type": {"type": "integer"}, "canRead": True, "canWrite": True},
        {"name": "hidden", "canRead": False, "canWrite": False},
    ],
    "methods": [
        {
            "name": "setMode",
            "parameters": [
                {"name": "mode", "type": {"type": "string"}},
                {"name": "ok", "type": {"type": "boolean"}, "isOut": True},
            ],
        }
    ],
}

THERMOSTAT_DECLARATION = '''# Generated by device-access

from typing import Any, Protocol


# namespace: org.sample
# extends org.sample.Device (not declared here)
class Thermostat(Protocol):
    """A thermostat."""

    @property
    def temperature(self) -> float:
        """Current temperature."""
        ...

    target: int

    def setMode(self, mode: str) -> bool:
        ...
'''


@pytest.fixture
def thermostat_schema():
    return ThingSchema.from_dict(THERMOSTAT_JSON)


class TestThingSchema:
    """Test the schema model."""

    def test_from_dict(self, thermostat_schema):
        assert thermostat_schema.name == "org.sample.Thermostat"
        assert thermostat_schema.references == ["org.sample.Device"]
        assert [p.name for p in thermostat_schema.properties] == ["temperature", "target", "hidden"]

        temperature = thermostat_schema.get_property("temperature")
        assert temperature.property_type == {"type": "number"}
        assert temperature.can_read and not temperature.can_write

        method = thermostat_schema.get_method("setMode")
        assert [p.name for p in method.in_parameters] == ["mode"]
        assert [p.name for p in method.out_parameters] == ["ok"]

    def test_property_defaults(self):
        prop = ThingProperty.from_dict({"name": "level"})
        assert prop.can_read is True
        assert prop.can_write is False
        assert prop.property_type is None

    def test_names(self, thermostat_schema):
        assert thermostat_schema.short_name == "Thermostat"
        assert thermostat_schema.namespace == "org.sample"

    def test_names_without_namespace(self):
        schema = ThingSchema(name="Thermostat")
        assert schema.short_name == "Thermostat"
        assert schema.namespace is None

    def test_unknown_members(self, thermostat_schema):
        assert thermostat_schema.get_property("pressure") is None
        assert thermostat_schema.get_method("defrost") is None

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"name": ""},
            {"name": "org.sample.X", "properties": [{"canRead": True}]},
            {"name": "org.sample.X", "methods": [{"name": "m", "parameters": [{}]}]},
            ["not", "an", "object"],
        ],
    )
    def test_malformed_schemas(self, data):
        with pytest.raises(ValueError):
            ThingSchema.from_dict(data)

    def test_load_single_schema(self, tmp_path):
        path = tmp_path / "thermostat.json"
        path.write_text(json.dumps(THERMOSTAT_JSON), encoding="utf-8")

        schemas = load_thing_schemas(path)

        assert [s.name for s in schemas] == ["org.sample.Thermostat"]

    def test_load_schema_list(self, tmp_path):
        path = tmp_path / "schemas.json"
        path.write_text(json.dumps([THERMOSTAT_JSON, {"name": "org.sample.Device"}]), encoding="utf-8")

        schemas = load_thing_schemas(str(path))

        assert [s.short_name for s in schemas] == ["Thermostat", "Device"]

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ValueError):
            load_thing_schemas(path)


class TestJsonSchemaToPythonType:
    """Test JSON schema type conversion."""

    @pytest.mark.parametrize(
        "schema, expected",
        [
            ({"type": "integer"}, "int"),
            ({"type": "number"}, "float"),
            ({"type": "string"}, "str"),
            ({"type": "boolean"}, "bool"),
            ({"type": "array", "items": {"type": "string"}}, "list"),
            ({"type": "object"}, "dict"),
            ({"type": "null"}, "Any"),
            ({"type": ["string", "null"]}, "Any"),
            ({}, "Any"),
            (None, "Any"),
        ],
    )
    def test_conversion(self, schema, expected):
        assert json_schema_to_python_type(schema) == expected


class TestWriteThingSchemas:
    """Test declaration writing."""

    def test_thermostat(self, thermostat_schema):
        assert write_thing_schemas([thermostat_schema]) == THERMOSTAT_DECLARATION

    def test_empty_schema(self):
        source = write_thing_schemas([ThingSchema(name="Device")], header="# test")

        assert source == (
            "# test\n"
            "\n"
            "from typing import Any, Protocol\n"
            "\n"
            "\n"
            "class Device(Protocol):\n"
            "    ...\n"
        )

    def test_write_only_property_is_attribute(self):
        schema = ThingSchema(
            name="Lamp",
            properties=[ThingProperty("power", {"type": "boolean"}, can_read=False, can_write=True, description="Power state.")],
        )

        source = write_thing_schemas([schema], indent=2)

        assert "  #: Power state.\n  power: bool\n" in source
        assert "@property" not in source

    def test_void_method_with_description(self):
        schema = ThingSchema(
            name="Lamp",
            methods=[ThingMethod("blink", [ThingParameter("times", {"type": "integer"})], description="Blink.")],
        )

        source = write_thing_schemas([schema])

        assert '    def blink(self, times: int) -> None:\n        """Blink."""\n        ...\n' in source

    def test_multiple_schemas_in_order(self, thermostat_schema):
        source = write_thing_schemas([ThingSchema(name="org.sample.Device"), thermostat_schema])
        assert source.index("class Device(Protocol)") < source.index("class Thermostat(")

    def test_quotes_and_backslashes_in_descriptions(self):
        schema = ThingSchema(
            name="Lamp",
            description='Lamp at C:\\lights\\ says """hello"""',
            properties=[ThingProperty("label", {"type": "string"}, description='Ends in "quotes"')],
            methods=[ThingMethod("blink", [], description='Says "hi"')],
        )

        tree = ast.parse(write_thing_schemas([schema]))

        lamp = tree.body[-1]
        assert ast.get_docstring(lamp) == 'Lamp at C:\\lights\\ says """hello"""'
        label = next(node for node in lamp.body if getattr(node, "name", None) == "label")
        assert ast.get_docstring(label) == 'Ends in "quotes"'
        blink = next(node for node in lamp.body if getattr(node, "name", None) == "blink")
        assert ast.get_docstring(blink) == 'Says "hi"'

    def test_multiline_descriptions(self):
        schema = ThingSchema(
            name="Lamp",
            description="A lamp.\n\nDimmable.",
            properties=[
                ThingProperty("power", {"type": "boolean"}, can_write=True, description="On.\nOff."),
                ThingProperty("level", {"type": "integer"}, description="First line\nsecond line"),
            ],
        )

        source = write_thing_schemas([schema])

        assert "    #: On.\n    #: Off.\n    power: bool\n" in source
        lamp = ast.parse(source).body[-1]
        assert ast.get_docstring(lamp) == "A lamp.\n\nDimmable."

    def test_output_runs_with_references_in_batch(self, thermostat_schema):
        namespace = {}
        exec(write_thing_schemas([thermostat_schema, ThingSchema(name="org.sample.Device")]), namespace)

        assert namespace["Device"] in namespace["Thermostat"].__mro__

    def test_unresolved_reference_is_kept_as_comment(self):
        schema = ThingSchema(name="org.sample.Thermostat", references=["org.sample.Device"])
        source = write_thing_schemas([schema])

        namespace = {}
        exec(source, namespace)

        assert "# extends org.sample.Device (not declared here)\nclass Thermostat(Protocol):" in source
        assert "Device" not in namespace

    def test_short_name_collision_fails(self):
        schemas = [
            ThingSchema(name="a.Light", properties=[ThingProperty("x", {"type": "integer"})]),
            ThingSchema(name="b.Light", properties=[ThingProperty("y", {"type": "integer"})]),
        ]

        with pytest.raises(UnsupportedContractError, match="a.Light"):
            write_thing_schemas(schemas)

    def test_reference_cycle_fails(self):
        schemas = [
            ThingSchema(name="A", references=["B"]),
            ThingSchema(name="B", references=["A"]),
        ]

        with pytest.raises(UnsupportedContractError, match="cycle"):
            write_thing_schemas(schemas)

    @pytest.mark.parametrize(
        "schema",
        [
            ThingSchema(name="Protocol"),
            ThingSchema(name="org.sample.on-off"),
            ThingSchema(name="Lamp", properties=[ThingProperty("class")]),
            ThingSchema(name="Lamp", methods=[ThingMethod("set level")]),
            ThingSchema(name="Lamp", methods=[ThingMethod("dim", [ThingParameter("from")])]),
        ],
    )
    def test_names_that_cannot_be_declared_fail(self, schema):
        with pytest.raises(UnsupportedContractError):
            write_thing_schemas([schema])

    def test_multiline_header_is_commented(self):
        source = write_thing_schemas([ThingSchema(name="Lamp")], header="Generated\n# by hand")

        assert source.startswith("# Generated\n# by hand\n\n")
        ast.parse(source)

    def test_indent_must_be_positive(self):
        with pytest.raises(ValueError):
            write_thing_schemas([ThingSchema(name="Lamp")], indent=0)

    def test_multiple_out_parameters_fail(self):
        schema = ThingSchema(
            name="Lamp",
            methods=[
                ThingMethod(
                    "status",
                    [
                        ThingParameter("power", {"type": "boolean"}, is_out=True),
                        ThingParameter("level", {"type": "integer"}, is_out=True),
                    ],
                )
            ],
        )

        with pytest.raises(UnsupportedContractError, match="status"):
            write_thing_schemas([schema])

    def test_write_to_file(self, tmp_path, thermostat_schema):
        path = tmp_path / "thermostat.pyi"

        write_thing_schemas_to_file([thermostat_schema], path)

        assert path.read_text(encoding="utf-8") == THERMOSTAT_DECLARATION
