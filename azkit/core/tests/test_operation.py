import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir

import unittest
from enum import Enum
from typing import Optional

from pydantic import Field

from azkit._internal.testing import FakeSession, json_response
from azkit.core.api_resource import safe_json
from azkit.core.exceptions import DecodeError, ResourceNotFoundError
from azkit.core.models import WireModel
from azkit.core.operation import (
    Location,
    OperationSpec,
    Parameter,
    build_request,
    deserialize,
)
from azkit.core.pipeline import Pipeline


class Color(str, Enum):
    RED = "Red"


class Widget(WireModel):
    display_name: Optional[str] = Field(default=None, alias="displayName")
    size: Optional[int] = None


HOST = Parameter(
    "host", Location.PATH, serialized_name="$host", client=True, skip_quote=True
)
NAME = Parameter("name", Location.PATH, pattern=r"^[a-z-]+$", max_length=10)
API_VERSION = Parameter(
    "api_version", Location.QUERY, serialized_name="api-version", client=True
)

GET_WIDGET = OperationSpec(
    name="get_widget",
    method="GET",
    url="{$host}/widgets/{name}",
    parameters=(
        HOST,
        NAME,
        API_VERSION,
        Parameter("expand", Location.QUERY, serialized_name="$expand", required=False),
        Parameter("color", Location.HEADER, serialized_name="x-color", required=False),
    ),
    responses={200: Widget, 204: None},
)
PUT_WIDGET = OperationSpec(
    name="put_widget",
    method="PUT",
    url="{$host}/widgets/{name}",
    parameters=(HOST, NAME, API_VERSION, Parameter("body", Location.BODY)),
    responses={200: Widget, 201: Widget},
)
CLIENT_VALUES = {"host": "https://example.com", "api_version": "2021-07-01"}


def _response(status_code, body=None):
    session = FakeSession([json_response(status_code, body)])
    return Pipeline([], session=session).run("GET", "https://example.com")


class TestBuildRequest(unittest.TestCase):
    def test_binds_every_location(self):
        prepared = build_request(
            GET_WIDGET,
            CLIENT_VALUES,
            dict(name="my-widget", expand=True, color=Color.RED),
        )
        self.assertEqual(prepared.method, "GET")
        self.assertEqual(prepared.url, "https://example.com/widgets/my-widget")
        self.assertEqual(
            prepared.params, {"api-version": "2021-07-01", "$expand": "true"}
        )
        self.assertEqual(prepared.headers["x-color"], "Red")
        self.assertEqual(prepared.headers["Accept"], "application/json")
        self.assertIsNone(prepared.json)

    def test_optional_parameters_are_dropped(self):
        prepared = build_request(GET_WIDGET, CLIENT_VALUES, dict(name="w"))
        self.assertNotIn("$expand", prepared.params)
        self.assertNotIn("x-color", prepared.headers)

    def test_path_values_are_quoted(self):
        spec = GET_WIDGET._replace(parameters=(HOST, Parameter("name", Location.PATH)))
        prepared = build_request(spec, CLIENT_VALUES, dict(name="a b/c"))
        self.assertEqual(prepared.url, "https://example.com/widgets/a%20b%2Fc")

    def test_body_uses_wire_names(self):
        prepared = build_request(
            PUT_WIDGET, CLIENT_VALUES, dict(name="w", body=Widget(display_name="W"))
        )
        self.assertEqual(prepared.json, {"displayName": "W"})

    def test_validation(self):
        with self.assertRaises(ValueError):
            build_request(GET_WIDGET, CLIENT_VALUES, dict(name="Upper"))
        with self.assertRaises(ValueError):
            build_request(GET_WIDGET, CLIENT_VALUES, dict(name="a" * 11))
        with self.assertRaises(ValueError):
            build_request(GET_WIDGET, CLIENT_VALUES, dict())
        with self.assertRaises(ValueError):
            build_request(GET_WIDGET, {"host": "https://example.com"}, dict(name="w"))

    def test_unknown_arguments(self):
        with self.assertRaises(TypeError):
            build_request(GET_WIDGET, CLIENT_VALUES, dict(name="w", colour="red"))


class TestDeserialize(unittest.TestCase):
    def test_declared_model(self):
        widget = deserialize(
            GET_WIDGET, _response(200, {"displayName": "W", "size": 3, "new": 1})
        )
        self.assertEqual(widget.display_name, "W")
        self.assertEqual(widget.size, 3)
        # unknown fields are kept
        self.assertEqual(widget.model_extra, {"new": 1})

    def test_status_without_model(self):
        self.assertIsNone(deserialize(GET_WIDGET, _response(204)))

    def test_undeclared_status(self):
        with self.assertRaises(ResourceNotFoundError) as ctx:
            deserialize(
                GET_WIDGET,
                _response(404, {"error": {"code": "NotFound", "message": "gone"}}),
            )
        self.assertEqual(ctx.exception.error.code, "NotFound")

    def test_undecodable_body(self):
        with self.assertRaises(DecodeError):
            deserialize(GET_WIDGET, _response(200, {"size": "large"}))


class TestSafeJson(unittest.TestCase):
    def test_safe_json(self):
        self.assertEqual(safe_json(Widget(size=1)), {"size": 1})
        self.assertEqual(safe_json({"a": 1}), {"a": 1})
        self.assertEqual(
            safe_json([Widget(size=1), Widget(display_name="x")]),
            [{"size": 1}, {"displayName": "x"}],
        )
        with self.assertRaises(ValueError):
            safe_json("string")


if __name__ == "__main__":
    unittest.main()
