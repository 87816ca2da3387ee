"""Tests for reqsnip.serialization.

Covers:
- JavaScript-style scalar stringification
- Query/cookie styles: form, spaceDelimited, pipeDelimited, deepObject
- Path/header styles: simple, label, matrix
- Percent-encoding in serialize_parameter_value
- Parameters declared with JSON content
- JSON-compatible copies of example bodies
"""

from __future__ import annotations

from typing import Any

import pytest

from reqsnip.models import Parameter
from reqsnip.serialization import (
    encode_uri_component,
    serialize,
    serialize_parameter_value,
    stringify,
    to_json_compatible,
)


def _param(name: str = "tags", location: str = "query", **kwargs: Any) -> Parameter:
    return Parameter(name=name, location=location, **kwargs)


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (1.0, "1"),
            (1.5, "1.5"),
            (42, "42"),
            ("dog", "dog"),
            (["a", 1, True], "a,1,true"),
        ],
    )
    def test_values(self, value: Any, expected: str) -> None:
        assert stringify(value) == expected


class TestEncodeUriComponent:
    def test_reserved_characters_encoded(self) -> None:
        assert encode_uri_component("a b/c?d=e&f") == "a%20b%2Fc%3Fd%3De%26f"

    def test_unreserved_marks_kept(self) -> None:
        assert encode_uri_component("a-b_c.d!~*'()") == "a-b_c.d!~*'()"


class TestQueryStyles:
    """Keyed serialization for query and cookie parameters."""

    def test_scalar(self) -> None:
        assert serialize(_param("limit"), 10) == "limit=10"

    def test_form_explode_default(self) -> None:
        assert serialize(_param(), ["a", "b"]) == "tags=a&tags=b"

    def test_form_no_explode(self) -> None:
        assert serialize(_param(explode=False), ["a", "b"]) == "tags=a,b"

    def test_space_delimited(self) -> None:
        param = _param(style="spaceDelimited", explode=False)
        assert serialize(param, ["a", "b"]) == "tags=a b"
        assert serialize_parameter_value(param, ["a", "b"]) == "tags=a%20b"

    def test_pipe_delimited(self) -> None:
        param = _param(style="pipeDelimited", explode=False)
        assert serialize(param, ["a", "b"]) == "tags=a|b"
        assert serialize_parameter_value(param, ["a", "b"]) == "tags=a%7Cb"

    def test_empty_list(self) -> None:
        assert serialize(_param(), []) == "tags="

    def test_object_explode(self) -> None:
        assert serialize(_param("filter"), {"color": "red", "size": "L"}) == "color=red&size=L"

    def test_object_no_explode(self) -> None:
        param = _param("filter", explode=False)
        assert serialize(param, {"color": "red", "size": "L"}) == "filter=color,red,size,L"

    def test_deep_object(self) -> None:
        param = _param("filter", style="deepObject", explode=True)
        assert (
            serialize(param, {"color": "red", "size": "L"})
            == "filter[color]=red&filter[size]=L"
        )

    def test_cookie_uses_form(self) -> None:
        assert serialize(_param("session", "cookie"), "s1") == "session=s1"

    def test_decoded_versus_encoded(self) -> None:
        param = _param("q")
        assert serialize(param, "a b") == "q=a b"
        assert serialize_parameter_value(param, "a b") == "q=a%20b"


class TestPathStyles:
    """Unkeyed serialization for path and header parameters."""

    def test_simple_scalar(self) -> None:
        assert serialize(_param("id", "path"), 5) == "5"

    def test_simple_list(self) -> None:
        assert serialize(_param("id", "path"), [3, 4, 5]) == "3,4,5"

    def test_simple_object(self) -> None:
        param = _param("id", "path")
        assert serialize(param, {"role": "admin", "first": "Alex"}) == "role,admin,first,Alex"

    def test_simple_object_explode(self) -> None:
        param = _param("id", "path", explode=True)
        assert serialize(param, {"role": "admin", "first": "Alex"}) == "role=admin,first=Alex"

    def test_label(self) -> None:
        assert serialize(_param("id", "path", style="label"), 5) == ".5"
        assert serialize(_param("id", "path", style="label"), [3, 4]) == ".3,4"
        assert serialize(_param("id", "path", style="label", explode=True), [3, 4]) == ".3.4"

    def test_matrix(self) -> None:
        assert serialize(_param("id", "path", style="matrix"), 5) == ";id=5"
        assert serialize(_param("id", "path", style="matrix"), [3, 4]) == ";id=3,4"
        assert (
            serialize(_param("id", "path", style="matrix", explode=True), [3, 4])
            == ";id=3;id=4"
        )

    def test_matrix_object_explode(self) -> None:
        param = _param("id", "path", style="matrix", explode=True)
        assert serialize(param, {"role": "admin"}) == ";role=admin"

    def test_path_value_percent_encoded(self) -> None:
        assert serialize_parameter_value(_param("id", "path"), "a b/c") == "a%20b%2Fc"

    def test_header_boolean(self) -> None:
        assert serialize(_param("X-Flag", "header"), True) == "true"


class TestContentParameters:
    """Parameters declared with ``content`` are serialized as JSON."""

    def test_query_json(self) -> None:
        param = _param("filter", serialization_mime="application/json")
        assert serialize(param, {"a": 1}) == 'filter={"a":1}'

    def test_query_json_encoded(self) -> None:
        param = _param("filter", serialization_mime="application/json")
        assert serialize_parameter_value(param, {"a": 1}) == "filter=%7B%22a%22%3A1%7D"

    def test_path_json(self) -> None:
        param = _param("spec", "path", serialization_mime="application/json")
        assert serialize(param, [1, 2]) == "[1,2]"


class TestToJsonCompatible:
    def test_non_finite_floats_become_none(self) -> None:
        value = {"a": float("nan"), "b": [1.5, float("inf"), {"c": float("-inf")}]}
        assert to_json_compatible(value) == {"a": None, "b": [1.5, None, {"c": None}]}

    def test_input_untouched(self) -> None:
        value = [float("nan")]
        to_json_compatible(value)
        assert value[0] != value[0]

    def test_cycle_kept(self) -> None:
        value: dict[str, Any] = {}
        value["self"] = value
        assert to_json_compatible(value)["self"] is value
