"""Tests for reqsnip.renderers.python and renderer dispatch."""

from __future__ import annotations

from typing import Any

import pytest

from reqsnip.models import ExampleFile, Parameter, SecurityScheme
from reqsnip.renderers import RendererKind, render_curl, render_snippet
from reqsnip.renderers.python import render_python


def _body(mime: str, value: Any) -> dict[str, Any]:
    return {
        "media_types": [
            {"name": mime, "examples": {"default": {"mime": mime, "value": value}}}
        ]
    }


class TestScript:
    """Whole-script rendering."""

    def test_simple_get(self, make_operation) -> None:
        op = make_operation(parameters=[Parameter(name="id", location="path", example=1)])
        assert render_python(op) == (
            "import requests\n"
            "\n"
            'url = "https://example.com/pet/1"\n'
            "\n"
            "headers = {\n"
            '  "Accept": "application/json"\n'
            "}\n"
            "\n"
            'response = requests.request("GET", url, headers=headers)\n'
            "\n"
            "print(response.status_code)\n"
            "print(response.json())"
        )

    def test_json_post(self, make_operation) -> None:
        op = make_operation(
            method="post",
            parameters=[
                Parameter(name="id", location="path", example=123),
                Parameter(name="name", location="query", example="Bob"),
            ],
            request_body=_body("application/json", {"id": "5678", "foo": "bar"}),
        )
        assert render_python(op) == (
            "import requests\n"
            "\n"
            'url = "https://example.com/pet/123"\n'
            "\n"
            "headers = {\n"
            '  "Content-Type": "application/json",\n'
            '  "Accept": "application/json"\n'
            "}\n"
            "\n"
            "params = {\n"
            '  "name": "Bob"\n'
            "}\n"
            "\n"
            "payload = {\n"
            '  "id": "5678",\n'
            '  "foo": "bar"\n'
            "}\n"
            "\n"
            'response = requests.request("POST", url, data=payload, headers=headers, params=params)\n'
            "\n"
            "print(response.status_code)\n"
            "print(response.json())"
        )

    def test_repeated_params_grouped(self, make_operation) -> None:
        op = make_operation(
            path="/pets",
            parameters=[Parameter(name="tags", location="query", example=["dog", "cat"])],
        )
        assert 'params = {\n  "tags": [\n    "dog",\n    "cat"\n  ]\n}\n' in render_python(op)

    def test_cookies(self, make_operation) -> None:
        op = make_operation(
            parameters=[Parameter(name="session", location="cookie", example="s1")]
        )
        text = render_python(op)
        assert 'cookies = {\n  "session": "s1"\n}\n\n' in text
        assert "headers=headers, cookies=cookies)" in text

    def test_url_line_excludes_query_credential(self, make_operation) -> None:
        op = make_operation(
            path="/pets",
            security=[SecurityScheme(name="key", location="query", display_name="k")],
        )
        assert 'url = "https://example.com/pets"\n' in render_python(op)

    def test_relative_url(self, make_operation) -> None:
        op = make_operation(path="/pets", server_url="/api")
        assert 'url = "https://host.test/api/pets"' in render_python(
            op, base_href="https://host.test/"
        )


class TestResponsePrint:
    """The final print line follows the Accept header."""

    @pytest.mark.parametrize(
        ("accept", "expected"),
        [
            ("application/json", "print(response.json())"),
            ("application/octet-stream", "print(response.content)"),
            ("text/csv", "print(response.text)"),
        ],
    )
    def test_by_accept(self, make_operation, accept: str, expected: str) -> None:
        op = make_operation(parameters=[Parameter(name="Accept", location="header", example=accept)])
        assert render_python(op).endswith(f"print(response.status_code)\n{expected}")


class TestPayload:
    def test_form(self, make_operation) -> None:
        op = make_operation(
            method="post",
            request_body={
                "media_types": [
                    {
                        "name": "application/x-www-form-urlencoded",
                        "examples": {"name": {"mime": "text/plain", "value": "Rex"}},
                    }
                ]
            },
        )
        assert 'payload = "name=Rex"\n' in render_python(op)

    def test_binary(self, make_operation) -> None:
        op = make_operation(
            method="put", request_body=_body("image/png", ExampleFile(name="cat.png"))
        )
        assert 'payload = open("cat.png", "rb")\n' in render_python(op)

    def test_multipart(self, make_operation) -> None:
        op = make_operation(
            method="post",
            request_body=_body(
                "multipart/form-data",
                {"caption": "Sleeping", "photo": ExampleFile(name="rex.png")},
            ),
        )
        text = render_python(op)
        assert 'payload = {\n  "caption": "Sleeping",\n  "photo": "rex.png"\n}\n' in text
        assert '"Content-Type"' not in text

    def test_string(self, make_operation) -> None:
        op = make_operation(method="post", request_body=_body("text/plain", "hello"))
        assert "payload = 'hello'\n" in render_python(op)

    def test_unserializable_json_falls_back_to_text(self, make_operation) -> None:
        op = make_operation(method="post", request_body=_body("application/json", {"a": {1, 2}}))
        assert "payload = '{'\"'\"'a'\"'\"': {1, 2}}'\n" in render_python(op)

    def test_non_finite_numbers_become_null(self, make_operation) -> None:
        op = make_operation(
            method="post", request_body=_body("application/json", {"a": float("-inf")})
        )
        assert 'payload = {\n  "a": null\n}\n' in render_python(op)

    def test_no_payload(self, make_operation) -> None:
        text = render_python(make_operation(method="delete"))
        assert "payload" not in text
        assert 'requests.request("DELETE", url, headers=headers)' in text


class TestRenderSnippet:
    def test_dispatch(self, make_operation) -> None:
        op = make_operation()
        assert render_snippet(op, RendererKind.CURL) == render_curl(op)
        assert render_snippet(op, "python") == render_python(op)

    def test_default_is_curl(self, make_operation) -> None:
        assert render_snippet(make_operation()).startswith("curl -i -X GET")

    def test_language(self) -> None:
        assert RendererKind.CURL.language == "bash"
        assert RendererKind.PYTHON.language == "python"

    def test_unknown_kind(self, make_operation) -> None:
        with pytest.raises(ValueError):
            render_snippet(make_operation(), "httpie")
