"""Tests for reqsnip.parser.loader."""

from __future__ import annotations

import io
import textwrap
from pathlib import Path

import pytest

from reqsnip.exceptions import SpecParseError
from reqsnip.parser.loader import _parse_content, load_spec, validate_openapi_version

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_spec
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec for files and stdin."""

    def test_loads_json_file(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore.json"))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Petstore API"

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "spec.yaml"
        yaml_file.write_text(
            textwrap.dedent("""\
                openapi: "3.0.3"
                info:
                  title: YAML Test
                  version: "1.0.0"
                paths: {}
            """),
            encoding="utf-8",
        )
        result = load_spec(str(yaml_file))
        assert result["info"]["title"] == "YAML Test"

    def test_yaml_without_extension(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec"
        spec_file.write_text("openapi: 3.1.0\npaths: {}\n", encoding="utf-8")
        assert load_spec(str(spec_file))["openapi"] == "3.1.0"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            load_spec(str(tmp_path / "nope.json"))

    def test_empty_file(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("  \n", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            load_spec(str(empty))

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"openapi": "3.0.0", "paths": {}}'))
        assert load_spec("-")["openapi"] == "3.0.0"

    def test_empty_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(SpecParseError, match="stdin"):
            load_spec("-")

    def test_url_is_treated_as_path(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            load_spec("https://example.com/openapi.json")


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_json_hint_rejects_yaml(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _parse_content("openapi: 3.0.0", hint="json")

    def test_falls_back_to_yaml(self) -> None:
        assert _parse_content("openapi: 3.0.0\n") == {"openapi": "3.0.0"}

    def test_non_mapping(self) -> None:
        with pytest.raises(SpecParseError, match="object"):
            _parse_content("[1, 2, 3]")

    def test_garbage(self) -> None:
        with pytest.raises(SpecParseError, match="JSON or YAML"):
            _parse_content("key: [unclosed")


# ---------------------------------------------------------------------------
# validate_openapi_version
# ---------------------------------------------------------------------------


class TestValidateOpenapiVersion:
    @pytest.mark.parametrize("version", ["3.0.0", "3.0.3", "3.1.0"])
    def test_accepts_3x(self, version: str) -> None:
        assert validate_openapi_version({"openapi": version}) == version

    def test_rejects_swagger(self) -> None:
        with pytest.raises(SpecParseError, match="Swagger 2.0"):
            validate_openapi_version({"swagger": "2.0"})

    def test_rejects_missing(self) -> None:
        with pytest.raises(SpecParseError, match="Missing 'openapi'"):
            validate_openapi_version({"paths": {}})

    def test_rejects_other_major(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported"):
            validate_openapi_version({"openapi": "4.0.0"})
