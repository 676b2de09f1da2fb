"""Tests for roost.aliases — the JSON alias table."""

import json

import pytest

from roost.aliases import AliasTable, load_aliases, load_aliases_or_empty, parse_aliases
from roost.errors import AliasLoadError


@pytest.fixture
def alias_file(tmp_path):
    path = tmp_path / "aliases.json"
    path.write_text(json.dumps({"/old": "/new", "/gh": "https://github.com/example"}))
    return path


class TestLoadAliases:
    def test_loads_mapping(self, alias_file) -> None:
        aliases = load_aliases(alias_file)
        assert aliases["/old"] == "/new"
        assert aliases["/gh"] == "https://github.com/example"
        assert len(aliases) == 2

    def test_accepts_str_path(self, alias_file) -> None:
        assert "/old" in load_aliases(str(alias_file))

    def test_empty_path_is_empty_table(self) -> None:
        assert len(load_aliases("")) == 0
        assert len(load_aliases(None)) == 0

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(AliasLoadError) as exc_info:
            load_aliases(tmp_path / "missing.json")
        assert "opening" in str(exc_info.value)

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "aliases.json"
        path.write_text("{not json")
        with pytest.raises(AliasLoadError) as exc_info:
            load_aliases(path)
        assert "json decoding" in str(exc_info.value)

    def test_empty_object(self, tmp_path) -> None:
        path = tmp_path / "aliases.json"
        path.write_text("{}")
        assert len(load_aliases(path)) == 0


class TestParseAliases:
    @pytest.mark.parametrize("raw", ["[]", '"/old"', "42", "null"])
    def test_rejects_non_objects(self, raw: str) -> None:
        with pytest.raises(AliasLoadError, match="expected a JSON object"):
            parse_aliases(raw)

    @pytest.mark.parametrize("value", ["1", "null", "[\"/a\"]", "{\"to\": \"/a\"}", "true"])
    def test_rejects_non_string_targets(self, value: str) -> None:
        with pytest.raises(AliasLoadError, match="must be a string"):
            parse_aliases(f'{{"/old": {value}}}')

    def test_accepts_bytes(self) -> None:
        aliases = parse_aliases(b'{"/a": "/b"}')
        assert aliases["/a"] == "/b"

    def test_error_names_source(self) -> None:
        with pytest.raises(AliasLoadError) as exc_info:
            parse_aliases("[]", "site/aliases.json")
        assert exc_info.value.path == "site/aliases.json"


class TestLoadAliasesOrEmpty:
    def test_success(self, alias_file) -> None:
        assert load_aliases_or_empty(alias_file)["/old"] == "/new"

    def test_failure_logs_warning_and_degrades(
        self, tmp_path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "aliases.json"
        path.write_text("{broken")
        with caplog.at_level("WARNING", logger="roost.aliases"):
            aliases = load_aliases_or_empty(path)
        assert len(aliases) == 0
        assert "couldn't load aliases" in caplog.text

    def test_no_file_configured_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="roost.aliases"):
            aliases = load_aliases_or_empty("")
        assert len(aliases) == 0
        assert caplog.records == []


class TestAliasTable:
    def test_is_read_only(self) -> None:
        table = AliasTable({"/a": "/b"})
        with pytest.raises(TypeError):
            table["/a"] = "/c"  # type: ignore[index]

    def test_get_missing(self) -> None:
        assert AliasTable().get("/a") is None
