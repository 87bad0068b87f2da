# pyright: reportAny=false, reportUnknownArgumentType=false
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from layouts.config import (
    ConfigLoadError,
    ConfigValidationError,
    CyclePolicy,
    LogLevel,
    config_from_dict,
    load_config,
    parse_env_vars,
    parse_string_value,
    read_config_file,
    read_toml_file,
    set_nested_key,
)

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestReadTomlFile:
    def test_parses_valid_toml(self, fs: "FakeFilesystem") -> None:
        content = """
[section]
key = "value"
number = 42
"""
        path = Path("/test/config.toml")
        fs.create_file(path, contents=content)

        result = read_toml_file(path)

        assert result == {"section": {"key": "value", "number": 42}}

    def test_raises_file_not_found_for_missing_file(self, fs: "FakeFilesystem") -> None:
        path = Path("/test/missing.toml")

        with pytest.raises(FileNotFoundError):
            read_toml_file(path)

    def test_raises_config_load_error_for_invalid_toml(
        self, fs: "FakeFilesystem"
    ) -> None:
        content = """
[section
key = "unclosed bracket"
"""
        path = Path("/test/invalid.toml")
        fs.create_file(path, contents=content)

        with pytest.raises(ConfigLoadError) as exc_info:
            read_toml_file(path)

        assert exc_info.value.path == path

    def test_config_load_error_chains_original_exception(
        self, fs: "FakeFilesystem"
    ) -> None:
        path = Path("/test/bad.toml")
        fs.create_file(path, contents="[bad")

        with pytest.raises(ConfigLoadError) as exc_info:
            read_toml_file(path)

        assert exc_info.value.__cause__ is not None


class TestReadConfigFile:
    def test_reads_whole_layouts_toml(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/layouts.toml")
        fs.create_file(path, contents='default_layout = "base"\n')

        assert read_config_file(path) == {"default_layout": "base"}

    def test_reads_tool_section_of_pyproject(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/pyproject.toml")
        fs.create_file(
            path,
            contents=(
                '[project]\nname = "site"\n\n'
                '[tool.layouts]\ndefault_layout = "base"\n'
            ),
        )

        assert read_config_file(path) == {"default_layout": "base"}

    def test_pyproject_without_section_is_empty(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/pyproject.toml")
        fs.create_file(path, contents='[project]\nname = "site"\n')

        assert read_config_file(path) == {}

    def test_pyproject_section_must_be_table(self, fs: "FakeFilesystem") -> None:
        path = Path("/project/pyproject.toml")
        fs.create_file(path, contents='[tool]\nlayouts = "nope"\n')

        with pytest.raises(ConfigLoadError, match="must be a table"):
            read_config_file(path)


class TestParseStringValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("42", 42),
            ("1.5", 1.5),
            ('["{%", "%}"]', ["{%", "%}"]),
            ('{"a": 1}', {"a": 1}),
            ("base", "base"),
            ("[not json", "[not json"),
            ("v1.2.3", "v1.2.3"),
        ],
    )
    def test_infers_types(self, raw: str, expected: object) -> None:
        assert parse_string_value(raw) == expected


class TestSetNestedKey:
    def test_creates_intermediate_dicts(self) -> None:
        d: dict[str, object] = {}
        set_nested_key(d, "renderer.trim_blocks", True)

        assert d == {"renderer": {"trim_blocks": True}}

    def test_replaces_non_dict_intermediate(self) -> None:
        d: dict[str, object] = {"logging": "debug"}
        set_nested_key(d, "logging.level", "info")

        assert d == {"logging": {"level": "info"}}


class TestParseEnvVars:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYOUTS_DEFAULT_LAYOUT", "base")
        monkeypatch.setenv("LAYOUTS_LOGGING__LEVEL", "debug")
        monkeypatch.setenv("OTHER_VALUE", "ignored")

        assert parse_env_vars() == {
            "default_layout": "base",
            "logging": {"level": "debug"},
        }

    def test_skips_reserved_logging_variables(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LAYOUTS_DEBUG", "1")
        monkeypatch.setenv("LAYOUTS_LOG_LEVEL", "info")

        assert parse_env_vars() == {}


class TestConfigFromDict:
    def test_validates(self) -> None:
        config = config_from_dict({"cycle_policy": "error"})
        assert config.cycle_policy is CyclePolicy.ERROR

    def test_wraps_validation_errors(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = config_from_dict({"logging": {"level": "loud"}}, source="test")

        error = exc_info.value
        assert error.key == "logging.level"
        assert error.value == "loud"
        assert error.source == "test"


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config(env=False)

        assert config.default_layout is None
        assert config.cycle_policy is CyclePolicy.VISITED

    def test_precedence(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = Path("/project/layouts.toml")
        fs.create_file(
            path,
            contents=(
                'default_layout = "file"\n'
                'tag = "main"\n'
                "[logging]\n"
                'level = "info"\n'
            ),
        )
        monkeypatch.setenv("LAYOUTS_DEFAULT_LAYOUT", "env")
        monkeypatch.setenv("LAYOUTS_LOGGING__LEVEL", "error")

        config = load_config(path, overrides={"logging": {"level": "debug"}})

        assert config.tag == "main"
        assert config.default_layout == "env"
        assert config.logging.level is LogLevel.DEBUG

    def test_env_can_be_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYOUTS_DEFAULT_LAYOUT", "env")

        assert load_config(env=False).default_layout is None

    def test_env_delims_are_parsed_as_json(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LAYOUTS_DELIMS", '["<%", "%>"]')

        assert load_config().delims == ("<%", "%>")

    def test_missing_file_raises(self, fs: "FakeFilesystem") -> None:
        with pytest.raises(FileNotFoundError):
            _ = load_config(Path("/nowhere/layouts.toml"))

    def test_invalid_env_value_reports_source(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LAYOUTS_CYCLE_POLICY", "sometimes")

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = load_config()

        assert exc_info.value.key == "cycle_policy"
        assert exc_info.value.source == "env"
