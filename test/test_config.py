"""Test the configuration loading functions."""

import os

import pytest

from larslice.config import (
    ConfigCycleError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
    apply_overrides,
    load_config,
    load_config_file,
    resolve_config_path,
)
from larslice.config.load import parse_value


class TestLoad:
    """Loading of YAML configurations."""

    def test_load_string(self):
        """Plain YAML strings are parsed to dictionaries."""
        cfg = load_config("parent:\n  slicing: drift\n  two_d_algorithms: []\n")

        assert cfg == {"parent": {"slicing": "drift", "two_d_algorithms": []}}

    def test_empty(self):
        """An empty configuration is an empty dictionary."""
        assert load_config("") == {}

    def test_not_a_mapping(self):
        """Top-level configurations must be mappings."""
        with pytest.raises(ConfigTypeError):
            load_config("- slicing\n- drift\n")

    def test_missing_file(self, tmp_path):
        """Missing configuration files are reported."""
        with pytest.raises(ConfigPathError):
            load_config_file(str(tmp_path / "missing.yaml"))

    def test_include(self, tmp_path):
        """Blocks can be included from other files."""
        (tmp_path / "parent.yaml").write_text("slicing: one_slice\n")
        (tmp_path / "main.yaml").write_text("parent: !include parent.yaml\n")

        cfg = load_config_file(str(tmp_path / "main.yaml"))
        assert cfg == {"parent": {"slicing": "one_slice"}}

    def test_include_nested(self, tmp_path):
        """Included files resolve their own includes relative to themselves."""
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "slicing.yaml").write_text("name: drift\nmax_gap: 2.0\n")
        (sub / "parent.yaml").write_text("slicing: !include slicing.yaml\n")
        (tmp_path / "main.yaml").write_text("parent: !include sub/parent\n")

        cfg = load_config_file(str(tmp_path / "main.yaml"))
        assert cfg["parent"]["slicing"] == {"name": "drift", "max_gap": 2.0}

    def test_include_missing(self, tmp_path):
        """Missing includes are reported."""
        (tmp_path / "main.yaml").write_text("parent: !include nowhere.yaml\n")

        with pytest.raises(ConfigIncludeError):
            load_config_file(str(tmp_path / "main.yaml"))

    def test_include_cycle(self, tmp_path):
        """Files which include each other are reported."""
        (tmp_path / "a.yaml").write_text("parent: !include b.yaml\n")
        (tmp_path / "b.yaml").write_text("slicing: !include a.yaml\n")

        with pytest.raises(ConfigCycleError) as excinfo:
            load_config_file(str(tmp_path / "a.yaml"))

        names = [os.path.basename(p) for p in excinfo.value.cycle_path]
        assert names == ["a.yaml", "b.yaml", "a.yaml"]
        assert isinstance(excinfo.value, ConfigIncludeError)

    def test_include_self(self, tmp_path):
        """A file cannot include itself."""
        (tmp_path / "main.yaml").write_text("parent: !include main.yaml\n")

        with pytest.raises(ConfigCycleError):
            load_config_file(str(tmp_path / "main.yaml"))

    def test_include_twice(self, tmp_path):
        """The same file can be included by several blocks."""
        (tmp_path / "slicing.yaml").write_text("name: drift\n")
        (tmp_path / "main.yaml").write_text(
            "a: !include slicing.yaml\nb: !include slicing.yaml\n"
        )

        cfg = load_config_file(str(tmp_path / "main.yaml"))
        assert cfg == {"a": {"name": "drift"}, "b": {"name": "drift"}}


class TestResolve:
    """Resolution of configuration paths."""

    def test_extension(self, tmp_path):
        """The YAML extension can be omitted."""
        (tmp_path / "parent.yml").write_text("")

        path = resolve_config_path("parent", str(tmp_path))
        assert path == str(tmp_path / "parent.yml")

    def test_search_path(self, tmp_path, monkeypatch):
        """Files are searched for in the configuration search path."""
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "parent.yaml").write_text("")
        monkeypatch.setenv("LARSLICE_CONFIG_PATH", str(shared))

        path = resolve_config_path("parent.yaml", str(tmp_path))
        assert path == str(shared / "parent.yaml")

    def test_absolute_missing(self, tmp_path):
        """Missing absolute paths are reported."""
        with pytest.raises(ConfigIncludeError):
            resolve_config_path(str(tmp_path / "parent.yaml"), str(tmp_path))


class TestOverrides:
    """Dot-notation overrides."""

    def test_override(self):
        """Values are set at any depth, with their YAML type."""
        cfg = {"parent": {"slicing": "drift"}}
        apply_overrides(
            cfg,
            [
                "parent.slicing=one_slice",
                "parent.two_d_clustering.max_distance=2.5",
                "base.iterations=10",
                "parent.vertex_algorithms=[list_dump]",
            ],
        )

        assert cfg["parent"]["slicing"] == "one_slice"
        assert cfg["parent"]["two_d_clustering"] == {"max_distance": 2.5}
        assert cfg["base"]["iterations"] == 10
        assert cfg["parent"]["vertex_algorithms"] == ["list_dump"]

    def test_bad_override(self):
        """Overrides must have the key=value form and follow dictionaries."""
        with pytest.raises(ConfigPathError):
            apply_overrides({}, ["parent.slicing"])
        with pytest.raises(ConfigTypeError):
            apply_overrides({"parent": {"slicing": "drift"}}, ["parent.slicing.name=drift"])

    @pytest.mark.parametrize(
        "value, expected",
        [("3", 3), ("1.5", 1.5), ("true", True), ("null", None), ("drift", "drift")],
    )
    def test_parse_value(self, value, expected):
        """Override values are parsed as YAML."""
        assert parse_value(value) == expected
