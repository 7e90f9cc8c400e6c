"""Tests for hexfield.config -- overlay reading and YAML loading."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

from hexfield.config import (
    MappingConfig,
    affects_colors,
    color_key,
    load_config,
    load_from_yaml,
    read_overlay,
)
from hexfield.markup.colors import ColorClass


def test_color_key():
    assert color_key(ColorClass.DUE_OVERDUE) == "hexfield.colors.overdue"
    assert color_key(ColorClass.PROJECT_TAG) == "hexfield.colors.project-tag"


class TestMappingConfig:
    def test_dotted_lookup(self):
        cfg = MappingConfig({"hexfield": {"colors": {"overdue": "#111111"}}})
        assert cfg.get("hexfield.colors.overdue") == "#111111"

    def test_missing_key_returns_default(self):
        cfg = MappingConfig({"hexfield": {"colors": {}}})
        assert cfg.get("hexfield.colors.today", "fallback") == "fallback"
        assert cfg.get("nothing.here") is None

    def test_non_string_returns_default(self):
        cfg = MappingConfig({"hexfield": {"colors": {"soon": 7}}})
        assert cfg.get("hexfield.colors.soon", "") == ""
        assert cfg.get("hexfield.colors", "") == ""

    def test_set_and_remove(self):
        cfg = MappingConfig()
        cfg.set("hexfield.colors.future", "#222222")
        assert cfg.get("hexfield.colors.future") == "#222222"
        cfg.set("hexfield.colors.future", None)
        assert cfg.get("hexfield.colors.future") is None


class TestReadOverlay:
    def test_reads_every_class_key(self):
        source = MagicMock()
        source.get.return_value = ""
        assert read_overlay(source) == {}
        asked = {call.args[0] for call in source.get.call_args_list}
        assert asked == {color_key(cls) for cls in ColorClass}

    def test_blank_values_omitted(self):
        cfg = MappingConfig({"hexfield": {"colors": {"overdue": "  ", "today": "#ABCDEF"}}})
        assert read_overlay(cfg) == {"today": "#ABCDEF"}

    def test_reads_fresh_each_time(self):
        cfg = MappingConfig()
        assert read_overlay(cfg) == {}
        cfg.set("hexfield.colors.soon", "gold")
        assert read_overlay(cfg) == {"soon": "gold"}


class TestLoadConfig:
    def test_nested_section(self):
        data = {"hexfield": {"colors": {"overdue": "#FF0000"}}}
        assert load_config(data) == {"colors": {"overdue": "#FF0000"}}

    def test_flat_section(self):
        assert load_config({"colors": {"soon": "gold"}}) == {"colors": {"soon": "gold"}}

    def test_unknown_and_unusable_values_dropped(self):
        data = {"colors": {"overdue": 12, "bogus": "#000000", "today": "", "future": "#999999"}}
        assert load_config(data) == {"colors": {"future": "#999999"}}

    def test_empty_and_malformed_sections(self):
        assert load_config({}) == {"colors": {}}
        assert load_config({"hexfield": None}) == {"colors": {}}
        assert load_config({"colors": ["#fff"]}) == {"colors": {}}
        assert load_config({"hexfield": "red"}) == {"colors": {}}
        assert load_config({"hexfield": ["a", "b"]}) == {"colors": {}}
        assert load_config(["a", "b"]) == {"colors": {}}
        assert load_config("red") == {"colors": {}}


def test_load_from_yaml_and_mapping_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "colors.yaml"
        path.write_text(
            "hexfield:\n"
            "  colors:\n"
            "    overdue: \"#FF0000\"\n"
            "    project-tag: teal\n"
        )
        assert load_from_yaml(path) == {"colors": {"overdue": "#FF0000", "project-tag": "teal"}}

        cfg = MappingConfig.from_yaml(path)
        assert read_overlay(cfg) == {"overdue": "#FF0000", "project-tag": "teal"}


def test_load_from_empty_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "empty.yaml"
        path.write_text("")
        assert load_from_yaml(path) == {"colors": {}}


def test_affects_colors():
    assert affects_colors(None)
    assert affects_colors(["hexfield.colors.overdue"])
    assert affects_colors(["hexfield"])
    assert affects_colors(["editor.fontSize", "hexfield.colors"])
    assert not affects_colors(["editor.fontSize"])
    assert not affects_colors(["hexfield.colorsExtra"])
    assert not affects_colors([])


def test_load_from_yaml_list_document_falls_back():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "list.yaml"
        path.write_text("- a\n- b\n")
        assert load_from_yaml(path) == {"colors": {}}
        assert read_overlay(MappingConfig.from_yaml(path)) == {}
