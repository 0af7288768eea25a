"""YAML config file tests."""

import pytest

from src.notify import ConfigError, DestinationEntry
from src.notify import config_loader
from src.notify.config_loader import load_config_entries, parse_config, write_config


class TestParseConfig:
    def test_urls_list(self):
        entries = parse_config(
            "urls:\n"
            "  - ntfy://ntfy.sh/alerts\n"
            "  - url: discord://id/token\n"
            "    tags: [ops, urgent]\n"
            "  - url: slack://a/b/c\n"
            "    tags: ops\n"
        )
        assert entries == [
            DestinationEntry("ntfy://ntfy.sh/alerts"),
            DestinationEntry("discord://id/token", ("ops", "urgent")),
            DestinationEntry("slack://a/b/c", ("ops",)),
        ]

    def test_services_map(self):
        entries = parse_config("services:\n  ops: slack://a/b/c\n  home: ntfy://ntfy.sh/home\n")
        assert entries == [
            DestinationEntry("slack://a/b/c", ("ops",)),
            DestinationEntry("ntfy://ntfy.sh/home", ("home",)),
        ]

    def test_both_sections(self):
        entries = parse_config("urls:\n  - ntfy://ntfy.sh/a\nservices:\n  ops: ntfy://ntfy.sh/b\n")
        assert [e.url for e in entries] == ["ntfy://ntfy.sh/a", "ntfy://ntfy.sh/b"]

    def test_malformed_items_are_skipped(self):
        entries = parse_config("urls:\n  - 42\n  - {tags: [x]}\n  - ntfy://ntfy.sh/ok\n")
        assert entries == [DestinationEntry("ntfy://ntfy.sh/ok")]

    @pytest.mark.parametrize("content", ["", "just a string", "- a\n- b\n"])
    def test_non_mapping_document_is_empty(self, content):
        assert parse_config(content) == []

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_config("urls: [unclosed\n", "broken.yml")
        assert exc_info.value.path == "broken.yml"

    def test_urls_must_be_a_list(self):
        with pytest.raises(ConfigError, match="'urls' must be a list"):
            parse_config("urls: ntfy://ntfy.sh/a\n")

    def test_services_must_be_a_mapping(self):
        with pytest.raises(ConfigError):
            parse_config("services:\n  - ntfy://ntfy.sh/a\n")


class TestLoadConfigEntries:
    def test_reads_existing_files_in_order(self, tmp_path):
        first = tmp_path / "first.yml"
        second = tmp_path / "second.yml"
        first.write_text("urls:\n  - ntfy://ntfy.sh/one\n")
        second.write_text("urls:\n  - ntfy://ntfy.sh/two\n")

        entries = load_config_entries([first, tmp_path / "missing.yml", str(second)])

        assert [e.url for e in entries] == ["ntfy://ntfy.sh/one", "ntfy://ntfy.sh/two"]

    def test_default_locations(self, tmp_path, monkeypatch):
        default = tmp_path / "default.yml"
        default.write_text("urls:\n  - ntfy://ntfy.sh/default\n")
        monkeypatch.setattr(config_loader, "DEFAULT_CONFIG_PATHS", (default,))

        assert [e.url for e in load_config_entries()] == ["ntfy://ntfy.sh/default"]
        assert load_config_entries(include_defaults=False) == []

    def test_write_then_load(self, tmp_path):
        target = tmp_path / "nested" / "config.yml"
        write_config(target, [DestinationEntry("ntfy://ntfy.sh/a", ("ops",)), DestinationEntry("json://h/p")])

        assert load_config_entries([target], include_defaults=False) == [
            DestinationEntry("ntfy://ntfy.sh/a", ("ops",)),
            DestinationEntry("json://h/p"),
        ]
