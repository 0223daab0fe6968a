"""Tests for config module."""

import logging
from pathlib import Path
from tempfile import TemporaryDirectory

from rust_indexer.config import CONFIG_FILE_NAME, IndexerConfig, load_config


class TestIndexerConfig:
    """Tests for IndexerConfig dataclass."""

    def test_default_values(self):
        """Test that IndexerConfig has correct default values."""
        config = IndexerConfig()
        assert config.source_dir == "src"
        assert config.extensions == [".rs"]
        assert config.exclude == []

    def test_defaults_are_not_shared(self):
        """Test that list defaults are independent between instances."""
        first = IndexerConfig()
        first.exclude.append("x")
        assert IndexerConfig().exclude == []


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_config_file_returns_defaults(self):
        """Test that missing config file returns default config."""
        with TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir))
            assert config == IndexerConfig()

    def test_load_valid_config(self):
        """Test loading valid configuration file."""
        with TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / CONFIG_FILE_NAME).write_text(
                "index:\n"
                "  source_dir: crates\n"
                "  extensions: ['.rs', '.rs.in']\n"
                "  exclude: ['generated/*']\n"
            )

            config = load_config(Path(tmpdir))
            assert config.source_dir == "crates"
            assert config.extensions == [".rs", ".rs.in"]
            assert config.exclude == ["generated/*"]

    def test_partial_config_uses_defaults(self):
        """Test that missing keys fall back to defaults."""
        with TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / CONFIG_FILE_NAME).write_text("index:\n  exclude: bench.rs\n")

            config = load_config(Path(tmpdir))
            assert config.source_dir == "src"
            assert config.extensions == [".rs"]
            assert config.exclude == ["bench.rs"]

    def test_missing_index_section_returns_defaults(self):
        """Test that a file without an index section returns defaults."""
        with TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / CONFIG_FILE_NAME).write_text("other:\n  key: value\n")

            assert load_config(Path(tmpdir)) == IndexerConfig()

    def test_invalid_yaml_returns_defaults(self, caplog):
        """Test that malformed YAML logs a warning and returns defaults."""
        with TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / CONFIG_FILE_NAME).write_text("index: [unclosed\n")

            with caplog.at_level(logging.WARNING, logger="rust_indexer.config"):
                config = load_config(Path(tmpdir))

            assert config == IndexerConfig()
            assert "using defaults" in caplog.text

    def test_non_mapping_document_returns_defaults(self):
        """Test that a YAML list document returns defaults."""
        with TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / CONFIG_FILE_NAME).write_text("- a\n- b\n")

            assert load_config(Path(tmpdir)) == IndexerConfig()

    def test_non_mapping_index_section_returns_defaults(self):
        """Test that a scalar index section returns defaults."""
        with TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / CONFIG_FILE_NAME).write_text("index: src\n")

            assert load_config(Path(tmpdir)) == IndexerConfig()

    def test_defaults_to_current_directory(self, tmp_path, monkeypatch):
        """Test that None uses the current working directory."""
        (tmp_path / CONFIG_FILE_NAME).write_text("index:\n  source_dir: lib\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().source_dir == "lib"
