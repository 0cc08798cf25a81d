"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest

from aurawatch.config import DEFAULT_LOG_DIR, Config, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Test loading a valid configuration file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
watch:
  log_dir: "/tmp/vrchat"
  file_glob: "output_log_*.txt"
  poll_interval: 0.5
  wake_on_change: true

classifiers:
  - type: "authentication"
  - type: "aura_unlock"
    config:
      pattern: 'Aura #(?P<aura_id>[0-9]+)\\.'

notifiers:
  - type: "console"
    config:
      show_context: false

auras_json: "/tmp/Auras.json"
ignored_tiers: [4, 5]
""")

        config = load_config(config_file)

        assert config.watch.log_dir == "/tmp/vrchat"
        assert config.watch.poll_interval == 0.5
        assert config.watch.wake_on_change is True
        assert [c.type for c in config.classifiers] == ["authentication", "aura_unlock"]
        assert config.classifiers[1].config["pattern"] == r"Aura #(?P<aura_id>[0-9]+)\."
        assert config.notifiers[0].config == {"show_context": False}
        assert config.auras_json == "/tmp/Auras.json"
        assert config.ignored_tiers == [4, 5]

    def test_load_missing_file(self) -> None:
        """Test that loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """Test that an empty YAML document yields the default config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_config(config_file) == Config()

    def test_partial_config_keeps_defaults(self, tmp_path: Path) -> None:
        """Test that unspecified sections fall back to defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("watch:\n  log_dir: /logs\n")

        config = load_config(config_file)

        assert config.watch.log_dir == "/logs"
        assert config.watch.file_glob == "output_log_*.txt"
        assert config.watch.poll_interval == 1.0
        assert [c.type for c in config.classifiers] == ["authentication", "aura_unlock"]
        assert [n.type for n in config.notifiers] == ["console"]
        assert config.ignored_tiers == [5]

    def test_invalid_poll_interval(self, tmp_path: Path) -> None:
        """Test that a non-positive poll interval is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("watch:\n  poll_interval: 0\n")

        with pytest.raises(ValueError, match="Configuration validation error"):
            load_config(config_file)

    def test_classifier_without_type(self, tmp_path: Path) -> None:
        """Test that classifiers require a type."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("classifiers:\n  - config: {}\n")

        with pytest.raises(ValueError):
            load_config(config_file)


class TestConfigDefaults:
    """Tests for built-in defaults."""

    def test_default_log_dir_is_vrchat(self) -> None:
        """Test that the default log directory points at VRChat's folder."""
        assert DEFAULT_LOG_DIR.endswith(str(Path("LocalLow") / "VRChat" / "VRChat"))
        assert Config().watch.log_dir == DEFAULT_LOG_DIR
