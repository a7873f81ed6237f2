"""Tests for configuration loading."""

import pytest

from codegauge.config import DEFAULT_CONFIG, MetricsConfig, load_config
from codegauge.exceptions import ConfigFileError, InvalidConfigError


class TestMetricsConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.min_block_lines == 3
        assert DEFAULT_CONFIG.max_duplication_lines == 5000
        assert DEFAULT_CONFIG.default_language == "javascript"
        assert DEFAULT_CONFIG.verbosity == "normal"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_block_lines": 0},
            {"max_duplication_lines": -1},
            {"workers": 0},
            {"verbosity": "loud"},
            {"default_language": ""},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(InvalidConfigError):
            MetricsConfig(**kwargs)

    def test_resolved_workers(self):
        assert MetricsConfig(workers=3).resolved_workers == 3
        assert 1 <= MetricsConfig().resolved_workers <= 8


class TestLoadConfig:
    """Merging of defaults, files, environment and overrides."""

    def test_no_sources_gives_defaults(self):
        assert load_config() == DEFAULT_CONFIG

    def test_project_file(self, tmp_path):
        (tmp_path / "codegauge.toml").write_text("min_block_lines = 4\n")
        assert load_config().min_block_lines == 4

    def test_global_file_below_project_file(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".codegauge.toml").write_text("min_block_lines = 5\nworkers = 2\n")
        (tmp_path / "codegauge.toml").write_text("min_block_lines = 4\n")
        config = load_config()
        assert config.min_block_lines == 4
        assert config.workers == 2

    def test_explicit_file_with_section(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[codegauge]\ndefault_language = "typescript"\n')
        assert load_config(config_file=path).default_language == "typescript"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigFileError):
            load_config(config_file=tmp_path / "absent.toml")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("min_block_lines = = 3\n")
        with pytest.raises(ConfigFileError):
            load_config(config_file=path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "codegauge.toml").write_text("max_duplication_lines = 100\n")
        monkeypatch.setenv("CODEGAUGE_MAX_DUPLICATION_LINES", "200")
        assert load_config().max_duplication_lines == 200

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("CODEGAUGE_WORKERS", "many")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("CODEGAUGE_MIN_BLOCK_LINES", "6")
        assert load_config(min_block_lines=7).min_block_lines == 7

    def test_none_overrides_ignored(self):
        assert load_config(workers=None) == DEFAULT_CONFIG

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_unknown_key(self, tmp_path):
        (tmp_path / "codegauge.toml").write_text("colour = 'red'\n")
        with pytest.raises(InvalidConfigError, match="colour"):
            load_config()
