"""Tests for configuration system."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ansisgr.core.config import AnsiSgrConfig, OutputKind, load_config
from ansisgr.core.parser import ParseMode


class TestDefaults:
    def test_defaults(self):
        config = load_config()
        assert config.general.log_level == "warning"
        assert config.parse.mode == ParseMode.LENIENT
        assert config.parse.track_format is True
        assert config.render.output == OutputKind.RICH
        assert config.render.class_prefix == "ansi-"
        assert config.stream.chunk_size == 0

    def test_model_defaults_match_loader(self):
        assert load_config() == AnsiSgrConfig()


class TestOverrides:
    def test_override(self):
        config = load_config(parse={"mode": "strict"})
        assert config.parse.mode == ParseMode.STRICT

    def test_nested_override_keeps_siblings(self):
        config = load_config(render={"output": "html"})
        assert config.render.output == OutputKind.HTML
        assert config.render.wrap is True

    def test_flat_log_level(self):
        assert load_config(log_level="DEBUG").general.log_level == "debug"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            load_config(log_level="loud")

    def test_negative_chunk_size(self):
        with pytest.raises(ValidationError):
            load_config(stream={"chunk_size": -1})


class TestFiles:
    def test_project_config(self, isolated_config):
        project = isolated_config / ".ansisgr"
        project.mkdir()
        (project / "config.toml").write_text('[render]\noutput = "text"\n')
        assert load_config().render.output == OutputKind.TEXT

    def test_project_config_in_parent(self, isolated_config, monkeypatch):
        project = isolated_config / ".ansisgr"
        project.mkdir()
        (project / "config.toml").write_text("[parse]\ntrack_format = false\n")
        nested = isolated_config / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_config().parse.track_format is False

    def test_explicit_file_wins_over_project(self, isolated_config, tmp_path):
        project = isolated_config / ".ansisgr"
        project.mkdir()
        (project / "config.toml").write_text('[render]\noutput = "text"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('[render]\noutput = "html"\n')
        assert load_config(explicit).render.output == OutputKind.HTML

    def test_broken_toml_is_skipped(self, tmp_path, caplog):
        broken = tmp_path / "broken.toml"
        broken.write_text("[render\noutput =")
        config = load_config(broken)
        assert config.render.output == OutputKind.RICH
        assert "Failed to load" in caplog.text

    def test_missing_file_is_ignored(self, tmp_path):
        assert load_config(tmp_path / "nope.toml") == AnsiSgrConfig()


class TestEnvVars:
    def test_env_overrides_file(self, tmp_path, monkeypatch):
        explicit = tmp_path / "c.toml"
        explicit.write_text('[parse]\nmode = "lenient"\n')
        monkeypatch.setenv("ANSISGR_PARSE_MODE", "strict")
        assert load_config(explicit).parse.mode == ParseMode.STRICT

    def test_bool_and_int(self, monkeypatch):
        monkeypatch.setenv("ANSISGR_TRACK_FORMAT", "no")
        monkeypatch.setenv("ANSISGR_CHUNK_SIZE", "4096")
        config = load_config()
        assert config.parse.track_format is False
        assert config.stream.chunk_size == 4096

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("ANSISGR_OUTPUT", "html")
        assert load_config(render={"output": "json"}).render.output == OutputKind.JSON
