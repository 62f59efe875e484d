"""Tests for ipsetctl.toml discovery."""

from pathlib import Path

import pytest

from ipsetctl.config.discovery import CONFIG_ENV_VAR, find_config


class TestFindConfig:
    def test_not_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert find_config(tmp_path) is None

    def test_in_start_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (tmp_path / "ipsetctl.toml").write_text("")
        assert find_config(tmp_path) == tmp_path.resolve() / "ipsetctl.toml"

    def test_walk_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (tmp_path / "ipsetctl.toml").write_text("")
        deep = tmp_path / "x" / "y"
        deep.mkdir(parents=True)
        assert find_config(deep) == tmp_path.resolve() / "ipsetctl.toml"

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        explicit = tmp_path / "elsewhere.toml"
        explicit.write_text("")
        (tmp_path / "ipsetctl.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(explicit))
        assert find_config(tmp_path) == explicit

    def test_env_var_dangling(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ipsetctl.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
