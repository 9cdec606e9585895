"""Tests for InvSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from invctl.config.settings import InvSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = InvSettings.from_cli(data_root=tmp_path)
        assert settings.data_root == tmp_path
        assert settings.json_output is False
        assert settings.storage.directory == "data"
        assert settings.storage.indent == 2
        assert settings.stock.low_stock_threshold == 5
        assert settings.stock.expiry_warning_days == 7

    def test_frozen(self, tmp_path: Path) -> None:
        settings = InvSettings.from_cli(data_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "invctl.toml").write_text('[storage]\ndirectory = "stock"\n')
        settings = InvSettings.from_cli(data_root=tmp_path)
        assert settings.storage.directory == "stock"
        assert settings.storage.indent == 2
        assert settings.config_path == tmp_path / "invctl.toml"

    def test_root_from_discovered_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "invctl.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = InvSettings.from_cli()
        assert settings.data_root.resolve() == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[stock]\nlow_stock_threshold = 1\n")
        settings = InvSettings.from_cli(config_path=str(custom))
        assert settings.stock.low_stock_threshold == 1
        assert settings.data_root == custom.parent

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "invctl.toml").write_text("[storage\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            InvSettings.from_cli(data_root=tmp_path)

    def test_invalid_value_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "invctl.toml").write_text("[storage]\nindent = -1\n")
        with pytest.raises(Exception):
            InvSettings.from_cli(data_root=tmp_path)

    def test_toml_path_does_not_leak_into_later_settings(self, tmp_path: Path) -> None:
        (tmp_path / "invctl.toml").write_text("[stock]\nlow_stock_threshold = 1\n")
        InvSettings.from_cli(data_root=tmp_path)
        assert InvSettings().stock.low_stock_threshold == 5


class TestEnvAndFlags:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "invctl.toml").write_text('[storage]\ndirectory = "from-toml"\n')
        monkeypatch.setenv("INVCTL_STORAGE__DIRECTORY", "from-env")
        settings = InvSettings.from_cli(data_root=tmp_path)
        assert settings.storage.directory == "from-env"

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "invctl.toml").write_text("verbose = true\n")
        settings = InvSettings.from_cli(data_root=tmp_path, verbose=False, json_output=True)
        assert settings.verbose is False
        assert settings.json_output is True
