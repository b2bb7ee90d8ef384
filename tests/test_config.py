"""Tests for configuration loading."""

from argparse import Namespace
from pathlib import Path

import pytest

from vscode_sync.config import (
    CONFIG_FILE_NAME,
    Config,
    create_example_config,
    default_root,
)
from vscode_sync.errors import ConfigError


def args(**overrides):
    values = dict(
        root=None, user_dir=None, editor_cli=None,
        no_extensions=False, no_open=False, quiet=False,
    )
    values.update(overrides)
    return Namespace(**values)


class TestLoad:
    def test_defaults_without_file(self, root):
        config = Config.load(root=root)

        assert config.config_file is None
        assert config.paths.root_path == default_root()
        assert config.paths.configs_dir == "Configs"
        assert config.paths.user_dir_path is None
        assert config.sync.extensions
        assert config.sync.open_after

    def test_finds_file_in_root(self, root):
        (root / CONFIG_FILE_NAME).write_text(
            '[paths]\nconfigs_dir = "Snapshots"\n\n[sync]\nopen_after = false\n',
            encoding="utf-8",
        )

        config = Config.load(root=root)

        assert config.config_file == root / CONFIG_FILE_NAME
        assert config.paths.configs_dir == "Snapshots"
        assert not config.sync.open_after
        assert config.sync.extensions

    def test_finds_file_in_home(self, root):
        path = Path.home() / ".config" / "vscode_sync" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text('[editor]\ncli = "/usr/bin/code"\n', encoding="utf-8")

        config = Config.load(root=root)

        assert config.editor.cli == "/usr/bin/code"

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            Config.load(str(tmp_path / "missing.toml"))

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[paths\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            Config.load(str(path))


class TestOverrides:
    def test_cli_beats_file(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text('[paths]\nroot = "/from/file"\n[sync]\nextensions = true\n', encoding="utf-8")

        config = Config.load(str(path)).override_from_args(
            args(root=str(tmp_path), no_extensions=True, quiet=True)
        )

        assert config.paths.root_path == tmp_path
        assert not config.sync.extensions
        assert config.output.quiet

    def test_unset_args_keep_file_values(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text('[paths]\nuser_dir = "/custom/User"\n', encoding="utf-8")

        config = Config.load(str(path)).override_from_args(args())

        assert config.paths.user_dir_path == Path("/custom/User")


class TestValidate:
    def test_default_config_is_valid(self):
        assert Config().validate() == []

    def test_configs_dir_must_be_plain_name(self):
        config = Config()
        config.paths.configs_dir = "a/b"

        assert len(config.validate()) == 1

    def test_missing_editor_cli(self, tmp_path):
        config = Config()
        config.editor.cli = str(tmp_path / "code")

        assert config.validate() == [f"Editor CLI not found: {tmp_path / 'code'}"]


class TestExampleConfig:
    def test_creates_loadable_file(self, tmp_path):
        path = create_example_config(str(tmp_path / CONFIG_FILE_NAME))

        config = Config.load(str(path))
        assert config.paths.configs_dir == "Configs"
        assert config.validate() == []

    def test_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("", encoding="utf-8")

        with pytest.raises(FileExistsError):
            create_example_config(str(path))


class TestDefaultRoot:
    def test_checkout_uses_parent_of_tool_directory(self, tmp_path):
        package_dir = tmp_path / "dotfiles" / "Tools"

        assert default_root(package_dir) == tmp_path / "dotfiles"

    @pytest.mark.parametrize("install_dir", ["site-packages", "dist-packages"])
    def test_installed_package_uses_working_directory(self, tmp_path, install_dir):
        package_dir = tmp_path / "venv" / "lib" / "python3.11" / install_dir / "vscode_sync"
        work = tmp_path / "work"

        root = default_root(package_dir, cwd=work)

        assert root == work
        assert root.name != install_dir

    def test_installed_package_defaults_to_cwd(self, tmp_path):
        package_dir = tmp_path / "site-packages" / "vscode_sync"
        assert default_root(package_dir) == tmp_path  # autouse fixture chdirs here
