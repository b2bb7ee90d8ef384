"""Shared fixtures: an isolated home, a populated editor user directory, fakes."""

import json

import pytest

from vscode_sync.discovery.platform import resolve_platform

from mocks import MockExtensionManager, MockShellRunner


BOM = b"\xef\xbb\xbf"


@pytest.fixture(autouse=True)
def _isolate_home(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep a developer's real config files and editor directory out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def user_dir(tmp_path):
    """Editor user directory with every tracked item present."""
    user = tmp_path / "User"
    user.mkdir()

    (user / "settings.json").write_bytes(BOM + json.dumps({"editor.fontSize": 14}).encode("utf-8"))
    (user / "keybindings.json").write_bytes(b'[{"key": "ctrl+k", "command": "noop"}]\r\n')

    snippets = user / "snippets"
    (snippets / "nested").mkdir(parents=True)
    (snippets / "python.json").write_bytes(BOM + '{"print": {"prefix": "pr"}}'.encode("utf-8"))
    (snippets / "nested" / "x.code-snippets").write_text("{}", encoding="utf-8")
    (snippets / "icon.bin").write_bytes(BOM + b"\x00\xff\x00")

    return user


@pytest.fixture
def root(tmp_path):
    """Archive root; Configs/ is created lazily below it."""
    path = tmp_path / "root"
    path.mkdir()
    return path


@pytest.fixture
def profile(tmp_path, user_dir):
    """Linux profile pointing at the fixture user directory."""
    return resolve_platform(system="Linux", home=tmp_path / "home", environ={}, user_dir=user_dir)


@pytest.fixture
def extensions():
    return MockExtensionManager(installed=["ms-python.python", "esbenp.prettier-vscode"])


@pytest.fixture
def shell(profile):
    """Shell runner where `code --version` answers like a real install."""
    runner = MockShellRunner(profile)
    runner.respond("code --version", stdout="1.95.3\nf1a4fb101478ce6ec82fe9627c43efbf9e98c813\nx64\n")
    return runner
