"""
Configuration management for vscode_sync.

Supports:
- TOML config files
- Command-line overrides
- Sensible defaults

Priority (highest to lowest):
1. Command-line arguments
2. Config file
3. Defaults
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

from .errors import ConfigError


# Directory holding this package
PACKAGE_DIR = Path(__file__).parent.resolve()

# Install locations that must never hold the Configs/ archive
INSTALL_DIR_NAMES = {"site-packages", "dist-packages"}

CONFIG_FILE_NAME = "vscode_sync.toml"


def default_root(package_dir: Optional[Path] = None, cwd: Optional[Path] = None) -> Path:
    """
    Directory that holds Configs/ when no root is configured.

    A source checkout (e.g. Tools/vscode_sync) uses the checkout's parent, so
    snapshots sit next to the tool. An installed package lives in the Python
    environment, so the current working directory is used instead.
    """
    package_dir = Path(package_dir) if package_dir is not None else PACKAGE_DIR
    if INSTALL_DIR_NAMES.intersection(package_dir.parts):
        return Path(cwd) if cwd is not None else Path.cwd()
    return package_dir.parent


def config_search_paths(root: Optional[Path] = None) -> List[Path]:
    """Default config file locations, searched in order."""
    return [
        (root or default_root()) / CONFIG_FILE_NAME,
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / ".config" / "vscode_sync" / "config.toml",
    ]


@dataclass
class PathsConfig:
    """Where snapshots live and which editor directory to use."""
    root: str = ""
    configs_dir: str = "Configs"
    user_dir: str = ""

    @property
    def root_path(self) -> Path:
        return Path(self.root).expanduser() if self.root else default_root()

    @property
    def user_dir_path(self) -> Optional[Path]:
        return Path(self.user_dir).expanduser() if self.user_dir else None


@dataclass
class EditorConfig:
    """Editor CLI configuration."""
    cli: str = ""


@dataclass
class SyncConfig:
    """Collect/sync behavior."""
    extensions: bool = True
    open_after: bool = True


@dataclass
class OutputConfig:
    """Output configuration."""
    quiet: bool = False


@dataclass
class Config:
    """Main configuration container."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Source tracking
    _config_file: Optional[Path] = None

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    @classmethod
    def load(cls, config_path: Optional[str] = None, root: Optional[Path] = None) -> "Config":
        """
        Load configuration from file.

        Args:
            config_path: Explicit path to config file. If None, searches default locations.
            root: Archive root used for the first search location

        Returns:
            Config instance with loaded values

        Raises:
            ConfigError: If an explicit file is missing or any file is malformed
        """
        config = cls()

        if config_path:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigError(f"Config file not found: {config_path}")
        else:
            path = cls._find_config_file(root)

        if path:
            config = cls._load_from_file(path)
            config._config_file = path

        return config

    @classmethod
    def _find_config_file(cls, root: Optional[Path] = None) -> Optional[Path]:
        """Find config file in default locations."""
        for path in config_search_paths(root):
            if path.is_file():
                return path
        return None

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load config from TOML file."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "paths" in data:
            paths = data["paths"]
            config.paths = PathsConfig(
                root=paths.get("root", config.paths.root),
                configs_dir=paths.get("configs_dir", config.paths.configs_dir),
                user_dir=paths.get("user_dir", config.paths.user_dir),
            )

        if "editor" in data:
            editor = data["editor"]
            config.editor = EditorConfig(
                cli=editor.get("cli", config.editor.cli),
            )

        if "sync" in data:
            sync = data["sync"]
            config.sync = SyncConfig(
                extensions=sync.get("extensions", config.sync.extensions),
                open_after=sync.get("open_after", config.sync.open_after),
            )

        if "output" in data:
            out = data["output"]
            config.output = OutputConfig(
                quiet=out.get("quiet", config.output.quiet),
            )

        return config

    def override_from_args(self, args) -> "Config":
        """
        Override config values from argparse namespace.

        Args with value None/False are ignored (keeping config file values).
        """
        if getattr(args, "root", None):
            self.paths.root = args.root
        if getattr(args, "user_dir", None):
            self.paths.user_dir = args.user_dir
        if getattr(args, "editor_cli", None):
            self.editor.cli = args.editor_cli
        if getattr(args, "no_extensions", False):
            self.sync.extensions = False
        if getattr(args, "no_open", False):
            self.sync.open_after = False
        if getattr(args, "quiet", False):
            self.output.quiet = True

        return self

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        name = self.paths.configs_dir
        if not name or Path(name).name != name:
            errors.append(f"configs_dir must be a plain directory name, got '{name}'")

        if self.editor.cli and not Path(self.editor.cli).expanduser().exists():
            errors.append(f"Editor CLI not found: {self.editor.cli}")

        return errors

    def summary(self, include_config_path: bool = True) -> str:
        """Generate human-readable config summary."""
        lines = []

        if include_config_path:
            if self._config_file:
                lines.append(f"Config: {self._config_file}")
            else:
                lines.append("Config: (defaults)")

        lines.append(f"Snapshots: {self.paths.root_path / self.paths.configs_dir}")
        if self.paths.user_dir:
            lines.append(f"User dir: {self.paths.user_dir}")
        lines.append(f"Editor CLI: {self.editor.cli or '(auto)'}")
        lines.append(f"Extensions: {'on' if self.sync.extensions else 'off'}")

        return "\n".join(lines)


EXAMPLE_CONFIG = """# vscode_sync configuration

[paths]
# Directory holding the Configs/ archive
# (default: parent of a source checkout, else the current directory)
root = ""
configs_dir = "Configs"
# Override the editor user directory
user_dir = ""

[editor]
# Explicit path to the editor CLI (default: `code`, with macOS fallbacks)
cli = ""

[sync]
extensions = true
open_after = true

[output]
quiet = false
"""


def create_example_config(path: str = CONFIG_FILE_NAME) -> Path:
    """Create example config file."""
    target = Path(path)

    if target.exists():
        raise FileExistsError(f"Config file already exists: {path}")

    target.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    return target
