"""
CLI - Command-line interface for vscode_sync.

With no arguments the tool prints the environment report and asks:

    1 - Collect VSCode config → Configs/<timestamp>/
    2 - Sync latest snapshot → VSCode user dir
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from . import __version__
from .config import Config, create_example_config, CONFIG_FILE_NAME
from .errors import VSCodeSyncError
from .runner.engine import EngineConfig, SyncEngine
from .runner.state import Mode
from .snapshot.manager import SnapshotManager
from .ui.console import ConsoleUI
from .ui.interaction import InteractionManager


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="vscode-sync",
        description="Snapshot and restore VS Code settings, keybindings, snippets and extensions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    vscode-sync                    # interactive menu
    vscode-sync --mode collect     # new snapshot under Configs/
    vscode-sync --mode sync        # restore the newest snapshot
    vscode-sync --mode sync --snapshot 2024-12-31-235959
    vscode-sync --list
        """,
    )

    parser.add_argument(
        '--version', action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '-q', '--quiet', action='store_true',
        help='Only print errors',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Show workflow state transitions',
    )

    mode_group = parser.add_argument_group('Operation Modes')
    mode_group.add_argument(
        '--mode', choices=[m.value for m in Mode],
        help='Run collect or sync without the interactive menu',
    )
    mode_group.add_argument(
        '--snapshot', metavar='NAME',
        help='Snapshot to restore in sync mode (default: latest)',
    )
    mode_group.add_argument(
        '--list', action='store_true',
        help='List snapshots and exit',
    )

    path_group = parser.add_argument_group('Paths')
    path_group.add_argument(
        '--root', metavar='PATH',
        help='Directory holding the Configs/ archive (default: parent of a source '
             'checkout, or the current directory for an installed package)',
    )
    path_group.add_argument(
        '--user-dir', metavar='PATH',
        help='Editor user directory (default: platform location)',
    )
    path_group.add_argument(
        '--editor-cli', metavar='PATH',
        help='Path to the editor CLI (default: code)',
    )

    behavior_group = parser.add_argument_group('Behavior')
    behavior_group.add_argument(
        '--no-extensions', action='store_true',
        help='Do not export or install extensions',
    )
    behavior_group.add_argument(
        '--no-open', action='store_true',
        help='Do not open the result in the file browser',
    )

    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument(
        '--config', metavar='PATH',
        help=f'Config file (default: search for {CONFIG_FILE_NAME})',
    )
    config_group.add_argument(
        '--init-config', action='store_true',
        help=f'Write an example {CONFIG_FILE_NAME} to the current directory and exit',
    )

    return parser.parse_args(argv)


def load_config(args) -> Config:
    """Load the config file and apply command-line overrides."""
    root = Path(args.root).expanduser() if args.root else None
    config = Config.load(args.config, root=root)
    return config.override_from_args(args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    console = Console()
    ui = ConsoleUI(quiet=args.quiet, console=console)

    try:
        if args.init_config:
            path = create_example_config()
            ui.print_success(f"Created {path}")
            return 0

        config = load_config(args)
        errors = config.validate()
        if errors:
            for error in errors:
                ui.print_error(error)
            return 1

        engine_config = EngineConfig.from_config(config)
        ui.quiet = config.output.quiet

        if args.list:
            manager = SnapshotManager(engine_config.root, engine_config.configs_dir)
            ui.print_snapshots(manager.list_snapshots(), manager.configs_dir)
            return 0

        ui.print_banner()
        engine = SyncEngine(config=engine_config, ui=ui)
        if args.verbose:
            ui.print(config.summary(), style="dim", markup=False)
            engine.on_state_change(ui.print_state_change)

        mode = Mode(args.mode) if args.mode else None
        interaction = InteractionManager(console=console)
        success = engine.run(
            mode=mode,
            choose=interaction.ask_mode,
            snapshot_name=args.snapshot,
        )
        return 0 if success else 1

    except FileExistsError as e:
        ui.print_error(str(e))
        return 1
    except VSCodeSyncError as e:
        ui.print_error(str(e))
        return 1
    except KeyboardInterrupt:
        ui.print("\n[yellow]Interrupted.[/]")
        return 130


def run():
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
