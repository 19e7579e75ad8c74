#!/usr/bin/env python3
"""
dps-config entry point.

Usage:
    dps-config                          # Validate, fix errors, confirm in the menu
    dps-config --export config.sh       # Write confirmed non-default values
    dps-config --no-menu --export-all   # Validate overrides and print everything
    dps-config --env-file previous.sh   # Start from an earlier export

Exit codes: 0 confirmed, 1 aborted or invalid, 2 configuration error.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from dps_configurator.config import EngineConfig, load_engine_config, load_presets_from_file
from dps_configurator.errors import ConfiguratorError
from dps_configurator.interfaces.menu import ConfigurationMenu, MenuState
from dps_configurator.presets import register_default_presets
from dps_configurator.settings import (
    ConfigStore,
    export_all,
    export_non_defaults,
    import_env,
    import_env_file,
    validate_all,
    write_export,
)

logger = logging.getLogger(__name__)

EXIT_CONFIRMED = 0
EXIT_ABORTED = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dps-config",
        description="dps-config - collect and confirm NixOS installer settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--prefix",
        type=str,
        help="Environment variable prefix for overrides (default: DPS)",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        help="Import settings from a dotenv file or a previous export",
    )

    parser.add_argument(
        "--presets-file",
        type=str,
        help="Load additional presets from a YAML file",
    )

    parser.add_argument(
        "--auto-confirm",
        action="store_true",
        help="Confirm without showing the menu when the configuration is valid",
    )

    parser.add_argument(
        "--export",
        type=str,
        metavar="PATH",
        help="Write the export script to PATH instead of stdout",
    )

    parser.add_argument(
        "--export-all",
        action="store_true",
        help="Export every setting, including unchanged defaults",
    )

    parser.add_argument(
        "--no-menu",
        action="store_true",
        help="Validate imported values and export without prompting",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version",
    )

    return parser.parse_args(argv)


def apply_args_to_config(args: argparse.Namespace, config: EngineConfig) -> EngineConfig:
    """Apply command line arguments to the engine configuration."""
    if getattr(args, "verbose", False):
        config.verbose = True

    prefix_arg = getattr(args, "prefix", None)
    if prefix_arg is not None and prefix_arg.strip():
        config.prefix = prefix_arg.strip()

    if getattr(args, "auto_confirm", False):
        config.auto_confirm = True

    presets_arg = getattr(args, "presets_file", None)
    if presets_arg:
        config.presets_file = Path(presets_arg).expanduser()

    export_arg = getattr(args, "export", None)
    if export_arg:
        config.export_path = Path(export_arg).expanduser()

    return config


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for the command line tool."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )


def show_version() -> None:
    """Show version information."""
    from dps_configurator import __version__

    print(f"dps-config version {__version__}")


def build_store(config: EngineConfig) -> ConfigStore:
    """Create a store with the built-in presets and any preset file."""
    store = ConfigStore()
    register_default_presets(store)
    if config.presets_file:
        load_presets_from_file(store, config.presets_file)
    return store


def emit_export(store: ConfigStore, config: EngineConfig, include_defaults: bool) -> None:
    """Write the export script to the configured path or stdout."""
    if include_defaults:
        text = export_all(store, prefix=config.prefix)
    else:
        text = export_non_defaults(store, prefix=config.prefix)

    if config.export_path:
        write_export(config.export_path, text)
    else:
        sys.stdout.write(text)


def run(args: argparse.Namespace, config: EngineConfig, console: Console) -> int:
    """Run the configurator with parsed arguments."""
    store = build_store(config)

    if args.env_file:
        try:
            import_env_file(store, Path(args.env_file), prefix=config.prefix)
        except OSError as e:
            message = f"cannot read {args.env_file}: {e}"
            console.print(f"[red]Error: {escape(message)}[/red]")
            return EXIT_CONFIG_ERROR

    import_env(store, prefix=config.prefix)

    if args.no_menu:
        report = validate_all(store)
        if not report.ok:
            for message in report.messages:
                console.print(f"[red]✗[/red] {escape(message)}")
            console.print(f"[red]{report.error_count} configuration error(s)[/red]")
            return EXIT_ABORTED
    else:
        menu = ConfigurationMenu(store, console=console, auto_confirm=config.auto_confirm)
        if menu.run() is MenuState.ABORTED:
            return EXIT_ABORTED

    emit_export(store, config, include_defaults=args.export_all)
    return EXIT_CONFIRMED


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        show_version()
        return 0

    config = apply_args_to_config(args, load_engine_config())
    configure_logging(config.verbose)

    # Terminal UI on stderr so stdout carries only the export script
    console = Console(stderr=True)

    try:
        return run(args, config, console)
    except ConfiguratorError as e:
        logger.error(f"Configuration error: {e}")
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
