"""
Aurawatch CLI - Command line interface for the Aurawatch daemon.

Provides commands for:
- Configuration validation
- Daemon management (start)
- Status of the tracked log file
- One-off scans of a log file
"""

import argparse
import sys
from pathlib import Path

from aurawatch.auras import AuraCatalog
from aurawatch.config import Config, load_config
from aurawatch.core import AuthenticationEvent, DomainEvent, UnlockEvent
from aurawatch.daemon import AurawatchDaemon
from aurawatch.locator import newest_file
from aurawatch.logging_config import get_logger, setup_logging
from aurawatch.plugins import create_classifier
from aurawatch.tail import TailReader, WatchCursor

logger = get_logger(__name__)


def _load(args: argparse.Namespace) -> Config:
    """Load the configuration named on the command line, or the defaults."""
    if args.config:
        return load_config(args.config)
    return Config()


def format_event(event: DomainEvent) -> str:
    """One-line description of a detected event."""
    when = getattr(event, "timestamp", None)
    prefix = f"{when:%Y-%m-%d %H:%M:%S} " if when else ""
    if isinstance(event, AuthenticationEvent):
        return f"{prefix}login  {event.user_name} ({event.user_id})"
    if isinstance(event, UnlockEvent):
        name = event.aura.name_text or "Unknown"
        return f"{prefix}unlock #{event.item_id} {name} [{event.aura.rarity_text}]"
    return f"{prefix}{event}"


def cmd_config_validate(args: argparse.Namespace) -> int:
    """Validate configuration file."""
    if not args.config:
        print("Error: no configuration file given (use --config)", file=sys.stderr)
        return 1

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        return 1

    try:
        config = load_config(config_path)
        print(f"✓ Configuration valid: {config_path}")
        print(f"  - Log directory: {config.watch.log_dir}")
        print(f"  - File glob: {config.watch.file_glob}")
        print(f"  - {len(config.classifiers)} classifier(s) configured")
        print(f"  - {len(config.notifiers)} notifier(s) configured")
        if not Path(config.watch.log_dir).is_dir():
            print("  ! Log directory does not exist yet")
        return 0
    except Exception as e:
        print(f"✗ Configuration invalid: {e}", file=sys.stderr)
        return 1


def cmd_daemon_start(args: argparse.Namespace) -> int:
    """Start the Aurawatch daemon."""
    try:
        daemon = AurawatchDaemon(config=_load(args))
        print(f"Starting Aurawatch daemon on {daemon.config.watch.log_dir}")
        daemon.start()
        return 0
    except KeyboardInterrupt:
        print("\nShutting down...")
        return 0
    except Exception as e:
        print(f"Error starting daemon: {e}", file=sys.stderr)
        return 1


def cmd_status(args: argparse.Namespace) -> int:
    """Show which log file would be tracked."""
    try:
        config = _load(args)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    log_dir = Path(config.watch.log_dir)
    print(f"Log directory: {log_dir}")
    if not log_dir.is_dir():
        print("  (directory does not exist)")
        return 1

    current = newest_file(log_dir, config.watch.file_glob)
    if current is None:
        print(f"Tracked file:  none matching {config.watch.file_glob}")
    else:
        print(f"Tracked file:  {current.name} ({current.stat().st_size} bytes)")

    catalog = AuraCatalog.load(config.auras_json)
    print(f"Aura catalog:  {len(catalog)} aura(s), version {catalog.version or 'unknown'}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Classify every line of a log file once and print the events."""
    try:
        config = _load(args)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    path = Path(args.file) if args.file else newest_file(
        config.watch.log_dir, config.watch.file_glob
    )
    if path is None or not path.exists():
        print("Error: no log file to scan", file=sys.stderr)
        return 1

    catalog = AuraCatalog.load(config.auras_json)
    classifiers = [
        create_classifier(c.type, c.config, catalog.resolve_metadata)
        for c in config.classifiers
    ]

    result = TailReader().read_new(path, WatchCursor())
    print(f"Scanning {path} ({len(result.lines)} line(s))\n")

    found = 0
    for line in result.lines:
        for classifier in classifiers:
            event = classifier.try_match(line)
            if event is not None:
                print(format_event(event))
                found += 1

    print(f"\n{found} event(s) found")
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="aurawatch",
        description="Aurawatch - VRChat aura unlock watcher"
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (built-in defaults if not specified)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Config commands
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="subcommand")
    config_subparsers.add_parser("validate", help="Validate configuration file")

    # Daemon commands
    daemon_parser = subparsers.add_parser("daemon", help="Daemon management")
    daemon_subparsers = daemon_parser.add_subparsers(dest="subcommand")
    daemon_subparsers.add_parser("start", help="Start daemon (foreground)")

    subparsers.add_parser("status", help="Show the log file that would be tracked")

    scan_parser = subparsers.add_parser("scan", help="Print events found in a log file")
    scan_parser.add_argument(
        "-f", "--file",
        help="Log file to scan (default: newest file in the log directory)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(level=args.log_level)

    if args.command == "config":
        if args.subcommand == "validate":
            return cmd_config_validate(args)
        parser.print_help()
        return 0

    if args.command == "daemon":
        if args.subcommand == "start":
            return cmd_daemon_start(args)
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status(args)

    if args.command == "scan":
        return cmd_scan(args)

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
