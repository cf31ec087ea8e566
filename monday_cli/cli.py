"""
monday-cli — CLI tool for reading and writing monday.com boards
"""

import argparse
import json
import sys

from monday_cli import config
from monday_cli.api import _check_token
from monday_cli.commands import (
    cmd_add_item,
    cmd_boards,
    cmd_columns,
    cmd_groups,
    cmd_items,
    cmd_labels,
    cmd_me,
    cmd_query,
    cmd_update,
    cmd_users,
)
from monday_cli.exceptions import CliError
from monday_cli.setup_wizard import cmd_setup

HELP_TEXT = """\
Usage: monday-cli <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --dry-run               Print mutation payloads instead of sending them
  --quiet, -q             Suppress confirmations
  --verbose, -v           Enable HTTP request logging
  --version               Show version number

Commands:
  setup                   - Interactive setup wizard (run this first!)
  me                      - Show the user that owns the API token
  users                   - List all users (ids are used by --people)
  boards                  - List all boards
  groups <board_id>       - List the groups of a board
  columns <board_id>      - List the columns of a board
    --raw                   Include settings_str (JSON only)
  labels <board_id> <col> - List label indices of a status or dropdown column
  items <board_id>        - List items with decoded column values
    --group <id>            Only items in this group
    --labels                Resolve status/dropdown indices to label names
    --limit <n>             Show at most N items
  add-item <board_id> <group_id> <name>
                          - Create an item. Column values (repeatable):
    --text COL=TEXT
    --date COL=YYYY-MM-DD   (or COL="YYYY-MM-DD HH:MM:SS")
    --status COL=INDEX      Label index, see: labels <board_id> <col>
    --checkbox COL=true|false
    --people COL=ID[,ID]    User ids, see: users
    --dropdown COL=ID[,ID]  Label ids, see: labels <board_id> <col>
  update <item_id> <body> - Post an update on an item
  query <graphql>         - Run a raw GraphQL query
    --vars <json>           Query variables as a JSON object
  version                 - Show version number
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, dry_run, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "json"
    dry_run = False
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--version":
            print(f"monday-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] == "--dry-run":
            dry_run = True
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in config.VALID_FORMATS:
                raise CliError(f"[ERROR] Invalid format '{fmt}'. Use: json, table")
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise CliError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, dry_run, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _positive_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a positive integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def build_parser():
    parser = _SubcommandParser(
        prog="monday-cli",
        description="CLI tool for reading and writing monday.com boards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    sub.add_parser("setup").set_defaults(func=None)
    sub.add_parser("me").set_defaults(func=cmd_me)
    sub.add_parser("users").set_defaults(func=cmd_users)
    sub.add_parser("boards").set_defaults(func=cmd_boards)

    # --- groups ---
    p = sub.add_parser("groups")
    p.add_argument("board_id")
    p.set_defaults(func=cmd_groups)

    # --- columns ---
    p = sub.add_parser("columns")
    p.add_argument("board_id")
    p.add_argument("--raw", action="store_true")
    p.set_defaults(func=cmd_columns)

    # --- labels ---
    p = sub.add_parser("labels")
    p.add_argument("board_id")
    p.add_argument("column_id")
    p.set_defaults(func=cmd_labels)

    # --- items ---
    p = sub.add_parser("items")
    p.add_argument("board_id")
    p.add_argument("--group")
    p.add_argument("--labels", action="store_true")
    p.add_argument("--limit", type=_positive_int)
    p.set_defaults(func=cmd_items)

    # --- add-item ---
    p = sub.add_parser("add-item")
    p.add_argument("board_id")
    p.add_argument("group_id")
    p.add_argument("name")
    for flag in ("text", "date", "status", "checkbox", "people", "dropdown"):
        p.add_argument(f"--{flag}", action="append", metavar="COL=VALUE")
    p.set_defaults(func=cmd_add_item)

    # --- update ---
    p = sub.add_parser("update")
    p.add_argument("item_id")
    p.add_argument("body")
    p.set_defaults(func=cmd_update)

    # --- query ---
    p = sub.add_parser("query")
    p.add_argument("graphql")
    p.add_argument("--vars")
    p.set_defaults(func=cmd_query)

    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

NO_TOKEN_COMMANDS = {"setup", "version"}


def _error_type_from_message(message):
    if message.startswith("[TOKEN_EXPIRED]"):
        return "token_expired"
    if message.startswith("[SETUP_NEEDED]"):
        return "setup_needed"
    if message.startswith("[ERROR]"):
        return "error"
    return "cli_error"


def _emit_cli_error(err, fmt):
    msg = str(err)
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": _error_type_from_message(msg),
                "error_class": type(err).__name__,
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "json"
    try:
        fmt, dry_run, quiet, verbose, remaining_argv = _extract_global_flags(argv)
        config.RUNTIME_DRY_RUN = dry_run
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.HTTP_LOG_ENABLED = True

        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        cmd = ns.command

        if cmd == "version":
            print(f"monday-cli {config.VERSION}")
            sys.exit(0)

        if cmd == "setup":
            cmd_setup()
            sys.exit(0)

        # Validate token before any API command (dry runs never reach the API)
        if cmd not in NO_TOKEN_COMMANDS and not dry_run:
            _check_token()

        handler = getattr(ns, "func", None)
        if handler:
            handler(ns)
        else:
            raise CliError(f"[ERROR] Unknown command: {cmd}")

    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
