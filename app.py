"""Command-line tools for NM Legislature action strings and bill history."""

import json
import logging
import os
import sys
from argparse import ArgumentParser, Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from components.interfaces import Config
from components.utils import parse_date, setup_logging
from nmlegis.bills import parse_bill_name
from nmlegis.display import expand_action_text
from nmlegis.history import parse_history_data
from nmlegis.parser import ActionStringParser
from nmlegis.registry import save_reference, search_codes
from nmlegis.status import get_current_bill_location

logger = logging.getLogger(__name__)
console = Console()


@dataclass
class Mode:
    """Command-line arguments"""

    command: str
    """Subcommand to run"""
    text: Optional[str] = None
    """Action string or action text"""
    json: bool = False
    """Print JSON instead of tables"""
    bill: Optional[str] = None
    """Bill name, e.g. HB1 (sets the origin chamber)"""
    chamber: Optional[str] = None
    """Origin chamber, H or S"""
    start: Optional[str] = None
    """Session start date, YYYY-MM-DD"""
    file: Optional[str] = None
    """JSON file holding stored history"""
    search: Optional[str] = None
    """Filter codes by text"""
    save: Optional[str] = None
    """Write the code reference to this JSON file"""


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_parse(cfg: Config, mode: Mode) -> None:
    parser = ActionStringParser(warn_on_unknown=cfg.parser.warn_on_unknown_tokens)
    parsed = parser.parse(mode.text)
    if mode.json:
        _print_json(parsed.to_dict())
        return
    table = Table(title=parsed.raw or "(empty)")
    table.add_column("Code", style="cyan")
    table.add_column("Type", style="yellow")
    table.add_column("Description", style="white")
    for action in parsed.actions:
        table.add_row(action.code, action.type.value, action.description)
    console.print(table)
    console.print(f"[bold]Status:[/bold] {parsed.status.value}")
    console.print(f"[bold]Summary:[/bold] {parsed.summary}")


def _origin_chamber(cfg: Config, mode: Mode) -> str:
    if mode.chamber:
        return mode.chamber.upper()
    if mode.bill:
        bill = parse_bill_name(mode.bill)
        if bill is None:
            raise ValueError(f"Unrecognized bill name {mode.bill!r}")
        return bill.origin_chamber
    return cfg.session.default_chamber


def _load_history(mode: Mode) -> Any:
    if mode.file:
        with open(mode.file, "r", encoding="utf-8") as f:
            return json.load(f)
    return mode.text


def run_history(cfg: Config, mode: Mode) -> None:
    session_start = parse_date(mode.start) if mode.start else cfg.session.start_date
    origin = _origin_chamber(cfg, mode)
    normalized = parse_history_data(
        _load_history(mode),
        session_start,
        origin,
        ActionStringParser(warn_on_unknown=cfg.parser.warn_on_unknown_tokens),
    )
    location = get_current_bill_location(normalized.items, origin)
    if mode.json:
        _print_json({
            "format": normalized.format.value,
            "history": [item.to_dict() for item in normalized.items],
            "location": {
                "location": location.location,
                "status": location.status,
                "committee": location.committee,
            },
        })
        return
    table = Table(title=f"{cfg.session.name} ({normalized.format.value})")
    table.add_column("#", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Chamber")
    table.add_column("Action", style="white")
    for item in normalized.items:
        action = f"[bold]{item.action}[/bold]" if item.is_important else item.action
        table.add_row(str(item.sequence), item.date, item.chamber, action)
    console.print(table)
    console.print(f"[bold]Location:[/bold] {location.location}")


def run_expand(cfg: Config, mode: Mode) -> None:
    expanded = expand_action_text(mode.text or "")
    if mode.json:
        _print_json(expanded.to_dict())
        return
    table = Table(title=expanded.original or "(empty)")
    table.add_column("Original", style="cyan")
    table.add_column("Type", style="yellow")
    table.add_column("Expanded", style="white")
    table.add_column("Tooltip")
    for segment in expanded.segments:
        table.add_row(
            segment.original, segment.type.value, segment.expanded,
            segment.tooltip or "",
        )
    console.print(table)


def run_codes(cfg: Config, mode: Mode) -> None:
    if mode.save:
        path = save_reference(Path(mode.save))
        logger.info("Saved code reference to %s", path)
    codes = search_codes(mode.search or "")
    if mode.json:
        _print_json(codes)
        return
    actions = Table(title="Action codes")
    actions.add_column("Code", style="cyan")
    actions.add_column("Meaning", style="white")
    for row in codes["actions"]:
        actions.add_row(row["code"], row["short"])
    committees = Table(title="Committees")
    committees.add_column("Code", style="cyan")
    committees.add_column("Name", style="white")
    for row in codes["committees"]:
        committees.add_row(row["code"], row["name"])
    console.print(actions)
    console.print(committees)


COMMANDS = {
    "parse": run_parse,
    "history": run_history,
    "expand": run_expand,
    "codes": run_codes,
}


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="NM Legislature action-code tools")
    common = ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser(
        "parse", parents=[common], help="Parse an action string")
    parse_cmd.add_argument("text", help="Action string, e.g. '[1] HPREF-HAFC'")

    history_cmd = commands.add_parser(
        "history", parents=[common], help="Normalize an action string or stored history"
    )
    history_cmd.add_argument("text", nargs="?", help="Action string")
    history_cmd.add_argument("-f", "--file", help="JSON file holding stored history")
    history_cmd.add_argument("-b", "--bill", help="Bill name, e.g. HB1")
    history_cmd.add_argument("-c", "--chamber", choices=["H", "S", "h", "s"])
    history_cmd.add_argument("-s", "--start", metavar="YYYY-MM-DD",
                             help="Session start date (default from config)")

    expand_cmd = commands.add_parser(
        "expand", parents=[common], help="Expand action text for display")
    expand_cmd.add_argument("text", help="Action text")

    codes_cmd = commands.add_parser(
        "codes", parents=[common], help="List action and committee codes")
    codes_cmd.add_argument("-q", "--search", help="Filter codes by text")
    codes_cmd.add_argument("--save", metavar="PATH",
                           help="Write the code reference to a JSON file")
    return parser


def main(cfg: Config, args: Namespace) -> int:
    """Entry point for the command-line tools"""
    mode = Mode(**{k: v for k, v in vars(args).items() if k in Mode.__dataclass_fields__})
    try:
        COMMANDS[mode.command](cfg, mode)
    except (ValueError, TypeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    load_dotenv()
    config = Config(os.environ.get("NMLEGIS_CONFIG", "config.yaml"))
    setup_logging(config)
    sys.exit(main(config, build_parser().parse_args()))
