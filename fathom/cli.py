#!/usr/bin/env python3
"""
Fathom CLI: maritime unit conversions from the shell.

Every command has a nautical name and a standard alias:

    NAUTICAL        STANDARD        WHAT IT DOES
    --------        --------        ----------------------------------
    dial            serve, start    Start the fathom web server
    sound           convert, calc   Convert a value offline
    chart           units, list     List categories and their units
    scale           beaufort        Print the Beaufort table
    hail            status, ping    Ping a running instance
    log             history         Show recent recorded conversions
    dump            export          Export history to JSON
    flash           stats           Show history stats at a glance
    wipe            clear           Delete all recorded history
    tone            banner          Print the banner
"""

import argparse
import sys

from fathom import __version__

BANNER = r"""
    ╔══════════════════════════════════════════╗
    ║   ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~   ║
    ║     F  A  T  H  O  M                     ║
    ║   ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~   ║
    ║   Maritime Standard units.   v""" + __version__ + r"""     ║
    ╚══════════════════════════════════════════╝
"""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_dial(args):
    """Start the fathom web server."""
    import uvicorn
    from fathom.config import get_config

    cfg = get_config()
    host = args.host or cfg["server"]["host"]
    port = args.port or cfg["server"]["port"]

    print(BANNER)
    print(f"  Dialing up on {host}:{port}")
    print(f"  History: {cfg['storage']['sqlite_path']}")
    print()

    uvicorn.run(
        "fathom.main:app",
        host=host,
        port=port,
        reload=args.reload,
        log_level="info",
    )


def cmd_sound(args) -> int:
    """Convert a value without a server."""
    from fathom.units import (
        Category,
        ConversionFailure,
        UnknownCategoryError,
        convert,
        format_result,
        wind_force,
    )

    try:
        result = convert(args.category, args.from_unit, args.to_unit, args.value)
    except UnknownCategoryError as e:
        print(f"  ✗  {e}", file=sys.stderr)
        return 2

    if isinstance(result, ConversionFailure):
        print(f"  ✗  No result: {result.detail}", file=sys.stderr)
        return 1

    print(f"  {args.value} {args.from_unit} = {format_result(result)} {args.to_unit}")
    if Category.parse(args.category) is Category.WIND:
        entry = wind_force(args.from_unit, args.value)
        print(f"  Beaufort Force {entry.level}: {entry.description}")
        print(f"  {entry.sea_effect}")
    return 0


def cmd_chart(args):
    """List categories and their units."""
    from fathom.units.registry import catalog

    for cat in catalog():
        if args.category and cat["id"] != args.category:
            continue
        print(f"  {cat['label']} ({cat['id']})")
        for i, unit in enumerate(cat["units"]):
            prefix = "└─" if i == len(cat["units"]) - 1 else "├─"
            extra = ""
            if "factor" in unit:
                extra = f"× {unit['factor']}"
            elif "offset" in unit:
                extra = "affine"
            print(f"  {prefix} {unit['value']:<6} {unit['label']:<32} {extra}")
        print()


def cmd_scale(args):
    """Print the Beaufort scale."""
    from fathom.units import BEAUFORT_SCALE

    print(f"  {'Force':>5}  {'Min kt':>6}  Description")
    print("  " + "─" * 40)
    for entry in BEAUFORT_SCALE:
        print(f"  {entry.level:>5}  {entry.min_kt:>6}  {entry.description}")
        if args.verbose:
            print(f"  {'':>15}{entry.sea_effect}")


def cmd_hail(args):
    """Ping a running fathom instance."""
    import httpx

    url = args.url or "http://localhost:3000"
    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        if resp.status_code == 200:
            print(f"  ⚓ Ahoy... {url} is UP (v{resp.json().get('version', '?')})")
            stats = httpx.get(f"{url}/api/v1/stats", timeout=5).json()
            print(f"  📜 Conversions recorded: {stats.get('conversions', 0)}")
            for cat, n in stats.get("categories", {}).items():
                print(f"     {cat}: {n}")
        else:
            print(f"  ✗  No answer, got HTTP {resp.status_code}")
    except httpx.ConnectError:
        print(f"  ✗  Nothing on the horizon at {url}")
    except httpx.HTTPError as e:
        print(f"  ✗  Error: {e}")


def _open_store():
    from fathom.config import get_config
    from fathom.storage.sqlite_store import SQLiteStore

    cfg = get_config()
    return cfg, SQLiteStore(cfg["storage"]["sqlite_path"])


def cmd_log(args):
    """Show recent recorded conversions, newest first."""
    from fathom.units import format_result

    _, store = _open_store()
    rows = store.get_recent(limit=args.last)
    if not rows:
        print("  Log is empty.")
        return
    for row in rows:
        print(
            f"  {row['timestamp'][:19]}  {row['category']:<12} "
            f"{format_result(row['input_value'])} {row['from_unit']} → "
            f"{format_result(row['output_value'])} {row['to_unit']}"
        )


def cmd_dump(args):
    """Export history to JSON."""
    import json

    cfg, store = _open_store()
    data = store.export_all_json()
    indent = 2 if args.pretty else None

    with open(args.output, "w") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)

    print(f"  📼 Database: {cfg['storage']['sqlite_path']}")
    print(f"  📦 Dumped {len(data)} conversions to {args.output}")


def cmd_flash(args):
    """Show history stats at a glance."""
    cfg, store = _open_store()
    stats = store.get_stats()

    print(f"  📼 Database: {cfg['storage']['sqlite_path']}")
    print(f"  📜 Conversions: {stats['conversions']}")
    if stats["first"]:
        print(f"  🕰  Span: {stats['first'][:19]} → {stats['last'][:19]}")
    cats = list(stats["categories"].items())
    for i, (cat, n) in enumerate(cats):
        prefix = "└─" if i == len(cats) - 1 else "├─"
        print(f"  {prefix} {cat}: {n}")


def cmd_wipe(args):
    """Delete all recorded history."""
    if not args.yes:
        answer = input("  Delete ALL recorded conversions? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("  Aborted.")
            return
    _, store = _open_store()
    deleted = store.clear_history()
    print(f"  🧹 Wiped {deleted} conversions")


def cmd_tone(args):
    """Print the banner."""
    print(BANNER)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _add_command(subparsers, names, help_text, func, setup_fn=None):
    """Register a command with its aliases."""
    p = subparsers.add_parser(names[0], help=help_text, aliases=names[1:])
    p.set_defaults(func=func)
    if setup_fn:
        setup_fn(p)
    return p


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fathom",
        description="Fathom: maritime unit converter",
    )
    parser.add_argument(
        "--version", "-V", action="version", version=f"fathom {__version__}",
    )
    sub = parser.add_subparsers(dest="command")

    # dial / serve / start
    def setup_dial(p):
        p.add_argument("--host", default=None, help="Override listen host")
        p.add_argument("--port", "-p", type=int, default=None, help="Override listen port")
        p.add_argument("--reload", action="store_true", help="Auto-reload on code changes (dev)")

    _add_command(sub, ["dial", "serve", "start"], "Start the fathom web server", cmd_dial, setup_dial)

    # sound / convert / calc
    def setup_sound(p):
        p.add_argument("category", help="length, weight, speed, pressure, temperature or wind")
        p.add_argument("from_unit", help="Source unit code, e.g. nmi, kt, bf")
        p.add_argument("to_unit", help="Target unit code")
        p.add_argument("value", help="Magnitude to convert")

    _add_command(sub, ["sound", "convert", "calc"], "Convert a value offline", cmd_sound, setup_sound)

    # chart / units / list
    def setup_chart(p):
        p.add_argument("category", nargs="?", default=None, help="Only this category")

    _add_command(sub, ["chart", "units", "list"], "List categories and units", cmd_chart, setup_chart)

    # scale / beaufort
    def setup_scale(p):
        p.add_argument("--verbose", "-v", action="store_true", help="Include sea effects")

    _add_command(sub, ["scale", "beaufort"], "Print the Beaufort scale", cmd_scale, setup_scale)

    # hail / status / ping
    def setup_hail(p):
        p.add_argument("--url", "-u", default=None, help="Fathom URL (default: http://localhost:3000)")

    _add_command(sub, ["hail", "status", "ping"], "Ping a running fathom instance", cmd_hail, setup_hail)

    # log / history
    def setup_log(p):
        p.add_argument("--last", "-n", type=int, default=20, help="Show last N conversions")

    _add_command(sub, ["log", "history"], "Show recent conversions", cmd_log, setup_log)

    # dump / export
    def setup_dump(p):
        p.add_argument("--output", "-o", default="history_export.json", help="Output file")
        p.add_argument("--pretty", action="store_true", help="Pretty-print JSON")

    _add_command(sub, ["dump", "export"], "Export history to JSON", cmd_dump, setup_dump)

    # flash / stats
    _add_command(sub, ["flash", "stats"], "Show history stats at a glance", cmd_flash)

    # wipe / clear
    def setup_wipe(p):
        p.add_argument("--yes", "-y", action="store_true", help="Don't ask for confirmation")

    _add_command(sub, ["wipe", "clear"], "Delete all recorded history", cmd_wipe, setup_wipe)

    # tone / banner
    _add_command(sub, ["tone", "banner"], "Print the banner", cmd_tone)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        cmd_tone(args)
        parser.print_help()
        return 0

    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
