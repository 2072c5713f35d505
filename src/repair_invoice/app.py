from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from repair_invoice.core.services.invoice import generate_invoices, write_artifact
from repair_invoice.core.services.preferences import load_theme_preference, save_theme_preference
from repair_invoice.core.services.themes import DEFAULT_THEME_ID, THEMES, list_all, resolve_theme_id

logger = logging.getLogger(__name__)


def _load_records(paths: Sequence[Path]) -> list:
    records: list = []
    for path in paths:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, list):
            records.extend(data)
        else:
            records.append(data)
    return records


def _unique_name(filename: str, index: int, written: set) -> str:
    """Invoice numbers that sanitize to the same file name get the record index appended."""
    if filename in written:
        stem, dot, ext = filename.rpartition(".")
        filename = f"{stem}-{index}{dot}{ext}"
        logger.warning("Duplicate output name for record %d, writing %s", index, filename)
    written.add(filename)
    return filename


def _cmd_render(args: argparse.Namespace) -> int:
    try:
        records = _load_records(args.inputs)
    except (OSError, ValueError) as exc:
        print(f"Cannot read input: {exc}", file=sys.stderr)
        return 1
    theme_id = resolve_theme_id(args.theme or load_theme_preference(args.preferences))
    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)

    failed = 0
    written: set[str] = set()
    for result in generate_invoices(records, theme_id, max_workers=args.workers):
        if result.artifact is None:
            failed += 1
            print(f"FAILED  #{result.index}: {result.error}")
            continue
        target = write_artifact(result.artifact, out_dir / _unique_name(result.artifact.filename, result.index, written))
        print(f"OK      {target} ({result.artifact.page_count} page(s))")
    logger.info("Rendered %d of %d invoice(s) with theme %s", len(records) - failed, len(records), theme_id)
    return 1 if failed else 0


def _cmd_themes(args: argparse.Namespace) -> int:
    selected = resolve_theme_id(load_theme_preference(args.preferences))
    for info in list_all():
        marker = "*" if info.id == selected else " "
        print(f"{marker} {info.id:<22} {info.name:<22} {info.description}")
    return 0


def _cmd_use_theme(args: argparse.Namespace) -> int:
    if args.theme_id not in THEMES:
        print(f"Unknown theme '{args.theme_id}'. Run 'themes' to list them (default: {DEFAULT_THEME_ID}).", file=sys.stderr)
        return 1
    target = save_theme_preference(args.theme_id, args.preferences)
    print(f"Saved theme {args.theme_id} to {target}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="repair-invoice", description="Render repair shop invoices to PDF.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    parser.add_argument("--preferences", type=Path, default=None, help="Preferences file holding the saved theme.")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render invoice JSON files (an object or a list per file).")
    render.add_argument("inputs", nargs="+", type=Path)
    render.add_argument("-o", "--output", default=".", help="Output directory.")
    render.add_argument("-t", "--theme", default=None, help="Theme id; defaults to the saved preference.")
    render.add_argument("--workers", type=int, default=4)
    render.set_defaults(func=_cmd_render)

    themes = sub.add_parser("themes", help="List available themes.")
    themes.set_defaults(func=_cmd_themes)

    use_theme = sub.add_parser("use-theme", help="Save the theme used by default.")
    use_theme.add_argument("theme_id")
    use_theme.set_defaults(func=_cmd_use_theme)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
