"""CLI interface for hexfield -- inspect how a planner file would be coloured.

Usage:
    # Every token with its span, proximity and resolved colour (JSON)
    python -m hexfield scan plan.md --today 2025-01-03

    # Ranges grouped by colour class, exactly as the engine submits them
    python -m hexfield decorate plan.md --config colors.yaml

    # Document kind and parsed frontmatter
    python -m hexfield classify plan.md
"""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import sys
from pathlib import Path

import yaml

from . import activate
from .config import MappingConfig, read_overlay
from .host import LineIndex, MemoryDocument, MemoryHost
from .kinds import KindClassifier
from .markup.colors import ColorClass, ColorResolver
from .markup.frontmatter import read_frontmatter
from .markup.proximity import local_today, parse_iso_date
from .markup.tokens import scan_tokens

logger = logging.getLogger(__name__)


def _load_config(args: argparse.Namespace) -> MappingConfig:
    if args.config:
        return MappingConfig.from_yaml(args.config)
    return MappingConfig()


def _today(args: argparse.Namespace) -> dt.date:
    if args.today is None:
        return local_today()
    return args.today


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _position(pos) -> list[int]:
    return [pos.line, pos.character]


def cmd_scan(args: argparse.Namespace) -> None:
    """Print every token in a file as JSON."""
    text = _read(args.file)
    today = _today(args)
    resolver = ColorResolver(read_overlay(_load_config(args)))
    index = LineIndex(text)

    out = []
    for token in scan_tokens(text, today=today):
        d = token.to_dict()
        d["color"] = resolver.resolve(ColorClass.for_token(token))
        d["range"] = {
            "start": _position(index.position_at(token.start)),
            "end": _position(index.position_at(token.end)),
        }
        out.append(d)

    json.dump(out, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_decorate(args: argparse.Namespace) -> None:
    """Open the file in an in-memory host and dump what gets decorated."""
    text = _read(args.file)
    today = _today(args)
    host = MemoryHost(_load_config(args))
    manager = activate(host, clock=lambda: today)
    try:
        document = host.open_document(args.file, text)
        view = host.show(document)
        engine = manager.engine

        out = {"kind": document.kind, "classes": {}}
        for cls in ColorClass:
            handle = engine.handle(cls)
            ranges = view.ranges(handle)
            if not ranges:
                continue
            out["classes"][cls.value] = {
                "color": handle.descriptor.color,
                "border": handle.descriptor.border_color,
                "ranges": [[_position(r.start), _position(r.end)] for r in ranges],
            }
    finally:
        manager.dispose()

    json.dump(out, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_classify(args: argparse.Namespace) -> None:
    """Print the document kind and its frontmatter."""
    text = _read(args.file)
    kind = KindClassifier.classify(MemoryDocument(args.file, text))
    out = {
        "file": args.file,
        "kind": kind.value,
        "frontmatter": read_frontmatter(text),
    }
    json.dump(out, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


def _iso_date(value: str) -> dt.date:
    parsed = parse_iso_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hexfield",
        description="Token colouring for hexfield-markdown planner files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("scan", "List tokens with proximity and colour (JSON)"),
        ("decorate", "Ranges grouped by colour class (JSON)"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", help="Markdown file")
        p.add_argument("--today", type=_iso_date, default=None, help="Reference date (YYYY-MM-DD)")
        p.add_argument("--config", default=None, help="YAML file with colour overrides")
    p = sub.add_parser("classify", help="Document kind and frontmatter (JSON)")
    p.add_argument("file", help="Markdown file")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "scan": cmd_scan,
        "decorate": cmd_decorate,
        "classify": cmd_classify,
    }
    try:
        cmds[args.command](args)
    except OSError as exc:
        logger.error("cannot read %s: %s", args.file, exc)
        return 1
    except UnicodeDecodeError as exc:
        logger.error("input is not UTF-8 text: %s", exc)
        return 1
    except yaml.YAMLError as exc:
        logger.error("invalid config %s: %s", getattr(args, "config", None), exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
