"""
scan-md - find Markdown documents and list them with their titles.

Every `*.md` file under a directory becomes an entry:

{
  "path": <path relative to the scanned directory, "/"-separated>,
  "title": <front matter title, else first "# " heading, else file name>
}

Entries can be emitted as a plain list, grouped into depth-bounded buckets
by parent directory (`-p flat`), or rebuilt as a directory tree (`-p tree`)
where directory nodes carry "parent" and "children".

Usage (CLI):
    scan-md -d <directory> [-p [flat|tree]] [--depth N] [-f json|yml] [-o FILE]

Usage (library):
    from scan_md import scan
    result = scan("/path/to/docs", depth=2, mode="tree")
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence

from scan_md.components.formatter import OUTPUT_FORMATS, output_result
from scan_md.components.grouping import ScanResult, group, validate_depth, validate_mode
from scan_md.components.node import Entry, GroupingMode
from scan_md.components.scanner import discover_files, read_text
from scan_md.components.title import FrontMatterParser, parse_front_matter, resolve_title
from scan_md.config import load_settings
from scan_md.errors import FileReadFailure, InvalidConfiguration, ParseFailure, ScanError

logger = logging.getLogger(__name__)

Discoverer = Callable[[str, Sequence[str]], List[str]]
Reader = Callable[[str, str], str]


def collect_entries(
    root: str,
    ignore_patterns: Iterable[str] = (),
    *,
    workers: Optional[int] = None,
    discover: Discoverer = discover_files,
    read: Reader = read_text,
    parse: FrontMatterParser = parse_front_matter,
) -> List[Entry]:
    """
    Discover documents under *root* and resolve a title for each one.

    Files that cannot be read or whose front matter does not parse are
    logged and left out. The returned entries follow discovery order.

    Raises:
        DiscoveryFailure: If *root* cannot be enumerated.
    """
    if workers is not None and workers < 1:
        raise InvalidConfiguration(f"workers must be a positive integer, got {workers!r}")

    paths = discover(root, list(ignore_patterns))
    slots: List[Optional[Entry]] = [None] * len(paths)

    def _load(index: int) -> None:
        rel_path = paths[index]
        try:
            content = read(root, rel_path)
            title = resolve_title(content, rel_path.rsplit("/", 1)[-1], parse)
        except (FileReadFailure, ParseFailure) as e:
            logger.warning("Skipping %s: %s", rel_path, e)
            return
        slots[index] = Entry(path=rel_path, title=title)
        logger.debug("Resolved %s -> %r", rel_path, title)

    if workers == 1 or len(paths) <= 1:
        for index in range(len(paths)):
            _load(index)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() re-raises anything unexpected from a worker.
            list(pool.map(_load, range(len(paths))))

    entries = [entry for entry in slots if entry is not None]
    skipped = len(paths) - len(entries)
    if skipped:
        logger.warning("%d of %d documents skipped", skipped, len(paths))
    return entries


def scan(
    root: str,
    ignore_patterns: Iterable[str] = (),
    depth: int = 1,
    mode: GroupingMode | str = GroupingMode.NONE,
    *,
    workers: Optional[int] = None,
    discover: Discoverer = discover_files,
    read: Reader = read_text,
    parse: FrontMatterParser = parse_front_matter,
) -> ScanResult:
    """
    Scan *root* and return its documents in the layout chosen by *mode*.

    Args:
        root:            Directory to scan.
        ignore_patterns: Gitignore-style globs to exclude.
        depth:           Directory levels materialised when grouping.
        mode:            "none" (list of entries), "flat" or "tree".
        workers:         Threads used to read files; 1 reads sequentially.

    Raises:
        InvalidConfiguration: On a bad depth or mode, before anything is read.
        DiscoveryFailure:     If *root* cannot be enumerated.
    """
    mode = validate_mode(mode)
    validate_depth(depth)

    entries = collect_entries(
        root,
        ignore_patterns,
        workers=workers,
        discover=discover,
        read=read,
        parse=parse,
    )
    logger.info("Scanned %d documents in %s (mode=%s)", len(entries), root, mode)
    return group(entries, depth, mode)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser(defaults) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scan-md",
        description="Scan markdown files and generate structured output.",
    )
    parser.add_argument(
        "--dir", "-d", default=defaults.dir, help="Directory to scan for markdown files"
    )
    parser.add_argument(
        "--output", "-o", metavar="FILE", help="Write output to FILE instead of stdout"
    )
    parser.add_argument(
        "--format", "-f", choices=OUTPUT_FORMATS, default=defaults.format, help="Output format"
    )
    parser.add_argument(
        "--parent-tag",
        "-p",
        nargs="?",
        const=GroupingMode.FLAT.value,
        default=GroupingMode.NONE.value,
        choices=[GroupingMode.FLAT.value, GroupingMode.TREE.value],
        help="Organize by parent directory: flat buckets (default) or a tree",
    )
    parser.add_argument(
        "--ignore", nargs="+", metavar="PATTERN", default=list(defaults.ignore),
        help="Glob patterns to ignore",
    )
    parser.add_argument(
        "--pretty", action="store_true", default=defaults.pretty, help="Prettify JSON output"
    )
    parser.add_argument(
        "--depth", type=int, default=defaults.depth,
        help="Directory nesting depth for --parent-tag",
    )
    parser.add_argument(
        "--workers", type=int, default=defaults.workers, help="Threads used to read files"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log debug details")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = load_settings()
    except InvalidConfiguration as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    args = build_parser(settings).parse_args(argv)

    if args.verbose:
        _configure_logging("DEBUG")
    elif args.quiet:
        _configure_logging("ERROR")
    else:
        _configure_logging(settings.log_level)

    try:
        result = scan(
            os.path.abspath(args.dir),
            args.ignore,
            depth=args.depth,
            mode=args.parent_tag,
            workers=args.workers,
        )
        output_result(result, fmt=args.format, pretty=args.pretty, output=args.output)
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot write output: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
