import logging
import os
from typing import Iterable, List

import pathspec

from scan_md.errors import DiscoveryFailure, FileReadFailure

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = (".md",)


def _is_document(name: str) -> bool:
    return name.endswith(DOCUMENT_EXTENSIONS)


def discover_files(root: str, ignore_patterns: Iterable[str] = ()) -> List[str]:
    """
    Recursively find Markdown documents under *root*.

    Hidden files, symlinked directories and anything matched by
    *ignore_patterns* (gitignore-style globs, relative to *root*) are skipped.
    The ".md" suffix match is case-sensitive.

    Args:
        root: Absolute or relative path to the directory to scan.
        ignore_patterns: Glob patterns to exclude.

    Returns:
        Relative, "/"-separated paths. Within a directory its documents come
        first (sorted), then the contents of its sub-directories (sorted).

    Raises:
        DiscoveryFailure: If *root* does not exist or is not a directory.
    """
    root = os.path.abspath(root)
    if not os.path.exists(root):
        raise DiscoveryFailure(f"Directory does not exist: {root}")
    if not os.path.isdir(root):
        raise DiscoveryFailure(f"Not a directory: {root}")

    ignored = pathspec.GitIgnoreSpec.from_lines(list(ignore_patterns))
    found: List[str] = []

    def _walk(current_path: str, rel_path: str) -> None:
        try:
            names = sorted(os.listdir(current_path))
        except OSError as e:
            if not rel_path:
                raise DiscoveryFailure(f"Cannot list {root}: {e}") from e
            logger.warning("Skipping unreadable directory %s: %s", rel_path, e)
            return

        subdirs: List[str] = []
        for name in names:
            if name.startswith("."):
                continue
            child_rel = f"{rel_path}/{name}" if rel_path else name
            child_path = os.path.join(current_path, name)
            if os.path.islink(child_path) and os.path.isdir(child_path):
                logger.debug("Skipping symlinked directory %s", child_rel)
                continue
            if os.path.isdir(child_path):
                if ignored.match_file(child_rel + "/"):
                    logger.debug("Ignoring directory %s", child_rel)
                    continue
                subdirs.append(name)
            elif _is_document(name) and not ignored.match_file(child_rel):
                found.append(child_rel)

        for name in subdirs:
            child_rel = f"{rel_path}/{name}" if rel_path else name
            _walk(os.path.join(current_path, name), child_rel)

    _walk(root, "")
    logger.info("discover_files: found %d documents in %s", len(found), root)
    return found


def read_text(root: str, relative_path: str) -> str:
    """
    Read a discovered document as UTF-8.

    Raises:
        FileReadFailure: If the file is missing, unreadable or not UTF-8.
    """
    path = os.path.join(root, *relative_path.split("/"))
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadFailure(relative_path, str(e)) from e
