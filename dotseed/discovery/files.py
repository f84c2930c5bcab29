"""Recursive file discovery with build-output exclusion."""
import fnmatch
import os
from pathlib import Path
from typing import Iterable, List, Sequence

from dotseed.models.config import DEFAULT_EXCLUDE_DIRS

CONFIG_PATTERNS = ("appsettings*.json", "config*.ini", ".env*", "*.config")
MARKDOWN_PATTERNS = ("*.md",)


def matches_any(name: str, patterns: Iterable[str]) -> bool:
    """Case-insensitive glob match of a bare file name."""
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, pattern.lower()) for pattern in patterns)


def find_files(
    root: Path,
    patterns: Sequence[str],
    exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
) -> List[Path]:
    """Find files under root whose name matches one of patterns.

    Any path with an excluded directory segment (relative to root) is
    skipped. Results are sorted by relative POSIX path so runs are
    repeatable regardless of filesystem enumeration order.
    """
    root = Path(root)
    if not root.is_dir():
        return []

    excluded = set(exclude_dirs)
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune excluded subtrees in place
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for filename in filenames:
            if matches_any(filename, patterns):
                found.append(Path(dirpath) / filename)

    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


def find_config_files(root: Path, exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS) -> List[Path]:
    """appsettings*.json, config*.ini, .env* and *.config files under root."""
    return find_files(root, CONFIG_PATTERNS, exclude_dirs)


def find_markdown_files(root: Path, exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS) -> List[Path]:
    """*.md files under root."""
    return find_files(root, MARKDOWN_PATTERNS, exclude_dirs)
