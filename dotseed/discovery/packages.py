"""Heuristic package discovery from Markdown documentation.

Three independent passes mine each document:

- <PackageReference Include="..."> tags (csproj snippets)
- NAME==VERSION / NAME>=VERSION pins
- using/import/require lines inside fenced code blocks

Names found by several passes or several files are recorded once; the
first sighting decides the reporting order.
"""
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from dotseed.core.logger import get_logger
from dotseed.discovery.files import find_markdown_files
from dotseed.models.config import CORE_PACKAGES, DEFAULT_EXCLUDE_DIRS

logger = get_logger(__name__)

PACKAGE_REFERENCE_PATTERN = re.compile(
    r'<PackageReference\b[^>]*?\bInclude\s*=\s*"([^"]+)"'
)
VERSION_PIN_PATTERN = re.compile(
    r'(?<![\w.-])([A-Za-z0-9][A-Za-z0-9.]*)(?:==|>=)(\d+\.\d+\.\d+(?:-[0-9A-Za-z.]+)?)'
)
FENCED_BLOCK_PATTERN = re.compile(r"```[^\n]*\n(.*?)```", re.DOTALL)
IMPORT_PATTERN = re.compile(
    r"\b(?:using|import|require)[ \t\"'(]+"
    r"([A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)"
)


class PackageSet:
    """Insertion-ordered set of package names with exact, case-sensitive membership."""

    def __init__(self, initial: Iterable[str] = ()):
        self._names: Dict[str, None] = {}
        self.update(initial)

    def add(self, name: str) -> bool:
        """Add a name; return True if it was not already present."""
        if name in self._names:
            return False
        self._names[name] = None
        return True

    def update(self, names: Iterable[str]) -> List[str]:
        """Add names; return the ones that were new, in order."""
        return [name for name in names if self.add(name)]

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def to_list(self) -> List[str]:
        return list(self._names)


def extract_package_references(text: str) -> List[str]:
    """Names from <PackageReference Include="NAME" .../> tags."""
    return [match.group(1).strip() for match in PACKAGE_REFERENCE_PATTERN.finditer(text)]


def extract_version_pins(text: str) -> List[str]:
    """Names from NAME==1.2.3 or NAME>=1.2.3-beta1 tokens."""
    return [match.group(1) for match in VERSION_PIN_PATTERN.finditer(text)]


def extract_fenced_imports(text: str) -> List[str]:
    """Dotted identifiers after using/import/require inside ``` blocks."""
    names = []
    for block in FENCED_BLOCK_PATTERN.finditer(text):
        for match in IMPORT_PATTERN.finditer(block.group(1)):
            names.append(match.group(1))
    return names


EXTRACTION_PASSES = (
    ("package reference", extract_package_references),
    ("version pin", extract_version_pins),
    ("code block import", extract_fenced_imports),
)


class PackageDiscoverer:
    """Builds the dependency list from core packages plus documentation."""

    def __init__(
        self,
        core_packages: Optional[Sequence[str]] = None,
        exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
    ):
        self.core_packages = list(core_packages) if core_packages is not None else list(CORE_PACKAGES)
        self.exclude_dirs = list(exclude_dirs)

    def discover(self, root_path: Path) -> List[str]:
        """Return core packages followed by names mined from *.md under root_path."""
        packages = PackageSet(self.core_packages)

        markdown_files = find_markdown_files(Path(root_path), self.exclude_dirs)
        if not markdown_files:
            logger.info("No Markdown files found; using core packages only")
            return packages.to_list()

        logger.info(f"Scanning {len(markdown_files)} Markdown file(s) for packages")
        for md_file in markdown_files:
            try:
                text = md_file.read_text(encoding="utf-8-sig", errors="replace")
            except OSError as e:
                logger.warning(f"Could not read {md_file}: {e}")
                continue

            self.scan_text(text, packages, source=md_file)

        added = len(packages) - len(self.core_packages)
        logger.info(f"Discovered {added} package(s) beyond the core set")
        return packages.to_list()

    def scan_text(self, text: str, packages: PackageSet, source: Optional[Path] = None) -> List[str]:
        """Run every extraction pass over text, merging into packages.

        Returns the names that were new to the set.
        """
        new_names = []
        for label, extract in EXTRACTION_PASSES:
            for name in packages.update(extract(text)):
                where = f" in {source.name}" if source else ""
                logger.info(f"Found package {name} ({label}){where}")
                new_names.append(name)
        return new_names
