"""Explicit run context and working-directory restoration."""
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator


@dataclass(frozen=True)
class RunContext:
    """Where a run happens: the directory it started from and the project it creates."""
    base_path: Path
    project_path: Path

    @classmethod
    def for_project(cls, base_path: Path, name: str) -> "RunContext":
        base = Path(base_path).resolve()
        return cls(base_path=base, project_path=base / name)


@contextmanager
def preserve_cwd() -> Iterator[Path]:
    """Restore the current working directory on every exit path."""
    original = Path.cwd()
    try:
        yield original
    finally:
        os.chdir(original)
