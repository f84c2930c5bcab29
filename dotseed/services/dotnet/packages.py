"""dotnet package installation and the per-package compatibility probe."""
import re
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from dotseed.core.logger import get_logger

logger = get_logger(__name__)

PROBE_TEMPLATE = "classlib"
PROBE_NAME = "DotseedProbe"

# First framework of <TargetFramework> or <TargetFrameworks>
TARGET_FRAMEWORK_PATTERN = re.compile(r"<TargetFrameworks?>\s*([^<;\s]+)")


def project_target_framework(project_path: Path) -> Optional[str]:
    """Read the target framework moniker (e.g. net8.0) from the project file."""
    for project_file in sorted(Path(project_path).glob("*.csproj")):
        try:
            text = project_file.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            logger.debug(f"Could not read {project_file}: {e}")
            continue
        match = TARGET_FRAMEWORK_PATTERN.search(text)
        if match:
            return match.group(1)
    return None


class PackageManager:
    """Adds NuGet packages to a project."""

    def __init__(self, project_path: Path, mock: bool = False):
        self.project_path = Path(project_path)
        self.mock = mock

    def try_restore(self, package: str) -> bool:
        """Restore package into a throwaway project; True on success.

        The throwaway project targets the real project's framework when
        its project file names one. The real project is never modified.
        Exceptions propagate so the caller decides how to report them.
        """
        if self.mock:
            logger.info(f"MOCK: Would probe-restore {package}")
            return True

        with tempfile.TemporaryDirectory(prefix="dotseed-probe-") as tmp:
            probe_dir = Path(tmp) / PROBE_NAME
            cmd = ['dotnet', 'new', PROBE_TEMPLATE, '-n', PROBE_NAME, '-o', str(probe_dir)]
            framework = project_target_framework(self.project_path)
            if framework:
                cmd += ['-f', framework]
            create = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
            )
            if create.returncode != 0:
                logger.warning(f"Could not create probe project: {create.stderr.strip()}")
                return False

            result = subprocess.run(
                ['dotnet', 'add', str(probe_dir), 'package', package],
                capture_output=True,
                text=True,
                check=False,
                cwd=probe_dir,
            )
            if result.returncode != 0:
                logger.debug(result.stdout.strip())
            return result.returncode == 0

    def add_package(self, package: str) -> bool:
        """Add package to the project; True on success."""
        if self.mock:
            logger.info(f"MOCK: Would add package {package} to {self.project_path}")
            return True

        cmd = ['dotnet', 'add', str(self.project_path), 'package', package]
        try:
            subprocess.run(cmd, capture_output=True, text=True, check=True, cwd=self.project_path)
            return True
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to add package {package}: {e}")
            if e.stderr:
                logger.error(f"Error output: {e.stderr}")
            return False
        except OSError as e:
            logger.error(f"Failed to run dotnet add: {e}")
            return False


class CompatibilityGate:
    """Checks that a package restores before it is installed."""

    def __init__(self, package_manager: PackageManager):
        self.package_manager = package_manager

    def is_compatible(self, package: str) -> bool:
        try:
            compatible = self.package_manager.try_restore(package)
        except Exception as e:
            logger.warning(f"Compatibility check for {package} failed: {e}")
            return False

        if not compatible:
            logger.warning(f"Package {package} is not compatible with this SDK/project, skipping")
        return compatible
