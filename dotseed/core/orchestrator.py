"""Sequences a full project creation run.

prerequisites -> name/template checks -> scaffold -> user-secrets init
-> secret seeding -> package discovery -> compatibility gate + install
"""
import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from dotseed.core.context import RunContext, preserve_cwd
from dotseed.core.errors import FatalError, ScaffoldError, TargetExistsError
from dotseed.core.logger import get_logger
from dotseed.core.prerequisites import (
    check_dotnet_sdk,
    validate_project_name,
    validate_template,
)
from dotseed.discovery.packages import PackageDiscoverer
from dotseed.models.config import Settings
from dotseed.seeding.seeder import SecretSeeder, SeedReport
from dotseed.services.dotnet import (
    KNOWN_TEMPLATES,
    CompatibilityGate,
    PackageManager,
    TemplateScaffolder,
    UserSecretsStore,
)

logger = get_logger(__name__)


@dataclass
class RunResult:
    """What a run did."""
    context: RunContext
    sdk_version: str = ""
    seed_report: Optional[SeedReport] = None
    discovered: List[str] = field(default_factory=list)
    installed: List[str] = field(default_factory=list)
    incompatible: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    elapsed: float = 0.0


def cleanup_project(project_path: Path) -> bool:
    """Remove a partially created project directory, best effort."""
    if not project_path.exists():
        return False
    try:
        shutil.rmtree(project_path)
    except OSError as e:
        logger.error(f"Cleanup of {project_path} failed: {e}")
        return False
    logger.info(f"Removed partially created project {project_path}")
    return True


class ProjectOrchestrator:
    """Creates a project and seeds its secrets and packages."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        mock: bool = False,
        scaffolder: Optional[TemplateScaffolder] = None,
        store_factory: Optional[Callable[[Path], UserSecretsStore]] = None,
        package_manager_factory: Optional[Callable[[Path], PackageManager]] = None,
    ):
        self.settings = settings or Settings()
        self.mock = mock
        self.scaffolder = scaffolder or TemplateScaffolder(mock=mock)
        self.store_factory = store_factory or (lambda path: UserSecretsStore(path, mock=mock))
        self.package_manager_factory = package_manager_factory or (
            lambda path: PackageManager(path, mock=mock)
        )

    def create(
        self,
        name: str,
        template: Optional[str] = None,
        base_path: Optional[Path] = None,
    ) -> RunResult:
        """Run every step for a new project.

        Raises:
            FatalError: the run was aborted; any directory it created is removed
        """
        template = template or self.settings.template
        context = RunContext.for_project(Path(base_path or Path.cwd()), name)
        result = RunResult(context=context)
        started = time.monotonic()

        with preserve_cwd() as original_cwd:
            result.sdk_version = check_dotnet_sdk(self.settings.min_sdk_major, mock=self.mock)
            validate_project_name(name)
            validate_template(template, KNOWN_TEMPLATES, self.settings.allow_unknown_templates)

            if context.project_path.exists():
                raise TargetExistsError(f"Directory already exists: {context.project_path}")

            try:
                self._scaffold(template, name, context)
                os.chdir(context.project_path)
                self._populate(context, result)
            except Exception as e:
                self._abort(original_cwd, context.project_path)
                if isinstance(e, FatalError):
                    raise
                raise FatalError(f"Project creation failed: {e}") from e

        result.elapsed = time.monotonic() - started
        logger.info(f"Project {name} ready at {context.project_path} ({result.elapsed:.1f}s)")
        return result

    def seed_secrets(
        self,
        root_path: Path,
        project_path: Path,
        store: Optional[UserSecretsStore] = None,
    ) -> SeedReport:
        """Seed a project's secrets from config files under root_path."""
        store = store or self.store_factory(project_path)
        seeder = SecretSeeder(
            store,
            exclude_dirs=self.settings.exclude_dirs,
            backup_dir=project_path,
        )
        return seeder.seed(root_path)

    def discover_packages(self, root_path: Path) -> List[str]:
        discoverer = PackageDiscoverer(self.settings.core_packages, self.settings.exclude_dirs)
        return discoverer.discover(root_path)

    def install_packages(self, packages: List[str], project_path: Path, result: RunResult) -> None:
        """Gate and install each package; failures never stop the loop."""
        manager = self.package_manager_factory(project_path)
        gate = CompatibilityGate(manager)

        for package in packages:
            if not gate.is_compatible(package):
                result.incompatible.append(package)
                continue
            if manager.add_package(package):
                logger.info(f"Installed {package}")
                result.installed.append(package)
            else:
                result.failed.append(package)

    def _scaffold(self, template: str, name: str, context: RunContext) -> None:
        logger.info(f"Creating {template} project {name} in {context.project_path}")
        if not self.scaffolder.create_from_template(template, name, context.project_path):
            raise ScaffoldError(f"dotnet new {template} failed for {name}")
        if not context.project_path.is_dir():
            raise ScaffoldError(f"Template tool did not create {context.project_path}")

    def _populate(self, context: RunContext, result: RunResult) -> None:
        search_root = Path(self.settings.search_root) if self.settings.search_root else context.base_path

        store = self.store_factory(context.project_path)
        if not store.init():
            logger.warning("user-secrets init failed; secrets may not be stored")

        result.seed_report = self.seed_secrets(search_root, context.project_path, store)
        result.discovered = self.discover_packages(search_root)

        if self.settings.skip_packages:
            logger.info(f"Skipping installation of {len(result.discovered)} package(s)")
            return
        self.install_packages(result.discovered, context.project_path, result)

    def _abort(self, safe_cwd: Path, project_path: Path) -> None:
        # Step out of the project directory before removing it; the base
        # path may never have been created
        os.chdir(safe_cwd)
        cleanup_project(project_path)
