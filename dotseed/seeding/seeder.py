"""Seeds a project's user-secrets store from discovered configuration files."""
import json
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from dotseed.core.classifier import to_secret
from dotseed.core.errors import ConfigParseError, SecretStoreError
from dotseed.core.logger import get_logger
from dotseed.discovery.files import find_config_files
from dotseed.models.config import DEFAULT_EXCLUDE_DIRS
from dotseed.models.entries import SecretRecord
from dotseed.parsers.registry import parser_for

logger = get_logger(__name__)

BACKUP_PREFIX = "user-secrets-backup-"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

DEFAULT_SETTINGS_FILE = "appsettings.json"
DEVELOPMENT_SETTINGS_FILE = "appsettings.development.json"
DEFAULT_SETTINGS = {
    "Debug": True,
    "Logging": {
        "LogLevel": {
            "Default": "Information",
            "Microsoft.AspNetCore": "Warning",
        }
    },
}
ENVIRONMENT_SECRET = SecretRecord(full_key="AppConfig:Environment", value="Development")


@dataclass
class SeedReport:
    """Outcome of one seeding pass."""
    files: List[Path] = field(default_factory=list)
    forwarded: List[SecretRecord] = field(default_factory=list)
    skipped: int = 0
    failed_files: Dict[Path, str] = field(default_factory=dict)
    failed_keys: List[str] = field(default_factory=list)
    backup_path: Optional[Path] = None
    created_defaults: bool = False


def parse_secret_lines(lines: Sequence[str]) -> Dict[str, str]:
    """Turn `dotnet user-secrets list` output ('key = value') into a dict."""
    secrets = {}
    for line in lines:
        key, sep, value = line.partition(" = ")
        if not sep:
            logger.debug(f"Ignoring unrecognized secret listing line: {line}")
            continue
        secrets[key.strip()] = value
    return secrets


class SecretSeeder:
    """Backs up, discovers, parses, classifies and forwards configuration secrets."""

    def __init__(
        self,
        store,
        exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
        backup_dir: Optional[Path] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.exclude_dirs = list(exclude_dirs)
        self.backup_dir = Path(backup_dir) if backup_dir else None
        self.clock = clock

    def seed(self, root_path: Path) -> SeedReport:
        """Populate the secret store from configuration files under root_path."""
        root_path = Path(root_path)
        report = SeedReport()

        report.backup_path = self.backup_existing(self.backup_dir or root_path)

        config_files = find_config_files(root_path, self.exclude_dirs)
        if not config_files:
            logger.info("No configuration files found; creating default appsettings")
            self.create_default_config(root_path)
            report.created_defaults = True
            self._forward(ENVIRONMENT_SECRET, report)
            return report

        logger.info(f"Found {len(config_files)} configuration file(s)")
        for config_file in config_files:
            self._process_file(config_file, report)

        logger.info(
            f"Seeded {len(report.forwarded)} secret(s), skipped {report.skipped} value(s), "
            f"{len(report.failed_files)} file(s) failed"
        )
        return report

    def backup_existing(self, backup_dir: Path) -> Optional[Path]:
        """Write current secrets to a timestamped JSON file, best effort."""
        try:
            lines = self.store.list()
            if not lines:
                logger.debug("No existing secrets to back up")
                return None

            timestamp = self.clock().strftime(BACKUP_TIMESTAMP_FORMAT)
            backup_path = Path(backup_dir) / f"{BACKUP_PREFIX}{timestamp}.json"
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            backup_path.write_text(
                json.dumps(parse_secret_lines(lines), indent=2) + "\n",
                encoding="utf-8",
            )
        except (SecretStoreError, OSError) as e:
            logger.warning(f"Could not back up existing secrets: {e}")
            return None

        logger.info(f"Backed up {len(lines)} existing secret(s) to {backup_path.name}")
        return backup_path

    def create_default_config(self, root_path: Path) -> List[Path]:
        """Write appsettings.json and an identical development copy."""
        root_path.mkdir(parents=True, exist_ok=True)
        default_path = root_path / DEFAULT_SETTINGS_FILE
        development_path = root_path / DEVELOPMENT_SETTINGS_FILE

        default_path.write_text(json.dumps(DEFAULT_SETTINGS, indent=2) + "\n", encoding="utf-8")
        shutil.copyfile(default_path, development_path)
        return [default_path, development_path]

    def _process_file(self, config_file: Path, report: SeedReport) -> None:
        try:
            parser = parser_for(config_file)
            text = config_file.read_text(encoding="utf-8-sig")
            entries = parser.parse(text, source=config_file)
        except (ConfigParseError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Skipping {config_file}: {e}")
            report.failed_files[config_file] = str(e)
            return

        report.files.append(config_file)
        logger.info(f"Processing {config_file.name} ({parser.name}, {len(entries)} entries)")

        for entry in entries:
            record = to_secret(entry)
            if record is None:
                report.skipped += 1
                continue
            self._forward(record, report)

    def _forward(self, record: SecretRecord, report: SeedReport) -> None:
        if self.store.set(record.full_key, record.value):
            report.forwarded.append(record)
        else:
            logger.warning(f"Secret store rejected {record.full_key}")
            report.failed_keys.append(record.full_key)
