"""dotnet user-secrets wrapper."""
import subprocess
from pathlib import Path
from typing import List

from dotseed.core.errors import SecretStoreError
from dotseed.core.logger import get_logger

logger = get_logger(__name__)

# Printed by `dotnet user-secrets list` when the store is empty
EMPTY_STORE_BANNER = "No secrets configured"


class UserSecretsStore:
    """Reads and writes a project's user-secrets store."""

    def __init__(self, project_path: Path, mock: bool = False):
        self.project_path = Path(project_path)
        self.mock = mock

    def _command(self, *args: str) -> List[str]:
        return ['dotnet', 'user-secrets', *args, '--project', str(self.project_path)]

    def init(self) -> bool:
        """Attach a UserSecretsId to the project."""
        if self.mock:
            logger.info(f"MOCK: Would initialize user-secrets for {self.project_path}")
            return True

        try:
            result = subprocess.run(
                self._command('init'),
                capture_output=True,
                text=True,
                check=True,
                cwd=self.project_path,
            )
            logger.debug(result.stdout.strip())
            return True
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to initialize user-secrets: {e}")
            if e.stderr:
                logger.error(f"Error output: {e.stderr}")
            return False
        except OSError as e:
            logger.error(f"Failed to run dotnet user-secrets: {e}")
            return False

    def list(self) -> List[str]:
        """Return stored secrets as 'key = value' lines.

        Raises:
            SecretStoreError: if the store cannot be listed
        """
        if self.mock:
            logger.info(f"MOCK: Would list user-secrets for {self.project_path}")
            return []

        try:
            result = subprocess.run(
                self._command('list'),
                capture_output=True,
                text=True,
                check=False,
                cwd=self.project_path,
            )
        except OSError as e:
            raise SecretStoreError(f"Failed to run dotnet user-secrets: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            raise SecretStoreError(f"dotnet user-secrets list failed: {detail}")

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if any(line.startswith(EMPTY_STORE_BANNER) for line in lines):
            return []
        return lines

    def set(self, key: str, value: str) -> bool:
        """Store one secret; return True on success."""
        if self.mock:
            logger.info(f"MOCK: Would set user-secret {key}")
            return True

        try:
            subprocess.run(
                self._command('set', key, value),
                capture_output=True,
                text=True,
                check=True,
                cwd=self.project_path,
            )
            return True
        except subprocess.CalledProcessError as e:
            # Never log the value itself
            logger.error(f"Failed to set user-secret {key}: exit code {e.returncode}")
            if e.stderr:
                logger.error(f"Error output: {e.stderr}")
            return False
        except OSError as e:
            logger.error(f"Failed to run dotnet user-secrets: {e}")
            return False
