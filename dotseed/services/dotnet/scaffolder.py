"""dotnet new wrapper."""
import subprocess
from pathlib import Path

from dotseed.core.logger import get_logger

logger = get_logger(__name__)

# Templates shipped with the .NET SDK that produce a buildable project
KNOWN_TEMPLATES = (
    "webapi",
    "web",
    "mvc",
    "razor",
    "blazor",
    "console",
    "classlib",
    "worker",
    "grpc",
    "xunit",
)


class TemplateScaffolder:
    """Creates projects from `dotnet new` templates."""

    def __init__(self, mock: bool = False):
        self.mock = mock

    def create_from_template(self, template: str, name: str, output_path: Path) -> bool:
        """Create project `name` from `template` into output_path.

        Returns:
            True if the template tool succeeded, False otherwise
        """
        if self.mock:
            logger.info(f"MOCK: Would run dotnet new {template} -n {name} -o {output_path}")
            Path(output_path).mkdir(parents=True, exist_ok=True)
            return True

        cmd = ['dotnet', 'new', template, '-n', name, '-o', str(output_path)]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            logger.debug(result.stdout.strip())
            return True
        except subprocess.CalledProcessError as e:
            logger.error(f"dotnet new {template} failed: {e}")
            if e.stderr:
                logger.error(f"Error output: {e.stderr}")
            return False
        except OSError as e:
            logger.error(f"Failed to run dotnet new: {e}")
            return False
