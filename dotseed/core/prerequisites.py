"""Environment and input checks that must pass before anything is created."""
import re
import subprocess
from typing import Sequence

from dotseed.core.errors import (
    InvalidProjectNameError,
    PrerequisiteError,
    UnknownTemplateError,
)
from dotseed.core.logger import get_logger

logger = get_logger(__name__)

MOCK_SDK_VERSION = "8.0.100"
MAX_PROJECT_NAME_LENGTH = 100

_PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")
_RESERVED_NAMES = {"CON", "PRN", "AUX", "NUL"} | {
    f"{prefix}{n}" for prefix in ("COM", "LPT") for n in range(1, 10)
}


def parse_sdk_major(version: str) -> int:
    """Major version of a `dotnet --version` string such as '8.0.204'."""
    match = re.match(r"^\s*(\d+)\.", version)
    if not match:
        raise PrerequisiteError(f"Unrecognized .NET SDK version: {version.strip()!r}")
    return int(match.group(1))


def check_dotnet_sdk(min_major: int, mock: bool = False) -> str:
    """Return the installed SDK version.

    Raises:
        PrerequisiteError: dotnet missing, failing, or older than min_major
    """
    if mock:
        logger.info(f"MOCK: Would check for .NET SDK >= {min_major}")
        return MOCK_SDK_VERSION

    try:
        result = subprocess.run(
            ['dotnet', '--version'],
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise PrerequisiteError(
            "The .NET SDK was not found. Install it from https://dot.net and retry."
        ) from e
    except subprocess.CalledProcessError as e:
        raise PrerequisiteError(f"'dotnet --version' failed: {(e.stderr or '').strip()}") from e

    version = result.stdout.strip()
    major = parse_sdk_major(version)
    if major < min_major:
        raise PrerequisiteError(
            f".NET SDK {version} is too old; version {min_major}.0 or newer is required"
        )

    logger.info(f"Found .NET SDK {version}")
    return version


def validate_project_name(name: str) -> str:
    """Return the name if usable as a directory and assembly name.

    Raises:
        InvalidProjectNameError: with the reason the name was refused
    """
    if not name or not name.strip():
        raise InvalidProjectNameError("Project name must not be empty")
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise InvalidProjectNameError(
            f"Project name is longer than {MAX_PROJECT_NAME_LENGTH} characters"
        )
    if not _PROJECT_NAME_PATTERN.match(name):
        raise InvalidProjectNameError(
            f"Invalid project name '{name}': use letters, digits, '_', '.' or '-', "
            "starting with a letter or '_'"
        )
    if name.endswith("."):
        raise InvalidProjectNameError(f"Invalid project name '{name}': must not end with '.'")
    if name.split(".")[0].upper() in _RESERVED_NAMES:
        raise InvalidProjectNameError(f"Invalid project name '{name}': reserved device name")
    return name


def validate_template(template: str, known: Sequence[str], allow_unknown: bool = False) -> str:
    """Return the template kind, refusing unknown kinds unless allowed."""
    if template in known or allow_unknown:
        return template
    raise UnknownTemplateError(
        f"Unknown template '{template}'. Known templates: {', '.join(known)}"
    )
