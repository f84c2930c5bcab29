"""Settings model for dotseed.yml."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Baseline infrastructure packages added to every project
CORE_PACKAGES = (
    "Microsoft.Extensions.Configuration.UserSecrets",
    "Microsoft.Extensions.Configuration.Json",
    "Microsoft.Extensions.DependencyInjection",
    "Microsoft.Extensions.Logging",
    "Serilog.AspNetCore",
)

DEFAULT_EXCLUDE_DIRS = ("bin", "obj")


class ConfigValidationError(Exception):
    """Raised when dotseed.yml is malformed or holds invalid values."""
    pass


class Settings(BaseModel):
    """Run settings, loaded from dotseed.yml or defaulted."""

    model_config = ConfigDict(extra='forbid')

    template: str = "webapi"
    core_packages: List[str] = Field(default_factory=lambda: list(CORE_PACKAGES))
    min_sdk_major: int = Field(8, ge=1)
    search_root: Optional[str] = None
    skip_packages: bool = False
    allow_unknown_templates: bool = False
    log_file: Optional[str] = None
    exclude_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))

    @field_validator('core_packages')
    @classmethod
    def validate_core_packages(cls, v):
        """Core packages must be a non-empty list of distinct names."""
        if not v:
            raise ValueError("core_packages must list at least one package")
        cleaned = [name.strip() for name in v]
        if any(not name for name in cleaned):
            raise ValueError("core_packages entries must be non-empty")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("core_packages entries must be unique")
        return cleaned

    @field_validator('template')
    @classmethod
    def validate_template(cls, v):
        """Template kinds are lowercase short names passed to `dotnet new`."""
        v = v.strip().lower()
        if not v:
            raise ValueError("template must not be empty")
        return v
