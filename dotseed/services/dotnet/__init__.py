"""Wrappers around the dotnet CLI."""
from dotseed.services.dotnet.packages import CompatibilityGate, PackageManager
from dotseed.services.dotnet.scaffolder import KNOWN_TEMPLATES, TemplateScaffolder
from dotseed.services.dotnet.secrets import UserSecretsStore

__all__ = [
    'CompatibilityGate',
    'PackageManager',
    'KNOWN_TEMPLATES',
    'TemplateScaffolder',
    'UserSecretsStore',
]
