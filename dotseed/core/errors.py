"""Exception hierarchy for dotseed runs.

Fatal errors abort the run and trigger cleanup of the project directory
created by that run. Everything else is recoverable per unit (one file,
one package) and is logged by the caller.
"""


class DotseedError(Exception):
    """Base class for dotseed errors."""
    pass


class FatalError(DotseedError):
    """Raised when the run cannot continue."""
    pass


class PrerequisiteError(FatalError):
    """Raised when the .NET SDK is missing or too old."""
    pass


class InvalidProjectNameError(FatalError):
    """Raised when a project name cannot be used as a directory/assembly name."""
    pass


class TargetExistsError(FatalError):
    """Raised when the target project directory already exists."""
    pass


class ScaffoldError(FatalError):
    """Raised when the template tool fails to create the project."""
    pass


class ConfigParseError(DotseedError):
    """Raised when a configuration document cannot be parsed."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnsupportedFormatError(ConfigParseError):
    """Raised when no parser handles a configuration file."""
    pass


class SecretStoreError(DotseedError):
    """Raised when the secret store cannot be queried."""
    pass


class UnknownTemplateError(FatalError):
    """Raised when the requested template kind is not a known dotnet template."""
    pass
