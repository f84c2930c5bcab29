"""dotseed - scaffold .NET projects and seed their secrets and packages."""

__version__ = "0.1.0"
