"""Configuration-file and documentation discovery."""
from dotseed.discovery.files import find_config_files, find_files, find_markdown_files
from dotseed.discovery.packages import PackageDiscoverer, PackageSet

__all__ = [
    'PackageDiscoverer',
    'PackageSet',
    'find_files',
    'find_config_files',
    'find_markdown_files',
]
