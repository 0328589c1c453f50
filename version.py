"""
Version information for the knowledge base gateway.
This file follows semantic versioning (MAJOR.MINOR.PATCH):
- MAJOR version for incompatible HTTP API changes
- MINOR version for backwards-compatible endpoints or options
- PATCH version for backwards-compatible bug fixes
"""

__version__ = "1.1.0"
__version_info__ = tuple(map(int, __version__.split('.')))
