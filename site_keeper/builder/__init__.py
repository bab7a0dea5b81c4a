# File: site_keeper/builder/__init__.py
"""site_keeper.builder: сборка сайтов и манифеста проверки."""

from .builder import BuildError, DuplicateFileError, DuplicateURLError, ManifestBuilder
from .hashing import HashingWriter, content_digest
from .renderer import ContentRenderer

__all__ = [
    "BuildError",
    "ContentRenderer",
    "DuplicateFileError",
    "DuplicateURLError",
    "HashingWriter",
    "ManifestBuilder",
    "content_digest",
]
