"""Format-preserving rewrites of Maven POM descriptors."""

from .files import read_document, write_document
from .locator import PropertyLocation, locate_properties
from .patch import apply_edits, patch_document

__all__ = [
    "PropertyLocation",
    "apply_edits",
    "locate_properties",
    "patch_document",
    "read_document",
    "write_document",
]
