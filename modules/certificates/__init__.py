"""Birth certificate form: field catalog, formatting, identifiers, preview,
persistence and export.

The Qt window lives in :mod:`modules.certificates.panels`; everything exported
here is free of widgets and can be driven headless.
"""

from .schema import FieldDescriptor, FieldKind, FieldSchema, CatalogError, load_schema
from .formatter import format_value, PLACEHOLDER, SHORT_PLACEHOLDER
from .identifiers import IdentifierGenerator
from .preview import PreviewSync, DictRenderTarget
from .validity import is_valid, missing_required
from .persistence import PersistenceStore, MemoryStorage
from .session import SessionState
from .export import ExportController, build_document, make_renderer
from .dispatcher import CertificateController

__all__ = [
    "FieldDescriptor",
    "FieldKind",
    "FieldSchema",
    "CatalogError",
    "load_schema",
    "format_value",
    "PLACEHOLDER",
    "SHORT_PLACEHOLDER",
    "IdentifierGenerator",
    "PreviewSync",
    "DictRenderTarget",
    "is_valid",
    "missing_required",
    "PersistenceStore",
    "MemoryStorage",
    "SessionState",
    "ExportController",
    "build_document",
    "make_renderer",
    "CertificateController",
]
