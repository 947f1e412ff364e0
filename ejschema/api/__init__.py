"""ejschema API package.

This module provides an optional FastAPI service layer around the Extended
JSON schema rewrite/coerce/validate helpers.
"""

from .server import create_app  # noqa: F401
