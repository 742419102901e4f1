"""Work experience API package.

This package exposes the model, repository, service and validation
modules used by the FastAPI application. It is intentionally
lightweight; individual modules contain the concrete implementations
and documentation.
"""

__version__ = "1.0.0"
