"""
Helpers for building FastAPI web APIs on SQLAlchemy: entity base classes, a
generic repository, ApiResult envelopes, global exception handlers, JWT
helpers and small extensions.
"""

__version__ = "0.1.0"
