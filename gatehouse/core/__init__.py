"""Core: settings, database session/transaction boundary and the error taxonomy."""

from gatehouse.core.config import get_settings, settings
from gatehouse.core.database import get_db, transaction
from gatehouse.core.errors import ConfigurationError, ServiceError

__all__ = ["ConfigurationError", "ServiceError", "get_db", "get_settings", "settings", "transaction"]
