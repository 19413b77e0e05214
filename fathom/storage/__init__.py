from fathom.storage.models import ConversionRecord
from fathom.storage.sqlite_store import SQLiteStore

__all__ = ["ConversionRecord", "SQLiteStore"]
