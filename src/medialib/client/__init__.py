"""Client data layer for the entries API."""

from medialib.client.api import ClientError, EntryClient, ErrorKind
from medialib.client.models import EntryPageResult, EntryResult, MediaEntry, normalize_entry

__all__ = [
    "ClientError",
    "EntryClient",
    "EntryPageResult",
    "EntryResult",
    "ErrorKind",
    "MediaEntry",
    "normalize_entry",
]
