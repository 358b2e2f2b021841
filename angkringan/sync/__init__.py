"""Mini README: Cloud sync collaborators for Angkringan POS.

``client`` speaks HTTP to the spreadsheet backend; ``payloads`` validates
what comes back before anything reaches the ledger.
"""

from .client import RemoteSync, RemoteSyncClient
from .payloads import SyncSnapshot, parse_snapshot, parse_timestamp

__all__ = ["RemoteSync", "RemoteSyncClient", "SyncSnapshot", "parse_snapshot", "parse_timestamp"]
