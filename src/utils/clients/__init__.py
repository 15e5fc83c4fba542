"""
Centralized client initialization module.

This module provides lazy-loaded shared clients for the application.
"""
from src.utils.clients.entry_feed import EntryFeedClient
from src.utils.dynamo import get_dynamo

# Initialize shared clients (lazy loading)
_entry_feed = None

def get_entry_feed() -> EntryFeedClient:
    """Get or create the remote entry feed client."""
    global _entry_feed
    if _entry_feed is None:
        _entry_feed = EntryFeedClient()
    return _entry_feed

__all__ = ["EntryFeedClient", "get_dynamo", "get_entry_feed"]
