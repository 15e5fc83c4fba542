"""
Client for the remote entry feed.

The feed is the legacy spreadsheet web app: ``GET <url>?action=fetch``
returns a JSON array of entry rows. Requests always carry a timeout, and the
async variant can be abandoned early through a cancellation event.
"""
import asyncio
import os
from typing import Any, Dict, List, Optional

import requests
from aws_lambda_powertools import Logger

from src.services.entry_store import EntryStore
from src.services.exceptions import EntryFeedError

logger = Logger()

DEFAULT_TIMEOUT_SECONDS = 10.0


class EntryFeedClient:
    """Client for fetching entry snapshots from the remote feed."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or os.environ["ENTRY_FEED_URL"]
        if timeout is None:
            timeout = float(os.environ.get("ENTRY_FEED_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
        self.timeout = timeout
        self.session = requests.Session()

    def fetch_entries(self) -> List[Dict[str, Any]]:
        """
        Fetch the raw entry rows.

        Returns:
            List of raw rows

        Raises:
            EntryFeedError: On timeout, HTTP errors, undecodable payloads or
                a payload that is not a JSON array
        """
        try:
            response = self.session.get(
                self.url,
                params={"action": "fetch"},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise EntryFeedError("Request timeout") from e
        except requests.exceptions.RequestException as e:
            raise EntryFeedError(f"Failed to load entries: {e}") from e
        except ValueError as e:
            raise EntryFeedError("Entry feed returned invalid JSON") from e

        if not isinstance(data, list):
            logger.warning("Entry feed payload is not a list", extra={
                "payload_type": type(data).__name__
            })
            raise EntryFeedError("Entry feed payload is not a list")
        return data

    async def fetch_entries_async(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch the raw entry rows without blocking the event loop.

        Args:
            timeout: Overall deadline in seconds, defaults to the client timeout
            cancel_event: Setting this event abandons the request

        Raises:
            EntryFeedError: On timeout, cancellation or any fetch failure
        """
        if timeout is None:
            timeout = self.timeout

        fetch = asyncio.ensure_future(asyncio.to_thread(self.fetch_entries))
        waiters = {fetch}
        if cancel_event is not None:
            waiters.add(asyncio.ensure_future(cancel_event.wait()))

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in waiters:
                if not task.done():
                    task.cancel()

        if fetch in done:
            return fetch.result()
        if cancel_event is not None and cancel_event.is_set():
            raise EntryFeedError("Request cancelled")
        raise EntryFeedError("Request timeout")

    def fetch_store(self, strict: bool = False) -> EntryStore:
        """Fetch the feed and materialize it into an entry store."""
        return EntryStore.from_items(self.fetch_entries(), strict=strict)
