"""
Per-client serialization of read-modify-write sequences.

The metric upsert reads the latest record, merges one field and writes it
back. Holding the client's lock around that sequence prevents two requests
in the same process from losing each other's update. Requests handled by
other processes are not covered; there the last commit wins.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

logger = logging.getLogger(__name__)


class ClientLockRegistry:
    """
    Hands out one lock per client id.

    Entries are reference counted and dropped once no caller holds or waits
    on them, so the registry does not grow with the number of clients seen.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # client_id -> [lock, number of holders and waiters]
        self._entries: Dict[str, List] = {}

    @contextmanager
    def hold(self, client_id: str) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(client_id)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._entries[client_id] = entry
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[client_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
