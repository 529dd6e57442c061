"""
In-memory poll storage.

Stands in for a database when running the CLI or tests. Submissions to the
same poll are serialized by a per-poll lock, and reads return a copied
snapshot, so the engine never sees a collection that changes under it.
"""

import threading
from typing import Dict, List

from ..domain.exceptions import PollNotFound
from ..domain.models import ParticipantResponse, Poll


class InMemoryPollRepository:
    """Dictionary-backed implementation of PollRepositoryProtocol."""

    def __init__(self):
        self._polls: Dict[str, Poll] = {}
        self._responses: Dict[str, Dict[str, ParticipantResponse]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def save_poll(self, poll: Poll) -> None:
        with self._registry_lock:
            if poll.id in self._polls:
                raise ValueError(f"Poll {poll.id!r} already exists")
            self._polls[poll.id] = poll
            self._responses[poll.id] = {}
            self._locks[poll.id] = threading.Lock()

    def get_poll(self, poll_id: str) -> Poll:
        try:
            return self._polls[poll_id]
        except KeyError:
            raise PollNotFound(poll_id) from None

    def save_response(self, poll_id: str, response: ParticipantResponse) -> None:
        self.get_poll(poll_id)
        with self._locks[poll_id]:
            self._responses[poll_id][response.participant_id] = response

    def list_responses(self, poll_id: str) -> List[ParticipantResponse]:
        self.get_poll(poll_id)
        with self._locks[poll_id]:
            return list(self._responses[poll_id].values())
