"""
In-memory conversation store used as a cross-device sync cache.
Each user owns one conversation set which every sync replaces wholesale.
"""
import threading
from collections import OrderedDict
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from utils.constants import ErrorMessages
from utils.exceptions import InvalidRequestError
from utils.logger import app_logger


class ConversationStore:
    """
    Process-lifetime mapping of user id -> conversation set.

    Conversations are opaque client values; the store never looks inside them.
    Concurrent syncs for the same user are last-writer-wins.
    """

    def __init__(self, max_users: int = 0):
        """
        Initialize an empty store.

        Args:
            max_users: Maximum number of tracked users, 0 for no limit. When full,
                a sync for a new user evicts the least recently synced user.
        """
        self._max_users = max(0, max_users)
        self._sets: OrderedDict[str, list] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _require_user_id(user_id: Optional[str], message: str) -> str:
        if not isinstance(user_id, str) or not user_id:
            raise InvalidRequestError(message)
        return user_id

    @staticmethod
    def _is_conversation_sequence(conversations: Any) -> bool:
        """Lists and tuples qualify; strings, bytes and mappings do not."""
        if isinstance(conversations, (str, bytes, bytearray, Mapping)):
            return False
        return isinstance(conversations, Sequence)

    @property
    def max_users(self) -> int:
        return self._max_users

    def get(self, user_id: Optional[str]) -> list:
        """
        Get the conversation set stored for a user.

        Returns:
            Copy of the stored set, or an empty list if the user never synced
        """
        user_id = self._require_user_id(user_id, ErrorMessages.USER_ID_REQUIRED)
        with self._lock:
            return list(self._sets.get(user_id, []))

    def sync(self, user_id: Optional[str], conversations: Any) -> list:
        """
        Replace the user's conversation set.

        Args:
            user_id: Non-empty user id
            conversations: Ordered sequence of opaque conversation values

        Returns:
            The set now stored for the user

        Raises:
            InvalidRequestError: If user_id is empty or conversations is not a sequence.
                Nothing is mutated in that case.
        """
        user_id = self._require_user_id(user_id, ErrorMessages.INVALID_SYNC_PAYLOAD)
        if not self._is_conversation_sequence(conversations):
            raise InvalidRequestError(ErrorMessages.INVALID_SYNC_PAYLOAD)

        stored = list(conversations)
        with self._lock:
            if user_id in self._sets:
                self._sets.move_to_end(user_id)
            else:
                self._evict_if_full()
            self._sets[user_id] = stored
            return list(stored)

    def delete(self, user_id: Optional[str]) -> bool:
        """
        Remove a user's conversation set. Deleting an unknown user is a no-op.

        Returns:
            True if an entry was removed
        """
        user_id = self._require_user_id(user_id, ErrorMessages.USER_ID_REQUIRED)
        with self._lock:
            return self._sets.pop(user_id, None) is not None

    def _evict_if_full(self) -> None:
        """Drop the least recently synced user when the bound is reached. Caller holds the lock."""
        if not self._max_users:
            return

        while len(self._sets) >= self._max_users:
            _, evicted_set = self._sets.popitem(last=False)
            app_logger.warning(
                f"Store full ({self._max_users} users): evicted least recently synced user "
                f"with {len(evicted_set)} conversations"
            )

    def user_count(self) -> int:
        with self._lock:
            return len(self._sets)

    def __len__(self) -> int:
        return self.user_count()

    def clear(self) -> None:
        """Drop every stored conversation set."""
        with self._lock:
            count = len(self._sets)
            self._sets.clear()
        app_logger.info(f"Conversation store cleared: {count} users removed")
