import pytest

from services.conversation_store import ConversationStore
from utils.exceptions import InvalidRequestError
from tests.fixtures.responses import SAMPLE_CONVERSATIONS


def test_get_for_unknown_user_returns_empty_list(conversation_store):
    """Given a user who never synced, get should return an empty list."""
    assert conversation_store.get("nobody") == []


def test_sync_then_get_returns_same_conversations(conversation_store):
    """Given a sync, when get is called for the same user, it should return exactly what was synced."""
    returned = conversation_store.sync("u1", SAMPLE_CONVERSATIONS)

    assert returned == SAMPLE_CONVERSATIONS
    assert conversation_store.get("u1") == SAMPLE_CONVERSATIONS


def test_second_sync_replaces_first(conversation_store):
    """Given two syncs for one user, the second set should fully replace the first."""
    conversation_store.sync("u1", [{"id": 1, "title": "A"}, {"id": 2, "title": "B"}])
    conversation_store.sync("u1", [{"id": 3, "title": "C"}])

    assert conversation_store.get("u1") == [{"id": 3, "title": "C"}]


def test_sync_then_empty_sync_clears_set(conversation_store):
    """Given a synced set, syncing an empty list should leave the user with no conversations."""
    conversation_store.sync("u1", [{"id": 1, "title": "A"}])
    assert conversation_store.get("u1") == [{"id": 1, "title": "A"}]

    conversation_store.sync("u1", [])
    assert conversation_store.get("u1") == []


def test_users_are_isolated(conversation_store):
    """Given two users, syncing one should not affect the other."""
    conversation_store.sync("u1", [{"id": 1}])
    conversation_store.sync("u2", [{"id": 2}])

    assert conversation_store.get("u1") == [{"id": 1}]
    assert conversation_store.get("u2") == [{"id": 2}]
    assert len(conversation_store) == 2


def test_delete_removes_user(conversation_store):
    """Given a synced user, delete should remove the entry and report it existed."""
    conversation_store.sync("u1", SAMPLE_CONVERSATIONS)

    assert conversation_store.delete("u1") is True
    assert conversation_store.get("u1") == []
    assert conversation_store.user_count() == 0


def test_delete_unknown_user_is_noop(conversation_store):
    """Given a user who never synced, delete should succeed without error."""
    assert conversation_store.delete("ghost") is False
    assert conversation_store.delete("ghost") is False


@pytest.mark.parametrize("user_id", [None, ""])
def test_get_and_delete_require_user_id(conversation_store, user_id):
    """Given a missing user id, get and delete should raise InvalidRequestError."""
    with pytest.raises(InvalidRequestError):
        conversation_store.get(user_id)
    with pytest.raises(InvalidRequestError):
        conversation_store.delete(user_id)


@pytest.mark.parametrize("user_id, conversations", [
    (None, []),
    ("", [{"id": 1}]),
    (123, []),
    ("u1", None),
    ("u1", "not a list"),
    ("u1", {"id": 1}),
    ("u1", 42),
])
def test_invalid_sync_raises_and_does_not_mutate(conversation_store, user_id, conversations):
    """Given an invalid payload, sync should raise and leave stored state untouched."""
    conversation_store.sync("u1", [{"id": "kept"}])

    with pytest.raises(InvalidRequestError) as exc_info:
        conversation_store.sync(user_id, conversations)

    assert exc_info.value.status_code == 400
    assert conversation_store.get("u1") == [{"id": "kept"}]
    assert conversation_store.user_count() == 1


def test_sync_accepts_tuple(conversation_store):
    """Given a tuple of conversations, sync should store it as a list."""
    assert conversation_store.sync("u1", ({"id": 1},)) == [{"id": 1}]


def test_stored_set_is_not_aliased_to_caller_list(conversation_store):
    """Given a synced list, mutating the caller's list or a returned copy should not change the store."""
    conversations = [{"id": 1}]
    conversation_store.sync("u1", conversations)
    conversations.append({"id": 2})

    fetched = conversation_store.get("u1")
    fetched.clear()

    assert conversation_store.get("u1") == [{"id": 1}]


def test_bounded_store_evicts_least_recently_synced_user():
    """Given a full store, syncing a new user should evict the least recently synced one."""
    store = ConversationStore(max_users=2)
    store.sync("u1", [{"id": 1}])
    store.sync("u2", [{"id": 2}])
    store.sync("u1", [{"id": 11}])  # refreshes u1

    store.sync("u3", [{"id": 3}])

    assert store.get("u2") == []
    assert store.get("u1") == [{"id": 11}]
    assert store.get("u3") == [{"id": 3}]
    assert len(store) == 2


def test_resync_of_existing_user_never_evicts():
    """Given a full store, re-syncing a tracked user should not evict anyone."""
    store = ConversationStore(max_users=2)
    store.sync("u1", [])
    store.sync("u2", [])

    store.sync("u2", [{"id": 2}])

    assert len(store) == 2
    assert store.get("u1") == []
    assert store.get("u2") == [{"id": 2}]


def test_negative_bound_means_unbounded():
    """Given a negative bound, the store should behave as unbounded."""
    store = ConversationStore(max_users=-5)
    for i in range(50):
        store.sync(f"u{i}", [i])

    assert store.max_users == 0
    assert len(store) == 50


def test_clear_drops_everything(conversation_store):
    """Given stored users, clear should empty the store."""
    conversation_store.sync("u1", [1])
    conversation_store.sync("u2", [2])

    conversation_store.clear()

    assert len(conversation_store) == 0
    assert conversation_store.get("u1") == []


def test_concurrent_syncs_from_threads_keep_one_set_per_user(conversation_store):
    """Given many threads syncing, each user should end with exactly one complete set."""
    from concurrent.futures import ThreadPoolExecutor

    def sync_user(i):
        user_id = f"user_{i % 10}"
        return conversation_store.sync(user_id, [{"device": i}, {"device": i}])

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(sync_user, range(200)))

    assert len(conversation_store) == 10
    for i in range(10):
        stored = conversation_store.get(f"user_{i}")
        assert len(stored) == 2
        assert stored[0] == stored[1]
