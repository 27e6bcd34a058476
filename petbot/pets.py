"""In-memory favorite-pets store, keyed by user id. Lives for the process lifetime."""
import threading

from petbot.logging_utils import get_logger

logger = get_logger(__name__)

# user_id -> ordered list of pet names
user_to_pets: dict[str, list[str]] = {}
_lock = threading.Lock()


def check_pets(pets: object) -> list[str]:
    """Return pets as a new list, or raise TypeError unless it is a list of strings."""
    if not isinstance(pets, list):
        raise TypeError(f"pets must be a list of strings, got {type(pets).__name__}")
    bad = [p for p in pets if not isinstance(p, str)]
    if bad:
        raise TypeError(f"pets must be a list of strings, got {type(bad[0]).__name__} item {bad[0]!r}")
    return list(pets)


def update_favorite_pets(user_id: str, pets: list[str]) -> list[str]:
    """Store pets under user_id, replacing whatever was there. Returns the stored list."""
    pets = check_pets(pets)
    with _lock:
        user_to_pets[user_id] = pets
    logger.debug("pets_updated", count=len(pets))
    return list(pets)


def delete_favorite_pets(user_id: str) -> None:
    """Remove the user's entry. No-op if the user has none."""
    with _lock:
        removed = user_to_pets.pop(user_id, None)
    logger.debug("pets_deleted", existed=removed is not None)


def list_favorite_pets(user_id: str) -> list[str]:
    with _lock:
        return list(user_to_pets.get(user_id, []))


def clear() -> None:
    """Drop every user's pets."""
    with _lock:
        user_to_pets.clear()
