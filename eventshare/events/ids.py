"""Short event identifiers."""
import secrets

# 8 random bytes -> 11 URL-safe characters, 64 bits of entropy
EVENT_ID_BYTES = 8


def generate_event_id() -> str:
    """Generate a short, URL-safe event ID.

    Collisions are negligible at the number of events the service holds, but
    this is not a cryptographic uniqueness guarantee; the record store's
    primary key rejects the rare duplicate.
    """
    return secrets.token_urlsafe(EVENT_ID_BYTES)
