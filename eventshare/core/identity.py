"""Resolved identity of the caller.

Token decoding and the login UI live upstream. By the time a request reaches
the core, the caller is described by a ``SessionContext`` that every
operation receives explicitly.
"""

from dataclasses import dataclass, field

from fastapi import Header


@dataclass(frozen=True)
class UserProfile:
    """Cached profile fields; either may be empty."""

    name: str = ""
    mobile: str = ""


@dataclass(frozen=True)
class SessionContext:
    """Identity of the current caller.

    Attributes:
        identifier: Stable user identifier (the email address), or None
            when nobody is signed in.
        profile: Profile fields cached by the identity provider.
    """

    identifier: str | None = None
    profile: UserProfile = field(default_factory=UserProfile)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.identifier)

    def current_user_identifier(self) -> str | None:
        return self.identifier or None

    def current_user_profile(self) -> UserProfile:
        return self.profile


def get_session_context(
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_mobile: str | None = Header(default=None),
) -> SessionContext:
    """Dependency building the caller's context from gateway headers."""
    identifier = x_user_email.strip() if x_user_email else None
    return SessionContext(
        identifier=identifier or None,
        profile=UserProfile(name=x_user_name or "", mobile=x_user_mobile or ""),
    )
