"""Explicit organization session threaded through every store operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OrganizationSession:
    """The authenticated account whose namespace all records live under.

    An anonymous session (no user_id) reads as empty and cannot write.
    """

    user_id: str | None = None
    email: str | None = None

    @classmethod
    def anonymous(cls) -> "OrganizationSession":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @property
    def namespace(self) -> str:
        return self.user_id or ""

    @property
    def display_name(self) -> str:
        return self.email or self.user_id or "anonymous"
