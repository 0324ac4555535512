from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """The user performing a request, as asserted by the identity provider."""

    id: str
    name: str | None = None
