"""Resource references and the ownership guard applied before every mutation."""

from typing import Optional
from uuid import UUID

from vidtube.core.result import Err, Failure, Ok, Result


def parse_reference(raw: str | UUID | None) -> Optional[UUID]:
    """Parse a resource id, returning None when it is not a well-formed UUID."""
    if isinstance(raw, UUID):
        return raw
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def authorize_mutation(owner_id: UUID | str, requester_id: UUID | str) -> Result[None]:
    """
    Allow a mutation only when the requester is the recorded owner.

    Compares identity references by value, so a UUID and its string form
    are treated as the same reference.
    """
    owner = parse_reference(owner_id)
    requester = parse_reference(requester_id)
    if owner is None or requester is None or owner != requester:
        return Err(Failure.FORBIDDEN)
    return Ok(None)
