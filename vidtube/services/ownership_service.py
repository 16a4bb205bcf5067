from typing import Type, TypeVar
from uuid import UUID

from sqlalchemy.orm import Session

from vidtube.core.database import Base
from vidtube.core.ownership import authorize_mutation, parse_reference
from vidtube.core.result import Err, Failure, Ok, Result

ModelT = TypeVar("ModelT", bound=Base)


class OwnershipService:
    """Loads an owned resource for update/delete on behalf of a requester."""

    @staticmethod
    def load_for_mutation(
        db: Session,
        model: Type[ModelT],
        raw_id: str,
        requester_id: UUID,
        resource: str,
    ) -> Result[ModelT]:
        """
        Resolve ``raw_id`` and authorize the requester against its owner.

        Malformed id -> INVALID_REFERENCE, absent -> NOT_FOUND,
        different owner -> FORBIDDEN. Absence is reported before ownership.
        """
        resource_id = parse_reference(raw_id)
        if resource_id is None:
            return Err(Failure.INVALID_REFERENCE, f"Invalid {resource.lower()} ID")

        instance = db.query(model).filter(model.id == resource_id).first()
        if instance is None:
            return Err(Failure.NOT_FOUND, f"{resource} not found")

        allowed = authorize_mutation(instance.owner_id, requester_id)
        if isinstance(allowed, Err):
            return Err(Failure.FORBIDDEN, f"You can only modify your own {resource.lower()}s")

        return Ok(instance)
