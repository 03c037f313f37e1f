"""
Business rule validation helpers shared by the services.
Checks references to related records and re-validates records after partial updates.
"""

from typing import Any, Dict, Iterable, Optional, Type
from app.database import Base
from app.repositories.base import BaseRepository
from app.utils.exceptions import MissingReferenceError, ValidationError


class BusinessRuleValidator:
    """
    Validator for business rules that need the database or the stored record.
    """

    @staticmethod
    async def ensure_reference(
        repo: BaseRepository,
        value: Optional[int],
        field: str,
        resource: str
    ) -> None:
        """
        Check that a referenced record exists.

        Args:
            repo: Repository of the referenced model
            value: Referenced id; None is accepted as "no reference"
            field: Payload field holding the reference
            resource: Human-readable name of the referenced model

        Raises:
            MissingReferenceError: If the id does not exist
        """
        if value is None:
            return
        if not await repo.exists(value):
            raise MissingReferenceError(field, resource, value)

    @staticmethod
    async def ensure_references(
        repo: BaseRepository,
        values: Optional[Iterable[int]],
        field: str,
        resource: str
    ) -> None:
        """
        Check that every id in a list refers to an existing record.

        Raises:
            MissingReferenceError: Listing the ids that do not exist
        """
        if not values:
            return
        requested = list(dict.fromkeys(values))
        found = set(await repo.get_existing_ids(requested))
        missing = [value for value in requested if value not in found]
        if missing:
            raise MissingReferenceError(field, resource, missing)

    @staticmethod
    def validate_merged(model: Type[Base], existing: Base, changes: Dict[str, Any]) -> None:
        """
        Run the model's validate_all() on the stored record with changes applied.

        Cross-field rules (budget ranges, floor numbers, interaction type
        requirements) depend on values the partial update did not send.

        Raises:
            ValidationError: If the merged record breaks a model rule
        """
        values = {
            column.key: getattr(existing, column.key)
            for column in model.__table__.columns
        }
        values.update(changes)
        candidate = model(**values)
        try:
            candidate.validate_all()
        except ValueError as e:
            raise ValidationError(str(e))
