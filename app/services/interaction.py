"""
Interaction service.
Handles CRUD operations, the pending/in-progress/paused/completed/ended
lifecycle and overdue detection.
"""

from typing import Optional, List, Dict, Any
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.database import utc_now
from app.repositories.interaction import InteractionRepository
from app.repositories.customer import CustomerRepository
from app.repositories.broker import BrokerRepository
from app.repositories.property import PropertyRepository
from app.models.interaction import (
    Interaction,
    InteractionType,
    InteractionStatus,
    can_transition,
    overdue_cutoff,
)
from app.models.enums import Priority
from app.schemas.interaction import InteractionCreate, InteractionUpdate
from app.utils.exceptions import (
    APIException,
    BadRequestError,
    InteractionNotFoundError,
    InvalidStatusTransitionError,
    ValidationError,
)
from app.utils.validators import BusinessRuleValidator
import logging

logger = logging.getLogger(__name__)


class InteractionService:
    """
    Interaction service enforcing the lifecycle transitions.

    Allowed moves:
        pending     -> in_progress, completed, paused, ended
        in_progress -> completed, paused, ended
        paused      -> in_progress, ended
    completed and ended are terminal.

    The start action only leaves pending and the resume action only leaves
    paused; both land on in_progress.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.interaction_repo = InteractionRepository(db_session)
        self.customer_repo = CustomerRepository(db_session)
        self.broker_repo = BrokerRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    @property
    def overdue_after_days(self) -> int:
        return settings.overdue_after_days

    async def _check_references(self, data: Dict[str, Any]) -> None:
        if "customer_id" in data:
            await BusinessRuleValidator.ensure_reference(
                self.customer_repo, data["customer_id"], "customer_id", "Customer"
            )
        if "broker_id" in data:
            await BusinessRuleValidator.ensure_reference(
                self.broker_repo, data["broker_id"], "broker_id", "Broker"
            )
        if "property_id" in data:
            await BusinessRuleValidator.ensure_reference(
                self.property_repo, data["property_id"], "property_id", "Property"
            )
        for field in ("shared_properties", "shortlisted_properties"):
            if field in data:
                await BusinessRuleValidator.ensure_references(
                    self.property_repo, data[field], field, "Property"
                )

    async def create_interaction(self, interaction_data: InteractionCreate) -> Interaction:
        """
        Create an interaction and stamp the customer's last interaction date.

        Args:
            interaction_data: Interaction creation data

        Returns:
            Created interaction

        Raises:
            ValidationError: If a referenced record does not exist
        """
        try:
            create_data = interaction_data.model_dump()
            await self._check_references(create_data)

            now = utc_now()
            create_data["created_at"] = now
            create_data["updated_at"] = now
            if create_data["status"] == InteractionStatus.COMPLETED:
                create_data["completed_date"] = now

            Interaction(**create_data).validate_all()

            # Committed together with the new interaction
            await self.customer_repo.touch_last_interaction(create_data["customer_id"], now)
            interaction = await self.interaction_repo.create(create_data)

            logger.info(
                f"Interaction created: {interaction.type.value} for customer {interaction.customer_id} "
                f"by broker {interaction.broker_id} (ID: {interaction.id})"
            )
            return interaction

        except (APIException, SQLAlchemyError):
            raise
        except ValueError as e:
            raise ValidationError(str(e))
        except Exception as e:
            logger.error(f"Failed to create interaction: {e}")
            raise BadRequestError(f"Failed to create interaction: {str(e)}")

    async def get_interaction(self, interaction_id: int) -> Interaction:
        interaction = await self.interaction_repo.get_by_id(interaction_id, load_relationships=True)
        if not interaction:
            raise InteractionNotFoundError(interaction_id)
        return interaction

    async def list_interactions(
        self,
        search: Optional[str] = None,
        interaction_type: Optional[InteractionType] = None,
        status: Optional[InteractionStatus] = None,
        customer_id: Optional[int] = None,
        broker_id: Optional[int] = None,
        priority: Optional[Priority] = None,
        overdue: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Interaction]:
        """
        List interactions with optional filters.

        Args:
            overdue: True for overdue interactions only, False to exclude them
        """
        cutoff = overdue_cutoff(self.overdue_after_days)
        return await self.interaction_repo.search_interactions(
            search=search,
            interaction_type=interaction_type,
            status=status,
            customer_id=customer_id,
            broker_id=broker_id,
            priority=priority,
            overdue_before=cutoff if overdue is True else None,
            not_overdue_before=cutoff if overdue is False else None,
            skip=skip,
            limit=limit
        )

    async def get_overdue_interactions(self, skip: int = 0, limit: int = 100) -> List[Interaction]:
        """Get pending or in-progress interactions not updated within the overdue window."""
        interactions = await self.interaction_repo.get_overdue(
            overdue_cutoff(self.overdue_after_days), skip=skip, limit=limit
        )
        logger.debug(f"{len(interactions)} interactions overdue after {self.overdue_after_days} days")
        return interactions

    async def update_interaction(self, interaction_id: int, interaction_data: InteractionUpdate) -> Interaction:
        """
        Apply a partial update to an interaction.

        A status change must follow the lifecycle; sending the current status
        leaves it unchanged.

        Raises:
            InteractionNotFoundError: If interaction doesn't exist
            InvalidStatusTransitionError: If the status change is not allowed
            ValidationError: If the merged record breaks a rule
        """
        try:
            existing = await self.get_interaction(interaction_id)
            changes = interaction_data.model_dump(exclude_unset=True)

            target = changes.get("status")
            if target is not None:
                if target == existing.status:
                    changes.pop("status")
                else:
                    self._check_transition(existing.status, target)
                    changes.update(self._transition_side_effects(target, changes))

            await self._check_references(changes)

            BusinessRuleValidator.validate_merged(Interaction, existing, changes)

            changes["updated_at"] = utc_now()
            interaction = await self.interaction_repo.update(interaction_id, changes)
            if not interaction:
                raise InteractionNotFoundError(interaction_id)

            logger.info(f"Interaction updated: {interaction_id}")
            return interaction

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to update interaction {interaction_id}: {e}")
            raise BadRequestError(f"Failed to update interaction: {str(e)}")

    async def delete_interaction(self, interaction_id: int) -> None:
        deleted = await self.interaction_repo.delete(interaction_id)
        if not deleted:
            raise InteractionNotFoundError(interaction_id)
        logger.info(f"Interaction deleted: {interaction_id}")

    # Lifecycle actions

    async def start_interaction(self, interaction_id: int) -> Interaction:
        """pending -> in_progress. A paused interaction goes through resume instead."""
        return await self._transition(
            interaction_id,
            InteractionStatus.IN_PROGRESS,
            allowed_from=(InteractionStatus.PENDING,)
        )

    async def pause_interaction(self, interaction_id: int, reason: str) -> Interaction:
        """pending | in_progress -> paused, recording the reason."""
        return await self._transition(interaction_id, InteractionStatus.PAUSED, {"pause_reason": reason})

    async def resume_interaction(self, interaction_id: int) -> Interaction:
        """paused -> in_progress, clearing the pause reason."""
        return await self._transition(
            interaction_id,
            InteractionStatus.IN_PROGRESS,
            allowed_from=(InteractionStatus.PAUSED,)
        )

    async def complete_interaction(self, interaction_id: int) -> Interaction:
        """pending | in_progress -> completed, stamping the completion date."""
        return await self._transition(interaction_id, InteractionStatus.COMPLETED)

    async def end_interaction(self, interaction_id: int, reason: str) -> Interaction:
        """pending | in_progress | paused -> ended, recording the reason."""
        return await self._transition(interaction_id, InteractionStatus.ENDED, {"end_reason": reason})

    async def _transition(
        self,
        interaction_id: int,
        target: InteractionStatus,
        extra: Optional[Dict[str, Any]] = None,
        allowed_from: Optional[tuple] = None
    ) -> Interaction:
        """
        Move an interaction to a new status.

        Args:
            interaction_id: Interaction to change
            target: New status
            extra: Additional fields to store with the change
            allowed_from: Restrict the source statuses further than the transition table

        Raises:
            InteractionNotFoundError: If interaction doesn't exist
            InvalidStatusTransitionError: If the move is not allowed
        """
        existing = await self.get_interaction(interaction_id)
        current = existing.status

        if allowed_from is not None and current not in allowed_from:
            raise InvalidStatusTransitionError(current.value, target.value)
        self._check_transition(current, target)

        changes: Dict[str, Any] = {"status": target}
        changes.update(extra or {})
        changes.update(self._transition_side_effects(target, changes))
        changes["updated_at"] = utc_now()

        interaction = await self.interaction_repo.update(interaction_id, changes)
        if not interaction:
            raise InteractionNotFoundError(interaction_id)

        logger.info(f"Interaction {interaction_id} moved from {current.value} to {target.value}")
        return interaction

    @staticmethod
    def _check_transition(current: InteractionStatus, target: InteractionStatus) -> None:
        if not can_transition(current, target):
            raise InvalidStatusTransitionError(
                InteractionStatus(current).value, InteractionStatus(target).value
            )

    @staticmethod
    def _transition_side_effects(target: InteractionStatus, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Fields implied by entering a status."""
        effects: Dict[str, Any] = {}
        if target == InteractionStatus.COMPLETED and not changes.get("completed_date"):
            effects["completed_date"] = utc_now()
        if target == InteractionStatus.IN_PROGRESS:
            effects["pause_reason"] = None
        return effects
