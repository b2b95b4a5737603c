"""
Batch ticket issuance.

Per request:
    Validated -> Reserved -> Assembling -> Persisted
    Validated -> Reserved -> CompensatedRelease -> Failed
    Rejected (validation, authorization or capacity; no side effects)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from eventdesk.core.config import settings
from eventdesk.core.exceptions import ErrorCode, InvalidRequest, PersistenceFailure
from eventdesk.models.ticket_instance import TicketInstance, TicketStatus
from eventdesk.repositories.ticket_instance_repository import TicketInstanceRepository
from eventdesk.repositories.ticket_type_repository import TicketTypeRepository
from eventdesk.schemas.ticket import TicketBatchCreate
from eventdesk.services.artifact_service import ArtifactService
from eventdesk.services.capacity_ledger import CapacityLedger
from eventdesk.services.ownership import require_owned_ticket_type
from eventdesk.storage.object_store import ObjectStore
from eventdesk.utils.qr_generator import generate_ticket_code, new_instance_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotFailure:
    index: int
    reason: str
    ticket_id: Optional[str] = None
    error: str = ErrorCode.ARTIFACT_STORAGE_FAILURE.value


@dataclass(frozen=True)
class _AssembledSlot:
    index: int
    instance_id: str
    code_payload: str
    artifact_locator: Optional[str]
    failure: Optional[str]


@dataclass
class IssuanceResult:
    created_instances: List[TicketInstance] = field(default_factory=list)
    failures: List[SlotFailure] = field(default_factory=list)


@dataclass
class ArtifactRetryResult:
    repaired: List[TicketInstance] = field(default_factory=list)
    failures: List[SlotFailure] = field(default_factory=list)


class TicketIssuanceService:

    def __init__(
        self,
        db: Session,
        object_store: ObjectStore,
        max_workers: Optional[int] = None,
        max_quantity: Optional[int] = None
    ):
        self.db = db
        self.ticket_type_repo = TicketTypeRepository(db)
        self.instance_repo = TicketInstanceRepository(db)
        self.ledger = CapacityLedger(db)
        self.artifact_service = ArtifactService(object_store)
        self.max_workers = max_workers or settings.ISSUANCE_MAX_WORKERS
        self.max_quantity = max_quantity or settings.ISSUANCE_MAX_QUANTITY

    def issue(self, caller_id: str, request: TicketBatchCreate) -> IssuanceResult:
        ticket_type_id, quantity = self._validate(request)

        ticket_type = require_owned_ticket_type(self.ticket_type_repo, caller_id, ticket_type_id)
        event_id = ticket_type.event_id

        reservation = self.ledger.reserve(ticket_type_id, quantity)

        # Anything raised before the batch commit leaves no instances behind
        try:
            slots = self._assemble(ticket_type_id, quantity)

            instances = [
                TicketInstance(
                    id=slot.instance_id,
                    ticket_type_id=ticket_type_id,
                    event_id=event_id,
                    code_payload=slot.code_payload,
                    artifact_locator=slot.artifact_locator,
                    status=TicketStatus.AVAILABLE
                )
                for slot in slots
            ]
            failures = [
                SlotFailure(index=slot.index, reason=slot.failure)
                for slot in slots
                if slot.failure is not None
            ]

            self.instance_repo.create_many(instances)
        except Exception as e:
            logger.error(
                f"Issuing {quantity} ticket(s) for type {ticket_type_id} failed: {str(e)}; "
                "releasing reservation"
            )
            self._compensate(reservation)
            raise PersistenceFailure("Failed to create tickets; no tickets were issued") from e

        if failures:
            logger.warning(
                f"Issued {quantity} ticket(s) for type {ticket_type_id}; "
                f"{len(failures)} without artifact: {[f.index for f in failures]}"
            )
        else:
            logger.info(f"Issued {quantity} ticket(s) for type {ticket_type_id}")

        return IssuanceResult(created_instances=instances, failures=failures)

    def retry_artifacts(self, caller_id: str, ticket_type_id: str) -> ArtifactRetryResult:
        """Regenerate artifacts for every instance of the type that lacks one."""
        require_owned_ticket_type(self.ticket_type_repo, caller_id, ticket_type_id)

        missing = self.instance_repo.get_missing_artifacts(ticket_type_id)
        if not missing:
            return ArtifactRetryResult()

        codes = [instance.code_payload for instance in missing]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(codes))) as pool:
            outcomes = list(pool.map(self._store_artifact, codes))

        result = ArtifactRetryResult()
        for index, (instance, (locator, failure)) in enumerate(zip(missing, outcomes)):
            if failure is not None:
                result.failures.append(SlotFailure(index=index, reason=failure, ticket_id=instance.id))
                continue
            instance.artifact_locator = locator
            result.repaired.append(instance)

        if result.repaired:
            self.db.commit()

        logger.info(
            f"Artifact retry for type {ticket_type_id}: "
            f"{len(result.repaired)} repaired, {len(result.failures)} still failing"
        )
        return result

    def _compensate(self, reservation) -> None:
        try:
            self.ledger.release(reservation)
        except Exception:
            logger.exception(
                f"Compensating release of {reservation.quantity} ticket(s) "
                f"for type {reservation.ticket_type_id} failed"
            )

    def _validate(self, request: TicketBatchCreate):
        ticket_type_id = (request.ticketTypeId or "").strip()
        if not ticket_type_id:
            raise InvalidRequest("ticketTypeId is required")

        quantity = request.quantity
        if quantity is None:
            raise InvalidRequest("quantity is required")

        if quantity <= 0:
            raise InvalidRequest("quantity must be greater than zero")

        if quantity > self.max_quantity:
            raise InvalidRequest(f"quantity cannot exceed {self.max_quantity} per batch")

        return ticket_type_id, quantity

    def _assemble(self, ticket_type_id: str, quantity: int) -> List[_AssembledSlot]:
        # pool.map keeps slot order regardless of completion order
        with ThreadPoolExecutor(max_workers=min(self.max_workers, quantity)) as pool:
            return list(pool.map(
                lambda index: self._build_slot(ticket_type_id, index),
                range(quantity)
            ))

    def _build_slot(self, ticket_type_id: str, index: int) -> _AssembledSlot:
        instance_id = new_instance_id()
        code_payload = generate_ticket_code(ticket_type_id, instance_id, index)
        locator, failure = self._store_artifact(code_payload)
        if failure is not None:
            logger.warning(f"Artifact for slot {index} of type {ticket_type_id} failed: {failure}")

        return _AssembledSlot(
            index=index,
            instance_id=instance_id,
            code_payload=code_payload,
            artifact_locator=locator,
            failure=failure
        )

    def _store_artifact(self, code_payload: str):
        # Artifact failures stay with their own slot
        try:
            return self.artifact_service.store_artifact(code_payload), None
        except Exception as e:
            return None, str(e)
