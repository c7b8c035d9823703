"""Promotion requests: a user asks to become an admin, a superadmin decides."""
import logging

from fileflow.auth.roles import SUPERADMIN_ROLES, authorize
from fileflow.errors import Conflict, NotFound, ValidationError
from fileflow.schemas.enums import RequestStatus, Role
from fileflow.schemas.records import AdminRequestRecord, UserRecord
from fileflow.storage.base import Storage, utcnow

logger = logging.getLogger(__name__)


def request_promotion(storage: Storage, caller: UserRecord, message: str) -> AdminRequestRecord:
    if caller.role != Role.USER.value:
        raise ValidationError("Only regular users can request admin access")
    if not message or not message.strip():
        raise ValidationError("A message is required")
    record = storage.create_admin_request(user_id=caller.id, message=message.strip())
    logger.info("Admin request %s filed by %s", record.id, caller.id)
    return record


def list_pending_requests(storage: Storage, caller: UserRecord) -> list[AdminRequestRecord]:
    authorize(caller, SUPERADMIN_ROLES)
    return storage.list_pending_admin_requests()


def _review(tx: Storage, request_id: str, reviewer: UserRecord, outcome: RequestStatus) -> AdminRequestRecord:
    current = tx.get_admin_request(request_id)
    if current is None:
        raise NotFound("Request not found")
    if current.status != RequestStatus.PENDING.value:
        raise Conflict(f"Request is already {current.status}")

    reviewed = tx.transition_admin_request(
        request_id,
        RequestStatus.PENDING.value,
        status=outcome.value,
        reviewed_by=reviewer.id,
        reviewed_at=utcnow(),
    )
    if reviewed is None:
        raise Conflict("Request was reviewed concurrently")
    return reviewed


def approve_request(storage: Storage, request_id: str, reviewer: UserRecord) -> AdminRequestRecord:
    """Approve the request and promote its author to admin in one transaction."""
    authorize(reviewer, SUPERADMIN_ROLES)
    with storage.transaction() as tx:
        reviewed = _review(tx, request_id, reviewer, RequestStatus.APPROVED)
        promoted = tx.update_user(reviewed.user_id, role=Role.ADMIN.value)
        if promoted is None:
            raise NotFound("Requesting user not found")
    logger.info("Admin request %s approved by %s, user %s promoted", request_id, reviewer.id, reviewed.user_id)
    return reviewed


def deny_request(storage: Storage, request_id: str, reviewer: UserRecord) -> AdminRequestRecord:
    authorize(reviewer, SUPERADMIN_ROLES)
    with storage.transaction() as tx:
        reviewed = _review(tx, request_id, reviewer, RequestStatus.DENIED)
    logger.info("Admin request %s denied by %s", request_id, reviewer.id)
    return reviewed
