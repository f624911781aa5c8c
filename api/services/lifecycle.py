"""
Content moderation lifecycle.

States:
    pending ──approve──▶ approved
       │
       └────reject────▶ rejected ──resubmit──▶ pending

An edit by the author sends the item back to pending from any state.
Approved items cannot be rejected directly; they go through pending first.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from database.repositories.content_repo import ContentStatus
from shared.exceptions import InvalidTransition, ValidationError


class ContentAction(str, Enum):
    """Actions that move content between moderation states."""
    APPROVE = "approve"
    REJECT = "reject"
    RESUBMIT = "resubmit"
    EDIT = "edit"


TRANSITIONS: Dict[Tuple[str, ContentAction], str] = {
    (ContentStatus.PENDING, ContentAction.APPROVE): ContentStatus.APPROVED,
    (ContentStatus.PENDING, ContentAction.REJECT): ContentStatus.REJECTED,
    (ContentStatus.REJECTED, ContentAction.RESUBMIT): ContentStatus.PENDING,
    (ContentStatus.PENDING, ContentAction.EDIT): ContentStatus.PENDING,
    (ContentStatus.APPROVED, ContentAction.EDIT): ContentStatus.PENDING,
    (ContentStatus.REJECTED, ContentAction.EDIT): ContentStatus.PENDING,
}

STATUS_FILTER_ALL = "all"

_STATUS_LABELS = {
    ContentStatus.PENDING: "معلق",
    ContentStatus.APPROVED: "مقبول",
    ContentStatus.REJECTED: "مرفوض",
}


def can_transition(current: str, action: ContentAction) -> bool:
    """Check whether an action is allowed from a status."""
    return (current, action) in TRANSITIONS


def next_status(current: str, action: ContentAction) -> str:
    """Resolve the status an action leads to, or raise InvalidTransition."""
    if not can_transition(current, action):
        raise InvalidTransition(
            f"لا يمكن تنفيذ هذا الإجراء على عنصر حالته {status_label(current)}",
            current_status=current,
            action=action.value,
        )
    return TRANSITIONS[(current, action)]


def validate_rejection_reason(reason: Optional[str]) -> str:
    """Return the reason to store, refusing empty or blank input."""
    if reason is None or not reason.strip():
        raise ValidationError("يرجى كتابة سبب الرفض")
    return reason


def parse_status_filter(value: Optional[str]) -> Optional[str]:
    """
    Turn a ``?status=`` query value into a store filter.

    ``all`` (the default) means no filter.
    """
    if value is None or value == STATUS_FILTER_ALL:
        return None
    if value not in ContentStatus.ALL:
        raise ValidationError("قيمة تصفية الحالة غير صحيحة")
    return value


def status_label(status: str) -> str:
    """Arabic label of a moderation status."""
    return _STATUS_LABELS.get(status, status)
