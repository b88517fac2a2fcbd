"""
Application Status Workflow

Every status change an application can go through is a named trigger in
TRANSITIONS. ``fire`` checks the guard and applies the change to the ORM
object; persisting it is the caller's unit of work.

    draft -> submitted -> verified -> payment_received
    any   -> issue_raised -> under_review -> verified
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional

from app.core.errors import ValidationError
from app.models.application import Application

logger = logging.getLogger(__name__)


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    PAYMENT_RECEIVED = "payment_received"
    UNDER_REVIEW = "under_review"
    VERIFIED = "verified"
    ISSUE_RAISED = "issue_raised"


class Trigger(str, Enum):
    SUBMIT = "submit"
    DOCUMENTS_VERIFIED = "documents_verified"
    APPROVE = "approve"
    RAISE_ISSUE = "raise_issue"
    APPLICATION_FEE_PAID = "application_fee_paid"
    ISSUE_RESOLVED = "issue_resolved"


ANY_STATUS: FrozenSet[ApplicationStatus] = frozenset(ApplicationStatus)


@dataclass(frozen=True)
class Transition:
    sources: FrozenSet[ApplicationStatus]
    target: ApplicationStatus
    guard: Optional[Callable[[Application], bool]] = None
    guard_message: str = ""


def _issue_flag_set(application: Application) -> bool:
    return bool(application.issue_raised)


TRANSITIONS: Dict[Trigger, Transition] = {
    Trigger.SUBMIT: Transition(
        sources=frozenset({ApplicationStatus.DRAFT}),
        target=ApplicationStatus.SUBMITTED,
    ),
    Trigger.DOCUMENTS_VERIFIED: Transition(
        sources=frozenset({ApplicationStatus.DRAFT, ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW}),
        target=ApplicationStatus.VERIFIED,
    ),
    Trigger.APPROVE: Transition(sources=ANY_STATUS, target=ApplicationStatus.VERIFIED),
    Trigger.RAISE_ISSUE: Transition(sources=ANY_STATUS, target=ApplicationStatus.ISSUE_RAISED),
    Trigger.APPLICATION_FEE_PAID: Transition(
        sources=frozenset({ApplicationStatus.VERIFIED}),
        target=ApplicationStatus.PAYMENT_RECEIVED,
    ),
    Trigger.ISSUE_RESOLVED: Transition(
        sources=frozenset({ApplicationStatus.ISSUE_RAISED}),
        target=ApplicationStatus.UNDER_REVIEW,
        guard=_issue_flag_set,
        guard_message="Application has no open issue",
    ),
}


def can_fire(application: Application, trigger: Trigger) -> bool:
    transition = TRANSITIONS[Trigger(trigger)]
    try:
        current = ApplicationStatus(application.status)
    except ValueError:
        return False
    if current not in transition.sources:
        return False
    return transition.guard is None or transition.guard(application)


def fire(application: Application, trigger: Trigger, issue_details: str = None) -> Application:
    """
    Apply ``trigger`` to ``application`` in place.

    Raises:
        ValidationError: the current status is not a source of the trigger
            or the trigger's guard does not hold
    """
    trigger = Trigger(trigger)
    transition = TRANSITIONS[trigger]

    if not can_fire(application, trigger):
        if application.status in {s.value for s in transition.sources} and transition.guard_message:
            message = transition.guard_message
        else:
            message = f"Cannot apply '{trigger.value}' to an application in status '{application.status}'"
        raise ValidationError(message, details={"status": application.status, "trigger": trigger.value})

    previous = application.status
    application.status = transition.target.value

    if trigger in (Trigger.DOCUMENTS_VERIFIED, Trigger.APPROVE):
        application.admin_verification_status = "verified"
    if trigger == Trigger.APPROVE:
        application.issue_raised = False
    if trigger == Trigger.RAISE_ISSUE:
        application.issue_raised = True
        application.issue_details = issue_details
    if trigger == Trigger.ISSUE_RESOLVED:
        application.issue_raised = False

    logger.info(f"Application {application.application_id}: {previous} -> {application.status} ({trigger.value})")
    return application
