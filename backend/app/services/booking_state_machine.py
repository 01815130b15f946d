"""Authoritative booking status graph.

Request handlers and dashboards call into this module; they never keep
their own lists of allowed statuses.

    INQUIRY -> QUOTED -> CONFIRMED -> PAID -> COMPLETED
       \\________\\___________\\_________\\____-> CANCELLED

COMPLETED and CANCELLED are terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..crud.crud_booking import booking as crud_booking
from ..models.base import utcnow
from ..models.booking_status import ActorRole, BookingStatus, TransitionErrorCode
from ..schemas.booking import BookingRead, TransitionEvent, TransitionPayload, TransitionResult
from ..utils.money import round_money, to_decimal
from ..utils.outbox import BOOKING_TRANSITION_TOPIC, enqueue_outbox
from .pricing import deposit_amount_for, estimated_total_amount

logger = logging.getLogger(__name__)

S = BookingStatus
A = ActorRole

ALLOWED_TRANSITIONS: Mapping[BookingStatus, frozenset] = {
    S.INQUIRY: frozenset({S.QUOTED, S.CANCELLED}),
    S.QUOTED: frozenset({S.CONFIRMED, S.CANCELLED}),
    S.CONFIRMED: frozenset({S.PAID, S.CANCELLED}),
    S.PAID: frozenset({S.COMPLETED, S.CANCELLED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in ALLOWED_TRANSITIONS.items() if not targets)

# Who may take each forward edge; cancellation is open to every party
EDGE_ACTORS: Mapping[tuple, frozenset] = {
    (S.INQUIRY, S.QUOTED): frozenset({A.ARTIST, A.OPERATOR}),
    (S.QUOTED, S.CONFIRMED): frozenset({A.ARTIST, A.OPERATOR}),
    (S.CONFIRMED, S.PAID): frozenset({A.OPERATOR}),
    (S.PAID, S.COMPLETED): frozenset({A.OPERATOR}),
}
CANCELLING_ACTORS = frozenset({A.CUSTOMER, A.ARTIST, A.OPERATOR})

_STAMPS = {
    S.QUOTED: "quoted_at",
    S.CONFIRMED: "confirmed_at",
    S.PAID: "paid_at",
    S.COMPLETED: "completed_at",
    S.CANCELLED: "cancelled_at",
}

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
# Largest whole amount the booking price columns (Numeric(10, 2)) can hold
MAX_BOOKING_AMOUNT = Decimal("99999999")


@dataclass(frozen=True)
class TransitionDecision:
    ok: bool
    reason: Optional[TransitionErrorCode] = None
    message: Optional[str] = None
    changes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def reject(cls, reason: TransitionErrorCode, message: str) -> "TransitionDecision":
        return cls(ok=False, reason=reason, message=message)


def _coerce_status(value: Any) -> Optional[BookingStatus]:
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(str(value).strip().lower())
    except ValueError:
        return None


def _coerce_role(value: Any) -> Optional[ActorRole]:
    if isinstance(value, ActorRole):
        return value
    try:
        return ActorRole(str(value).strip().lower())
    except ValueError:
        return None


def allowed_targets(status: Any) -> frozenset:
    current = _coerce_status(status)
    if current is None:
        return frozenset()
    return ALLOWED_TRANSITIONS[current]


def can_transition(from_status: Any, to_status: Any) -> bool:
    return _coerce_status(to_status) in allowed_targets(from_status)


def permitted_actors(from_status: Any, to_status: Any) -> frozenset:
    source, target = _coerce_status(from_status), _coerce_status(to_status)
    if not can_transition(source, target):
        return frozenset()
    if target == S.CANCELLED:
        return CANCELLING_ACTORS
    return EDGE_ACTORS.get((source, target), frozenset())


def _money_override(value: Any) -> Optional[Decimal]:
    """Rounded amount from a payload, or None if negative, invalid or too large."""
    amount = to_decimal(value)
    if amount is None or amount < _ZERO:
        return None
    amount = round_money(amount)
    if amount > MAX_BOOKING_AMOUNT:
        return None
    return amount


def _price_changes(
    booking: Any, target: BookingStatus, payload: TransitionPayload
) -> Union[Dict[str, Any], TransitionDecision]:
    """Price fields frozen by ``target``, or a rejection."""
    if target == S.QUOTED:
        if payload.quoted_price is not None:
            quoted = _money_override(payload.quoted_price)
            if quoted is None:
                return TransitionDecision.reject(
                    TransitionErrorCode.INVALID_PAYLOAD,
                    f"quoted_price must be between 0 and {MAX_BOOKING_AMOUNT}",
                )
        else:
            quoted = estimated_total_amount(
                getattr(booking, "hourly_rate", None), getattr(booking, "duration_hours", None)
            )
            if quoted is None:
                return TransitionDecision.reject(
                    TransitionErrorCode.INVALID_PAYLOAD,
                    "booking has no hourly rate; quoted_price is required",
                )
            if quoted > MAX_BOOKING_AMOUNT:
                return TransitionDecision.reject(
                    TransitionErrorCode.INVALID_PAYLOAD,
                    "rate x hours is too large; pass an explicit quoted_price",
                )
        changes: Dict[str, Any] = {"quoted_price": quoted}

        percentage = payload.deposit_percentage
        if percentage is None:
            percentage = getattr(booking, "deposit_percentage", None)
        else:
            pct = to_decimal(percentage)
            if pct is None or pct <= _ZERO or pct > _HUNDRED:
                return TransitionDecision.reject(
                    TransitionErrorCode.INVALID_PAYLOAD, "deposit_percentage must be in (0, 100]"
                )
            changes["deposit_percentage"] = pct

        if payload.deposit_amount is not None:
            deposit = _money_override(payload.deposit_amount)
            if deposit is None or deposit > quoted:
                return TransitionDecision.reject(
                    TransitionErrorCode.INVALID_PAYLOAD,
                    "deposit_amount must be between 0 and the quoted price",
                )
            changes["deposit_amount"] = deposit
        elif percentage is not None:
            changes["deposit_amount"] = deposit_amount_for(quoted, percentage)
        return changes

    if target in (S.CONFIRMED, S.PAID):
        if payload.final_price is not None:
            final = _money_override(payload.final_price)
            if final is None:
                return TransitionDecision.reject(
                    TransitionErrorCode.INVALID_PAYLOAD,
                    f"final_price must be between 0 and {MAX_BOOKING_AMOUNT}",
                )
            return {"final_price": final}
        frozen = getattr(booking, "final_price", None)
        if frozen is None:
            frozen = getattr(booking, "quoted_price", None)
        if frozen is None:
            return TransitionDecision.reject(
                TransitionErrorCode.INVALID_PAYLOAD, "no quoted price to freeze as final_price"
            )
        return {"final_price": frozen}

    return {}


def evaluate_transition(
    booking: Any,
    expected_status: Any,
    target_status: Any,
    actor_role: Any,
    payload: Optional[Union[TransitionPayload, Mapping[str, Any]]] = None,
    now: Optional[datetime] = None,
) -> TransitionDecision:
    """Decide whether ``booking`` may move to ``target_status``.

    Pure: reads ``booking`` (an ORM row or any object with the same
    attributes) and returns the field changes to write, without touching it.
    Checks run in this order: stale view (CONFLICT), terminal state, edge
    exists, actor allowed, payload valid.
    """
    current = _coerce_status(getattr(booking, "status", None))
    expected = _coerce_status(expected_status)
    if expected is None or expected != current:
        return TransitionDecision.reject(
            TransitionErrorCode.CONFLICT,
            f"booking status is {getattr(current, 'value', current)}, caller expected {expected_status}",
        )
    if current in TERMINAL_STATUSES:
        return TransitionDecision.reject(
            TransitionErrorCode.TERMINAL_STATE, f"booking is already {current.value}"
        )
    target = _coerce_status(target_status)
    if target is None or not can_transition(current, target):
        return TransitionDecision.reject(
            TransitionErrorCode.INVALID_TRANSITION,
            f"cannot move from {current.value} to {target_status}",
        )
    role = _coerce_role(actor_role)
    if role is None or role not in permitted_actors(current, target):
        return TransitionDecision.reject(
            TransitionErrorCode.UNAUTHORIZED_ACTOR,
            f"{actor_role} may not move a booking from {current.value} to {target.value}",
        )

    if payload is None:
        payload = TransitionPayload()
    elif not isinstance(payload, TransitionPayload):
        try:
            payload = TransitionPayload.model_validate(payload)
        except ValidationError as exc:
            return TransitionDecision.reject(TransitionErrorCode.INVALID_PAYLOAD, str(exc))

    changes: Dict[str, Any] = {"status": target, _STAMPS[target]: now or utcnow()}
    if target == S.CANCELLED:
        if not payload.cancellation_reason:
            return TransitionDecision.reject(
                TransitionErrorCode.INVALID_PAYLOAD, "cancellation_reason is required"
            )
        changes["cancellation_reason"] = payload.cancellation_reason
        return TransitionDecision(ok=True, changes=changes)

    priced = _price_changes(booking, target, payload)
    if isinstance(priced, TransitionDecision):
        return priced
    changes.update(priced)
    return TransitionDecision(ok=True, changes=changes)


def attempt_transition(
    db: Session,
    booking_id: int,
    expected_status: Any,
    target_status: Any,
    actor_role: Any,
    payload: Optional[Union[TransitionPayload, Mapping[str, Any]]] = None,
    now: Optional[datetime] = None,
) -> TransitionResult:
    """Validate and commit one status change for ``booking_id``.

    The write is guarded by the row version read here, so of two callers
    racing from the same observed status exactly one succeeds and the other
    gets ``CONFLICT``. On success the transition event is stored in the
    outbox in the same commit.
    """
    db_booking = crud_booking.get_booking(db, booking_id)
    if db_booking is None:
        return TransitionResult(
            ok=False,
            reason=TransitionErrorCode.BOOKING_NOT_FOUND,
            message=f"booking {booking_id} not found",
        )

    decision = evaluate_transition(db_booking, expected_status, target_status, actor_role, payload, now)
    if not decision.ok:
        log = logger.warning if decision.reason == TransitionErrorCode.CONFLICT else logger.info
        log("Transition rejected booking=%s reason=%s: %s", booking_id, decision.reason.value, decision.message)
        return TransitionResult(ok=False, reason=decision.reason, message=decision.message)

    from_status = db_booking.status
    target = decision.changes["status"]
    if not crud_booking.apply_changes(db, db_booking, decision.changes):
        return TransitionResult(
            ok=False,
            reason=TransitionErrorCode.CONFLICT,
            message="booking was modified concurrently; re-read and retry",
        )

    event = TransitionEvent(
        booking_id=db_booking.id,
        from_status=from_status,
        to_status=target,
        at=decision.changes[_STAMPS[target]],
        actor=_coerce_role(actor_role),
    )
    enqueue_outbox(db, BOOKING_TRANSITION_TOPIC, event.model_dump(mode="json"), commit=False)
    db.commit()
    db.refresh(db_booking)
    logger.info(
        "Booking id=%s moved %s -> %s by %s",
        db_booking.id,
        event.from_status.value,
        event.to_status.value,
        event.actor.value,
    )
    return TransitionResult(ok=True, booking=BookingRead.model_validate(db_booking), event=event)
