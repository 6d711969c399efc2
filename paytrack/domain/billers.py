"""Biller lifecycle - creation, partial updates and field validation"""

import uuid
from dataclasses import fields
from typing import List

from paytrack.domain.exceptions import ValidationError
from paytrack.domain.models import BILLER_TYPES, CATEGORIES, UNSET, Biller, BillerDraft, BillerPatch


def _check_day(value: int | None, label: str, errors: List[str]) -> None:
    if value is not None and not 1 <= value <= 31:
        errors.append(f"{label} must be between 1 and 31")


def validate_biller(biller: Biller) -> None:
    """
    Check every field rule and report all violations at once.

    Raises:
        ValidationError: with one message per broken rule
    """
    errors: List[str] = []

    if not biller.name or not biller.name.strip():
        errors.append("Biller name is required")

    if biller.type not in BILLER_TYPES:
        errors.append("Biller type must be 'bill' or 'credit'")

    if biller.amount_cents is None:
        errors.append("Amount is required")
    elif biller.amount_cents < 0:
        errors.append("Amount cannot be negative")

    if biller.due_day is None:
        errors.append("Due date is required")
    else:
        _check_day(biller.due_day, "Due date", errors)

    _check_day(biller.cut_off_day, "Cut-off date", errors)

    # Credit cards need a statement cut-off; bills have none
    if biller.type == "credit" and not biller.cut_off_day:
        errors.append("Cut-off date is required for credit cards")
    elif biller.type == "bill" and biller.cut_off_day is not None:
        errors.append("Cut-off date only applies to credit cards")

    if biller.credit_limit_cents is not None and biller.credit_limit_cents < 0:
        errors.append("Credit limit cannot be negative")

    if not isinstance(biller.is_active, bool):
        errors.append("Active flag must be true or false")

    if biller.category not in CATEGORIES:
        errors.append(f"Category must be one of: {', '.join(CATEGORIES)}")

    if errors:
        raise ValidationError(errors)


def _clean_text(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


def create_biller(user_id: uuid.UUID, draft: BillerDraft) -> Biller:
    """Build a validated biller for a user"""
    biller = Biller(
        user_id=user_id,
        name=_clean_text(draft.name),
        type=draft.type,
        amount_cents=draft.amount_cents,
        due_day=draft.due_day,
        cut_off_day=draft.cut_off_day,
        credit_limit_cents=draft.credit_limit_cents,
        category=draft.category or "other",
        is_active=draft.is_active,
        notes=_clean_text(draft.notes),
    )
    validate_biller(biller)
    return biller


def apply_patch(biller: Biller, patch: BillerPatch) -> Biller:
    """
    Overwrite only the supplied fields, then re-validate the merged biller.

    A supplied None clears the field. Switching a card to a bill drops its
    cut-off day unless the patch sets one. The biller is modified in place
    and returned.
    """
    if patch.type == "bill" and patch.cut_off_day is UNSET:
        biller.cut_off_day = None

    for f in fields(patch):
        value = getattr(patch, f.name)
        if value is UNSET:
            continue
        if f.name in ("name", "notes"):
            value = _clean_text(value)
        setattr(biller, f.name, value)

    validate_biller(biller)
    return biller
