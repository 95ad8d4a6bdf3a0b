"""Review state machines for skills, documents and performance evaluations.

Every function is pure: (current state, action) -> new state. The machines
are permissive, any current state accepts every action defined for the
entity, so a re-review simply overwrites the previous outcome. Asking for an
action the entity does not define raises ValidationError.
"""

from __future__ import annotations

from typing import Mapping, NamedTuple, Union

from ..common.validators import parse_enum
from ..core.enums import DocumentStatus, EvaluationStatus, ReviewAction
from ..core.exceptions import ValidationError

ActionLike = Union[ReviewAction, str]


class DocumentState(NamedTuple):
    status: DocumentStatus
    verified: bool


SKILL_ACTIONS: Mapping[ReviewAction, bool] = {
    ReviewAction.VERIFY: True,
}

DOCUMENT_ACTIONS: Mapping[ReviewAction, DocumentState] = {
    ReviewAction.VERIFY: DocumentState(DocumentStatus.VERIFIED, True),
    ReviewAction.REJECT: DocumentState(DocumentStatus.REJECTED, False),
}

PERFORMANCE_ACTIONS: Mapping[ReviewAction, EvaluationStatus] = {
    ReviewAction.APPROVE: EvaluationStatus.APPROVED,
    ReviewAction.REJECT: EvaluationStatus.REJECTED,
}


def _resolve(table: Mapping, action: ActionLike, entity: str):
    act = parse_enum(ReviewAction, action, "action")
    if act not in table:
        allowed = ", ".join(a.value for a in table)
        raise ValidationError(f"Action {act.value} is not supported for {entity}. Allowed: {allowed}")
    return table[act]


def next_skill_verified(current: bool, action: ActionLike) -> bool:
    """Skills only move forward to verified; there is no reject."""
    return _resolve(SKILL_ACTIONS, action, "skill")


def next_document_state(current: DocumentState, action: ActionLike) -> DocumentState:
    return _resolve(DOCUMENT_ACTIONS, action, "document")


def next_performance_status(current: EvaluationStatus, action: ActionLike) -> EvaluationStatus:
    return _resolve(PERFORMANCE_ACTIONS, action, "performance")
