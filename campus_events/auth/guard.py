"""Role and ownership checks for every mutating action.

Each policy is a pure function of ``(principal, resource)``. Callers go through
``authorize`` so that a denied check always surfaces as ``ForbiddenError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from campus_events.domain.errors import ForbiddenError
from campus_events.domain.values import Principal


class Action(str, Enum):
    CREATE_UNIVERSITY = "create_university"
    CREATE_RSO = "create_rso"
    CREATE_EVENT = "create_event"
    APPROVE_EVENT = "approve_event"
    VIEW_PENDING_EVENTS = "view_pending_events"
    EDIT_COMMENT = "edit_comment"
    DELETE_COMMENT = "delete_comment"


@dataclass(frozen=True)
class CommentOwnership:
    """Who wrote a comment and who created the event it is attached to."""

    author_id: int
    event_creator_id: int | None


def _super_admin_only(principal: Principal, resource: Any) -> bool:
    return principal.is_super_admin


def _admins_only(principal: Principal, resource: Any) -> bool:
    return principal.is_admin


def _comment_author(principal: Principal, resource: CommentOwnership) -> bool:
    return resource.author_id == principal.user_id


def _comment_moderator(principal: Principal, resource: CommentOwnership) -> bool:
    return (
        resource.author_id == principal.user_id
        or principal.is_admin
        or resource.event_creator_id == principal.user_id
    )


_POLICIES: dict[Action, tuple[Callable[[Principal, Any], bool], str]] = {
    Action.CREATE_UNIVERSITY: (_super_admin_only, 'Unauthorized. Super Admin access required'),
    Action.CREATE_RSO: (_admins_only, 'Only admins can create RSOs'),
    Action.CREATE_EVENT: (_admins_only, 'Only administrators can create events'),
    Action.APPROVE_EVENT: (_super_admin_only, 'Only super admins can approve events'),
    Action.VIEW_PENDING_EVENTS: (_super_admin_only, 'Only super admins can view pending events'),
    Action.EDIT_COMMENT: (_comment_author, 'Not authorized to edit this comment'),
    Action.DELETE_COMMENT: (_comment_moderator, 'Not authorized to delete this comment'),
}


def is_allowed(principal: Principal, action: Action, resource: Any = None) -> bool:
    policy, _ = _POLICIES[action]
    return policy(principal, resource)


def authorize(principal: Principal, action: Action, resource: Any = None) -> None:
    policy, message = _POLICIES[action]
    if not policy(principal, resource):
        raise ForbiddenError(message)
