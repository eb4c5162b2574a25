"""
Authorization policy for user routes.

One declarative table maps each action to its rules; `authorize` is the single
evaluation point consulted once per request. The access guard's role check for
the list route is built from the same table.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from app.core.errors import Forbidden
from app.schemas.auth import Claim

LIST_USERS = "list_users"
GET_USER = "get_user"
UPDATE_USER = "update_user"
DELETE_USER = "delete_user"


@dataclass(frozen=True)
class Rule:
    """
    roles: roles allowed at all (empty = any authenticated role).
    owner_or_roles: when set, the caller must own the target record or hold one of these roles.
    field_roles: per-field role requirements for fields present in the request.
    """

    roles: frozenset[str] = frozenset()
    owner_or_roles: frozenset[str] | None = None
    owner_message: str = "Insufficient permissions"
    field_roles: dict[str, frozenset[str]] = field(default_factory=dict)
    field_messages: dict[str, str] = field(default_factory=dict)


POLICIES: dict[str, Rule] = {
    LIST_USERS: Rule(roles=frozenset({"admin"})),
    GET_USER: Rule(),
    UPDATE_USER: Rule(
        owner_or_roles=frozenset({"admin"}),
        owner_message="You can only update your own information",
        field_roles={"role": frozenset({"admin"})},
        field_messages={"role": "Only admin users can change user roles"},
    ),
    DELETE_USER: Rule(
        owner_or_roles=frozenset({"admin"}),
        owner_message="You can only delete your own account",
    ),
}


def authorize(
    action: str,
    claim: Claim,
    target_id: int | None = None,
    fields: Iterable[str] = (),
) -> None:
    """Raise Forbidden unless claim may perform action on target_id touching fields."""
    rule = POLICIES[action]

    if rule.roles and claim.role not in rule.roles:
        raise Forbidden("Insufficient permissions")

    if rule.owner_or_roles is not None:
        is_owner = target_id is not None and claim.id == target_id
        if not is_owner and claim.role not in rule.owner_or_roles:
            raise Forbidden(rule.owner_message)

    for name in fields:
        required = rule.field_roles.get(name)
        if required and claim.role not in required:
            raise Forbidden(
                rule.field_messages.get(name, "Insufficient permissions")
            )
