"""Role-based landing route as a priority-ordered decision table.

Rules are evaluated top to bottom; the first match wins. A rule's target
of None means "stay on the current path". The table replaces nested
redirect conditionals so it can be tested without rendering anything.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from cashrun.domain.types import UserRole

LOGIN = "/login"
PROFILE_ONBOARDING = "/onboarding/profile"
BANK_ONBOARDING = "/customer/onboarding/bank"

ROLE_HOMES: dict[UserRole, str] = {
    UserRole.ADMIN: "/admin/dashboard",
    UserRole.RUNNER: "/runner/work",
    UserRole.CUSTOMER: "/customer/home",
}

PUBLIC_PATHS: tuple[str, ...] = ("/login", "/signup", "/privacy", "/terms")
_ONBOARDING_PATHS = (PROFILE_ONBOARDING, BANK_ONBOARDING)


@dataclass(frozen=True)
class RouteContext:
    """Inputs to a routing decision."""

    role: UserRole | None
    profile_complete: bool
    current_path: str
    authenticated: bool = True

    @property
    def is_customer(self) -> bool:
        return self.role in (UserRole.CUSTOMER, None)

    @property
    def home(self) -> str:
        return ROLE_HOMES[self.role or UserRole.CUSTOMER]


@dataclass(frozen=True)
class RouteRule:
    name: str
    when: Callable[[RouteContext], bool]
    target: Callable[[RouteContext], str | None]


def _is_public(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in PUBLIC_PATHS)


ROUTE_TABLE: tuple[RouteRule, ...] = (
    RouteRule("public", lambda c: _is_public(c.current_path), lambda c: None),
    RouteRule("anonymous", lambda c: not c.authenticated, lambda c: LOGIN),
    RouteRule(
        "staff_off_onboarding",
        lambda c: not c.is_customer and c.current_path in _ONBOARDING_PATHS,
        lambda c: c.home,
    ),
    RouteRule(
        "customer_needs_profile",
        lambda c: c.is_customer
        and not c.profile_complete
        and c.current_path != PROFILE_ONBOARDING,
        lambda c: PROFILE_ONBOARDING,
    ),
    RouteRule(
        "profile_already_complete",
        lambda c: c.is_customer and c.profile_complete and c.current_path == PROFILE_ONBOARDING,
        lambda c: BANK_ONBOARDING,
    ),
    RouteRule("root", lambda c: c.current_path in ("", "/"), lambda c: c.home),
)


def resolve_route(
    role: UserRole | str | None,
    profile_complete: bool,
    current_path: str,
    *,
    authenticated: bool = True,
) -> str | None:
    """Return the path to redirect to, or None to stay on *current_path*.

    Unknown role strings are treated as customer, the least privileged role.
    """
    resolved: UserRole | None
    try:
        resolved = UserRole(role) if role is not None else None
    except ValueError:
        resolved = UserRole.CUSTOMER
    ctx = RouteContext(
        role=resolved,
        profile_complete=profile_complete,
        current_path=current_path,
        authenticated=authenticated,
    )
    for rule in ROUTE_TABLE:
        if rule.when(ctx):
            target = rule.target(ctx)
            return None if target == current_path else target
    return None


def matching_rule(ctx: RouteContext) -> str | None:
    """Name of the first rule matching *ctx* (for diagnostics)."""
    for rule in ROUTE_TABLE:
        if rule.when(ctx):
            return rule.name
    return None
