# utils/navigation.py
"""Role gate for the importer and exporter views.

A request carries a ``SessionContext`` (user, profile, loading) built from its
bearer token. ``resolve_gate`` turns that context plus the role a view
requires into one of four outcomes:

* ``WAIT``     - the session is still resolving, or the user has no profile yet
* ``LOGIN``    - no authenticated user, go to the login view
* ``REDIRECT`` - wrong role, go to the home view of the role the user has
* ``ALLOW``    - render the view

The function is pure; turning an outcome into an HTTP response is the job of
the exception handlers registered in ``main.py``.
"""
import enum
from dataclasses import dataclass
from typing import Any, Optional

from models.profile import AppRole

LOGIN_VIEW = "/login"

HOME_VIEWS = {
    AppRole.IMPORTER: "/importer/dashboard",
    AppRole.EXPORTER: "/exporter/dashboard",
}


class GateOutcome(str, enum.Enum):
    WAIT = "wait"
    LOGIN = "login"
    REDIRECT = "redirect"
    ALLOW = "allow"


@dataclass(frozen=True)
class SessionContext:
    user: Optional[Any] = None
    profile: Optional[Any] = None
    loading: bool = False


@dataclass(frozen=True)
class GateDecision:
    outcome: GateOutcome
    location: Optional[str] = None


class ViewRedirect(Exception):
    """Raised by route dependencies when the caller must be sent elsewhere."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


class ViewPending(Exception):
    """Raised while the session has not resolved to a profile."""


def home_view_for(role) -> str:
    return HOME_VIEWS[AppRole(role)]


def resolve_gate(session: SessionContext, required_role=None) -> GateDecision:
    if session.loading:
        return GateDecision(GateOutcome.WAIT)
    if session.user is None:
        return GateDecision(GateOutcome.LOGIN, LOGIN_VIEW)
    if session.profile is None:
        return GateDecision(GateOutcome.WAIT)

    if required_role is not None and AppRole(session.profile.role) != AppRole(required_role):
        return GateDecision(GateOutcome.REDIRECT, home_view_for(session.profile.role))
    return GateDecision(GateOutcome.ALLOW)


def enforce_gate(session: SessionContext, required_role=None) -> SessionContext:
    decision = resolve_gate(session, required_role)
    if decision.outcome == GateOutcome.WAIT:
        raise ViewPending()
    if decision.outcome in (GateOutcome.LOGIN, GateOutcome.REDIRECT):
        raise ViewRedirect(decision.location)
    return session
