from types import SimpleNamespace

import pytest

from models.profile import AppRole
from utils.navigation import (
    SessionContext, GateOutcome, resolve_gate, enforce_gate, ViewRedirect, ViewPending,
)


def _session(role=None, loading=False, with_user=True):
    user = SimpleNamespace(id=1) if with_user else None
    profile = SimpleNamespace(role=role) if role else None
    return SessionContext(user=user, profile=profile, loading=loading)


def test_loading_waits():
    assert resolve_gate(_session(loading=True), AppRole.IMPORTER).outcome == GateOutcome.WAIT


def test_no_user_goes_to_login():
    decision = resolve_gate(SessionContext(), AppRole.IMPORTER)
    assert decision.outcome == GateOutcome.LOGIN
    assert decision.location == "/login"


def test_user_without_profile_waits():
    assert resolve_gate(_session(role=None), AppRole.EXPORTER).outcome == GateOutcome.WAIT


def test_exporter_on_importer_view_goes_home():
    decision = resolve_gate(_session(AppRole.EXPORTER), AppRole.IMPORTER)
    assert decision.outcome == GateOutcome.REDIRECT
    assert decision.location == "/exporter/dashboard"


def test_importer_on_exporter_view_goes_home():
    decision = resolve_gate(_session("importer"), AppRole.EXPORTER)
    assert decision.location == "/importer/dashboard"


def test_matching_role_allowed():
    assert resolve_gate(_session(AppRole.IMPORTER), AppRole.IMPORTER).outcome == GateOutcome.ALLOW


def test_enforce_raises_for_redirect_and_wait():
    with pytest.raises(ViewRedirect) as exc:
        enforce_gate(_session(AppRole.EXPORTER), AppRole.IMPORTER)
    assert exc.value.location == "/exporter/dashboard"

    with pytest.raises(ViewPending):
        enforce_gate(_session(loading=True), AppRole.IMPORTER)
