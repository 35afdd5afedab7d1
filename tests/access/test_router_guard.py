from __future__ import annotations

import pytest

from hr_portal.access.guard import GuardDecision, Router, RouterState
from hr_portal.access.policy import ROUTE_PERMISSIONS
from hr_portal.core.enums import Role
from hr_portal.session.model import Session, SessionUser
from hr_portal.session.storage import InMemoryStorage
from hr_portal.session.store import SessionStore, logged_out


class CountingStore(SessionStore):
    def __init__(self, storage):
        super().__init__(storage)
        self.loads = 0

    def load(self):
        self.loads += 1
        return super().load()


def _signed_in(role: Role) -> SessionStore:
    store = SessionStore(InMemoryStorage())
    store.save(Session(token="tok", user=SessionUser(id=1, name="Lan", role=role)))
    return store


@pytest.fixture
def router_for():
    routers = []

    def make(store):
        router = Router(store)
        routers.append(router)
        return router

    yield make
    for router in routers:
        router.stop()


def test_router_starts_loading_then_settles(router_for):
    router = router_for(SessionStore(InMemoryStorage()))
    assert router.state == RouterState.LOADING

    assert router.start() == RouterState.UNAUTHENTICATED
    assert router.default_route() == "/login"


def test_signed_in_router_is_authenticated(router_for):
    router = router_for(_signed_in(Role.HR))
    assert router.start() == RouterState.AUTHENTICATED
    assert router.default_route() == "/dashboard"


def test_guard_without_session_redirects_to_login(router_for):
    router = router_for(SessionStore(InMemoryStorage()))
    router.start()

    assert router.guard("/hr/leave-records") == GuardDecision.redirect("/login")


@pytest.mark.parametrize("role", list(Role))
@pytest.mark.parametrize("entry", ROUTE_PERMISSIONS, ids=lambda e: e.path)
def test_guard_matches_route_table(router_for, role, entry):
    router = router_for(_signed_in(role))
    router.start()

    decision = router.guard(entry.path)

    if role in entry.allowed_roles:
        assert decision.allowed
    else:
        assert decision == GuardDecision.redirect("/unauthorized")


def test_employee_is_sent_to_unauthorized_for_hr_screens(router_for):
    router = router_for(_signed_in(Role.EMPLOYEE))
    router.start()

    assert router.resolve("/hr/leave-records") == GuardDecision.redirect("/unauthorized")
    assert router.resolve("/staff").allowed


def test_unknown_path_goes_to_default_route(router_for):
    anonymous = router_for(SessionStore(InMemoryStorage()))
    anonymous.start()
    assert anonymous.resolve("/payroll") == GuardDecision.redirect("/login")

    signed_in = router_for(_signed_in(Role.MANAGER))
    signed_in.start()
    assert signed_in.resolve("/payroll") == GuardDecision.redirect("/dashboard")


def test_login_page_redirects_when_already_signed_in(router_for):
    router = router_for(_signed_in(Role.HR))
    router.start()
    assert router.resolve("/login") == GuardDecision.redirect("/dashboard")

    anonymous = router_for(SessionStore(InMemoryStorage()))
    anonymous.start()
    assert anonymous.resolve("/login").allowed


def test_resolve_consults_store_when_still_loading(router_for):
    router = router_for(_signed_in(Role.ADMIN))
    assert router.resolve("/hr").allowed
    assert router.state == RouterState.AUTHENTICATED


def test_login_broadcast_reloads_once_per_router(router_for):
    store = CountingStore(InMemoryStorage())
    router = router_for(store)
    router.start()
    router.start()
    assert router.state == RouterState.UNAUTHENTICATED
    loads_before = store.loads

    store.save(Session(token="tok", user=SessionUser(id=3, name="Binh", role=Role.HR)))
    store.notify_login()

    assert store.loads == loads_before + 1
    assert router.state == RouterState.AUTHENTICATED
    assert router.session.user.name == "Binh"


def test_login_broadcast_from_other_store_is_ignored(router_for):
    router = router_for(SessionStore(InMemoryStorage()))
    router.start()

    other = _signed_in(Role.HR)
    other.notify_login()

    assert router.state == RouterState.UNAUTHENTICATED


def test_stopped_router_ignores_broadcasts(router_for):
    store = SessionStore(InMemoryStorage())
    router = router_for(store)
    router.start()
    router.stop()

    store.save(Session(token="tok", user=SessionUser(id=3, name="Binh", role=Role.HR)))
    store.notify_login()

    assert router.state == RouterState.UNAUTHENTICATED


def test_logout_clears_store_and_broadcasts(router_for):
    store = _signed_in(Role.HR)
    router = router_for(store)
    router.start()
    seen = []

    def on_logout(sender, **extra):
        seen.append(sender)

    logged_out.connect(on_logout, sender=store)
    try:
        router.logout()
    finally:
        logged_out.disconnect(on_logout, sender=store)

    assert router.state == RouterState.UNAUTHENTICATED
    assert store.load() is None
    assert seen == [store]
    assert router.guard("/hr") == GuardDecision.redirect("/login")
