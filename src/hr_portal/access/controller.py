from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import DomainError
from ..session.storage import FlaskSessionStorage
from ..session.store import SessionStore
from .guard import Router
from .policy import ACCESS_POLICY, ROUTE_PERMISSIONS, landing_path

logger = logging.getLogger(__name__)

NAV_LABELS = {
    "/dashboard": "Dashboard",
    "/hr": "HR Home",
    "/hr/leave-records": "Leave Records",
    "/hr/leave-requests": "Leave Requests",
    "/staff": "Staff Home",
}


def current_user():
    router = g.get("router")
    if router is None or router.session is None:
        return None
    return router.session.user


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def guard_navigation():
        if request.endpoint == "static":
            return None

        store = SessionStore(FlaskSessionStorage())
        router = Router(store)
        router.start()
        g.session_store = store
        g.router = router

        decision = router.resolve(request.path)
        if not decision.allowed:
            return redirect(decision.location)
        return None

    @app.teardown_request
    def release_router(exc=None):
        router = g.pop("router", None)
        if router is not None:
            router.stop()

    @app.context_processor
    def inject_navigation():
        user = current_user()
        links = []
        if user is not None:
            links = [
                (NAV_LABELS.get(entry.path, entry.path), entry.path)
                for entry in ROUTE_PERMISSIONS
                if user.role in ACCESS_POLICY.permitted_roles(entry.path)
            ]
        return {"current_user": user, "nav_links": links, "banner_seconds": container.success_banner_seconds}

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        store: SessionStore = g.session_store
        staff_id = store.remembered_staff_id() or ""

        if request.method == "POST":
            staff_id = request.form.get("staff_id", "")
            password = request.form.get("password", "")
            remember = bool(request.form.get("remember_me"))

            try:
                s = container.auth_service.login(store, staff_id=staff_id, password=password, remember=remember)

                session.permanent = remember

                flash("Login successful!", "success")
                return redirect(landing_path(s.user.role))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Unexpected error during login")
                flash("System error during login", "danger")

        return render_template("login.html", staff_id=staff_id, remember=bool(store.remembered_staff_id()))

    @app.route("/logout", endpoint="logout")
    def logout():
        g.router.logout()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/unauthorized", endpoint="unauthorized")
    def unauthorized():
        return render_template("unauthorized.html"), 403

    @app.route("/dashboard", endpoint="dashboard")
    def dashboard():
        return render_template("dashboard.html", title="Dashboard")

    @app.route("/hr", endpoint="hr_home")
    def hr_home():
        return render_template("dashboard.html", title="HR Home")

    @app.route("/staff", endpoint="staff_home")
    def staff_home():
        return render_template("dashboard.html", title="Staff Home")

    @app.route("/", defaults={"unknown": ""}, endpoint="fallback")
    @app.route("/<path:unknown>", endpoint="fallback")
    def fallback(unknown: str):
        return redirect(g.router.default_route())
