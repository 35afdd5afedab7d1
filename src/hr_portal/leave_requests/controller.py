from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.controller import current_user
from ..container import Container
from ..core.enums import RequestStatus, StatusAction, Urgency

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _service():
        user = current_user()
        return container.leave_request_service(approver=user.name if user else None)

    @app.route("/hr/leave-requests", methods=["GET"], endpoint="leave_requests")
    def leave_requests():
        svc = _service()
        q = request.args.get("q", "").strip()
        svc.load(status=request.args.get("status"), urgency=request.args.get("urgency"))
        if q:
            svc.search(q)

        return render_template(
            "leave_requests/index.html",
            svc=svc,
            q=q,
            statuses=list(RequestStatus),
            urgencies=list(Urgency),
            active_page="leave_requests",
        )

    @app.route(
        "/hr/leave-requests/<request_id>/<any(approve, reject):action>",
        methods=["GET", "POST"],
        endpoint="decide_leave_request",
    )
    def decide_leave_request(request_id: str, action: str):
        svc = _service()

        if request.method == "GET":
            pending = svc.ask(action, request_id)
            return render_template(
                "confirm.html",
                pending=pending,
                cancel_url=url_for("leave_requests"),
                active_page="leave_requests",
            )

        if request.form.get("decision") != "confirm":
            return redirect(url_for("leave_requests"))

        try:
            svc.set_status(
                request_id,
                StatusAction(action),
                confirmed=True,
                comment=request.form.get("reason", ""),
            )
            if svc.success:
                flash(svc.success, "success")
            if svc.error:
                flash(svc.error, "danger")
        except Exception:
            logger.exception("Unexpected error during %s of leave request %s", action, request_id)
            flash("System error while processing leave request", "danger")

        return redirect(url_for("leave_requests"))
