from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.controller import current_user
from ..container import Container
from ..core.enums import LeaveStatus, LeaveType, StatusAction
from .service import LeaveRecordService

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _service() -> LeaveRecordService:
        user = current_user()
        return container.leave_record_service(approver=user.name if user else None)

    def _flash_banners(svc: LeaveRecordService) -> None:
        if svc.success:
            flash(svc.success, "success")
        if svc.error:
            flash(svc.error, "danger")

    @app.route("/hr/leave-records", methods=["GET"], endpoint="leave_records")
    def leave_records():
        svc = _service()
        q = request.args.get("q", "").strip()
        status = request.args.get("status", "").strip()
        leave_type = request.args.get("leave_type", "").strip()

        if status or leave_type:
            svc.filter(status=status, leave_type=leave_type)
        else:
            svc.load_all()
        if q:
            # Digits fetch one record, text narrows what was just loaded
            svc.search(q)

        return render_template(
            "leaves/index.html",
            svc=svc,
            q=q,
            status=status,
            leave_type=leave_type,
            statuses=list(LeaveStatus),
            leave_types=list(LeaveType),
            active_page="leave_records",
        )

    @app.route("/hr/leave-records/new", methods=["GET", "POST"], endpoint="new_leave_record")
    def new_leave_record():
        svc = _service()
        svc.load_staff()
        form = request.form if request.method == "POST" else {}

        if request.method == "POST":
            try:
                if svc.create(request.form):
                    flash("New leave application submitted successfully", "success")
                    if svc.error:
                        # Saved, but the refetch failed
                        flash(svc.error, "danger")
                    return redirect(url_for("leave_records"))
                if svc.error:
                    flash(svc.error, "danger")
            except Exception:
                logger.exception("Unexpected error while creating a leave record")
                flash("System error while submitting leave application", "danger")

        return render_template(
            "leaves/form.html",
            svc=svc,
            form=form,
            leave_types=list(LeaveType),
            creating=True,
            active_page="leave_records",
        )

    @app.route("/hr/leave-records/<leave_id>/edit", methods=["GET", "POST"], endpoint="edit_leave_record")
    def edit_leave_record(leave_id: str):
        svc = _service()
        record = svc.find(leave_id)
        if record is None:
            flash(f'Leave "{leave_id}" not found', "danger")
            return redirect(url_for("leave_records"))

        form = record.edit_form()
        if request.method == "POST":
            form = request.form
            try:
                if svc.update(leave_id, request.form):
                    flash(svc.success or "Leave record updated successfully", "success")
                    return redirect(url_for("leave_records"))
                if svc.error:
                    flash(svc.error, "danger")
            except Exception:
                logger.exception("Unexpected error while updating leave %s", leave_id)
                flash("System error while updating leave record", "danger")

        return render_template(
            "leaves/form.html",
            svc=svc,
            form=form,
            record=record,
            leave_types=list(LeaveType),
            creating=False,
            active_page="leave_records",
        )

    @app.route(
        "/hr/leave-records/<leave_id>/<any(approve, reject, delete):action>",
        methods=["GET", "POST"],
        endpoint="decide_leave_record",
    )
    def decide_leave_record(leave_id: str, action: str):
        svc = _service()
        action = StatusAction(action)

        if request.method == "GET":
            pending = svc.ask(action, leave_id)
            return render_template(
                "confirm.html",
                pending=pending,
                cancel_url=url_for("leave_records"),
                active_page="leave_records",
            )

        if request.form.get("decision") != "confirm":
            return redirect(url_for("leave_records"))

        try:
            if action == StatusAction.DELETE:
                done = svc.remove(leave_id, confirmed=True)
            else:
                done = svc.set_status(leave_id, action, confirmed=True, reason=request.form.get("reason", ""))
            if not done and not svc.error:
                flash("Please provide a reason for rejection", "warning")
            _flash_banners(svc)
        except Exception:
            logger.exception("Unexpected error during %s of leave %s", action.value, leave_id)
            flash("System error while processing leave application", "danger")

        return redirect(url_for("leave_records"))
