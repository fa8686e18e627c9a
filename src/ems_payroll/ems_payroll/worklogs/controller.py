from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.interceptor import token_required
from ..common.datetime_utils import YearMonth, parse_iso_date
from ..common.serializers import monthly_summary_json, worklog_json
from ..common.validators import parse_int, parse_status
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE


def register(app: Flask, container: Container) -> None:
    authenticated = token_required(tokens=container.token_service, users=container.users_repo)
    service = container.worklog_service

    @app.route("/work-logs", methods=["GET"], endpoint="worklogs_mine")
    @authenticated
    def worklogs_mine(caller):
        entries = service.list_mine(
            caller=caller,
            page=parse_int(request.args.get("page"), "page", default=0),
            size=parse_int(request.args.get("size"), "size", default=DEFAULT_PAGE_SIZE),
        )
        return jsonify([worklog_json(e) for e in entries])

    @app.route("/work-logs", methods=["POST"], endpoint="worklogs_create")
    @authenticated
    def worklogs_create(caller):
        data = request.get_json(silent=True) or {}
        entry = service.create(
            caller=caller,
            work_date=parse_iso_date(data.get("date")),
            hours_worked=data.get("hoursWorked"),
            remarks=data.get("remarks"),
        )
        return jsonify(worklog_json(entry)), 201

    @app.route("/work-logs/<int:worklog_id>", methods=["GET"], endpoint="worklogs_get")
    @authenticated
    def worklogs_get(worklog_id: int, caller):
        return jsonify(worklog_json(service.get(caller=caller, worklog_id=worklog_id)))

    @app.route("/work-logs/<int:worklog_id>", methods=["PUT"], endpoint="worklogs_update")
    @authenticated
    def worklogs_update(worklog_id: int, caller):
        data = request.get_json(silent=True) or {}
        entry = service.update_content(
            caller=caller,
            worklog_id=worklog_id,
            hours_worked=data.get("hoursWorked"),
            remarks=data.get("remarks"),
        )
        return jsonify(worklog_json(entry))

    @app.route("/work-logs/<int:worklog_id>", methods=["DELETE"], endpoint="worklogs_delete")
    @authenticated
    def worklogs_delete(worklog_id: int, caller):
        service.delete(caller=caller, worklog_id=worklog_id)
        return jsonify({"message": "Work log deleted successfully"})

    @app.route("/work-logs/<int:worklog_id>/status", methods=["PUT"], endpoint="worklogs_status")
    @authenticated
    def worklogs_status(worklog_id: int, caller):
        entry = service.transition_status(
            caller=caller,
            worklog_id=worklog_id,
            new_status=parse_status(request.args.get("status")),
        )
        return jsonify(worklog_json(entry))

    @app.route("/work-logs/all", methods=["GET"], endpoint="worklogs_all")
    @authenticated
    def worklogs_all(caller):
        raw_status = request.args.get("status")
        entries = service.list_all(
            caller=caller,
            status=parse_status(raw_status) if raw_status else None,
            page=parse_int(request.args.get("page"), "page", default=0),
            size=parse_int(request.args.get("size"), "size", default=DEFAULT_PAGE_SIZE),
        )
        return jsonify([worklog_json(e) for e in entries])

    @app.route("/work-logs/date-range", methods=["GET"], endpoint="worklogs_date_range")
    @authenticated
    def worklogs_date_range(caller):
        entries = service.list_between(
            caller=caller,
            start=parse_iso_date(request.args.get("startDate"), "startDate"),
            end=parse_iso_date(request.args.get("endDate"), "endDate"),
            user_id=parse_int(request.args.get("userId"), "userId"),
        )
        return jsonify([worklog_json(e) for e in entries])

    @app.route("/work-logs/monthly-summary", methods=["GET"], endpoint="worklogs_monthly_summary")
    @authenticated
    def worklogs_monthly_summary(caller):
        raw = request.args.get("yearMonth")
        summary = service.monthly_summary(
            caller=caller,
            year_month=YearMonth.parse(raw) if raw else YearMonth.current(),
            user_id=parse_int(request.args.get("userId"), "userId"),
        )
        return jsonify(monthly_summary_json(summary))
