from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.interceptor import token_required
from ..common.datetime_utils import YearMonth
from ..common.serializers import payroll_record_json, payroll_summary_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    authenticated = token_required(tokens=container.token_service, users=container.users_repo)
    service = container.payroll_service

    def _month_arg(name: str) -> YearMonth:
        raw = request.args.get(name)
        return YearMonth.parse(raw, name) if raw else YearMonth.current()

    @app.route("/payroll/calculate/<int:user_id>", methods=["GET"], endpoint="payroll_calculate")
    @authenticated
    def payroll_calculate(user_id: int, caller):
        record = service.calculate_for_user(caller=caller, user_id=user_id, period=_month_arg("yearMonth"))
        return jsonify(payroll_record_json(record))

    @app.route("/payroll/my-payroll", methods=["GET"], endpoint="payroll_mine")
    @authenticated
    def payroll_mine(caller):
        record = service.calculate_for_user(caller=caller, user_id=caller.user_id, period=_month_arg("yearMonth"))
        return jsonify(payroll_record_json(record))

    @app.route("/payroll/report", methods=["GET"], endpoint="payroll_report")
    @authenticated
    def payroll_report(caller):
        records = service.generate_report(caller=caller, period=_month_arg("yearMonth"))
        return jsonify([payroll_record_json(r) for r in records])

    @app.route("/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @authenticated
    def payroll_summary(caller):
        summary = service.summarize(
            caller=caller,
            start=YearMonth.parse(request.args.get("startMonth"), "startMonth"),
            end=YearMonth.parse(request.args.get("endMonth"), "endMonth"),
        )
        return jsonify(payroll_summary_json(summary))
