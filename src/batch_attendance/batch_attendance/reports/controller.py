from __future__ import annotations

import re

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/attendance/date/summary", methods=["GET"], endpoint="attendance_day_summary")
    def day_summary():
        summary = reports.summarize_day(batch_id=request.args.get("batchId"), date=request.args.get("date"))
        return jsonify(summary.to_dict())

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_dates_summary")
    def dates_summary():
        raw = request.args.get("dates") or ""
        dates = [d.strip() for d in raw.split(",") if d.strip()]
        if not dates:
            raise ValidationError("dates is required (comma-separated YYYY-MM-DD)")
        summaries = reports.summarize_dates(batch_id=request.args.get("batchId"), dates=dates)
        return jsonify([s.to_dict() for s in summaries])

    @app.route("/api/attendance/range", methods=["GET"], endpoint="attendance_range_summary")
    def range_summary():
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        if not start_s or not end_s:
            raise ValidationError("Start date and end date are required")
        summaries = reports.summarize_range(batch_id=request.args.get("batchId"), start=start_s, end=end_s)
        return jsonify([s.to_dict() for s in summaries])

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def stats():
        rows = reports.batch_student_stats(
            batch_id=request.args.get("batchId"),
            start=request.args.get("startDate"),
            end=request.args.get("endDate"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendance/export", methods=["GET"], endpoint="attendance_export")
    def export():
        batch_id = request.args.get("batchId")
        if not batch_id:
            raise ValidationError("batchId is required")
        fmt = (request.args.get("format") or "csv").lower()
        if fmt not in {"csv", "xlsx"}:
            raise ValidationError("format must be csv or xlsx")

        report = reports.export_batch(
            batch_id=batch_id,
            start=request.args.get("startDate"),
            end=request.args.get("endDate"),
        )
        safe_name = re.sub(r"[^A-Za-z0-9_.-]+", "_", batch_id.strip().upper())
        filename = f"{safe_name}_attendance.{fmt}"
        if fmt == "xlsx":
            body = report.to_xlsx()
            mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        else:
            body = report.to_csv()
            mimetype = "text/csv"
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
