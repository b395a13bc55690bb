from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import Session
from ..core.exceptions import ValidationError
from .model import Submission


def _parse_submissions(raw) -> list[Submission]:
    if not isinstance(raw, list):
        raise ValidationError("Invalid attendance data")

    out: list[Submission] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Invalid attendance data")
        out.append(
            Submission(
                regno=str(item.get("regno") or ""),
                status=str(item.get("status") or ""),
                student_id=item.get("studentId"),
                student_name=str(item.get("studentname") or ""),
                reason=item.get("reason"),
            )
        )
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def mark():
        """Mark one session for a batch.

        Body: {batchId, session: FN|AN, date?: YYYY-MM-DD, markedBy,
        attendanceData: [{studentId, regno, studentname, status, reason?}]}
        """
        data = request.get_json(silent=True) or {}
        result = container.attendance_service.mark_attendance(
            batch_id=str(data.get("batchId") or ""),
            date=data.get("date"),
            session=str(data.get("session") or ""),
            submissions=_parse_submissions(data.get("attendanceData")),
            marked_by=str(data.get("markedBy") or ""),
        )
        return jsonify({"message": "Attendance marked successfully", **result.to_dict()}), 200

    @app.route("/api/attendance/date", methods=["GET"], endpoint="attendance_by_date")
    def by_date():
        grouped = container.attendance_service.get_day_records(
            batch_id=request.args.get("batchId"),
            date=request.args.get("date"),
        )
        return jsonify({s.value: [r.to_dict() for r in grouped[s]] for s in (Session.FN, Session.AN)})

    @app.route("/api/attendance/date/session", methods=["GET"], endpoint="attendance_by_date_session")
    def by_date_session():
        batch_id = request.args.get("batchId")
        if not batch_id:
            raise ValidationError("batchId is required")
        record = container.attendance_service.get_session_record(
            batch_id=batch_id,
            date=request.args.get("date"),
            session=request.args.get("session") or "",
        )
        return jsonify(record.to_dict() if record else None)

    @app.route("/api/attendance/students", methods=["GET"], endpoint="attendance_students")
    def students():
        batch_id = (request.args.get("batchId") or "").strip().upper()
        if not batch_id:
            raise ValidationError("batchId is required")
        return jsonify([s.to_dict() for s in container.student_directory.list_students(batch_id)])
