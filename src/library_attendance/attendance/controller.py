from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_timestamp, now_local, parse_iso_date
from ..container import Container
from ..core.exceptions import MemberNotFoundError, StorageError, ValidationError
from .decoder import decode_member_code
from .export import write_history_csv
from .model import AttendanceEvent, HistoryStats, ScanResult

logger = logging.getLogger(__name__)


def event_view(e: AttendanceEvent) -> dict:
    return {
        "id": e.event_id,
        "member_id": e.member_id,
        "member_name": e.member_name,
        "timestamp": format_timestamp(e.timestamp),
        "type": e.kind.value,
    }


def stats_view(s: HistoryStats) -> dict:
    return {"check_ins": s.check_ins, "check_outs": s.check_outs, "unique_members": s.unique_members}


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _parse_date(value: Optional[str]) -> Optional[date]:
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")

    def _scan(code: str):
        try:
            result: ScanResult = container.attendance_service.scan(code)
        except MemberNotFoundError as e:
            return _fail(str(e), 404)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Scan failed for code %r", code)
            return _fail("System error while recording attendance", 500)

        return jsonify(
            {
                "success": True,
                "action": result.event.kind.value,
                "message": f"Welcome, {result.member.name}!",
                "member": {
                    "id": result.member.member_id,
                    "name": result.member.name,
                    "membership_type": result.member.membership_type.value,
                },
                "event": event_view(result.event),
            }
        )

    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Scan endpoint fed by the external barcode/QR reader."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _fail("Request body must be a JSON object with a code", 400)
        code = data.get("code")
        if code is not None and not isinstance(code, str):
            return _fail("Scanned code must be a string", 400)
        code = (code or "").strip()
        if not code:
            return _fail("Scanned code must not be empty", 400)
        return _scan(code)

    @app.route("/api/scan/image", methods=["POST"], endpoint="api_scan_image")
    def api_scan_image():
        """Accept an uploaded image, decode the barcode, then scan it."""
        if "image" not in request.files:
            return _fail("Missing image file", 400)

        try:
            code = decode_member_code(request.files["image"].stream)
        except ValidationError as e:
            return _fail(str(e), 400)
        return _scan(code)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        try:
            view = container.attendance_service.today()
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Loading today's attendance failed")
            return _fail("System error while loading attendance", 500)

        return jsonify(
            {
                "success": True,
                "date": view.work_date.isoformat(),
                "stats": {
                    "check_ins": view.stats.check_ins,
                    "check_outs": view.stats.check_outs,
                    "currently_in": view.stats.currently_in,
                },
                "recent": [event_view(e) for e in view.recent],
            }
        )

    def _filtered_history():
        return container.attendance_service.history(
            search=request.args.get("q"),
            kind=request.args.get("type"),
            on_date=_parse_date(request.args.get("date")),
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        try:
            events = _filtered_history()
        except ValidationError as e:
            return _fail(str(e), 400)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Loading attendance history failed")
            return _fail("System error while loading attendance", 500)

        return jsonify(
            {
                "success": True,
                "count": len(events),
                "stats": stats_view(container.attendance_service.history_stats(events)),
                "records": [event_view(e) for e in events],
            }
        )

    @app.route("/api/attendance.csv", methods=["GET"], endpoint="attendance_history_csv")
    def attendance_history_csv():
        try:
            events = _filtered_history()
            text = write_history_csv(
                events,
                date_format=app.config["CSV_DATE_FORMAT"],
                time_format=app.config["CSV_TIME_FORMAT"],
            )
        except ValidationError as e:
            return _fail(str(e), 400)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Loading attendance history failed")
            return _fail("System error while loading attendance", 500)

        filename = f"attendance_history_{now_local().strftime('%Y%m%d')}.csv"
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
