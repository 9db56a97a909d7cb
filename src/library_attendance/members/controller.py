from __future__ import annotations

import logging

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import format_timestamp
from ..container import Container
from ..core.exceptions import MemberNotFoundError, StorageError, ValidationError
from .barcode import render_member_qr
from .model import Member

logger = logging.getLogger(__name__)


def member_view(m: Member) -> dict:
    return {
        "id": m.member_id,
        "name": m.name,
        "email": m.email,
        "membership_type": m.membership_type.value,
        "registered_at": format_timestamp(m.registered_at),
    }


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        try:
            members = container.member_service.list_members(search=request.args.get("q"))
            stats = container.member_service.stats()
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Listing members failed")
            return _fail("System error while listing members", 500)

        return jsonify(
            {
                "success": True,
                "members": [member_view(m) for m in members],
                "stats": {"total": stats.total, "by_type": stats.by_type},
            }
        )

    @app.route("/api/members", methods=["POST"], endpoint="register_member")
    def register_member():
        data = request.get_json(silent=True)
        if data is None:
            data = request.form
        if not isinstance(data, dict):
            return _fail("Request body must be a JSON object", 400)
        try:
            member = container.member_service.register(
                name=data.get("name"),
                email=data.get("email"),
                membership_type=data.get("membership_type") or data.get("membershipType"),
            )
        except ValidationError as e:
            return _fail(str(e), 400)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Member registration failed")
            return _fail("System error while registering member", 500)

        return jsonify({"success": True, "message": "Member registered successfully!", "member": member_view(member)}), 201

    @app.route("/api/members/<member_id>", methods=["GET"], endpoint="member_detail")
    def member_detail(member_id: str):
        try:
            member = container.member_service.get_member(member_id)
            summary = container.member_service.attendance_summary(member_id)
        except MemberNotFoundError as e:
            return _fail(str(e), 404)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Loading member %s failed", member_id)
            return _fail("System error while loading member", 500)

        return jsonify(
            {
                "success": True,
                "member": member_view(member),
                "attendance": {
                    "check_ins": summary.check_ins,
                    "check_outs": summary.check_outs,
                    "last_visit": format_timestamp(summary.last_visit) if summary.last_visit else None,
                },
            }
        )

    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(member_id: str):
        try:
            container.member_service.delete_member(member_id)
        except MemberNotFoundError as e:
            return _fail(str(e), 404)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Member deletion failed for %s", member_id)
            return _fail("System error while deleting member", 500)

        return jsonify({"success": True, "message": "Member deleted successfully"})

    @app.route("/api/members/<member_id>/barcode.png", methods=["GET"], endpoint="member_barcode")
    def member_barcode(member_id: str):
        """QR image of the member id, printed on the member card."""
        try:
            member = container.member_service.get_member(member_id)
            image = render_member_qr(member.member_id)
        except MemberNotFoundError as e:
            return _fail(str(e), 404)
        except StorageError as e:
            return _fail(str(e), 503)
        except Exception:
            logger.exception("Rendering barcode for %s failed", member_id)
            return _fail("System error while rendering barcode", 500)

        return send_file(image, mimetype="image/png")
