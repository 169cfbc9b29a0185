from flask import jsonify

from feedback_board.services.policy import admin_required
from . import bp


@bp.get("/admin/verify")
@admin_required
def admin_verify():
    """Lets the client check a token before it is used on edits and deletes."""
    return jsonify(ok=True), 200
