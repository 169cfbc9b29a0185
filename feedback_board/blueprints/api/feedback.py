from flask import current_app, jsonify, request

from feedback_board.services import feedback as feedback_service
from feedback_board.services.policy import admin_required
from . import bp


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _log(event: str, **fields):
    # ids only; emails and free text stay out of the logs
    current_app.logger.info(event, extra={"event": event, **fields})


@bp.get("/feedback")
def feedback_index():
    """All feedback with upvote/comment counts; ?sortBy=upvotes|newest."""
    sort_by = (request.args.get("sortBy") or feedback_service.SORT_UPVOTES).strip().lower()
    return jsonify(feedback_service.list_feedback(sort_by)), 200


@bp.post("/feedback")
def feedback_create():
    item = feedback_service.create_feedback(_payload())
    _log("feedback_created", feedback_id=item["id"])
    return jsonify(item), 201


@bp.put("/feedback/<int:feedback_id>")
@admin_required
def feedback_update(feedback_id: int):
    data = _payload()
    item = feedback_service.update_feedback(feedback_id, data)
    _log("feedback_updated", feedback_id=feedback_id, fields=sorted(k for k in data if k in item))
    return jsonify(item), 200


@bp.delete("/feedback/<int:feedback_id>")
@admin_required
def feedback_delete(feedback_id: int):
    feedback_service.delete_feedback(feedback_id)
    _log("feedback_deleted", feedback_id=feedback_id)
    return jsonify(ok=True), 200


@bp.post("/feedback/<int:feedback_id>/upvote")
def feedback_upvote(feedback_id: int):
    total = feedback_service.upvote_feedback(feedback_id, _payload())
    _log("feedback_upvoted", feedback_id=feedback_id, upvote_count=total)
    return jsonify(message="Upvoted successfully", upvote_count=total), 200


@bp.post("/feedback/<int:feedback_id>/comments")
def comments_create(feedback_id: int):
    comment = feedback_service.add_comment(feedback_id, _payload())
    _log("comment_created", feedback_id=feedback_id, comment_id=comment["id"])
    return jsonify(comment), 201


@bp.get("/feedback/<int:feedback_id>/comments")
def comments_index(feedback_id: int):
    return jsonify(feedback_service.list_comments(feedback_id)), 200
