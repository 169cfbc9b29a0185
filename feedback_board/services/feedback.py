"""
Feedback board operations.

Every function runs against ``db.session`` inside the current app context and
either returns plain dicts ready for ``jsonify`` or raises one of the typed
errors from ``feedback_board.errors``. Routes and CLI commands share them.
"""
from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from feedback_board.errors import Conflict, NotFound, StorageFailure, ValidationError
from feedback_board.extensions import db
from feedback_board.models import Comment, Feedback, Upvote, STATUS_CHOICES, STATUS_OPEN
from feedback_board.utils.validators import clean_str, is_valid_email, normalize_email

SORT_UPVOTES = "upvotes"
SORT_NEWEST = "newest"
SORT_CHOICES = (SORT_UPVOTES, SORT_NEWEST)

_EDITABLE_FIELDS = ("title", "description", "status")

# Largest id a 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


def _is_storable_id(feedback_id: int) -> bool:
    return 0 <= feedback_id <= MAX_ID


def _storage_failure(message: str) -> StorageFailure:
    db.session.rollback()
    current_app.logger.exception(message)
    return StorageFailure(message)


def _constraint_kind(exc: IntegrityError) -> str | None:
    """Classify an IntegrityError as 'unique' / 'foreign_key' from the driver signal."""
    orig = getattr(exc, "orig", None)
    pgcode = getattr(orig, "pgcode", None)
    if pgcode == "23505":
        return "unique"
    if pgcode == "23503":
        return "foreign_key"
    msg = str(orig or exc)
    if "UNIQUE constraint failed" in msg:
        return "unique"
    if "FOREIGN KEY constraint failed" in msg:
        return "foreign_key"
    return None


def _require_email(data: dict, required_message: str) -> str:
    email = normalize_email(data.get("user_email"))
    if not email:
        raise ValidationError(required_message)
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return email


def _count_subqueries():
    upvotes = (
        db.session.query(Upvote.feedback_id.label("feedback_id"), func.count(Upvote.id).label("n"))
        .group_by(Upvote.feedback_id)
        .subquery()
    )
    comments = (
        db.session.query(Comment.feedback_id.label("feedback_id"), func.count(Comment.id).label("n"))
        .group_by(Comment.feedback_id)
        .subquery()
    )
    return upvotes, comments


def _feedback_query():
    upvotes, comments = _count_subqueries()
    upvote_count = func.coalesce(upvotes.c.n, 0)
    comment_count = func.coalesce(comments.c.n, 0)
    query = (
        db.session.query(Feedback, upvote_count.label("upvote_count"), comment_count.label("comment_count"))
        .outerjoin(upvotes, upvotes.c.feedback_id == Feedback.id)
        .outerjoin(comments, comments.c.feedback_id == Feedback.id)
    )
    return query, upvote_count


def list_feedback(sort_by: str | None = None) -> list[dict[str, Any]]:
    """
    Every feedback item with its upvote/comment counts.
    'upvotes' (default): most upvoted first, newest first on ties.
    'newest': newest first. Unknown selectors fall back to 'upvotes'.
    """
    query, upvote_count = _feedback_query()
    if sort_by == SORT_NEWEST:
        query = query.order_by(Feedback.created_at.desc(), Feedback.id.desc())
    else:
        query = query.order_by(upvote_count.desc(), Feedback.created_at.desc(), Feedback.id.desc())

    try:
        rows = query.all()
    except SQLAlchemyError:
        raise _storage_failure("Failed to fetch feedback")
    return [fb.to_dict(upvotes, comments) for fb, upvotes, comments in rows]


def get_feedback(feedback_id: int) -> dict[str, Any]:
    if not _is_storable_id(feedback_id):
        raise NotFound()
    query, _ = _feedback_query()
    try:
        row = query.filter(Feedback.id == feedback_id).one_or_none()
    except SQLAlchemyError:
        raise _storage_failure("Failed to retrieve feedback")
    if row is None:
        raise NotFound()
    fb, upvotes, comments = row
    return fb.to_dict(upvotes, comments)


def create_feedback(data: dict) -> dict[str, Any]:
    title = clean_str(data.get("title"))
    description = clean_str(data.get("description"))
    email = normalize_email(data.get("user_email"))
    if not title or not description or not email:
        raise ValidationError("title, description, and user_email are required")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")

    fb = Feedback(title=title, description=description, user_email=email, status=STATUS_OPEN)
    db.session.add(fb)
    try:
        db.session.commit()
        # Server-assigned created_at is loaded on first access after commit
        return fb.to_dict(upvote_count=0, comment_count=0)
    except SQLAlchemyError:
        raise _storage_failure("Failed to create feedback")


def update_feedback(feedback_id: int, data: dict) -> dict[str, Any]:
    """Apply the supplied subset of title/description/status."""
    present = [name for name in _EDITABLE_FIELDS if name in data]
    if not present:
        raise ValidationError("No fields to update")

    changes = {}
    for name in present:
        value = clean_str(data.get(name))
        if not value:
            raise ValidationError(f"{name} must be a non-empty string")
        changes[name] = value
    if "status" in changes and changes["status"] not in STATUS_CHOICES:
        raise ValidationError(f"Invalid status. Allowed: {', '.join(STATUS_CHOICES)}")
    if not _is_storable_id(feedback_id):
        raise NotFound()

    try:
        updated = (
            db.session.query(Feedback)
            .filter(Feedback.id == feedback_id)
            .update(changes, synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError:
        raise _storage_failure("Failed to update feedback")
    if not updated:
        raise NotFound()

    try:
        return get_feedback(feedback_id)
    except NotFound:
        # Row vanished between UPDATE and read-back
        raise StorageFailure("Failed to retrieve updated feedback")


def delete_feedback(feedback_id: int) -> None:
    """Remove upvotes, then comments, then the item itself in one transaction."""
    if not _is_storable_id(feedback_id):
        raise NotFound()
    try:
        db.session.query(Upvote).filter(Upvote.feedback_id == feedback_id).delete(synchronize_session=False)
        db.session.query(Comment).filter(Comment.feedback_id == feedback_id).delete(synchronize_session=False)
        deleted = (
            db.session.query(Feedback).filter(Feedback.id == feedback_id).delete(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError:
        raise _storage_failure("Failed to delete feedback")
    if not deleted:
        raise NotFound()


def count_upvotes(feedback_id: int) -> int:
    return (
        db.session.query(func.count(Upvote.id))
        .filter(Upvote.feedback_id == feedback_id)
        .scalar()
    ) or 0


def upvote_feedback(feedback_id: int, data: dict) -> int:
    """
    Record one upvote per (feedback, email). The unique constraint decides
    duplicates, so concurrent attempts cannot both succeed.
    Returns the item's upvote total after the insert.
    """
    email = _require_email(data, "feedback id and user_email are required")
    if not _is_storable_id(feedback_id):
        raise NotFound()

    db.session.add(Upvote(feedback_id=feedback_id, user_email=email))
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        kind = _constraint_kind(exc)
        if kind == "unique":
            raise Conflict("User has already upvoted this feedback")
        if kind == "foreign_key":
            raise NotFound()
        current_app.logger.exception("Upvote insert failed")
        raise StorageFailure("Failed to upvote")
    except SQLAlchemyError:
        raise _storage_failure("Failed to upvote")

    try:
        return count_upvotes(feedback_id)
    except SQLAlchemyError:
        raise _storage_failure("Failed to retrieve upvote count")


def add_comment(feedback_id: int, data: dict) -> dict[str, Any]:
    text = clean_str(data.get("comment_text"))
    email = normalize_email(data.get("user_email"))
    if not email or not text:
        raise ValidationError("feedback id, user_email, and comment_text are required")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    if not _is_storable_id(feedback_id):
        raise NotFound()

    comment = Comment(feedback_id=feedback_id, user_email=email, comment_text=text)
    db.session.add(comment)
    try:
        db.session.commit()
        return comment.to_dict()
    except IntegrityError as exc:
        db.session.rollback()
        if _constraint_kind(exc) == "foreign_key":
            raise NotFound()
        current_app.logger.exception("Comment insert failed")
        raise StorageFailure("Failed to add comment")
    except SQLAlchemyError:
        raise _storage_failure("Failed to add comment")


def list_comments(feedback_id: int) -> list[dict[str, Any]]:
    """Comments oldest first. Unknown ids simply have none."""
    if not _is_storable_id(feedback_id):
        return []
    try:
        rows = (
            db.session.query(Comment)
            .filter(Comment.feedback_id == feedback_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )
    except SQLAlchemyError:
        raise _storage_failure("Failed to fetch comments")
    return [c.to_dict() for c in rows]
