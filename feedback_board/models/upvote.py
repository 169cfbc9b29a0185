from sqlalchemy import UniqueConstraint
from feedback_board.extensions import db


class Upvote(db.Model):
    __tablename__ = "upvotes"

    id = db.Column(db.Integer, primary_key=True)
    # No ON DELETE CASCADE: the delete service removes dependents first
    feedback_id = db.Column(db.Integer, db.ForeignKey("feedback.id"), nullable=False)
    user_email = db.Column(db.Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("feedback_id", "user_email", name="uq_upvotes_feedback_user"),
    )
