from feedback_board.extensions import db
from feedback_board.models.feedback import _iso


class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    feedback_id = db.Column(db.Integer, db.ForeignKey("feedback.id"), nullable=False)
    user_email = db.Column(db.Text, nullable=False)
    comment_text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=db.func.now(), nullable=False)

    __table_args__ = (
        db.Index("ix_comments_feedback_created_at", "feedback_id", "created_at"),
    )

    def to_dict(self) -> dict:
        return dict(
            id=self.id,
            feedback_id=self.feedback_id,
            user_email=self.user_email,
            comment_text=self.comment_text,
            created_at=_iso(self.created_at),
        )
