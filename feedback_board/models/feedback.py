from feedback_board.extensions import db

STATUS_OPEN = "Open"
STATUS_PLANNED = "Planned"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"
STATUS_CHOICES = (STATUS_OPEN, STATUS_PLANNED, STATUS_IN_PROGRESS, STATUS_COMPLETED)


def _iso(value):
    return value.isoformat() if value else None


class Feedback(db.Model):
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False)
    user_email = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=db.func.now(), nullable=False)
    # Free text validated in the app; the column predates the status workflow
    status = db.Column(db.String(20), nullable=False, default=STATUS_OPEN, server_default=STATUS_OPEN)

    def to_dict(self, upvote_count: int = 0, comment_count: int = 0) -> dict:
        return dict(
            id=self.id,
            title=self.title,
            description=self.description,
            user_email=self.user_email,
            status=self.status or STATUS_OPEN,
            created_at=_iso(self.created_at),
            upvote_count=int(upvote_count or 0),
            comment_count=int(comment_count or 0),
        )

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} status={self.status!r}>"
