from .feedback import (
    Feedback,
    STATUS_CHOICES,
    STATUS_OPEN,
    STATUS_PLANNED,
    STATUS_IN_PROGRESS,
    STATUS_COMPLETED,
)
from .upvote import Upvote
from .comment import Comment

__all__ = [
    "Feedback",
    "Upvote",
    "Comment",
    "STATUS_CHOICES",
    "STATUS_OPEN",
    "STATUS_PLANNED",
    "STATUS_IN_PROGRESS",
    "STATUS_COMPLETED",
]
