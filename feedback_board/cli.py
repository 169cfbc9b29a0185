import click
from flask.cli import with_appcontext

from feedback_board.errors import FeedbackBoardError
from feedback_board.models import STATUS_CHOICES
from feedback_board.services import feedback as feedback_service


@click.group()
def feedback():
    """Feedback board admin operations."""


@feedback.command("list")
@click.option("--sort", "sort_by", type=click.Choice(feedback_service.SORT_CHOICES), default=feedback_service.SORT_UPVOTES)
@with_appcontext
def feedback_list(sort_by):
    items = feedback_service.list_feedback(sort_by)
    if not items:
        click.echo("No feedback yet.")
        return
    for item in items:
        click.echo(
            f"#{item['id']} [{item['status']}] {item['title']} "
            f"(upvotes={item['upvote_count']} comments={item['comment_count']})"
        )


@feedback.command("set-status")
@click.argument("feedback_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES))
@with_appcontext
def feedback_set_status(feedback_id, status):
    try:
        item = feedback_service.update_feedback(feedback_id, {"status": status})
    except FeedbackBoardError as e:
        raise click.ClickException(e.message)
    click.echo(f"Feedback #{item['id']} status set to {item['status']}")


@feedback.command("delete")
@click.argument("feedback_id", type=int)
@with_appcontext
def feedback_delete(feedback_id):
    try:
        feedback_service.delete_feedback(feedback_id)
    except FeedbackBoardError as e:
        raise click.ClickException(e.message)
    click.echo(f"Deleted feedback #{feedback_id} with its upvotes and comments")


def register_cli(app):
    app.cli.add_command(feedback)
