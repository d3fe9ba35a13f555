"""taskdesk CLI - manage your tasks from the terminal."""

import json
import logging
import sys
from datetime import datetime

import click

from .app import App, build_app
from .config import load_config
from .core.tasks import ALL, SortField, SortOrder, TaskDraft, TaskStatus
from .errors import (
    AuthenticationError,
    FetchFailed,
    MutationFailed,
    NotAuthenticated,
    ValidationError,
)
from .formatting import format_task_detail, format_task_line, task_to_json
from .task_list import Confirm

STATUS_CHOICES = [s.value for s in TaskStatus]
DUE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _app(confirm: Confirm | None = None) -> App:
    return build_app(load_config(), confirm=confirm or click.confirm)


def _logged_in_app(confirm: Confirm | None = None) -> App:
    app = _app(confirm)
    if not app.tasks.guard():
        _fail("Not logged in. Run 'taskdesk login' first.")
    return app


def _local(value: datetime | None) -> datetime | None:
    """Treat a naive datetime typed at the prompt as local time."""
    return value.astimezone() if value else None


@click.group()
@click.version_option(package_name="taskdesk")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """taskdesk - task management client."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


# ============== Session ==============


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
@click.option("--remember-me", is_flag=True, help="Ask the server for a longer session")
def login(email: str, password: str, remember_me: bool):
    """Log in and save the session."""
    app = _app()
    try:
        session = app.session.login(email, password, remember_me)
    except AuthenticationError as e:
        _fail(e.message)
    click.echo(f"Logged in as {session.user.email}")


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
@click.option("--confirm-password", prompt="Confirm password", hide_input=True)
def register(email: str, password: str, confirm_password: str):
    """Create an account and log in."""
    app = _app()
    try:
        session = app.session.register(email, password, confirm_password)
    except AuthenticationError as e:
        _fail(e.message)
    click.echo(f"Registered and logged in as {session.user.email}")


@main.command()
def logout():
    """Forget the saved session."""
    _app().session.logout()
    click.echo("Logged out.")


@main.command()
def whoami():
    """Show the logged-in user."""
    app = _app()
    if not app.session.is_authenticated:
        click.echo("Not logged in.")
        return
    click.echo(f"{app.session.user.email} (id {app.session.user.id})")


# ============== Tasks ==============


@main.command("list")
@click.option(
    "--status",
    "-s",
    type=click.Choice([ALL] + STATUS_CHOICES, case_sensitive=False),
    default=ALL,
    help="Show only tasks with this status",
)
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice([f.value for f in SortField]),
    default=None,
    help="Field to sort by",
)
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder], case_sensitive=False),
    default=None,
    help="Sort direction",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(status: str, sort_field: str | None, order: str | None, as_json: bool):
    """List your tasks."""
    app = _logged_in_app()
    try:
        app.tasks.open()
    except FetchFailed as e:
        _fail(e.message)

    app.tasks.set_filter(status)
    app.tasks.set_sort(sort_field or app.tasks.state.sort_field, order)
    visible = app.tasks.view()

    if as_json:
        click.echo(json.dumps([task_to_json(t) for t in visible], indent=2))
        return

    if not visible:
        click.echo("No tasks found.")
        return

    for task in visible:
        line = format_task_line(task, app.config.date_format)
        if task.is_past_due():
            click.secho(line, fg="red")
        else:
            click.echo(line)


@main.command()
@click.argument("task_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(task_id: int, as_json: bool):
    """Show one task."""
    app = _logged_in_app()
    try:
        task = app.tasks.get(task_id)
    except FetchFailed as e:
        _fail(e.message)

    if as_json:
        click.echo(json.dumps(task_to_json(task), indent=2))
    else:
        click.echo(format_task_detail(task, app.config.date_format))


@main.command()
@click.option("--title", "-t", prompt=True)
@click.option("--description", "-d", prompt=True)
@click.option(
    "--status",
    "-s",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    default=TaskStatus.TODO.value,
    show_default=True,
)
@click.option("--due", type=click.DateTime(formats=DUE_FORMATS), prompt="Due date")
def add(title: str, description: str, status: str, due: datetime):
    """Create a task."""
    app = _logged_in_app()
    form = app.task_form()
    draft = TaskDraft(
        title=title,
        description=description,
        status=TaskStatus(status),
        due_date=_local(due),
    )
    try:
        task = form.submit(draft)
    except (ValidationError, MutationFailed) as e:
        _fail(e.message)
    click.echo(f"Created #{task.id} {task.title}")


@main.command()
@click.argument("task_id", type=int)
@click.option("--title", "-t", default=None)
@click.option("--description", "-d", default=None)
@click.option(
    "--status",
    "-s",
    type=click.Choice(STATUS_CHOICES, case_sensitive=False),
    default=None,
)
@click.option("--due", type=click.DateTime(formats=DUE_FORMATS), default=None)
def edit(
    task_id: int,
    title: str | None,
    description: str | None,
    status: str | None,
    due: datetime | None,
):
    """Edit a task. Fields not given keep their current value."""
    app = _logged_in_app()
    form = app.task_form(task_id)
    try:
        draft = form.load()
    except FetchFailed as e:
        _fail(e.message)

    if title is not None:
        draft.title = title
    if description is not None:
        draft.description = description
    if status is not None:
        draft.status = TaskStatus(status)
    if due is not None:
        draft.due_date = _local(due)

    try:
        task = form.submit(draft)
    except (ValidationError, MutationFailed) as e:
        _fail(e.message)
    click.echo(f"Updated #{task.id} {task.title}")


@main.command()
@click.argument("task_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
def delete(task_id: int, yes: bool):
    """Delete a task."""
    app = _logged_in_app(confirm=(lambda _prompt: True) if yes else None)
    try:
        removed = app.tasks.remove(task_id)
    except (MutationFailed, NotAuthenticated) as e:
        _fail(e.message)

    if removed:
        click.echo(f"Deleted #{task_id}")
    else:
        click.echo("Cancelled.")


if __name__ == "__main__":
    main()
