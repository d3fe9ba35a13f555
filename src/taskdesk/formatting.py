"""Plain-text rendering of tasks for the CLI."""

from datetime import datetime

from taskdesk.core.tasks import Task, TaskStatus, is_past_due

STATUS_MARKERS = {
    TaskStatus.TODO: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.COMPLETED: "[x]",
}


def local_time(value: datetime, fmt: str) -> str:
    return value.astimezone().strftime(fmt)


def format_task_line(task: Task, date_format: str, now: datetime | None = None) -> str:
    """One-line summary: marker, id, title, status and due date."""
    marker = STATUS_MARKERS.get(task.status, "[ ]")
    due = f"due {local_time(task.due_date, date_format)}"
    if is_past_due(task, now):
        due += " (past due)"
    return f"{marker} #{task.id:<4} {task.title}  [{task.status.value}]  {due}"


def format_task_detail(task: Task, date_format: str, now: datetime | None = None) -> str:
    """Multi-line view of a single task."""
    lines = [
        f"#{task.id} {task.title}",
        f"Status:  {task.status.value}",
        f"Due:     {local_time(task.due_date, date_format)}"
        + (" (past due)" if is_past_due(task, now) else ""),
    ]
    if task.created_at:
        lines.append(f"Created: {local_time(task.created_at, date_format)}")
    if task.description:
        lines.append("")
        lines.append(task.description)
    return "\n".join(lines)


def task_to_json(task: Task, now: datetime | None = None) -> dict:
    """JSON-friendly dict, with the render-time past-due flag."""
    data = task.to_dict()
    data["pastDue"] = is_past_due(task, now)
    return data
