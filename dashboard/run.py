# -*- coding: utf-8 -*-
import typing as t
from collections import Counter
from datetime import date

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dashboard.utils import class_style, configure_logging, console, err_console, format_due, truncate_title
from grade_engine.calculator import grades_by_class
from grade_engine.gpa import cumulative_gpa
from grade_engine.statuses import DEFAULT_STATUSES, status_label
from gradebook_store.models import Snapshot
from gradebook_store.store import DocumentStore, StorageError, get_store
from workload_planner.planner import DailyPlanner, daily_quota
from workload_planner.pool import active_pool


def _parse_today(ctx: click.Context, param: click.Parameter, value: t.Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date.")


def _fail(message: str) -> t.NoReturn:
    err_console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(1)


def _load(store: DocumentStore) -> Snapshot:
    try:
        return store.load()
    except StorageError as e:
        _fail(str(e))


def create_grades_table(snapshot: Snapshot, today: date) -> Table:
    """Create a table with every class's grade."""
    table = Table(title="🎓 Class Grades", show_header=True, header_style="bold magenta")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Class", style="white")
    table.add_column("Credits", justify="right")
    table.add_column("Points", justify="right", style="dim", no_wrap=True)
    table.add_column("Percent", justify="right", style="yellow")
    table.add_column("Letter", justify="center", style="bold")
    table.add_column("GPA", justify="right")

    grades = grades_by_class(snapshot, today)
    for idx, school_class in enumerate(snapshot.classes):
        result = grades[school_class.id]
        style = class_style(idx)
        table.add_row(
            f"[{style}]{escape(school_class.code) or '—'}[/{style}]",
            escape(truncate_title(school_class.name)),
            f"{school_class.credits:g}",
            f"{result.earned_points:g}/{result.total_points:g}",
            f"{result.percent:.1f}%",
            result.letter,
            f"{result.gpa:.1f}",
        )
    return table


def create_assignments_table(title: str, assignments: list, snapshot: Snapshot, today: date) -> Table:
    """Create a table listing assignments with their class and due date."""
    statuses = snapshot.status_lookup()
    class_index = {c.id: idx for idx, c in enumerate(snapshot.classes)}

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Class")
    table.add_column("Assignment", style="white")
    table.add_column("Due", style="yellow")
    table.add_column("Status")
    table.add_column("Est.", justify="right")

    for idx, assignment in enumerate(assignments, 1):
        school_class = snapshot.find_class(assignment.class_id)
        if school_class is not None:
            style = class_style(class_index[school_class.id])
            class_cell = f"[{style}]{escape(school_class.code or school_class.name)}[/{style}]"
        else:
            class_cell = "—"
        table.add_row(
            str(idx),
            class_cell,
            escape(truncate_title(assignment.name)),
            format_due(assignment.due_date, today),
            escape(status_label(assignment.status, statuses)),
            f"{assignment.estimated_time}m" if assignment.estimated_time else "—",
        )
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Gradebook JSON file (defaults to $GRADETRACKER_DATA_FILE or the configured server).",
)
@click.option("--today", callback=_parse_today, help="Override the current date (YYYY-MM-DD).")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, data_file: t.Optional[str], today: date, verbose: bool) -> None:
    """GradeTracker: class grades, cumulative GPA and today's workload plan."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["store"] = get_store(data_file)
    ctx.obj["today"] = today


@main.command()
@click.pass_context
def grades(ctx: click.Context) -> None:
    """Show every class's grade and the cumulative GPA."""
    today: date = ctx.obj["today"]
    snapshot = _load(ctx.obj["store"])

    if not snapshot.classes:
        console.print("🎓 No classes found.")
        return

    console.print(create_grades_table(snapshot, today))
    gpa = cumulative_gpa(snapshot.classes, snapshot.assignments, today, snapshot.status_lookup())
    console.print(Panel.fit(f"[bold]{gpa}[/bold]", title="Cumulative GPA", border_style="blue"))


@main.command()
@click.pass_context
def gpa(ctx: click.Context) -> None:
    """Print the cumulative GPA."""
    today: date = ctx.obj["today"]
    snapshot = _load(ctx.obj["store"])
    console.print(cumulative_gpa(snapshot.classes, snapshot.assignments, today, snapshot.status_lookup()))


@main.command()
@click.pass_context
def today(ctx: click.Context) -> None:
    """Show today's plan, generating it on the first run of the day."""
    reference: date = ctx.obj["today"]
    store: DocumentStore = ctx.obj["store"]
    try:
        result = DailyPlanner(store).today(reference)
    except StorageError as e:
        _fail(str(e))

    if result.regenerated:
        console.print(f"[dim]New plan generated for {result.plan.date}.[/dim]")

    if not result.assignments:
        console.print(f"✅ Nothing left for today ({result.plan.date}).")
        return

    snapshot = _load(store)
    console.print(create_assignments_table(f"📝 Today's Plan ({result.plan.date})", result.assignments, snapshot, reference))
    minutes = sum(a.estimated_time for a in result.assignments)
    if minutes:
        console.print(f"Estimated time: [bold]{minutes // 60}h {minutes % 60:02d}m[/bold]")


@main.command()
@click.pass_context
def pool(ctx: click.Context) -> None:
    """Show outstanding work due within the next seven days."""
    reference: date = ctx.obj["today"]
    snapshot = _load(ctx.obj["store"])
    items = active_pool(snapshot.assignments, snapshot.status_lookup(), reference)

    if not items:
        console.print("✅ No outstanding work due this week.")
        return

    ordered = sorted(items, key=lambda a: a.due_date)
    console.print(create_assignments_table("📚 This Week", ordered, snapshot, reference))
    console.print(f"Daily quota: [bold]{daily_quota(len(items))}[/bold] assignment(s) per day")


@main.command()
@click.pass_context
def report(ctx: click.Context) -> None:
    """Show the academic report: status breakdown and class grades."""
    reference: date = ctx.obj["today"]
    snapshot = _load(ctx.obj["store"])
    statuses = snapshot.status_lookup()

    counts: Counter = Counter({status.id: 0 for status in DEFAULT_STATUSES})
    counts.update(a.status for a in snapshot.assignments)
    total = sum(counts.values())

    stats_text = Text()
    stats_text.append("Total assignments: ", style="white")
    stats_text.append(f"{total}", style="bold green")
    stats_text.append("\n")
    stats_text.append("Cumulative GPA: ", style="white")
    stats_text.append(
        cumulative_gpa(snapshot.classes, snapshot.assignments, reference, statuses),
        style="bold green",
    )
    console.print(Panel(stats_text, title="📊 Academic Report", border_style="green"))

    status_table = Table(title="Status Breakdown", show_header=True, header_style="bold magenta")
    status_table.add_column("Status")
    status_table.add_column("Count", justify="right")
    status_table.add_column("Share", justify="right", style="dim")
    for status_id, count in counts.items():
        share = f"{count / total * 100:.0f}%" if total else "—"
        status_table.add_row(escape(status_label(status_id, statuses)), str(count), share)
    console.print(status_table)

    if snapshot.classes:
        console.print(create_grades_table(snapshot, reference))


if __name__ == "__main__":
    main()
