"""Interactive CLI application."""
import logging
import uuid
from datetime import date

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt
from rich.table import Table

from zenith_tracker import state as updates
from zenith_tracker.config import get_log_level
from zenith_tracker.dashboard import (
    get_progress_color, get_revision_status, get_study_stats, get_subject_progress,
)
from zenith_tracker.courses import filter_courses, youtube_embed_id
from zenith_tracker.dates import now_local
from zenith_tracker.db import StateStore
from zenith_tracker.exams import (
    average_performance, days_left, graded_exams, percentage, upcoming_exams,
)
from zenith_tracker.garden import FOCUS_GOALS, achieve_goal, is_wilted, roll_over, select_focus_goal
from zenith_tracker.goals import goals_for_date, is_completed_on_date, pending_today
from zenith_tracker.insights import (
    generate_subject_chapters, get_exam_performance_analysis, get_study_insights,
)
from zenith_tracker.models import (
    AppState, Chapter, Course, Exam, Goal, GOAL_CATEGORIES, EXAM_PRIORITIES, PomodoroLog,
    EXAM_TYPES, RECURRENCE_TYPES, Subject,
)
from zenith_tracker.pomodoro import DEFAULT_FOCUS_MINUTES, time_left, weekly_analytics
from zenith_tracker.revision import due_chapters, revision_queue

console = Console()
logger = logging.getLogger(__name__)

SUBJECT_COLORS = ["#6366f1", "#ef4444", "#f59e0b", "#10b981", "#06b6d4", "#8b5cf6", "#ec4899", "#64748b"]


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]Zenith[/bold]\n[dim]Study Tracker[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Progress, revision queue and today's goals"),
        ("subjects", "Manage subjects and chapters"),
        ("revision", "Spaced-repetition revision lab"),
        ("goals", "Goals for a date"),
        ("garden", "Daily focus goal and streak"),
        ("exams", "Upcoming exams and grading"),
        ("pomodoro", "Log a focus session"),
        ("courses", "Saved lectures and courses"),
        ("deadline", "Set the syllabus deadline"),
        ("insights", "AI study insights"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def pick_subject(state: AppState) -> Subject | None:
    if not state.subjects:
        console.print("[yellow]No subjects yet. Add one under 'subjects'.[/yellow]")
        return None
    for i, s in enumerate(state.subjects, 1):
        console.print(f"  [cyan]{i}[/cyan]) {s.name}")
    idx = IntPrompt.ask("Select subject", choices=[str(i) for i in range(1, len(state.subjects) + 1)])
    return state.subjects[idx - 1]


def render_due_table(title: str, due: list) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Chapter", style="cyan")
    table.add_column("Subject")
    table.add_column("Tier")
    table.add_column("Level", justify="right")
    table.add_column("Days Since", justify="right")
    for i, d in enumerate(due, 1):
        table.add_row(
            str(i), d.chapter.name, d.subject_name, d.tier_label,
            str(d.chapter.revisions), str(d.due_in_days),
        )
    return table


def cmd_dashboard(store: StateStore, state: AppState) -> AppState:
    now = now_local()
    stats = get_study_stats(state, now)
    progress = stats["progress_percent"]
    color = get_progress_color(progress)

    console.print(Panel(
        f"[bold]{stats['completed_chapters']}/{stats['total_chapters']} chapters complete[/bold]",
        title="Zenith Dashboard", border_style="blue",
    ))
    bar_filled = int(progress / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(f"\n  Syllabus Progress: [bold]{progress}%[/bold] {bar}\n")

    if state.syllabus_deadline:
        left = time_left(state.syllabus_deadline, now)
        console.print(f"  Deadline in [bold]{left['mo']}mo {left['d']}d {left['h']}h[/bold]")

    console.print(f"  Focus: [bold]{stats['total_focus_minutes']}[/bold] min  |  "
                  f"Avg Result: [bold]{stats['average_result']}%[/bold]  |  "
                  f"Revision: [bold]{get_revision_status(stats['revisions_due'])}[/bold]")

    queue = revision_queue(state.subjects, now)
    if queue:
        console.print(render_due_table("Revision Queue", queue))

    pending = pending_today(state.goals, now.date())
    if pending:
        console.print("\n[bold]Pending Today:[/bold]")
        for p in pending:
            flag = " [red](overdue)[/red]" if p.is_overdue else ""
            console.print(f"  • {p.goal.text} [dim]{p.goal.category}[/dim]{flag}")
    return state


def cmd_subjects(store: StateStore, state: AppState) -> AppState:
    table = Table(title="Subjects")
    table.add_column("Subject", style="cyan")
    table.add_column("Chapters", justify="right")
    table.add_column("Progress", justify="right")
    for sp in get_subject_progress(state):
        table.add_row(sp["name"], f"{sp['completed']}/{sp['total']}", f"{round(sp['progress'] * 100)}%")
    console.print(table)

    action = Prompt.ask(
        "Action", choices=["add", "chapter", "toggle", "move", "color", "delete", "back"], default="back",
    )
    if action == "add":
        name = Prompt.ask("Subject name").strip()
        if not name:
            return state
        color = SUBJECT_COLORS[len(state.subjects) % len(SUBJECT_COLORS)]
        subject = Subject(id=new_id(), name=name, color=color)
        if Prompt.ask("Suggest chapters with AI?", choices=["y", "n"], default="n") == "y":
            subject.chapters = [Chapter(id=new_id(), name=n) for n in generate_subject_chapters(name)]
        return store.save(updates.add_subject(state, subject))
    subject = pick_subject(state) if action != "back" else None
    if subject is None:
        return state
    if action == "delete":
        return store.save(updates.delete_subject(state, subject.id))
    if action == "chapter":
        name = Prompt.ask("Chapter name").strip()
        if not name:
            return state
        return store.save(updates.add_chapter(state, subject.id, Chapter(id=new_id(), name=name)))
    if action == "color":
        for i, c in enumerate(SUBJECT_COLORS, 1):
            console.print(f"  [cyan]{i}[/cyan]) [{c}]■[/{c}] {c}")
        idx = IntPrompt.ask("Color", choices=[str(i) for i in range(1, len(SUBJECT_COLORS) + 1)])
        return store.save(updates.update_subject_color(state, subject.id, SUBJECT_COLORS[idx - 1]))
    if not subject.chapters:
        console.print("[yellow]This subject has no chapters.[/yellow]")
        return state
    for i, c in enumerate(subject.chapters, 1):
        mark = "[green]✓[/green]" if c.is_completed else " "
        console.print(f"  [cyan]{i}[/cyan]) {mark} {c.name}")
    positions = [str(i) for i in range(1, len(subject.chapters) + 1)]
    if action == "move":
        src = IntPrompt.ask("Move chapter", choices=positions)
        dst = IntPrompt.ask("To position", choices=positions)
        return store.save(updates.reorder_chapter(state, subject.id, src - 1, dst - 1))
    idx = IntPrompt.ask("Toggle chapter", choices=positions)
    return store.save(updates.toggle_chapter(state, subject.id, subject.chapters[idx - 1].id, now_local()))


def cmd_revision(store: StateStore, state: AppState) -> AppState:
    now = now_local()
    due = due_chapters(state.subjects, now)
    if not due:
        console.print("[green]Nothing due. Retention is optimal.[/green]")
        return state
    console.print(render_due_table("Cognitive Revision Lab", due))
    choice = Prompt.ask("Chapter # to reinforce (blank to go back)", default="").strip()
    if not choice:
        return state
    if not choice.isdigit() or not 1 <= int(choice) <= len(due):
        console.print("[red]No such chapter.[/red]")
        return state
    item = due[int(choice) - 1]
    delta = 1 if Prompt.ask("Direction", choices=["+", "-"], default="+") == "+" else -1
    state = updates.reinforce_chapter(state, item.subject_id, item.chapter.id, delta, now)
    console.print(f"[green]{item.chapter.name} reinforced.[/green]")
    return store.save(state)


def cmd_goals(store: StateStore, state: AppState) -> AppState:
    raw = Prompt.ask("Date (YYYY-MM-DD)", default=now_local().date().isoformat())
    day = date.fromisoformat(raw)
    active = goals_for_date(state.goals, day)
    table = Table(title=f"Goals for {day.isoformat()}")
    table.add_column("#", justify="right")
    table.add_column("Goal", style="cyan")
    table.add_column("Category")
    table.add_column("Repeats")
    table.add_column("Done")
    for i, g in enumerate(active, 1):
        done = "[green]✓[/green]" if is_completed_on_date(g, day) else ""
        table.add_row(str(i), g.text, g.category, g.recurrence, done)
    console.print(table)

    action = Prompt.ask("Action", choices=["add", "toggle", "delete", "back"], default="back")
    if action == "add":
        text = Prompt.ask("Goal").strip()
        if not text:
            return state
        goal = Goal(
            id=new_id(),
            text=text,
            date=day.isoformat(),
            category=Prompt.ask("Category", choices=list(GOAL_CATEGORIES), default="Study"),
            recurrence=Prompt.ask("Repeats", choices=list(RECURRENCE_TYPES), default="none"),
        )
        return store.save(updates.add_goal(state, goal))
    if action == "back" or not active:
        return state
    idx = IntPrompt.ask("Goal #", choices=[str(i) for i in range(1, len(active) + 1)])
    goal = active[idx - 1]
    if action == "toggle":
        return store.save(updates.toggle_goal_by_id(state, goal.id, day))
    return store.save(updates.delete_goal(state, goal.id))


def cmd_garden(store: StateStore, state: AppState) -> AppState:
    today = now_local().date()
    garden = roll_over(state.garden, today)
    status = "[red]Wilted[/red]" if is_wilted(garden) else "[green]Growing[/green]"
    console.print(Panel(
        f"Streak: [bold]{garden.garden_streak}[/bold] days  {status}\n"
        f"Focus: {garden.daily_focus_goal or '[dim]none chosen[/dim]'}"
        + ("\n[green]Achieved today![/green]" if garden.has_achieved_goal_today else ""),
        title="Garden", border_style="green",
    ))
    action = Prompt.ask("Action", choices=["choose", "achieve", "back"], default="back")
    if action == "choose":
        for i, fg in enumerate(FOCUS_GOALS, 1):
            console.print(f"  [cyan]{i}[/cyan]) {fg['label']}")
        idx = IntPrompt.ask("Focus goal", choices=[str(i) for i in range(1, len(FOCUS_GOALS) + 1)])
        garden = select_focus_goal(garden, FOCUS_GOALS[idx - 1]["label"], today)
    elif action == "achieve":
        if not garden.daily_focus_goal:
            console.print("[yellow]Choose a focus goal first.[/yellow]")
            return state
        garden = achieve_goal(garden, today)
    if garden == state.garden:
        return state
    return store.save(updates.update_garden(state, garden))


def cmd_exams(store: StateStore, state: AppState) -> AppState:
    now = now_local()
    names = {s.id: s.name for s in state.subjects}
    upcoming = upcoming_exams(state.exams)
    table = Table(title="Upcoming Exams")
    table.add_column("#", justify="right")
    table.add_column("Exam", style="cyan")
    table.add_column("Priority")
    table.add_column("Days Left", justify="right")
    for i, e in enumerate(upcoming, 1):
        table.add_row(str(i), e.title, e.priority, str(days_left(e, now)))
    console.print(table)

    graded = graded_exams(state.exams)
    if graded:
        console.print(f"\n  Average performance: [bold]{average_performance(state.exams)}%[/bold]")
        for e in graded[:10]:
            console.print(f"  {e.title} ({names.get(e.subject_id, 'Deleted')}): {percentage(e)}%")

    action = Prompt.ask("Action", choices=["add", "grade", "analyze", "back"], default="back")
    if action == "add":
        subject = pick_subject(state)
        if subject is None:
            return state
        known = [*EXAM_TYPES, *state.custom_exam_types]
        console.print(f"  [dim]Types: {', '.join(known)}[/dim]")
        exam_type = Prompt.ask("Type", default="Mock").strip() or "Mock"
        raw = Prompt.ask("Date (YYYY-MM-DD)").strip()
        try:
            exam_date = date.fromisoformat(raw)
        except ValueError:
            console.print(f"[red]Not a date: {raw!r}. Use YYYY-MM-DD.[/red]")
            return state
        exam = Exam(
            id=new_id(),
            subject_id=subject.id,
            title=f"{subject.name} {exam_type}",
            date=exam_date.isoformat(),
            priority=Prompt.ask("Priority", choices=list(EXAM_PRIORITIES), default="Medium"),
            type=exam_type,
        )
        if exam_type not in EXAM_TYPES:
            state = updates.add_exam_type(state, exam_type)
        return store.save(updates.add_exam(state, exam))
    if action == "grade":
        if not upcoming:
            console.print("[yellow]Nothing to grade.[/yellow]")
            return state
        idx = IntPrompt.ask("Exam #", choices=[str(i) for i in range(1, len(upcoming) + 1)])
        total = IntPrompt.ask("Total marks", default=100)
        obtained = IntPrompt.ask("Obtained marks")
        return store.save(updates.grade_exam_by_id(state, upcoming[idx - 1].id, total, obtained))
    if action == "analyze":
        for tip in get_exam_performance_analysis(state.exams, state.subjects):
            console.print(f"  • {tip}")
    return state


def cmd_pomodoro(store: StateStore, state: AppState) -> AppState:
    now = now_local()
    for row in weekly_analytics(state.pomodoro_logs, state.subjects, now):
        console.print(f"  [cyan]{row['name']:<20}[/cyan] {row['minutes']} min this week")
    if Prompt.ask("Log a session?", choices=["y", "n"], default="n") == "n":
        return state
    subject = pick_subject(state)
    minutes = IntPrompt.ask("Minutes", default=DEFAULT_FOCUS_MINUTES)
    log = PomodoroLog(
        id=new_id(),
        subject_id=subject.id if subject else "",
        duration=minutes,
        timestamp=now.isoformat(),
    )
    return store.save(updates.log_pomodoro(state, log))


def cmd_courses(store: StateStore, state: AppState) -> AppState:
    query = Prompt.ask("Search (blank for all)", default="").strip()
    shown = filter_courses(state.courses, query)
    names = {s.id: s.name for s in state.subjects}
    table = Table(title="Courses")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Subject")
    table.add_column("Topic")
    table.add_column("Link")
    for i, c in enumerate(shown, 1):
        video_id = youtube_embed_id(c.url)
        link = f"youtube:{video_id}" if video_id else c.url
        table.add_row(str(i), c.title, names.get(c.subject_id, "Deleted"), c.topic or "", link)
    console.print(table)

    action = Prompt.ask("Action", choices=["add", "delete", "subject", "back"], default="back")
    if action == "add":
        title = Prompt.ask("Title").strip()
        url = Prompt.ask("URL").strip()
        if not title or not url:
            return state
        subject = pick_subject(state)
        if subject is None:
            return state
        course = Course(
            id=new_id(),
            title=title,
            url=url,
            subject_id=subject.id,
            added_at=now_local().isoformat(),
            topic=Prompt.ask("Topic", default="").strip() or None,
        )
        return store.save(updates.add_course(state, course))
    if action == "delete":
        if not shown:
            return state
        idx = IntPrompt.ask("Course #", choices=[str(i) for i in range(1, len(shown) + 1)])
        return store.save(updates.delete_course(state, shown[idx - 1].id))
    if action == "subject":
        subject = pick_subject(state)
        if subject is not None:
            for c in filter_courses(state.courses, query, subject.id):
                console.print(f"  • {c.title} [dim]{c.url}[/dim]")
    return state


def cmd_deadline(store: StateStore, state: AppState) -> AppState:
    console.print(f"  Current deadline: [bold]{state.syllabus_deadline or 'none'}[/bold]")
    raw = Prompt.ask("New deadline (YYYY-MM-DD, 'clear', blank to keep)", default="").strip()
    if not raw:
        return state
    if raw == "clear":
        return store.save(updates.set_syllabus_deadline(state, None))
    try:
        deadline = date.fromisoformat(raw)
    except ValueError:
        console.print(f"[red]Not a date: {raw!r}. Use YYYY-MM-DD.[/red]")
        return state
    return store.save(updates.set_syllabus_deadline(state, deadline.isoformat()))


def cmd_insights(store: StateStore, state: AppState) -> AppState:
    console.print("\n[bold]Study Insights[/bold]")
    for tip in get_study_insights(state):
        console.print(f"  • {tip}")
    return state


COMMANDS = {
    "dashboard": cmd_dashboard,
    "subjects": cmd_subjects,
    "revision": cmd_revision,
    "goals": cmd_goals,
    "garden": cmd_garden,
    "exams": cmd_exams,
    "pomodoro": cmd_pomodoro,
    "courses": cmd_courses,
    "deadline": cmd_deadline,
    "insights": cmd_insights,
}


def main():
    configure_logging()
    store = StateStore()
    state = store.load()

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Keep climbing.[/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            state = command(store, state)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
