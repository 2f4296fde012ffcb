"""Study insights from Gemini, with static fallbacks.

None of the public functions raise. Missing credentials, network failures,
timeouts and unparseable responses all yield the fallback list instead.
"""
import json
import logging

from google import genai
from google.genai import types

from zenith_tracker.config import get_ai_model, get_ai_timeout_ms, get_api_key
from zenith_tracker.exams import percentage
from zenith_tracker.models import AppState, Exam, Subject

logger = logging.getLogger(__name__)

FALLBACK_INSIGHTS = [
    "Stay consistent with your Pomodoro sessions!",
    "Remember to revise chapters within 7 days of completion.",
    "Focus on subjects where your marks are currently lower.",
]

FALLBACK_ANALYSIS = [
    "Review subjects where your score is below 60%.",
    "Look for patterns in the types of exams where you struggle.",
    "Consistency is key to academic success!",
]

NO_GRADES_ANALYSIS = ["Start grading your completed exams to get personalized performance analysis."]

FALLBACK_CHAPTERS = ["Introduction", "Core Concepts", "Advanced Application", "Review"]

FALLBACK_PLAN = [
    {"id": "f1", "task": "Revise your most difficult subject", "priority": "Critical", "estimatedTime": "45m"},
    {"id": "f2", "task": "Complete one Pomodoro session", "priority": "Focus", "estimatedTime": "25m"},
    {"id": "f3", "task": "Review upcoming exam schedules", "priority": "Routine", "estimatedTime": "10m"},
]


def get_client():
    """Return a configured Gemini client, or None when no API key is set."""
    api_key = get_api_key()
    if not api_key:
        return None
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=get_ai_timeout_ms()),
    )


def _clean_json(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def _generate_list(prompt: str, key: str, fallbacks: list, client=None) -> list:
    try:
        if client is None:
            client = get_client()
        if client is None:
            return list(fallbacks)
        response = client.models.generate_content(
            model=get_ai_model(),
            contents=prompt,
            config=types.GenerateContentConfig(response_mime_type="application/json"),
        )
        text = getattr(response, "text", None)
        if not text:
            raise ValueError("Empty response")
        items = json.loads(_clean_json(text)).get(key)
        return list(items) if items else list(fallbacks)
    except Exception as e:
        logger.error("Gemini request for %r failed: %s", key, e)
        return list(fallbacks)


def _subject_summary(subjects: list[Subject]) -> str:
    return json.dumps([
        {
            "name": s.name,
            "progress": sum(1 for c in s.chapters if c.is_completed) / (len(s.chapters) or 1),
        }
        for s in subjects
    ])


def get_study_insights(state: AppState, client=None) -> list[str]:
    prompt = (
        "Analyze this student's data and provide brief, actionable study insights.\n"
        f"- Subjects: {_subject_summary(state.subjects)}\n"
        f"- Recent Pomodoro sessions: {json.dumps([p.to_dict() for p in state.pomodoro_logs[-10:]])}\n"
        f"- Upcoming Exams: {json.dumps([e.to_dict() for e in state.exams if not e.is_completed])}\n"
        'Output exactly 3 bullet points of advice in JSON format: {"insights": ["...", "...", "..."]}'
    )
    return _generate_list(prompt, "insights", FALLBACK_INSIGHTS, client)


def get_daily_study_plan(state: AppState, client=None) -> list[dict]:
    graded = [e.to_dict() for e in state.exams if e.is_graded][-3:]
    prompt = (
        "Create a high-impact daily study plan based on this student's data:\n"
        f"- Subjects: {_subject_summary(state.subjects)}\n"
        f"- Upcoming Exams: {json.dumps([e.to_dict() for e in state.exams if not e.is_completed])}\n"
        f"- Last Results: {json.dumps(graded)}\n"
        "Provide 4 specific, actionable study tasks for today.\n"
        'Output in JSON format: {"tasks": [{"id": "...", "task": "...", '
        '"priority": "Critical/Focus/Routine", "estimatedTime": "..."}]}'
    )
    return _generate_list(prompt, "tasks", FALLBACK_PLAN, client)


def get_exam_performance_analysis(exams: list[Exam], subjects: list[Subject], client=None) -> list[str]:
    graded = [e for e in exams if e.is_graded]
    if not graded:
        return list(NO_GRADES_ANALYSIS)
    names = {s.id: s.name for s in subjects}
    summary = [
        {
            "subject": names.get(e.subject_id, "Unknown"),
            "type": e.type,
            "score": f"{e.obtained_marks}/{e.total_marks}",
            "percentage": percentage(e),
            "date": e.date,
        }
        for e in graded
    ]
    prompt = (
        f"As an expert academic advisor, analyze graded exam records: {json.dumps(summary)}. "
        'Provide 3 distinct strategic tips. Output JSON: {"analysis": ["...", "...", "..."]}'
    )
    return _generate_list(prompt, "analysis", FALLBACK_ANALYSIS, client)


def generate_subject_chapters(subject_name: str, client=None) -> list[str]:
    prompt = (
        f"Provide a list of 5-8 common core chapters for the subject: {subject_name}. Keep it brief. "
        'Output JSON: {"chapters": ["..."]}'
    )
    return _generate_list(prompt, "chapters", FALLBACK_CHAPTERS, client)
