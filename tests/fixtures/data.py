"""
Sample request data for CaseDesk tests.

Builders return fresh dicts so tests can modify them freely.
"""

from datetime import datetime, timedelta

DEFAULT_PASSWORD = "Secret123"

CONCLUSION_SUMMARY = (
    "Witness statements and the email record consistently support the reported "
    "conduct on the dates given."
)


def complaint_payload(accused_id: int, **overrides) -> dict:
    payload = {
        "accused_id": accused_id,
        "type": "psychological",
        "severity": "high",
        "priority": "normal",
        "title": "Repeated verbal abuse in meetings",
        "description": "During the weekly team meeting the accused shouted insults at me in front of the team.",
        "location": "Meeting room 3",
        "incident_date": (datetime.utcnow() - timedelta(days=3)).isoformat(),
    }
    payload.update(overrides)
    return payload


def investigation_payload(complaint_id: int, investigator_id: int, **overrides) -> dict:
    payload = {
        "complaint_id": complaint_id,
        "investigator_id": investigator_id,
        "priority": "high",
        "estimated_completion_date": (datetime.utcnow() + timedelta(days=30)).isoformat(),
        "scope": "Conduct of the accused in team meetings during the last quarter",
        "objectives": ["Interview witnesses", "Review meeting recordings"],
    }
    payload.update(overrides)
    return payload
