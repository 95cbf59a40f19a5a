"""CSV export for leads/events/tasks and lead CSV import"""
import csv
import io
import logging
import re
import unicodedata
from datetime import datetime
from typing import Any, Iterable, Optional

from email_validator import validate_email, EmailNotValidError
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from src.eventra.models.event import Event
from src.eventra.models.lead import Lead
from src.eventra.models.task import Task
from src.eventra.schemas.lead import LeadImportResult, LeadImportRowError

logger = logging.getLogger(__name__)

LEAD_EXPORT_COLUMNS = [
    "first_name", "last_name", "email", "company", "job_title", "event", "lead_score", "lead_status",
]
EVENT_EXPORT_COLUMNS = [
    "name", "event_type", "start_date", "end_date", "location", "total_budget", "target_leads", "actual_leads",
]
TASK_EXPORT_COLUMNS = [
    "title", "status", "priority", "due_date", "event", "owner", "description",
]
LEAD_IMPORT_TEMPLATE_COLUMNS = [
    "first_name", "last_name", "email", "company", "job_title", "phone", "industry", "event_id",
]

COLUMN_ALIASES: dict[str, list[str]] = {
    "first_name": ["first_name", "firstname", "first", "given_name", "forename"],
    "last_name": ["last_name", "lastname", "last", "surname", "family_name"],
    "name": ["name", "full_name", "fullname", "contact_name"],
    "email": ["email", "e-mail", "mail", "email_address", "emailaddress"],
    "company": ["company", "company_name", "organization", "organisation", "employer"],
    "job_title": ["job_title", "jobtitle", "title", "position", "role"],
    "phone": ["phone", "phone_number", "telephone", "mobile", "tel"],
    "industry": ["industry", "sector", "vertical"],
    "event_id": ["event_id", "eventid"],
    "event": ["event", "event_name", "eventname"],
    "lead_score": ["lead_score", "leadscore", "score"],
    "status": ["lead_status", "leadstatus", "status"],
}

ENCODINGS = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]


def to_csv(headers: list[str], rows: Iterable[list[Any]]) -> str:
    """Values with a comma, quote or newline are quoted; None becomes empty."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if value is None else _format_value(value) for value in row])
    return buffer.getvalue()


def _format_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def export_leads_csv(db: Session, event_id: Optional[str] = None) -> str:
    query = select(Lead).order_by(Lead.created_at)
    if event_id:
        query = query.where(Lead.event_id == event_id)
    leads = db.execute(query).scalars().all()
    return to_csv(LEAD_EXPORT_COLUMNS, (
        [
            lead.first_name,
            lead.last_name,
            lead.email,
            lead.company,
            lead.job_title,
            lead.event.name if lead.event else None,
            lead.lead_score,
            lead.status,
        ]
        for lead in leads
    ))


def export_events_csv(db: Session) -> str:
    events = db.execute(select(Event).order_by(Event.start_date)).scalars().all()
    return to_csv(EVENT_EXPORT_COLUMNS, (
        [
            event.name,
            event.event_type,
            event.start_date,
            event.end_date,
            event.location,
            event.total_budget,
            event.target_leads,
            event.actual_leads,
        ]
        for event in events
    ))


def export_tasks_csv(db: Session, event_id: Optional[str] = None) -> str:
    query = select(Task).order_by(Task.due_date)
    if event_id:
        query = query.where(Task.event_id == event_id)
    tasks = db.execute(query).scalars().all()
    return to_csv(TASK_EXPORT_COLUMNS, (
        [
            task.title,
            task.status,
            task.priority,
            task.due_date,
            task.event.name if task.event else None,
            task.assignee.name if task.assignee else None,
            task.description,
        ]
        for task in tasks
    ))


def lead_import_template() -> str:
    return to_csv(LEAD_IMPORT_TEMPLATE_COLUMNS, [])


def decode_csv_content(content: bytes) -> str:
    for encoding in ENCODINGS:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue
    raise ValueError("Unable to decode CSV file. Supported encodings: UTF-8, Windows-1252, Latin-1")


def normalize_column_name(name: str) -> str:
    normalized = unicodedata.normalize("NFKC", name or "").lower().strip()
    return re.sub(r"[\s\-\.]+", "_", normalized)


def map_column_name(raw_name: str) -> Optional[str]:
    normalized = normalize_column_name(raw_name)
    for canonical, aliases in COLUMN_ALIASES.items():
        if normalized in (normalize_column_name(a) for a in aliases):
            return canonical
    return None


def auto_map_columns(headers: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    taken: set[str] = set()
    for header in headers:
        canonical = map_column_name(header)
        if canonical and canonical not in taken:
            mapping[header] = canonical
            taken.add(canonical)
    return mapping


def validate_and_normalize_row(row: dict[str, str], mapping: dict[str, str]) -> tuple[dict[str, Any], list[str]]:
    errors: list[str] = []
    mapped = {
        mapping[column]: (value or "").strip()
        for column, value in row.items()
        if column in mapping
    }
    normalized: dict[str, Any] = {}

    email = mapped.get("email", "")
    if not email:
        errors.append("email is required")
    else:
        try:
            validate_email(email, check_deliverability=False)
            normalized["email"] = email
        except EmailNotValidError as e:
            errors.append(f"invalid email format: {str(e)}")

    first_name = mapped.get("first_name", "")
    last_name = mapped.get("last_name", "")
    if not first_name and not last_name and mapped.get("name"):
        first_name, _, last_name = mapped["name"].partition(" ")
    normalized["first_name"] = first_name
    normalized["last_name"] = last_name.strip()

    for field in ("company", "job_title", "phone", "industry", "status"):
        if mapped.get(field):
            normalized[field] = mapped[field]

    if mapped.get("lead_score"):
        try:
            normalized["lead_score"] = int(float(mapped["lead_score"]))
        except ValueError:
            errors.append(f"lead_score must be a number: '{mapped['lead_score']}'")

    if mapped.get("event_id"):
        normalized["event_id"] = mapped["event_id"]
    elif mapped.get("event"):
        normalized["event_name"] = mapped["event"]

    return normalized, errors


def _resolve_event_id(db: Session, normalized: dict[str, Any], cache: dict[str, Optional[str]]) -> Optional[str]:
    if "event_id" in normalized:
        key = f"id:{normalized['event_id']}"
        if key not in cache:
            event = db.get(Event, normalized["event_id"])
            cache[key] = event.id if event else None
        return cache[key]
    if "event_name" in normalized:
        key = f"name:{normalized['event_name']}"
        if key not in cache:
            cache[key] = db.execute(
                select(Event.id).where(Event.name == normalized["event_name"]).limit(1)
            ).scalar_one_or_none()
        return cache[key]
    return None


def import_leads_csv(db: Session, csv_content: str, default_event_id: Optional[str] = None) -> LeadImportResult:
    reader = csv.DictReader(io.StringIO(csv_content))
    mapping = auto_map_columns(reader.fieldnames or [])

    added = 0
    updated = 0
    errors: list[LeadImportRowError] = []
    seen: dict[str, Lead] = {}
    event_cache: dict[str, Optional[str]] = {}

    for idx, row in enumerate(reader):
        row_num = idx + 2
        normalized, row_errors = validate_and_normalize_row(row, mapping)

        event_id = _resolve_event_id(db, normalized, event_cache) or default_event_id
        if "event_id" in normalized and event_id is None:
            row_errors.append(f"event not found: '{normalized['event_id']}'")

        if row_errors:
            errors.append(LeadImportRowError(
                row_number=row_num,
                errors=row_errors,
                original_data={k: v or "" for k, v in row.items() if k is not None},
            ))
            continue

        normalized.pop("event_name", None)
        normalized.pop("event_id", None)
        if event_id:
            normalized["event_id"] = event_id

        key = normalized["email"].lower()
        lead = seen.get(key) or db.execute(
            select(Lead).where(func.lower(Lead.email) == key)
        ).scalars().first()

        if lead:
            for field, value in normalized.items():
                setattr(lead, field, value)
            updated += 1
        else:
            lead = Lead(**normalized)
            db.add(lead)
            added += 1
        seen[key] = lead

    db.commit()
    logger.info(f"Lead CSV import: added={added}, updated={updated}, errors={len(errors)}")

    return LeadImportResult(
        added=added,
        updated=updated,
        skipped=len(errors),
        errors=errors,
        total_processed=added + updated + len(errors),
    )
