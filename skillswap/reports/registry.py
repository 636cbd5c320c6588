import logging
from typing import List, Optional

from skillswap.core.errors import ValidationError
from skillswap.db.store import Store
from skillswap.reports.models import Report, ReportReason

logger = logging.getLogger(__name__)


def file_report(
    store: Store,
    session_id: int,
    from_user_id: int,
    reason: str,
    description: Optional[str] = None,
) -> Report:
    """Record an abuse report against a session. No dedup: every call inserts."""
    if not reason:
        raise ValidationError("Please select a reason for reporting.")
    try:
        reason = ReportReason(reason)
    except ValueError:
        allowed = ", ".join(r.value for r in ReportReason)
        raise ValidationError(f"Unknown report reason '{reason}'. Expected one of: {allowed}")

    report = store.insert(Report, {
        "session_id": session_id,
        "from_user_id": from_user_id,
        "reason": reason.value,
        "description": description or None,
    }).unwrap()
    logger.info("[REPORT] session=%s from=%s reason=%s", session_id, from_user_id, reason.value)
    return report


def count_reports_for_session(store: Store, session_id: int) -> int:
    return len(store.select(Report, session_id=session_id).unwrap())


def list_reports(store: Store) -> List[Report]:
    return store.select(Report, order_by=("-created_at", "-id")).unwrap()
