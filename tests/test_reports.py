import pytest

from skillswap.core.errors import ValidationError
from skillswap.reports.models import Report, ReportReason
from skillswap.reports.registry import count_reports_for_session, file_report, list_reports


def test_file_report_records_every_call(store, make_user):
    reporter = make_user()
    first = file_report(store, 7, reporter.id, "no-show", "Never joined")
    second = file_report(store, 7, reporter.id, "no-show")

    assert first.id != second.id
    assert first.description == "Never joined"
    assert second.description is None
    assert count_reports_for_session(store, 7) == 2
    assert count_reports_for_session(store, 8) == 0


@pytest.mark.parametrize("reason", [r.value for r in ReportReason])
def test_all_known_reasons_accepted(store, reason):
    report = file_report(store, 1, 1, reason)
    assert report.reason == reason


@pytest.mark.parametrize("reason", [None, ""])
def test_reason_required(store, reason):
    with pytest.raises(ValidationError) as exc:
        file_report(store, 1, 1, reason)
    assert exc.value.message == "Please select a reason for reporting."
    assert store.select(Report).unwrap() == []


def test_unknown_reason_rejected(store):
    with pytest.raises(ValidationError):
        file_report(store, 1, 1, "spam")


def test_list_reports_newest_first(store):
    older = file_report(store, 1, 1, "fake-user")
    newer = file_report(store, 2, 1, "payment-scam")
    assert [r.id for r in list_reports(store)] == [newer.id, older.id]
