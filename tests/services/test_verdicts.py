# tests/services/test_verdicts.py
"""Verdict aggregation and one-shot report resolution."""
from __future__ import annotations

import pytest

from open_court.models import Comment, JurorStats, ModAction, Post, Report, Verdict
from open_court.services.exceptions import (
    DuplicateVoteError,
    InvalidRequestError,
    NotFoundError,
    NotPendingError,
    SelfReportError,
)
from open_court.services.verdicts import (
    RESOLUTION_ACTION,
    ResolutionPolicy,
    VerdictService,
    tally_verdicts,
)


@pytest.fixture()
def service() -> VerdictService:
    return VerdictService(ResolutionPolicy(min_verdicts=4, guilty_ratio=0.5))


@pytest.fixture()
def reporter(make_user):
    return make_user("reporter")


@pytest.fixture()
def report(make_report, reporter, post) -> Report:
    return make_report(reporter, post)


def _resolution_entries(db_session, report: Report) -> list[ModAction]:
    return (
        db_session.query(ModAction)
        .filter(
            ModAction.action == RESOLUTION_ACTION,
            ModAction.target_type == report.target_type,
            ModAction.target_id == report.target_id,
        )
        .all()
    )


def test_policy_below_threshold_is_undecided() -> None:
    """Test that the policy stays undecided below the threshold."""
    policy = ResolutionPolicy(min_verdicts=5)
    assert policy.decide(3, 1) is None
    assert policy.decide(0, 0) is None


def test_policy_tie_resolves_innocent() -> None:
    """Test that ties resolve innocent and majorities decide."""
    policy = ResolutionPolicy(min_verdicts=4, guilty_ratio=0.5)
    assert policy.decide(2, 2) == "innocent"
    assert policy.decide(3, 1) == "guilty"
    assert policy.decide(1, 3) == "innocent"


def test_reporter_cannot_vote_on_own_report(db_session, service, report, reporter) -> None:
    """The reporter is turned away at the verdict boundary."""
    with pytest.raises(SelfReportError):
        service.cast_verdict(db_session, reporter.id, report.id, "guilty")
    assert db_session.query(Verdict).count() == 0


def test_second_vote_from_same_juror_is_rejected(db_session, service, report, make_user) -> None:
    """Test that a juror cannot vote twice on one report."""
    juror = make_user("juror_c")
    service.cast_verdict(db_session, juror.id, report.id, "guilty")

    with pytest.raises(DuplicateVoteError) as exc_info:
        service.cast_verdict(db_session, juror.id, report.id, "innocent")

    assert exc_info.value.message == "Already voted on this case"
    votes = db_session.query(Verdict).filter(Verdict.report_id == report.id).all()
    assert [v.vote for v in votes] == ["guilty"]


def test_invalid_vote_value(db_session, service, report, make_user) -> None:
    """Test that unknown vote values are rejected."""
    juror = make_user()
    with pytest.raises(InvalidRequestError):
        service.cast_verdict(db_session, juror.id, report.id, "maybe")


def test_vote_on_missing_report(db_session, service, make_user) -> None:
    """Test voting on a report that does not exist."""
    juror = make_user()
    with pytest.raises(NotFoundError):
        service.cast_verdict(db_session, juror.id, 424242, "guilty")


def test_three_guilty_one_innocent_resolves_guilty(
    db_session, service, report, post, make_user
) -> None:
    """Crossing the threshold resolves the report, logs it and credits jurors."""
    guilty_jurors = [make_user() for _ in range(3)]
    innocent_juror = make_user()

    for juror in guilty_jurors:
        service.cast_verdict(db_session, juror.id, report.id, "guilty")
    db_session.refresh(report)
    assert report.status == "pending"

    service.cast_verdict(db_session, innocent_juror.id, report.id, "innocent")

    db_session.refresh(report)
    assert report.status == "resolved"
    assert report.outcome == "guilty"
    assert report.resolved_at is not None

    entries = _resolution_entries(db_session, report)
    assert len(entries) == 1
    assert entries[0].moderator_id is None
    assert entries[0].community_id == report.community_id

    db_session.refresh(post)
    assert post.removed is True

    for juror in guilty_jurors:
        stats = db_session.get(JurorStats, juror.id)
        assert stats.cases_reviewed == 1
        assert stats.correct_votes == 1
        assert stats.accuracy == 100.0
    stats = db_session.get(JurorStats, innocent_juror.id)
    assert stats.cases_reviewed == 1
    assert stats.correct_votes == 0
    assert stats.accuracy == 0.0


def test_innocent_outcome_leaves_content_visible(
    db_session, service, make_report, make_user, make_comment, post, author
) -> None:
    """Test that an innocent outcome leaves the content in place."""
    commenter = make_user()
    comment = make_comment(post, commenter)
    report = make_report(author, comment)

    for vote in ("guilty", "innocent", "innocent", "guilty"):
        service.cast_verdict(db_session, make_user().id, report.id, vote)

    db_session.refresh(report)
    assert report.outcome == "innocent"
    assert db_session.get(Comment, comment.id).removed is False


def test_vote_after_resolution_is_rejected(db_session, service, report, make_user) -> None:
    """Test that a closed case refuses further votes."""
    for _ in range(4):
        service.cast_verdict(db_session, make_user().id, report.id, "guilty")

    with pytest.raises(NotPendingError) as exc_info:
        service.cast_verdict(db_session, make_user().id, report.id, "innocent")
    assert exc_info.value.message == "Case already closed"


def test_re_evaluation_is_idempotent(db_session, service, report, make_user) -> None:
    """Running evaluation again never re-resolves or duplicates the log entry."""
    for _ in range(4):
        service.cast_verdict(db_session, make_user().id, report.id, "guilty")

    assert service.evaluate_report(db_session, report.id) is None
    assert service.evaluate_report(db_session, report.id) is None
    assert service.resolve_pending_reports(db_session) == 0

    db_session.refresh(report)
    assert report.status == "resolved"
    assert len(_resolution_entries(db_session, report)) == 1


def test_resolve_pending_heals_stuck_reports(db_session, report, make_user) -> None:
    """Votes recorded under a stricter policy resolve once the sweep runs."""
    strict = VerdictService(ResolutionPolicy(min_verdicts=10))
    for _ in range(4):
        strict.cast_verdict(db_session, make_user().id, report.id, "innocent")
    db_session.refresh(report)
    assert report.status == "pending"

    relaxed = VerdictService(ResolutionPolicy(min_verdicts=4))
    assert relaxed.resolve_pending_reports(db_session) == 1

    db_session.refresh(report)
    assert report.outcome == "innocent"


def test_case_summary_reports_tally(db_session, service, report, make_user) -> None:
    """Test that the case summary carries the current tally."""
    service.cast_verdict(db_session, make_user().id, report.id, "guilty")
    service.cast_verdict(db_session, make_user().id, report.id, "innocent")

    summary = service.get_case_summary(db_session, report.id)
    assert summary["status"] == "pending"
    assert (summary["guilty"], summary["innocent"]) == (1, 1)
    assert tally_verdicts(db_session, report.id).total == 2


def test_verdict_history_marks_correctness(db_session, service, report, make_user) -> None:
    """Test that history marks correctness only once resolved."""
    juror = make_user()
    service.cast_verdict(db_session, juror.id, report.id, "innocent")

    history = service.list_verdict_history(db_session, juror.id)
    assert len(history) == 1
    assert history[0]["was_correct"] is None

    for _ in range(3):
        service.cast_verdict(db_session, make_user().id, report.id, "guilty")

    history = service.list_verdict_history(db_session, juror.id)
    assert history[0]["status"] == "resolved"
    assert history[0]["outcome"] == "guilty"
    assert history[0]["was_correct"] is False


def test_guilty_post_report_removes_post(db_session, service, report, post, make_user) -> None:
    """Test that a guilty verdict soft-removes the post."""
    for _ in range(4):
        service.cast_verdict(db_session, make_user().id, report.id, "guilty")
    assert db_session.query(Post).filter(Post.id == post.id, Post.removed.is_(True)).count() == 1
