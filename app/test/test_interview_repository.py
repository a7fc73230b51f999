"""
Test Interview Repository

Checks the record mapping and the version guard on writes.
"""

import pytest

from app.errors.exceptions import InterviewNotFound, SessionConflictError
from app.schemas.mock_interview import InterviewStatus
from app.services.mock_interview.interview_repository import InterviewRepository
from app.services.mock_interview.session_machine import InterviewSessionMachine


def test_create_and_load(seed_interview, load_interview):
    record = seed_interview(company="Microsoft", role_level="director")
    loaded = load_interview(record.id)

    assert loaded.company == "Microsoft"
    assert loaded.roleLevel == "director"
    assert loaded.status is InterviewStatus.IN_PROGRESS
    assert loaded.version == 1
    assert loaded.startedAt.tzinfo is not None
    assert loaded.conversation.messages[0].questionIndex == 1


def test_load_owned_hides_other_users(session_factory, seed_interview):
    record = seed_interview(user_id="owner")
    with session_factory() as db:
        with pytest.raises(InterviewNotFound):
            InterviewRepository(db).load_owned(record.id, "someone-else")


def test_save_bumps_version(session_factory, seed_interview, load_interview):
    record = seed_interview()
    closed = InterviewSessionMachine().force_close(record, InterviewStatus.ABANDONED)

    with session_factory() as db:
        saved = InterviewRepository(db).save(closed)

    assert saved.version == 2
    stored = load_interview(record.id)
    assert stored.version == 2
    assert stored.status is InterviewStatus.ABANDONED


def test_stale_save_is_rejected(session_factory, seed_interview, load_interview):
    record = seed_interview()
    machine = InterviewSessionMachine()

    with session_factory() as db:
        InterviewRepository(db).save(machine.force_close(record, InterviewStatus.COMPLETED))

    with session_factory() as db:
        with pytest.raises(SessionConflictError):
            InterviewRepository(db).save(machine.force_close(record, InterviewStatus.ABANDONED))

    assert load_interview(record.id).status is InterviewStatus.COMPLETED


def test_list_and_count(session_factory, seed_interview):
    first = seed_interview()
    second = seed_interview()
    seed_interview(user_id="other")

    with session_factory() as db:
        repository = InterviewRepository(db)
        repository.save(InterviewSessionMachine().force_close(first, InterviewStatus.COMPLETED))
        listed = repository.list_for_user("user-1")
        counts = repository.count_for_user("user-1")

    assert [r.id for r in listed] == [second.id, first.id]
    assert counts == (2, 1)
