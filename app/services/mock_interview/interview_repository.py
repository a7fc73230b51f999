"""
Interview Repository Module

This module is the persistence boundary for mock interview sessions. It maps
MockInterview rows to InterviewSessionRecord values and back.

Writes are whole-record and guarded by the ``version`` column: ``save`` issues
one ``UPDATE ... WHERE id = :id AND version = :version`` and raises
SessionConflictError when another writer got there first. Callers build the
complete next state in memory and call ``save`` once, so a partially applied
turn is never visible.

Dependencies:
- sqlalchemy: For ORM queries and the guarded update.
- loguru: For logging operations.
- app.models.interview_models: For the MockInterview table.
- app.schemas.mock_interview: For the session record and message codecs.
- app.errors.exceptions: For not-found and conflict errors.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from loguru import logger
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.errors.exceptions import InterviewNotFound, SessionConflictError
from app.models.interview_models import MockInterview
from app.schemas.mock_interview import (
    ConversationState,
    InterviewSessionRecord,
    InterviewStatus,
    Message,
    dump_messages,
    load_messages,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class InterviewRepository:
    """Load and save mock interview sessions through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_record(row: MockInterview) -> InterviewSessionRecord:
        return InterviewSessionRecord(
            id=row.id,
            userId=row.user_id,
            company=row.company,
            roleLevel=row.role_level,
            status=InterviewStatus(row.status),
            conversation=ConversationState(messages=load_messages(row.messages)),
            totalTurns=row.total_turns,
            overallScore=row.overall_score,
            finalSummary=row.final_summary,
            startedAt=_as_utc(row.started_at),
            completedAt=_as_utc(row.completed_at),
            version=row.version,
        )

    def create(self, user_id: str, company: str, role_level: str, messages: List[Message]) -> InterviewSessionRecord:
        row = MockInterview(
            user_id=user_id,
            company=company,
            role_level=role_level,
            status=InterviewStatus.IN_PROGRESS.value,
            messages=dump_messages(messages),
            total_turns=0,
            version=1,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        logger.info(f"[Session {row.id}] Created mock interview for {company} ({role_level})")
        return self.to_record(row)

    def load(self, session_id: str) -> Optional[InterviewSessionRecord]:
        row = self.db.get(MockInterview, session_id, populate_existing=True)
        return self.to_record(row) if row is not None else None

    def load_owned(self, session_id: str, user_id: str) -> InterviewSessionRecord:
        """
        Load a session owned by ``user_id``.

        Raises:
            InterviewNotFound: If the session is missing or belongs to someone else.
        """
        record = self.load(session_id)
        if record is None or record.userId != user_id:
            raise InterviewNotFound(session_id)
        return record

    def save(self, record: InterviewSessionRecord) -> InterviewSessionRecord:
        """
        Persist ``record`` if the stored row is still at ``record.version``.

        Returns:
            InterviewSessionRecord: The saved record with its version bumped.

        Raises:
            SessionConflictError: If the row changed since ``record`` was loaded.
        """
        next_version = record.version + 1
        statement = (
            update(MockInterview)
            .where(MockInterview.id == record.id, MockInterview.version == record.version)
            .values(
                status=record.status.value,
                messages=dump_messages(record.conversation.messages),
                total_turns=record.totalTurns,
                overall_score=record.overallScore,
                final_summary=record.finalSummary,
                completed_at=record.completedAt,
                version=next_version,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            if result.rowcount != 1:
                self.db.rollback()
                logger.warning(f"[Session {record.id}] Rejected stale write at version {record.version}")
                raise SessionConflictError(record.id)
            self.db.commit()
        except SessionConflictError:
            raise
        except Exception:
            self.db.rollback()
            raise

        logger.debug(f"[Session {record.id}] Saved version {next_version}")
        return record.model_copy(update={"version": next_version})

    def list_for_user(self, user_id: str) -> List[InterviewSessionRecord]:
        rows = self.db.scalars(
            select(MockInterview)
            .where(MockInterview.user_id == user_id)
            .order_by(MockInterview.started_at.desc())
        ).all()
        return [self.to_record(row) for row in rows]

    def count_for_user(self, user_id: str) -> Tuple[int, int]:
        """Return (total, completed) interview counts for ``user_id``."""
        total = self.db.scalar(
            select(func.count()).select_from(MockInterview).where(MockInterview.user_id == user_id)
        )
        completed = self.db.scalar(
            select(func.count())
            .select_from(MockInterview)
            .where(
                MockInterview.user_id == user_id,
                MockInterview.status == InterviewStatus.COMPLETED.value,
            )
        )
        return total or 0, completed or 0
