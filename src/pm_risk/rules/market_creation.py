from datetime import datetime, timedelta

from src.pm_common.errors import InvalidDeadlineError, InvalidQuestionError


def check_question(question: str) -> None:
    if not question or not question.strip():
        raise InvalidQuestionError()


def check_deadline(deadline: datetime, now: datetime, horizon_days: int) -> None:
    """Deadline must be strictly in the future and at most horizon_days ahead."""
    if deadline <= now:
        raise InvalidDeadlineError("must be in the future")
    if deadline > now + timedelta(days=horizon_days):
        raise InvalidDeadlineError(f"must be within {horizon_days} days")
