"""
Submission model: a completed questionnaire for one category.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class SyncStatus(str, Enum):
    """Whether the remote service has acknowledged a locally created submission."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class SubmissionAnswer:
    question_id: str
    score: int


@dataclass
class Submission:
    id: str
    user_id: str
    company_name: str
    category_id: str
    category_name: str
    answers: List[SubmissionAnswer] = field(default_factory=list)
    total_score: int = 0
    max_score: int = 0
    date: str = ""
    # Records mapped from the scores webhook are already on the server.
    sync_status: SyncStatus = SyncStatus.CONFIRMED

    def __repr__(self) -> str:
        return (
            f"<Submission {self.id} {self.company_name}/{self.category_name} "
            f"{self.total_score}/{self.max_score}>"
        )
