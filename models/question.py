"""
Question model: a single-choice question belonging to a Category.
Each answer option carries the integer score it adds to a submission.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class AnswerOption:
    id: str
    text: str
    score: int


@dataclass
class Question:
    id: str
    category_id: str
    text: str
    answers: List[AnswerOption] = field(default_factory=list)

    @property
    def max_score(self) -> int:
        """Highest score attainable on this question, 0 when it has no answers."""
        if not self.answers:
            return 0
        return max(a.score for a in self.answers)

    def answer_by_id(self, answer_id: str):
        for answer in self.answers:
            if answer.id == answer_id:
                return answer
        return None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "categoryId": self.category_id,
            "text": self.text,
            "answers": [
                {"id": a.id, "text": a.text, "score": a.score} for a in self.answers
            ],
        }

    def __repr__(self) -> str:
        return f"<Question {self.id} in {self.category_id} ({len(self.answers)} answers)>"
