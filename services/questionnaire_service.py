"""
Questionnaire flow: pick an unanswered category, choose one answer per
question, then turn the choices into a submission draft.
"""

from typing import Dict, List

from models.category import Category
from models.question import Question
from models.submission import Submission, SubmissionAnswer
from models.user import User
from services.scoring import category_max_score
from state.store import AppStore


def available_categories(store: AppStore, user: User) -> List[Category]:
    """Categories the user has not answered yet that have at least one question."""
    completed = {s.category_id for s in store.submissions_for_user(user.id)}
    return [
        c for c in store.categories
        if c.id not in completed and store.questions_for_category(c.id)
    ]


def can_submit(questions: List[Question], selected: Dict[str, str]) -> bool:
    """True when every question has exactly one valid answer chosen."""
    if not questions:
        return False
    for question in questions:
        answer_id = selected.get(question.id)
        if answer_id is None or question.answer_by_id(answer_id) is None:
            return False
    return True


def build_submission(
    user: User, category: Category, questions: List[Question], selected: Dict[str, str]
) -> Submission:
    """
    Compute the answers, total and max score for a completed questionnaire.
    `selected` maps question id -> chosen answer id. The id and date are
    assigned when the submission is added.
    """
    if not can_submit(questions, selected):
        raise ValueError("Por favor, responda todas as perguntas antes de enviar.")

    answers = []
    for question in questions:
        answer = question.answer_by_id(selected[question.id])
        answers.append(SubmissionAnswer(question_id=question.id, score=answer.score))

    return Submission(
        id="",
        user_id=user.id,
        company_name=user.company_name,
        category_id=category.id,
        category_name=category.name,
        answers=answers,
        total_score=sum(a.score for a in answers),
        max_score=category_max_score(questions),
    )
