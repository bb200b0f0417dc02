"""
Submission services:
- fetch the score records and build the dashboard view for the current user
- add a completed questionnaire (optimistic insert, then webhook call)
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from models.log_entry import LogType
from models.submission import Submission, SyncStatus
from models.user import UserRole
from services.log_service import add_log_entry
from services.scoring import aggregate_company_scores, company_user_scores
from services.webhook_client import SUBMIT_ANSWERS_OK, WebhookError, fetch_webhook_list, post_webhook
from state.store import AppStore

logger = logging.getLogger(__name__)

NOT_FOUND = "Não encontrado"


def fetch_submissions(store: AppStore) -> None:
    """
    Rebuild the submissions cache from the scores webhook.
    Categories and questions must be loaded first, since max scores are
    derived from them.
    """
    if not store.categories or not store.questions:
        logger.warning("Categories and questions not loaded yet; skipping submissions fetch")
        return

    user = store.current_user
    try:
        records = fetch_webhook_list("scores")
        if user is None:
            store.replace_submissions([])
        elif user.role == UserRole.ADMIN:
            companies, submissions = aggregate_company_scores(records, store.categories, store.questions)
            store.replace_company_users(companies)
            store.replace_submissions(submissions)
        else:
            store.replace_submissions(
                company_user_scores(records, user, store.categories, store.questions)
            )
    except (WebhookError, KeyError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Could not load scores: {e}")
        if user is not None and user.role == UserRole.ADMIN:
            store.clear_company_users()
        store.replace_submissions([])


def _detailed_answers(store: AppStore, submission: Submission) -> List[Dict[str, Any]]:
    detailed = []
    for answer in submission.answers:
        question = next((q for q in store.questions if q.id == answer.question_id), None)
        option = None
        if question:
            option = next((a for a in question.answers if a.score == answer.score), None)
        detailed.append(
            {
                "questionId": answer.question_id,
                "questionText": question.text if question else NOT_FOUND,
                "selectedAnswerText": option.text if option else NOT_FOUND,
                "score": answer.score,
            }
        )
    return detailed


def add_submission(store: AppStore, draft: Submission) -> Submission:
    """
    Insert the submission locally, then send it to the webhook.
    The local entry is never rolled back: it is marked confirmed when the
    service acknowledges it and failed otherwise.
    """
    user = store.current_user
    if not user:
        raise ValueError("Não há usuário logado para enviar o questionário.")

    draft.id = f"sub-{uuid.uuid4().hex[:12]}"
    draft.date = datetime.now(timezone.utc).isoformat()
    draft.sync_status = SyncStatus.PENDING
    store.add_submission(draft)
    add_log_entry(
        store,
        LogType.QUESTIONNAIRE_SUBMISSION,
        f'Questionário "{draft.category_name}" foi enviado por {draft.company_name}.',
    )

    payload = {
        "userData": {
            "id": user.id,
            "name": user.name,
            "companyName": user.company_name,
            "email": user.email,
            "phone": user.phone,
        },
        "questionnaireData": {
            "categoryId": draft.category_id,
            "categoryName": draft.category_name,
            "totalScore": draft.total_score,
            "maxScore": draft.max_score,
            "submissionDate": draft.date,
            "answers": _detailed_answers(store, draft),
        },
    }
    ok, _, msg = post_webhook(
        "submit_answers", payload, success_message=SUBMIT_ANSWERS_OK,
        default_error="Erro desconhecido",
    )
    if ok:
        store.set_submission_status(draft.id, SyncStatus.CONFIRMED)
    else:
        logger.error(f"Submission {draft.id} was not accepted by the webhook: {msg}")
        store.set_submission_status(draft.id, SyncStatus.FAILED)
    return draft
