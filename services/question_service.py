"""
Category and question services.

The questions webhook is the single source of truth for the questionnaire:
categories are derived from the distinct category names it returns.
"""

import logging
import re
import uuid
from typing import Any, Dict, List, Tuple

from models.category import Category
from models.question import AnswerOption, Question
from services.webhook_client import (
    ADD_CATEGORY_OK,
    ADD_QUESTION_OK,
    DELETE_CATEGORY_OK,
    DELETE_QUESTION_OK,
    EDIT_CATEGORY_OK,
    EDIT_QUESTION_OK,
    WebhookError,
    fetch_webhook_list,
    post_webhook,
)
from state.store import AppStore

logger = logging.getLogger(__name__)


def derived_category_id(name: str) -> str:
    return "cat-derived-" + re.sub(r"\s+", "-", name.lower())


def _map_questions(items: List[Dict[str, Any]]) -> Tuple[List[Category], List[Question]]:
    category_ids: Dict[str, str] = {}
    for item in items:
        name = item.get("categoria")
        if name and name not in category_ids:
            category_ids[name] = derived_category_id(name)

    categories = [Category(id=cid, name=name) for name, cid in category_ids.items()]

    questions = []
    for item in items:
        category_id = category_ids.get(item.get("categoria"))
        if not category_id:
            logger.warning(f"Question {item.get('id')} has no category, skipping")
            continue
        answers = [
            AnswerOption(
                id=f"ans-api-{item['id']}-{index}",
                text=answer.get("texto") or "",
                score=int(answer.get("pontos") or 0),
            )
            for index, answer in enumerate(item.get("respostas") or [])
        ]
        questions.append(
            Question(
                id=f"q-api-{item['id']}",
                category_id=category_id,
                text=item.get("pergunta") or "",
                answers=answers,
            )
        )
    return categories, questions


def fetch_questionnaire_data(store: AppStore) -> None:
    """
    Reload categories and questions. Both collections are fully replaced;
    on any failure both are cleared.
    """
    try:
        items = fetch_webhook_list("questions")
        categories, questions = _map_questions(items)
    except (WebhookError, KeyError, ValueError, TypeError) as e:
        logger.error(f"Could not load questions: {e}")
        store.replace_questions([])
        store.replace_categories([])
        return
    store.replace_categories(categories)
    store.replace_questions(questions)


def add_category(store: AppStore, name: str) -> Category:
    ok, data, msg = post_webhook(
        "add_category", {"name": name}, success_message=ADD_CATEGORY_OK,
        default_error="Falha ao adicionar categoria.",
    )
    if not ok:
        raise WebhookError(msg)
    category = Category(id=f"cat-{uuid.uuid4().hex[:12]}", name=name)
    store.add_category(category)
    return category


def update_category(store: AppStore, category: Category, new_name: str) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "edit_category",
        {
            "action": "editar-categoria",
            "id": category.id,
            "nome_antigo": category.name,
            "nome_novo": new_name,
        },
        success_message=EDIT_CATEGORY_OK,
        default_error="Falha ao atualizar categoria.",
    )
    if ok:
        store.rename_category(category.id, new_name)
    return ok, msg


def delete_category(store: AppStore, category: Category) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "edit_category",
        {"action": "excluir-categoria", "id": category.id, "nome": category.name},
        success_message=DELETE_CATEGORY_OK,
        default_error="Falha ao excluir categoria.",
    )
    if ok:
        store.remove_category(category.id)
    return ok, msg


def add_question(
    store: AppStore, category_id: str, text: str, answers: List[Dict[str, Any]]
) -> Question:
    """
    Create a question with its answer options ({"text", "score"} dicts).
    Raises ValueError for an unknown category and WebhookError when the
    service rejects the question.
    """
    category = store.category_by_id(category_id)
    if not category:
        raise ValueError("Categoria não encontrada para adicionar a pergunta.")

    ok, _, msg = post_webhook(
        "add_question",
        {"categoryId": category_id, "categoria": category.name, "text": text, "answers": answers},
        success_message=ADD_QUESTION_OK,
        default_error="Falha ao adicionar pergunta.",
    )
    if not ok:
        raise WebhookError(msg)

    qid = uuid.uuid4().hex[:12]
    question = Question(
        id=f"q-{qid}",
        category_id=category_id,
        text=text,
        answers=[
            AnswerOption(id=f"ans-{qid}-{i}", text=a["text"], score=int(a["score"]))
            for i, a in enumerate(answers)
        ],
    )
    store.add_question(question)
    return question


def update_question(store: AppStore, question: Question) -> Tuple[bool, str]:
    category = store.category_by_id(question.category_id)
    if not category:
        return False, "Categoria da pergunta não encontrada."

    ok, _, msg = post_webhook(
        "edit_question",
        {
            "id": question.id,
            "pergunta": question.text,
            "categoria_id": question.category_id,
            "categoria_nome": category.name,
            "respostas": [{"texto": a.text, "pontos": a.score} for a in question.answers],
        },
        success_message=EDIT_QUESTION_OK,
        default_error="Falha ao atualizar pergunta.",
    )
    if ok:
        store.replace_question(question)
    return ok, msg


def delete_question(store: AppStore, question: Question) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "delete_question",
        question.to_payload(),
        success_message=DELETE_QUESTION_OK,
        default_error="Falha ao excluir pergunta.",
    )
    if ok:
        store.remove_question(question.id)
    return ok, msg
