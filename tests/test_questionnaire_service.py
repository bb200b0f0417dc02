import pytest

from models.submission import Submission
from services.questionnaire_service import available_categories, build_submission, can_submit


def test_submit_requires_one_answer_per_question(loaded_store):
    questions = loaded_store.questions_for_category("cat-derived-atendimento")
    assert not can_submit(questions, {})
    assert not can_submit(questions, {"q-api-1": "ans-api-1-1"})
    assert can_submit(questions, {"q-api-1": "ans-api-1-1", "q-api-2": "ans-api-2-1"})


def test_answer_from_another_question_does_not_count(loaded_store):
    questions = loaded_store.questions_for_category("cat-derived-atendimento")
    assert not can_submit(questions, {"q-api-1": "ans-api-1-1", "q-api-2": "ans-api-1-0"})


def test_category_without_questions_cannot_be_submitted():
    assert not can_submit([], {})


def test_build_submission_computes_total_and_max(loaded_store, company_user):
    category = loaded_store.category_by_id("cat-derived-atendimento")
    questions = loaded_store.questions_for_category(category.id)

    draft = build_submission(
        company_user, category, questions, {"q-api-1": "ans-api-1-1", "q-api-2": "ans-api-2-1"}
    )

    assert draft.total_score == 12
    assert draft.max_score == 15
    assert [(a.question_id, a.score) for a in draft.answers] == [("q-api-1", 7), ("q-api-2", 5)]
    assert draft.category_name == "Atendimento"
    assert draft.company_name == "Acme"


def test_build_submission_rejects_incomplete_answers(loaded_store, company_user):
    category = loaded_store.category_by_id("cat-derived-atendimento")
    with pytest.raises(ValueError):
        build_submission(
            company_user, category, loaded_store.questions_for_category(category.id),
            {"q-api-1": "ans-api-1-1"},
        )


def test_available_categories_hide_answered_and_empty(loaded_store, company_user):
    from models.category import Category

    loaded_store.add_category(Category(id="cat-empty", name="Sem perguntas"))
    loaded_store.add_submission(
        Submission(id="s1", user_id=company_user.id, company_name="Acme",
                   category_id="cat-derived-vendas", category_name="Vendas")
    )

    names = [c.name for c in available_categories(loaded_store, company_user)]
    assert names == ["Atendimento"]
