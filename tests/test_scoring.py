import logging

import pytest

from models.category import Category
from models.question import AnswerOption, Question
from services.scoring import (
    aggregate_company_scores,
    category_max_score,
    company_user_scores,
    get_maturity_level,
    overall_submission,
    score_percentage,
)


@pytest.mark.parametrize("total", [0, 5, 100])
def test_zero_max_score_is_lowest_band(total):
    assert get_maturity_level(total, 0)["level"] == "Crítico"
    assert score_percentage(total, 0) == 0.0


@pytest.mark.parametrize(
    "total,expected",
    [
        (0, "Crítico"),
        (30, "Crítico"),
        (31, "Precário"),
        (50, "Precário"),
        (51, "Mediano"),
        (70, "Mediano"),
        (71, "Avançado"),
        (100, "Avançado"),
    ],
)
def test_band_boundaries_are_inclusive_on_lower_band(total, expected):
    assert get_maturity_level(total, 100)["level"] == expected


def test_fractional_percentage_just_above_boundary():
    # 301/1000 = 30.1%
    assert get_maturity_level(301, 1000)["level"] == "Precário"


def test_two_question_example_is_advanced(loaded_store):
    questions = loaded_store.questions_for_category("cat-derived-atendimento")
    assert category_max_score(questions) == 15
    assert round(score_percentage(12, 15)) == 80
    assert get_maturity_level(12, 15)["level"] == "Avançado"


def test_question_without_answers_has_zero_max():
    assert Question(id="q", category_id="c", text="?").max_score == 0
    assert category_max_score([Question(id="q", category_id="c", text="?")]) == 0


def test_question_max_accepts_negative_scores():
    q = Question(
        id="q", category_id="c", text="?",
        answers=[AnswerOption(id="a", text="x", score=-3), AnswerOption(id="b", text="y", score=-1)],
    )
    assert q.max_score == -1


def _record(id_, empresa, categoria, pontos, telefone="11999990000", nome="João"):
    return {"id": id_, "nome": nome, "empresa": empresa, "telefone": telefone,
            "categoria": categoria, "pontos": pontos}


def test_admin_aggregation_groups_by_company_and_category(loaded_store):
    records = [
        _record(1, "Acme", "Atendimento", 12),
        _record(2, "Acme", "Atendimento", 6),
        _record(3, "Acme", "Vendas", 10),
        _record(4, "Beta Ltda", "Vendas", 2, telefone="2133334444", nome="Maria"),
    ]
    companies, submissions = aggregate_company_scores(
        records, loaded_store.categories, loaded_store.questions
    )

    assert [c.company_name for c in companies] == ["Acme", "Beta Ltda"]
    assert companies[1].id == "company-api-Beta-Ltda-1"
    assert companies[1].email == "betaltda@placeholder.com"
    assert companies[1].phone == "2133334444"

    by_key = {(s.company_name, s.category_name): s for s in submissions}
    acme_service = by_key[("Acme", "Atendimento")]
    assert acme_service.total_score == 18
    assert acme_service.max_score == 30  # 15 per submission x 2 submissions
    assert acme_service.id == "sub-agg-Acme-cat-derived-atendimento"
    assert acme_service.user_id == companies[0].id
    assert by_key[("Beta Ltda", "Vendas")].max_score == 10


def test_admin_aggregation_skips_unknown_category(loaded_store, caplog):
    records = [_record(1, "Acme", "Financeiro", 5), _record(2, "Acme", "Vendas", 10)]
    with caplog.at_level(logging.WARNING):
        companies, submissions = aggregate_company_scores(
            records, loaded_store.categories, loaded_store.questions
        )
    assert len(companies) == 1
    assert [s.category_name for s in submissions] == ["Vendas"]
    assert "Financeiro" in caplog.text


def test_zero_max_with_points_is_logged_not_fatal(caplog):
    categories = [Category(id="cat-vazia", name="Vazia")]
    questions = [Question(id="q", category_id="cat-vazia", text="?")]
    with caplog.at_level(logging.WARNING):
        _, submissions = aggregate_company_scores(
            [_record(1, "Acme", "Vazia", 4)], categories, questions
        )
    assert submissions[0].max_score == 0
    assert get_maturity_level(submissions[0].total_score, submissions[0].max_score)["level"] == "Crítico"
    assert "zero" in caplog.text


def test_empty_records_aggregate_to_nothing(loaded_store):
    assert aggregate_company_scores([], loaded_store.categories, loaded_store.questions) == ([], [])


def test_company_view_keeps_only_own_records_unaggregated(loaded_store, company_user):
    records = [
        _record(1, "Acme", "Atendimento", 12),
        _record(2, "Acme", "Vendas", 10),
        _record(3, "Acme", "Vendas", 4, telefone="0000"),  # same company, other phone
        _record(4, "Beta", "Vendas", 2),
    ]
    submissions = company_user_scores(
        records, company_user, loaded_store.categories, loaded_store.questions
    )
    assert [(s.category_name, s.total_score, s.max_score) for s in submissions] == [
        ("Atendimento", 12, 15),
        ("Vendas", 10, 10),
    ]
    assert all(s.user_id == company_user.id for s in submissions)
    assert submissions[0].id == "sub-user-user-joao@acme.com-cat-derived-atendimento-1"


def test_overall_submission_sums_categories(loaded_store, company_user):
    submissions = company_user_scores(
        [_record(1, "Acme", "Atendimento", 12), _record(2, "Acme", "Vendas", 3)],
        company_user, loaded_store.categories, loaded_store.questions,
    )
    overall = overall_submission(submissions, company_user)
    assert overall.category_name == "Resultado Geral"
    assert (overall.total_score, overall.max_score) == (15, 25)
    assert overall_submission([], company_user) is None
