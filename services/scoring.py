"""
Score aggregation for the results dashboard.

Raw score records come from the scores webhook, one per answered
questionnaire: {"id", "nome", "empresa", "telefone", "categoria", "pontos"}.
Admins see them grouped by (company, category); a company sees only its own.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from models.category import Category
from models.question import Question
from models.submission import Submission
from models.user import User, UserRole, UserStatus

logger = logging.getLogger(__name__)

MATURITY_LEVELS = [
    {"level": "Crítico", "range": "0 - 30%", "icon": "🔴", "upper": 30, "chart_color": "#EF4444"},
    {"level": "Precário", "range": "31 - 50%", "icon": "🟠", "upper": 50, "chart_color": "#F97316"},
    {"level": "Mediano", "range": "51 - 70%", "icon": "🟡", "upper": 70, "chart_color": "#EAB308"},
    {"level": "Avançado", "range": "71 - 100%", "icon": "🟢", "upper": None, "chart_color": "#22C55E"},
]

OVERALL_CATEGORY_ID = "all-categories"
OVERALL_CATEGORY_NAME = "Resultado Geral"


def score_percentage(total_score: float, max_score: float) -> float:
    if max_score == 0:
        return 0.0
    return total_score / max_score * 100


def get_maturity_level(total_score: float, max_score: float) -> Dict[str, Any]:
    """Map a score to its maturity band. Upper bounds are inclusive."""
    if max_score == 0:
        return MATURITY_LEVELS[0]
    percentage = score_percentage(total_score, max_score)
    for level in MATURITY_LEVELS:
        if level["upper"] is None or percentage <= level["upper"]:
            return level
    return MATURITY_LEVELS[-1]


def category_max_score(questions: List[Question]) -> int:
    return sum(q.max_score for q in questions)


def _slug(value: str) -> str:
    return re.sub(r"\s+", "-", value)


def _text(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value)


def _category_lookup(categories: List[Category], questions: List[Question]) -> Dict[str, Tuple[Category, int]]:
    """Category name -> (category, max score of its questions)."""
    lookup = {}
    for category in categories:
        in_category = [q for q in questions if q.category_id == category.id]
        lookup[category.name] = (category, category_max_score(in_category))
    return lookup


def aggregate_company_scores(
    records: List[Dict[str, Any]], categories: List[Category], questions: List[Question]
) -> Tuple[List[User], List[Submission]]:
    """
    Admin view: one company user per distinct `empresa` and one aggregated
    submission per (company, category). The group's max score is the
    category max times the number of records in the group.
    """
    if not records:
        return [], []

    df = pd.DataFrame(records)
    df["pontos"] = pd.to_numeric(df["pontos"], errors="coerce").fillna(0)

    companies: List[User] = []
    company_by_name: Dict[str, User] = {}
    first_rows = df.drop_duplicates(subset="empresa", keep="first")
    for index, row in enumerate(first_rows.itertuples(index=False)):
        user = User(
            id=f"company-api-{_slug(row.empresa)}-{index}",
            name=_text(getattr(row, "nome", "")),
            company_name=row.empresa,
            email=re.sub(r"\s", "", row.empresa.lower()) + "@placeholder.com",
            phone=_text(getattr(row, "telefone", "")),
            password_hash="",
            role=UserRole.COMPANY,
            status=UserStatus.APPROVED,
        )
        companies.append(user)
        company_by_name[row.empresa] = user

    lookup = _category_lookup(categories, questions)
    grouped = (
        df.groupby(["empresa", "categoria"], sort=False)["pontos"]
        .agg(points="sum", records="size")
        .reset_index()
    )

    now = datetime.now(timezone.utc).isoformat()
    submissions = []
    for row in grouped.itertuples(index=False):
        company_name, category_name = row.empresa, row.categoria
        user = company_by_name.get(company_name)
        if not user or category_name not in lookup:
            logger.warning(
                f"No company '{company_name}' or category '{category_name}' found; "
                "skipping aggregated submission"
            )
            continue
        category, max_per_submission = lookup[category_name]
        total = int(row.points)
        group_max = max_per_submission * int(row.records) if max_per_submission > 0 else 0
        if group_max == 0 and total > 0:
            logger.warning(
                f"Max score for category '{category_name}' is zero but total score is {total}. "
                "Check the questions and their scores."
            )
        submissions.append(
            Submission(
                id=f"sub-agg-{_slug(company_name)}-{category.id}",
                user_id=user.id,
                company_name=company_name,
                category_id=category.id,
                category_name=category_name,
                total_score=total,
                max_score=group_max,
                date=now,
            )
        )
    return companies, submissions


def company_user_scores(
    records: List[Dict[str, Any]], user: User, categories: List[Category], questions: List[Question]
) -> List[Submission]:
    """Company view: the user's own records (phone and company must match), unaggregated."""
    lookup = _category_lookup(categories, questions)
    now = datetime.now(timezone.utc).isoformat()
    submissions = []
    for item in records:
        if item.get("telefone") != user.phone or item.get("empresa") != user.company_name:
            continue
        found = lookup.get(item.get("categoria"))
        if not found:
            logger.warning(f"Category '{item.get('categoria')}' not found for the user's submission")
            continue
        category, max_score = found
        submissions.append(
            Submission(
                id=f"sub-user-{user.id}-{category.id}-{item.get('id')}",
                user_id=user.id,
                company_name=user.company_name,
                category_id=category.id,
                category_name=category.name,
                total_score=int(item.get("pontos") or 0),
                max_score=max_score,
                date=now,
            )
        )
    return submissions


def overall_submission(submissions: List[Submission], user: User) -> Optional[Submission]:
    """Sum every category of one company into a single "Resultado Geral" record."""
    if not submissions:
        return None
    return Submission(
        id="aggregated-submission",
        user_id=user.id,
        company_name=user.company_name,
        category_id=OVERALL_CATEGORY_ID,
        category_name=OVERALL_CATEGORY_NAME,
        total_score=sum(s.total_score for s in submissions),
        max_score=sum(s.max_score for s in submissions),
        date=datetime.now(timezone.utc).isoformat(),
    )
