"""
Results dashboard: donut chart and maturity level per category, a
comparative view of every category and an overall result.
Admins pick the company to inspect; companies see only themselves.
"""

from typing import List

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from models.submission import Submission, SyncStatus
from models.user import User
from services.common import create_searchbox
from services.scoring import MATURITY_LEVELS, get_maturity_level, overall_submission, score_percentage
from services.submission_service import fetch_submissions
from ui.components import get_store, navigate

COMPARE_ALL = "compare-all"
ALL_CATEGORIES = "all-categories"
REMAINING_COLOR = "#374151"


def _donut(submission: Submission, height: int = 250) -> go.Figure:
    maturity = get_maturity_level(submission.total_score, submission.max_score)
    remaining = max(0, submission.max_score - submission.total_score)
    percentage = score_percentage(submission.total_score, submission.max_score)
    fig = go.Figure(
        go.Pie(
            labels=["Pontuação Obtida", "Restante"],
            values=[submission.total_score, remaining],
            hole=0.75,
            sort=False,
            direction="clockwise",
            marker=dict(colors=[maturity["chart_color"], REMAINING_COLOR]),
            textinfo="none",
        )
    )
    fig.update_layout(
        height=height,
        showlegend=False,
        margin=dict(l=10, r=10, t=10, b=10),
        annotations=[
            dict(
                text=f"<b>{percentage:.0f}%</b><br>{submission.total_score} / {submission.max_score} pts",
                showarrow=False,
                font=dict(size=18),
            )
        ],
    )
    return fig


def _maturity_table(current: dict) -> pd.DataFrame:
    rows = [
        {
            "Faixa de Pontuação (%)": level["range"],
            "Nível de Maturidade": f"{level['icon']} {level['level']}",
            "": "◀" if level["level"] == current["level"] else "",
        }
        for level in MATURITY_LEVELS
    ]
    return pd.DataFrame(rows)


def _render_single(submission: Submission):
    maturity = get_maturity_level(submission.total_score, submission.max_score)
    col1, col2 = st.columns([2, 3])
    with col1:
        st.markdown(f"#### Score: {submission.category_name}")
        st.plotly_chart(_donut(submission), use_container_width=True)
        if submission.sync_status == SyncStatus.FAILED:
            st.warning("Estas respostas ainda não foram confirmadas pelo servidor.")
    with col2:
        st.markdown("#### Nível de Maturidade")
        st.dataframe(_maturity_table(maturity), hide_index=True, use_container_width=True)


def _render_comparison(submissions: List[Submission]):
    st.subheader("Visão Comparativa")
    cols = st.columns(3)
    for i, submission in enumerate(submissions):
        maturity = get_maturity_level(submission.total_score, submission.max_score)
        with cols[i % 3]:
            with st.container(border=True):
                st.markdown(f"**{submission.category_name}**")
                st.plotly_chart(
                    _donut(submission, height=180),
                    use_container_width=True,
                    key=f"cmp_{submission.id}",
                )
                st.markdown(f"{maturity['icon']} {maturity['level']}")


def render_dashboard():
    store = get_store()
    user = store.current_user
    if not user:
        return

    # Reload once per visit, like the page mount in the browser app.
    if st.session_state.get("dashboard_loaded_for") != user.id:
        with st.spinner("Carregando resultados..."):
            fetch_submissions(store)
        st.session_state["dashboard_loaded_for"] = user.id

    st.title("Painel de Resultados")
    if st.button("Atualizar resultados"):
        st.session_state.pop("dashboard_loaded_for", None)
        st.rerun()

    if user.is_admin:
        companies = store.approved_companies()
        if not companies:
            st.info("Nenhuma empresa com score foi encontrada no sistema.")
            return
        target: User = create_searchbox(
            label="Visualizando:",
            placeholder="Digite o nome da empresa...",
            key="dashboard_company_search",
            data=companies,
            display_fn=lambda u: u.company_name,
            return_fn=lambda u: u,
            default=companies[0],
        )
    else:
        target = user

    submissions = store.submissions_for_user(target.id)
    if not submissions:
        if user.is_admin:
            st.info(f"{target.company_name or 'Esta empresa'} ainda não completou nenhum questionário.")
        else:
            st.info("Você ainda não completou nenhum questionário.")
            if st.button("Responder um Questionário", type="primary"):
                navigate("questionnaire")
        return

    categories = []
    for s in submissions:
        if s.category_id not in [c[0] for c in categories]:
            categories.append((s.category_id, s.category_name))

    options = [cid for cid, _ in categories]
    labels = dict(categories)
    if len(categories) > 1:
        options = [COMPARE_ALL, ALL_CATEGORIES] + options
        labels[COMPARE_ALL] = "Visão Comparativa"
        labels[ALL_CATEGORIES] = "Resultado Geral"

    view = st.selectbox(
        "Visualização:",
        options=options,
        format_func=lambda o: labels[o],
        key=f"dashboard_view_{target.id}",
    )

    if view == COMPARE_ALL:
        _render_comparison(submissions)
    elif view == ALL_CATEGORIES:
        _render_single(overall_submission(submissions, target))
    else:
        selected = next((s for s in submissions if s.category_id == view), None)
        if selected:
            _render_single(selected)
