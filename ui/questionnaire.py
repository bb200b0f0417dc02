"""
Questionnaire page (post-login).
State 1: choose an unanswered category. State 2: answer every question of
that category, one choice each, then submit. Answers live only in
st.session_state and are lost on reload.
"""

from typing import Dict

import streamlit as st

from services.common import header_with_progress
from services.questionnaire_service import available_categories, build_submission, can_submit
from services.submission_service import add_submission
from ui.components import get_store, navigate


def _reset_questionnaire():
    st.session_state.pop("questionnaire_category_id", None)
    st.session_state.pop("questionnaire_answers", None)


def render_questionnaire():
    store = get_store()
    user = store.current_user
    if not user:
        st.warning("Por favor, faça login para responder a um questionário.")
        return

    message = st.session_state.get("questionnaire_message")
    if message:
        st.success(message)
        if st.button("Ir para o Painel", type="primary"):
            st.session_state.pop("questionnaire_message", None)
            navigate("dashboard")
        return

    category_id = st.session_state.get("questionnaire_category_id")
    category = store.category_by_id(category_id) if category_id else None

    # --- State 1: pick a category ---
    if not category:
        st.subheader("Selecione um Questionário")
        categories = available_categories(store, user)
        if not categories:
            st.info("Você completou todos os questionários disponíveis.")
            return
        for cat in categories:
            if st.button(cat.name, key=f"start_{cat.id}", use_container_width=True):
                st.session_state["questionnaire_category_id"] = cat.id
                st.session_state["questionnaire_answers"] = {}
                st.rerun()
        return

    # --- State 2: answer the questions ---
    if st.button("← Voltar para as categorias"):
        _reset_questionnaire()
        st.rerun()

    questions = store.questions_for_category(category.id)
    selected: Dict[str, str] = st.session_state.setdefault("questionnaire_answers", {})

    st.title(category.name)
    st.write("Por favor, responda a todas as perguntas da melhor maneira possível.")
    header_with_progress(len([q for q in questions if q.id in selected]), len(questions))

    for index, question in enumerate(questions, start=1):
        with st.container(border=True):
            options = [a.id for a in question.answers]
            current = selected.get(question.id)
            choice = st.radio(
                f"({index}) {question.text}",
                options=options,
                index=options.index(current) if current in options else None,
                format_func=lambda aid, q=question: q.answer_by_id(aid).text,
                key=f"answer_{question.id}",
            )
            if choice is not None:
                selected[question.id] = choice

    ready = can_submit(questions, selected)
    if st.button("Enviar Questionário", type="primary", disabled=not ready):
        draft = build_submission(user, category, questions, selected)
        with st.spinner("Enviando suas respostas..."):
            add_submission(store, draft)
        _reset_questionnaire()
        st.session_state["questionnaire_message"] = (
            "Questionário enviado com sucesso! Veja seus resultados no painel."
        )
        st.rerun()
    if not ready:
        st.caption("Por favor, responda todas as perguntas antes de enviar.")
