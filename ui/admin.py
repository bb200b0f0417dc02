"""
Administration UI components.
This file contains the render functions for each tab of the admin page:
pending users, categories, questions and administrators.
"""

import logging
import traceback
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from models.question import AnswerOption, Question
from models.user import UserStatus
from services.auth_service import add_admin, approve_user, fetch_pending_users, reject_user
from services.question_service import (
    add_category,
    add_question,
    delete_category,
    delete_question,
    update_category,
    update_question,
)
from services.webhook_client import WebhookError
from ui.components import get_store

logger = logging.getLogger(__name__)

MIN_ANSWERS = 2
MAX_ANSWERS = 6


def render_admin():
    st.title("Administração")
    tab1, tab2, tab3, tab4 = st.tabs(
        ["Usuários Pendentes", "Categorias", "Perguntas", "Administradores"]
    )
    with tab1:
        render_pending_users_tab()
    with tab2:
        render_categories_tab()
    with tab3:
        render_questions_tab()
    with tab4:
        render_admins_tab()


# --- Pending Users Tab ---


def render_pending_users_tab():
    store = get_store()
    st.subheader("Aprovação de Cadastros")

    if st.button("Atualizar lista", key="refresh_pending") or not st.session_state.get("pending_loaded"):
        with st.spinner("Buscando cadastros pendentes..."):
            fetch_pending_users(store)
        st.session_state["pending_loaded"] = True

    pending = [u for u in store.users if u.status == UserStatus.PENDING]
    if not pending:
        st.info("Nenhum cadastro aguardando aprovação.")
        return

    for user in pending:
        with st.container(border=True):
            st.markdown(f"**{user.name}** · {user.company_name}")
            st.caption(f"{user.email} · {user.phone}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Aprovar", key=f"approve_{user.id}", type="primary"):
                    ok, msg = approve_user(store, user)
                    if ok:
                        st.success(msg)
                    else:
                        st.error(msg)
            with col2:
                if st.button("Rejeitar", key=f"reject_{user.id}"):
                    reject_user(store, user)
                    st.rerun()


# --- Categories Tab ---


def render_categories_tab():
    store = get_store()
    st.subheader("Categorias")

    with st.form("add_category_form", clear_on_submit=True):
        name = st.text_input("Nova categoria")
        submitted = st.form_submit_button("Adicionar categoria")
    if submitted:
        if not name.strip():
            st.warning("Informe o nome da categoria.")
        else:
            try:
                add_category(store, name.strip())
                st.success(f"Categoria '{name.strip()}' adicionada.")
            except WebhookError as e:
                st.error(str(e))

    if not store.categories:
        st.info("Nenhuma categoria cadastrada.")
        return

    for category in list(store.categories):
        count = len(store.questions_for_category(category.id))
        with st.expander(f"{category.name} ({count} pergunta(s))"):
            new_name = st.text_input("Nome", value=category.name, key=f"cat_name_{category.id}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Salvar", key=f"cat_save_{category.id}"):
                    if new_name.strip() and new_name.strip() != category.name:
                        ok, msg = update_category(store, category, new_name.strip())
                        (st.success if ok else st.error)(msg)
            with col2:
                if st.button("Excluir", key=f"cat_delete_{category.id}"):
                    ok, msg = delete_category(store, category)
                    if ok:
                        st.rerun()
                    st.error(msg)


# --- Questions Tab ---


def _answer_inputs(prefix: str, defaults: List[AnswerOption]) -> List[Dict[str, Any]]:
    """Render text/score inputs for the answer options and return the filled ones."""
    count = st.number_input(
        "Número de respostas",
        min_value=MIN_ANSWERS,
        max_value=MAX_ANSWERS,
        value=max(MIN_ANSWERS, min(MAX_ANSWERS, len(defaults) or 4)),
        key=f"{prefix}_count",
    )
    answers = []
    for i in range(int(count)):
        default = defaults[i] if i < len(defaults) else None
        col1, col2 = st.columns([4, 1])
        with col1:
            text = st.text_input(
                f"Resposta {i + 1}", value=default.text if default else "", key=f"{prefix}_text_{i}"
            )
        with col2:
            score = st.number_input(
                "Pontos", value=default.score if default else 0, step=1, key=f"{prefix}_score_{i}"
            )
        if text.strip():
            answers.append({"text": text.strip(), "score": int(score)})
    return answers


def render_questions_tab():
    store = get_store()
    st.subheader("Perguntas")

    if not store.categories:
        st.info("Cadastre uma categoria antes de adicionar perguntas.")
        return

    category_names = {c.id: c.name for c in store.categories}
    category_id = st.selectbox(
        "Categoria",
        options=list(category_names),
        format_func=lambda cid: category_names[cid],
        key="questions_category",
    )

    with st.expander("Adicionar pergunta"):
        text = st.text_area("Pergunta", key="new_question_text")
        answers = _answer_inputs("new_question", [])
        if st.button("Salvar pergunta", type="primary"):
            if not text.strip() or len(answers) < MIN_ANSWERS:
                st.warning(f"Informe a pergunta e pelo menos {MIN_ANSWERS} respostas.")
            else:
                try:
                    add_question(store, category_id, text.strip(), answers)
                    st.success("Pergunta adicionada com sucesso!")
                except (ValueError, WebhookError) as e:
                    st.error(str(e))
                    logger.error(f"Add question error: {traceback.format_exc()}")

    questions = store.questions_for_category(category_id)
    if not questions:
        st.info("Esta categoria ainda não tem perguntas.")
        return

    for i, question in enumerate(questions, start=1):
        with st.expander(f"Q{i}: {question.text}"):
            new_text = st.text_area("Pergunta", value=question.text, key=f"q_text_{question.id}")
            edited = _answer_inputs(f"q_{question.id}", question.answers)
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Salvar alterações", key=f"q_save_{question.id}"):
                    updated = Question(
                        id=question.id,
                        category_id=question.category_id,
                        text=new_text.strip(),
                        answers=[
                            AnswerOption(id=f"{question.id}-ans-{n}", text=a["text"], score=a["score"])
                            for n, a in enumerate(edited)
                        ],
                    )
                    ok, msg = update_question(store, updated)
                    (st.success if ok else st.error)(msg)
            with col2:
                if st.button("Excluir pergunta", key=f"q_delete_{question.id}"):
                    ok, msg = delete_question(store, question)
                    if ok:
                        st.rerun()
                    st.error(msg)


# --- Administrators Tab ---


def render_admins_tab():
    st.subheader("Adicionar administrador")
    with st.form("add_admin_form", clear_on_submit=True):
        name = st.text_input("Nome")
        email = st.text_input("E-mail")
        phone = st.text_input("Telefone")
        password = st.text_input("Senha", type="password")
        submitted = st.form_submit_button("Adicionar")
    if submitted:
        if not all([name, email, phone, password]):
            st.warning("Todos os campos são obrigatórios.")
        else:
            ok, msg = add_admin(name, email, password, phone)
            (st.success if ok else st.error)(msg)

    store = get_store()
    companies = store.approved_companies()
    if companies:
        st.markdown("---")
        st.subheader("Empresas com resultados")
        st.dataframe(
            pd.DataFrame(
                [{"Empresa": u.company_name, "Responsável": u.name, "Telefone": u.phone} for u in companies]
            ),
            hide_index=True,
            use_container_width=True,
        )
