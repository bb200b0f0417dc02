"""
Login page: company login, admin login and company sign up, switched by
three buttons like the original card layout.
"""

import streamlit as st

from services.auth_service import login
from ui.components import get_store, navigate, render_card_end, render_card_start


def render_login():
    view = st.session_state.get("login_view", "login")
    is_admin = view == "admin"

    render_card_start("Acesso do Administrador" if is_admin else "Acesse sua conta")

    notice = st.session_state.pop("login_notice", None)
    if notice:
        st.success(notice)

    with st.form("login_form"):
        email = st.text_input(
            "E-mail de administrador" if is_admin else "E-mail", key="login_email"
        )
        password = st.text_input(
            "Senha de administrador" if is_admin else "Senha",
            type="password",
            key="login_password",
        )
        login_clicked = st.form_submit_button("Entrar")

    col1, col2 = st.columns(2)
    with col1:
        if is_admin:
            switch_clicked = st.button("Acesso de empresa")
        else:
            switch_clicked = st.button("Sou administrador")
    with col2:
        signup_clicked = st.button("Criar conta")

    if switch_clicked:
        st.session_state["login_view"] = "login" if is_admin else "admin"
        st.rerun()

    if signup_clicked:
        st.session_state["page"] = "signup"
        st.rerun()

    if login_clicked:
        if not email or not password:
            st.error("Informe e-mail e senha.")
        else:
            with st.spinner("Entrando..."):
                ok, msg = login(get_store(), email, password, is_admin)
            if not ok:
                st.error(msg or "Credenciais inválidas.")
            else:
                st.session_state.pop("login_view", None)
                navigate("dashboard")

    render_card_end()
