"""
Signup page: collect name, company, email, phone and password, then send the
registration to the webhook. The account waits for admin approval.
"""

import streamlit as st

from services.auth_service import register
from ui.components import get_store, render_card_end, render_card_start


def render_signup():
    render_card_start("Crie sua conta")

    with st.form("signup_form"):
        name = st.text_input("Seu nome", key="signup_name")
        company_name = st.text_input("Nome da empresa", key="signup_company")
        email = st.text_input("E-mail", key="signup_email")
        phone = st.text_input("Telefone", key="signup_phone")
        password = st.text_input("Senha", type="password", key="signup_password")
        confirm_password = st.text_input(
            "Confirme a senha", type="password", key="signup_confirm_password"
        )
        submitted = st.form_submit_button("Cadastrar")

    if st.button("Voltar para o login"):
        st.session_state["page"] = "login"
        st.rerun()

    if submitted:
        if password != confirm_password:
            st.error("As senhas não conferem.")
        else:
            with st.spinner("Enviando cadastro..."):
                ok, msg = register(get_store(), name, company_name, email, password, phone)
            if ok:
                st.session_state["login_notice"] = msg
                st.session_state["page"] = "login"
                st.rerun()
            else:
                st.error(msg or "Falha no cadastro. Tente novamente.")

    render_card_end()
