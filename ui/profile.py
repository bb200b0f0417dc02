"""Profile page: account data and password change for the logged-in user."""

import streamlit as st

from services.auth_service import change_admin_password, change_password, delete_admin, logout, update_admin
from ui.components import get_store, navigate


def _render_password_form(user):
    with st.form("password_form", clear_on_submit=True):
        current = st.text_input("Senha atual", type="password")
        new = st.text_input("Nova senha", type="password")
        confirm = st.text_input("Confirme a nova senha", type="password")
        submitted = st.form_submit_button("Alterar senha")
    if not submitted:
        return
    if not current or not new:
        st.warning("Preencha a senha atual e a nova senha.")
    elif new != confirm:
        st.error("As senhas não conferem.")
    else:
        if user.is_admin:
            ok, msg = change_admin_password(user.id, user.email, current, new)
        else:
            ok, msg = change_password(user, current, new)
        (st.success if ok else st.error)(msg)


def render_profile():
    store = get_store()
    user = store.current_user
    if not user:
        st.warning("Sessão inválida. Faça login novamente.")
        return

    st.subheader("Meu Perfil")

    if user.is_admin:
        with st.form("profile_form"):
            name = st.text_input("Nome", value=user.name)
            email = st.text_input("E-mail", value=user.email)
            phone = st.text_input("Telefone", value=user.phone)
            saved = st.form_submit_button("Salvar dados")
        if saved:
            ok, msg = update_admin(store, user, {"name": name, "email": email, "phone": phone})
            (st.success if ok else st.error)(msg)
    else:
        st.text_input("Nome", value=user.name, disabled=True)
        st.text_input("Empresa", value=user.company_name, disabled=True)
        st.text_input("E-mail", value=user.email, disabled=True)
        st.text_input("Telefone", value=user.phone, disabled=True)

    st.markdown("---")
    st.markdown("##### Alterar senha")
    _render_password_form(user)

    if user.is_admin:
        st.markdown("---")
        with st.expander("Excluir minha conta de administrador"):
            st.warning("Esta ação não pode ser desfeita.")
            if st.button("Excluir conta", type="primary"):
                ok, msg = delete_admin(user)
                if ok:
                    logout(store)
                    navigate("login")
                st.error(msg)
