"""
Activity logs page (admins only): approvals, logins and questionnaire
submissions, newest first.
"""

from datetime import datetime

import pandas as pd
import streamlit as st

from models.log_entry import LogType
from services.log_service import fetch_approval_logs, fetch_login_logs
from ui.components import get_store

TYPE_LABELS = {
    LogType.USER_APPROVAL: "Aprovação",
    LogType.QUESTIONNAIRE_SUBMISSION: "Questionário",
    LogType.USER_LOGIN: "Login",
}


def render_logs():
    store = get_store()
    st.title("Logs de Atividade")

    if st.button("Atualizar logs") or not st.session_state.get("logs_loaded"):
        with st.spinner("Buscando logs..."):
            fetch_approval_logs(store)
            fetch_login_logs(store)
        st.session_state["logs_loaded"] = True

    selected_types = st.multiselect(
        "Filtrar por tipo",
        options=list(TYPE_LABELS),
        default=list(TYPE_LABELS),
        format_func=lambda t: TYPE_LABELS[t],
    )
    entries = store.logs_where(lambda e: e.type in selected_types)
    if not entries:
        st.info("Nenhum registro encontrado.")
        return

    df = pd.DataFrame(
        [
            {
                "Data": pd.to_datetime(e.timestamp, utc=True),
                "Tipo": TYPE_LABELS[e.type],
                "Mensagem": e.message,
                "Administrador": e.admin_name or "",
            }
            for e in entries
        ]
    ).sort_values("Data", ascending=False)
    df["Data"] = df["Data"].dt.tz_convert(datetime.now().astimezone().tzinfo)
    st.dataframe(
        df,
        hide_index=True,
        use_container_width=True,
        column_config={"Data": st.column_config.DatetimeColumn(format="DD/MM/YYYY HH:mm")},
    )
