from datetime import datetime, timezone

import pytest

from models.log_entry import LogType
from services.log_service import add_log_entry, fetch_approval_logs, fetch_login_logs, parse_log_timestamp

APPROVALS = [
    {"id": 3, "nome": "Maria", "empresa": "Beta", "data": "05/03/2024", "horario": "14:30", "aprovado_por": "Ana"},
]
LOGINS = [
    {"id": 9, "nome": "João", "empresa": "Acme", "data": "06/03/2024", "horario": "08:05"},
]


def _utc(*args):
    return datetime(*args).astimezone(timezone.utc).isoformat()


def test_parse_log_timestamp_is_utc():
    stamp = parse_log_timestamp("05/03/2024", "14:30")
    assert stamp == _utc(2024, 3, 5, 14, 30)
    assert datetime.fromisoformat(stamp).utcoffset().total_seconds() == 0


def test_parse_log_timestamp_rejects_other_formats():
    with pytest.raises(ValueError):
        parse_log_timestamp("2024-03-05", "14:30")


def test_fetch_approval_logs(webhook, store):
    webhook.respond("approval_logs", APPROVALS)

    fetch_approval_logs(store)
    fetch_approval_logs(store)

    assert len(store.logs) == 1
    entry = store.logs[0]
    assert entry.id == "log-approved-3"
    assert entry.admin_name == "Ana"
    assert entry.message == 'Usuário "Maria" da empresa "Beta" foi aprovado.'


def test_fetch_login_logs_keeps_local_entries(webhook, store, company_user):
    add_log_entry(store, LogType.QUESTIONNAIRE_SUBMISSION, "enviado")
    webhook.respond("login_logs", LOGINS)

    fetch_login_logs(store)

    assert [e.type for e in store.logs] == [LogType.USER_LOGIN, LogType.QUESTIONNAIRE_SUBMISSION]
    assert store.logs[0].timestamp == _utc(2024, 3, 6, 8, 5)


def test_fetch_failure_keeps_cached_logs(webhook, store):
    webhook.respond("login_logs", LOGINS)
    fetch_login_logs(store)

    webhook.responses.clear()
    webhook.respond("login_logs", [{"id": 10, "data": "ontem", "horario": "?"}])
    fetch_login_logs(store)

    assert [e.id for e in store.logs] == ["log-login-9"]


def test_add_log_entry_records_admin(store, admin):
    entry = add_log_entry(store, LogType.USER_APPROVAL, "aprovado", admin=admin)
    assert store.logs == [entry]
    assert (entry.admin_id, entry.admin_name) == ("admin-ana@triad3.io", "Ana")


@pytest.mark.parametrize(
    "rows",
    [
        [{"id": 11, "nome": "João", "empresa": "Acme", "data": None, "horario": "10:00"}],
        ["not a row"],
        [None],
    ],
)
def test_malformed_login_rows_keep_cache(webhook, store, rows):
    webhook.respond("login_logs", LOGINS)
    fetch_login_logs(store)

    webhook.responses.clear()
    webhook.respond("login_logs", rows)
    fetch_login_logs(store)

    assert [e.id for e in store.logs] == ["log-login-9"]


def test_malformed_approval_rows_are_swallowed(webhook, store):
    webhook.respond("approval_logs", [{"id": 4, "data": "05/03/2024", "horario": None}])
    fetch_approval_logs(store)
    assert store.logs == []


def test_local_entries_are_utc(store):
    entry = add_log_entry(store, LogType.QUESTIONNAIRE_SUBMISSION, "enviado")
    assert datetime.fromisoformat(entry.timestamp).utcoffset().total_seconds() == 0
