from models.category import Category
from models.log_entry import LogEntry, LogType
from models.submission import Submission, SyncStatus
from models.user import User, UserRole, UserStatus


def _user(id_, status, role=UserRole.COMPANY, email=None, password=""):
    return User(
        id=id_, name=id_, company_name="Acme", email=email or f"{id_}@acme.com", phone="",
        password_hash=password, role=role, status=status,
    )


def test_replace_categories_drops_duplicate_ids(store):
    store.replace_categories([Category("c1", "A"), Category("c1", "A again"), Category("c2", "B")])
    assert [(c.id, c.name) for c in store.categories] == [("c1", "A"), ("c2", "B")]


def test_upsert_user_replaces_same_id(store):
    store.upsert_user(_user("u1", UserStatus.PENDING))
    store.upsert_user(_user("u1", UserStatus.APPROVED))
    assert len(store.users) == 1
    assert store.users[0].status == UserStatus.APPROVED


def test_replace_pending_users_keeps_known_password(store):
    store.upsert_user(_user("local-1", UserStatus.PENDING, email="new@acme.com", password="s3nha"))
    store.upsert_user(_user("approved", UserStatus.APPROVED))
    store.replace_pending_users([_user("api-user-7", UserStatus.PENDING, email="new@acme.com")])

    ids = [u.id for u in store.users]
    assert ids == ["approved", "api-user-7"]
    assert store.user_by_id("api-user-7").password_hash == "s3nha"


def test_replace_company_users_keeps_admins_and_pending(store):
    store.upsert_user(_user("admin", UserStatus.APPROVED, role=UserRole.ADMIN))
    store.upsert_user(_user("pending", UserStatus.PENDING))
    store.upsert_user(_user("old-company", UserStatus.APPROVED))

    store.replace_company_users([_user("new-company", UserStatus.APPROVED)])

    assert [u.id for u in store.users] == ["admin", "pending", "new-company"]
    assert [u.id for u in store.approved_companies()] == ["new-company"]


def test_remove_category_keeps_its_questions(loaded_store):
    loaded_store.remove_category("cat-derived-vendas")
    assert loaded_store.category_by_id("cat-derived-vendas") is None
    assert loaded_store.questions_for_category("cat-derived-vendas")


def test_replace_logs_of_type_keeps_other_types(store):
    store.prepend_log(LogEntry("l1", "2024-01-01T10:00:00", LogType.QUESTIONNAIRE_SUBMISSION, "x"))
    store.prepend_log(LogEntry("l2", "2024-01-01T11:00:00", LogType.USER_LOGIN, "old login"))

    store.replace_logs_of_type(
        LogType.USER_LOGIN, [LogEntry("l3", "2024-01-02T09:00:00", LogType.USER_LOGIN, "new login")]
    )

    assert [e.id for e in store.logs] == ["l3", "l1"]


def _submission(id_, user_id, category_id, status=SyncStatus.CONFIRMED):
    return Submission(
        id=id_, user_id=user_id, company_name="Acme", category_id=category_id,
        category_name=category_id, sync_status=status,
    )


def test_refresh_keeps_unsynced_local_submissions(store):
    store.add_submission(_submission("local-pending", "u1", "c1", SyncStatus.PENDING))
    store.add_submission(_submission("local-failed", "u1", "c2", SyncStatus.FAILED))
    store.add_submission(_submission("local-ok", "u1", "c3"))

    store.replace_submissions([_submission("server-c3", "u1", "c3")])

    assert [s.id for s in store.submissions] == ["server-c3", "local-pending", "local-failed"]


def test_refresh_drops_unsynced_entry_once_server_has_it(store):
    store.add_submission(_submission("local-failed", "u1", "c1", SyncStatus.FAILED))

    store.replace_submissions([_submission("server-c1", "u1", "c1")])

    assert [s.id for s in store.submissions] == ["server-c1"]


def test_clearing_submissions_keeps_unsynced(store):
    store.add_submission(_submission("local-failed", "u1", "c1", SyncStatus.FAILED))
    store.add_submission(_submission("server-c2", "u1", "c2"))

    store.replace_submissions([])

    assert [s.id for s in store.submissions] == ["local-failed"]
