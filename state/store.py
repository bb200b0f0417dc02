"""
In-memory application state.

The remote webhooks are the system of record; AppStore only caches what the
last fetch returned plus the optimistic changes made since. Services receive
the store explicitly and mutate it through the methods below.
"""

from typing import Callable, Iterable, List, Optional, TypeVar

from models.category import Category
from models.log_entry import LogEntry, LogType
from models.question import Question
from models.submission import Submission, SyncStatus
from models.user import User, UserRole, UserStatus

T = TypeVar("T")


def _unique_by_id(items: Iterable[T]) -> List[T]:
    """Drop repeated ids, first occurrence wins."""
    seen = set()
    result = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        result.append(item)
    return result


class AppStore:
    def __init__(self):
        self.current_user: Optional[User] = None
        self.session_token: Optional[str] = None
        self.users: List[User] = []
        self.categories: List[Category] = []
        self.questions: List[Question] = []
        self.submissions: List[Submission] = []
        self.logs: List[LogEntry] = []

    # --- Session ---

    def set_current_user(self, user: User) -> None:
        self.current_user = user

    def clear_current_user(self) -> None:
        self.current_user = None

    # --- Users ---

    def upsert_user(self, user: User) -> None:
        self.users = [u for u in self.users if u.id != user.id] + [user]

    def set_user_status(self, user_id: str, status: UserStatus) -> None:
        for user in self.users:
            if user.id == user_id:
                user.status = status

    def replace_pending_users(self, pending: List[User]) -> None:
        """
        Swap the pending users for a fresh list from the server.
        A password typed at registration in this session is kept for the
        matching email, since the approval webhook needs it.
        """
        local_pending = {u.email: u for u in self.users if u.status == UserStatus.PENDING}
        merged = []
        for user in pending:
            local = local_pending.get(user.email)
            if local and local.password_hash and not user.password_hash:
                user.password_hash = local.password_hash
            merged.append(user)
        others = [u for u in self.users if u.status != UserStatus.PENDING]
        self.users = others + _unique_by_id(merged)

    def replace_company_users(self, companies: List[User]) -> None:
        """Replace approved company users; admins and pending/rejected users stay."""
        self.clear_company_users()
        self.users = self.users + _unique_by_id(companies)

    def clear_company_users(self) -> None:
        self.users = [
            u for u in self.users
            if u.status != UserStatus.APPROVED or u.role == UserRole.ADMIN
        ]

    def approved_companies(self) -> List[User]:
        return [
            u for u in self.users
            if u.role == UserRole.COMPANY and u.status == UserStatus.APPROVED
        ]

    def user_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    # --- Categories ---

    def replace_categories(self, categories: List[Category]) -> None:
        self.categories = _unique_by_id(categories)

    def add_category(self, category: Category) -> None:
        self.categories = self.categories + [category]

    def rename_category(self, category_id: str, new_name: str) -> None:
        for category in self.categories:
            if category.id == category_id:
                category.name = new_name

    def remove_category(self, category_id: str) -> None:
        # Questions of a removed category are intentionally left in place.
        self.categories = [c for c in self.categories if c.id != category_id]

    def category_by_id(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def category_by_name(self, name: str) -> Optional[Category]:
        return next((c for c in self.categories if c.name == name), None)

    # --- Questions ---

    def replace_questions(self, questions: List[Question]) -> None:
        self.questions = _unique_by_id(questions)

    def add_question(self, question: Question) -> None:
        self.questions = self.questions + [question]

    def replace_question(self, question: Question) -> None:
        self.questions = [question if q.id == question.id else q for q in self.questions]

    def remove_question(self, question_id: str) -> None:
        self.questions = [q for q in self.questions if q.id != question_id]

    def questions_for_category(self, category_id: str) -> List[Question]:
        return [q for q in self.questions if q.category_id == category_id]

    # --- Submissions ---

    def replace_submissions(self, submissions: List[Submission]) -> None:
        """
        Replace the cache with the server's submissions. Local entries the
        server has not acknowledged (pending or failed) survive unless the
        new list already has a result for the same user and category.
        """
        incoming = _unique_by_id(submissions)
        answered = {(s.user_id, s.category_id) for s in incoming}
        unsynced = [
            s for s in self.submissions
            if s.sync_status != SyncStatus.CONFIRMED and (s.user_id, s.category_id) not in answered
        ]
        self.submissions = incoming + unsynced

    def add_submission(self, submission: Submission) -> None:
        self.submissions = self.submissions + [submission]

    def set_submission_status(self, submission_id: str, status: SyncStatus) -> None:
        for submission in self.submissions:
            if submission.id == submission_id:
                submission.sync_status = status

    def submissions_for_user(self, user_id: str) -> List[Submission]:
        return [s for s in self.submissions if s.user_id == user_id]

    # --- Logs ---

    def prepend_log(self, entry: LogEntry) -> None:
        self.logs = [entry] + self.logs

    def replace_logs_of_type(self, log_type: LogType, entries: List[LogEntry]) -> None:
        self.logs = _unique_by_id(entries) + [e for e in self.logs if e.type != log_type]

    def logs_where(self, predicate: Callable[[LogEntry], bool]) -> List[LogEntry]:
        return [e for e in self.logs if predicate(e)]
