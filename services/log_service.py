"""
Activity log services:
- local log entries (questionnaire submissions)
- approval and login logs pulled from the webhooks
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from models.log_entry import LogEntry, LogType
from models.user import User
from services.webhook_client import WebhookError, fetch_webhook_list
from state.store import AppStore

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_log_timestamp(date_str: str, time_str: str) -> str:
    """
    Convert the webhook's `data` (dd/mm/yyyy) and `horario` (HH:MM) fields
    into a UTC ISO 8601 timestamp. The webhook sends local wall-clock time.
    """
    parsed = datetime.strptime(f"{date_str.strip()} {time_str.strip()}", "%d/%m/%Y %H:%M")
    return parsed.astimezone(timezone.utc).isoformat()


def add_log_entry(
    store: AppStore, log_type: LogType, message: str, admin: Optional[User] = None
) -> LogEntry:
    entry = LogEntry(
        id=f"log-{uuid.uuid4().hex[:12]}",
        timestamp=_now_iso(),
        type=log_type,
        message=message,
        admin_id=admin.id if admin else None,
        admin_name=admin.name if admin else None,
    )
    store.prepend_log(entry)
    return entry


def _approval_log(item: Dict[str, Any]) -> LogEntry:
    return LogEntry(
        id=f"log-approved-{item['id']}",
        timestamp=parse_log_timestamp(item["data"], item["horario"]),
        type=LogType.USER_APPROVAL,
        message=f'Usuário "{item.get("nome")}" da empresa "{item.get("empresa")}" foi aprovado.',
        admin_name=item.get("aprovado_por"),
    )


def _login_log(item: Dict[str, Any]) -> LogEntry:
    return LogEntry(
        id=f"log-login-{item['id']}",
        timestamp=parse_log_timestamp(item["data"], item["horario"]),
        type=LogType.USER_LOGIN,
        message=f'Usuário "{item.get("nome")}" da empresa "{item.get("empresa")}" fez login.',
    )


def fetch_approval_logs(store: AppStore) -> None:
    """Replace the approval logs with the server's list. Failures keep the old cache."""
    try:
        items = fetch_webhook_list("approval_logs")
        entries = [_approval_log(item) for item in items]
    except (WebhookError, KeyError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Could not refresh approval logs: {e}")
        return
    store.replace_logs_of_type(LogType.USER_APPROVAL, entries)


def fetch_login_logs(store: AppStore) -> None:
    """Replace the login logs with the server's list. Failures keep the old cache."""
    try:
        items = fetch_webhook_list("login_logs")
        entries = [_login_log(item) for item in items]
    except (WebhookError, KeyError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Could not refresh login logs: {e}")
        return
    store.replace_logs_of_type(LogType.USER_LOGIN, entries)
