"""
Persisted session users.

Streamlit loses st.session_state on a browser reload, so each logged-in
browser gets a random session token (kept in the page's query string) and
its user is stored as SESSION_DIR/<token>.json. A visitor without the
token, or with an unknown one, starts logged out.
"""

import json
import logging
import os
import re
import secrets
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from models.user import User

load_dotenv()

SESSION_DIR = os.getenv("SESSION_DIR", ".streamlit/sessions")

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"^[A-Za-z0-9_-]{16,64}$")


def new_session_token() -> str:
    return secrets.token_urlsafe(24)


def _session_path(token: Optional[str], directory: Optional[str] = None) -> Optional[Path]:
    # Tokens arrive from the URL, reject anything that is not a plain token.
    if not token or not _TOKEN.match(token):
        return None
    return Path(directory or SESSION_DIR) / f"{token}.json"


def load_session_user(token: Optional[str], directory: Optional[str] = None) -> Optional[User]:
    session_path = _session_path(token, directory)
    if session_path is None or not session_path.exists():
        return None
    try:
        data = json.loads(session_path.read_text(encoding="utf-8"))
        return User.from_dict(data)
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Ignoring unreadable session file {session_path}: {e}")
        return None


def save_session_user(user: User, token: str, directory: Optional[str] = None) -> None:
    session_path = _session_path(token, directory)
    if session_path is None:
        raise ValueError("Invalid session token")
    session_path.parent.mkdir(parents=True, exist_ok=True)
    session_path.write_text(json.dumps(user.to_dict(), ensure_ascii=False), encoding="utf-8")


def clear_session_user(token: Optional[str], directory: Optional[str] = None) -> None:
    session_path = _session_path(token, directory)
    if session_path is not None:
        session_path.unlink(missing_ok=True)
