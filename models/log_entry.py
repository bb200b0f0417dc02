from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LogType(str, Enum):
    USER_APPROVAL = "user_approval"
    QUESTIONNAIRE_SUBMISSION = "questionnaire_submission"
    USER_LOGIN = "user_login"


@dataclass
class LogEntry:
    """Append-only activity record shown on the logs page."""

    id: str
    timestamp: str  # ISO 8601
    type: LogType
    message: str
    admin_id: Optional[str] = None
    admin_name: Optional[str] = None
