from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class UserRole(str, Enum):
    ADMIN = "admin"
    COMPANY = "company"


class UserStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class User:
    """Application user: either a Triad3 administrator or a company account."""

    id: str
    name: str
    company_name: str
    email: str
    phone: str
    password_hash: str
    role: UserRole  # fixed at creation
    status: UserStatus

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_payload(self) -> Dict[str, Any]:
        """Shape the webhook expects when a whole user record is posted."""
        return {
            "id": self.id,
            "name": self.name,
            "companyName": self.company_name,
            "email": self.email,
            "phone": self.phone,
            "passwordHash": self.password_hash,
            "role": self.role.value,
            "status": self.status.value,
        }

    def to_dict(self) -> Dict[str, Any]:
        return self.to_payload()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            company_name=data.get("companyName") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            password_hash=data.get("passwordHash") or "",
            role=UserRole(data["role"]),
            status=UserStatus(data.get("status", UserStatus.APPROVED.value)),
        )

    def __repr__(self) -> str:
        return f"<User {self.id} ({self.role.value}, {self.status.value})>"
