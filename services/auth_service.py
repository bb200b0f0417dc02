"""
Authentication and account services:
- login (company or admin) and logout
- company registration and admin approval
- admin account management
- password changes
"""

import logging
import re
import uuid
from typing import Dict, Optional, Tuple

from models.user import User, UserRole, UserStatus
from services.webhook_client import (
    ADD_ADMIN_OK,
    APPROVE_USER_OK,
    DELETE_ADMIN_OK,
    EDIT_ADMIN_OK,
    LOGIN_OK,
    PASSWORD_OK,
    WebhookError,
    fetch_webhook_list,
    post_webhook,
)
from state.session_file import clear_session_user, new_session_token, save_session_user
from state.store import AppStore

logger = logging.getLogger(__name__)

ADMIN_COMPANY_NAME = "Triad3"
_API_USER_ID = re.compile(r"^api-user-(\d+)$")


def login(store: AppStore, email: str, password: str, is_admin: bool) -> Tuple[bool, str]:
    """
    Authenticate against the admin or company login webhook.
    On success the session user is stored and persisted. Returns (ok, message).
    """
    email = email.strip()
    if is_admin:
        ok, data, msg = post_webhook(
            "admin_login",
            {"email": email, "password": password},
            success_message=LOGIN_OK,
            default_error="Usuário ou senha incorretos.",
            communication_error="Ocorreu um erro de comunicação ao tentar fazer login.",
        )
        if not ok:
            return False, msg
        user = User(
            id=f"admin-{email}",
            name=data.get("nome") or "",
            company_name=ADMIN_COMPANY_NAME,
            email=email,
            phone="",
            password_hash="",
            role=UserRole.ADMIN,
            status=UserStatus.APPROVED,
        )
    else:
        ok, data, msg = post_webhook(
            "user_login",
            {"email": email, "password": password},
            success_message=LOGIN_OK,
            default_error="Credenciais inválidas ou conta não aprovada.",
            communication_error="Ocorreu um erro de comunicação ao tentar fazer login.",
        )
        if not ok:
            return False, msg
        user = User(
            id=f"user-{email}",
            name=data.get("nome") or "",
            company_name=data.get("empresa") or "",
            email=email,
            phone=data.get("telefone") or "",
            password_hash="",
            role=UserRole.COMPANY,
            status=UserStatus.APPROVED,
        )
        # The dashboard looks the company up in the users list.
        store.upsert_user(user)

    store.set_current_user(user)
    # New token on every login.
    store.session_token = new_session_token()
    save_session_user(user, store.session_token)
    logger.info(f"{user.role.value} {email} logged in")
    return True, msg


def logout(store: AppStore) -> None:
    clear_session_user(store.session_token)
    store.clear_current_user()
    store.session_token = None


def register(
    store: AppStore, name: str, company_name: str, email: str, password: str, phone: str
) -> Tuple[bool, str]:
    """
    Create a company account. The account stays pending until an admin
    approves it. Returns (success, message)
    """
    if not all([name, company_name, email, password, phone]):
        return False, "Todos os campos são obrigatórios para o cadastro."

    ok, data, msg = post_webhook(
        "register",
        {
            "nome": name,
            "nome_empresa": company_name,
            "email": email,
            "senha": password,
            "telefone": phone,
        },
        default_error="Ocorreu um erro durante o cadastro.",
        communication_error="Ocorreu um erro de comunicação. Tente novamente.",
    )
    if not ok:
        return False, msg

    store.upsert_user(
        User(
            id=f"user-{uuid.uuid4().hex[:12]}",
            name=name,
            company_name=company_name,
            email=email,
            phone=phone,
            password_hash=password,
            role=UserRole.COMPANY,
            status=UserStatus.PENDING,
        )
    )
    return True, msg or "Cadastro realizado! Aguarde a aprovação do administrador para acessar."


def approve_user(store: AppStore, user: User) -> Tuple[bool, str]:
    admin = store.current_user
    if not admin or not admin.is_admin:
        return False, "Apenas administradores podem aprovar usuários."

    payload = {
        "nome": user.name,
        "empresa": user.company_name,
        "email": user.email,
        "telefone": user.phone,
        "senha": user.password_hash,
        "nome_adm": admin.name,
        "email_adm": admin.email,
    }
    match = _API_USER_ID.match(user.id)
    if match:
        payload["id"] = match.group(1)

    ok, _, msg = post_webhook(
        "approve_user",
        payload,
        success_message=APPROVE_USER_OK,
        communication_error="Ocorreu um erro de comunicação ao tentar aprovar o usuário.",
    )
    if ok:
        store.set_user_status(user.id, UserStatus.APPROVED)
    return ok, msg


def reject_user(store: AppStore, user: User) -> None:
    """Local-only: the remote service has no rejection endpoint."""
    store.set_user_status(user.id, UserStatus.REJECTED)


def fetch_pending_users(store: AppStore) -> None:
    """Refresh the pending users from the server. Failures keep the old cache."""
    try:
        items = fetch_webhook_list("pending_users")
        pending = [
            User(
                id=f"api-user-{item['id']}",
                name=item.get("nome") or "",
                company_name=item.get("empresa") or "",
                email=item.get("email") or "",
                phone=item.get("telefone") or "",
                password_hash="",
                role=UserRole.COMPANY,
                status=UserStatus.PENDING,
            )
            for item in items
        ]
    except (WebhookError, KeyError, TypeError, AttributeError) as e:
        logger.error(f"Could not refresh pending users: {e}")
        return
    store.replace_pending_users(pending)


def add_admin(name: str, email: str, password: str, phone: str) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "add_admin",
        {"nome": name, "email": email, "senha": password, "telefone": phone},
        success_message=ADD_ADMIN_OK,
        default_error="Falha ao adicionar administrador.",
        communication_error="Ocorreu um erro de comunicação ao tentar adicionar o administrador.",
    )
    return ok, msg


def update_admin(store: AppStore, original: User, updates: Dict[str, Optional[str]]) -> Tuple[bool, str]:
    """
    Send one edit request per changed field (name, email, phone, password).
    Stops at the first rejected request and returns its message.
    """
    requests_to_send = []
    name = updates.get("name")
    if name and name != original.name:
        requests_to_send.append(
            {"id": original.id, "tipo_dado": "Nome", "nome_atual": original.name, "atualizacao": name}
        )
    email = updates.get("email")
    if email and email != original.email:
        requests_to_send.append(
            {"id": original.id, "tipo_dado": "E-mail", "email_atual": original.email, "atualizacao": email}
        )
    phone = updates.get("phone")
    if phone and phone != original.phone:
        requests_to_send.append(
            {"id": original.id, "tipo_dado": "Telefone", "telefone_atual": original.phone, "atualizacao": phone}
        )
    password = updates.get("password")
    if password:
        requests_to_send.append({"id": original.id, "tipo_dado": "Senha", "atualizacao": password})

    if not requests_to_send:
        return True, "Nenhuma alteração para salvar."

    for payload in requests_to_send:
        ok, _, msg = post_webhook(
            "edit_admin",
            payload,
            success_message=EDIT_ADMIN_OK,
            default_error="Falha ao atualizar dados.",
        )
        if not ok:
            return False, msg

    current = store.current_user
    if current and current.id == original.id:
        current.name = name or current.name
        current.email = email or current.email
        current.phone = phone or current.phone
        if store.session_token:
            save_session_user(current, store.session_token)
    return True, EDIT_ADMIN_OK


def delete_admin(user: User) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "delete_admin",
        user.to_payload(),
        success_message=DELETE_ADMIN_OK,
        communication_error="Ocorreu um erro de comunicação ao tentar excluir o administrador.",
    )
    return ok, msg


def change_password(user: User, current_password: str, new_password: str) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "user_password",
        {
            "id": user.id,
            "nome": user.name,
            "empresa": user.company_name,
            "email": user.email,
            "telefone": user.phone,
            "senha_atual": current_password,
            "senha_nova": new_password,
        },
        success_message=PASSWORD_OK,
        default_error="Falha ao alterar a senha.",
        communication_error="Ocorreu um erro de comunicação ao tentar alterar a senha.",
    )
    if ok:
        return True, "Senha alterada com sucesso!"
    return False, msg


def change_admin_password(
    user_id: str, email: str, current_password: str, new_password: str
) -> Tuple[bool, str]:
    ok, _, msg = post_webhook(
        "admin_password",
        {
            "id": user_id,
            "email": email,
            "senha_atual": current_password,
            "senha_nova": new_password,
        },
        success_message=PASSWORD_OK,
        default_error="Falha ao alterar a senha.",
        communication_error="Ocorreu um erro de comunicação ao tentar alterar a senha.",
    )
    if ok:
        return True, "Senha alterada com sucesso!"
    return False, msg
