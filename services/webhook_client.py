"""
Webhook gateway.

Every business operation of Score Inteligente is a single HTTP call to a
fixed Triad3 webhook. The service answers with a JSON body whose `resposta`
field carries a human readable message; an operation succeeded only when
the HTTP status is OK *and* that message is exactly the expected text.

Note: set WEBHOOK_BASE_URL and WEBHOOK_TIMEOUT in .env to point at another
deployment.
"""

import os
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from dotenv import load_dotenv

load_dotenv()

WEBHOOK_BASE_URL = os.getenv("WEBHOOK_BASE_URL", "https://webhook.triad3.io/webhook").rstrip("/")
WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT") or 30)

logger = logging.getLogger(__name__)

COMMUNICATION_ERROR = "Ocorreu um erro de comunicação."

ENDPOINTS = {
    "admin_login": "loginadmscoretriad3",
    "user_login": "loginusuarioscoretriad3",
    "register": "criacaocontascoreuser",
    "approve_user": "aceitarnovouserscore",
    "pending_users": "puxarnovosuserscore",
    "approval_logs": "puxaruseraprovadoscore",
    "login_logs": "puxarlogscore",
    "scores": "buscarnotasuserscore",
    "questions": "buscarperguntasscore",
    "add_category": "addcategoriascore",
    "edit_category": "editarcategoriascore",
    "add_question": "addperguntasscore",
    "edit_question": "editarperguntascore",
    "delete_question": "excluirperguntascore",
    "submit_answers": "receberrespostasscore",
    "add_admin": "addadmscore",
    "edit_admin": "editaradmscore",
    "delete_admin": "excluiradmscore",
    "user_password": "novasenhauserscore",
    "admin_password": "novasenhaadmscore",
}

# Exact `resposta` values the remote service sends on success.
LOGIN_OK = "Sejá bem-vind@"
APPROVE_USER_OK = "Usuário cadastrado com sucesso!"
ADD_CATEGORY_OK = "Categoria adicionada com sucesso!"
EDIT_CATEGORY_OK = "Categoria atualizada com sucesso!"
DELETE_CATEGORY_OK = "Categoria excluida com sucesso!"
ADD_QUESTION_OK = "Pergunta adicionada com sucesso!"
EDIT_QUESTION_OK = "Pergunta editada com sucesso!"
DELETE_QUESTION_OK = "Pergunta excluida com sucesso!"
SUBMIT_ANSWERS_OK = "Respostas recebidas com sucesso!"
ADD_ADMIN_OK = "ADM adicionado com sucesso!"
EDIT_ADMIN_OK = "Dados atualizados com sucesso!"
DELETE_ADMIN_OK = "Excluído com sucesso!"
PASSWORD_OK = "Aatualizado com sucesso!"


class WebhookError(Exception):
    """Raised by operations that report failure by exception instead of a tuple."""


def endpoint_url(name: str) -> str:
    return f"{WEBHOOK_BASE_URL}/{ENDPOINTS[name]}"


def _parse_body(response: requests.Response) -> Any:
    text = response.text
    if not text or not text.strip():
        return None
    return response.json()


def post_webhook(
    name: str,
    payload: Dict[str, Any],
    success_message: Optional[str] = None,
    default_error: str = "A API retornou uma resposta inesperada.",
    communication_error: str = COMMUNICATION_ERROR,
) -> Tuple[bool, Optional[Dict[str, Any]], str]:
    """
    POST `payload` to the named webhook.
    Returns (ok, data, message). Never raises: transport failures, non-OK
    statuses, unreadable bodies and sentinel mismatches all come back as
    ok=False with a message suitable for the UI.
    """
    url = endpoint_url(name)
    try:
        response = requests.post(url, json=payload, timeout=WEBHOOK_TIMEOUT)
    except requests.RequestException as e:
        logger.error(f"Webhook {name} unreachable: {e}")
        return False, None, communication_error

    try:
        data = _parse_body(response)
    except ValueError:
        logger.error(f"Webhook {name} returned a non-JSON body (status {response.status_code})")
        return False, None, default_error

    if not isinstance(data, dict):
        data = {} if data is None else {"body": data}
    resposta = data.get("resposta")

    if not response.ok:
        logger.warning(f"Webhook {name} failed with status {response.status_code}: {resposta}")
        return False, data, resposta or default_error

    if success_message is not None and resposta != success_message:
        logger.warning(f"Webhook {name} answered {resposta!r}, expected {success_message!r}")
        return False, data, resposta or default_error

    return True, data, resposta or ""


def fetch_webhook_list(name: str) -> List[Dict[str, Any]]:
    """
    GET the named webhook and return its JSON array.
    An empty body means an empty list. Raises WebhookError on any other
    failure so background refreshes can decide how much to swallow.
    """
    url = endpoint_url(name)
    try:
        response = requests.get(url, timeout=WEBHOOK_TIMEOUT)
    except requests.RequestException as e:
        raise WebhookError(f"Webhook {name} unreachable: {e}") from e

    if not response.ok:
        raise WebhookError(f"Webhook {name} failed. Status: {response.status_code}")

    try:
        data = _parse_body(response)
    except ValueError as e:
        raise WebhookError(f"Webhook {name} returned a non-JSON body") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise WebhookError(f"Webhook {name} did not return an array. Response: {data}")
    return data
