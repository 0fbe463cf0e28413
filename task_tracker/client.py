"""HTTP client for the Task Tracker API.

The client keeps the signed-in state in an explicit ``SessionContext`` that
callers create and pass in. Validation done here only saves a round trip:
the server repeats every check and is the authority.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union
import logging

import httpx

from .errors import ValidationError
from .validation import validate_registration

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Something went wrong. Please check your connection and try again."


class ApiError(Exception):
    """Error response (or transport failure) surfaced to the caller."""

    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


@dataclass
class SessionContext:
    """Token and role of the signed-in user.

    ``start`` is called on login and ``clear`` on logout; everything else
    only reads.
    """
    token: Optional[str] = None
    role: Optional[str] = None

    def start(self, token: str, role: str) -> None:
        self.token = token
        self.role = role

    def clear(self) -> None:
        self.token = None
        self.role = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == "admin"

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class TaskTrackerClient:
    """Thin wrapper over an ``httpx.Client`` pointed at the API base URL."""

    def __init__(self, http: httpx.Client, session: SessionContext, prefix: str = "/api"):
        self.http = http
        self.session = session
        self.prefix = prefix.rstrip("/")

    def _request(self, method: str, path: str, *, auth: bool = True, json: Any = None) -> Any:
        headers = self.session.auth_headers() if auth else {}
        try:
            response = self.http.request(method, f"{self.prefix}{path}", json=json, headers=headers)
        except httpx.TransportError as exc:
            logger.warning("Request %s %s failed: %s", method, path, exc)
            raise ApiError(None, NETWORK_ERROR_MESSAGE) from exc

        if response.is_error:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            raise ApiError(response.status_code, message or f"Request failed ({response.status_code})")

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Auth

    def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
        role: str = "user",
        admin_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        validate_registration(name, email, password)
        if confirm_password is not None and confirm_password != password:
            raise ValidationError("Passwords do not match")

        payload = {"name": name, "email": email, "password": password, "role": role}
        if role == "admin":
            payload["adminKey"] = admin_key
        return self._request("POST", "/auth/register", auth=False, json=payload)

    def login(self, email: str, password: str) -> str:
        """Sign in and start the session. Returns the role."""
        data = self._request("POST", "/auth/login", auth=False, json={"email": email, "password": password})
        self.session.start(data["token"], data["role"])
        return data["role"]

    def logout(self) -> None:
        self.session.clear()

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")

    # Tasks

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks")

    def create_task(
        self,
        title: str,
        description: str,
        category_id: str,
        due_date: Union[date, str],
        status: str = "Todo",
    ) -> Dict[str, Any]:
        if not (title or "").strip() or not (description or "").strip() or not category_id or not due_date:
            raise ValidationError("Please fill all fields including due date")
        payload = {
            "title": title,
            "description": description,
            "categoryId": category_id,
            "dueDate": str(due_date),
            "status": status,
        }
        return self._request("POST", "/tasks", json=payload)["task"]

    def update_task(self, task_id: str, **fields: Any) -> Dict[str, Any]:
        """PATCH only the given fields; keyword names are camelCase or snake_case."""
        payload = {key: (str(value) if isinstance(value, date) else value) for key, value in fields.items()}
        return self._request("PATCH", f"/tasks/{task_id}", json=payload)["task"]

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    # Categories

    def list_categories(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/categories")

    def create_category(self, name: str) -> Dict[str, Any]:
        if not (name or "").strip():
            raise ValidationError("Name is required")
        return self._request("POST", "/categories", json={"name": name})["category"]

    def update_category(self, category_id: str, name: str) -> Dict[str, Any]:
        if not (name or "").strip():
            raise ValidationError("Name is required")
        return self._request("PUT", f"/categories/{category_id}", json={"name": name})

    def delete_category(self, category_id: str) -> None:
        self._request("DELETE", f"/categories/{category_id}")

    # Admin

    def admin_dashboard(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/admin/dashboard")["tasks"]

    def admin_users(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/admin/users")


def filter_tasks(
    tasks: Iterable[Dict[str, Any]],
    user_id: Optional[str] = None,
    status: Optional[str] = None,
    due_date: Optional[Union[date, str]] = None,
) -> List[Dict[str, Any]]:
    """Filter admin dashboard rows. Empty filters match everything."""
    wanted_due = str(due_date)[:10] if due_date else None
    result = []
    for task in tasks:
        if user_id and str(task.get("userId")) != str(user_id):
            continue
        if status and (task.get("status") or "").lower() != status.lower():
            continue
        if wanted_due and (task.get("dueDate") or "")[:10] != wanted_due:
            continue
        result.append(task)
    return result


def is_past_due(task: Dict[str, Any], today: Optional[date] = None) -> bool:
    due = task.get("dueDate")
    if not due:
        return False
    today = today or date.today()
    return date.fromisoformat(str(due)[:10]) < today
