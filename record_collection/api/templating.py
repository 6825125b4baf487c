"""
Jinja2 template wiring and session flash messages for the HTML views.
"""
from pathlib import Path
from typing import Any, List, Optional, Tuple

from starlette.requests import Request

from fastapi.templating import Jinja2Templates

from record_collection.api.permissions import can_manage_records
from record_collection.utils.settings import get_settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_FLASH_KEY = "_flashes"


def flash(request: Request, message: str, category: str = "success") -> None:
    """Queue a one-shot message shown on the next rendered page."""
    messages = list(request.session.get(_FLASH_KEY, []))
    messages.append([category, message])
    request.session[_FLASH_KEY] = messages


def pop_flashes(request: Request) -> List[Tuple[str, str]]:
    messages = request.session.pop(_FLASH_KEY, None) or []
    return [(category, message) for category, message in messages]


templates.env.globals["get_flashed_messages"] = pop_flashes


def render(
    request: Request,
    name: str,
    user: Optional[Any] = None,
    status_code: int = 200,
    **context: Any,
):
    context.setdefault("current_user", user)
    context.setdefault("can_manage", can_manage_records(user))
    context.setdefault("app_title", get_settings().app_title)
    return templates.TemplateResponse(request, name, context, status_code=status_code)
