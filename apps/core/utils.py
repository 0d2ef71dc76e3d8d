from typing import Optional

from django.http import HttpRequest


def get_request_user(request: HttpRequest):
    """ Authenticated user of the request or None. """
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user
    return None


def get_session_id(request: HttpRequest, create: bool = True) -> str:
    """
    Session key of the request.

    Anonymous visitors get a new session on their first request, so repeat
    views from the same browser share one key.
    """
    session = getattr(request, "session", None)
    if session is None:
        return ""
    session_id = session.session_key or ""
    if not session_id and create:
        session.save()
        session_id = session.session_key or ""
    return session_id


def get_request_viewer(request: HttpRequest) -> tuple[Optional[object], str]:
    """
    (user, "") for authenticated callers, (None, session_id) for anonymous ones.
    """
    user = get_request_user(request)
    if user is not None:
        return user, ""
    return None, get_session_id(request)
