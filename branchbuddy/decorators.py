"""Small, focused view decorators."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

from django.http import HttpRequest, HttpResponse, JsonResponse

from branchbuddy.errors import PgnError

F = TypeVar("F", bound=Callable[..., HttpResponse])

logger = logging.getLogger(__name__)


def pgn_errors_as_json(*, status: int = 400):
    """Turn parser errors (illegal move, empty game) into a JSON response."""

    def decorator(view_func: F) -> F:
        @wraps(view_func)
        def _wrapped(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
            try:
                return view_func(request, *args, **kwargs)
            except PgnError as e:
                logger.info("🔴 %s rejected ➤ %s", request.path, e)
                return JsonResponse({"status": "error", **e.to_dict()}, status=status)

        return _wrapped  # type: ignore[return-value]

    return decorator
