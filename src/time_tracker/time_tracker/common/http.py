from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, MailDeliveryError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def json_error(message: str, status: int, **extra: Any):
    return jsonify({"success": False, "error": message, **extra}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def api_errors(failure_message: str):
    """Map domain exceptions raised by a view onto JSON error responses.

    Anything unexpected is logged with its traceback and answered with
    `failure_message` and a 500.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except MailDeliveryError as e:
                extra: dict[str, Optional[int]] = {"report_id": e.report_id} if e.report_id is not None else {}
                return json_error(str(e), 502, **extra)
            except (ValidationError, NotFoundError, ConflictError) as e:
                status = next(code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls))
                return json_error(str(e), status)
            except Exception:
                logger.exception("%s %s failed", request.method, request.path)
                return json_error(failure_message, 500)

        return wrapper

    return decorator
