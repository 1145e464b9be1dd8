"""User administration API router.

Routes handled (all under ``/api/v1``):
    GET    /user/info          - Caller's own profile (no profile check)
    GET    /user/confirmed     - List confirmed users
    GET    /user/unconfirmed   - List unconfirmed users
    POST   /user/enable        - Enable a user
    POST   /user/disable       - Disable a user
    POST   /user/confirm       - Confirm a user's sign-up
    DELETE /user/unconfirm     - Delete an unconfirmed user

Every route except ``/user/info`` requires the elevated profile claim.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any
from typing import Callable
from typing import Mapping

from user_admin.api.request import GatewayRequest
from user_admin.auth.claims import require_elevated
from user_admin.config import DirectoryContext
from user_admin.config import Settings
from user_admin.config import build_context
from user_admin.exceptions import AppError
from user_admin.exceptions import InternalServerError
from user_admin.services import directory
from user_admin.utils.logging import clear_request_context
from user_admin.utils.logging import configure_logging
from user_admin.utils.logging import get_logger
from user_admin.utils.logging import log_response
from user_admin.utils.logging import set_request_context
from user_admin.utils.responses import gateway_response
from user_admin.utils.responses import get_cors_headers

configure_logging()
logger = get_logger(__name__)

API_PREFIX = "/api/v1"

Handler = Callable[[GatewayRequest, DirectoryContext], dict[str, Any]]


@dataclass(frozen=True)
class Route:
    handler: Handler
    elevated: bool = True


def _key(method: str, path: str) -> str:
    return f"{method} {API_PREFIX}{path}"


ROUTES: dict[str, Route] = {
    _key("GET", "/user/info"): Route(directory.get_user, elevated=False),
    _key("GET", "/user/confirmed"): Route(directory.list_confirmed_users),
    _key("GET", "/user/unconfirmed"): Route(directory.list_unconfirmed_users),
    _key("POST", "/user/enable"): Route(directory.enable_user),
    _key("POST", "/user/disable"): Route(directory.disable_user),
    _key("POST", "/user/confirm"): Route(directory.confirm_user),
    _key("DELETE", "/user/unconfirm"): Route(directory.delete_unconfirmed_user),
}


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _runtime() -> tuple[Settings, DirectoryContext]:
    """Load settings and the Cognito context once per process."""
    settings = Settings.from_env()
    return settings, build_context(settings)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Route a user administration request."""
    started = time.perf_counter()
    set_request_context(req_id=(event.get("requestContext") or {}).get("requestId"))
    try:
        try:
            request = GatewayRequest.from_event(event)
        except AppError as exc:
            logger.warning(f"Unreadable request: {exc.message}")
            response = gateway_response(exc.message, exc)
        else:
            settings, ctx = _runtime()
            response = route(request, ctx, settings)
        log_response(
            logger,
            response["statusCode"],
            (time.perf_counter() - started) * 1000,
        )
        return response
    finally:
        clear_request_context()


def route(
    request: GatewayRequest,
    ctx: DirectoryContext,
    settings: Settings,
) -> dict[str, Any]:
    """Dispatch *request* to its handler and translate raised errors."""
    matched = ROUTES.get(request.route_key)
    if matched is None:
        logger.warning(f"No route for {request.route_key}")
        return {
            "statusCode": 400,
            "headers": get_cors_headers(),
            "body": f"Invalid method and path: {request.route_key}",
        }

    logger.info(f"User admin request: {request.route_key}")
    try:
        if matched.elevated:
            require_elevated(request.headers, settings.elevated_profile)
        return matched.handler(request, ctx)
    except AppError as exc:
        return gateway_response(exc.message, exc)
    except Exception:
        logger.exception("Unexpected error in user admin handler")
        return gateway_response("", InternalServerError())
