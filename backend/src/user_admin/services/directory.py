"""Cognito user pool operations behind the user administration routes.

Each handler takes the parsed request and a ``DirectoryContext``, calls
the Cognito IDP API, and either returns an API Gateway response or raises
an ``AppError`` subclass for the router to translate.
"""

from __future__ import annotations

from typing import Any
from typing import Iterable
from typing import Mapping
from typing import Optional

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError
from pydantic import ValidationError

from user_admin.api.request import GatewayRequest
from user_admin.api.schemas import UserListResponse
from user_admin.api.schemas import UserRecord
from user_admin.api.schemas import UserRequest
from user_admin.config import DirectoryContext
from user_admin.exceptions import AppError
from user_admin.exceptions import BadRequestError
from user_admin.exceptions import InternalServerError
from user_admin.exceptions import NotFoundError
from user_admin.exceptions import UnauthorizedError
from user_admin.utils.logging import get_logger
from user_admin.utils.logging import mask_email
from user_admin.utils.parsers import parse_bool
from user_admin.utils.parsers import to_lower_camel
from user_admin.utils.responses import gateway_response
from user_admin.utils.responses import json_response

logger = get_logger(__name__)

STATUS_CONFIRMED = "CONFIRMED"
STATUS_UNCONFIRMED = "UNCONFIRMED"

_BOOLEAN_ATTRIBUTES = frozenset({"emailVerified", "phoneNumberVerified"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_user_request(body: str) -> UserRequest:
    """Parse the JSON body of a mutating request.

    A JSON ``null`` body parses as an empty request. Field names are
    matched exactly (``username``, ``userEmail``).

    Raises:
        BadRequestError: If the body is not a JSON object of string fields.
    """
    if body.strip() == "null":
        return UserRequest()
    try:
        return UserRequest.model_validate_json(body)
    except ValidationError as exc:
        raise BadRequestError("missing username in body") from exc


def classify_directory_error(
    exc: Exception,
    default_message: str = "",
) -> AppError:
    """Map a Cognito failure onto an error category.

    Args:
        exc: The botocore error raised by the client call.
        default_message: Message used for uncategorized failures.
    """
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "")
        if code == "NotAuthorizedException":
            return UnauthorizedError("Invalid access token")
        if code == "UserNotFoundException":
            return NotFoundError("User not found")
    return InternalServerError(default_message)


def flatten_attributes(
    enabled: Optional[bool],
    attributes: Iterable[Mapping[str, Any]],
) -> UserRecord:
    """Flatten a Cognito attribute list into a camelCased record.

    ``sub`` becomes ``userId``; the verified flags are parsed to booleans
    and dropped when unparseable; ``isEnabled`` falls back to False when
    the enabled state is unknown.
    """
    record: UserRecord = {}
    for attr in attributes:
        name = to_lower_camel(attr["Name"])
        value = attr.get("Value", "")

        if name == "sub":
            record["userId"] = value
        elif name in _BOOLEAN_ATTRIBUTES:
            try:
                record[name] = parse_bool(value)
            except ValueError:
                continue
        else:
            record[name] = value

    record["isEnabled"] = bool(enabled) if enabled is not None else False
    return record


def _admin_call(
    operation: str,
    request: GatewayRequest,
    ctx: DirectoryContext,
    success_message: str,
    failure_message: str = "",
) -> UserRequest:
    """Parse the body and run a single admin call keyed by username."""
    user = parse_user_request(request.body)
    logger.info(
        f"{operation}: {user.username}",
        extra={"user_email": mask_email(user.user_email)} if user.user_email else None,
    )

    method = getattr(ctx.client, operation)
    try:
        method(UserPoolId=ctx.user_pool_id, Username=user.username)
    except (ClientError, BotoCoreError) as exc:
        logger.error(f"{operation} failed: {exc}")
        raise classify_directory_error(exc, failure_message) from exc

    logger.info(success_message, extra={"username": user.username})
    return user


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def enable_user(request: GatewayRequest, ctx: DirectoryContext) -> dict[str, Any]:
    """Enable a confirmed user."""
    message = "successfully enabled confirmed user"
    _admin_call("admin_enable_user", request, ctx, message)
    return gateway_response(message)


def disable_user(request: GatewayRequest, ctx: DirectoryContext) -> dict[str, Any]:
    """Disable a confirmed user."""
    message = "successfully disabled confirmed user"
    _admin_call("admin_disable_user", request, ctx, message)
    return gateway_response(message)


def delete_unconfirmed_user(
    request: GatewayRequest,
    ctx: DirectoryContext,
) -> dict[str, Any]:
    """Delete a user who never completed sign-up."""
    message = "successfully deleted unconfirmed user"
    _admin_call("admin_delete_user", request, ctx, message)
    return gateway_response(message)


def confirm_user(request: GatewayRequest, ctx: DirectoryContext) -> dict[str, Any]:
    """Confirm a user's sign-up and mark their email and phone as verified.

    The two Cognito calls are not transactional: if marking the attributes
    fails, the sign-up stays confirmed and the request still reports an
    internal error.
    """
    user = _admin_call(
        "admin_confirm_sign_up",
        request,
        ctx,
        "confirmed sign-up",
        failure_message="Internal server error",
    )

    try:
        ctx.client.admin_update_user_attributes(
            UserPoolId=ctx.user_pool_id,
            Username=user.username,
            UserAttributes=[
                {"Name": "email_verified", "Value": "true"},
                {"Name": "phone_number_verified", "Value": "true"},
            ],
        )
    except (ClientError, BotoCoreError) as exc:
        logger.error(
            f"Marking attributes verified failed after confirmation: {exc}",
            extra={"username": user.username},
        )
        raise InternalServerError("") from exc

    return gateway_response("successfully confirmed user")


def get_user(request: GatewayRequest, ctx: DirectoryContext) -> dict[str, Any]:
    """Look up the caller's own profile by access token.

    The self-lookup response carries no enabled flag, so ``isEnabled`` is
    always False.
    """
    token = request.query_param("accessToken")
    if not token:
        logger.error("Get user: access token not found")
        raise BadRequestError("")

    try:
        response = ctx.client.get_user(AccessToken=token)
    except (ClientError, BotoCoreError) as exc:
        logger.error(f"Get user failed: {exc}")
        raise classify_directory_error(exc) from exc

    record = flatten_attributes(None, response.get("UserAttributes", []))
    return json_response(record)


def list_users_by_status(ctx: DirectoryContext, status: str) -> list[UserRecord]:
    """Collect every user in the pool whose status equals *status*.

    Pages are fetched until Cognito stops returning a pagination token.
    A failed page ends the scan early and the users gathered so far are
    returned.
    """
    records: list[UserRecord] = []
    params: dict[str, Any] = {"UserPoolId": ctx.user_pool_id}
    pages = 0

    while True:
        try:
            response = ctx.client.list_users(**params)
        except (ClientError, BotoCoreError) as exc:
            logger.warning(
                f"Listing {status} users stopped after {pages} page(s): {exc}",
                extra={"collected": len(records)},
            )
            break
        pages += 1

        for user in response.get("Users", []):
            if user.get("UserStatus") == status:
                records.append(
                    flatten_attributes(user.get("Enabled"), user.get("Attributes", []))
                )

        next_token = response.get("PaginationToken")
        if not next_token:
            break
        params["PaginationToken"] = next_token

    logger.info(f"Listed {len(records)} {status} users from {pages} page(s)")
    return records


def list_confirmed_users(
    request: GatewayRequest,
    ctx: DirectoryContext,
) -> dict[str, Any]:
    """List every confirmed user."""
    records = list_users_by_status(ctx, STATUS_CONFIRMED)
    return json_response(UserListResponse.from_records(records))


def list_unconfirmed_users(
    request: GatewayRequest,
    ctx: DirectoryContext,
) -> dict[str, Any]:
    """List every user still awaiting confirmation."""
    records = list_users_by_status(ctx, STATUS_UNCONFIRMED)
    return json_response(UserListResponse.from_records(records))
