"""
Docmost API Keys - Router.

REST API endpoints for API keys:
- POST /api/api-keys/register - bootstrap creation, gated by x-registration-token
- POST /api/api-keys - create a key for the caller
- GET /api/api-keys - list the caller's keys
- DELETE /api/api-keys/{key_id} - revoke a key

Only ``/register`` is exempt from workspace resolution; the others require an
API-key principal issued for the resolved workspace.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import ValidationError

from docmost.config import Settings, get_settings
from docmost.deps import CurrentPrincipal
from docmost.exceptions import BadRequestException, ValidationException
from docmost.modules.api_keys.schemas import (
    ApiKeyCreate,
    ApiKeyCreatedResponse,
    ApiKeyListResponse,
    ApiKeyRegistration,
    ApiKeyResponse,
)
from docmost.modules.api_keys.service import (
    ApiKeyService,
    get_api_keys_service,
    verify_registration_token,
)
from docmost.modules.workspace.service import get_workspace_service
from docmost.schemas import ErrorResponse

router = APIRouter(
    prefix="/api/api-keys",
    tags=["API Keys"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

REGISTRATION_MESSAGE = "Registration API key created successfully."


def get_service() -> ApiKeyService:
    return get_api_keys_service()


async def _read_registration(request: Request) -> ApiKeyRegistration:
    try:
        body: Any = await request.json()
    except ValueError:
        raise ValidationException("Request body must be valid JSON")

    try:
        return ApiKeyRegistration.model_validate(body)
    except ValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in error["loc"]), "message": error["msg"]}
            for error in exc.errors()
        ]
        raise ValidationException("Invalid registration payload", errors=errors)


@router.post(
    "/register",
    response_model=ApiKeyCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_api_key(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    service: Annotated[ApiKeyService, Depends(get_service)],
    x_registration_token: Annotated[str | None, Header()] = None,
):
    """
    Create an API key without a workspace context.

    The token is checked before the body is even parsed, so unauthenticated
    callers learn nothing about the payload rules.
    """
    verify_registration_token(x_registration_token, settings.app_secret)
    registration = await _read_registration(request)

    user = await get_workspace_service().find_user(registration.user_id, registration.workspace_id)
    if user is None:
        raise BadRequestException("User or workspace not found")

    raw_key, record = await service.generate_api_key(user, registration.name)
    return ApiKeyCreatedResponse(key=raw_key, id=record.id, name=record.name, message=REGISTRATION_MESSAGE)


@router.post("", response_model=ApiKeyCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_api_key(
    body: ApiKeyCreate,
    principal: CurrentPrincipal,
    service: Annotated[ApiKeyService, Depends(get_service)],
):
    """Create another key for the calling user."""
    raw_key, record = await service.generate_api_key(principal.user, body.name)
    return ApiKeyCreatedResponse(key=raw_key, id=record.id, name=record.name, message="API key created successfully.")


@router.get("", response_model=ApiKeyListResponse)
async def list_api_keys(
    principal: CurrentPrincipal,
    service: Annotated[ApiKeyService, Depends(get_service)],
):
    """List the caller's keys."""
    records = await service.list_api_keys(principal.user)
    return ApiKeyListResponse(items=[ApiKeyResponse.from_record(r) for r in records])


@router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_api_key(
    key_id: str,
    principal: CurrentPrincipal,
    service: Annotated[ApiKeyService, Depends(get_service)],
):
    """Revoke a key."""
    await service.revoke_api_key(key_id, principal.user)
