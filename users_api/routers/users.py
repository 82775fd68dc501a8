from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from users_api.domain.errors import ErrorKind, OperationError
from users_api.domain.records import OperationResult
from users_api.domain.validations import UserUpdate
from users_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.MALFORMED_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.EMPTY_COLLECTION: 404,
    ErrorKind.DUPLICATE_IDENTIFIER: 409,
    ErrorKind.DUPLICATE_EMAIL: 409,
    ErrorKind.READ_FAULT: 500,
    ErrorKind.WRITE_FAULT: 500,
    ErrorKind.MALFORMED_RECORD: 500,
}
MALFORMED_BODY_ERROR = "Request body must be a JSON object"


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def _error_response(err: OperationError) -> JSONResponse:
    return JSONResponse(err.to_response(), status_code=STATUS_BY_KIND.get(err.kind, 500))


def _user_response(result: OperationResult, message: str, status_code: int = 200) -> JSONResponse:
    if not result.ok:
        return _error_response(result.error)
    return JSONResponse({"ok": True, "message": message, "user": result.user}, status_code=status_code)


async def _read_object(request: Request) -> dict | None:
    try:
        payload: Any = await request.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _malformed_body() -> JSONResponse:
    return _error_response(OperationError(ErrorKind.MALFORMED_INPUT, MALFORMED_BODY_ERROR))


@router.get("")
def list_users(request: Request):
    result = _get_user_service(request).list_users()
    if not result.ok:
        return _error_response(result.error)
    return result.users


@router.get("/{user_id}")
def get_user(user_id: str, request: Request):
    result = _get_user_service(request).get_user(user_id)
    return _user_response(result, "User found")


@router.post("")
async def create_user(request: Request):
    payload = await _read_object(request)
    if payload is None:
        return _malformed_body()
    result = _get_user_service(request).create_user(payload)
    return _user_response(result, "User created successfully", status_code=201)


@router.api_route("/{user_id}", methods=["PUT", "PATCH"])
async def update_user(user_id: str, request: Request):
    payload = await _read_object(request)
    if payload is None:
        return _malformed_body()
    result = _get_user_service(request).update_user(user_id, UserUpdate.from_payload(payload))
    return _user_response(result, "User updated successfully")


@router.delete("/{user_id}")
def delete_user(user_id: str, request: Request):
    result = _get_user_service(request).delete_user(user_id)
    return _user_response(result, "User deleted successfully")
