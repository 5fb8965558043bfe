"""Demo login. Issues opaque bearer tokens kept in application state."""

import logging
import secrets

from fastapi import APIRouter, HTTPException, Request, status

from domain.schemas.auth_schemas import AuthResponse, LoginRequest, UserIdentity

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("menuhub.api.auth")


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, request: Request) -> AuthResponse:
    config = request.app.state.settings
    valid_user = secrets.compare_digest(body.username, config.demo_username)
    valid_password = secrets.compare_digest(body.password, config.demo_password)
    if not (valid_user and valid_password):
        logger.info("Rejected login for %s", body.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = secrets.token_urlsafe(24)
    request.app.state.tokens.add(token)
    logger.info("Issued token for %s", body.username)
    return AuthResponse(token=token, user=UserIdentity(id="1", username=body.username))
