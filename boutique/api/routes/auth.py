"""
api/routes/auth.py
------------------
Authentication endpoints.

POST /api/auth/login  — Exchange credentials for a JWT access token
                        (OAuth2 form data, as sent by Swagger UI).
GET  /api/auth/me     — Return the authenticated user's profile.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from boutique.core.config import settings
from boutique.core.logging import get_logger
from boutique.core.security import create_access_token
from boutique.dependencies import DbSession, get_current_user
from boutique.models import User
from boutique.schemas.user import TokenResponse, UserRead
from boutique.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive a JWT access token",
)
async def login(
    # The OAuth2 "username" field carries the user's login.
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbSession,
) -> TokenResponse:
    """
    Authenticate with login + password and receive a signed JWT whose
    id_societe claim is the societe of the user's role.

    Via curl/Postman: send as form data (not JSON):
        -d "username=admin&password=yourpassword"
    """
    user = await UserService.authenticate(db, form_data.username, form_data.password)
    if user is None:
        logger.warning("Failed login attempt", login=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login ou mot de passe incorrect.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        subject=user.id_utilisateur,
        login=user.login,
        id_societe=user.role.id_societe,
        role=user.role.nom_role,
        expires_delta=expires,
    )

    logger.info("User logged in", id_utilisateur=user.id_utilisateur, id_societe=user.role.id_societe)
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=int(expires.total_seconds()),
        user=UserRead.model_validate(user),
    )


@router.get(
    "/me",
    response_model=UserRead,
    summary="Get the currently authenticated user",
)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)
