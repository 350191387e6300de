"""Endpoints for registration, email verification and login."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    AuthenticationStatus,
    EmailDeliveryError,
    authenticate_user,
    register_user,
    resend_verification,
    search_users,
    verify_email,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.security import create_access_token
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.presenters import user_read
from app.interfaces.api.schemas import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    Token,
    UserRead,
    UserSummaryRead,
    VerifyEmailRequest,
    VerifyEmailResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _issue_token(session: Session, email: str, password: str) -> Token:
    user, auth_status = authenticate_user(session, email, password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.UNVERIFIED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Please verify your email address before logging in",
        )

    return Token(access_token=create_access_token(user.id), user=user_read(user))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> RegisterResponse:
    """Create an account and send its verification email."""

    try:
        result = register_user(
            db, name=payload.name, email=payload.email, password=payload.password
        )
    except EmailDeliveryError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    if result.requires_verification:
        message = "Registration successful. Please check your email to verify your account."
    else:
        message = "Registration successful. You can now log in."
    return RegisterResponse(
        message=message,
        requires_verification=result.requires_verification,
        user=user_read(result.user),
    )


@router.post("/verify-email", response_model=VerifyEmailResponse)
def confirm_email(payload: VerifyEmailRequest, db: Session = Depends(get_db)):
    """Confirm an email address and log the user in."""

    try:
        user = verify_email(db, token=payload.token)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    return VerifyEmailResponse(
        message="Email verified successfully. You can now log in.",
        access_token=create_access_token(user.id),
        user=user_read(user),
    )


@router.post("/resend-verification", response_model=MessageResponse)
def resend_verification_email(
    payload: ResendVerificationRequest, db: Session = Depends(get_db)
) -> MessageResponse:
    try:
        resend_verification(db, email=payload.email)
    except EmailDeliveryError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Verification email resent successfully")


@router.post("/login", response_model=Token)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> Token:
    """Authenticate with a JSON body and return a bearer token."""

    return _issue_token(db, payload.email, payload.password)


# Keeps the signature OAuth2PasswordRequestForm expects so the docs "Authorize" button works.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    return _issue_token(db, form_data.username, form_data.password)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return user_read(current_user)


@router.get("/search", response_model=list[UserSummaryRead])
def search(
    q: str | None = Query(default=None, description="At least two characters of a name or email"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Find other users to share projects and tasks with."""

    users = search_users(db, query=q, exclude_id=current_user.id)
    return [UserSummaryRead.model_validate(user) for user in users]
