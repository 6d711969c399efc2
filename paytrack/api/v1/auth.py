"""/v1/auth - registration, sign-in and profile endpoints"""

import logging
from urllib.parse import quote
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from paytrack.api.v1.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UpdateMeRequest,
    UserSchema,
)
from paytrack.api.dependencies import (
    get_current_user,
    get_google_client,
    get_google_verifier,
    get_password_verifier,
    get_request_id,
    get_token_service,
)
from paytrack.infrastructure.database.models import User
from paytrack.infrastructure.database.session import get_db
from paytrack.infrastructure.database.repositories import UserRepository
from paytrack.infrastructure.clients.google import GoogleOAuthClient
from paytrack.infrastructure.security.passwords import hash_password, verify_password
from paytrack.infrastructure.security.tokens import TokenService
from paytrack.infrastructure.security.verifiers import (
    GoogleCredentialVerifier,
    GoogleCredentials,
    PasswordCredentialVerifier,
    PasswordCredentials,
)
from paytrack.domain.exceptions import AuthenticationError, IdentityProviderError
from paytrack.infrastructure.observability.metrics import record_auth, google_fetch_failures_counter
from paytrack.infrastructure.observability.logging import log_auth_event
from paytrack.config import settings

router = APIRouter()


def token_response(user: User, tokens: TokenService) -> TokenResponse:
    return TokenResponse(token=tokens.issue_access_token(user.id), user=UserSchema.model_validate(user))


def frontend_redirect(path: str, **params: str) -> RedirectResponse:
    query = "&".join(f"{key}={quote(value)}" for key, value in params.items())
    return RedirectResponse(f"{settings.frontend_url}{path}?{query}", status_code=302)


@router.post("/auth/register", response_model=TokenResponse, status_code=201)
def register(
    request_body: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a local account and return an access token"""
    request_id = get_request_id(request)
    users = UserRepository(db)

    if users.get_by_email(request_body.email) is not None:
        record_auth("register", success=False)
        raise HTTPException(status_code=400, detail="User with this email already exists")

    user = users.create_user(
        name=request_body.name,
        email=request_body.email,
        password_hash=hash_password(request_body.password),
        auth_provider="local",
    )
    db.commit()
    db.refresh(user)

    record_auth("register", success=True)
    log_auth_event(request_id, "register", "success", str(user.id))
    return token_response(user, tokens)


@router.post("/auth/login", response_model=TokenResponse)
def login(
    request_body: LoginRequest,
    request: Request,
    verifier: PasswordCredentialVerifier = Depends(get_password_verifier),
    tokens: TokenService = Depends(get_token_service),
):
    """Email/password sign-in"""
    request_id = get_request_id(request)

    try:
        user = verifier.verify(PasswordCredentials(email=request_body.email, password=request_body.password))
    except AuthenticationError as e:
        record_auth(verifier.method, success=False)
        log_auth_event(request_id, verifier.method, "failure")
        raise HTTPException(status_code=401, detail=str(e))

    record_auth(verifier.method, success=True)
    log_auth_event(request_id, verifier.method, "success", str(user.id))
    return token_response(user, tokens)


@router.get("/auth/me", response_model=UserSchema)
def get_me(user: User = Depends(get_current_user)):
    return UserSchema.model_validate(user)


@router.put("/auth/me", response_model=UserSchema)
def update_me(
    request_body: UpdateMeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change display name and/or email"""
    if request_body.email is not None:
        email = request_body.email.lower()
        existing = UserRepository(db).get_by_email(email)
        if existing is not None and existing.id != user.id:
            raise HTTPException(status_code=400, detail="User with this email already exists")
        user.email = email

    if request_body.name is not None:
        user.name = request_body.name.strip()

    db.commit()
    db.refresh(user)
    return UserSchema.model_validate(user)


@router.put("/auth/password", response_model=MessageResponse)
def change_password(
    request_body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Set a new password.

    Accounts that already have a password must supply the current one;
    Google-only accounts may set a first password and become "both".
    """
    if user.password_hash:
        if not request_body.current_password or not verify_password(request_body.current_password, user.password_hash):
            raise HTTPException(status_code=401, detail="Current password is incorrect")

    user.password_hash = hash_password(request_body.new_password)
    if user.auth_provider == "google":
        user.auth_provider = "both"

    db.commit()
    return MessageResponse(message="Password updated successfully")


@router.get("/auth/google")
def google_login(client: GoogleOAuthClient = Depends(get_google_client)):
    """Redirect to Google's consent screen"""
    return RedirectResponse(client.authorization_url(), status_code=302)


@router.get("/auth/link/google")
def google_link(
    user: User = Depends(get_current_user),
    client: GoogleOAuthClient = Depends(get_google_client),
    tokens: TokenService = Depends(get_token_service),
):
    """Start linking a Google account to the signed-in user"""
    state = tokens.issue_link_state(user.id)
    return RedirectResponse(client.authorization_url(state=state), status_code=302)


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    db: Session = Depends(get_db),
    verifier: GoogleCredentialVerifier = Depends(get_google_verifier),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Complete Google sign-in or linking and hand the token to the frontend.

    Always redirects: /auth/success?token=... or /auth/error?message=...
    """
    request_id = get_request_id(request)

    if error or not code:
        return frontend_redirect("/auth/error", message=error or "Authentication failed")

    try:
        link_user_id = tokens.verify_link_state(state) if state else None
        user = await verifier.verify(GoogleCredentials(code=code, link_user_id=link_user_id))
        await run_in_threadpool(db.commit)

    except AuthenticationError as e:
        await run_in_threadpool(db.rollback)
        record_auth(verifier.method, success=False)
        log_auth_event(request_id, verifier.method, "failure")
        return frontend_redirect("/auth/error", message=str(e))

    except IdentityProviderError as e:
        await run_in_threadpool(db.rollback)
        google_fetch_failures_counter.inc()
        logging.error(f"Google OAuth error: {e}", extra={"request_id": request_id})
        return frontend_redirect("/auth/error", message="Google sign-in is unavailable")

    record_auth(verifier.method, success=True)
    log_auth_event(request_id, verifier.method, "success", str(user.id))
    return frontend_redirect("/auth/success", token=tokens.issue_access_token(user.id))
