"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from paytrack.domain.exceptions import AuthenticationError
from paytrack.infrastructure.clients.google import GoogleOAuthClient
from paytrack.infrastructure.database.models import User
from paytrack.infrastructure.database.repositories import UserRepository
from paytrack.infrastructure.database.session import get_db
from paytrack.infrastructure.security.tokens import TokenService
from paytrack.infrastructure.security.verifiers import GoogleCredentialVerifier, PasswordCredentialVerifier

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_now() -> datetime:
    """Reference time for status and dashboard calculations (local wall clock)"""
    return datetime.now()


def get_token_service() -> TokenService:
    return TokenService()


def get_google_client() -> GoogleOAuthClient:
    """Provide Google OAuth client instance"""
    return GoogleOAuthClient()


def get_password_verifier(db: Session = Depends(get_db)) -> PasswordCredentialVerifier:
    return PasswordCredentialVerifier(UserRepository(db))


def get_google_verifier(
    db: Session = Depends(get_db),
    client: GoogleOAuthClient = Depends(get_google_client),
) -> GoogleCredentialVerifier:
    return GoogleCredentialVerifier(UserRepository(db), client)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Resolve the bearer token to a user; 401 when missing or invalid"""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authorized, token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = tokens.verify_access_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User no longer exists", headers={"WWW-Authenticate": "Bearer"})
    return user
