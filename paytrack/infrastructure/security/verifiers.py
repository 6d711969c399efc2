"""Interchangeable credential verification strategies

Each strategy turns one kind of credential into a persisted User. Route
handlers receive a strategy through FastAPI dependencies, so tests and
deployments can swap implementations without touching global state.
"""

import uuid
from dataclasses import dataclass
from typing import Optional
from starlette.concurrency import run_in_threadpool
from paytrack.domain.exceptions import AuthenticationError
from paytrack.infrastructure.clients.google import GoogleOAuthClient, GoogleProfile
from paytrack.infrastructure.database.models import User
from paytrack.infrastructure.database.repositories import UserRepository
from paytrack.infrastructure.security.passwords import verify_password


@dataclass
class PasswordCredentials:
    email: str
    password: str


@dataclass
class GoogleCredentials:
    code: str
    link_user_id: Optional[uuid.UUID] = None  # set when linking to a signed-in account


class PasswordCredentialVerifier:
    """Email + password sign-in against bcrypt hashes"""

    method = "password"

    def __init__(self, users: UserRepository):
        self.users = users

    def verify(self, credentials: PasswordCredentials) -> User:
        user = self.users.get_by_email(credentials.email)
        if user is None:
            raise AuthenticationError("Invalid email or password")

        if not user.password_hash:
            raise AuthenticationError("Please login with Google or set a password")

        if not verify_password(credentials.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return user


def _merge_provider(current: str) -> str:
    return "both" if current == "local" else current


class GoogleCredentialVerifier:
    """
    Google sign-in, registration and account linking.

    Sign-in resolves the Google account by google_id, then by email (linking
    the Google id onto an existing local account), and otherwise registers a
    new Google-only user. Linking attaches the Google id to the signed-in
    account unless another user already owns it.
    """

    method = "google"

    def __init__(self, users: UserRepository, client: GoogleOAuthClient):
        self.users = users
        self.client = client

    async def verify(self, credentials: GoogleCredentials) -> User:
        profile = await self.client.fetch_profile(credentials.code)

        # Account lookups and writes are blocking; keep them off the event loop
        if credentials.link_user_id is not None:
            return await run_in_threadpool(self._link, credentials.link_user_id, profile)
        return await run_in_threadpool(self._sign_in, profile)

    def _sign_in(self, profile: GoogleProfile) -> User:
        user = self.users.get_by_google_id(profile.google_id)
        if user is not None:
            return user

        user = self.users.get_by_email(profile.email)
        if user is not None:
            user.google_id = profile.google_id
            user.avatar = user.avatar or profile.picture
            user.auth_provider = _merge_provider(user.auth_provider)
            return user

        return self.users.create_user(
            name=profile.name,
            email=profile.email,
            google_id=profile.google_id,
            avatar=profile.picture,
            auth_provider="google",
        )

    def _link(self, user_id: uuid.UUID, profile: GoogleProfile) -> User:
        owner = self.users.get_by_google_id(profile.google_id)
        if owner is not None and owner.id != user_id:
            raise AuthenticationError("This Google account is already linked to another user")

        user = self.users.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found")

        user.google_id = profile.google_id
        user.avatar = user.avatar or profile.picture
        user.auth_provider = _merge_provider(user.auth_provider)
        return user
