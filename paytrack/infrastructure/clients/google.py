"""Google OAuth 2.0 client for federated sign-in"""

import httpx
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode
from paytrack.domain.exceptions import IdentityProviderError
from paytrack.config import settings

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


@dataclass
class GoogleProfile:
    """Subset of the OpenID Connect userinfo response"""

    google_id: str
    email: str
    name: str
    picture: Optional[str] = None


class GoogleOAuthClient:
    """Client for Google's authorization-code flow"""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
        timeout: float | None = None,
    ):
        self.client_id = client_id or settings.google_client_id
        self.client_secret = client_secret or settings.google_client_secret
        self.redirect_uri = redirect_uri or settings.google_callback_url
        self.timeout = timeout or settings.http_timeout_seconds

    def authorization_url(self, state: str | None = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid profile email",
        }
        if state:
            params["state"] = state
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        """
        Exchange an authorization code and load the user's profile.

        Raises:
            IdentityProviderError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                token_response = await client.post(
                    TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "redirect_uri": self.redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                profile_response = await client.get(
                    USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                profile_response.raise_for_status()
                data = profile_response.json()

                return GoogleProfile(
                    google_id=data["sub"],
                    email=data["email"],
                    name=data.get("name") or data["email"],
                    picture=data.get("picture"),
                )

            except httpx.TimeoutException as e:
                raise IdentityProviderError(f"Google timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                raise IdentityProviderError(f"Google unreachable: {e}") from e
            except httpx.HTTPStatusError as e:
                raise IdentityProviderError(f"Google OAuth error: {e.response.status_code}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise IdentityProviderError(f"Invalid profile data from Google: {e}") from e
