"""
Auth0 glue: resolve an access token into the signed-in user's profile
"""
from typing import Optional

import requests
from loguru import logger

from storefront.config import Settings
from storefront.exceptions import AuthenticationError, IdentityProviderError
from storefront.schemas import IdentityProfile


class Auth0Client:
    TIMEOUT = 10

    def __init__(self, settings: Settings, session: requests.Session = None):
        self.settings = settings
        self.http = session or requests.Session()

    @property
    def userinfo_url(self) -> str:
        domain = self.settings.auth0_domain.rstrip("/")
        if not domain.startswith("http"):
            domain = f"https://{domain}"
        return f"{domain}/userinfo"

    def fetch_userinfo(self, access_token: Optional[str]) -> IdentityProfile:
        if not access_token:
            raise AuthenticationError("Access token required")

        try:
            response = self.http.get(
                self.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Identity provider unreachable: {e}")
            raise IdentityProviderError("Unable to verify identity") from e

        if response.status_code != 200:
            logger.warning(f"Identity provider rejected token ({response.status_code})")
            raise IdentityProviderError("Invalid access token")

        return IdentityProfile.model_validate(response.json())
