import logging
from typing import Any, Dict, Optional

import requests

from eventpro.core.config import Settings, settings as default_settings
from eventpro.core.exceptions import InvalidCredentials

logger = logging.getLogger(__name__)


class GoogleSSO:
    """Verify Google ID tokens posted by the sign-in button."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.client_id = self.settings.GOOGLE_CLIENT_ID
        self.tokeninfo_url = self.settings.GOOGLE_TOKENINFO_URL

    def verify_token(self, id_token: str) -> Dict[str, Any]:
        """Verify the token with Google's tokeninfo endpoint and return the identity"""
        try:
            response = requests.get(self.tokeninfo_url, params={"id_token": id_token}, timeout=10)
        except requests.RequestException as e:
            logger.error(f"Google tokeninfo request failed: {str(e)}")
            raise InvalidCredentials("Failed to verify Google credential")

        if response.status_code != 200:
            raise InvalidCredentials("Invalid Google credential")

        token_data = response.json()

        if self.client_id and token_data.get("aud") != self.client_id:
            logger.warning("Google credential issued for a different client")
            raise InvalidCredentials("Invalid Google credential")

        email = token_data.get("email")
        if not token_data.get("sub") or not email:
            raise InvalidCredentials("Google credential carries no email address")

        return {
            "google_id": token_data["sub"],
            "email": email,
            "name": token_data.get("name") or email.split("@")[0],
            "picture": token_data.get("picture"),
        }
