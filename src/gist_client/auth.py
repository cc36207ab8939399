"""Authentication module for loading the gist access token.

This module loads the GitHub token used for backups from the environment
(including a .env file, via python-dotenv). A token saved through the sync
setup always takes precedence over the environment.
"""

import os
from typing import Optional

from dotenv import load_dotenv

TOKEN_ENV_VAR = 'NOTION_LITE_GIST_TOKEN'


class Authenticator:
    """Resolves the bearer token for gist requests.

    Tokens are never logged.

    Environment variables:
        NOTION_LITE_GIST_TOKEN: GitHub token with the ``gist`` scope

    Example:
        >>> auth = Authenticator()
        >>> token = auth.resolve_token(saved_token=None)
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def resolve_token(self, saved_token: Optional[str] = None) -> Optional[str]:
        """Return the saved token if set, else the environment token, else None.

        Args:
            saved_token: Token persisted by the sync setup, if any

        Returns:
            Trimmed token or None when no token is available
        """
        for candidate in (saved_token, os.getenv(TOKEN_ENV_VAR)):
            if candidate and candidate.strip():
                return candidate.strip()
        return None
