"""Google OAuth credential handling shared by the Google adapters."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/spreadsheets.readonly",
]


class AuthenticationError(Exception):
    """Raised when no usable Google credentials are available."""

    pass


def transport_errors() -> tuple[type[Exception], ...]:
    """Network failures the Google client stack raises outside of HttpError."""
    import httplib2
    from google.auth.exceptions import TransportError

    return (httplib2.HttpLib2Error, TransportError, OSError)


class GoogleCredentials:
    """Loads, refreshes and creates the OAuth token for one Google account."""

    def __init__(self, config_folder: str, client_secret_file: str = ""):
        self.config_folder = config_folder
        self.client_secret_file = client_secret_file
        self.token_path = Path(config_folder).expanduser() / "token.json"

    def load(self):
        """Load credentials from token.json, refreshing if needed."""
        from google.auth.exceptions import RefreshError, TransportError
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        if not self.token_path.exists():
            raise AuthenticationError(f"No token at {self.token_path} - run 'focusfriend auth'")

        creds = Credentials.from_authorized_user_file(str(self.token_path), SCOPES)

        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                raise AuthenticationError(f"Failed to refresh Google token: {e}") from e
            except TransportError as e:
                raise AuthenticationError(f"Could not reach Google to refresh token: {e}") from e
            self._save(creds)

        return creds

    def build_service(self, api: str, version: str):
        """Build a Google API service client."""
        from googleapiclient.discovery import build

        return build(api, version, credentials=self.load(), cache_discovery=False)

    def authenticate(self) -> bool:
        """Run the OAuth flow. Returns True on success."""
        from google_auth_oauthlib.flow import InstalledAppFlow

        if not self.client_secret_file:
            logger.error("No client secret file configured")
            return False

        secret_path = Path(self.client_secret_file).expanduser()
        if not secret_path.exists():
            logger.error(f"Client secret file not found: {secret_path}")
            return False

        flow = InstalledAppFlow.from_client_secrets_file(str(secret_path), SCOPES)
        creds = flow.run_local_server(port=0)
        self._save(creds)
        return True

    def _save(self, creds) -> None:
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(creds.to_json())
        self.token_path.chmod(0o600)
