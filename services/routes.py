# services/routes.py
import logging
from typing import Optional
from urllib.parse import urljoin

from utils.config import load_config
from utils.env import EnvironmentConfigError, get_setting
from utils.error_handler import handle_error

config = load_config()
api_config = config.get("api", {})
USERS_ENDPOINT = api_config.get("users_endpoint", "/public/v2/users")

logger = logging.getLogger(__name__)


class Routes:
    """Builds full API URLs from the API_URL base."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url or self._initialize_base_url()

    @staticmethod
    def _initialize_base_url() -> str:
        url = get_setting("API_URL", required=False)
        if not url:
            message = "API Base URL is not set in the environment variable."
            logger.error(message)
            raise EnvironmentConfigError(message)

        logger.info(f"Base URL: {url}")
        return url

    def create_user_url(self) -> str:
        return self._generate_url(self._users_endpoint(), "Create User")

    def get_user_url(self, user_id) -> str:
        return self._generate_url(self._user_endpoint(user_id), "Get User")

    def update_user_url(self, user_id) -> str:
        return self._generate_url(self._user_endpoint(user_id), "Update User")

    def patch_user_url(self, user_id) -> str:
        return self._generate_url(self._user_endpoint(user_id), "Patch User")

    def delete_user_url(self, user_id) -> str:
        return self._generate_url(self._user_endpoint(user_id), "Delete User")

    def _generate_url(self, endpoint: str, url_type: str) -> str:
        """Join the endpoint onto the base URL; endpoints are absolute paths."""
        try:
            full_url = urljoin(self.base_url, endpoint)
        except ValueError as e:
            handle_error(e, "_generate_url", f"Failed to generate {url_type} URL")
            raise
        logger.info(f"{url_type} URL generated: {full_url}")
        return full_url

    @staticmethod
    def _user_endpoint(user_id) -> str:
        if user_id is None or str(user_id) == "":
            raise ValueError("user_id is required")
        return f"{USERS_ENDPOINT}/{user_id}"

    @staticmethod
    def _users_endpoint() -> str:
        return USERS_ENDPOINT
