# services/gorest_service.py
import logging
from typing import Any, Dict, Optional

import httpx
from faker import Faker

from services.api_error_handler import ApiError, ApiErrorHandler
from services.correlations.constants import FIELD_TOKEN
from services.correlations.store import CorrelationStore
from services.rest_client import RestHttpClient
from services.routes import Routes
from utils.env import get_access_token

logger = logging.getLogger(__name__)

USER_PAYLOAD_TEMPLATE = {
    "name": "",
    "email": "",
    "gender": "male",
    "status": "active",
}

VALIDATED_FIELDS = ("name", "email", "gender", "status")


def bearer_token_header(token: str) -> str:
    return f"Bearer {token}"


class GoRestService:
    """
    User API flows for one test.

    The access token is kept in the store's token namespace under the test
    id, so later steps of the same test reuse it.
    """

    def __init__(
        self,
        store: CorrelationStore,
        test_id: str,
        routes: Optional[Routes] = None,
        client: Optional[RestHttpClient] = None,
        faker: Optional[Faker] = None,
    ):
        self.store = store
        self.test_id = test_id
        self.routes = routes or Routes()
        self.client = client or RestHttpClient()
        self.api_error_handler = ApiErrorHandler()
        self.faker = faker or Faker()

    def authorize(self, token: Optional[str] = None) -> None:
        """Store the access token (from the argument or ACCESS_TOKEN) for this test."""
        self.store.write_token(self.test_id, FIELD_TOKEN, token or get_access_token())

    def build_user_payload(self) -> Dict[str, Any]:
        return {
            **USER_PAYLOAD_TEMPLATE,
            "name": self.faker.name(),
            "email": self.faker.email(),
            "gender": self.faker.random_element(("male", "female")),
            "status": self.faker.random_element(("active", "inactive")),
        }

    async def create_new_user(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Create a user and check the API echoes what was sent.

        Raises:
            FieldNotSetError: authorize() was not called for this test.
            ApiError: unexpected HTTP status or a response that does not match the payload.
        """
        payload = payload or self.build_user_payload()
        authorization = bearer_token_header(self.store.read_token(self.test_id, FIELD_TOKEN))

        response = await self.client.send_post_request(self.routes.create_user_url(), payload, authorization)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.api_error_handler.handle_status_codes(e)
            raise

        if response.status_code != 201:
            raise ApiError(f"Expected 201 Created but received {response.status_code}", response.status_code)

        user = response.json()
        self._validate_user(user, payload)
        logger.info(f"User data validated successfully for user {user['id']}")
        return user

    @staticmethod
    def _validate_user(user: Dict[str, Any], payload: Dict[str, Any]) -> None:
        if not isinstance(user, dict) or "id" not in user:
            raise ApiError("Created user response has no 'id'")
        mismatches = [
            field for field in VALIDATED_FIELDS
            if user.get(field) != payload.get(field)
        ]
        if mismatches:
            raise ApiError(f"Created user does not match payload for: {', '.join(mismatches)}")
