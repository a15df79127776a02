# Network Capture Service
import asyncio
import logging
from typing import Any, Dict, Iterable, Optional, Set

from utils.config import load_config, get_exclude_domains
from services.correlations.constants import SENSITIVE_FIELDS
from services.correlations.exceptions import ParseError
from services.correlations.extractors import extract_fields
from services.correlations.store import CorrelationStore
from services.correlations.utils import is_capturable_response, is_excluded_url

# === Global configuration ===
config = load_config()
EXCLUDE_DOMAINS = get_exclude_domains(config)

# Set up logger for this module
logger = logging.getLogger(__name__)

RESPONSE_EVENT = "response"


class ResponseObserver:
    """
    Captures backend-assigned identifiers and credentials from one page's
    network traffic on behalf of one test.

    A single "response" listener is registered on construction. Every
    response is handled as its own asyncio task: HTTP 200 responses with a
    JSON content-type are parsed, run through the field extractor and each
    captured field is written to the injected store under this test id.

    Responses are handled independently, so when several responses carry
    the same field the stored value comes from whichever body finished
    parsing last.

    Use it as an async context manager (or call close()) so the listener is
    removed and in-flight captures are awaited when the test ends:

        async with ResponseObserver(page, test_id, store) as observer:
            await page.goto(url)
            ...
            await observer.drain()
            store.read(test_id, "applicantId")
    """

    def __init__(
        self,
        page: Any,
        test_id: str,
        store: CorrelationStore,
        exclude_domains: Optional[Iterable[str]] = None,
    ):
        if not test_id:
            raise ValueError("test_id is required to observe responses")

        self.page = page
        self.test_id = test_id
        self.store = store
        self.exclude_domains = list(EXCLUDE_DOMAINS if exclude_domains is None else exclude_domains)

        self._tasks: Set[asyncio.Task] = set()
        # Keep one handler object so the same one is passed to remove_listener
        self._listener = self._on_response
        self._attached = False

        self.page.on(RESPONSE_EVENT, self._listener)
        self._attached = True
        logger.info(f"Response listener attached for test {self.test_id}")

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def pending(self) -> int:
        """Number of captures still in flight."""
        return len(self._tasks)

    def _on_response(self, response) -> None:
        task = asyncio.get_running_loop().create_task(self.handle_response(response))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def handle_response(self, response) -> Dict[str, str]:
        """
        Process one response event.

        Returns:
            The fields captured from this response (empty when the response
            did not qualify or its body could not be parsed).
        """
        if not is_capturable_response(response.status, response.headers):
            return {}

        url = getattr(response, "url", "") or ""
        if is_excluded_url(url, self.exclude_domains):
            logger.debug(f"Skipping excluded response: {url}")
            return {}

        try:
            body = await self._parse_body(response)
        except ParseError as e:
            logger.error(f"Failed to parse response: {e}")
            return {}

        fields = extract_fields(body, response.request.headers)
        for field, value in fields.items():
            self._store_field(field, value)
        return fields

    @staticmethod
    async def _parse_body(response) -> Any:
        url = getattr(response, "url", "") or ""
        try:
            return await response.json()
        except Exception as e:
            raise ParseError(url, e) from e

    def _store_field(self, field: str, value: str) -> None:
        if field in SENSITIVE_FIELDS:
            logger.info(f"{field} captured for test {self.test_id}.")
        else:
            logger.info(f"{field} captured for test {self.test_id}: {value}")
        self.store.write(self.test_id, field, value)

    async def drain(self) -> None:
        """Wait until every capture started so far (and any started meanwhile) has finished."""
        while self._tasks:
            results = await asyncio.gather(*list(self._tasks), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Response capture failed for test {self.test_id}: {result}")

    def detach(self) -> None:
        """Stop observing new responses. Safe to call more than once."""
        if not self._attached:
            return
        self.page.remove_listener(RESPONSE_EVENT, self._listener)
        self._attached = False
        logger.info(f"Response listener removed for test {self.test_id}")

    async def close(self) -> None:
        self.detach()
        await self.drain()

    async def __aenter__(self) -> "ResponseObserver":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
