"""
base_page.py

Shared page-object actions. Every action goes through perform_action() so
success is logged and failures are logged with context before they reach
the test.
"""
import logging
import os
from datetime import datetime
from typing import Awaitable, Callable, Optional, TypeVar

from playwright.async_api import Locator, Page, Response

from utils.config import load_config, get_repo_root
from utils.error_handler import handle_error

config = load_config()
SCREENSHOT_DIR = config.get("artifacts", {}).get("screenshots_path") or os.path.join(get_repo_root(), "screenshots")

logger = logging.getLogger(__name__)

T = TypeVar("T")

CREDENTIAL_MARKERS = ("username", "password")


class BasePage:

    def __init__(self, page: Page):
        self.page = page

    async def perform_action(
        self,
        action: Callable[[], Awaitable[T]],
        success_message: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> T:
        """Run an action once, logging the outcome. Errors are re-raised."""
        try:
            result = await action()
        except Exception as e:
            handle_error(e, "perform_action", error_message)
            raise
        if success_message:
            logger.info(success_message)
        return result

    async def perform_action_with_retry(
        self,
        action: Callable[[], Awaitable[T]],
        success_message: Optional[str] = None,
        error_message: Optional[str] = None,
        retry_count: int = 3,
    ) -> T:
        """Run an action up to retry_count times; the last failure is re-raised."""
        if retry_count < 1:
            raise ValueError("retry_count must be at least 1")

        for attempt in range(1, retry_count + 1):
            try:
                return await self.perform_action(action, success_message, error_message)
            except Exception:
                if attempt >= retry_count:
                    raise
                logger.warning(f"Attempt {attempt} failed. Retrying...")

    # --- Navigation ---

    async def navigate_to(self, url: str) -> Optional[Response]:
        return await self.perform_action(
            lambda: self.page.goto(url),
            f"Navigated to {url}",
            f"Failed to navigate to {url}",
        )

    # --- Element interaction ---

    async def fill_element(self, element: Locator, value: str, element_name: str = "") -> None:
        is_credential_field = any(marker in element_name.lower() for marker in CREDENTIAL_MARKERS)
        success_message = (
            f"Credential {element_name} filled successfully"
            if is_credential_field
            else f"{element_name} filled successfully with value: {value}"
        )
        await self.perform_action(
            lambda: element.fill(value, force=True),
            success_message,
            f"Error entering text in {element_name}",
        )

    async def click_element(self, element: Locator, element_name: str = "") -> None:
        await self.perform_action(
            lambda: element.click(),
            f"{element_name} clicked successfully",
            f"Error clicking {element_name}",
        )

    async def clear_element(self, element: Locator, element_name: str = "") -> None:
        await self.perform_action(
            lambda: element.clear(),
            f"{element_name} cleared successfully",
            f"Error clearing {element_name}",
        )

    async def get_element_text(self, element: Locator, element_name: str = "") -> str:
        text = await self.perform_action(
            lambda: element.inner_text(),
            None,
            f"Error getting text from {element_name}",
        )
        logger.info(f"Text from {element_name}: {text}")
        return text

    # --- Verification ---

    async def verify_element_visible(self, element: Locator, element_name: str = "", timeout: float = None) -> None:
        await self.perform_action(
            lambda: element.wait_for(state="visible", timeout=timeout),
            f"{element_name} is visible",
            f"{element_name} is not visible",
        )

    async def verify_element_not_visible(self, element: Locator, element_name: str = "", timeout: float = None) -> None:
        await self.perform_action(
            lambda: element.wait_for(state="hidden", timeout=timeout),
            f"{element_name} is not visible",
            f"{element_name} is still visible",
        )

    async def take_screenshot(self, file_name: Optional[str] = None) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_name = file_name or f"screenshot_{timestamp}"
        os.makedirs(SCREENSHOT_DIR, exist_ok=True)
        path = os.path.join(SCREENSHOT_DIR, f"{file_name}.png")
        await self.perform_action(
            lambda: self.page.screenshot(path=path, full_page=True),
            f"Screenshot saved to {path}",
            "Failed to take screenshot",
        )
        return path
