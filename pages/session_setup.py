"""
session_setup.py

Logs in once through the login page and saves the browser storage state, so
UI tests can start from an authenticated context instead of logging in again:

    context = await browser.new_context(storage_state=get_storage_state_path())
"""
import logging
import os
from typing import Optional

from playwright.async_api import Page

from pages.login_page import LoginPage
from utils.config import load_config, get_storage_state_path
from utils.env import get_base_url, get_password, get_username
from utils.error_handler import handle_error

config = load_config()
STORAGE_STATE_PATH = get_storage_state_path(config)

logger = logging.getLogger(__name__)


async def create_authenticated_session(
    page: Page,
    login_page: Optional[LoginPage] = None,
    storage_state_path: Optional[str] = None,
    decrypt_credentials: bool = False,
) -> str:
    """
    Log in with the URL/USERNAME/PASSWORD settings and save the session.

    Args:
        page: Page of the context whose state is saved.
        login_page: Existing page object for the page; one is built when omitted.
        storage_state_path: Target JSON file (default: auth.storage_state_path).
        decrypt_credentials: USERNAME/PASSWORD are stored encrypted.

    Returns:
        Path of the saved storage state file.
    """
    login_page = login_page or LoginPage(page)
    storage_state_path = storage_state_path or STORAGE_STATE_PATH

    await login_page.navigate_to(get_base_url())
    await login_page.is_company_logo_present()
    await login_page.login_to_application(
        get_username(decrypt_credentials),
        get_password(decrypt_credentials),
    )
    await login_page.is_error_message_not_visible()
    logger.info("Login Successful")

    try:
        os.makedirs(os.path.dirname(storage_state_path) or ".", exist_ok=True)
        await page.context.storage_state(path=storage_state_path)
    except Exception as e:
        handle_error(e, "create_authenticated_session", f"Failed to save session to {storage_state_path}")
        raise

    logger.info(f"Session setup completed and saved to {storage_state_path}")
    return storage_state_path
