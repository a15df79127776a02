"""
Pytest fixtures for harness consumers.

Import them from a conftest.py:

    from harness_fixtures import (
        harness_environment, correlation_store, correlation_test_id, observe_page,
        login_page, gorest_service, authenticated_session,
    )

harness_environment is session-scoped and autouse: once imported, the
envs/.env.<ENV> file is loaded before the first test runs.

The page-object fixtures expect an async Playwright ``page`` fixture from the
consumer (e.g. pytest-playwright-asyncio). In an async test:

    async def test_pre_qualification(page, observe_page, correlation_store, correlation_test_id):
        observer = observe_page(page)
        await page.goto(...)
        await observer.drain()
        assert correlation_store.read(correlation_test_id, "preQualificationId")
"""
import re
import uuid
from typing import Optional

import pytest
import pytest_asyncio

from pages.login_page import LoginPage
from pages.session_setup import create_authenticated_session
from services.correlations.store import CorrelationStore
from services.gorest_service import GoRestService
from services.network_capture import ResponseObserver
from utils.env import load_environment


def load_run_environment(env_name: Optional[str] = None) -> Optional[str]:
    """Load the dotenv file of the selected environment for the whole run."""
    return load_environment(env_name)


@pytest.fixture(scope="session", autouse=True)
def harness_environment():
    """Path of the loaded env file, or None when ENV is not set."""
    return load_run_environment()


@pytest.fixture
def correlation_store():
    """A fresh store for each test."""
    return CorrelationStore()


@pytest.fixture
def correlation_test_id(request):
    """Unique id for the running test: sanitized test name plus a random suffix."""
    name = re.sub(r"[^A-Za-z0-9_.-]+", "_", request.node.name)
    return f"{name}-{uuid.uuid4().hex[:8]}"


@pytest_asyncio.fixture
async def observe_page(correlation_store, correlation_test_id):
    """
    Factory attaching a ResponseObserver to a page for the running test.

    Observers are closed at teardown (listener removed, in-flight captures
    awaited) whether the test passed or failed.
    """
    observers = []

    def _observe(page, exclude_domains=None):
        observer = ResponseObserver(page, correlation_test_id, correlation_store, exclude_domains=exclude_domains)
        observers.append(observer)
        return observer

    yield _observe

    for observer in observers:
        await observer.close()


@pytest.fixture
def login_page(page):
    return LoginPage(page)


@pytest.fixture
def gorest_service(correlation_store, correlation_test_id):
    """User API flows sharing the running test's store and id."""
    return GoRestService(correlation_store, correlation_test_id)


@pytest_asyncio.fixture
async def authenticated_session(page, login_page):
    """Log in through the login page and return the saved storage state path."""
    return await create_authenticated_session(page, login_page)
