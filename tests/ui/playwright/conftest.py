"""
Playwright UI tests against the live scale page.

The page keeps the fake bar until it is reloaded, so every test gets a fresh
page and a fresh fake bar.
"""

from datetime import timedelta

import pytest
import requests
from playwright.sync_api import Page

from fakebar import constants
from fakebar.utils import NoSuccessException, setup_logger, wait_for_success

logger = setup_logger(__name__)


@wait_for_success(
    requests.exceptions.ConnectionError,
    wait_msg="Waiting for the scale page...",
    sleep_time=timedelta(seconds=1),
    max_time=timedelta(seconds=60),
)
def _wait_http_ok(url: str) -> None:
    """Wait until a URL returns HTTP 200."""
    response = requests.get(url, timeout=10)
    if response.status_code != 200:
        raise NoSuccessException(f"{url} returned {response.status_code}")


# --- pytest fixtures ---------------------------------------------------------


@pytest.fixture(scope="session")
def scale_base_url() -> str:
    """URL of the scale page, checked to be reachable once per session."""
    _wait_http_ok(constants.base_url)
    return constants.base_url


@pytest.fixture(scope="function")
def scale_page(page: Page, scale_base_url: str):
    """Open the scale page with empty bowls."""
    from tests.ui.playwright.pages.scale_page import ScalePage

    sp = ScalePage(page)
    sp.open(scale_base_url)
    return sp
