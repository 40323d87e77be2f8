import datetime
import sys

import pytest

from fakebar import constants


def is_debugger_active():
    """
    Return if the debugger is currently active.
    Source: https://stackoverflow.com/a/67065084
    """
    return hasattr(sys, "gettrace") and sys.gettrace() is not None


def pytest_collection_modifyitems(
    session, config, items
):  # pylint: disable=unused-argument
    """
    The hook to add additional decorators/markers to the tests.
    """
    # Add per-test timeout.
    # It is a watchdog to interrupt the test case if the browser or the scale
    # page hangs. The timeout is not set if the debugger is currently
    # attached.
    if not is_debugger_active():
        default_timeout = datetime.timedelta(minutes=5)
        for item in items:
            if item.get_closest_marker("timeout") is None:
                item.add_marker(pytest.mark.timeout(default_timeout.total_seconds()))

    # Browser tests need the network and a Playwright browser.
    skip_ui = pytest.mark.skip(reason="Set FAKEBAR_RUN_UI=1 to run the UI tests.")
    if constants.run_ui:
        return
    for item in items:
        if item.get_closest_marker("ui") is not None:
            item.add_marker(skip_ui)
