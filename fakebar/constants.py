import os
from dataclasses import dataclass
from datetime import timedelta

from fakebar.model import ComparisonOutcome, Polarity, Verdict


# The scale page under test.
base_url = os.getenv("FAKEBAR_BASE_URL", "https://sdetchallenge.fetch.com")

# Number of bars shown by the scale page.
bar_count = int(os.getenv("FAKEBAR_BAR_COUNT", "9"))

# The scale page hides a fake bar lighter than the genuine ones.
polarity = Polarity(os.getenv("FAKEBAR_POLARITY", Polarity.LIGHTER.value))

# Timeouts of a single wait for the weighing result and for the reset.
result_timeout_ms = int(os.getenv("FAKEBAR_RESULT_TIMEOUT_MS", "10000"))
reset_timeout_ms = int(os.getenv("FAKEBAR_RESET_TIMEOUT_MS", "5000"))

# Browser tests run only on demand; they need network access.
run_ui = os.getenv("FAKEBAR_RUN_UI", "0") == "1"

# === Signals of the scale ===

# Glyph shown between the bowls -> outcome.
RESULT_GLYPHS = {
    ">": ComparisonOutcome.LEFT_HEAVIER,
    "<": ComparisonOutcome.RIGHT_HEAVIER,
    "=": ComparisonOutcome.EQUAL,
}

# Glyph shown between the bowls before any weighing.
IDLE_GLYPH = "?"

# Fragment of the alert message -> verdict.
CONFIRMATION_MESSAGES = {
    "Yay!": Verdict.VERIFIED,
    "Oops!": Verdict.REJECTED,
}


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently a timed out weighing is repeated."""

    max_tries: int = 3
    sleep_time: timedelta = timedelta(milliseconds=500)
    backoff: float = 2.0

    @staticmethod
    def from_env():
        """Builds the policy from the FAKEBAR_* environment variables."""
        return RetryPolicy(
            max_tries=int(os.getenv("FAKEBAR_MAX_TRIES", "3")),
            sleep_time=timedelta(
                milliseconds=int(os.getenv("FAKEBAR_RETRY_SLEEP_MS", "500"))
            ),
            backoff=float(os.getenv("FAKEBAR_RETRY_BACKOFF", "2.0")),
        )
