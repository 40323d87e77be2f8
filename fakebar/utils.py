from datetime import timedelta, datetime
import functools
import logging
import time
import traceback
import urllib3


def setup_logger(name):
    """Configures the logger with a given name and returns it."""
    logger_instance = logging.getLogger(name)
    logger_instance.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    logger_instance.addHandler(handler)
    return logger_instance


class NoSuccessException(Exception):
    """General-purpose exception used by the "wait_for_success" decorator."""


# Get a tuple of transient exceptions for which we'll retry. Other exceptions will be raised.
TRANSIENT_EXCEPTIONS = (
    TimeoutError,
    ConnectionError,
    urllib3.exceptions.MaxRetryError,
    NoSuccessException,
)
logger = setup_logger(__name__)


def wait_for_success(
    *transient_exceptions,
    wait_msg="Waiting to be ready...",
    sleep_time=timedelta(milliseconds=100),
    max_time=timedelta(seconds=120),
    max_tries=None,
    backoff=1.0,
):
    """
    Repeat the decorated function until it throws no transient error.

    Parameters
    ----------
    *transient_exceptions : Type[Exception]
        Extra exception types to retry on top of TRANSIENT_EXCEPTIONS.
    wait_msg : str, optional
        Message logged before the first call.
    sleep_time : timedelta, optional
        Pause after the first failed call.
    max_time : timedelta, optional
        Total time budget. None disables the limit.
    max_tries : int, optional
        Maximum number of calls. None disables the limit.
    backoff : float, optional
        Multiplier applied to the pause after every failed call.

    Raises
    ------
    TimeoutError
        The time budget or the number of tries was exceeded. The last
        transient exception is chained as the cause.
    """

    transient_exceptions = TRANSIENT_EXCEPTIONS + tuple(transient_exceptions)

    def outer_wrapper(f):
        @functools.wraps(f)
        def inner_wrapper(*args, **kwargs):
            start_time = datetime.now()
            pause = sleep_time
            exception = None
            tries = 0
            logger.info(wait_msg)
            while True:
                tries += 1
                try:
                    result = f(*args, **kwargs)
                    done_msg = wait_msg + "done"
                    logger.info(done_msg)
                    return result
                except transient_exceptions as ex:
                    logger.debug("not yet succeeded: %s", traceback.format_exc())
                    exception = ex
                elapsed_time = datetime.now() - start_time
                if max_tries is not None and tries >= max_tries:
                    raise TimeoutError(
                        f"Number of tries ({max_tries}) exceeded for {f.__name__}"
                        f" (args: {args}, kwargs {kwargs}). Exception: {exception}"
                    ) from exception
                if max_time is not None and elapsed_time > max_time:
                    raise TimeoutError(
                        f"Wait time ({max_time.total_seconds()}s) exceeded for {f.__name__}"
                        f" (args: {args}, kwargs {kwargs}). Exception: {exception}"
                    ) from exception
                time.sleep(pause.total_seconds())
                pause = pause * backoff

        return inner_wrapper

    return outer_wrapper
