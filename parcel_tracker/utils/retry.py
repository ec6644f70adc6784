import time
import functools
import logging
from typing import Callable, Optional, Tuple, Type


def retry(
    exceptions: Tuple[Type[BaseException], ...],
    tries: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    when: Optional[Callable[[BaseException], bool]] = None,
):
    """Retry decorator with exponential backoff.

    Args:
        exceptions: Exceptions to catch and retry.
        tries: Maximum attempts (>=1). When decorating a method whose instance
            defines an integer ``retries`` attribute, ``retries + 1`` is used
            instead so the count can come from configuration.
        delay: Initial delay seconds between attempts.
        backoff: Multiplier after each failure.
        when: Optional predicate; exceptions for which it returns False are
            raised immediately (e.g. a 404 will not improve on retry).
    """
    def deco(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            attempts = tries
            if args and isinstance(getattr(args[0], "retries", None), int):
                attempts = args[0].retries + 1
            attempts = max(1, attempts)
            wait = delay
            for attempt in range(1, attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except exceptions as e:
                    if attempt == attempts or (when is not None and not when(e)):
                        raise
                    logging.warning(
                        "%s failed (attempt %d/%d): %s. Retrying in %.1fs",
                        fn.__name__, attempt, attempts, e, wait)
                    time.sleep(wait)
                    wait *= backoff
        return wrapper
    return deco
