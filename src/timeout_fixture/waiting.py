# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Wait strategies used to stall a request before it is answered.

The busy wait spins on the wall clock without ever yielding, so the worker thread
serving the request stays occupied for the whole duration. Clients under test can
tell it apart from a server that suspends the request cooperatively. The sleep
wait keeps the same external timing contract for cases where that distinction
does not matter.
"""

import time
import typing

from timeout_fixture.exceptions import ConfigInvalidError

Clock = typing.Callable[[], float]
Waiter = typing.Callable[[float, Clock], float]


def epoch_millis(clock: Clock = time.time) -> int:
    """Get the current time as milliseconds since the epoch.

    Args:
        clock: the time source, in seconds.

    Returns:
        The current time in milliseconds.
    """
    return int(clock() * 1000)


def busy_wait(duration: float, clock: Clock = time.time) -> float:
    """Spin on the clock until more than ``duration`` seconds have elapsed.

    Once started the wait cannot be cancelled.

    Args:
        duration: the minimum number of seconds to wait.
        clock: the time source, in seconds.

    Returns:
        The number of seconds actually elapsed.
    """
    before_loop = clock()
    while True:
        elapsed = clock() - before_loop
        if elapsed > duration:
            return elapsed


def sleep_wait(duration: float, clock: Clock = time.time) -> float:
    """Suspend the calling thread for at least ``duration`` seconds.

    Args:
        duration: the minimum number of seconds to wait.
        clock: the time source, in seconds.

    Returns:
        The number of seconds actually elapsed.
    """
    before_sleep = clock()
    remaining = duration
    # time.sleep may return early on some platforms
    while remaining > 0:
        time.sleep(remaining)
        remaining = duration - (clock() - before_sleep)
    return clock() - before_sleep


WAITERS: dict[str, Waiter] = {"busy": busy_wait, "sleep": sleep_wait}


def get_waiter(strategy: str) -> Waiter:
    """Look up the wait function for a strategy name.

    Args:
        strategy: ``busy`` or ``sleep``.

    Returns:
        The wait function.

    Raises:
        ConfigInvalidError: if the strategy is unknown.
    """
    try:
        return WAITERS[strategy]
    except KeyError as exc:
        raise ConfigInvalidError(f"invalid configuration: wait_strategy {strategy!r}") from exc
