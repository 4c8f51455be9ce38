# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Integration tests for client timeouts against the delayed responder."""

import concurrent.futures
import time

import pytest
import requests


def test_response_after_wait(short_wait_url: str):
    """
    arrange: serve the fixture with a two second wait.
    act: send a GET request with a generous client timeout.
    assert: the canned body arrives with status 200, no sooner than two seconds after send.
    """
    start = time.monotonic()

    response = requests.get(short_wait_url, timeout=10)

    assert time.monotonic() - start >= 2
    assert response.status_code == 200
    assert response.text == '{"name":"myName"}'


def test_short_client_timeout(short_wait_url: str):
    """
    arrange: serve the fixture with a two second wait.
    act: send a GET request with a one second read timeout.
    assert: the client observes a read timeout, never a response.
    """
    with pytest.raises(requests.exceptions.ReadTimeout):
        requests.get(short_wait_url, timeout=(5, 1))


def test_concurrent_requests_wait_independently(short_wait_url: str):
    """
    arrange: serve the fixture with a two second wait on a threaded server.
    act: send three GET requests at the same time.
    assert: every request gets the body and they overlap instead of queueing.
    """
    start = time.monotonic()
    with concurrent.futures.ThreadPoolExecutor(max_workers=3) as executor:
        responses = list(
            executor.map(lambda _: requests.get(short_wait_url, timeout=10), range(3))
        )

    assert [r.text for r in responses] == ['{"name":"myName"}'] * 3
    assert time.monotonic() - start < 6


def test_default_wait_times_out_five_second_client(default_url: str):
    """
    arrange: serve the fixture with the default wait.
    act: send a GET request with a five second timeout.
    assert: the client observes a timeout.
    """
    with pytest.raises(requests.exceptions.Timeout):
        requests.get(default_url, timeout=5)


def test_default_wait_answers_fifteen_second_client(default_url: str):
    """
    arrange: serve the fixture with the default wait.
    act: send a GET request with a fifteen second timeout.
    assert: the canned body arrives, no sooner than ten seconds after send.
    """
    start = time.monotonic()

    response = requests.get(default_url, timeout=15)

    assert time.monotonic() - start >= 10
    assert response.status_code == 200
    assert response.text == '{"name":"myName"}'
