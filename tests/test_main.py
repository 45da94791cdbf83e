import logging

import pytest

from rendezvous.main import resolve_log_level


@pytest.mark.parametrize(
    "value, expected",
    [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("Error", logging.ERROR),
        (None, logging.INFO),
        ("", logging.INFO),
        ("verbose", logging.INFO),
        ("42", logging.INFO),
    ],
)
def test_resolve_log_level(value, expected):
    assert resolve_log_level(value) == expected
