"""
Pytest configuration for state_pattern tests.
"""

import logging

import pytest


@pytest.fixture
def state_pattern_logs(caplog):
    """
    Capture DEBUG and above from every state_pattern logger.

    Returns the caplog fixture so tests can inspect the captured records.
    """
    caplog.set_level(logging.DEBUG, logger="state_pattern")
    return caplog
