"""Shared fixtures for the nodebridge test suite.

Node options match the reference scenario: localhost:2333, auth "pw".
Test doubles and sample payloads live in helpers.py.
"""

from __future__ import annotations

import pytest

from helpers import RecordingNode
from nodebridge.config import ManagerInfo, NodeOptions


@pytest.fixture
def node():
    return RecordingNode()


@pytest.fixture
def manager():
    return ManagerInfo(id="1234", resume=False, resume_timeout=60, user_agent="test-agent/1.0")


@pytest.fixture
def resume_manager():
    return ManagerInfo(id="1234", resume=True, resume_timeout=60, user_agent="test-agent/1.0")


@pytest.fixture
def node_options():
    return NodeOptions(name="local", host="localhost", port=2333, auth="pw", secure=False)
