"""Test configuration and fixtures for the Inventory API."""

from tests.fixtures import *  # noqa: F401,F403
