"""Shared pytest fixtures for the inventory tests."""

from .core import *  # noqa: F401,F403
