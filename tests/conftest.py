"""Pytest configuration shared by every test module."""

from tests.mock_utils import patch_mockfirestore

patch_mockfirestore()
