"""Shared fixtures for replay tests."""

import sys
from pathlib import Path

import pytest

# Ensure tests/ is on sys.path so ``import replay_helpers`` works from subdirectories.
_TESTS_DIR = str(Path(__file__).resolve().parent)
if _TESTS_DIR not in sys.path:
    sys.path.insert(0, _TESTS_DIR)

from replay.models import AssetIdentity
from replay_helpers import AAVE_ADDRESS, UNI_ADDRESS


@pytest.fixture
def uni():
    return AssetIdentity.create(1, UNI_ADDRESS, 18, 'UNI')


@pytest.fixture
def aave():
    return AssetIdentity.create(1, AAVE_ADDRESS, 18, 'AAVE')
