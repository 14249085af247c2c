"""Unit test configuration.

Unit tests should be fast and isolated - no network, and the filesystem only
through ``tmp_path``.
"""

import pytest


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit
