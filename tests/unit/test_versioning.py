"""Unit tests for version numbering."""

import pytest

from sitesmith.stores import increment_version


class TestIncrementVersion:
    """Test cases for increment_version."""

    @pytest.mark.parametrize(
        "current, expected",
        [
            ("1.0.0", "1.0.1"),
            ("1.0.9", "1.0.10"),
            ("2.3.4", "2.3.5"),
            ("1", "1.0.1"),
            ("1.2", "1.2.1"),
            ("1.x.3", "1.0.4"),
            ("1.2.3.4", "1.2.4"),
            ("", "1.0.1"),
            (None, "1.0.1"),
        ],
    )
    def test_increment(self, current, expected):
        """Test the patch component is bumped."""
        assert increment_version(current) == expected
