import pytest

from sysstats.core.formatting import format_bytes, format_percent


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0 B"),
        (None, "0 B"),
        (-5, "0 B"),
        (512, "512 B"),
        (1536, "1.50 KB"),
        (5 * 1024**2, "5.00 MB"),
        (3 * 1024**3, "3.00 GB"),
        (2 * 1024**6, "2048.00 PB"),
    ],
)
def test_format_bytes(value, expected) -> None:
    assert format_bytes(value) == expected


def test_format_percent_handles_zero_total() -> None:
    assert format_percent(10, 0) == "0.00"
    assert format_percent(1, 3) == "33.33"
