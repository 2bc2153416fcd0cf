import pytest

from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMasking:
    def test_sensitive_assignment_is_masked(self) -> None:
        assert mask_sensitive('login(email=a@b.c, seat=S-1)') == (
            "login(email='********', seat=S-1)"
        )

    def test_clean_value_is_returned_untouched(self) -> None:
        data = {'seat_id': 'S-12'}

        assert mask_sensitive(data) is data

    @pytest.mark.parametrize(
        'keyword, value, expected',
        [
            ('phone', '555-0100', '********'),
            ('seat_id', 'S-12', 'S-12'),
        ],
    )
    def test_should_mask_keyword(self, keyword: str, value: str, expected: str) -> None:
        assert should_mask_keyword(keyword, value) == expected


@pytest.mark.unit
class TestTruncate:
    def test_short_content_kept(self) -> None:
        assert truncate_content('S-12') == 'S-12'

    def test_long_content_cut(self) -> None:
        truncated = truncate_content('x' * 600)

        assert truncated.startswith('x' * 500)
        assert truncated.endswith('(600 chars)')
