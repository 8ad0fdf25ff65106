"""
Tests for guest status classification and tallies.
"""

import itertools

from models.guest import (
    GuestStatus, classify_status, guest_to_view,
    tally, visible_guests,
)
from models.records import normalize_guest


def guests(*statuses):
    return [
        normalize_guest({'reservationId': f'g{i}', 'status': status})
        for i, status in enumerate(statuses)
    ]


class TestClassifyStatus:
    """Tests for classify_status."""

    def test_japanese_statuses(self):
        assert classify_status('予約') is GuestStatus.RESERVED
        assert classify_status('キャンセル待ち') is GuestStatus.WAITLISTED
        assert classify_status('キャンセル') is GuestStatus.CANCELLED

    def test_waitlist_is_not_cancelled(self):
        """'キャンセル待ち' contains 'キャンセル' but is a waitlist entry."""
        assert classify_status('キャンセル待ち') is not GuestStatus.CANCELLED
        assert tally(guests('キャンセル待ち')).active == 1

    def test_english_statuses(self):
        assert classify_status('reserved') is GuestStatus.RESERVED
        assert classify_status('waitlisted') is GuestStatus.WAITLISTED
        assert classify_status('cancelled') is GuestStatus.CANCELLED

    def test_unknown(self):
        assert classify_status('保留') is GuestStatus.UNKNOWN
        assert classify_status('') is GuestStatus.UNKNOWN
        assert classify_status(None) is GuestStatus.UNKNOWN
        assert tally(guests('保留')).active == 0


class TestTally:
    """Tests for reservation counts."""

    def test_mixed_statuses(self):
        result = tally(guests('予約', '予約', 'キャンセル待ち', 'キャンセル', '保留'))
        assert result.reserved == 2
        assert result.waitlist == 1
        assert result.active == 3

    def test_empty(self):
        result = tally([])
        assert result.reserved == 0
        assert result.waitlist == 0
        assert tally(None).active == 0

    def test_order_does_not_matter(self):
        entries = guests('予約', 'キャンセル待ち', 'キャンセル', '予約')
        expected = tally(entries)
        for order in itertools.permutations(entries):
            assert tally(order) == expected

    def test_counts_never_exceed_guest_count(self):
        entries = guests('予約', 'キャンセル待ち', '予約')
        result = tally(entries)
        assert result.reserved + result.waitlist <= len(entries)

    def test_to_dict(self):
        assert tally(guests('予約')).to_dict() == {'reserved': 1, 'waitlist': 0}


class TestGuestViews:
    """Tests for the guest list."""

    def test_visible_guests_hide_cancellations(self):
        entries = guests('予約', 'キャンセル', 'キャンセル待ち', '保留')
        assert [g.status for g in visible_guests(entries)] == ['予約', 'キャンセル待ち', '保留']

    def test_view_badges(self):
        waitlisted = guest_to_view(normalize_guest({'reservationId': 'g1', 'status': 'キャンセル待ち'}))
        assert waitlisted['is_waitlisted'] is True
        assert waitlisted['status_label'] == '待ち'
        assert waitlisted['display_name'] == '不明'
        assert waitlisted['display_phone'] == '--'

        reserved = guest_to_view(normalize_guest({'name': '山田', 'phone': '090', 'status': '予約'}))
        assert reserved['is_waitlisted'] is False
        assert reserved['display_name'] == '山田'
        assert reserved['display_phone'] == '090'
