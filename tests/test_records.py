"""
Tests for field resolution and record normalization.
"""

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from models.records import (
    CAPACITY, COLOR, DEFAULT_COLOR, LESSON_NAME, TEMPLATE_REF,
    normalize_all, normalize_customer, normalize_guest, normalize_settings,
    normalize_slot, normalize_template, resolve, to_clock, to_date_string,
    to_id, to_non_negative_int, to_optional_capacity, to_public_flag,
)


class TestResolve:
    """Tests for alias-based field lookup."""

    def test_first_present_alias_wins(self):
        """The earliest alias with a usable value is returned."""
        record = {'lessonName': 'ヨガ', 'レッスン名': '旧名'}
        assert resolve(record, LESSON_NAME) == 'ヨガ'

    def test_skips_empty_string_and_none(self):
        """Empty strings and None fall through to later aliases."""
        record = {'lessonName': '', 'レッスン名': None, 'title': 'ピラティス'}
        assert resolve(record, LESSON_NAME) == 'ピラティス'

    def test_zero_is_a_value(self):
        """0 is a legitimate value, not a missing one."""
        assert resolve({'capacity': 0, '定員': 10}, CAPACITY) == 0

    def test_default_when_missing(self):
        """Default is returned when no alias matches."""
        assert resolve({'other': 1}, COLOR, DEFAULT_COLOR) == '#ccc'
        assert resolve(None, COLOR, 'x') == 'x'
        assert resolve({}, 'color') == ''

    def test_single_key(self):
        """A bare string key works like a one-element alias list."""
        assert resolve({'color': '#fff'}, 'color') == '#fff'

    def test_template_reference_aliases(self):
        """Slots may reference their template under any legacy name."""
        assert resolve({'パッケージID': 'p9'}, TEMPLATE_REF) == 'p9'
        assert resolve({'templateId': 't1', 'packageId': 'p1'}, TEMPLATE_REF) == 't1'


class TestCoercion:
    """Tests for value coercion helpers."""

    def test_non_negative_int(self):
        assert to_non_negative_int('8') == 8
        assert to_non_negative_int(7.9) == 7
        assert to_non_negative_int(-3) == 0
        assert to_non_negative_int('abc') == 0
        assert to_non_negative_int(None) == 0

    def test_optional_capacity(self):
        """Absent capacity stays None; present garbage becomes 0."""
        assert to_optional_capacity(None) is None
        assert to_optional_capacity('') is None
        assert to_optional_capacity('12') == 12
        assert to_optional_capacity('many') == 0

    def test_public_flag(self):
        assert to_public_flag(True) is True
        assert to_public_flag(1) is True
        assert to_public_flag(0) is False
        assert to_public_flag('公開') is True
        assert to_public_flag('表示') is True
        assert to_public_flag('1') is True
        assert to_public_flag('非公開') is False
        assert to_public_flag('') is False

    def test_id(self):
        """Spreadsheet numbers become plain string ids."""
        assert to_id(12.0) == '12'
        assert to_id(12) == '12'
        assert to_id('abc') == 'abc'
        assert to_id(None) == ''

    def test_date_string(self):
        assert to_date_string('2024-2-1') == '2024-02-01'
        assert to_date_string('2024-02-01T00:00:00.000Z') == '2024-02-01'
        assert to_date_string(date(2024, 2, 1)) == '2024-02-01'
        assert to_date_string('not a date') == 'not a date'
        assert to_date_string('') == ''

    def test_clock(self):
        assert to_clock('9:00') == '09:00'
        assert to_clock('10:30:00') == '10:30'
        assert to_clock(time(7, 5)) == '07:05'
        assert to_clock('') == ''

    def test_utc_timestamp_uses_studio_day(self):
        """A UTC timestamp after 15:00 is already the next day in Tokyo."""
        assert to_date_string('2024-01-31T15:00:00.000Z') == '2024-02-01'
        assert to_date_string('2024-02-01T15:00:00Z') == '2024-02-02'
        assert to_date_string(datetime(2024, 1, 31, 15, tzinfo=timezone.utc)) == '2024-02-01'

    def test_timestamp_day_follows_given_timezone(self):
        utc = ZoneInfo('UTC')
        assert to_date_string('2024-02-01T15:00:00Z', utc) == '2024-02-01'
        assert to_date_string('2024-02-01T15:00:00Z', ZoneInfo('America/New_York')) == '2024-02-01'

    def test_naive_timestamp_keeps_its_day(self):
        assert to_date_string('2024-02-15T23:59:00') == '2024-02-15'

    def test_utc_clock_read_in_studio_time(self):
        assert to_clock('2024-02-01T01:30:00.000Z') == '10:30'
        assert to_clock('2024-02-01T01:30:00.000Z', ZoneInfo('UTC')) == '01:30'


class TestNormalization:
    """Tests for raw record normalization."""

    def test_slot_with_japanese_headers(self):
        """Legacy Japanese column names map onto the same Slot fields."""
        slot = normalize_slot({
            '枠ID': 5.0,
            '日付': '2024-02-01',
            '開始時刻': '9:00',
            '終了時刻': '10:00',
            'レッスン名': 'ヨガ',
            '先生名': '田中',
            '料金': '3000',
            '定員': '6',
            '公開設定': '公開',
            'パッケージID': 'p1',
        })
        assert slot.id == '5'
        assert slot.date == '2024-02-01'
        assert slot.start == '09:00'
        assert slot.name == 'ヨガ'
        assert slot.teacher == '田中'
        assert slot.price == 3000
        assert slot.capacity == 6
        assert slot.is_public is True
        assert slot.template_id == 'p1'
        assert slot.color == DEFAULT_COLOR

    def test_slot_guests_keep_order(self):
        slot = normalize_slot({'slotId': 's1', 'guests': [
            {'reservationId': 'a', 'status': '予約'},
            {'予約ID': 'b', '状態': 'キャンセル'},
            'garbage',
        ]})
        assert [g.id for g in slot.guests] == ['a', 'b']
        assert slot.guests[1].status == 'キャンセル'

    def test_slot_without_capacity(self):
        assert normalize_slot({'slotId': 's1'}).capacity is None

    def test_deleted_slot_is_inactive(self):
        assert normalize_slot({'slotId': 's1', 'status': '削除'}).is_active is False
        assert normalize_slot({'slotId': 's1', 'status': ''}).is_active is True

    def test_template(self):
        template = normalize_template({'packageId': 'p1', 'lessonName': 'ヨガ', 'capacity': 8})
        assert template.id == 'p1'
        assert template.capacity == 8
        assert template.is_active is True

    def test_guest(self):
        guest = normalize_guest({'bookingId': 'g1', '氏名': '山田', '電話番号': '090', '顧客ID': 3})
        assert guest.id == 'g1'
        assert guest.name == '山田'
        assert guest.phone == '090'
        assert guest.customer_id == '3'

    def test_customer_and_settings(self):
        customer = normalize_customer({'顧客ID': 'c1', '氏名': '山田', '来店回数': '4', '備考': 'メモ'})
        assert customer.visit_count == 4
        assert customer.memo == 'メモ'

        settings = normalize_settings({'スタジオ名': 'Studio A', 'contactEmail': 'a@example.com'})
        assert settings.studio_name == 'Studio A'
        assert settings.contact_email == 'a@example.com'

    def test_normalize_all_skips_non_dicts(self):
        assert len(normalize_all([{'slotId': '1'}, None, 'x'], normalize_slot)) == 1
        assert normalize_all(None, normalize_slot) == ()
