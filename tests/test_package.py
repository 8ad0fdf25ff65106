"""
Tests for package and settings payloads.
"""

import pytest

from models.package import (
    build_package_delete_payload, build_package_payload,
    package_card, package_form, package_list, validate_package_data,
)
from models.records import normalize_template
from models.settings import build_settings_payload


class TestPackagePayload:
    """Tests for package validation and payloads."""

    def test_requires_lesson_name(self):
        assert validate_package_data({'lesson_name': '  '}) == (False, 'レッスン名は必須です')
        assert validate_package_data({'lesson_name': 'ヨガ'}) == (True, '')

    def test_build_payload(self):
        payload = build_package_payload({
            'lesson_name': 'ヨガ ', 'teacher_name': '田中', 'price': '3000',
            'capacity': '8', 'is_public': 'on',
        }, 'p1')
        assert payload == {
            'id': 'p1',
            'lessonName': 'ヨガ',
            'teacherName': '田中',
            'description': '',
            'price': 3000,
            'capacity': 8,
            'color': '#ffffff',
            'isPublic': 1,
        }

    def test_new_package_has_empty_id(self):
        assert build_package_payload({'lesson_name': 'ヨガ'})['id'] == ''

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            build_package_payload({'teacher_name': '田中'})

    def test_invalid_color(self):
        is_valid, error = validate_package_data({'lesson_name': 'ヨガ', 'color': 'blue'})
        assert is_valid is False
        assert error == '色の形式が正しくありません'

    def test_delete_payload(self):
        assert build_package_delete_payload('p1') == {'id': 'p1', 'status': '削除'}


class TestPackageViews:
    """Tests for package list and form views."""

    def test_list_hides_deleted(self):
        templates = [
            normalize_template({'id': 'p1', 'lessonName': 'ヨガ', 'price': 3000}),
            normalize_template({'id': 'p2', 'lessonName': '旧', 'status': '削除'}),
        ]
        cards = package_list(templates)
        assert [c['id'] for c in cards] == ['p1']
        assert cards[0]['price_label'] == '¥3,000'

    def test_form_capacity_defaults_to_zero(self):
        template = normalize_template({'id': 'p1', 'lessonName': 'ヨガ'})
        assert package_form(template)['capacity'] == 0
        assert package_card(template)['lesson_name'] == 'ヨガ'


class TestSettingsPayload:
    """Tests for build_settings_payload."""

    def test_maps_and_trims(self):
        payload = build_settings_payload({
            'studio_name': ' Studio A ', 'contact_email': 'info@example.com', 'unknown': 'x',
        })
        assert payload == {
            'studioName': 'Studio A',
            'concept': '',
            'address': '',
            'contactEmail': 'info@example.com',
            'facilities': '',
        }
