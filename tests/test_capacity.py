"""
Tests for effective capacity resolution.
"""

from models.capacity import (
    SOURCE_SLOT, SOURCE_TEMPLATE, SOURCE_UNRESOLVED,
    UnresolvedCapacityWarning, effective_capacity, find_template,
    resolve_capacity, template_capacity,
)
from models.records import normalize_slot, normalize_template


def make_slot(**fields):
    raw = {'slotId': 's1'}
    raw.update(fields)
    return normalize_slot(raw)


TEMPLATES = (
    normalize_template({'id': 'T1', 'capacity': 8}),
    normalize_template({'id': 'T2'}),
    normalize_template({'id': 'T3', 'capacity': 0}),
)


class TestResolveCapacity:
    """Tests for resolve_capacity."""

    def test_own_capacity_wins(self):
        """A slot's own capacity is used even when it has a template."""
        resolution = resolve_capacity(make_slot(capacity=5, packageId='T1'), TEMPLATES)
        assert resolution.value == 5
        assert resolution.source == SOURCE_SLOT
        assert resolution.is_resolved

    def test_own_zero_capacity_is_not_inherited(self):
        """0 is a real capacity, not a missing one."""
        assert effective_capacity(make_slot(capacity=0, packageId='T1'), TEMPLATES) == 0

    def test_inherits_from_template(self):
        resolution = resolve_capacity(make_slot(packageId='T1'), TEMPLATES)
        assert resolution.value == 8
        assert resolution.source == SOURCE_TEMPLATE
        assert resolution.template_id == 'T1'

    def test_template_without_capacity_is_unresolved(self):
        resolution = resolve_capacity(make_slot(packageId='T2'), TEMPLATES)
        assert resolution.value == 0
        assert resolution.source == SOURCE_UNRESOLVED
        assert isinstance(resolution.warning, UnresolvedCapacityWarning)

    def test_missing_template_is_unresolved(self):
        resolution = resolve_capacity(make_slot(packageId='X9'), TEMPLATES)
        assert resolution.value == 0
        assert not resolution.is_resolved
        assert resolution.warning.template_id == 'X9'

    def test_no_template_no_capacity(self):
        resolution = resolve_capacity(make_slot(), TEMPLATES)
        assert resolution.value == 0
        assert resolution.source == SOURCE_UNRESOLVED
        assert resolution.warning.template_id == ''

    def test_template_zero_capacity_is_inherited(self):
        resolution = resolve_capacity(make_slot(packageId='T3'), TEMPLATES)
        assert resolution.value == 0
        assert resolution.source == SOURCE_TEMPLATE

    def test_self_referencing_template_terminates(self):
        """A template whose own reference points at itself resolves in one hop."""
        templates = (normalize_template({'id': 'A', 'packageId': 'A'}),)
        resolution = resolve_capacity(make_slot(packageId='A'), templates)
        assert resolution.value == 0
        assert resolution.source == SOURCE_UNRESOLVED

    def test_resolved_has_no_warning(self):
        assert resolve_capacity(make_slot(capacity=3), TEMPLATES).warning is None

    def test_numeric_template_reference(self):
        """Ids are compared as strings."""
        templates = (normalize_template({'id': 12, 'capacity': 4}),)
        assert effective_capacity(make_slot(packageId=12.0), templates) == 4


class TestTemplateHelpers:
    """Tests for template lookups."""

    def test_find_template(self):
        assert find_template(TEMPLATES, 'T1').capacity == 8
        assert find_template(TEMPLATES, 'nope') is None
        assert find_template([], 'T1') is None

    def test_template_capacity(self):
        assert template_capacity(TEMPLATES[0]) == 8
        assert template_capacity(TEMPLATES[1]) == 0
