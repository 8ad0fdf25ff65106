"""
Effective capacity resolution.

A slot either carries its own capacity or inherits it from the template it
was created from. Inheritance is exactly one hop: the template's own
capacity field is read directly and a template's template reference is never
followed, so malformed data (a template pointing at itself, two templates
pointing at each other) cannot loop.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from models.records import Slot, Template

logger = logging.getLogger(__name__)

SOURCE_SLOT = 'slot'
SOURCE_TEMPLATE = 'template'
SOURCE_UNRESOLVED = 'unresolved'


class UnresolvedCapacityWarning(UserWarning):
    """Capacity could not be determined and was reported as 0."""

    def __init__(self, slot_id: str, template_id: str = ''):
        self.slot_id = slot_id
        self.template_id = template_id
        if template_id:
            message = f"Slot {slot_id!r}: template {template_id!r} has no usable capacity"
        else:
            message = f"Slot {slot_id!r}: no capacity and no template"
        super().__init__(message)


@dataclass(frozen=True)
class CapacityResolution:
    """Resolved capacity together with where it came from."""

    value: int
    source: str
    slot_id: str = ''
    template_id: str = ''

    @property
    def is_resolved(self) -> bool:
        return self.source != SOURCE_UNRESOLVED

    @property
    def warning(self) -> Optional[UnresolvedCapacityWarning]:
        if self.is_resolved:
            return None
        return UnresolvedCapacityWarning(self.slot_id, self.template_id)


def find_template(templates: Iterable[Template], template_id) -> Optional[Template]:
    """Find a template by id (string comparison)."""
    wanted = str(template_id)
    for template in templates or ():
        if template.id == wanted:
            return template
    return None


def resolve_capacity(slot: Slot, templates: Iterable[Template]) -> CapacityResolution:
    """
    Resolve a slot's effective capacity.

    Args:
        slot: The slot to resolve
        templates: All known templates

    Returns:
        CapacityResolution; unresolved results carry value 0
    """
    if slot.capacity is not None:
        return CapacityResolution(slot.capacity, SOURCE_SLOT, slot.id)

    if not slot.template_id:
        return CapacityResolution(0, SOURCE_UNRESOLVED, slot.id)

    template = find_template(templates, slot.template_id)
    if template is None or template.capacity is None:
        logger.debug("Capacity unresolved for slot %s (template %s)", slot.id, slot.template_id)
        return CapacityResolution(0, SOURCE_UNRESOLVED, slot.id, slot.template_id)

    return CapacityResolution(template.capacity, SOURCE_TEMPLATE, slot.id, slot.template_id)


def effective_capacity(slot: Slot, templates: Iterable[Template]) -> int:
    return resolve_capacity(slot, templates).value


def template_capacity(template: Template) -> int:
    """A template's own capacity; templates never inherit."""
    return template.capacity if template.capacity is not None else 0
