"""
Package (lesson template) payloads and views.
"""

from typing import Dict, List, Tuple

from models.capacity import template_capacity
from models.gating import COLOR_PALETTE
from models.records import DELETED_STATUS, Template, to_non_negative_int
from utils.helpers import format_price
from utils.messages import MESSAGES
from utils.validators import sanitize_input, validate_hex_color

NAME_MAX_LENGTH = 100


# =============================================================================
# VIEWS
# =============================================================================

def package_card(template: Template) -> Dict:
    """Card shown in the package list and the package picker."""
    return {
        'id': template.id,
        'lesson_name': template.name,
        'teacher_name': template.teacher,
        'price': template.price,
        'price_label': format_price(template.price),
        'color': template.color,
    }


def package_form(template: Template) -> Dict:
    """Values for the package edit form."""
    data = template.to_dict()
    data['capacity'] = template_capacity(template)
    return data


def package_list(templates) -> List[Dict]:
    return [package_card(t) for t in templates if t.is_active]


# =============================================================================
# VALIDATION & PAYLOADS
# =============================================================================

def validate_package_data(data: Dict) -> Tuple[bool, str]:
    """
    Validate package data before save.

    Args:
        data: Package form data

    Returns:
        (is_valid, error_message)
    """
    if not sanitize_input(data.get('lesson_name')):
        return False, 'レッスン名は必須です'
    color = data.get('color')
    if color and not validate_hex_color(color):
        return False, MESSAGES['invalid_color']
    return True, ''


def build_package_payload(data: Dict, package_id: str = '') -> Dict:
    """
    Build the save payload for a package.

    Args:
        data: Package form data (lesson_name, teacher_name, description,
            price, capacity, color, is_public)
        package_id: Existing package id, empty for a new package

    Returns:
        Payload for the package save action

    Raises:
        ValueError: Invalid package data
    """
    is_valid, error = validate_package_data(data)
    if not is_valid:
        raise ValueError(error)

    is_public = data.get('is_public', True)
    if isinstance(is_public, str):
        is_public = is_public.lower() in ('1', 'true', 'on', 'yes')

    return {
        'id': package_id or '',
        'lessonName': sanitize_input(data['lesson_name'], NAME_MAX_LENGTH),
        'teacherName': sanitize_input(data.get('teacher_name'), NAME_MAX_LENGTH),
        'description': data.get('description') or '',
        'price': to_non_negative_int(data.get('price')),
        'capacity': to_non_negative_int(data.get('capacity')),
        'color': data.get('color') or COLOR_PALETTE[0],
        'isPublic': 1 if is_public else 0,
    }


def build_package_delete_payload(package_id: str) -> Dict:
    return {'id': package_id, 'status': DELETED_STATUS}
