"""
Studio settings payload.
"""

from typing import Dict

from utils.validators import sanitize_input

SETTINGS_FIELDS = {
    'studio_name': 'studioName',
    'concept': 'concept',
    'address': 'address',
    'contact_email': 'contactEmail',
    'facilities': 'facilities',
}

SETTINGS_MAX_LENGTH = 2000


def build_settings_payload(data: Dict) -> Dict:
    """Map settings form fields to the backend's keys; unknown fields are dropped."""
    return {
        wire_key: sanitize_input(data.get(form_key), SETTINGS_MAX_LENGTH)
        for form_key, wire_key in SETTINGS_FIELDS.items()
    }
