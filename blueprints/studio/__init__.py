"""
Studio blueprint initialization.
Registers all studio console routes (calendar, slots, packages, guests,
customers, settings, exports).

Individual route logic is in:
- routes/calendar.py - Month grid and day list
- routes/slots.py - Slot editor, create/update/delete
- routes/packages.py - Package (lesson template) management
- routes/guests.py - Guest detail and forced cancellation
- routes/customers.py - Customer list and booking history
- routes/settings.py - Studio settings
- routes/exports.py - Month schedule Excel export
"""

from flask import Blueprint

# Create main studio blueprint
studio_bp = Blueprint('studio', __name__)

# =============================================================================
# REGISTER ROUTE MODULES
# =============================================================================

from blueprints.studio.routes import (  # noqa: E402
    calendar,
    slots,
    packages,
    guests,
    customers,
    settings,
    exports,
)

for _module in (calendar, slots, packages, guests, customers, settings, exports):
    _module.register_routes(studio_bp)
