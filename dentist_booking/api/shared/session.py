"""
Session Actor

Resolves the authenticated caller into a scheduling Actor. Credentials are
already verified by Frappe; this only reads the session user and roles.
"""

import frappe
from frappe import _

from dentist_booking.dentist_booking.scheduling.models import Actor, Role


MANAGER_ROLE = "Dentist Booking Manager"
ADMINISTRATOR_ROLES = {"System Manager", MANAGER_ROLE}


def get_current_actor() -> Actor:
    """
    Get the Actor for the current request.

    Returns:
        Actor: administrator if the user holds a manager role, client otherwise

    Raises:
        frappe.PermissionError: if the request is not authenticated
    """
    user = frappe.session.user
    if not user or user == "Guest":
        frappe.throw(
            _("Authentication required. Please login first."),
            frappe.PermissionError,
        )

    roles = set(frappe.get_roles(user))
    role = Role.ADMINISTRATOR if roles & ADMINISTRATOR_ROLES else Role.CLIENT
    return Actor(id=user, role=role)
