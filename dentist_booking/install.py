"""
Install Hooks

Creates the role that grants administrator rights in the booking engine.
"""

import frappe

from dentist_booking.api.shared.session import MANAGER_ROLE


def after_install() -> None:
	if frappe.db.exists("Role", MANAGER_ROLE):
		return

	frappe.get_doc({
		"doctype": "Role",
		"role_name": MANAGER_ROLE,
		"desk_access": 1,
	}).insert(ignore_permissions=True)

	frappe.logger("dentist_booking").info(f"Role {MANAGER_ROLE} created")
