"""
Dentists API Domain

Dentist directory and weekly availability management.
"""

from .endpoints import (
	create_dentist,
	delete_dentist,
	get_dentist,
	get_dentists,
	update_dentist,
)

__all__ = [
	"create_dentist",
	"delete_dentist",
	"get_dentist",
	"get_dentists",
	"update_dentist",
]
