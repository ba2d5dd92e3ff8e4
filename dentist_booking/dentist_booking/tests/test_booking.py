"""
Tests for scheduling/booking.py

End-to-end scenarios through the BookingService: proposal, quota,
ownership, rescheduling and dentist management.
"""

import unittest
from datetime import datetime, timedelta

from dentist_booking.dentist_booking.scheduling.booking import BookingService
from dentist_booking.dentist_booking.scheduling.config import BookingConfig
from dentist_booking.dentist_booking.scheduling.errors import (
	BookingError,
	ForbiddenError,
	InvalidRequestError,
	InvalidWindowError,
	NotAvailableError,
	NotFoundError,
	QuotaExceededError,
	StorageUnavailableError,
)
from dentist_booking.dentist_booking.scheduling.models import Actor, AvailabilityWindow, Role
from dentist_booking.dentist_booking.scheduling.repository import InMemoryRepository


WEDNESDAY = datetime(2026, 1, 21)
THURSDAY = datetime(2026, 1, 22)


class BookingTestCase(unittest.TestCase):

	quota = 3

	def setUp(self):
		self.service = BookingService(
			InMemoryRepository(),
			BookingConfig(max_active_appointments=self.quota),
		)
		self.admin = Actor(id="admin@example.com", role=Role.ADMINISTRATOR)
		self.client = Actor(id="client@example.com", role=Role.CLIENT)
		self.stranger = Actor(id="stranger@example.com", role=Role.CLIENT)
		self.dentist = self.service.upsert_provider(
			self.admin,
			name="Dr. Somchai",
			years_of_experience=12,
			specialty="Orthodontics",
			windows=[AvailabilityWindow(weekday=3, start_hour=12, end_hour=18)],
		)


class TestBookingService(BookingTestCase):
	"""Tests for appointment operations."""

	def test_wednesday_scenario(self):
		accepted = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=18))
		self.assertEqual(accepted.client_id, self.client.id)

		with self.assertRaises(NotAvailableError):
			self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=19))

		with self.assertRaises(NotAvailableError):
			self.service.propose_appointment(self.client, self.dentist.id, THURSDAY.replace(hour=13))

	def test_thursday_open_once_window_added(self):
		self.service.upsert_provider(
			self.admin,
			name=self.dentist.name,
			years_of_experience=self.dentist.years_of_experience,
			specialty=self.dentist.specialty,
			windows=list(self.dentist.availability) + [AvailabilityWindow(weekday=4, start_hour=13, end_hour=15)],
			provider_id=self.dentist.id,
		)

		appointment = self.service.propose_appointment(self.client, self.dentist.id, THURSDAY.replace(hour=13))
		self.assertEqual(appointment.scheduled_at, THURSDAY.replace(hour=13))

	def test_quota_plus_one_rejected(self):
		for i in range(self.quota):
			self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=12 + i))

		with self.assertRaises(QuotaExceededError):
			self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=17))

	def test_administrator_has_no_quota(self):
		for i in range(self.quota * 3):
			self.service.propose_appointment(
				self.admin,
				self.dentist.id,
				WEDNESDAY.replace(hour=12) + timedelta(days=7 * i),
			)

		self.assertEqual(len(self.service.list_appointments(self.admin)), self.quota * 3)

	def test_unknown_dentist(self):
		with self.assertRaises(NotFoundError):
			self.service.propose_appointment(self.client, "DENT-missing", WEDNESDAY.replace(hour=12))

	def test_booking_request_validated(self):
		with self.assertRaises(InvalidRequestError):
			self.service.propose_appointment(self.client, "", WEDNESDAY.replace(hour=12))

		with self.assertRaises(InvalidRequestError):
			self.service.propose_appointment(self.client, self.dentist.id, "2026-01-21 12:00:00")

	def test_client_stamped_from_actor(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))
		self.assertEqual(appointment.client_id, "client@example.com")

	def test_get_own_appointment(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))

		self.assertEqual(self.service.get_appointment(self.client, appointment.id), appointment)
		self.assertEqual(self.service.get_appointment(self.admin, appointment.id), appointment)

	def test_get_other_client_appointment_forbidden(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))

		with self.assertRaises(ForbiddenError):
			self.service.get_appointment(self.stranger, appointment.id)

	def test_list_is_scoped_to_client(self):
		self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))
		self.service.propose_appointment(self.stranger, self.dentist.id, WEDNESDAY.replace(hour=14))

		self.assertEqual(len(self.service.list_appointments(self.client)), 1)
		self.assertEqual(len(self.service.list_appointments(self.stranger)), 1)
		self.assertEqual(len(self.service.list_appointments(self.admin)), 2)

	def test_reschedule(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))

		moved = self.service.reschedule_appointment(self.client, appointment.id, WEDNESDAY.replace(hour=15))

		self.assertEqual(moved.id, appointment.id)
		self.assertEqual(moved.scheduled_at, WEDNESDAY.replace(hour=15))
		self.assertEqual(moved.created_at, appointment.created_at)

	def test_reschedule_to_closed_slot(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))

		with self.assertRaises(NotAvailableError):
			self.service.reschedule_appointment(self.client, appointment.id, WEDNESDAY.replace(hour=20))

	def test_reschedule_and_cancel_forbidden_for_stranger(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))

		cases = [
			lambda: self.service.reschedule_appointment(self.stranger, appointment.id, WEDNESDAY.replace(hour=15)),
			lambda: self.service.reschedule_appointment(self.stranger, appointment.id, WEDNESDAY.replace(hour=23)),
			lambda: self.service.reschedule_appointment(self.stranger, appointment.id, "not a date"),
			lambda: self.service.cancel_appointment(self.stranger, appointment.id),
		]
		for case in cases:
			with self.subTest(case=case):
				with self.assertRaises(ForbiddenError):
					case()

	def test_cancel_twice(self):
		appointment = self.service.propose_appointment(self.client, self.dentist.id, WEDNESDAY.replace(hour=13))
		self.service.cancel_appointment(self.client, appointment.id)

		with self.assertRaises(NotFoundError):
			self.service.cancel_appointment(self.client, appointment.id)


class TestBookingServiceProviders(BookingTestCase):
	"""Tests for dentist management."""

	def test_invalid_window(self):
		with self.assertRaises(InvalidWindowError):
			self.service.upsert_provider(
				self.admin,
				name="Dr. Late",
				years_of_experience=3,
				specialty="Endodontics",
				windows=[AvailabilityWindow(weekday=3, start_hour=18, end_hour=12)],
			)

	def test_client_cannot_manage_dentists(self):
		with self.assertRaises(ForbiddenError):
			self.service.upsert_provider(
				self.client,
				name="Dr. Self",
				years_of_experience=1,
				specialty="General",
				windows=[AvailabilityWindow(weekday=1, start_hour=9, end_hour=10)],
			)

		with self.assertRaises(ForbiddenError):
			self.service.delete_provider(self.client, self.dentist.id)

	def test_list_and_get_providers(self):
		self.assertEqual(self.service.list_providers(), [self.dentist])
		self.assertEqual(self.service.get_provider(self.dentist.id), self.dentist)

	def test_delete_provider(self):
		self.service.delete_provider(self.admin, self.dentist.id)

		with self.assertRaises(NotFoundError):
			self.service.get_provider(self.dentist.id)


class FailingRepository(InMemoryRepository):

	def count_confirmed(self, client_id):
		raise StorageUnavailableError(operation="count_confirmed")


class TestStorageFailure(unittest.TestCase):
	"""Repository failures surface as retryable errors with no partial write."""

	def test_storage_unavailable(self):
		repository = FailingRepository()
		service = BookingService(repository)
		admin = Actor(id="admin@example.com", role=Role.ADMINISTRATOR)
		client = Actor(id="client@example.com")
		dentist = service.upsert_provider(
			admin, "Dr. Somchai", 12, "Orthodontics",
			[AvailabilityWindow(weekday=3, start_hour=12, end_hour=18)],
		)

		with self.assertRaises(StorageUnavailableError) as ctx:
			service.propose_appointment(client, dentist.id, WEDNESDAY.replace(hour=13))

		self.assertTrue(ctx.exception.retryable)
		self.assertEqual(repository.list_appointments(), [])

	def test_only_storage_errors_are_retryable(self):
		self.assertTrue(StorageUnavailableError.retryable)
		for exc in (ForbiddenError, NotFoundError, NotAvailableError, QuotaExceededError, InvalidWindowError):
			self.assertFalse(exc.retryable)
			self.assertTrue(issubclass(exc, BookingError))


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
