"""
Response Serializers

Shape scheduling values the way the booking API returns them. Appointments
embed their dentist so clients can render a booking without a second call.
"""

from typing import Any, Callable, Dict, Iterable, List

from dentist_booking.dentist_booking.scheduling.models import Appointment, Provider


DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def serialize_dentist(provider: Provider) -> Dict[str, Any]:
    data = provider.as_dict()
    return {
        "name": data["id"],
        "dentist_name": data["name"],
        "years_of_experience": data["years_of_experience"],
        "area_of_expertise": data["specialty"],
        "available_datetime": data["availability"],
    }


def serialize_appointment(appointment: Appointment, dentist: Provider) -> Dict[str, Any]:
    return {
        "name": appointment.id,
        "user": appointment.client_id,
        "dentist": serialize_dentist(dentist),
        "appt_date": appointment.scheduled_at.strftime(DATETIME_FORMAT),
        "created_at": appointment.created_at.strftime(DATETIME_FORMAT),
    }


def serialize_appointments(
    appointments: Iterable[Appointment],
    get_provider: Callable[[str], Provider],
) -> List[Dict[str, Any]]:
    """
    Serialize a list of appointments, looking up each dentist only once.

    Args:
        appointments: appointments to serialize
        get_provider: resolves a dentist id to a Provider
    """
    dentists: Dict[str, Provider] = {}
    result = []
    for appointment in appointments:
        if appointment.provider_id not in dentists:
            dentists[appointment.provider_id] = get_provider(appointment.provider_id)
        result.append(serialize_appointment(appointment, dentists[appointment.provider_id]))
    return result
