app_name = "dentist_booking"
app_title = "Dentist Booking"
app_publisher = "Dentist Booking contributors"
app_description = "Reserva de citas con dentistas según su disponibilidad semanal"
app_email = "dev@dentist-booking.local"
app_license = "mit"

# Installation
# ------------

after_install = "dentist_booking.install.after_install"

# Document Events
# ---------------
# Los controllers de Dentist y Dental Appointment validan en sus propios hooks.
