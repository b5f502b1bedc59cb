"""Entity kinds and their closed status sets.

Each entity kind governed by the lifecycle engine has its own status enum.
Display labels and the happy-path flow (used for progress bars) live here too;
legal transitions are in ``status_registry``.
"""

from enum import Enum


class EntityKind(str, Enum):
    """Kinds of entity whose lifecycle is governed."""

    BOOKING = "booking"
    APPOINTMENT = "appointment"
    EXPERT_CALL = "expert_call"
    PAYMENT = "payment"
    PRESCRIPTION = "prescription"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ON_HOLD = "on_hold"


class AppointmentStatus(str, Enum):
    REQUESTED = "requested"
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"
    REMINDED = "reminded"
    CHECKED_IN = "checked_in"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    NO_SHOW = "no_show"
    MISSED = "missed"


class ExpertCallStatus(str, Enum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    REMINDER_SENT = "reminder_sent"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    NO_SHOW = "no_show"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PrescriptionStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    DISPENSED = "dispensed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


STATUS_ENUMS: dict[EntityKind, type[Enum]] = {
    EntityKind.BOOKING: BookingStatus,
    EntityKind.APPOINTMENT: AppointmentStatus,
    EntityKind.EXPERT_CALL: ExpertCallStatus,
    EntityKind.PAYMENT: PaymentStatus,
    EntityKind.PRESCRIPTION: PrescriptionStatus,
}

INITIAL_STATUSES: dict[EntityKind, Enum] = {
    EntityKind.BOOKING: BookingStatus.PENDING,
    EntityKind.APPOINTMENT: AppointmentStatus.REQUESTED,
    EntityKind.EXPERT_CALL: ExpertCallStatus.PENDING,
    EntityKind.PAYMENT: PaymentStatus.PENDING,
    EntityKind.PRESCRIPTION: PrescriptionStatus.DRAFT,
}

# Happy path per kind, first to last. Statuses off the path report 0% progress.
STATUS_FLOWS: dict[EntityKind, tuple[Enum, ...]] = {
    EntityKind.BOOKING: (
        BookingStatus.PENDING,
        BookingStatus.CONFIRMED,
        BookingStatus.IN_PROGRESS,
        BookingStatus.COMPLETED,
    ),
    EntityKind.APPOINTMENT: (
        AppointmentStatus.REQUESTED,
        AppointmentStatus.PENDING_CONFIRMATION,
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.REMINDED,
        AppointmentStatus.CHECKED_IN,
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.COMPLETED,
    ),
    EntityKind.EXPERT_CALL: (
        ExpertCallStatus.PENDING,
        ExpertCallStatus.SCHEDULED,
        ExpertCallStatus.REMINDER_SENT,
        ExpertCallStatus.ONGOING,
        ExpertCallStatus.COMPLETED,
    ),
    EntityKind.PAYMENT: (
        PaymentStatus.PENDING,
        PaymentStatus.PROCESSING,
        PaymentStatus.COMPLETED,
    ),
    EntityKind.PRESCRIPTION: (
        PrescriptionStatus.DRAFT,
        PrescriptionStatus.ISSUED,
        PrescriptionStatus.FILLED,
        PrescriptionStatus.DISPENSED,
    ),
}

# Human-readable (label, description) per (kind, status value)
STATUS_DISPLAY: dict[EntityKind, dict[str, tuple[str, str]]] = {
    EntityKind.BOOKING: {
        "pending": ("Pending", "Booking created, awaiting confirmation"),
        "confirmed": ("Confirmed", "Booking confirmed by the care team"),
        "in_progress": ("In Progress", "Treatment journey is under way"),
        "completed": ("Completed", "Treatment journey completed"),
        "cancelled": ("Cancelled", "Booking has been cancelled"),
        "on_hold": ("On Hold", "Booking paused pending further information"),
    },
    EntityKind.APPOINTMENT: {
        "requested": ("Appointment Requested", "Patient has requested an appointment"),
        "pending_confirmation": ("Pending Confirmation", "Awaiting hospital/doctor confirmation"),
        "confirmed": ("Confirmed", "Appointment confirmed by hospital"),
        "reminded": ("Reminder Sent", "Reminder sent to patient"),
        "checked_in": ("Checked In", "Patient checked in at hospital"),
        "in_progress": ("In Progress", "Appointment currently in progress"),
        "completed": ("Completed", "Appointment completed successfully"),
        "cancelled": ("Cancelled", "Appointment cancelled"),
        "rescheduled": ("Rescheduled", "Appointment rescheduled to new date/time"),
        "no_show": ("Patient No-Show", "Patient did not show up for appointment"),
        "missed": ("Missed Appointment", "Appointment was missed"),
    },
    EntityKind.EXPERT_CALL: {
        "pending": ("Waiting to Schedule", "Expert call not yet scheduled"),
        "scheduled": ("Scheduled", "Expert call scheduled with date and time"),
        "reminder_sent": ("Reminder Sent", "Reminder notification sent to patient"),
        "ongoing": ("In Progress", "Expert call currently in progress"),
        "completed": ("Completed", "Expert call completed successfully"),
        "cancelled": ("Cancelled", "Expert call has been cancelled"),
        "rescheduled": ("Rescheduled", "Expert call has been rescheduled"),
        "no_show": ("Patient No-Show", "Patient did not attend scheduled call"),
    },
    EntityKind.PAYMENT: {
        "pending": ("Pending", "Payment initiated, awaiting processing"),
        "processing": ("Processing", "Payment is being processed by the gateway"),
        "completed": ("Completed", "Payment received"),
        "failed": ("Failed", "Payment could not be processed"),
        "cancelled": ("Cancelled", "Payment cancelled before processing"),
        "refunded": ("Refunded", "Payment refunded to the patient"),
    },
    EntityKind.PRESCRIPTION: {
        "draft": ("Draft", "Prescription being written"),
        "issued": ("Issued", "Prescription issued to the patient"),
        "partially_filled": ("Partially Filled", "Some medications have been filled"),
        "filled": ("Filled", "All medications have been filled"),
        "dispensed": ("Dispensed", "Medications dispensed to the patient"),
        "expired": ("Expired", "Prescription validity has lapsed"),
        "cancelled": ("Cancelled", "Prescription cancelled by the prescriber"),
    },
}
