"""
Appointment reminder e-mails.

Sends one reminder per appointment booked today (clinic-local day) for the
requested clients.  A client without an e-mail address, or a send that
raises, is counted as a failure and the batch carries on; nothing is
retried.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import dateformat, timezone

from ..exceptions import NotFoundError
from ..models import Appointment
from .appointments import local_day_bounds, serialize_appointment
from .clients import client_summary

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass
class ReminderTally:
    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def fail(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    def as_dict(self) -> dict:
        return {'sent': self.sent, 'failed': self.failed, 'errors': list(self.errors)}


def _today_bounds(now: dt.datetime | None = None):
    return local_day_bounds(timezone.localdate(now or timezone.now()))


def reminder_context(appointment) -> dict:
    when = timezone.localtime(appointment.appointment_date)
    return {
        'clientName': appointment.client.name or appointment.client.username,
        'petName': appointment.pet.name if appointment.pet_id else 'Your pet',
        'appointmentDate': dateformat.format(when, 'F j, Y'),
        'appointmentTime': dateformat.format(when, 'g:i A'),
        'appointmentType': appointment.types.capitalize(),
        'clinicName': settings.CLINIC_NAME,
        'clinicPhone': settings.CLINIC_PHONE,
        'clinicAddress': settings.CLINIC_ADDRESS,
    }


def build_reminder(appointment, connection=None) -> EmailMultiAlternatives:
    context = reminder_context(appointment)
    message = EmailMultiAlternatives(
        subject=f"Appointment Reminder - {settings.CLINIC_NAME}",
        body=render_to_string('emails/appointment_reminder.txt', context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[appointment.client.email],
        connection=connection,
    )
    message.attach_alternative(render_to_string('emails/appointment_reminder.html', context), 'text/html')
    return message


def send_appointment_reminders(client_ids, now: dt.datetime | None = None, connection=None) -> ReminderTally:
    """Send today's reminders to ``client_ids`` and return the tally.

    Raises :class:`NotFoundError` when none of the clients has an
    appointment today.
    """
    start, end = _today_bounds(now)
    appointments = list(
        Appointment.objects.select_related('client', 'pet')
        .filter(client_id__in=list(client_ids), appointment_date__gte=start, appointment_date__lt=end)
        .order_by('appointment_date', 'id')
    )
    if not appointments:
        raise NotFoundError('No appointments found for today for selected clients')

    tally = ReminderTally()
    for appointment in appointments:
        client = appointment.client
        if not client.email:
            tally.fail(f"Client {client.id} has no email address")
            logger.warning('reminder skipped for appointment %s: client %s has no email', appointment.id, client.id)
            continue
        try:
            build_reminder(appointment, connection=connection).send()
        except Exception as exc:
            tally.fail(f"Failed to send to {client.email}: {exc}")
            logger.error('failed to send reminder for appointment %s to %s: %s', appointment.id, client.email, exc)
            continue
        tally.sent += 1
    logger.info('reminders sent=%s failed=%s', tally.sent, tally.failed)
    return tally


def clients_with_appointments_today(now: dt.datetime | None = None) -> list[dict]:
    start, end = _today_bounds(now)
    appointments = (Appointment.objects.select_related('client', 'pet')
                    .filter(client__role=User.ROLE_CLIENT, appointment_date__gte=start, appointment_date__lt=end)
                    .order_by('appointment_date', 'id'))
    clients: dict[int, dict] = {}
    for a in appointments:
        entry = clients.setdefault(a.client_id, {**client_summary(a.client), 'appointments': []})
        entry['appointments'].append(serialize_appointment(a))
    return list(clients.values())
