import datetime as dt
from smtplib import SMTPException
from zoneinfo import ZoneInfo

import pytest
from django.core.management import CommandError, call_command
from django.utils import timezone

from records.exceptions import NotFoundError
from records.models import Appointment, Pet, User
from records.services import reminders

pytestmark = pytest.mark.django_db

UTC = dt.timezone.utc
NOW = dt.datetime(2024, 3, 11, 10, 0, tzinfo=ZoneInfo('Asia/Manila'))
MORNING = dt.datetime(2024, 3, 10, 23, 30, tzinfo=UTC)  # 7:30 AM on March 11 at the clinic


@pytest.fixture
def no_email_owner(db):
    return User.objects.create_user(username='walkin_a1b2c3', password='P@ssw0rd1', role='client',
                                    name='Walk-in Owner', email=None)


@pytest.fixture
def todays_appointments(owner, other_owner, no_email_owner, pet, other_pet):
    stray = Pet.objects.create(client=no_email_owner, name='Brownie', age=1, species='canine', breed='Aspin',
                               colormark='brown')
    return [
        Appointment.objects.create(client=owner, pet=pet, appointment_date=MORNING, types='vaccine'),
        Appointment.objects.create(client=other_owner, pet=other_pet, appointment_date=MORNING,
                                   types='consultation'),
        Appointment.objects.create(client=no_email_owner, pet=stray, appointment_date=MORNING,
                                   types='deworming'),
    ]


def test_batch_counts_missing_email_as_failure(todays_appointments, owner, other_owner, no_email_owner,
                                               mailoutbox):
    tally = reminders.send_appointment_reminders([owner.id, other_owner.id, no_email_owner.id], now=NOW)

    assert (tally.sent, tally.failed) == (2, 1)
    assert tally.errors == [f'Client {no_email_owner.id} has no email address']
    assert sorted(m.to[0] for m in mailoutbox) == ['jose@example.com', 'maria@example.com']

    maria = next(m for m in mailoutbox if m.to == ['maria@example.com'])
    assert maria.subject == 'Appointment Reminder - Sniff & Lick Veterinary Clinic'
    assert 'March 11, 2024' in maria.body
    assert '7:30 AM' in maria.body
    assert 'Bantay' in maria.body
    html, mimetype = maria.alternatives[0]
    assert mimetype == 'text/html'
    assert 'Maria Santos' in html


def test_send_failure_does_not_stop_the_batch(todays_appointments, owner, other_owner, monkeypatch, mailoutbox):
    build = reminders.build_reminder

    def flaky(appointment, connection=None):
        message = build(appointment, connection=connection)
        if appointment.client_id == owner.id:
            def refuse(*args, **kwargs):
                raise SMTPException('mailbox unavailable')
            message.send = refuse
        return message

    monkeypatch.setattr(reminders, 'build_reminder', flaky)
    tally = reminders.send_appointment_reminders([owner.id, other_owner.id], now=NOW)

    assert (tally.sent, tally.failed) == (1, 1)
    assert 'maria@example.com' in tally.errors[0]
    assert [m.to for m in mailoutbox] == [['jose@example.com']]


def test_only_todays_appointments_are_reminded(owner, pet, mailoutbox):
    Appointment.objects.create(client=owner, pet=pet, appointment_date=MORNING + dt.timedelta(days=1),
                               types='vaccine')
    with pytest.raises(NotFoundError):
        reminders.send_appointment_reminders([owner.id], now=NOW)
    assert mailoutbox == []


def test_clients_with_appointments_today(todays_appointments, owner):
    rows = reminders.clients_with_appointments_today(now=NOW)
    assert len(rows) == 3
    maria = next(r for r in rows if r['id'] == owner.id)
    assert maria['appointments'][0]['types'] == 'vaccine'


def test_reminder_endpoint(admin_api, owner, pet, mailoutbox):
    r = admin_api.post('/api/admin/notifications/reminders', {'client_ids': [owner.id]}, format='json')
    assert r.status_code == 404
    assert r.data == {'success': False, 'message': 'No appointments found for today for selected clients'}

    Appointment.objects.create(client=owner, pet=pet, appointment_date=timezone.now(), types='consultation')
    r = admin_api.post('/api/admin/notifications/reminders', {'client_ids': [owner.id]}, format='json')
    assert r.status_code == 200
    assert r.data['data'] == {'sent': 1, 'failed': 0, 'errors': []}
    assert len(mailoutbox) == 1


def test_reminder_endpoint_rejects_unknown_clients(admin_api):
    r = admin_api.post('/api/admin/notifications/reminders', {'client_ids': [4242]}, format='json')
    assert r.status_code == 422
    assert 'client_ids' in r.data['errors']


def test_send_reminders_command(owner, pet, mailoutbox):
    with pytest.raises(CommandError):
        call_command('send_reminders', '--client-ids', str(owner.id))

    Appointment.objects.create(client=owner, pet=pet, appointment_date=timezone.now(), types='vaccine')
    call_command('send_reminders', '--client-ids', str(owner.id))
    assert len(mailoutbox) == 1
