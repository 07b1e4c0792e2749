from django.core.management.base import BaseCommand, CommandError

from records.exceptions import NotFoundError
from records.services.reminders import send_appointment_reminders


class Command(BaseCommand):
    help = "E-mail reminders for today's appointments of the given clients."

    def add_arguments(self, parser):
        parser.add_argument("--client-ids", nargs="+", type=int, required=True, dest="client_ids")

    def handle(self, *args, **opts):
        try:
            tally = send_appointment_reminders(opts["client_ids"])
        except NotFoundError as exc:
            raise CommandError(str(exc.detail)) from exc
        for error in tally.errors:
            self.stderr.write(error)
        self.stdout.write(self.style.SUCCESS(f"Sent {tally.sent} reminder(s), {tally.failed} failed"))
