from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from records.models import User

# username, display name, e-mail, role
SEED_USERS = [
    ("admin", "Administrator", "admin@slvc.com", "admin"),
    ("testuser", "Test User", "test@slvc.com", "admin"),
    ("demo", "Demo Client", "demo@slvc.com", "client"),
    ("dev", "Developer Client", "dev@slvc.com", "client"),
    ("manager", "Manager Client", "manager@slvc.com", "client"),
]


class Command(BaseCommand):
    help = "Ensure the demo admin and client accounts exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="password123",
                            help="Password set on every seeded account.")

    def handle(self, *args, **opts):
        password = make_password(opts["password"])
        for username, name, email, role in SEED_USERS:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={"name": name, "email": email, "role": role, "password": password,
                          "is_active": True, "is_staff": role == "admin"},
            )
            if not created:
                u.password = password
                u.role = role
                u.is_active = True
                u.is_staff = role == "admin"
                u.save(update_fields=["password", "role", "is_active", "is_staff", "updated_at"])
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All seed users ensured."))
