import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(help_text="Abreisetag, nicht mehr belegt.")),
                ("display_name", models.CharField(max_length=150)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("booked", "Gebucht"),
                            ("reserved", "Reserviert"),
                            ("pending", "Angefragt"),
                            ("cancelled", "Storniert"),
                        ],
                        default="booked",
                        max_length=16,
                    ),
                ),
                ("is_split", models.BooleanField(default=False)),
                ("original_request_id", models.UUIDField(db_index=True, default=uuid.uuid4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "original_booking",
                    models.ForeignKey(
                        blank=True,
                        help_text="Buchung, mit der sich dieses angefragte Segment überschneidet.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="dependent_requests",
                        to="bookings.booking",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Buchung",
                "verbose_name_plural": "Buchungen",
                "ordering": ["start_date", "id"],
                "indexes": [
                    models.Index(fields=["start_date", "end_date"], name="booking_dates_idx"),
                    models.Index(fields=["owner", "status"], name="booking_owner_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gt", models.F("start_date"))),
                        name="booking_valid_dates",
                    ),
                ],
            },
        ),
    ]
