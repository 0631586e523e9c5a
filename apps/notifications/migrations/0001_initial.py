import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("overlap_request", "Überschneidungsanfrage"),
                            ("overlap_rejected", "Anfrage abgelehnt"),
                            ("overlap_acknowledged", "Anfrage zur Kenntnis genommen"),
                        ],
                        max_length=32,
                    ),
                ),
                ("message", models.TextField()),
                ("overlap_start", models.DateField(blank=True, null=True)),
                ("overlap_end", models.DateField(blank=True, null=True)),
                (
                    "response",
                    models.CharField(
                        choices=[
                            ("pending", "Offen"),
                            ("acknowledged", "Zur Kenntnis genommen"),
                            ("rejected", "Abgelehnt"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "recipient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "related_booking",
                    models.ForeignKey(
                        blank=True,
                        help_text="Das angefragte Segment, um das es geht.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="notifications",
                        to="bookings.booking",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
                ],
            },
        ),
    ]
