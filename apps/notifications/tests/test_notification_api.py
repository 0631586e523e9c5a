"""Integration tests for the notification endpoints."""

from __future__ import annotations

from datetime import date
from unittest import mock

from django.core import mail
from django.db import DatabaseError
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.notifications.models import Notification
from apps.users.models import User


def d(day: int) -> str:
    return str(date(2030, 8, day))


class NotificationAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.alice = User.objects.create_user(
            email="alice@example.com", password="AlicePass123", display_name="Alice",
        )
        self.bob = User.objects.create_user(
            email="bob@example.com", password="BobPass123", display_name="Bob",
        )

    def book(self, user, start: int, end: int):
        self.client.force_authenticate(user)
        return self.client.post(
            reverse("booking-list"), {"start_date": d(start), "end_date": d(end)}, format="json",
        )

    def create_overlap(self):
        self.book(self.alice, 10, 15)
        pending = self.book(self.bob, 10, 15).data[0]
        request = Notification.objects.get(recipient=self.alice, type=Notification.Type.OVERLAP_REQUEST)
        return pending, request

    def respond(self, user, notification_id: int, action: str):
        self.client.force_authenticate(user)
        return self.client.post(
            reverse("notification-respond", args=[notification_id]), {"action": action}, format="json",
        )


class RespondTests(NotificationAPITestCase):
    def test_reject_cancels_pending_booking(self) -> None:
        pending, request = self.create_overlap()

        response = self.respond(self.alice, request.pk, "rejected")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["notification"]["response"], "rejected")
        self.assertTrue(response.data["notification"]["is_read"])
        self.assertEqual(response.data["booking"]["status"], "cancelled")
        self.assertEqual(Booking.objects.get(pk=pending["id"]).status, Booking.Status.CANCELLED)

        replies = Notification.objects.filter(recipient=self.bob)
        self.assertEqual(replies.count(), 1)
        self.assertEqual(replies.get().type, Notification.Type.OVERLAP_REJECTED)
        self.assertIn("Alice", replies.get().message)

    def test_acknowledge_leaves_booking_pending(self) -> None:
        pending, request = self.create_overlap()

        response = self.respond(self.alice, request.pk, "acknowledged")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Booking.objects.get(pk=pending["id"]).status, Booking.Status.PENDING)
        reply = Notification.objects.get(recipient=self.bob)
        self.assertEqual(reply.type, Notification.Type.OVERLAP_ACKNOWLEDGED)

    def test_second_response_fails_and_changes_nothing(self) -> None:
        pending, request = self.create_overlap()
        self.respond(self.alice, request.pk, "acknowledged")

        response = self.respond(self.alice, request.pk, "rejected")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        request.refresh_from_db()
        self.assertEqual(request.response, Notification.Response.ACKNOWLEDGED)
        self.assertEqual(Booking.objects.get(pk=pending["id"]).status, Booking.Status.PENDING)
        self.assertEqual(Notification.objects.filter(recipient=self.bob).count(), 1)

    def test_only_recipient_can_respond(self) -> None:
        _, request = self.create_overlap()

        response = self.respond(self.bob, request.pk, "rejected")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        request.refresh_from_db()
        self.assertEqual(request.response, Notification.Response.PENDING)

    def test_unknown_action_is_rejected(self) -> None:
        _, request = self.create_overlap()

        response = self.respond(self.alice, request.pk, "approved")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_informational_notification_takes_no_response(self) -> None:
        _, request = self.create_overlap()
        self.respond(self.alice, request.pk, "rejected")
        reply = Notification.objects.get(recipient=self.bob)

        response = self.respond(self.bob, reply.pk, "acknowledged")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_request_for_cancelled_booking_is_refused(self) -> None:
        pending, request = self.create_overlap()
        Booking.objects.filter(pk=pending["id"]).update(status=Booking.Status.CANCELLED)

        response = self.respond(self.alice, request.pk, "acknowledged")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        request.refresh_from_db()
        self.assertEqual(request.response, Notification.Response.PENDING)


class NotificationListTests(NotificationAPITestCase):
    def test_members_only_see_their_own_notifications(self) -> None:
        self.create_overlap()

        self.client.force_authenticate(self.bob)
        bob_view = self.client.get(reverse("notification-list"))
        self.client.force_authenticate(self.alice)
        alice_view = self.client.get(reverse("notification-list"))

        self.assertEqual(bob_view.data, [])
        self.assertEqual(len(alice_view.data), 1)
        self.assertTrue(alice_view.data[0]["is_actionable"])

    def test_mark_read(self) -> None:
        _, request = self.create_overlap()
        self.client.force_authenticate(self.alice)

        response = self.client.post(reverse("notification-mark-read", args=[request.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        request.refresh_from_db()
        self.assertTrue(request.is_read)

    def test_delete_own_notification(self) -> None:
        _, request = self.create_overlap()
        self.client.force_authenticate(self.alice)

        response = self.client.delete(reverse("notification-detail", args=[request.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Notification.objects.filter(pk=request.pk).exists())


class NotificationEmailTests(NotificationAPITestCase):
    def test_overlap_request_is_mailed_after_commit(self) -> None:
        self.book(self.alice, 10, 15)

        with self.captureOnCommitCallbacks(execute=True):
            self.book(self.bob, 10, 15)

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["alice@example.com"])
        self.assertIn("Überschneidungsanfrage", mail.outbox[0].subject)

    def test_rejection_is_mailed_to_requester(self) -> None:
        _, request = self.create_overlap()

        with self.captureOnCommitCallbacks(execute=True):
            self.respond(self.alice, request.pk, "rejected")

        self.assertEqual([m.to for m in mail.outbox], [["bob@example.com"]])

    @override_settings(NOTIFICATIONS_EMAIL_ENABLED=False)
    def test_no_mail_when_disabled(self) -> None:
        self.book(self.alice, 10, 15)

        with self.captureOnCommitCallbacks(execute=True):
            self.book(self.bob, 10, 15)

        self.assertEqual(mail.outbox, [])

    def test_failed_transaction_sends_nothing(self) -> None:
        self.book(self.alice, 10, 15)

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with mock.patch.object(Booking.objects, "create", side_effect=DatabaseError("boom")):
                response = self.book(self.bob, 10, 15)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])
