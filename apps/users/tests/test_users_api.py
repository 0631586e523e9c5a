"""API tests for registration, login and the member directory."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "email": "clara@example.com",
            "display_name": "Clara",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertEqual(response.data["user"]["display_name"], "Clara")
        self.assertFalse(response.data["user"]["is_admin"])
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_register_rejects_mismatched_passwords(self) -> None:
        payload = {
            "email": "clara@example.com",
            "display_name": "Clara",
            "password": "StrongPass123",
            "password_confirm": "OtherPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", response.data)

    def test_register_rejects_duplicate_email(self) -> None:
        User.objects.create_user(email="clara@example.com", password="StrongPass123")
        payload = {
            "email": "Clara@example.com",
            "display_name": "Clara",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_login_and_use_access_token(self) -> None:
        User.objects.create_user(email="dora@example.com", password="StrongPass123", display_name="Dora")

        login = self.client.post(
            reverse("auth:login"),
            {"email": "dora@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(login.status_code, status.HTTP_200_OK, login.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        me = self.client.get(reverse("user-me"))

        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["display_name"], "Dora")

    def test_refresh_token(self) -> None:
        User.objects.create_user(email="dora@example.com", password="StrongPass123")
        login = self.client.post(
            reverse("auth:login"),
            {"email": "dora@example.com", "password": "StrongPass123"},
            format="json",
        )

        response = self.client.post(reverse("auth:token_refresh"), {"refresh": login.data["refresh"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)


class UserDirectoryTests(APITestCase):
    def setUp(self) -> None:
        self.member = User.objects.create_user(email="eva@example.com", password="x", display_name="Eva")
        self.admin = User.objects.create_user(
            email="admin@example.com", password="x", display_name="Admin", is_staff=True,
        )

    def test_member_list_is_admin_only(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_lists_members_by_display_name(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u["display_name"] for u in response.data], ["Admin", "Eva"])
        self.assertTrue(response.data[0]["is_admin"])

    def test_display_name_defaults_to_local_part(self) -> None:
        user = User.objects.create_user(email="frank@example.com", password="x")

        self.assertEqual(user.display_name, "frank")
