"""
Tests for cookie based JWT auth.
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase


class TestAuthFlow(APITestCase):

    def setUp(self):
        self.user = get_user_model().objects.create_user(username="desk", password="s3cret", is_staff=True)

    def test_login_sets_cookies(self):
        resp = self.client.post("/api/auth/login/", {"username": "desk", "password": "s3cret"}, format="json")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["user"]["username"], "desk")
        self.assertTrue(resp.data["user"]["is_staff"])
        self.assertIn(settings.JWT_COOKIE_ACCESS, resp.cookies)
        self.assertIn(settings.JWT_COOKIE_REFRESH, resp.cookies)
        self.assertTrue(resp.cookies[settings.JWT_COOKIE_ACCESS]["httponly"])

    def test_cookie_authenticates_me(self):
        self.client.post("/api/auth/login/", {"username": "desk", "password": "s3cret"}, format="json")

        resp = self.client.get("/api/auth/me/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["username"], "desk")

    def test_bearer_header_authenticates(self):
        login = self.client.post("/api/auth/login/", {"username": "desk", "password": "s3cret"}, format="json")
        self.client.cookies.clear()

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        resp = self.client.get("/api/staff/bookings/")
        self.assertEqual(resp.status_code, 200)

    def test_bad_credentials(self):
        resp = self.client.post("/api/auth/login/", {"username": "desk", "password": "nope"}, format="json")
        self.assertEqual(resp.status_code, 401)

        resp = self.client.post("/api/auth/login/", {"username": ""}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_refresh_from_body(self):
        login = self.client.post("/api/auth/login/", {"username": "desk", "password": "s3cret"}, format="json")
        self.client.cookies.clear()

        resp = self.client.post("/api/auth/refresh/", {"refresh": login.data["refresh"]}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("access", resp.data)

        resp = self.client.post("/api/auth/refresh/", {"refresh": "garbage"}, format="json")
        self.assertEqual(resp.status_code, 401)

    def test_logout_clears_cookies(self):
        self.client.post("/api/auth/login/", {"username": "desk", "password": "s3cret"}, format="json")

        resp = self.client.post("/api/auth/logout/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.cookies[settings.JWT_COOKIE_ACCESS].value, "")

    def test_me_requires_login(self):
        self.assertEqual(self.client.get("/api/auth/me/").status_code, 401)
