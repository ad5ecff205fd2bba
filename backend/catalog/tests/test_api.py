"""
Tests for the service catalog endpoints.
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase

from catalog.api import reorder_services
from catalog.models import Service


class TestPublicServices(APITestCase):

    def setUp(self):
        Service.objects.create(name="Haircut", zone="hair", duration_minutes=60, sort_order=2)
        Service.objects.create(name="Wash", zone="hair", duration_minutes=30, sort_order=1)
        Service.objects.create(name="Gel nails", zone="nail", duration_minutes=45)
        Service.objects.create(name="Old perm", zone="hair", duration_minutes=90, active=False)

    def test_lists_only_active_in_order(self):
        resp = self.client.get("/api/public/services/", {"zone": "hair"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual([row["name"] for row in resp.data], ["Wash", "Haircut"])
        self.assertEqual(resp.data[0]["available_from"], "08:00")
        self.assertEqual(resp.data[0]["available_to"], "22:00")

    def test_lists_all_zones(self):
        resp = self.client.get("/api/public/services/")
        self.assertEqual(len(resp.data), 3)


class TestStaffServices(APITestCase):

    def setUp(self):
        self.admin = get_user_model().objects.create_user(username="owner", password="pw", is_staff=True)
        self.client.force_authenticate(self.admin)
        self.cut = Service.objects.create(name="Haircut", zone="hair", duration_minutes=60)
        self.wash = Service.objects.create(name="Wash", zone="hair", duration_minutes=30)
        self.color = Service.objects.create(name="Color", zone="hair", duration_minutes=90)

    def test_create_validates_window_and_duration(self):
        resp = self.client.post(
            "/api/staff/services/",
            {"name": "Spa", "zone": "nail", "duration_minutes": 0},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/staff/services/",
            {"name": "Spa", "zone": "nail", "duration_minutes": 60, "available_from": "18:00", "available_to": "10:00"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/staff/services/",
            {"name": "Spa", "zone": "nail", "duration_minutes": 60, "available_from": "10:00", "available_to": "18:00"},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["available_from"], "10:00")

    def test_patch_keeps_existing_window(self):
        resp = self.client.patch(f"/api/staff/services/{self.cut.id}/", {"available_to": "07:00"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_delete_deactivates(self):
        resp = self.client.delete(f"/api/staff/services/{self.cut.id}/")
        self.assertEqual(resp.status_code, 200)
        self.cut.refresh_from_db()
        self.assertFalse(self.cut.active)

    def test_toggle_active(self):
        resp = self.client.post(f"/api/staff/services/{self.wash.id}/toggle-active/")
        self.assertFalse(resp.data["active"])
        resp = self.client.post(f"/api/staff/services/{self.wash.id}/toggle-active/")
        self.assertTrue(resp.data["active"])

    def test_reorder(self):
        resp = self.client.post(
            "/api/staff/services/reorder/",
            {"zone": "hair", "ordered_ids": [self.color.id, self.cut.id, self.wash.id]},
            format="json",
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["changed"], 3)
        self.assertEqual([row["name"] for row in resp.data["services"]], ["Color", "Haircut", "Wash"])

    def test_reorder_leaves_unlisted_services(self):
        reorder_services("hair", [self.wash.id])
        self.cut.refresh_from_db()
        self.wash.refresh_from_db()
        self.assertEqual(self.wash.sort_order, 1)
        self.assertEqual(self.cut.sort_order, 0)

    def test_requires_login(self):
        self.client.force_authenticate(None)
        self.assertEqual(self.client.get("/api/staff/services/").status_code, 401)
