"""Tests for the job JSON endpoints."""

import json
from decimal import Decimal

import pytest

from customers.models import Customer
from jobs.models import Job, JobStage


def post_json(client, url, payload, method="post"):
    return getattr(client, method)(url, json.dumps(payload), content_type="application/json")


@pytest.mark.django_db
class TestAccess:
    def test_login_required(self, client):
        resp = client.get("/api/jobs/")
        assert resp.status_code == 401
        assert resp.json()["message"] == "Authentication required"

    def test_method_not_allowed(self, api_client, job):
        assert api_client.delete(f"/api/jobs/{job.pk}/").status_code == 405

    def test_bad_json(self, api_client):
        resp = api_client.post("/api/jobs/", "{not json", content_type="application/json")
        assert resp.status_code == 400

    def test_missing_job_is_json_404(self, api_client):
        resp = api_client.get("/api/jobs/999/")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Job 999 not found"


@pytest.mark.django_db
class TestJobEndpoints:
    def test_create_job(self, api_client, customer):
        resp = post_json(api_client, "/api/jobs/", {
            "customer": customer.pk,
            "vehicle_index": 0,
            "service_cost": 1000,
            "labor_cost": 200,
            "service_items": [{"description": "Wiper blade", "cost": 300, "type": "part"}],
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["stage"] == JobStage.NEW_LEAD
        assert Decimal(data["total_amount"]) == Decimal("1500")
        assert data["service_items"][0]["description"] == "Wiper blade"

    def test_create_job_unknown_vehicle(self, api_client, customer):
        resp = post_json(api_client, "/api/jobs/", {"customer": customer.pk, "vehicle_index": 3})
        assert resp.status_code == 400

    def test_invalid_form_lists_field_errors(self, api_client, customer):
        resp = post_json(api_client, "/api/jobs/", {"customer": customer.pk, "vehicle_index": -1})
        assert resp.status_code == 400
        assert "vehicle_index" in resp.json()["errors"]

    def test_list_filters_by_stage(self, api_client, job, customer):
        from jobs.services import create_job, update_job_stage

        other = create_job(customer, 0, service_cost=100)
        update_job_stage(other.pk, JobStage.INSPECTION_DONE)

        resp = api_client.get("/api/jobs/", {"stage": JobStage.INSPECTION_DONE})
        assert [row["id"] for row in resp.json()] == [other.pk]

    def test_search_by_plate(self, api_client, job):
        resp = api_client.get("/api/jobs/", {"search": "mh12"})
        assert [row["id"] for row in resp.json()] == [job.pk]

    def test_patch_notes_only(self, api_client, job):
        resp = post_json(api_client, f"/api/jobs/{job.pk}/", {"notes": "Customer waiting"}, method="patch")
        assert resp.status_code == 200
        job.refresh_from_db()
        assert job.notes == "Customer waiting"
        assert job.stage == JobStage.NEW_LEAD

    def test_stage_is_frozen_after_completion(self, api_client, job):
        url = f"/api/jobs/{job.pk}/stage/"
        assert post_json(api_client, url, {"stage": JobStage.COMPLETED}).status_code == 200
        resp = post_json(api_client, url, {"stage": JobStage.WORK_IN_PROGRESS})
        assert resp.status_code == 409
        assert api_client.get(f"/api/jobs/{job.pk}/").json()["invoice_id"] is not None

    def test_unknown_stage(self, api_client, job):
        resp = post_json(api_client, f"/api/jobs/{job.pk}/stage/", {"stage": "Teleported"})
        assert resp.status_code == 400

    def test_payment(self, api_client, job):
        resp = post_json(api_client, f"/api/jobs/{job.pk}/payments/", {"amount": 600, "mode": "UPI"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["paid_amount"]) == Decimal("600")
        assert resp.json()["payment_status"] == "Partially Paid"

        payments = api_client.get(f"/api/jobs/{job.pk}/payments/").json()
        assert [p["mode"] for p in payments] == ["UPI"]

    def test_payment_rejects_unknown_mode(self, api_client, job):
        resp = post_json(api_client, f"/api/jobs/{job.pk}/payments/", {"amount": 100, "mode": "Barter"})
        assert resp.status_code == 400

    def test_materials_short_stock(self, api_client, job, ppf_roll):
        resp = post_json(api_client, f"/api/jobs/{job.pk}/materials/", {
            "materials": [{"inventory_id": ppf_roll.pk, "quantity": 50}],
        })
        assert resp.status_code == 400
        ppf_roll.refresh_from_db()
        assert ppf_roll.quantity == Decimal("10")


@pytest.mark.django_db
class TestIntakeEndpoints:
    PPF = {
        "ppf_category": "Elite",
        "ppf_vehicle_type": "Small Cars",
        "ppf_warranty": "TPU 5 Years Gloss",
    }

    def test_quote_creates_nothing(self, api_client):
        resp = post_json(api_client, "/api/jobs/quote/", {**self.PPF, "discount_pct": 10})
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["discounted_service_cost"]) == Decimal("49500")
        assert Decimal(data["total_amount"]) == Decimal("58410")
        assert not Job.objects.exists()

    def test_intake_registers_new_customer(self, api_client):
        resp = post_json(api_client, "/api/jobs/intake/", {
            **self.PPF,
            "name": "Meera Shah",
            "phone": "9123456789",
            "vehicle": {"make": "Maruti", "model": "Alto", "plate_number": "GJ01XY9999"},
        })
        assert resp.status_code == 201
        customer = Customer.objects.get(phone="9123456789")
        assert customer.service == "Elite - TPU 5 Years Gloss"
        assert Decimal(resp.json()["total_amount"]) == Decimal("64900")
        assert resp.json()["plate_number"] == "GJ01XY9999"

    def test_intake_new_customer_without_vehicle(self, api_client):
        resp = post_json(api_client, "/api/jobs/intake/", {**self.PPF, "name": "Meera", "phone": "9123456789"})
        assert resp.status_code == 400
        assert not Customer.objects.exists()

    def test_intake_with_nothing_billable(self, api_client, customer):
        resp = post_json(api_client, "/api/jobs/intake/", {"customer": customer.pk})
        assert resp.status_code == 400
        assert not Job.objects.exists()
