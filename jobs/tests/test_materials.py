"""Tests for material consumption against inventory."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from core.exceptions import GarageError, NotFound, ValidationFailed
from inventory.models import InventoryItem
from jobs.models import JobStage
from jobs.services import add_materials_to_job, add_payment_to_job, update_job_stage
from payments.models import PaymentMode


@pytest.fixture
def coating(db):
    return InventoryItem.objects.create(
        name="Ceramic bottle", category="Ceramic", quantity=Decimal("1"), unit="bottle", price=Decimal("2000")
    )


@pytest.mark.django_db
class TestAddMaterials:
    def test_consumes_stock_and_recomputes_total(self, job, ppf_roll):
        job = add_materials_to_job(job.pk, [{"inventory_id": ppf_roll.pk, "quantity": 2}])

        ppf_roll.refresh_from_db()
        assert ppf_roll.quantity == Decimal("8")
        usage = job.materials.get()
        assert usage.name == "PPF Roll"
        assert usage.cost == Decimal("1000")
        # materials + service items + service cost; labor is not re-added
        assert job.total_amount == Decimal("2000")

    def test_insufficient_line_rejects_whole_batch(self, job, ppf_roll, coating):
        with pytest.raises(ValidationFailed, match="Insufficient stock for Ceramic bottle"):
            add_materials_to_job(
                job.pk,
                [
                    {"inventory_id": ppf_roll.pk, "quantity": 2},
                    {"inventory_id": coating.pk, "quantity": 5},
                ],
            )
        ppf_roll.refresh_from_db()
        coating.refresh_from_db()
        job.refresh_from_db()
        assert ppf_roll.quantity == Decimal("10")
        assert coating.quantity == Decimal("1")
        assert job.materials.count() == 0
        assert job.total_amount == Decimal("1500")

    def test_repeated_item_lines_are_checked_together(self, job, coating):
        with pytest.raises(ValidationFailed):
            add_materials_to_job(
                job.pk,
                [{"inventory_id": coating.pk, "quantity": 1}, {"inventory_id": coating.pk, "quantity": 1}],
            )

    def test_missing_item(self, job):
        with pytest.raises(NotFound):
            add_materials_to_job(job.pk, [{"inventory_id": 999, "quantity": 1}])

    def test_terminal_job_is_refused(self, job, ppf_roll):
        update_job_stage(job.pk, JobStage.CANCELLED)
        with pytest.raises(ValidationFailed):
            add_materials_to_job(job.pk, [{"inventory_id": ppf_roll.pk, "quantity": 1}])

    def test_total_cannot_drop_below_paid(self, job, ppf_roll):
        add_payment_to_job(job.pk, Decimal("1500"), PaymentMode.CASH)
        with pytest.raises(ValidationFailed, match="below the amount already paid"):
            add_materials_to_job(job.pk, [{"inventory_id": ppf_roll.pk, "quantity": "0.5"}])
        ppf_roll.refresh_from_db()
        assert ppf_roll.quantity == Decimal("10")

    def test_failed_decrement_records_nothing(self, job, ppf_roll):
        with patch("inventory.services.adjust_inventory", side_effect=DatabaseError("disk full")):
            with pytest.raises(GarageError, match="no materials were recorded") as excinfo:
                add_materials_to_job(job.pk, [{"inventory_id": ppf_roll.pk, "quantity": 1}])
        assert excinfo.value.status_code == 500
        ppf_roll.refresh_from_db()
        job.refresh_from_db()
        assert ppf_roll.quantity == Decimal("10")
        assert job.materials.count() == 0
        assert job.total_amount == Decimal("1500")

    def test_repeated_item_lines_keep_one_row_each(self, job, ppf_roll):
        job = add_materials_to_job(
            job.pk,
            [{"inventory_id": ppf_roll.pk, "quantity": 1}, {"inventory_id": ppf_roll.pk, "quantity": 2}],
        )
        ppf_roll.refresh_from_db()
        assert ppf_roll.quantity == Decimal("7")
        assert list(job.materials.order_by("id").values_list("quantity", flat=True)) == [Decimal("1"), Decimal("2")]
        assert job.total_amount == Decimal("2500")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_is_rejected(self, job, ppf_roll, quantity):
        with pytest.raises(ValidationFailed):
            add_materials_to_job(job.pk, [{"inventory_id": ppf_roll.pk, "quantity": quantity}])
