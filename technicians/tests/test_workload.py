import pytest

from jobs.models import JobStage
from jobs.services import create_job, update_job_stage
from technicians.models import Technician, technician_workload


@pytest.mark.django_db
class TestTechnicianWorkload:
    def test_counts_only_open_jobs(self, customer, technician):
        Technician.objects.create(name="Arjun", specialty="Detailing")
        for _ in range(3):
            create_job(customer, 0, service_cost=100, technician=technician)
        done = create_job(customer, 0, service_cost=100, technician=technician)
        update_job_stage(done.pk, JobStage.CANCELLED)

        counts = {row["technician"].name: row["job_count"] for row in technician_workload()}
        assert counts == {"Arjun": 0, "Suresh": 3}
        assert technician.open_job_count == 3
