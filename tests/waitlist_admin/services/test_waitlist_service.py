from __future__ import annotations

from waitlist_admin.services.backend import InMemoryWaitlistBackend, MutationResult
from waitlist_admin.services.waitlist_service import WaitlistService


class _CountingBackend(InMemoryWaitlistBackend):
    def __init__(self, records):
        super().__init__(records)
        self.list_calls = 0

    def list_applicants(self, limit=6000):
        self.list_calls += 1
        return super().list_applicants(limit)


def _service():
    backend = _CountingBackend(
        [
            {"_id": "1", "fullName": "Abel", "stage": "registered"},
            {"_id": "2", "fullName": "Sara", "stage": "registered"},
        ]
    )
    return WaitlistService(backend, fetch_limit=100), backend


def test_snapshot_is_fetched_once():
    service, backend = _service()
    service.get_applicants()
    service.get_applicants()
    assert service.get_applicant("2").full_name == "Sara"
    assert backend.list_calls == 1


def test_successful_mutation_invalidates_snapshot():
    service, backend = _service()
    service.get_applicants()
    version = service.version

    result = service.update_stage(["1"], "approved")

    assert result.success
    assert service.version == version + 1
    assert service.get_applicant("1").stage == "approved"
    assert backend.list_calls == 2


def test_failed_mutation_keeps_snapshot(caplog):
    service, backend = _service()
    service.get_applicants()
    version = service.version

    result = service.delete_applicant("ghost")

    assert result == MutationResult(False, "Applicant ghost not found")
    assert service.version == version
    service.get_applicants()
    assert backend.list_calls == 1
    assert "failed" in caplog.text


def test_delete_and_register_pass_through():
    service, backend = _service()
    assert service.register_trainee("1").success
    assert backend.registered_ids == ["1"]

    assert service.delete_applicant("1").success
    assert [a.id for a in service.get_applicants()] == ["2"]
    assert service.get_applicant(None) is None
    assert service.get_applicant("1") is None
