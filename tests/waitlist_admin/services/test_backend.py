from __future__ import annotations

import json

import pytest
import requests

from waitlist_admin.core.exceptions import BackendError
from waitlist_admin.services.backend import HttpWaitlistBackend, InMemoryWaitlistBackend, MutationResult

RECORDS = [
    {"_id": "1", "fullName": "Abel", "stage": "registered", "batch": "B1"},
    {"_id": "2", "fullName": "Sara", "stage": "2", "batch": "B1"},
    {"id": "3", "fullName": "Hanna", "stage": "approved", "batch": "B2"},
]


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

def test_memory_lists_records_with_limit():
    backend = InMemoryWaitlistBackend(RECORDS)
    assert [a.id for a in backend.list_applicants()] == ["1", "2", "3"]
    assert [a.id for a in backend.list_applicants(limit=2)] == ["1", "2"]


def test_memory_does_not_mutate_caller_records():
    records = [dict(r) for r in RECORDS]
    backend = InMemoryWaitlistBackend(records)
    backend.update_stage(["1"], "Approved")
    assert records[0]["stage"] == "registered"


def test_memory_update_stage_writes_canonical_token():
    backend = InMemoryWaitlistBackend(RECORDS)
    result = backend.update_stage(["1", "3", "ghost"], "Unable to reach")

    assert result == MutationResult(True, "Updated 2 applicants")
    stages = {a.id: a.stage for a in backend.list_applicants()}
    assert stages == {"1": "unable_to_reach", "2": "2", "3": "unable_to_reach"}


def test_memory_delete_and_register():
    backend = InMemoryWaitlistBackend(RECORDS)

    assert backend.delete_applicant("2").success
    assert [a.id for a in backend.list_applicants()] == ["1", "3"]
    assert backend.delete_applicant("2").success is False

    assert backend.register_trainee("1").success
    assert backend.registered_ids == ["1"]
    assert backend.register_trainee("ghost").success is False


def test_memory_from_json_file_accepts_list_or_data_envelope(tmp_path):
    as_list = tmp_path / "list.json"
    as_list.write_text(json.dumps(RECORDS), encoding="utf-8")
    envelope = tmp_path / "envelope.json"
    envelope.write_text(json.dumps({"data": RECORDS}), encoding="utf-8")

    assert len(InMemoryWaitlistBackend.from_json_file(as_list).list_applicants()) == 3
    assert len(InMemoryWaitlistBackend.from_json_file(envelope).list_applicants()) == 3


@pytest.mark.parametrize("content", ["{not json", '"just a string"'])
def test_memory_from_json_file_rejects_bad_content(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(BackendError):
        InMemoryWaitlistBackend.from_json_file(path)


def test_memory_from_json_file_missing_file(tmp_path):
    with pytest.raises(BackendError):
        InMemoryWaitlistBackend.from_json_file(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# HTTP backend (fake session, no network)
# ---------------------------------------------------------------------------

class _FakeResponse:
    def __init__(self, status_code: int = 200, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)


class _FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self):
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self._next()

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self._next()


def test_http_list_applicants_reads_data_envelope():
    session = _FakeSession(_FakeResponse(body={"data": RECORDS, "total": 3}))
    backend = HttpWaitlistBackend("http://api.test/", timeout=5, session=session)

    applicants = backend.list_applicants(limit=50)

    assert [a.id for a in applicants] == ["1", "2", "3"]
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://api.test/api/applicant")
    assert kwargs["params"] == {"limit": 50, "page": 1}
    assert kwargs["timeout"] == 5


@pytest.mark.parametrize(
    "response",
    [
        requests.exceptions.ConnectionError("down"),
        _FakeResponse(status_code=500, body={"message": "boom"}),
        _FakeResponse(body=None),
        _FakeResponse(body={"data": "nope"}),
    ],
)
def test_http_list_applicants_raises_backend_error(response):
    backend = HttpWaitlistBackend("http://api.test", session=_FakeSession(response))
    with pytest.raises(BackendError):
        backend.list_applicants()


def test_http_update_stage_sends_ids_and_stage():
    session = _FakeSession(_FakeResponse(body={"message": "Stage updated"}))
    backend = HttpWaitlistBackend("http://api.test", session=session)

    result = backend.update_stage(["1", "2"], "approved")

    assert result == MutationResult(True, "Stage updated")
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("PUT", "http://api.test/api/applicant/stage")
    assert kwargs["json"] == {"ids": ["1", "2"], "stage": "approved"}


def test_http_delete_failure_surfaces_server_message():
    session = _FakeSession(_FakeResponse(status_code=404, body={"message": "Applicant not found"}))
    backend = HttpWaitlistBackend("http://api.test", session=session)

    result = backend.delete_applicant("42")

    assert result == MutationResult(False, "Applicant not found")
    assert session.calls[0][:2] == ("DELETE", "http://api.test/api/applicant/42")


def test_http_register_transport_error_is_a_failed_result():
    session = _FakeSession(requests.exceptions.Timeout("slow"))
    backend = HttpWaitlistBackend("http://api.test", session=session)

    result = backend.register_trainee("7")

    assert result.success is False
    assert result.message == "Something went wrong"
    assert session.calls[0][:2] == ("POST", "http://api.test/api/applicant/applicants/7/register")


def test_http_success_without_body_uses_default_message():
    backend = HttpWaitlistBackend("http://api.test", session=_FakeSession(_FakeResponse(body=None)))
    assert backend.register_trainee("7") == MutationResult(True, "Created successfully")
