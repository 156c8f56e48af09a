"""Tests for the task host routes."""

from keepalive.api.errors import ERROR_HEADER

PREFIX = "/api/v1/hosts"


def _create(client, workload=None) -> str:
    body = {"workload": workload} if workload else None
    response = client.post(PREFIX, json=body)
    assert response.status_code == 201
    return response.json()["hostId"]


def test_create_and_list(client) -> None:
    response = client.post(PREFIX, json={"workload": "fibonacci"})
    assert response.status_code == 201
    data = response.json()
    assert data["workload"] == "fibonacci"

    listed = client.get(PREFIX).json()
    assert listed["hostIds"] == [data["hostId"]]


def test_create_without_body_uses_default_workload(client) -> None:
    response = client.post(PREFIX)
    assert response.status_code == 201
    assert response.json()["workload"] == "primes"


def test_create_unknown_workload(client) -> None:
    response = client.post(PREFIX, json={"workload": "collatz"})
    assert response.status_code == 400
    assert response.headers[ERROR_HEADER] == "1"
    data = response.json()
    assert data["code"] == "invalid_request"
    assert data["details"]["workload"] == "collatz"


def test_ping_idle_host(client) -> None:
    host_id = _create(client)
    response = client.get(f"{PREFIX}/{host_id}/ping")
    assert response.status_code == 200
    data = response.json()
    assert data["running"] is False
    assert data["state"] == "idle"
    assert data["stepCount"] == 0


def test_start_ping_stop(client) -> None:
    host_id = _create(client)

    started = client.post(f"{PREFIX}/{host_id}/start")
    assert started.status_code == 200
    assert started.json() == {"started": True, "runId": 1, "message": "Task started"}

    ping = client.get(f"{PREFIX}/{host_id}/ping").json()
    assert ping["running"] is True
    assert ping["state"] == "running"
    assert ping["counts"]["primes"] == ping["stepCount"]
    assert ping["memoryEstimateBytes"] > 0

    again = client.post(f"{PREFIX}/{host_id}/start").json()
    assert again["started"] is False
    assert again["runId"] == 1

    stopped = client.post(f"{PREFIX}/{host_id}/stop")
    assert stopped.status_code == 200
    assert stopped.json()["stopped"] is True

    assert client.get(f"{PREFIX}/{host_id}/ping").json()["running"] is False

    # stopping twice still answers 200
    second_stop = client.post(f"{PREFIX}/{host_id}/stop")
    assert second_stop.status_code == 200
    assert second_stop.json()["stopped"] is False


def test_unknown_host_returns_404(client) -> None:
    response = client.get(f"{PREFIX}/missing/ping")
    assert response.status_code == 404
    assert response.headers[ERROR_HEADER] == "1"
    assert response.json()["code"] == "not_found"


def test_invalid_operation_returns_400(client) -> None:
    host_id = _create(client)
    response = client.post(f"{PREFIX}/{host_id}/restart")
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "invalid_request"
    assert data["details"]["operation"] == "restart"

    # the host is untouched
    assert client.get(f"{PREFIX}/{host_id}/ping").json()["state"] == "idle"


def test_wrong_method_on_known_operation_returns_400(client) -> None:
    host_id = _create(client)
    response = client.get(f"{PREFIX}/{host_id}/start")
    assert response.status_code == 400


def test_delete_host(client) -> None:
    host_id = _create(client)
    client.post(f"{PREFIX}/{host_id}/start")

    response = client.delete(f"{PREFIX}/{host_id}")
    assert response.status_code == 204
    assert client.get(f"{PREFIX}/{host_id}/ping").status_code == 404
    assert client.delete(f"{PREFIX}/{host_id}").status_code == 404


def test_capacity_exhausted_returns_429(client, registry) -> None:
    for _ in range(registry.settings.max_hosts):
        host_id = _create(client)
        client.post(f"{PREFIX}/{host_id}/start")

    response = client.post(PREFIX)
    assert response.status_code == 429
    assert response.json()["code"] == "capacity"
