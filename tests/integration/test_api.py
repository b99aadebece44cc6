"""Integration tests for API endpoints"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sprint_pricing.infrastructure.database.models import SprintDraft


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "sprint_pricing_recalculations_total" in response.text


def test_request_id_header(client: TestClient):
    """Caller-supplied request IDs are echoed back"""
    assert client.get("/health").headers["X-Request-ID"]
    assert client.get("/health", headers={"X-Request-ID": "abc-123"}).headers["X-Request-ID"] == "abc-123"


def test_calculate_pricing_endpoint(client: TestClient):
    """Test POST /v1/pricing/calculate with aliased fields"""
    response = client.post(
        "/v1/pricing/calculate",
        json={
            "items": [
                {"points": 2, "quantity": 3, "complexityScore": 1.5},
                {"defaultEstimatePoints": 4},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {"price": 37500.0, "hours": 195.0, "points": 13.0}


def test_calculate_pricing_empty(client: TestClient):
    response = client.post("/v1/pricing/calculate", json={"items": []})

    assert response.status_code == 200
    assert response.json() == {"price": 5000.0, "hours": 0.0, "points": 0.0}


def test_calculate_pricing_invalid_body(client: TestClient):
    response = client.post("/v1/pricing/calculate", json={"items": [{"points": "many"}]})

    assert response.status_code == 422


def test_calculate_pricing_overflow(client: TestClient):
    """A price that overflows to infinity is rejected rather than serialized as null"""
    response = client.post("/v1/pricing/calculate", json={"items": [{"points": 1e305, "quantity": 10}]})

    assert response.status_code == 422


def test_formula_endpoint(client: TestClient):
    response = client.get("/v1/pricing/formula", params={"prefix": "Pricing:"})

    assert response.status_code == 200
    data = response.json()
    assert data["formula"] == "Pricing: $5,000 base + (complexity × $2,500)"
    assert data["hours_per_point"] == 15


def test_list_deliverables(client: TestClient, catalog):
    response = client.get("/v1/deliverables")

    assert response.status_code == 200
    by_id = {d["id"]: d for d in response.json()["deliverables"]}
    assert set(by_id) == {"del-logo", "del-guide", "del-workshop"}
    assert by_id["del-guide"]["points"] == 4
    assert by_id["del-guide"]["hours"] == 60
    assert by_id["del-workshop"]["hours"] == 22.5


def test_get_sprint(client: TestClient, sprint_draft: SprintDraft):
    response = client.get(f"/v1/sprint-drafts/{sprint_draft.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "draft"
    assert len(data["deliverables"]) == 2
    guide = next(d for d in data["deliverables"] if d["deliverable_id"] == "del-guide")
    assert guide["name"] == "Brand Guide"
    assert guide["base_points"] == 4
    assert guide["complexity_score"] == 1.5


def test_get_sprint_not_found(client: TestClient):
    response = client.get("/v1/sprint-drafts/missing")
    assert response.status_code == 404


def test_update_complexity(client: TestClient, sprint_draft: SprintDraft):
    """Logo to 2.0: 4 + 12 = 16 points"""
    response = client.patch(
        f"/v1/sprint-drafts/{sprint_draft.id}/deliverables/complexity",
        json={"deliverableId": "del-logo", "complexityScore": 2},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["updated_totals"] == {"total_points": 16.0, "total_hours": 240.0, "total_price": 45000.0}
    assert data["deliverable"] == {
        "id": "del-logo",
        "name": "Logo",
        "complexity_score": 2.0,
        "adjusted_points": 4.0,
        "adjusted_hours": 60.0,
    }


def test_update_complexity_clamps_and_parses(client: TestClient, sprint_draft: SprintDraft):
    url = f"/v1/sprint-drafts/{sprint_draft.id}/deliverables/complexity"

    clamped = client.patch(url, json={"deliverable_id": "del-logo", "complexity_score": 9})
    from_string = client.patch(url, json={"deliverable_id": "del-logo", "complexity_score": "0.75"})
    unparsable = client.patch(url, json={"deliverable_id": "del-logo", "complexity_score": "lots"})

    assert clamped.json()["deliverable"]["complexity_score"] == 2.0
    assert from_string.json()["deliverable"]["complexity_score"] == 0.75
    assert unparsable.json()["deliverable"]["complexity_score"] == 1.0
    assert unparsable.json()["updated_totals"]["total_points"] == 14.0


def test_update_complexity_huge_integer(client: TestClient, sprint_draft: SprintDraft):
    """Integers too large for a float clamp to the maximum instead of failing"""
    response = client.patch(
        f"/v1/sprint-drafts/{sprint_draft.id}/deliverables/complexity",
        json={"deliverableId": "del-logo", "complexityScore": 10**400},
    )

    assert response.status_code == 200
    assert response.json()["deliverable"]["complexity_score"] == 2.0


def test_update_complexity_errors(client: TestClient, db: Session, sprint_draft: SprintDraft):
    url = f"/v1/sprint-drafts/{sprint_draft.id}/deliverables/complexity"

    missing_field = client.patch(url, json={"complexityScore": 1.5})
    not_in_sprint = client.patch(url, json={"deliverableId": "del-workshop", "complexityScore": 1.5})
    missing_sprint = client.patch(
        "/v1/sprint-drafts/missing/deliverables/complexity",
        json={"deliverableId": "del-logo", "complexityScore": 1.5},
    )

    assert missing_field.status_code == 422
    assert not_in_sprint.status_code == 404
    assert missing_sprint.status_code == 404

    sprint_draft.status = "approved"
    db.commit()
    locked = client.patch(url, json={"deliverableId": "del-logo", "complexityScore": 1.5})
    assert locked.status_code == 400
    assert locked.json()["detail"] == "Can only edit drafts"


def test_sync_deliverables(client: TestClient, db: Session, sprint_draft: SprintDraft, catalog):
    catalog["logo"].points = 3
    db.commit()

    response = client.post(f"/v1/sprint-drafts/{sprint_draft.id}/sync-deliverables")

    assert response.status_code == 200
    data = response.json()
    assert data["updated_count"] == 2
    assert data["totals"] == {"total_points": 15.0, "total_hours": 225.0, "total_price": 42500.0}


def test_sync_deliverables_not_found(client: TestClient):
    response = client.post("/v1/sprint-drafts/missing/sync-deliverables")
    assert response.status_code == 404


def test_admin_recalculate(client: TestClient, sprint_draft: SprintDraft):
    response = client.post("/v1/admin/sprint-drafts/recalculate")

    assert response.status_code == 200
    assert response.json() == {"success": True, "recalculated": 2, "sprints": 1}

    sprint = client.get(f"/v1/sprint-drafts/{sprint_draft.id}").json()
    assert sprint["deliverable_count"] == 2
    assert sprint["totals"]["total_price"] == 40000


def test_admin_package_calculations(client: TestClient, packages):
    response = client.get("/v1/admin/sprint-packages/calculate")

    assert response.status_code == 200
    calculations = response.json()["calculations"]
    assert [c["slug"] for c in calculations] == ["starter", "fixed"]

    starter, fixed = calculations
    assert starter["calculated_points"] == 5
    assert starter["final_price"] == 17500
    assert starter["stored_flat_fee"] is None
    assert fixed["price_match"] is True
    assert fixed["hours_match"] is False
    assert fixed["final_hours"] == 80
