# tests/routes/test_swap_routes.py
"""
HTTP tests for the swap marketplace and negotiation endpoints.
"""

import pytest

from slotswap.models import SlotStatus


@pytest.fixture
def swap_pair(user_one, user_two, make_slot):
    return make_slot(user_one), make_slot(user_two)


def _propose(client, auth_headers, requester, my_slot, their_slot):
    return client.post(
        "/api/swap-request",
        json={"mySlotId": my_slot.id, "theirSlotId": their_slot.id},
        headers=auth_headers(requester),
    )


class TestSwappableSlots:
    def test_lists_other_users_swappable_slots_with_owner_name(
        self, client, user_one, user_two, make_slot, auth_headers
    ):
        make_slot(user_one)
        theirs = make_slot(user_two)
        make_slot(user_two, status=SlotStatus.BUSY)

        response = client.get("/api/swappable-slots", headers=auth_headers(user_one))

        assert response.status_code == 200
        body = response.json()
        assert [s["id"] for s in body] == [theirs.id]
        assert body[0]["ownerName"] == "Ben Two"
        assert body[0]["owner"] == user_two.id

    def test_requires_identity(self, client):
        assert client.get("/api/swappable-slots").status_code == 401


class TestSwapRequest:
    def test_scenario_a_propose_then_accept(
        self, client, swap_pair, user_one, user_two, auth_headers
    ):
        s1, s2 = swap_pair

        created = _propose(client, auth_headers, user_one, s1, s2)

        assert created.status_code == 201
        request_body = created.json()
        assert request_body["status"] == "PENDING"
        assert request_body["requesterId"] == user_one.id
        assert request_body["responderId"] == user_two.id
        assert request_body["mySlotId"] == s1.id
        assert request_body["theirSlotId"] == s2.id
        assert "createdAt" in request_body

        accepted = client.post(
            f"/api/swap-response/{request_body['id']}",
            json={"accept": True},
            headers=auth_headers(user_two),
        )

        assert accepted.status_code == 200
        body = accepted.json()
        assert body["status"] == "ACCEPTED"
        assert body["mySlot"]["owner"] == user_two.id
        assert body["theirSlot"]["owner"] == user_one.id
        assert body["mySlot"]["status"] == "BUSY"
        assert body["theirSlot"]["status"] == "BUSY"
        assert body["respondedAt"] is not None

    def test_scenario_b_reject(self, client, swap_pair, user_one, user_two, auth_headers):
        s1, s2 = swap_pair
        request_id = _propose(client, auth_headers, user_one, s1, s2).json()["id"]

        rejected = client.post(
            f"/api/swap-response/{request_id}",
            json={"accept": False},
            headers=auth_headers(user_two),
        )

        assert rejected.status_code == 200
        body = rejected.json()
        assert body["status"] == "REJECTED"
        assert body["mySlot"]["owner"] == user_one.id
        assert body["mySlot"]["status"] == "SWAPPABLE"
        assert body["theirSlot"]["status"] == "SWAPPABLE"

    def test_scenario_c_busy_target_is_400(
        self, client, user_one, user_two, make_slot, auth_headers
    ):
        s1 = make_slot(user_one)
        s2 = make_slot(user_two, status=SlotStatus.BUSY)

        response = _propose(client, auth_headers, user_one, s1, s2)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_STATE"
        assert body["detail"] == "Both slots must be swappable"
        assert client.get("/api/my-requests", headers=auth_headers(user_one)).json() == []

    def test_scenario_d_third_party_response_is_401(
        self, client, swap_pair, user_one, user_three, auth_headers
    ):
        s1, s2 = swap_pair
        request_id = _propose(client, auth_headers, user_one, s1, s2).json()["id"]

        response = client.post(
            f"/api/swap-response/{request_id}",
            json={"accept": True},
            headers=auth_headers(user_three),
        )

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHORIZED"
        listing = client.get("/api/my-requests", headers=auth_headers(user_one)).json()
        assert listing[0]["status"] == "PENDING"

    def test_offering_someone_elses_slot_is_401(
        self, client, swap_pair, user_three, auth_headers
    ):
        s1, s2 = swap_pair

        response = _propose(client, auth_headers, user_three, s1, s2)

        assert response.status_code == 401

    def test_unknown_slot_is_404(self, client, swap_pair, user_one, auth_headers):
        s1, _ = swap_pair

        response = client.post(
            "/api/swap-request",
            json={"mySlotId": s1.id, "theirSlotId": "01J0000000000000000MISSING"},
            headers=auth_headers(user_one),
        )

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "SLOT_NOT_FOUND"
        assert body["errors"] == {"slot_ids": ["01J0000000000000000MISSING"]}

    def test_missing_field_is_422(self, client, swap_pair, user_one, auth_headers):
        s1, _ = swap_pair

        response = client.post(
            "/api/swap-request", json={"mySlotId": s1.id}, headers=auth_headers(user_one)
        )

        assert response.status_code == 422


class TestSwapResponse:
    def test_second_response_is_400(self, client, swap_pair, user_one, user_two, auth_headers):
        s1, s2 = swap_pair
        request_id = _propose(client, auth_headers, user_one, s1, s2).json()["id"]
        first = client.post(
            f"/api/swap-response/{request_id}",
            json={"accept": True},
            headers=auth_headers(user_two),
        )
        assert first.status_code == 200

        second = client.post(
            f"/api/swap-response/{request_id}",
            json={"accept": False},
            headers=auth_headers(user_two),
        )

        assert second.status_code == 400
        assert second.json()["detail"] == "Request already responded to"

    def test_unknown_request_is_404(self, client, user_two, auth_headers):
        response = client.post(
            "/api/swap-response/01J0000000000000000000NONE",
            json={"accept": True},
            headers=auth_headers(user_two),
        )

        assert response.status_code == 404
        assert response.json()["code"] == "REQUEST_NOT_FOUND"

    def test_accept_must_be_a_boolean(self, client, swap_pair, user_one, user_two, auth_headers):
        s1, s2 = swap_pair
        request_id = _propose(client, auth_headers, user_one, s1, s2).json()["id"]

        response = client.post(
            f"/api/swap-response/{request_id}",
            json={"accept": "yes"},
            headers=auth_headers(user_two),
        )

        assert response.status_code == 422


class TestMyRequests:
    def test_lists_sent_and_received_with_names(
        self, client, swap_pair, user_one, user_two, auth_headers
    ):
        s1, s2 = swap_pair
        _propose(client, auth_headers, user_one, s1, s2)

        for user in (user_one, user_two):
            response = client.get("/api/my-requests", headers=auth_headers(user))
            assert response.status_code == 200
            (item,) = response.json()
            assert item["requesterName"] == "Ada One"
            assert item["responderName"] == "Ben Two"
            assert item["mySlot"]["id"] == s1.id
            assert item["theirSlot"]["id"] == s2.id

    def test_created_at_is_the_same_instant_in_every_payload(
        self, client, swap_pair, user_one, user_two, auth_headers
    ):
        s1, s2 = swap_pair
        created = _propose(client, auth_headers, user_one, s1, s2).json()

        listed = client.get("/api/my-requests", headers=auth_headers(user_one)).json()
        answered = client.post(
            f"/api/swap-response/{created['id']}",
            json={"accept": False},
            headers=auth_headers(user_two),
        ).json()

        assert created["createdAt"].endswith("Z")
        assert listed[0]["createdAt"] == created["createdAt"]
        assert answered["createdAt"] == created["createdAt"]
        assert answered["respondedAt"].endswith("Z")
        assert answered["mySlot"]["startTime"].endswith("Z")


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"] == {"database": True}
