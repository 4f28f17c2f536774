"""Borrowing API tests."""

import pytest

from toolshare.models.borrowing import Borrowing
from toolshare.models.user import User
from toolshare.services.borrowings import BorrowingService
from toolshare.services.errors import ConflictError


def create_tool(client, headers, name="Hammer"):
    response = client.post("/api/v1/tools", headers=headers, json={"name": name})
    assert response.status_code == 201
    return response.json()


def borrow(client, headers, tool_id, **extra):
    return client.post("/api/v1/borrowings", headers=headers, json={"tool_id": tool_id, **extra})


def test_borrow_tool(client, auth_headers, other_headers):
    """Test borrowing someone else's tool."""
    tool = create_tool(client, auth_headers)

    response = borrow(client, other_headers, tool["id"], due_date="2030-01-15T12:00:00Z")
    assert response.status_code == 201
    data = response.json()
    assert data["tool_id"] == tool["id"]
    assert data["borrower_id"] == other_headers.user_id
    assert data["status"] == "active"
    assert data["due_date"].startswith("2030-01-15")
    assert data["returned_at"] is None

    tool_response = client.get(f"/api/v1/tools/{tool['id']}", headers=auth_headers)
    assert tool_response.json()["available"] is False


def test_borrow_own_tool(client, auth_headers):
    tool = create_tool(client, auth_headers)

    response = borrow(client, auth_headers, tool["id"])
    assert response.status_code == 409
    assert response.json()["detail"] == "You cannot borrow your own tool"


def test_borrow_unavailable_tool(client, auth_headers, other_headers, make_user):
    """Test a lent tool cannot be borrowed again."""
    third_headers = make_user("third@example.com", name="Third")
    tool = create_tool(client, auth_headers)
    borrow(client, other_headers, tool["id"])

    response = borrow(client, third_headers, tool["id"])
    assert response.status_code == 409
    assert response.json()["detail"] == "Tool is not available"


def test_borrow_missing_tool(client, auth_headers):
    response = borrow(client, auth_headers, 99999)
    assert response.status_code == 404


def test_return_tool(client, auth_headers, other_headers):
    """Test returning frees the tool."""
    tool = create_tool(client, auth_headers)
    borrowing = borrow(client, other_headers, tool["id"]).json()

    response = client.post(f"/api/v1/borrowings/{borrowing['id']}/return", headers=other_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "returned"
    assert response.json()["returned_at"] is not None

    tool_response = client.get(f"/api/v1/tools/{tool['id']}", headers=auth_headers)
    assert tool_response.json()["available"] is True


def test_owner_can_mark_returned(client, auth_headers, other_headers):
    tool = create_tool(client, auth_headers)
    borrowing = borrow(client, other_headers, tool["id"]).json()

    response = client.post(f"/api/v1/borrowings/{borrowing['id']}/return", headers=auth_headers)
    assert response.status_code == 200


def test_stranger_cannot_return(client, auth_headers, other_headers, make_user):
    third_headers = make_user("third@example.com", name="Third")
    tool = create_tool(client, auth_headers)
    borrowing = borrow(client, other_headers, tool["id"]).json()

    response = client.post(f"/api/v1/borrowings/{borrowing['id']}/return", headers=third_headers)
    assert response.status_code == 403


def test_return_twice(client, auth_headers, other_headers):
    tool = create_tool(client, auth_headers)
    borrowing = borrow(client, other_headers, tool["id"]).json()
    client.post(f"/api/v1/borrowings/{borrowing['id']}/return", headers=other_headers)

    response = client.post(f"/api/v1/borrowings/{borrowing['id']}/return", headers=other_headers)
    assert response.status_code == 409


def test_list_borrowings(client, auth_headers, other_headers):
    """Test listing and filtering borrowings."""
    drill = create_tool(client, auth_headers, name="Drill")
    saw = create_tool(client, other_headers, name="Saw")
    first = borrow(client, other_headers, drill["id"]).json()
    borrow(client, auth_headers, saw["id"])
    client.post(f"/api/v1/borrowings/{first['id']}/return", headers=other_headers)

    everything = client.get("/api/v1/borrowings", headers=auth_headers).json()
    assert len(everything) == 2

    active = client.get(
        "/api/v1/borrowings", headers=auth_headers, params={"active_only": True}
    ).json()
    assert [b["tool_id"] for b in active] == [saw["id"]]

    mine = client.get("/api/v1/borrowings", headers=other_headers, params={"mine": True}).json()
    assert [b["tool_id"] for b in mine] == [drill["id"]]


def test_get_borrowing(client, auth_headers, other_headers):
    tool = create_tool(client, auth_headers)
    borrowing = borrow(client, other_headers, tool["id"]).json()

    response = client.get(f"/api/v1/borrowings/{borrowing['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == borrowing["id"]

    assert client.get("/api/v1/borrowings/99999", headers=auth_headers).status_code == 404


def test_deleting_borrower_frees_tool(client, auth_headers, other_headers):
    """Test a deleted borrower's tools come back and their borrowings go."""
    tool = create_tool(client, auth_headers)
    borrow(client, other_headers, tool["id"])

    client.delete(f"/api/v1/users/{other_headers.user_id}", headers=auth_headers)

    tool_response = client.get(f"/api/v1/tools/{tool['id']}", headers=auth_headers)
    assert tool_response.json()["available"] is True
    assert client.get("/api/v1/borrowings", headers=auth_headers).json() == []


def test_second_claim_on_same_tool_loses(client, db, auth_headers, other_headers, make_user):
    """Only one borrowing can claim a tool."""
    third_headers = make_user("third@example.com", name="Third")
    tool = create_tool(client, auth_headers)
    service = BorrowingService(db)
    other = db.query(User).filter(User.id == other_headers.user_id).one()
    third = db.query(User).filter(User.id == third_headers.user_id).one()

    service.borrow_tool(tool["id"], other)
    with pytest.raises(ConflictError):
        service.borrow_tool(tool["id"], third)

    assert db.query(Borrowing).filter(Borrowing.tool_id == tool["id"]).count() == 1
