# =============================================================================
# tests/test_api_leads.py - Lead, Subscriber and Health Endpoint Tests
# =============================================================================
# Tests for contact leads, the public contact form, newsletter subscribers,
# health/banner endpoints and the JSON 404 for unknown routes.
#
# Run with: pytest tests/test_api_leads.py -v
# =============================================================================

from uuid import uuid4


def _contact(**overrides):
    payload = {
        "fullName": "Jane Doe",
        "email": "Jane@Example.com",
        "mobileNumber": "555-012-3456",
        "city": "Austin",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# /api/contact
# =============================================================================

class TestContacts:
    """Admin-style contact lead CRUD."""

    def test_create_normalizes(self, inline_client):
        response = inline_client.post("/api/contact", json=_contact())

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "jane@example.com"
        assert body["mobileNumber"] == "5550123456"
        assert body["submittedAt"]

    def test_missing_fields(self, inline_client):
        response = inline_client.post("/api/contact", json={"fullName": "Jane"})

        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["email", "mobile_number", "city"]

    def test_duplicate_email_any_case(self, inline_client):
        inline_client.post("/api/contact", json=_contact())

        response = inline_client.post("/api/contact", json=_contact(email="JANE@example.COM"))

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_EMAIL"

    def test_list_and_delete(self, inline_client):
        first = inline_client.post("/api/contact", json=_contact(email="a@example.com")).json()
        second = inline_client.post("/api/contact", json=_contact(email="b@example.com")).json()

        listed = inline_client.get("/api/contact").json()
        assert [c["id"] for c in listed] == [second["id"], first["id"]]

        response = inline_client.delete(f"/api/contact/{first['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Contact deleted successfully"}
        assert [c["id"] for c in inline_client.get("/api/contact").json()] == [second["id"]]

    def test_delete_unknown(self, inline_client):
        response = inline_client.delete(f"/api/contact/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Contact not found"

    def test_email_reusable_after_delete(self, inline_client):
        created = inline_client.post("/api/contact", json=_contact()).json()
        inline_client.delete(f"/api/contact/{created['id']}")

        response = inline_client.post("/api/contact", json=_contact())

        assert response.status_code == 201


# =============================================================================
# /api/contact-form
# =============================================================================

class TestContactForm:
    """Public landing-page form."""

    def test_submit(self, inline_client, store, sample_contact_form):
        response = inline_client.post("/api/contact-form", json=sample_contact_form)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Jane Doe"
        assert body["data"]["email"] == "jane@example.com"
        assert body["data"]["submittedAt"]

        stored = inline_client.get("/api/contact").json()
        assert stored[0]["mobileNumber"] == "5550123456"
        assert store.count("contacts") == 1

    def test_blank_field(self, inline_client, sample_contact_form):
        sample_contact_form["city"] = "   "

        response = inline_client.post("/api/contact-form", json=sample_contact_form)

        assert response.status_code == 400
        assert response.json()["detail"] == "All fields are required"

    def test_invalid_email(self, inline_client, sample_contact_form):
        sample_contact_form["email"] = "not-an-email"

        response = inline_client.post("/api/contact-form", json=sample_contact_form)

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a valid email address"

    def test_short_mobile(self, inline_client, sample_contact_form):
        sample_contact_form["mobile"] = "555-0123"

        response = inline_client.post("/api/contact-form", json=sample_contact_form)

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a valid 10-digit mobile number"

    def test_duplicate_carries_suggestion(self, inline_client, sample_contact_form):
        inline_client.post("/api/contact-form", json=sample_contact_form)

        response = inline_client.post("/api/contact-form", json=sample_contact_form)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "DUPLICATE_EMAIL"
        assert body["suggestion"] == "We have received your inquiry and will contact you shortly."

    def test_store_down_returns_mock_receipt(self, inline_client, store, sample_contact_form):
        store.connected = False

        response = inline_client.post("/api/contact-form", json=sample_contact_form)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert "(Database not connected)" in body["message"]
        assert body["data"]["id"].startswith("mock_")

        store.connected = True
        assert store.count("contacts") == 0


# =============================================================================
# /api/subscribers
# =============================================================================

class TestSubscribers:
    def test_subscribe(self, inline_client):
        response = inline_client.post("/api/subscribers", json={"email": " News@Example.com "})

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "news@example.com"
        assert body["subscribedAt"]

    def test_missing_email(self, inline_client):
        response = inline_client.post("/api/subscribers", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_duplicate(self, inline_client):
        inline_client.post("/api/subscribers", json={"email": "news@example.com"})

        response = inline_client.post("/api/subscribers", json={"email": "NEWS@example.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email already subscribed"

    def test_list_and_delete(self, inline_client):
        created = inline_client.post("/api/subscribers", json={"email": "a@example.com"}).json()

        assert len(inline_client.get("/api/subscribers").json()) == 1

        assert inline_client.delete(f"/api/subscribers/{created['id']}").status_code == 200
        assert inline_client.get("/api/subscribers").json() == []
        assert inline_client.delete(f"/api/subscribers/{created['id']}").status_code == 404


# =============================================================================
# Health, Banner and Fallbacks
# =============================================================================

class TestHealth:
    def test_health_check_connected(self, inline_client):
        response = inline_client.get("/api/health-check")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["database"] == "connected"
        assert body["imageStorage"] == "Inline Base64 (stored in the record)"

    def test_health_check_disconnected_still_200(self, inline_client, store):
        store.connected = False

        response = inline_client.get("/api/health-check")

        assert response.status_code == 200
        assert response.json()["database"] == "disconnected"

    def test_stored_mode_reported(self, stored_client):
        body = stored_client.get("/api/test").json()

        assert body["message"] == "RealTrust API is working"
        assert body["imageStorage"].startswith("Stored files")

    def test_root_banner(self, inline_client):
        body = inline_client.get("/").json()

        assert body["status"] == "OK"
        assert body["version"] == "1.0.0"
        assert body["database"] == "connected"

    def test_unknown_route(self, inline_client):
        response = inline_client.get("/api/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["detail"] == "Endpoint not found"
        assert body["details"]["requested"] == "GET /api/does-not-exist"
