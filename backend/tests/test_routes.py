"""
Portfolio API - HTTP Endpoint Tests
===================================

What:  Exercises every route through the ASGI app with the in-memory database.

What we test:
    ✅ Insert via POST then read back by the acknowledged id
    ✅ PUT on an unknown id returns success=false and creates nothing
    ✅ DELETE twice reports deletedCount 0 the second time
    ✅ GET /projects on an empty collection → 404
    ✅ POST /jwt tokens decode to the submitted claims
    ✅ Protected routes → 401 forbidden access without/with a bad token
    ✅ Schema rejection of unknown and missing fields → 400
    ✅ Database failures → 500 with a generic body
"""

import jwt
import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from portfolio_api.config import settings


class TestRootAndHealth:
    """Tests for the liveness text and the health check."""

    @pytest.mark.asyncio
    async def test_root_reports_port(self, test_client):
        """GET / names the configured port."""
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == f"Portfolio server is running on {settings.port}"

    @pytest.mark.asyncio
    async def test_root_fallback_without_database(self, test_client, fake_db):
        """GET / answers 503 when no database handle is open."""
        fake_db.is_connected = False

        response = await test_client.get("/")

        assert response.status_code == 503
        assert response.text == "Server is not working"

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        """A successful ping reports healthy."""
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_ping_fails(self, test_client, fake_db):
        """A failed ping reports 503 disconnected."""
        fake_db.ping_ok = False

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        """The client's X-Request-ID comes back in the response."""
        response = await test_client.get("/skills", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestProjects:
    """Tests for the /projects CRUD routes."""

    @pytest.mark.asyncio
    async def test_empty_collection_is_404(self, test_client):
        """An empty project list is reported as not found."""
        response = await test_client.get("/projects")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_create_then_read_back(self, test_client, auth_headers, sample_project):
        """A created project reads back by id and appears in the list."""
        created = await test_client.post("/projects", json=sample_project, headers=auth_headers)

        assert created.status_code == 200
        ack = created.json()
        assert ack["acknowledged"] is True
        project_id = ack["insertedId"]

        fetched = await test_client.get(f"/projects/{project_id}")
        assert fetched.status_code == 200
        assert fetched.json() == {**sample_project, "_id": project_id}

        listed = await test_client.get("/projects")
        assert listed.status_code == 200
        assert [p["_id"] for p in listed.json()] == [project_id]

    @pytest.mark.asyncio
    async def test_update_existing(self, test_client, auth_headers, sample_project):
        """PUT changes only the submitted fields."""
        created = await test_client.post("/projects", json=sample_project, headers=auth_headers)
        project_id = created.json()["insertedId"]

        response = await test_client.put(
            f"/projects/{project_id}",
            json={"description": "Rewritten"},
            headers=auth_headers,
        )

        assert response.json() == {"success": True, "message": "Project updated successfully"}
        fetched = await test_client.get(f"/projects/{project_id}")
        assert fetched.json()["description"] == "Rewritten"
        assert fetched.json()["name"] == sample_project["name"]

    @pytest.mark.asyncio
    async def test_update_unknown_id_creates_nothing(self, test_client, auth_headers, fake_db):
        """PUT on an unknown id reports failure and inserts nothing."""
        response = await test_client.put(
            f"/projects/{ObjectId()}",
            json={"name": "Ghost"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert fake_db.collection("projects").documents == []

    @pytest.mark.asyncio
    async def test_update_with_empty_body_is_400(self, test_client, auth_headers):
        """PUT with no fields is rejected."""
        response = await test_client.put(f"/projects/{ObjectId()}", json={}, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, auth_headers, sample_project):
        """The second DELETE of an id reports deletedCount 0."""
        created = await test_client.post("/projects", json=sample_project, headers=auth_headers)
        project_id = created.json()["insertedId"]

        first = await test_client.delete(f"/projects/{project_id}", headers=auth_headers)
        second = await test_client.delete(f"/projects/{project_id}", headers=auth_headers)

        assert first.json() == {"acknowledged": True, "deletedCount": 1}
        assert second.status_code == 200
        assert second.json() == {"acknowledged": True, "deletedCount": 0}

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        """A malformed id is invalid input on the `id` field."""
        response = await test_client.get("/projects/not-an-id")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_input"
        assert body["details"]["field"] == "id"

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        """A well-formed unknown id is not found."""
        response = await test_client.get(f"/projects/{ObjectId()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_required_field_is_400(self, test_client, auth_headers):
        """POST without a required field is rejected."""
        response = await test_client.post("/projects", json={"name": "No description"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    @pytest.mark.asyncio
    async def test_database_failure_is_500(self, test_client, fake_db):
        """Driver errors become a generic 500 body."""
        fake_db.collection("projects").error = ServerSelectionTimeoutError("cluster unreachable")

        response = await test_client.get("/projects")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "upstream_failure"
        assert "cluster unreachable" not in body["message"]


class TestSkills:
    """Tests for /skills and /backendskills."""

    @pytest.mark.asyncio
    async def test_post_then_list(self, test_client, auth_headers):
        """A posted skill appears in the list."""
        created = await test_client.post("/skills", json={"name": "Go"}, headers=auth_headers)

        ack = created.json()
        assert ack["acknowledged"] is True
        listed = await test_client.get("/skills")
        assert listed.status_code == 200
        assert {"_id": ack["insertedId"], "name": "Go"} in listed.json()

    @pytest.mark.asyncio
    async def test_empty_list_is_200(self, test_client):
        """An empty skill list is an empty array, not 404."""
        response = await test_client.get("/skills")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, test_client, auth_headers, fake_db):
        """Unknown fields are rejected before anything is stored."""
        response = await test_client.post(
            "/skills", json={"name": "Go", "bogus": True}, headers=auth_headers
        )

        assert response.status_code == 400
        assert fake_db.collection("skills").documents == []

    @pytest.mark.asyncio
    async def test_delete(self, test_client, auth_headers):
        """A deleted skill disappears from the list."""
        created = await test_client.post("/skills", json={"name": "Rust"}, headers=auth_headers)
        skill_id = created.json()["insertedId"]

        response = await test_client.delete(f"/skills/{skill_id}", headers=auth_headers)

        assert response.json()["deletedCount"] == 1
        assert (await test_client.get("/skills")).json() == []

    @pytest.mark.asyncio
    async def test_backend_skills_bulk_insert(self, test_client, auth_headers):
        """Bulk insert acknowledges every document by position."""
        body = [{"name": "Node.js"}, {"name": "MongoDB", "level": "advanced"}]

        created = await test_client.post("/backendskills", json=body, headers=auth_headers)

        ack = created.json()
        assert ack["insertedCount"] == 2
        assert set(ack["insertedIds"]) == {"0", "1"}
        listed = (await test_client.get("/backendskills")).json()
        assert {"_id": ack["insertedIds"]["1"], "name": "MongoDB", "level": "advanced"} in listed

    @pytest.mark.asyncio
    async def test_backend_skills_empty_array_is_400(self, test_client, auth_headers):
        """An empty bulk insert is rejected."""
        response = await test_client.post("/backendskills", json=[], headers=auth_headers)

        assert response.status_code == 400


class TestContactsAndBlogs:
    """Tests for the contact form, inbox and blog routes."""

    @pytest.mark.asyncio
    async def test_contact_post_is_public(self, test_client):
        """Visitors can submit the contact form without a token."""
        response = await test_client.post(
            "/contacts",
            json={"name": "Ada", "email": "ada@example.com", "message": "Hello"},
        )

        assert response.status_code == 200
        assert response.json()["acknowledged"] is True

    @pytest.mark.asyncio
    async def test_contact_invalid_email(self, test_client):
        """A malformed email address is rejected."""
        response = await test_client.post(
            "/contacts",
            json={"name": "Ada", "email": "not-an-email", "message": "Hello"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_contact_inbox_requires_token(self, test_client, auth_headers):
        """Reading the inbox needs a token."""
        await test_client.post(
            "/contacts",
            json={"name": "Ada", "email": "ada@example.com", "message": "Hello"},
        )

        anonymous = await test_client.get("/contacts")
        owner = await test_client.get("/contacts", headers=auth_headers)

        assert anonymous.status_code == 401
        assert owner.status_code == 200
        assert owner.json()[0]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_blog_create_list_and_get(self, test_client, auth_headers):
        """A created post is listed and readable by id."""
        post = {"title": "Hello", "content": "First post", "tags": ["intro"]}

        created = await test_client.post("/blogs", json=post, headers=auth_headers)
        blog_id = created.json()["insertedId"]

        assert len((await test_client.get("/blogs")).json()) == 1
        fetched = await test_client.get(f"/blogs/{blog_id}")
        assert fetched.json() == {**post, "_id": blog_id}

    @pytest.mark.asyncio
    async def test_blog_malformed_id(self, test_client):
        """A malformed blog id is rejected."""
        response = await test_client.get("/blogs/123")

        assert response.status_code == 400


class TestAuth:
    """Tests for POST /jwt and the bearer guard."""

    @pytest.mark.asyncio
    async def test_jwt_issues_decodable_token(self, test_client):
        """POST /jwt signs the body with the server secret."""
        response = await test_client.post("/jwt", json={"role": "admin"})

        assert response.status_code == 200
        token = response.json()["token"]
        claims = jwt.decode(token, settings.token_secret, algorithms=["HS256"])
        assert claims["role"] == "admin"
        assert claims["exp"] - claims["iat"] == 3600

    @pytest.mark.asyncio
    async def test_jwt_rejects_non_object_body(self, test_client):
        """A non-object body is rejected."""
        response = await test_client.post("/jwt", json=["role", "admin"])

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "claims",
        [{"aud": "portfolio"}, {"sub": 42}, {"jti": 7, "role": "admin"}, {"iss": "portfolio-site"}],
    )
    async def test_registered_claims_do_not_block_access(self, test_client, claims):
        """Tokens carrying registered claims still unlock write routes."""
        token = (await test_client.post("/jwt", json=claims)).json()["token"]

        response = await test_client.post(
            "/skills", json={"name": "Go"}, headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_unencodable_issuer_is_400(self, test_client):
        """A non-string `iss` is a 400, not a 500."""
        response = await test_client.post("/jwt", json={"iss": 1})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_input"
        assert body["details"]["field"] == "body"

    @pytest.mark.asyncio
    async def test_issued_token_unlocks_protected_route(self, test_client):
        """A token from POST /jwt unlocks a write route."""
        token = (await test_client.post("/jwt", json={"role": "admin"})).json()["token"]

        response = await test_client.post(
            "/skills", json={"name": "Go"}, headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_header_is_401(self, test_client, fake_db):
        """A write without a token is refused and stores nothing."""
        response = await test_client.post("/skills", json={"name": "Go"})

        assert response.status_code == 401
        assert response.json()["message"] == "forbidden access"
        assert fake_db.collection("skills").documents == []

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self, test_client):
        """A garbage token is refused."""
        response = await test_client.delete(
            f"/projects/{ObjectId()}", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "forbidden access"

    @pytest.mark.asyncio
    async def test_auth_can_be_disabled(self, test_client, monkeypatch):
        """REQUIRE_AUTH=false opens the write routes."""
        monkeypatch.setattr(settings, "require_auth", False)

        response = await test_client.post("/skills", json={"name": "Go"})

        assert response.status_code == 200
