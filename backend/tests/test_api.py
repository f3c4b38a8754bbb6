"""
API tests over the ASGI app.

Tests cover:
- Health and metrics endpoints
- Password login and session cookie
- Resume CRUD, HTML preview and PDF export
- Store errors mapped to HTTP status codes
- Library and table browser routes
"""

from unittest.mock import patch

import pytest

from resume_builder.auth import COOKIE_NAME


INLINE_EXPERIENCE = {
    "role": "Dev",
    "company": "X",
    "start": "2020",
    "end": "2021",
    "bullets": ["did things"],
}


class TestHealth:
    """Test unauthenticated service endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, anon_client):
        response = await anon_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        await client.post("/api/resumes", json={"name": "A"})

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "resume_writes_total" in response.text

    @pytest.mark.asyncio
    async def test_api_requests_recorded_by_route(self, client):
        """Requests into the included /api routers pass through the metrics middleware."""
        check = await client.get("/api/auth/check")
        created = await client.post("/api/resumes", json={"name": "A"})
        fetched = await client.get(f"/api/resumes/{created.json()['id']}")

        assert check.status_code == 200
        assert created.status_code == 200
        assert fetched.status_code == 200

        text = (await client.get("/metrics")).text
        assert 'endpoint="/api/auth/check"' in text
        assert 'endpoint="/api/resumes"' in text

    @pytest.mark.asyncio
    async def test_unhandled_error_logged_with_traceback(self, client, caplog):
        created = (await client.post("/api/resumes", json={"name": "A"})).json()

        with patch("resume_builder.services.export._html_to_pdf", side_effect=RuntimeError("renderer crashed")):
            with pytest.raises(RuntimeError):
                await client.get(f"/api/resumes/{created['id']}/pdf")

        records = [r for r in caplog.records if r.getMessage() == "Request error"]
        assert records
        assert records[0].exc_info is not None


class TestAuth:
    """Test the single-password session flow."""

    @pytest.mark.asyncio
    async def test_requires_session(self, anon_client):
        response = await anon_client.get("/api/resumes")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_password(self, anon_client):
        response = await anon_client.post("/api/auth/login", json={"password": "nope"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_sets_cookie(self, anon_client):
        response = await anon_client.post("/api/auth/login", json={"password": "changeme"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["expires_at"] is not None
        token = response.cookies.get(COOKIE_NAME)
        assert token

        check = await anon_client.get("/api/auth/check", cookies={COOKIE_NAME: token})
        assert check.json()["authenticated"] is True
        assert check.json()["expires_at"] is not None

        listed = await anon_client.get("/api/resumes", cookies={COOKIE_NAME: token})
        assert listed.status_code == 200

    @pytest.mark.asyncio
    async def test_check_without_cookie(self, anon_client):
        response = await anon_client.get("/api/auth/check")
        assert response.json() == {"authenticated": False, "expires_at": None}

    @pytest.mark.asyncio
    async def test_garbage_cookie(self, anon_client):
        response = await anon_client.get("/api/resumes", cookies={COOKIE_NAME: "not-a-jwt"})
        assert response.status_code == 401


class TestResumeRoutes:
    """Test resume endpoints end to end."""

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client):
        s1 = (await client.post("/api/skills", json={"name": "Python"})).json()
        s2 = (await client.post("/api/skills", json={"name": "SQL"})).json()

        response = await client.post("/api/resumes", json={
            "name": "A",
            "title": "Eng",
            "summary": "S",
            "skills": [s1["id"], s2["id"]],
            "experiences": [INLINE_EXPERIENCE],
            "education": [],
            "projects": [],
        })
        assert response.status_code == 200
        created = response.json()
        experience_id = created["experiences"][0]["id"]

        fetched = (await client.get(f"/api/resumes/{created['id']}")).json()
        assert fetched["skills"] == [s1["id"], s2["id"]]
        assert fetched["experiences"] == [{**INLINE_EXPERIENCE, "id": experience_id, "location": None, "work_type": None}]

        listed = (await client.get("/api/resumes")).json()
        assert [r["id"] for r in listed] == [created["id"]]

    @pytest.mark.asyncio
    async def test_malformed_inline(self, client):
        response = await client.post("/api/resumes", json={
            "name": "A",
            "experiences": [{"role": "Dev"}],
        })

        assert response.status_code == 422
        assert response.json()["detail"].startswith("experiences[0]")
        assert (await client.get("/api/resumes")).json() == []
        assert (await client.get("/api/experiences")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_reference(self, client):
        response = await client.post("/api/resumes", json={"name": "A", "projects": [41]})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_resume(self, client):
        response = await client.get("/api/resumes/999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Resume 999 not found"}

    @pytest.mark.asyncio
    async def test_partial_update(self, client):
        skill = (await client.post("/api/skills", json={"name": "Go"})).json()
        created = (await client.post("/api/resumes", json={
            "name": "A",
            "skills": [skill["id"]],
            "experiences": [INLINE_EXPERIENCE],
        })).json()

        response = await client.put(f"/api/resumes/{created['id']}", json={"skills": []})

        assert response.status_code == 200
        assert response.json()["skills"] == []
        assert len(response.json()["experiences"]) == 1

    @pytest.mark.asyncio
    async def test_delete(self, client):
        created = (await client.post("/api/resumes", json={"name": "A"})).json()

        response = await client.delete(f"/api/resumes/{created['id']}")
        assert response.json() == {"success": True}
        assert (await client.get(f"/api/resumes/{created['id']}")).status_code == 404
        assert (await client.delete(f"/api/resumes/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_html_preview(self, client):
        created = (await client.post("/api/resumes", json={"name": "Preview Person"})).json()

        response = await client.get(f"/api/resumes/{created['id']}/html")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Preview Person" in response.text

    @pytest.mark.asyncio
    async def test_pdf_export(self, client):
        created = (await client.post("/api/resumes", json={"name": "A"})).json()

        with patch("resume_builder.services.export._html_to_pdf", return_value=b"%PDF-fake") as convert:
            response = await client.get(f"/api/resumes/{created['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "resume.pdf" in response.headers["content-disposition"]
        assert response.content == b"%PDF-fake"
        assert "<h1>A</h1>" in convert.call_args.args[0]

    @pytest.mark.asyncio
    async def test_pdf_missing_resume(self, client):
        response = await client.get("/api/resumes/5/pdf")
        assert response.status_code == 404


class TestLibraryRoutes:
    """Test library endpoints."""

    @pytest.mark.asyncio
    async def test_skill_create_idempotent(self, client):
        first = await client.post("/api/skills", json={"name": "Rust"})
        second = await client.post("/api/skills", json={"name": "Rust"})

        assert first.json()["id"] == second.json()["id"]
        assert len((await client.get("/api/skills")).json()) == 1

    @pytest.mark.asyncio
    async def test_category_conflict(self, client):
        await client.post("/api/skill-categories", json={"name": "Tools"})
        response = await client.post("/api/skill-categories", json={"name": "Tools"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_category_delete_keeps_skills(self, client):
        category = (await client.post("/api/skill-categories", json={"name": "Tools"})).json()
        await client.post("/api/skills", json={"name": "Git", "category_id": category["id"]})

        response = await client.delete(f"/api/skill-categories/{category['id']}")

        assert response.json() == {"success": True}
        skills = (await client.get("/api/skills")).json()
        assert skills == [{"id": skills[0]["id"], "name": "Git", "category_id": None}]

    @pytest.mark.asyncio
    async def test_experience_crud(self, client):
        created = (await client.post("/api/experiences", json=INLINE_EXPERIENCE)).json()

        updated = await client.put(f"/api/experiences/{created['id']}", json={"location": "Remote"})
        assert updated.json()["location"] == "Remote"
        assert updated.json()["role"] == "Dev"

        assert (await client.delete(f"/api/experiences/{created['id']}")).status_code == 200
        assert (await client.get("/api/experiences")).json() == []

    @pytest.mark.asyncio
    async def test_contacts_and_socials(self, client):
        contact = await client.post("/api/contacts", json={"type": "email", "value": "a@example.com"})
        social = await client.post("/api/socials", json={"label": "Site", "url": "https://a.example.com"})

        assert contact.status_code == 200
        assert social.status_code == 200
        assert len((await client.get("/api/contacts")).json()) == 1
        assert len((await client.get("/api/socials")).json()) == 1


class TestTableBrowser:
    """Test the /db routes."""

    @pytest.mark.asyncio
    async def test_tables(self, client):
        response = await client.get("/api/db/tables")
        assert "resumes" in response.json()

    @pytest.mark.asyncio
    async def test_unknown_table(self, client):
        response = await client.get("/api/db/tables/users/records")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_record_crud(self, client):
        inserted = await client.post("/api/db/tables/skills/records", json={"name": "Perl"})
        record_id = inserted.json()["id"]

        await client.put(f"/api/db/tables/skills/records/{record_id}", json={"name": "Raku"})
        records = (await client.get("/api/db/tables/skills/records")).json()
        assert records == [{"id": record_id, "name": "Raku", "category_id": None}]

        deleted = await client.delete(f"/api/db/tables/skills/records/{record_id}")
        assert deleted.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_schema(self, client):
        response = await client.get("/api/db/tables/resumes/schema")
        names = [column["name"] for column in response.json()]
        assert names[0] == "id"
        assert "accent_color" in names
