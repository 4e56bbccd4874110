"""
NoteShare Backend — Board API Tests
=====================================

What:  End-to-end tests of the board service over HTTP, against a real
       temporary SQLite database.

What we test:
    ✅ Account signup validation codes and the 409 for a reused email
    ✅ Group creation records the creator as owner
    ✅ Adding a member twice is a no-op
    ✅ Notes: defaults, color normalization, author membership, ordering
    ✅ Geometry/content updates and deletes on missing ids change nothing
    ✅ Clearing a board removes exactly that group's notes
    ✅ Out-of-range ids and non-finite coordinates are 400s, not 500s
    ✅ Error body shape and X-Request-ID on every response
"""

import threading
from unittest.mock import patch

import pytest

from app.security import hash_password


# ══════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════

async def create_account(client, name="Alice", email="a@x.com", password="secret1") -> dict:
    response = await client.post(
        "/api/accounts", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


async def create_group(client, created_by: int, group_name="Team") -> dict:
    response = await client.post(
        "/api/groups", json={"group_name": group_name, "created_by": created_by}
    )
    assert response.status_code == 200, response.text
    return response.json()


async def create_note(client, group_id: int, **fields) -> int:
    body = {"x": 0, "y": 0}
    body.update(fields)
    response = await client.post(f"/api/groups/{group_id}/notes", json=body)
    assert response.status_code == 200, response.text
    return response.json()["id"]


async def list_notes(client, group_id: int) -> list:
    response = await client.get(f"/api/groups/{group_id}/notes")
    assert response.status_code == 200, response.text
    return response.json()["notes"]


def assert_error(response, status: int, code: str) -> None:
    assert response.status_code == status, response.text
    body = response.json()
    assert set(body) == {"code", "message"}
    assert body["code"] == code
    assert body["message"]


# ══════════════════════════════════════════════════════════════════════════
# Accounts
# ══════════════════════════════════════════════════════════════════════════

class TestAccounts:

    @pytest.mark.asyncio
    async def test_create_account_returns_public_fields(self, board_client, account_payload):
        response = await board_client.post("/api/accounts", json=account_payload)

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"id", "name", "email", "created_at"}
        assert body["id"] > 0
        assert body["name"] == "Alice"
        assert body["email"] == "a@x.com"

    @pytest.mark.asyncio
    async def test_fields_are_trimmed(self, board_client):
        body = await create_account(board_client, name="  Bob  ", email=" b@x.com ", password=" pass123 ")
        assert body["name"] == "Bob"
        assert body["email"] == "b@x.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,status,code",
        [
            ({"name": "   "}, 400, "name_empty"),
            ({"email": ""}, 400, "email_empty"),
            ({"email": "not-an-email"}, 422, "email_invalid"),
            ({"password": "  12345  "}, 422, "password_short"),
        ],
    )
    async def test_validation_codes(self, board_client, account_payload, overrides, status, code):
        payload = {**account_payload, **overrides}
        response = await board_client.post("/api/accounts", json=payload)
        assert_error(response, status, code)

    @pytest.mark.asyncio
    async def test_missing_fields_report_their_own_code(self, board_client):
        response = await board_client.post("/api/accounts", json={})
        assert_error(response, 400, "name_empty")

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, board_client, account_payload):
        await create_account(board_client)
        response = await board_client.post("/api/accounts", json=account_payload)
        assert_error(response, 409, "email_taken")

        listed = (await board_client.get("/api/accounts")).json()["accounts"]
        assert len(listed) == 1

    @pytest.mark.asyncio
    async def test_password_is_hashed_off_the_event_loop(self, board_client):
        hashed_on = []

        def recording_hash(password):
            hashed_on.append(threading.get_ident())
            return hash_password(password)

        with patch("app.services.account_service.hash_password", new=recording_hash):
            await create_account(board_client)

        assert len(hashed_on) == 1
        assert hashed_on[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_list_accounts_oldest_first(self, board_client):
        first = await create_account(board_client, email="a@x.com")
        second = await create_account(board_client, name="Bob", email="b@x.com")

        response = await board_client.get("/api/accounts")

        assert response.status_code == 200
        ids = [a["id"] for a in response.json()["accounts"]]
        assert ids == [first["id"], second["id"]]
        assert all("password" not in key for a in response.json()["accounts"] for key in a)

    @pytest.mark.asyncio
    async def test_groups_of_unknown_account(self, board_client):
        assert_error(await board_client.get("/api/accounts/99/groups"), 404, "account_not_found")

    @pytest.mark.asyncio
    async def test_groups_of_non_positive_account_id(self, board_client):
        assert_error(await board_client.get("/api/accounts/0/groups"), 400, "invalid_user_id")

    @pytest.mark.asyncio
    async def test_groups_of_out_of_range_account_id(self, board_client):
        response = await board_client.get(f"/api/accounts/{10**20}/groups")
        assert_error(response, 400, "invalid_user_id")

    @pytest.mark.asyncio
    async def test_non_integer_path_id_is_invalid_request(self, board_client):
        assert_error(await board_client.get("/api/accounts/abc/groups"), 400, "invalid_request")


# ══════════════════════════════════════════════════════════════════════════
# Groups and memberships
# ══════════════════════════════════════════════════════════════════════════

class TestGroups:

    @pytest.mark.asyncio
    async def test_creator_becomes_owner(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])

        assert group["group_name"] == "Team"
        assert group["created_by"] == alice["id"]

        members = (await board_client.get(f"/api/groups/{group['id']}/users")).json()["members"]
        assert [(m["user_id"], m["role"]) for m in members] == [(alice["id"], "owner")]

        groups = (await board_client.get(f"/api/accounts/{alice['id']}/groups")).json()["groups"]
        assert [(g["id"], g["group_name"], g["role"]) for g in groups] == [
            (group["id"], "Team", "owner")
        ]

    @pytest.mark.asyncio
    async def test_get_group(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])

        response = await board_client.get(f"/api/groups/{group['id']}")

        assert response.status_code == 200
        assert response.json() == group

    @pytest.mark.asyncio
    async def test_get_missing_group(self, board_client):
        assert_error(await board_client.get("/api/groups/42"), 404, "group_not_found")
        assert_error(await board_client.get("/api/groups/0"), 400, "invalid_id")

    @pytest.mark.asyncio
    async def test_out_of_range_ids_are_rejected(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        huge = 10**20

        assert_error(await board_client.get(f"/api/groups/{huge}"), 400, "invalid_id")
        assert_error(await board_client.get(f"/api/groups/{huge}/users"), 400, "invalid_group_id")
        assert_error(
            await board_client.post(f"/api/groups/{huge}/users", json={"user_id": alice["id"]}),
            400,
            "invalid_group_id",
        )
        assert_error(
            await board_client.post(f"/api/groups/{group['id']}/users", json={"user_id": huge}),
            400,
            "invalid_user_id",
        )
        assert_error(
            await board_client.post("/api/groups", json={"group_name": "Big", "created_by": huge}),
            400,
            "created_by_invalid",
        )

    @pytest.mark.asyncio
    async def test_create_group_validation(self, board_client):
        alice = await create_account(board_client)

        response = await board_client.post(
            "/api/groups", json={"group_name": "  ", "created_by": alice["id"]}
        )
        assert_error(response, 400, "group_name_empty")

        response = await board_client.post("/api/groups", json={"group_name": "Team", "created_by": 0})
        assert_error(response, 400, "created_by_invalid")

        response = await board_client.post("/api/groups", json={"group_name": "Team", "created_by": 77})
        assert_error(response, 404, "account_not_found")

    @pytest.mark.asyncio
    async def test_add_member_is_idempotent(self, board_client):
        alice = await create_account(board_client)
        bob = await create_account(board_client, name="Bob", email="b@x.com")
        group = await create_group(board_client, alice["id"])
        url = f"/api/groups/{group['id']}/users"

        first = await board_client.post(url, json={"user_id": bob["id"]})
        second = await board_client.post(url, json={"user_id": bob["id"], "role": "owner"})

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 204

        members = (await board_client.get(url)).json()["members"]
        assert [(m["user_id"], m["role"]) for m in members] == [
            (alice["id"], "owner"),
            (bob["id"], "member"),
        ]

    @pytest.mark.asyncio
    async def test_add_member_with_owner_role(self, board_client):
        alice = await create_account(board_client)
        bob = await create_account(board_client, name="Bob", email="b@x.com")
        group = await create_group(board_client, alice["id"])

        response = await board_client.post(
            f"/api/groups/{group['id']}/users", json={"user_id": bob["id"], "role": "owner"}
        )

        assert response.status_code == 204
        groups = (await board_client.get(f"/api/accounts/{bob['id']}/groups")).json()["groups"]
        assert groups[0]["role"] == "owner"

    @pytest.mark.asyncio
    async def test_add_member_errors(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        url = f"/api/groups/{group['id']}/users"

        assert_error(await board_client.post(url, json={"user_id": alice["id"], "role": "admin"}), 422, "invalid_role")
        assert_error(await board_client.post(url, json={"user_id": 0}), 400, "invalid_user_id")
        assert_error(await board_client.post(url, json={"user_id": 99}), 404, "account_not_found")
        assert_error(
            await board_client.post("/api/groups/99/users", json={"user_id": alice["id"]}),
            404,
            "group_not_found",
        )
        assert_error(
            await board_client.post("/api/groups/0/users", json={"user_id": alice["id"]}),
            400,
            "invalid_group_id",
        )

    @pytest.mark.asyncio
    async def test_members_of_missing_group(self, board_client):
        assert_error(await board_client.get("/api/groups/5/users"), 404, "group_not_found")


# ══════════════════════════════════════════════════════════════════════════
# Notes
# ══════════════════════════════════════════════════════════════════════════

class TestNotes:

    @pytest.mark.asyncio
    async def test_alice_scenario(self, board_client):
        alice = await create_account(board_client, name="Alice", email="a@x.com", password="secret1")
        group = await create_group(board_client, alice["id"], group_name="Team")
        await create_note(board_client, group["id"], x=10, y=20, color="pink", created_by=alice["id"])

        groups = (await board_client.get(f"/api/accounts/{alice['id']}/groups")).json()["groups"]
        assert [(g["group_name"], g["role"]) for g in groups] == [("Team", "owner")]

        notes = await list_notes(board_client, group["id"])
        assert len(notes) == 1
        note = notes[0]
        assert (note["x"], note["y"]) == (10, 20)
        assert note["color"] == "#FBCFE8"
        assert note["created_by"] == alice["id"]
        assert note["group_id"] == group["id"]

    @pytest.mark.asyncio
    async def test_defaults(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        await create_note(board_client, group["id"], x=1.5, y=2.5)

        note = (await list_notes(board_client, group["id"]))[0]
        assert note["width"] == 200
        assert note["height"] == 150
        assert note["z_index"] == 0
        assert note["can_edit"] is False
        assert note["color"] == "#FFFF88"
        assert note["title"] is None
        assert note["content"] is None
        assert note["created_by"] is None
        assert {"created_at", "updated_at", "shared_at"} <= set(note)

    @pytest.mark.asyncio
    async def test_explicit_fields_are_kept(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        await create_note(
            board_client,
            group["id"],
            title="Plan",
            content="Ship it",
            color="#abcdef",
            x=5,
            y=6,
            width=300,
            height=100,
            z_index=3,
            can_edit=True,
        )

        note = (await list_notes(board_client, group["id"]))[0]
        assert note["title"] == "Plan"
        assert note["content"] == "Ship it"
        assert note["color"] == "#ABCDEF"
        assert (note["width"], note["height"], note["z_index"]) == (300, 100, 3)
        assert note["can_edit"] is True

    @pytest.mark.asyncio
    async def test_notes_are_listed_in_drawing_order(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        top = await create_note(board_client, group["id"], z_index=5)
        bottom = await create_note(board_client, group["id"], z_index=0)
        middle = await create_note(board_client, group["id"], z_index=2)

        ids = [n["id"] for n in await list_notes(board_client, group["id"])]
        assert ids == [bottom, middle, top]

    @pytest.mark.asyncio
    async def test_author_must_be_member(self, board_client):
        alice = await create_account(board_client)
        bob = await create_account(board_client, name="Bob", email="b@x.com")
        group = await create_group(board_client, alice["id"])
        url = f"/api/groups/{group['id']}/notes"

        assert_error(await board_client.post(url, json={"x": 0, "y": 0, "created_by": bob["id"]}), 422, "not_member")
        assert_error(await board_client.post(url, json={"x": 0, "y": 0, "created_by": 99}), 404, "account_not_found")
        assert_error(await board_client.post(url, json={"x": 0, "y": 0, "created_by": 0}), 400, "invalid_user_id")
        assert await list_notes(board_client, group["id"]) == []

    @pytest.mark.asyncio
    async def test_create_note_errors(self, board_client):
        assert_error(await board_client.post("/api/groups/9/notes", json={"x": 0, "y": 0}), 404, "group_not_found")
        assert_error(await board_client.post("/api/groups/0/notes", json={"x": 0, "y": 0}), 400, "invalid_group_id")

    @pytest.mark.asyncio
    async def test_missing_coordinates_is_invalid_request(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])

        response = await board_client.post(f"/api/groups/{group['id']}/notes", json={"x": 1})

        assert_error(response, 400, "invalid_request")

    @pytest.mark.asyncio
    async def test_malformed_json_is_invalid_request(self, board_client):
        response = await board_client.post(
            "/api/accounts",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert_error(response, 400, "invalid_request")

    @pytest.mark.asyncio
    async def test_non_finite_geometry_is_invalid_request(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        note_id = await create_note(board_client, group["id"], x=3, y=4)
        before = await list_notes(board_client, group["id"])
        headers = {"Content-Type": "application/json"}

        for body in (
            b'{"x": NaN, "y": 1}',
            b'{"x": 1, "y": Infinity}',
            b'{"x": 1, "y": 1, "width": -Infinity}',
            b'{"x": 1, "y": 1, "height": NaN}',
        ):
            response = await board_client.post(
                f"/api/groups/{group['id']}/notes", content=body, headers=headers
            )
            assert_error(response, 400, "invalid_request")
            response = await board_client.patch(
                f"/api/notes/{note_id}/position", content=body, headers=headers
            )
            assert_error(response, 400, "invalid_request")

        assert await list_notes(board_client, group["id"]) == before

    @pytest.mark.asyncio
    async def test_out_of_range_ids_are_rejected(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        huge = 10**20

        assert_error(await board_client.get(f"/api/groups/{huge}/notes"), 400, "invalid_group_id")
        assert_error(await board_client.delete(f"/api/groups/{huge}/notes"), 400, "invalid_group_id")
        assert_error(
            await board_client.post(f"/api/groups/{huge}/notes", json={"x": 0, "y": 0}),
            400,
            "invalid_group_id",
        )
        assert_error(
            await board_client.post(
                f"/api/groups/{group['id']}/notes", json={"x": 0, "y": 0, "created_by": huge}
            ),
            400,
            "invalid_user_id",
        )
        assert_error(await board_client.delete(f"/api/notes/{huge}"), 400, "invalid_note_id")
        assert_error(
            await board_client.patch(f"/api/notes/{huge}/position", json={"x": 0, "y": 0}),
            400,
            "invalid_note_id",
        )
        assert_error(await board_client.patch(f"/api/notes/{huge}", json={"title": "x"}), 400, "invalid_note_id")
        assert await list_notes(board_client, group["id"]) == []

    @pytest.mark.asyncio
    async def test_out_of_range_z_index_is_invalid_request(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        note_id = await create_note(board_client, group["id"])

        response = await board_client.post(
            f"/api/groups/{group['id']}/notes", json={"x": 0, "y": 0, "z_index": 2**63}
        )
        assert_error(response, 400, "invalid_request")
        response = await board_client.patch(
            f"/api/notes/{note_id}/position", json={"x": 0, "y": 0, "z_index": -(2**63) - 1}
        )
        assert_error(response, 400, "invalid_request")

    @pytest.mark.asyncio
    async def test_update_position(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        note_id = await create_note(board_client, group["id"], x=1, y=1, width=300, height=300, z_index=4)

        response = await board_client.patch(f"/api/notes/{note_id}/position", json={"x": 50, "y": 60})

        assert response.status_code == 204
        note = (await list_notes(board_client, group["id"]))[0]
        assert (note["x"], note["y"]) == (50, 60)
        # Omitted geometry falls back to the defaults
        assert (note["width"], note["height"], note["z_index"]) == (200, 150, 0)

    @pytest.mark.asyncio
    async def test_update_content_normalizes_color(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        note_id = await create_note(board_client, group["id"], title="old", color="pink")

        response = await board_client.patch(
            f"/api/notes/{note_id}", json={"title": "new", "content": "body", "color": "Green"}
        )

        assert response.status_code == 204
        note = (await list_notes(board_client, group["id"]))[0]
        assert (note["title"], note["content"], note["color"]) == ("new", "body", "#BBF7D0")

        await board_client.patch(f"/api/notes/{note_id}", json={"color": "chartreuse"})
        note = (await list_notes(board_client, group["id"]))[0]
        assert note["color"] == "#FFFF88"

    @pytest.mark.asyncio
    async def test_updates_on_missing_note_change_nothing(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        await create_note(board_client, group["id"], x=3, y=4, title="keep")
        before = await list_notes(board_client, group["id"])

        assert_error(await board_client.patch("/api/notes/999/position", json={"x": 0, "y": 0}), 404, "note_not_found")
        assert_error(await board_client.patch("/api/notes/999", json={"title": "x"}), 404, "note_not_found")
        assert_error(await board_client.delete("/api/notes/999"), 404, "note_not_found")
        assert_error(await board_client.patch("/api/notes/0", json={"title": "x"}), 400, "invalid_note_id")

        assert await list_notes(board_client, group["id"]) == before

    @pytest.mark.asyncio
    async def test_delete_note(self, board_client):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        kept = await create_note(board_client, group["id"])
        removed = await create_note(board_client, group["id"])

        response = await board_client.delete(f"/api/notes/{removed}")

        assert response.status_code == 204
        assert [n["id"] for n in await list_notes(board_client, group["id"])] == [kept]
        assert_error(await board_client.delete(f"/api/notes/{removed}"), 404, "note_not_found")

    @pytest.mark.asyncio
    async def test_clear_group_leaves_other_groups_alone(self, board_client):
        alice = await create_account(board_client)
        team = await create_group(board_client, alice["id"], group_name="Team")
        other = await create_group(board_client, alice["id"], group_name="Other")
        for i in range(3):
            await create_note(board_client, team["id"], x=i)
        survivor = await create_note(board_client, other["id"])

        response = await board_client.delete(f"/api/groups/{team['id']}/notes")

        assert response.status_code == 200
        assert response.json() == {"removed": 3}
        assert await list_notes(board_client, team["id"]) == []
        assert [n["id"] for n in await list_notes(board_client, other["id"])] == [survivor]

        again = await board_client.delete(f"/api/groups/{team['id']}/notes")
        assert again.json() == {"removed": 0}

    @pytest.mark.asyncio
    async def test_clear_missing_group(self, board_client):
        assert_error(await board_client.delete("/api/groups/9/notes"), 404, "group_not_found")
        assert_error(await board_client.get("/api/groups/9/notes"), 404, "group_not_found")


# ══════════════════════════════════════════════════════════════════════════
# Diagnostics and transport
# ══════════════════════════════════════════════════════════════════════════

class TestBoardDiagnostics:

    @pytest.mark.asyncio
    async def test_debug_reports_storage_and_count(self, board_client, board_db):
        alice = await create_account(board_client)
        group = await create_group(board_client, alice["id"])
        await create_note(board_client, group["id"])

        response = await board_client.get("/api/debug")

        assert response.status_code == 200
        body = response.json()
        assert body["database_url"] == board_db.url
        assert body["db_file_path"] == str(board_db.file_path)
        assert body["file_exists"] is True
        assert body["file_size"] > 0
        assert body["total_notes"] == 1

    @pytest.mark.asyncio
    async def test_health(self, board_client):
        response = await board_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "board"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_on_success_and_error(self, board_client):
        ok = await board_client.get("/api/accounts")
        failed = await board_client.get("/api/groups/123")

        assert ok.headers.get("X-Request-ID")
        assert failed.headers.get("X-Request-ID")
        assert ok.headers["X-Request-ID"] != failed.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, board_client):
        response = await board_client.get("/api/accounts", headers={"X-Request-ID": "trace-42"})
        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_shape(self, board_client):
        assert_error(await board_client.get("/api/nope"), 404, "not_found")

    @pytest.mark.asyncio
    async def test_cors_preflight(self, board_client):
        response = await board_client.options(
            "/api/accounts",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "PATCH",
            },
        )
        assert response.status_code == 200
        assert "PATCH" in response.headers["access-control-allow-methods"]
