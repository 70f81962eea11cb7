import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from backend.app import create_app
from backend.context import build_context
from backend.dependencies import get_board_context
from backend.local_cache import InMemoryLocalCache
from backend.remote_store import InMemoryRemoteStore


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.remote = InMemoryRemoteStore()
        self.ctx = build_context(self.remote, InMemoryLocalCache())
        self.app = create_app()
        self.app.dependency_overrides[get_board_context] = lambda: self.ctx
        self.client = TestClient(self.app)

    def create_contact(self, name="Anton Mayer", email="anton@gmail.com", phone="+49 1"):
        response = self.client.post(
            "/api/contacts", json={"name": name, "email": email, "phone": phone}
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_task(self, **overrides):
        payload = {"title": "Plan", "due_date": "2024-02-01", "category": "User Story"}
        payload.update(overrides)
        response = self.client.post("/api/tasks", json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "connected": True})

        self.remote.connected = False
        self.assertFalse(self.client.get("/api/health").json()["connected"])

    def test_contact_crud(self):
        contact = self.create_contact()
        self.assertEqual(contact["initials"], "AM")

        fetched = self.client.get(f"/api/contacts/{contact['id']}")
        self.assertEqual(fetched.json()["email"], "anton@gmail.com")

        updated = self.client.patch(
            f"/api/contacts/{contact['id']}",
            json={"name": "Benedikt Ziegler", "email": "anton@gmail.com", "phone": "+49 2"},
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["initials"], "BZ")

        self.assertEqual(len(self.client.get("/api/contacts").json()), 1)
        self.assertEqual(self.client.delete(f"/api/contacts/{contact['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/contacts/{contact['id']}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/contacts/{contact['id']}").status_code, 404)

    def test_contact_errors(self):
        self.create_contact()
        duplicate = self.client.post(
            "/api/contacts", json={"name": "Anton Two", "email": "ANTON@gmail.com", "phone": "1"}
        )
        invalid = self.client.post(
            "/api/contacts", json={"name": "Anton", "email": "nope", "phone": "1"}
        )
        self.assertEqual(duplicate.status_code, 409)
        self.assertEqual(invalid.status_code, 400)

    def test_grouped_contacts(self):
        self.create_contact("Benedikt Ziegler", "benedikt@gmail.com")
        self.create_contact("Anja Schulz", "anja@gmail.com")
        groups = self.client.get("/api/contacts/grouped").json()["groups"]
        self.assertEqual(list(groups), ["A", "B"])
        self.assertEqual(groups["A"][0]["name"], "Anja Schulz")

    def test_task_lifecycle(self):
        contact = self.create_contact()
        task = self.create_task(
            assigned_to=[contact["id"]], subtasks=[{"title": "Draft"}], priority="urgent"
        )
        self.assertEqual(task["status"], "to-do")
        subtask_id = task["subtasks"][0]["id"]

        moved = self.client.patch(f"/api/tasks/{task['id']}", json={"status": "done"})
        self.assertEqual(moved.status_code, 200)
        self.assertEqual(moved.json()["status"], "done")
        self.assertEqual(moved.json()["title"], "Plan")

        toggled = self.client.post(f"/api/tasks/{task['id']}/subtasks/{subtask_id}/toggle")
        self.assertTrue(toggled.json()["subtasks"][0]["completed"])

        self.client.delete(f"/api/contacts/{contact['id']}")
        self.assertEqual(self.client.get(f"/api/tasks/{task['id']}").json()["assigned_to"], [])

        self.assertEqual(self.client.delete(f"/api/tasks/{task['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/tasks/{task['id']}").status_code, 404)

    def test_task_filters_and_stats(self):
        self.create_task(title="Kochwelt Page", priority="urgent", due_date="2024-03-01")
        self.create_task(title="CSS Architecture", status="in-progress")

        by_status = self.client.get("/api/tasks", params={"status": "in-progress"}).json()
        by_term = self.client.get("/api/tasks", params={"q": "kochwelt"}).json()
        stats = self.client.get("/api/tasks/stats").json()

        self.assertEqual([t["title"] for t in by_status], ["CSS Architecture"])
        self.assertEqual([t["title"] for t in by_term], ["Kochwelt Page"])
        self.assertEqual(stats["total"], 2)
        self.assertEqual(stats["urgent"], 1)
        self.assertEqual(stats["next_deadline"], "2024-03-01")

    def test_task_validation(self):
        missing = self.client.post(
            "/api/tasks", json={"title": "", "due_date": "2024-02-01", "category": "User Story"}
        )
        bad_status = self.client.post(
            "/api/tasks",
            json={"title": "Plan", "due_date": "2024-02-01", "category": "x", "status": "later"},
        )
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(bad_status.status_code, 422)
        self.assertEqual(self.client.patch("/api/tasks/missing", json={"title": "x"}).status_code, 404)

    def test_task_due_date_must_be_iso(self):
        bad_create = self.client.post(
            "/api/tasks", json={"title": "Plan", "due_date": "01.02.2024", "category": "User Story"}
        )
        self.assertEqual(bad_create.status_code, 400)

        task = self.create_task()
        bad_update = self.client.patch(f"/api/tasks/{task['id']}", json={"due_date": "next week"})
        self.assertEqual(bad_update.status_code, 422)
        self.assertEqual(self.client.get(f"/api/tasks/{task['id']}").json()["due_date"], "2024-02-01")

    def test_status_filter_uses_board_column_lookup(self):
        self.create_task(title="Plan")
        self.create_task(title="Ship", status="done")
        with patch.object(
            self.ctx.tasks, "list_by_status", wraps=self.ctx.tasks.list_by_status
        ) as list_by_status:
            done = self.client.get("/api/tasks", params={"status": "done"}).json()
        list_by_status.assert_called_once_with("done")
        self.assertEqual([t["title"] for t in done], ["Ship"])

    def test_partial_contact_patch(self):
        contact = self.create_contact()

        response = self.client.patch(f"/api/contacts/{contact['id']}", json={"phone": "+49 9"})

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["phone"], "+49 9")
        self.assertEqual(response.json()["name"], "Anton Mayer")
        self.assertEqual(response.json()["email"], "anton@gmail.com")
        missing = self.client.patch("/api/contacts/missing", json={"phone": "+49 9"})
        self.assertEqual(missing.status_code, 404)

    def test_auth_flow(self):
        registered = self.client.post(
            "/api/auth/register",
            json={
                "name": "Anja Schulz",
                "email": "anja@gmail.com",
                "password": "secret1",
                "confirm_password": "secret1",
                "privacy_accepted": True,
            },
        )
        self.assertEqual(registered.status_code, 201)
        self.assertNotIn("password", registered.json())

        bad = self.client.post("/api/auth/login", json={"email": "anja@gmail.com", "password": "nope"})
        self.assertEqual(bad.status_code, 401)

        login = self.client.post("/api/auth/login", json={"email": "anja@gmail.com", "password": "secret1"})
        self.assertEqual(login.status_code, 200)

        session = self.client.get("/api/auth/session").json()
        self.assertTrue(session["authenticated"])
        self.assertEqual(session["user"]["email"], "anja@gmail.com")

        self.client.post("/api/auth/logout")
        self.assertFalse(self.client.get("/api/auth/session").json()["authenticated"])

    def test_register_duplicate_and_guest(self):
        payload = {
            "name": "Anja Schulz",
            "email": "anja@gmail.com",
            "password": "secret1",
            "confirm_password": "secret1",
            "privacy_accepted": True,
        }
        self.client.post("/api/auth/register", json=payload)
        self.assertEqual(self.client.post("/api/auth/register", json=payload).status_code, 409)

        guest = self.client.post("/api/auth/guest").json()
        self.assertEqual(guest["id"], "guest")
        self.assertTrue(guest["is_guest"])

    def test_demo_data_endpoints(self):
        status = self.client.get("/api/demo-data").json()
        self.assertFalse(status["all_exist"])

        seeded = self.client.post("/api/demo-data/initialize").json()
        self.assertEqual((seeded["contacts"], seeded["tasks"]), (10, 5))
        self.assertTrue(self.client.post("/api/demo-data/upload").json()["skipped"])

        self.create_contact("Eva Fischer", "eva@gmail.com")
        reset = self.client.post("/api/demo-data/reset")
        self.assertEqual(reset.status_code, 200)
        self.assertEqual(len(self.client.get("/api/contacts").json()), 10)
        self.assertEqual(len(self.client.get("/api/tasks").json()), 5)

    def test_demo_data_write_failure(self):
        with patch.object(self.remote, "update", side_effect=RuntimeError("offline")):
            response = self.client.post("/api/demo-data/reset")
        self.assertEqual(response.status_code, 502)

    def test_startup_seeds_demo_data(self):
        with patch("backend.app.get_board_context", return_value=self.ctx):
            with TestClient(self.app) as client:
                status = client.get("/api/demo-data").json()
                users = self.remote.get("users")
        self.assertTrue(status["all_exist"])
        self.assertEqual(sorted(users), ["user_demo_1", "user_demo_2"])


if __name__ == "__main__":
    unittest.main()
