"""
Tests for the HTTP API.
"""

import unittest

from fastapi.testclient import TestClient

from app.main import app

DUPLICATE_MESSAGE = "❌ มีบทความอื่นใช้หัวข้อนี้แล้ว"


class TestApi(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_analyze_empty_record(self):
        response = self.client.post("/api/analyze", json={"record": {}})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["report"]["score"], 20)
        self.assertFalse(body["ready_to_publish"])
        self.assertEqual(body["status_label"], "ต้องแก้ไข")
        self.assertTrue(any(fix["action"] == "manual" for fix in body["quick_fixes"]))

    def test_analyze_with_existing_titles(self):
        payload = {
            "record": {"id": "me", "title": "Same Title"},
            "existing_titles": {"other": "same title ", "me": "Same Title"},
        }
        body = self.client.post("/api/analyze", json=payload).json()
        self.assertIn(DUPLICATE_MESSAGE, body["report"]["critical_issues"])

    def test_analyze_own_title_not_duplicate(self):
        payload = {"record": {"id": "me", "title": "Same Title"}, "existing_titles": {"me": "Same Title"}}
        body = self.client.post("/api/analyze", json=payload).json()
        self.assertNotIn(DUPLICATE_MESSAGE, body["report"]["critical_issues"])

    def test_analyze_invalid_record(self):
        response = self.client.post("/api/analyze", json={"record": {"has_featured_image": "notabool"}})
        self.assertEqual(response.status_code, 422)

    def test_slug(self):
        response = self.client.post(
            "/api/slug", json={"title": "Hello World", "existing_slugs": ["hello-world"]}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["slug"], "hello-world-1")
        self.assertTrue(body["optimal"])

    def test_extract_keywords(self):
        response = self.client.post("/api/keywords/extract", json={"text": "roof roof shade", "max_keywords": 5})
        self.assertEqual(response.status_code, 200)
        self.assertIn("roof", response.json()["keywords"])

    def test_analyze_keyword(self):
        response = self.client.post(
            "/api/keywords/analyze", json={"content": "Awning " + "word " * 49, "keyword": "awning"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["prominence"], 80)

    def test_config(self):
        body = self.client.get("/api/config").json()
        self.assertEqual(body["title_max"], 70)


if __name__ == '__main__':
    unittest.main()
