import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from app.core.rate_limit import limiter  # noqa: E402
from app.core.session_store import session_store  # noqa: E402
from app.export.pdf_export import ExportError  # noqa: E402
from app.main import app, run  # noqa: E402
from tests.samples import STRONG_RESUME_TEXT, build_pdf, strong_resume_pdf  # noqa: E402


class AtsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        limiter.reset()
        session_store.reset()

    def _upload(self, content: bytes, file_name: str = "resume.pdf", session_id: str | None = None):
        data = {"session_id": session_id} if session_id else None
        return self.client.post(
            "/v1/ats/upload",
            files={"file": (file_name, content, "application/pdf")},
            data=data,
        )

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_upload_then_session_preview_export_and_delete(self):
        response = self._upload(strong_resume_pdf(), session_id="session-abc123")
        self.assertEqual(response.status_code, 200)
        body = response.json()

        self.assertEqual(body["sessionId"], "session-abc123")
        self.assertEqual(body["document"]["metadata"]["pageCount"], 1)
        self.assertEqual(len(body["analysis"]["categories"]), 7)
        self.assertIsInstance(body["analysis"]["overallScore"], int)
        self.assertIn("rubricVersion", body["analysis"])

        stored = self.client.get("/v1/ats/sessions/session-abc123")
        self.assertEqual(stored.status_code, 200)
        self.assertEqual(stored.json()["analysis"], body["analysis"])

        preview = self.client.get("/v1/ats/sessions/session-abc123/preview")
        self.assertEqual(preview.status_code, 200)
        self.assertEqual(preview.json()["name"], "Jane Doe")
        self.assertIn("contactLines", preview.json())

        export = self.client.get("/v1/ats/sessions/session-abc123/export")
        self.assertEqual(export.status_code, 200)
        self.assertEqual(export.headers["content-type"], "application/pdf")
        self.assertIn("ATS-Optimized-Resume-", export.headers["content-disposition"])
        self.assertTrue(export.content.startswith(b"%PDF"))

        deleted = self.client.delete("/v1/ats/sessions/session-abc123")
        self.assertEqual(deleted.status_code, 204)
        self.assertEqual(self.client.get("/v1/ats/sessions/session-abc123").status_code, 404)

    def test_upload_generates_session_id(self):
        response = self._upload(build_pdf([["Jane Doe", "Skills", "Python, SQL"]]))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["sessionId"])

    def test_upload_rejects_session_id_unusable_for_keyword_match(self):
        response = self._upload(strong_resume_pdf(), session_id="short")
        self.assertEqual(response.status_code, 422)
        self.assertEqual(len(session_store), 0)

        stored = self._upload(strong_resume_pdf(), session_id="abcdefgh")
        self.assertEqual(stored.status_code, 200)
        match = self.client.post(
            "/v1/ats/keyword-match",
            json={"jobDescription": "Python developer with Docker", "sessionId": "abcdefgh"},
        )
        self.assertEqual(match.status_code, 200)

    def test_run_serves_app_with_uvicorn(self):
        with patch("uvicorn.run") as uvicorn_run:
            run()
        args, kwargs = uvicorn_run.call_args
        self.assertEqual(args, ("app.main:app",))
        self.assertIn("port", kwargs)

    def test_upload_rejects_non_pdf_extension(self):
        response = self._upload(b"plain text resume", file_name="resume.txt")
        self.assertEqual(response.status_code, 400)

    def test_upload_rejects_bad_signature(self):
        response = self._upload(b"PK\x03\x04 zipped", file_name="resume.pdf")
        self.assertEqual(response.status_code, 400)

    def test_upload_too_large(self):
        with patch("app.api.v1.ats.settings", SimpleNamespace(max_upload_bytes=1024)):
            response = self._upload(b"%PDF-" + b"0" * 5000)
        self.assertEqual(response.status_code, 413)

    def test_failed_upload_clears_previous_analysis(self):
        first = self._upload(strong_resume_pdf(), session_id="session-reset1")
        self.assertEqual(first.status_code, 200)

        failed = self._upload(b"%PDF-1.4\nbroken", session_id="session-reset1")
        self.assertEqual(failed.status_code, 422)
        self.assertEqual(self.client.get("/v1/ats/sessions/session-reset1").status_code, 404)

    def test_analyze_text_uses_camel_case_contract(self):
        response = self.client.post("/v1/ats/analyze-text", json={"text": STRONG_RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()

        self.assertGreater(body["overallScore"], 70)
        self.assertIn(body["rating"], {"Excellent", "Good"})
        self.assertIsInstance(body["criticalIssues"], list)
        self.assertLessEqual(len(body["improvements"]), 10)
        first = body["categories"][0]
        self.assertEqual(first["id"], "contact")
        self.assertEqual(first["maxScore"], 15)

    def test_analyze_empty_text(self):
        response = self.client.post("/v1/ats/analyze-text", json={"text": ""})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["overallScore"], 0)
        self.assertEqual(len(body["criticalIssues"]), 7)

    def test_analyze_structured_resume(self):
        payload = {
            "template": "professional",
            "personalInfo": {"fullName": "Jane Doe", "email": "jane@example.com", "phone": "555 123 4567"},
            "skills": [{"name": "Python", "level": "advanced"}, {"name": "Docker"}],
            "experience": [
                {
                    "company": "Acme",
                    "position": "Engineer",
                    "startDate": "2020-01",
                    "description": "Developed services handling 2M requests per day for the billing platform.",
                    "highlights": [],
                }
            ],
        }
        response = self.client.post("/v1/ats/analyze-resume", json=payload)
        self.assertEqual(response.status_code, 200)
        categories = {category["id"]: category for category in response.json()["categories"]}
        self.assertEqual(categories["contact"]["score"], 9)
        self.assertEqual(categories["experience"]["score"], 15)

    def test_keyword_match_with_text(self):
        response = self.client.post(
            "/v1/ats/keyword-match",
            json={
                "jobDescription": "Looking for a Python developer with AWS and Docker experience",
                "resumeText": "Experienced Python engineer skilled in Docker",
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["matchPercentage"], 60)
        self.assertEqual(body["matchedKeywords"], ["python", "docker", "experience"])
        self.assertEqual(body["matchLevel"], "moderate")

    def test_keyword_match_with_uploaded_session(self):
        self._upload(strong_resume_pdf(), session_id="session-match1")
        response = self.client.post(
            "/v1/ats/keyword-match",
            json={"jobDescription": "Python Kubernetes Terraform", "sessionId": "session-match1"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("python", body["matchedKeywords"])
        self.assertIn("terraform", body["missingKeywords"])

    def test_keyword_match_requires_resume_source(self):
        response = self.client.post("/v1/ats/keyword-match", json={"jobDescription": "Python developer"})
        self.assertEqual(response.status_code, 422)

    def test_keyword_match_unknown_session(self):
        response = self.client.post(
            "/v1/ats/keyword-match",
            json={"jobDescription": "Python developer", "sessionId": "session-missing"},
        )
        self.assertEqual(response.status_code, 404)

    def test_unknown_session_routes_return_404(self):
        self.assertEqual(self.client.get("/v1/ats/sessions/nope-nope").status_code, 404)
        self.assertEqual(self.client.get("/v1/ats/sessions/nope-nope/preview").status_code, 404)
        self.assertEqual(self.client.get("/v1/ats/sessions/nope-nope/export").status_code, 404)
        self.assertEqual(self.client.delete("/v1/ats/sessions/nope-nope").status_code, 404)

    def test_export_failure_keeps_analysis(self):
        self._upload(strong_resume_pdf(), session_id="session-export1")
        with patch("app.services.ats_service.render_preview_pdf", side_effect=ExportError("raster failed")):
            response = self.client.get("/v1/ats/sessions/session-export1/export")
        self.assertEqual(response.status_code, 500)
        self.assertIn("Export failed", response.json()["detail"])
        self.assertEqual(self.client.get("/v1/ats/sessions/session-export1").status_code, 200)


if __name__ == "__main__":
    unittest.main()
