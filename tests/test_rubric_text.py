import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.parsing.segmenter import build_parsed_document  # noqa: E402
from app.schemas.ats import CategoryId  # noqa: E402
from app.scoring.analyzer import score_categories  # noqa: E402
from app.scoring.categories import category_specs  # noqa: E402
from app.scoring.evidence import EducationEvidence, FormattingEvidence, SkillsEvidence  # noqa: E402
from app.scoring.extractors import TextExtractor, split_experience_entries, split_skill_items  # noqa: E402
from app.scoring.rubric import score_education, score_formatting, score_skills  # noqa: E402
from tests.samples import STRONG_RESUME_TEXT  # noqa: E402


def _by_id(results):
    return {result.id: result for result in results}


class TextRubricTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.specs = {spec.id: spec for spec in category_specs()}

    def test_strong_resume_category_scores(self):
        document = build_parsed_document(STRONG_RESUME_TEXT)
        results = _by_id(score_categories(TextExtractor(document)))

        contact = results[CategoryId.CONTACT]
        self.assertEqual(contact.score, 15)
        self.assertEqual(contact.status, "good")
        self.assertEqual(contact.issues, [])

        summary = results[CategoryId.SUMMARY]
        self.assertEqual(summary.score, 15)
        self.assertEqual(summary.suggestions, [])

        experience = results[CategoryId.EXPERIENCE]
        self.assertEqual(experience.score, 20)
        self.assertEqual(experience.status, "good")

        skills = results[CategoryId.SKILLS]
        self.assertEqual(skills.score, 15)

        education = results[CategoryId.EDUCATION]
        self.assertEqual(education.score, 5)
        self.assertEqual(education.status, "warning")
        self.assertEqual(education.suggestions, [])

        formatting = results[CategoryId.FORMATTING]
        self.assertEqual(formatting.score, 8)
        self.assertIn("Resume content is too brief. Add more detail to your experience", formatting.suggestions)

    def test_results_follow_category_declaration_order(self):
        results = score_categories(TextExtractor(build_parsed_document(STRONG_RESUME_TEXT)))
        self.assertEqual(
            [result.id.value for result in results],
            ["contact", "summary", "experience", "skills", "education", "keywords", "formatting"],
        )
        self.assertEqual(sum(result.max_score for result in results), 100)

    def test_missing_sections_short_circuit(self):
        document = build_parsed_document("Jane Doe\njane@example.com\n(555) 123-4567")
        results = _by_id(score_categories(TextExtractor(document)))

        summary = results[CategoryId.SUMMARY]
        self.assertEqual(summary.score, 0)
        self.assertEqual(summary.status, "error")
        self.assertEqual(summary.issues, ["Professional summary is missing or too short"])
        self.assertEqual(len(summary.suggestions), 1)

        for category_id in (CategoryId.EXPERIENCE, CategoryId.SKILLS, CategoryId.EDUCATION):
            self.assertEqual(results[category_id].score, 0)
            self.assertEqual(len(results[category_id].issues), 1)

        contact = results[CategoryId.CONTACT]
        self.assertEqual(contact.score, 9)
        self.assertIn("Consider adding your location", contact.suggestions)
        self.assertIn("Adding LinkedIn profile increases credibility", contact.suggestions)

    def test_short_summary_counts_as_missing(self):
        document = build_parsed_document("Jane Doe\nSummary\nShort bio.")
        self.assertFalse(TextExtractor(document).summary().present)

    def test_contact_issues_name_missing_fields(self):
        document = build_parsed_document("Jane Doe\nAustin, TX\nSkills\nPython")
        results = _by_id(score_categories(TextExtractor(document)))
        self.assertEqual(
            results[CategoryId.CONTACT].issues,
            ["Email address not found", "Phone number not found"],
        )

    def test_experience_entries_split_on_dated_lines(self):
        section = (
            "Senior Engineer, Acme\n"
            "03/2021 - Present\n"
            "- Led platform team\n"
            "Engineer, Beta\n"
            "June 2018 - 2021\n"
            "Built internal tools for finance"
        )
        entries = split_experience_entries(section)

        self.assertEqual(len(entries), 2)
        self.assertTrue(all(entry.dated for entry in entries))
        self.assertEqual(entries[0].highlights, ["Led platform team"])
        self.assertEqual(entries[1].description, ["Built internal tools for finance"])

    def test_undated_experience_counts_one_entry_and_suggests_dates(self):
        document = build_parsed_document(
            "Jane Doe\nExperience\nBackend developer building payment services for retail clients\n"
            "Maintained the reporting pipeline and on-call rotation"
        )
        results = _by_id(score_categories(TextExtractor(document)))
        experience = results[CategoryId.EXPERIENCE]

        self.assertEqual(experience.score, 5 + 3)
        self.assertIn("Add start and end dates to every role", experience.suggestions)

    def test_education_without_degree_token_only_suggests(self):
        document = build_parsed_document("Jane Doe\nEducation\nState University, graduated 2015 with distinction")
        education = _by_id(score_categories(TextExtractor(document)))[CategoryId.EDUCATION]

        self.assertEqual(education.score, 4)
        self.assertEqual(education.issues, [])
        self.assertEqual(
            education.suggestions,
            ["Ensure degree title is clearly stated", "Consider adding GPA if it's 3.0 or higher"],
        )

    def test_state_codes_and_tool_names_are_not_degrees(self):
        document = build_parsed_document(
            "Jane Doe\nEducation\nState University\nBoston, MA\nBachelor of Science in Biology, 2019\n"
            "Coursework in MS Office"
        )
        evidence = TextExtractor(document).education()
        self.assertEqual(evidence.entry_count, 1)
        self.assertTrue(evidence.degree_token_present)

        education = _by_id(score_categories(TextExtractor(document)))[CategoryId.EDUCATION]
        self.assertEqual(education.score, 4)

    def test_abbreviated_degrees_are_recognized(self):
        document = build_parsed_document(
            "Jane Doe\nEducation\nB.S. Computer Science, State University\nMSc Data Science, Tech Institute\n"
            "MA History, City College"
        )
        self.assertEqual(TextExtractor(document).education().entry_count, 3)

    def test_skill_items_split_on_separators_and_prefixes(self):
        items = split_skill_items("Languages: Python, Go; Rust\nTools: Docker | Git\n• Terraform")
        self.assertEqual(items, ["Python", "Go", "Rust", "Docker", "Git", "Terraform"])

    def test_scores_are_clamped_to_max(self):
        result = score_education(
            EducationEvidence(present=True, entry_count=6, gpa_count=6),
            self.specs[CategoryId.EDUCATION],
        )
        self.assertEqual(result.score, 10)
        self.assertEqual(result.status, "good")

    def test_few_skills_get_minimum_points_and_keyword_hint(self):
        result = score_skills(
            SkillsEvidence(present=True, skill_count=3, keyword_overlap=1),
            self.specs[CategoryId.SKILLS],
        )
        self.assertEqual(result.score, 2)
        self.assertEqual(result.status, "error")
        self.assertIn(
            "Include more industry-standard keywords like: JavaScript, TypeScript, React, Node.js, Python",
            result.suggestions,
        )

    def test_long_resume_formatting_issue(self):
        result = score_formatting(
            FormattingEvidence(present=True, page_count=3, word_count=900, sections_present=6),
            self.specs[CategoryId.FORMATTING],
        )
        self.assertEqual(result.score, 5)
        self.assertEqual(result.issues, ["Resume is 3 pages. ATS prefers 1-2 pages"])
        self.assertIn("Resume may be too long. Consider condensing to the most relevant content", result.suggestions)

    def test_non_ascii_text_loses_points(self):
        plain = TextExtractor(build_parsed_document("Jane Doe\nSkills\nPython")).formatting()
        fancy = TextExtractor(build_parsed_document("Jane Doe\nSkills\n★ Python")).formatting()
        self.assertFalse(plain.has_non_ascii)
        self.assertTrue(fancy.has_non_ascii)

    def test_none_document_is_rejected(self):
        with self.assertRaises(TypeError):
            TextExtractor(None)


if __name__ == "__main__":
    unittest.main()
