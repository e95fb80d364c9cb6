import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.parsing.models import SECTION_NAMES  # noqa: E402
from app.parsing.segmenter import (  # noqa: E402
    build_parsed_document,
    is_section_header,
    match_section_header,
    segment,
)


class SectionSegmenterTests(unittest.TestCase):
    def test_text_without_headers_stays_in_contact_block(self):
        lines = [f"line {index}" for index in range(1, 13)]
        text = "\n\n".join(lines)

        sections = segment(text)

        # Blank separators count toward the ten-line window.
        self.assertEqual(sections.contact, "\n".join(lines[:5]))
        for name in SECTION_NAMES:
            if name != "contact":
                self.assertEqual(sections.get(name), "")

    def test_work_experience_header_collects_following_lines(self):
        text = (
            "Jane Doe\n"
            "jane@example.com\n"
            "WORK EXPERIENCE\n"
            "- Built billing APIs\n"
            "- Shipped onboarding flow\n"
            "Education\n"
            "BS Computer Science, State University"
        )

        sections = segment(text)

        self.assertEqual(sections.contact, "Jane Doe\njane@example.com")
        self.assertEqual(sections.experience, "- Built billing APIs\n- Shipped onboarding flow")
        self.assertEqual(sections.education, "BS Computer Science, State University")
        self.assertEqual(sections.skills, "")

    def test_headers_tolerate_case_whitespace_and_decoration(self):
        self.assertEqual(match_section_header("professional   summary"), ("summary", ""))
        self.assertEqual(match_section_header("SKILLS:"), ("skills", ""))
        self.assertEqual(match_section_header("Work History --"), ("experience", ""))
        self.assertEqual(match_section_header("Awards"), ("achievements", ""))
        self.assertEqual(match_section_header("Key Projects"), ("projects", ""))
        self.assertEqual(match_section_header("Licenses"), ("certifications", ""))

    def test_inline_header_content_is_kept(self):
        sections = segment("Jane Doe\nSkills: Python, SQL, Docker\nEducation\nMBA, Business School")
        self.assertEqual(sections.skills, "Python, SQL, Docker")
        self.assertEqual(sections.education, "MBA, Business School")

    def test_sentences_starting_with_header_words_are_content(self):
        self.assertFalse(is_section_header("Experienced engineer with a focus on APIs"))
        self.assertFalse(is_section_header("Education technology startup founder"))
        self.assertIsNone(match_section_header(""))

    def test_repeated_header_appends_to_section(self):
        sections = segment("Jane\nSkills\nPython\nEducation\nBS Math\nSkills\nDocker")
        self.assertEqual(sections.skills, "Python\nDocker")

    def test_contact_block_capped_and_orphan_lines_dropped(self):
        lines = [f"contact line {index}" for index in range(1, 13)]
        sections = segment("\n".join(lines + ["Skills", "Python, SQL"]))

        self.assertEqual(sections.contact.split("\n"), lines[:10])
        self.assertNotIn("contact line 11", sections.contact)
        self.assertEqual(sections.skills, "Python, SQL")

    def test_contact_window_is_ten_raw_lines(self):
        sections = segment("A\n\nB\n\nC\n\nD\n\nE\n\nF\n\nG")
        self.assertEqual(sections.contact, "A\nB\nC\nD\nE")

    def test_header_after_blank_lines_in_window_starts_section(self):
        sections = segment("Jane Doe\n\njane@example.com\n\n\nSkills\nPython, SQL")
        self.assertEqual(sections.contact, "Jane Doe\njane@example.com")
        self.assertEqual(sections.skills, "Python, SQL")

    def test_blank_lines_do_not_end_a_section(self):
        sections = segment("Jane\nSummary\nFirst sentence.\n\n\nSecond sentence.\nSkills\nGo")
        self.assertEqual(sections.summary, "First sentence.\nSecond sentence.")

    def test_build_parsed_document_metadata(self):
        document = build_parsed_document("Jane Doe\nSkills\nPython SQL", page_count=2, file_name="cv.pdf")

        self.assertEqual(document.metadata.page_count, 2)
        self.assertEqual(document.metadata.word_count, 5)
        self.assertEqual(document.metadata.file_name, "cv.pdf")
        self.assertEqual(document.sections.skills, "Python SQL")

    def test_empty_text_gives_empty_sections(self):
        document = build_parsed_document("")
        self.assertEqual(document.metadata.word_count, 0)
        self.assertEqual(document.metadata.page_count, 1)
        self.assertEqual(document.sections.non_empty_count(), 0)


if __name__ == "__main__":
    unittest.main()
