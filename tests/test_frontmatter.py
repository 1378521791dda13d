"""
tests/test_frontmatter.py

Unit tests for lessonhub/utils/frontmatter.py.

Covers:
  1. Documents with a decodable block -> metadata + trimmed body.
  2. Missing, unterminated, or undecodable blocks -> no metadata, raw body.
  3. Reconstructing a parsed document and re-parsing yields the same fields.
"""

import unittest

import yaml

from lessonhub.schemas.lesson import LessonMetadata
from lessonhub.utils.frontmatter import parse_front_matter


# ---------------------------------------------------------------------------
# 1. Decodable front matter
# ---------------------------------------------------------------------------

class TestParseFrontMatter(unittest.TestCase):

    def test_all_recognised_keys(self):
        text = (
            "---\n"
            "title: Intro\n"
            "description: First steps\n"
            "week: 3\n"
            "section: section1-html-css\n"
            "---\n"
            "\n# Heading\n\nBody text\n"
        )
        metadata, body = parse_front_matter(text)

        self.assertIsNotNone(metadata)
        self.assertEqual(metadata.title, "Intro")
        self.assertEqual(metadata.description, "First steps")
        self.assertEqual(metadata.week, 3)
        self.assertEqual(metadata.section, "section1-html-css")
        self.assertEqual(body, "# Heading\n\nBody text")

    def test_missing_keys_default_to_empty(self):
        metadata, body = parse_front_matter("---\ntitle: Only title\n---\nBody")
        self.assertEqual(metadata.title, "Only title")
        self.assertEqual(metadata.week, 0)
        self.assertEqual(metadata.section, "")
        self.assertEqual(body, "Body")

    def test_unknown_keys_are_ignored(self):
        metadata, _ = parse_front_matter("---\ntitle: T\ntags: [a, b]\ndraft: true\n---\nx")
        self.assertEqual(metadata.title, "T")

    def test_empty_block_is_empty_metadata(self):
        metadata, body = parse_front_matter("---\n---\nBody here\n")
        self.assertIsNotNone(metadata)
        self.assertEqual(metadata.title, "")
        self.assertEqual(body, "Body here")

    def test_numeric_title_is_coerced_to_string(self):
        metadata, _ = parse_front_matter("---\ntitle: 2024\n---\nx")
        self.assertEqual(metadata.title, "2024")

    def test_body_keeps_later_horizontal_rules(self):
        metadata, body = parse_front_matter("---\nweek: 2\n---\nPart one\n\n---\n\nPart two")
        self.assertEqual(metadata.week, 2)
        self.assertEqual(body, "Part one\n\n---\n\nPart two")


# ---------------------------------------------------------------------------
# 2. Degrades to "no front matter"
# ---------------------------------------------------------------------------

class TestParseFrontMatterFallbacks(unittest.TestCase):

    def test_no_leading_delimiter(self):
        text = "# Title\n\n---\ntitle: nope\n---\n"
        metadata, body = parse_front_matter(text)
        self.assertIsNone(metadata)
        self.assertEqual(body, text)

    def test_unterminated_block(self):
        text = "---\ntitle: Broken\n"
        metadata, body = parse_front_matter(text)
        self.assertIsNone(metadata)
        self.assertEqual(body, text)

    def test_invalid_yaml(self):
        text = "---\ntitle: [unclosed\n---\nBody"
        metadata, body = parse_front_matter(text)
        self.assertIsNone(metadata)
        self.assertEqual(body, text)

    def test_non_mapping_block(self):
        text = "---\n- a\n- b\n---\nBody"
        metadata, body = parse_front_matter(text)
        self.assertIsNone(metadata)
        self.assertEqual(body, text)

    def test_non_integer_week(self):
        text = "---\nweek: three\n---\nBody"
        metadata, body = parse_front_matter(text)
        self.assertIsNone(metadata)
        self.assertEqual(body, text)

    def test_empty_document(self):
        metadata, body = parse_front_matter("")
        self.assertIsNone(metadata)
        self.assertEqual(body, "")


# ---------------------------------------------------------------------------
# 3. Round trip
# ---------------------------------------------------------------------------

class TestFrontMatterRoundTrip(unittest.TestCase):

    def _render(self, metadata: LessonMetadata, body: str) -> str:
        block = yaml.safe_dump(metadata.model_dump(), sort_keys=False, allow_unicode=True)
        return f"---\n{block}---\n\n{body}\n"

    def test_reparse_yields_same_fields(self):
        documents = [
            "---\ntitle: Intro\nweek: 1\n---\n# Intro\n\nHello",
            "---\ntitle: 'Colons: everywhere'\ndescription: \"Quotes \\\"inside\\\"\"\nweek: 12\nsection: s\n---\nBody",
            "---\ntitle: Ünïcode\nweek: 7\n---\n\n\n  Indented body  \n\n",
        ]
        for text in documents:
            with self.subTest(text=text):
                metadata, body = parse_front_matter(text)
                self.assertIsNotNone(metadata)

                again_metadata, again_body = parse_front_matter(self._render(metadata, body))
                self.assertEqual(again_metadata, metadata)
                self.assertEqual(again_body, body)


if __name__ == "__main__":
    unittest.main()
