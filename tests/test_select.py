"""Tests for code sample selectors."""

import unittest

from linegutter.annotate.select import ALL_CODE, PRE_CODE, selector_for


class TestSelectors(unittest.TestCase):
    def test_all_code_matches_any_nesting(self) -> None:
        self.assertTrue(ALL_CODE.matches("code", []))
        self.assertTrue(ALL_CODE.matches("code", ["html", "body", "p"]))
        self.assertFalse(ALL_CODE.matches("pre", ["html", "body"]))

    def test_pre_code_requires_pre_ancestor(self) -> None:
        self.assertTrue(PRE_CODE.matches("code", ["body", "div", "pre"]))
        self.assertTrue(PRE_CODE.matches("code", ["pre", "div"]))
        self.assertFalse(PRE_CODE.matches("code", ["body", "p"]))

    def test_selector_for_names(self) -> None:
        self.assertIs(selector_for("code"), ALL_CODE)
        self.assertIs(selector_for(" PRE "), PRE_CODE)

    def test_selector_for_unknown(self) -> None:
        with self.assertRaises(ValueError):
            selector_for("div")


if __name__ == "__main__":
    unittest.main()
