"""Tests for line numbering and gutter markup."""

import unittest

from linegutter.annotate.lines import count_lines, number_lines, render_gutter


class TestNumberLines(unittest.TestCase):
    def test_n_newlines_give_n_plus_one_labels(self) -> None:
        for n in (0, 1, 4, 9):
            text = "\n".join(f"line {i}" for i in range(n + 1))
            numbering = number_lines(text)
            self.assertEqual(numbering.line_count, n + 1)
            self.assertEqual(numbering.labels, tuple(range(1, n + 2)))

    def test_empty_text_has_one_label(self) -> None:
        numbering = number_lines("")
        self.assertEqual(numbering.text, "")
        self.assertEqual(numbering.labels, (1,))

    def test_whitespace_only_text_has_one_label(self) -> None:
        self.assertEqual(number_lines("  \n\n\t ").labels, (1,))

    def test_leading_and_trailing_blank_lines_are_trimmed(self) -> None:
        numbering = number_lines("\n\n  a = 1\nb = 2\n\n")
        self.assertEqual(numbering.text, "a = 1\nb = 2")
        self.assertEqual(numbering.labels, (1, 2))

    def test_inner_blank_lines_are_counted(self) -> None:
        self.assertEqual(number_lines("a\n\n\nb").line_count, 4)

    def test_three_line_sample(self) -> None:
        numbering = number_lines("a\nb\nc")
        self.assertEqual(numbering.text, "a\nb\nc")
        self.assertEqual(numbering.labels, (1, 2, 3))


class TestCountLines(unittest.TestCase):
    def test_trailing_newline_adds_empty_segment(self) -> None:
        self.assertEqual(count_lines("a\nb\n"), 3)

    def test_no_newline(self) -> None:
        self.assertEqual(count_lines("abc"), 1)


class TestRenderGutter(unittest.TestCase):
    def test_one_span_per_label(self) -> None:
        html = render_gutter((1, 2, 3), gutter_class="line-number")
        self.assertEqual(
            html,
            '<span class="line-number"><span>1</span><span>2</span><span>3</span></span>',
        )

    def test_custom_class_is_escaped(self) -> None:
        html = render_gutter([1], gutter_class='ln"x')
        self.assertTrue(html.startswith('<span class="ln&quot;x">'))


if __name__ == "__main__":
    unittest.main()
