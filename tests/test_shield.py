import unittest

from bindify.compiler.shield import Clipping, TemplateShield

DEFAULT_DELIMITERS = [("<%", "%>"), ("{{", "}}")]


class TestTemplateShield(unittest.TestCase):
    def setUp(self) -> None:
        self.shield = TemplateShield(DEFAULT_DELIMITERS)

    def test_masks_every_block(self) -> None:
        shielded, clippings = self.shield.shield("<p>{{ a }}</p><% if (b) { %>{c}<% } %>")
        self.assertEqual(shielded, "<p>bind1ify</p>bind2ify{c}bind3ify")
        self.assertEqual(
            clippings,
            [
                Clipping(mark="bind1ify", text="{{ a }}"),
                Clipping(mark="bind2ify", text="<% if (b) { %>"),
                Clipping(mark="bind3ify", text="<% } %>"),
            ],
        )

    def test_block_spans_lines(self) -> None:
        shielded, clippings = self.shield.shield("<% for x in y:\n  z %>")
        self.assertEqual(shielded, "bind1ify")
        self.assertEqual(clippings[0].text, "<% for x in y:\n  z %>")

    def test_mark_probes_past_collisions(self) -> None:
        document = "<p>bind1ify {{a}}</p>"
        shielded, clippings = self.shield.shield(document)
        self.assertEqual(clippings[0].mark, "bind2ify")
        self.assertEqual(shielded, "<p>bind1ify bind2ify</p>")
        self.assertEqual(TemplateShield.unshield(shielded, clippings), document)

    def test_round_trip_is_identity(self) -> None:
        documents = [
            "",
            "<p>no blocks at all</p>",
            "{{#each items}}<li>{{name}}</li>{{/each}}",
            "{{ {{ nested-looking }} }}",
            "<% a %><% b %>{{c}}<%d%>",
            "unterminated {{ block",
        ]
        for document in documents:
            shielded, clippings = self.shield.shield(document)
            self.assertEqual(TemplateShield.unshield(shielded, clippings), document)

    def test_literal_mark_restored_escaped(self) -> None:
        shielded, clippings = self.shield.shield('<p>{{ a, "b" }}</p>')
        self.assertEqual(clippings[0].literal_mark, "bind1ifyjs")
        restored = TemplateShield.unshield(
            f"{shielded} '{clippings[0].literal_mark}'", clippings
        )
        self.assertEqual(restored, "<p>{{ a, \"b\" }}</p> '{{ a\\x2c &quot;b&quot; }}'")

    def test_no_delimiters_is_pass_through(self) -> None:
        shield = TemplateShield([])
        shielded, clippings = shield.shield("{{a}} <% b %>")
        self.assertEqual(shielded, "{{a}} <% b %>")
        self.assertEqual(clippings, [])

    def test_custom_mark(self) -> None:
        shield = TemplateShield([("[[", "]]")], mark_prefix="x", mark_suffix="x")
        shielded, _ = shield.shield("a [[b]] c")
        self.assertEqual(shielded, "a x1x c")


if __name__ == "__main__":
    unittest.main()
