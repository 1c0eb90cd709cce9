import unittest

from bindify.compiler.ast_nodes import Element, Text, link_siblings
from bindify.compiler.codegen import BindingAttacher, compile_chunks
from bindify.compiler.codegen.expression import accessor_call


class TestCompileChunks(unittest.TestCase):
    def test_mixed(self) -> None:
        compiled = compile_chunks(["Hello ", "user.first", "!"])
        self.assertEqual(compiled.expression, "'Hello ' + this.user.first() + '!'")
        self.assertEqual(compiled.placeholder, "Hello {{user.first()}}!")

    def test_lone_expression(self) -> None:
        compiled = compile_chunks(["", "name", ""])
        self.assertEqual(compiled.expression, "this.name()")
        self.assertEqual(compiled.placeholder, "{{name()}}")

    def test_leading_expression_seeds_string(self) -> None:
        compiled = compile_chunks(["", "a", "", "b", ""])
        self.assertEqual(compiled.expression, "'' + this.a() + this.b()")
        self.assertEqual(compiled.placeholder, "{{a()}}{{b()}}")

        compiled = compile_chunks(["", "a", " px"])
        self.assertEqual(compiled.expression, "'' + this.a() + ' px'")

    def test_trailing_expression(self) -> None:
        compiled = compile_chunks(["/users/", "id", ""])
        self.assertEqual(compiled.expression, "'/users/' + this.id()")
        self.assertEqual(compiled.placeholder, "/users/{{id()}}")

    def test_literals_escaped(self) -> None:
        compiled = compile_chunks(["a, \"b\" 'c'\n", "x", ""])
        self.assertEqual(compiled.expression, "'a\\x2c &quot;b&quot; \\'c\\'\\n' + this.x()")
        self.assertNotIn(",", compiled.expression)
        # placeholder keeps the literal as written
        self.assertEqual(compiled.placeholder, "a, \"b\" 'c'\n{{x()}}")

    def test_literal_marks_replace_marks_in_literals_only(self) -> None:
        compiled = compile_chunks(
            ["bind1ify ", "x", ""], literal_marks={"bind1ify": "bind1ifyjs"}
        )
        self.assertEqual(compiled.expression, "'bind1ifyjs ' + this.x()")
        self.assertEqual(compiled.placeholder, "bind1ify {{x()}}")

    def test_output_delimiters(self) -> None:
        compiled = compile_chunks(["", "x", ""], output_delimiters=("<%= ", " %>"))
        self.assertEqual(compiled.placeholder, "<%= x() %>")

    def test_this_not_prefixed_twice(self) -> None:
        self.assertEqual(accessor_call("this.name"), "this.name()")
        self.assertEqual(accessor_call("thisName"), "this.thisName()")


class TestBindingAttacher(unittest.TestCase):
    def setUp(self) -> None:
        self.attacher = BindingAttacher()

    def test_value_attribute(self) -> None:
        element = Element(name="input", attributes={"value": "{name}"})
        self.attacher.attach_attribute(element, "value", ["", "name", ""])
        self.assertEqual(element.attributes, {"value": "{{name()}}", "data-bind": "value:this.name()"})

    def test_style_attribute(self) -> None:
        element = Element(name="div", attributes={"style": "color: {color}"})
        self.attacher.attach_attribute(element, "style", ["color: ", "color", ""])
        self.assertEqual(element.attributes["data-bind"], "css:'color: ' + this.color()")

    def test_other_attribute(self) -> None:
        element = Element(name="a", attributes={"href": "{url}"})
        self.attacher.attach_attribute(element, "href", ["", "url", ""])
        self.assertEqual(element.attributes["data-bind"], "attr(href):this.url()")

    def test_clauses_accumulate(self) -> None:
        element = Element(name="a", attributes={"data-bind": "click: go", "href": "{url}", "title": "{t}"})
        self.attacher.attach_attribute(element, "href", ["", "url", ""])
        self.attacher.attach_attribute(element, "title", ["", "t", ""])
        self.assertEqual(
            element.attributes["data-bind"], "click: go,attr(href):this.url(),attr(title):this.t()"
        )

    def test_existing_trailing_separator(self) -> None:
        element = Element(name="a", attributes={"data-bind": " click: go, ", "href": "{url}"})
        self.attacher.attach_attribute(element, "href", ["", "url", ""])
        self.assertEqual(element.attributes["data-bind"], "click: go,attr(href):this.url()")

    def test_text_qualifiers(self) -> None:
        parent = Element(name="p")
        before = Element(name="b")
        text = Text(data="{x}")
        parent.children = [before, text]
        link_siblings(parent.children, parent)
        self.assertEqual(self.attacher.text_handler(text), "text(next)")

        parent.children = [text]
        link_siblings(parent.children, parent)
        self.assertEqual(self.attacher.text_handler(text), "text(first)")

        after = Element(name="b")
        link_siblings([text, after])
        self.assertEqual(self.attacher.text_handler(text), "text(prev)")

    def test_attach_text_writes_placeholder(self) -> None:
        parent = Element(name="span")
        text = Text(data="Hello {user.first}!")
        parent.children = [text]
        link_siblings(parent.children, parent)
        self.attacher.attach_text(text, parent, ["Hello ", "user.first", "!"])
        self.assertEqual(text.data, "Hello {{user.first()}}!")
        self.assertEqual(
            parent.attributes["data-bind"], "text(first):'Hello ' + this.user.first() + '!'"
        )

    def test_literal_marks_used_when_compiling(self) -> None:
        self.attacher.literal_marks = {"bind1ify": "bind1ifyjs"}
        element = Element(name="a", attributes={"title": "bind1ify{t}"})
        self.attacher.attach_attribute(element, "title", ["bind1ify", "t", ""])
        self.assertEqual(element.attributes["data-bind"], "attr(title):'bind1ifyjs' + this.t()")
        self.assertEqual(element.attributes["title"], "bind1ify{{t()}}")

    def test_custom_binding_attribute(self) -> None:
        attacher = BindingAttacher(binding_attribute="ko-bind")
        element = Element(name="input", attributes={"value": "{v}"})
        attacher.attach_attribute(element, "value", ["", "v", ""])
        self.assertEqual(element.attributes["ko-bind"], "value:this.v()")


if __name__ == "__main__":
    unittest.main()
