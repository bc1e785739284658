"""DOM parsing, serialization and queries."""

from tangram.dom import (
    Comment,
    Document,
    Element,
    Text,
    find_all,
    find_by_name,
    parse_html,
    text_content,
    to_document_html,
    to_html,
)


class TestParser:
    def test_nested_elements(self):
        doc = parse_html('<div class="a"><p>Hi <b>there</b></p></div>')
        div = doc.children[0]
        assert isinstance(div, Element)
        assert div.name == "div"
        assert div.attrs == {"class": "a"}
        assert to_html(div) == '<div class="a"><p>Hi <b>there</b></p></div>'

    def test_directive_names_and_attributes(self):
        doc = parse_html('<tg:component name="card" data-userName="x"></tg:component>')
        node = doc.children[0]
        assert node.name == "tg:component"
        assert node.attrs == {"name": "card", "data-username": "x"}

    def test_widget_attribute_names(self):
        doc = parse_html('<p tg:forward-50%+="a" tg:1500="b" :class="c" @click="d"></p>')
        assert list(doc.children[0].attrs) == ["tg:forward-50%+", "tg:1500", ":class", "@click"]

    def test_bare_attribute(self):
        doc = parse_html("<div tg:toggler></div>")
        assert doc.children[0].attrs == {"tg:toggler": ""}

    def test_first_duplicate_attribute_wins(self):
        doc = parse_html('<a href="/one" href="/two"></a>')
        assert doc.children[0].attrs == {"href": "/one"}

    def test_void_elements(self):
        doc = parse_html('<p>a<br>b<img src="x.png"></p>')
        assert to_html(doc) == '<p>a<br>b<img src="x.png"></p>'

    def test_character_references_in_text(self):
        doc = parse_html("<p>&lt;tag&gt; &amp; &#169; &copy;</p>")
        assert to_html(doc) == "<p>&lt;tag&gt; &amp; © ©</p>"
        assert text_content(doc) == "<tag> & © ©"

    def test_attribute_values_unescaped(self):
        doc = parse_html('<a title="Fish &amp; Chips" data-x=\'say "hi"\'></a>')
        assert doc.children[0].attrs == {"title": "Fish & Chips", "data-x": 'say "hi"'}
        assert to_html(doc) == '<a title="Fish &amp; Chips" data-x="say &quot;hi&quot;"></a>'

    def test_attribute_entities_round_trip(self):
        source = '<p title="&amp;lt;b&amp;gt;" data-q="a &amp;&amp; b">x</p>'
        doc = parse_html(source)
        assert doc.children[0].attrs == {"title": "&lt;b&gt;", "data-q": "a && b"}
        assert to_html(doc) == source

    def test_script_content_kept_raw(self):
        source = "<script>if (a < b && c) go();</script>"
        assert to_html(parse_html(source)) == source

    def test_adjacent_text_merged(self):
        doc = parse_html("<p>a</span>b</p>")
        assert doc.children[0].children == [Text("ab")]

    def test_comments(self):
        doc = parse_html("<!-- hello --><p></p>")
        assert isinstance(doc.children[0], Comment)
        assert doc.children[0].data == " hello "

    def test_unmatched_end_tag_dropped(self):
        assert to_html(parse_html("<p>a</span>b</p>")) == "<p>ab</p>"

    def test_unclosed_elements_closed(self):
        assert to_html(parse_html("<div><p>open")) == "<div><p>open</p></div>"

    def test_body_is_ordinary(self):
        doc = parse_html("<body><main></main></body>")
        assert doc.children[0].name == "body"


class TestNodes:
    def test_clone_is_deep(self):
        original = Element("div", {"a": "1"}, [Element("span", {}, [Text("x")])])
        copy = original.clone()
        copy.attrs["a"] = "2"
        copy.children[0].children.append(Text("y"))
        assert original.attrs == {"a": "1"}
        assert to_html(original) == '<div a="1"><span>x</span></div>'

    def test_shallow_copy(self):
        original = Element("div", {"a": "1"}, [Text("x")])
        copy = original.shallow_copy()
        assert copy.children == []
        assert copy.attrs == {"a": "1"}
        assert copy.attrs is not original.attrs


class TestSerializer:
    def test_document(self):
        doc = Document([Element("html", {}, [Element("body")])])
        assert to_document_html(doc) == "<!DOCTYPE html>\n<html><body></body></html>\n"

    def test_node_list(self):
        assert to_html([Text("a"), Element("br"), Text("b")]) == "a<br>b"


class TestQueries:
    def test_find_all_document_order(self):
        doc = parse_html("<div><p id=1><p id=2></p></p></div><p id=3></p>")
        assert [p.get("id") for p in find_all(lambda e: e.name == "p", doc.children)] == [
            "1",
            "2",
            "3",
        ]

    def test_find_by_name(self):
        doc = parse_html("<section><h2>a</h2><h1>b</h1></section>")
        assert text_content(find_by_name("h1", doc.children)) == "b"
        assert find_by_name("h3", doc.children) is None
