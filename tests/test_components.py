"""Components, shared components, segments, slots and inner content."""

from .conftest import body_of

MARKER = '<span class="inline-block bg-error text-black m-1 py-1 px-2">'


def _marker(source: str) -> str:
    escaped = source.replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")
    return f"{MARKER}{escaped}</span>"


class TestComponents:
    """Component embedding."""

    def test_component(self, make_site):
        site = make_site(
            {
                "components/card.html": '<div class="card">Card</div>',
                "pages/index.html": '<tg:component name="card"></tg:component>',
            }
        )
        assert body_of(site.render("pages/index.html")) == '<div class="card">Card</div>'

    def test_inner_content(self, make_site):
        site = make_site(
            {
                "components/box.html": "<section><tg:content></tg:content></section>",
                "pages/index.html": '<tg:component name="box"><p>Inner</p></tg:component>',
            }
        )
        assert body_of(site.render("pages/index.html")) == "<section><p>Inner</p></section>"

    def test_inner_content_uses_caller_properties(self, make_site):
        site = make_site(
            {
                "components/box.html": (
                    '---\n[main]\nwho = "component"\n---\n'
                    "<section><tg:content></tg:content></section>"
                ),
                "pages/index.html": (
                    '---\n[main]\nwho = "page"\n---\n'
                    '<tg:component name="box"><tg:prop name="who"></tg:prop></tg:component>'
                ),
            }
        )
        assert body_of(site.render("pages/index.html")) == "<section>page</section>"

    def test_content_outside_embedding_is_an_error(self, make_site):
        site = make_site({"pages/index.html": "<tg:content></tg:content>"})
        assert body_of(site.render("pages/index.html")) == _marker("<tg:content></tg:content>")

    def test_component_front_matter(self, make_site):
        site = make_site(
            {
                "components/badge.html": (
                    '---\n[main]\nlabel = "New"\n---\n<span><tg:prop name="label"></tg:prop></span>'
                ),
                "pages/index.html": '<tg:component name="badge"></tg:component>',
            }
        )
        assert body_of(site.render("pages/index.html")) == "<span>New</span>"

    def test_data_attributes(self, make_site):
        site = make_site(
            {
                "components/badge.html": (
                    '<span class="badge-${color}"><tg:data name="color"></tg:data></span>'
                ),
                "pages/index.html": '<tg:component name="badge" data-color="red"></tg:component>',
            }
        )
        assert body_of(site.render("pages/index.html")) == '<span class="badge-red">red</span>'

    def test_nested_components(self, make_site):
        site = make_site(
            {
                "components/outer.html": '<div><tg:component name="inner"></tg:component></div>',
                "components/inner.html": "<b>in</b>",
                "pages/index.html": '<tg:component name="outer"></tg:component>',
            }
        )
        assert body_of(site.render("pages/index.html")) == "<div><b>in</b></div>"

    def test_same_component_twice_is_not_a_cycle(self, make_site):
        site = make_site(
            {
                "components/dot.html": "<i>.</i>",
                "pages/index.html": (
                    '<tg:component name="dot"></tg:component><tg:component name="dot"></tg:component>'
                ),
            }
        )
        assert body_of(site.render("pages/index.html")) == "<i>.</i><i>.</i>"


class TestCycles:
    """Self-reentrant embedding terminates with one marker."""

    def test_circular_components(self, make_site):
        site = make_site(
            {
                "components/a.html": '<div class="a"><tg:component name="b"></tg:component></div>',
                "components/b.html": '<div class="b"><tg:component name="a"></tg:component></div>',
                "pages/circular_reference.html": '<tg:component name="a"></tg:component>',
            }
        )
        body = body_of(site.render("pages/circular_reference.html"))
        assert body == (
            '<div class="a"><div class="b">'
            + _marker('<tg:component name="a"></tg:component>')
            + "</div></div>"
        )
        assert body.count(MARKER) == 1

    def test_self_referencing_segment(self, make_site):
        site = make_site(
            {
                "segments/loop.html": '<p>loop</p><tg:segment name="loop"></tg:segment>',
                "pages/index.html": '<tg:segment name="loop"></tg:segment>',
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == "<p>loop</p>" + _marker('<tg:segment name="loop"></tg:segment>')

    def test_self_referencing_shared_component(self, make_site):
        site = make_site(
            {
                "shared_components/s.html": (
                    '<p>s</p><tg:shared-component name="s"></tg:shared-component>'
                ),
                "pages/index.html": '<tg:shared-component name="s"></tg:shared-component>',
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body.count(MARKER) == 1


class TestSharedComponents:
    """Shared components are self-contained."""

    def test_shared_component(self, make_site):
        site = make_site(
            {
                "shared_components/logo.html": "<img src=/logo.svg>",
                "pages/index.html": '<tg:shared-component name="logo"></tg:shared-component>',
            }
        )
        assert body_of(site.render("pages/index.html")) == '<img src="/logo.svg">'

    def test_shared_component_cannot_embed_component(self, make_site):
        site = make_site(
            {
                "components/c.html": "<b>c</b>",
                "shared_components/s.html": '<div><tg:component name="c"></tg:component></div>',
                "pages/index.html": '<tg:shared-component name="s"></tg:shared-component>',
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == "<div>" + _marker('<tg:component name="c"></tg:component>') + "</div>"

    def test_missing_shared_component(self, make_site):
        site = make_site({"pages/index.html": '<tg:shared-component name="x"></tg:shared-component>'})
        body = body_of(site.render("pages/index.html"))
        assert body == _marker('<tg:shared-component name="x"></tg:shared-component>')


class TestSegments:
    """Segments are legal only in pages, layouts, wrappers and segments."""

    def test_segment_in_page(self, make_site):
        site = make_site(
            {
                "segments/hero.html": "<header>Hero</header>",
                "pages/index.html": '<tg:segment name="hero"></tg:segment>',
            }
        )
        assert body_of(site.render("pages/index.html")) == "<header>Hero</header>"

    def test_segment_in_component_is_an_error(self, make_site):
        site = make_site(
            {
                "segments/hero.html": "<header>Hero</header>",
                "components/c.html": '<div><tg:segment name="hero"></tg:segment></div>',
                "pages/index.html": '<tg:component name="c"></tg:component>',
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == "<div>" + _marker('<tg:segment name="hero"></tg:segment>') + "</div>"


class TestSlots:
    """Named inserts fill slots; defaults apply otherwise."""

    SOURCES = {
        "components/card.html": (
            '<div><tg:slot name="title"><span>Default</span></tg:slot>'
            "<tg:content></tg:content></div>"
        ),
    }

    def test_default_children(self, make_site):
        site = make_site(
            {**self.SOURCES, "pages/index.html": '<tg:component name="card"></tg:component>'}
        )
        assert body_of(site.render("pages/index.html")) == "<div><span>Default</span></div>"

    def test_insert_replaces_default(self, make_site):
        site = make_site(
            {
                **self.SOURCES,
                "pages/index.html": (
                    '<tg:component name="card">'
                    '<tg:insert name="title"><b>Custom</b></tg:insert>'
                    "<p>Body</p>"
                    "</tg:component>"
                ),
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == "<div><b>Custom</b><p>Body</p></div>"
        assert "Default" not in body
