"""Link directives: tg:link, tg:links, tg:label and tg:if-current."""

from .conftest import body_of

MARKER = '<span class="inline-block bg-error text-black m-1 py-1 px-2">'

ARTICLES = {
    "articles/a.html": "---\n[main]\nindex = 2\n---\n<h1>Alpha</h1>",
    "articles/b.html": (
        "---\n[main]\nindex = 1\n---\n<h1>Beta</h1>"
        '<tg:insert name="summary"><em>About beta</em></tg:insert>'
    ),
}


class TestLinks:
    """tg:links renders its body once per matching article."""

    def test_links_with_labels(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "pages/index.html": (
                    '<ul><tg:links pattern="*">'
                    '<li><a href="#"><tg:label></tg:label></a></li>'
                    "</tg:links></ul>"
                ),
            }
        )
        assert body_of(site.render("pages/index.html")) == (
            '<ul><li><a href="/articles/a.html">Alpha</a></li>'
            '<li><a href="/articles/b.html">Beta</a></li></ul>'
        )

    def test_links_ordered(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "pages/index.html": (
                    '<tg:links pattern="*" order-by="index:asc">'
                    '<a href="#"><tg:label></tg:label></a></tg:links>'
                ),
            }
        )
        assert body_of(site.render("pages/index.html")) == (
            '<a href="/articles/b.html">Beta</a><a href="/articles/a.html">Alpha</a>'
        )

    def test_article_properties_and_inserts(self, make_site):
        site = make_site(
            {
                "articles/a.html": (
                    '---\n[data]\ncolor = "red"\n---\n<h1>Alpha</h1>'
                    '<tg:insert name="summary"><em>Short</em></tg:insert>'
                ),
                "pages/index.html": (
                    '<tg:links pattern="*"><div class="${color}">'
                    '<tg:slot name="summary"></tg:slot></div></tg:links>'
                ),
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == '<div class="red"><em>Short</em></div>'

    def test_component_body(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "components/item.html": '<li><a href="#"><tg:label></tg:label></a></li>',
                "pages/index.html": '<ul><tg:links pattern="a" component="item"></tg:links></ul>',
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == '<ul><li><a href="/articles/a.html">Alpha</a></li></ul>'

    def test_current_article_uses_fallback(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "articles/_wrapper.html": (
                    '<nav><tg:links pattern="*"><a href="#"><tg:label></tg:label></a>'
                    "<tg:if-current><b><tg:label></tg:label></b></tg:if-current>"
                    "</tg:links></nav><tg:content></tg:content>"
                ),
            }
        )
        body = body_of(site.render("articles/a.html"))
        assert body.startswith('<nav><b>Alpha</b><a href="/articles/b.html">Beta</a></nav>')

    def test_nested_links_is_an_error(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "pages/index.html": (
                    '<tg:links pattern="a"><div><tg:links pattern="*"></tg:links></div></tg:links>'
                ),
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body.startswith("<div>" + MARKER)

    def test_drafts_not_listed(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "articles/c.html": "---\n[main]\ndraft = true\n---\n<h1>Gamma</h1>",
                "pages/index.html": (
                    '<tg:links pattern="*"><i><tg:label></tg:label></i></tg:links>'
                ),
            }
        )
        assert body_of(site.render("pages/index.html")) == "<i>Alpha</i><i>Beta</i>"


class TestLink:
    """tg:link to a single target."""

    NAV = (
        '<tg:link href="/"><a href="#">Home</a><tg:if-current><span>Home</span></tg:if-current>'
        "</tg:link>"
        '<tg:link href="/about.html"><a href="#">About</a>'
        "<tg:if-current><span>About</span></tg:if-current></tg:link>"
    )

    def test_if_current(self, make_site):
        site = make_site(
            {
                "segments/nav.html": self.NAV,
                "pages/index.html": '<tg:segment name="nav"></tg:segment>',
                "pages/about.html": '<tg:segment name="nav"></tg:segment>',
            }
        )
        assert body_of(site.render("pages/index.html")) == (
            '<span>Home</span><a href="/about.html">About</a>'
        )
        assert body_of(site.render("pages/about.html")) == '<a href="/">Home</a><span>About</span>'

    def test_current_without_fallback_renders_nothing(self, make_site):
        site = make_site(
            {"pages/index.html": '<p><tg:link href="/"><a href="#">Home</a></tg:link></p>'}
        )
        assert body_of(site.render("pages/index.html")) == "<p></p>"

    def test_label_from_target_heading(self, make_site):
        site = make_site(
            {
                "pages/about.html": "<h1>About us</h1>",
                "pages/index.html": (
                    '<tg:link href="/about.html"><a href="#"><tg:label></tg:label></a></tg:link>'
                ),
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == '<a href="/about.html">About us</a>'

    def test_label_attribute_wins(self, make_site):
        site = make_site(
            {
                "pages/about.html": "<h1>About us</h1>",
                "pages/index.html": (
                    '<tg:link href="/about.html" label="Who &amp; why">'
                    '<a href="#"><tg:label></tg:label></a></tg:link>'
                ),
            }
        )
        body = body_of(site.render("pages/index.html"))
        assert body == '<a href="/about.html">Who &amp; why</a>'

    def test_pattern_link(self, make_site):
        site = make_site(
            {
                **ARTICLES,
                "pages/index.html": (
                    '<tg:link pattern="*" order-by="index:asc">'
                    '<a href="#"><tg:label></tg:label></a></tg:link>'
                ),
            }
        )
        assert body_of(site.render("pages/index.html")) == '<a href="/articles/b.html">Beta</a>'

    def test_pattern_without_match_is_an_error(self, make_site):
        site = make_site({"pages/index.html": '<tg:link pattern="none/*"></tg:link>'})
        assert body_of(site.render("pages/index.html")).startswith(MARKER)

    def test_link_to_draft_renders_nothing(self, make_site):
        sources = {
            "articles/d.html": "---\n[main]\ndraft = true\n---\n<h1>Draft</h1>",
            "pages/index.html": (
                '<p><tg:link href="/articles/d.html"><a href="#">D</a></tg:link></p>'
            ),
        }
        assert body_of(make_site(sources).render("pages/index.html")) == "<p></p>"
        body = body_of(make_site(sources, build_drafts=True).render("pages/index.html"))
        assert body == '<p><a href="/articles/d.html">D</a></p>'

    def test_plain_anchor_outside_link_is_untouched(self, make_site):
        site = make_site({"pages/index.html": '<a href="#">top</a>'})
        assert body_of(site.render("pages/index.html")) == '<a href="#">top</a>'


class TestLabel:
    def test_label_outside_link_is_an_error(self, make_site):
        site = make_site({"pages/index.html": "<tg:label></tg:label>"})
        assert body_of(site.render("pages/index.html")).startswith(MARKER)
