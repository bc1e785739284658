"""Media directives: tg:symbol, tg:animation, tg:app and tg:plugin."""

from tangram import Element, SymbolTable
from tangram.renderer.media import font_variation_settings, symbol_classes

from .conftest import body_of

MARKER = '<span class="inline-block bg-error text-black m-1 py-1 px-2">'


def _render(make_site, source: str, **extra) -> str:
    site = make_site({"pages/index.html": source, **extra})
    return body_of(site.render("pages/index.html"))


class TestSymbol:
    def test_symbol(self, make_site):
        body = _render(make_site, '<tg:symbol name="star" fill="1"></tg:symbol>')
        assert body == (
            '<span class="material-symbols-outlined" '
            "style=\"font-variation-settings: 'FILL' 1\">&#xe838;</span>"
        )

    def test_symbol_style_variant(self, make_site):
        body = _render(make_site, '<tg:symbol name="home" symbol-style="rounded-bold"></tg:symbol>')
        assert body == (
            '<span class="material-symbols-rounded material-symbols-rounded-bold">&#xe88a;</span>'
        )

    def test_unknown_symbol_is_an_error(self, make_site):
        body = _render(make_site, '<tg:symbol name="no-such-glyph"></tg:symbol>')
        assert body.startswith(MARKER)

    def test_invalid_axes_dropped(self):
        node = Element("tg:symbol", {"fill": "3", "wght": "700", "grad": "-25", "opsz": "30"})
        assert font_variation_settings(node) == "font-variation-settings: 'wght' 700, 'GRAD' -25"

    def test_no_axes(self):
        assert font_variation_settings(Element("tg:symbol", {"fill": "x"})) is None

    def test_symbol_classes(self):
        assert symbol_classes("sharp") == "material-symbols-sharp"


class TestSymbolTable:
    def test_bundled_table(self, symbols):
        assert symbols.codepoint("search") == "e8b6"
        assert "star" in symbols
        assert len(symbols) > 3

    def test_parse(self):
        table = SymbolTable.parse("star E838\n\nbroken\nhome e88a extra\n")
        assert table.codepoint("star") == "e838"
        assert table.codepoint("home") == "e88a"
        assert table.codepoint("broken") is None
        assert table.codepoint(None) is None


class TestAnimation:
    def test_canvas(self, make_site):
        body = _render(
            make_site,
            '<tg:animation src="/a.json" loop="yes" autoplay="true" click="false" '
            'class="w-8" width="80"></tg:animation>',
        )
        assert body == (
            '<canvas data-animation="lottie" data-src="/a.json" data-autoplay="true" '
            'data-click="false" class="w-8" width="80"></canvas>'
        )

    def test_missing_src_is_an_error(self, make_site):
        assert _render(make_site, "<tg:animation></tg:animation>").startswith(MARKER)


class TestApp:
    SITE = '[[apps]]\nname = "calc"\ndisplay-name = "Calc & Co"\n\n[[apps]]\nname = "plain"\n'

    def test_app_placeholder(self, make_site):
        body = _render(make_site, '<tg:app name="calc"></tg:app>', **{"site.toml": self.SITE})
        assert body.startswith('<div style="width: 100%; height: 300px;')
        assert body.endswith(">Calc &amp; Co</div></div>")

    def test_display_name_defaults_to_name(self, make_site):
        body = _render(make_site, '<tg:app name="plain"></tg:app>', **{"site.toml": self.SITE})
        assert body.endswith(">plain</div></div>")

    def test_unknown_app_is_an_error(self, make_site):
        body = _render(make_site, '<tg:app name="nope"></tg:app>', **{"site.toml": self.SITE})
        assert body.startswith(MARKER)


class TestPlugin:
    def test_hubspot(self, make_site):
        body = _render(
            make_site,
            '<div><tg:plugin name="hubspot" portal-id="123" form-id="abc"></tg:plugin></div>',
        )
        assert body == (
            '<div><script charset="utf-8" type="text/javascript" '
            'src="//js.hsforms.net/forms/embed/v2.js"></script>'
            '<script>hbspt.forms.create({portalId: "123", formId: "abc"});</script></div>'
        )

    def test_hubspot_values_cannot_close_script(self, make_site):
        body = _render(
            make_site,
            '<tg:plugin name="hubspot" portal-id="</script>" form-id="x"></tg:plugin>',
        )
        assert 'hbspt.forms.create({portalId: "<\\/script>", formId: "x"});</script>' in body
