import cssutils
from cssutils.css import CSSMediaRule, CSSStyleRule

from app.services.style_service import append_css, scope_css, scope_selector


def style_rules(css):
    """(selectors, declarations) for every style rule, including those inside @media."""
    rules = []

    def walk(container):
        for rule in container.cssRules:
            if isinstance(rule, CSSStyleRule):
                rules.append(([s.selectorText for s in rule.selectorList], rule.style.cssText))
            elif isinstance(rule, CSSMediaRule):
                walk(rule)

    walk(cssutils.CSSParser(raiseExceptions=False).parseString(css))
    return rules


def all_selectors(css):
    return [sel for selectors, _ in style_rules(css) for sel in selectors]


def test_scope_selector():
    assert scope_selector("h3") == ".resume-preview h3"
    assert scope_selector(".resume-preview h1") == ".resume-preview h1"
    assert scope_selector(".resume-preview-old p") == ".resume-preview .resume-preview-old p"
    assert scope_selector("body") == ".resume-preview"


def test_scope_css_prefixes_plain_selectors():
    assert style_rules(scope_css("h3 { color: blue; }")) == [([".resume-preview h3"], "color: blue")]


def test_scope_css_keeps_already_scoped_rules():
    assert all_selectors(scope_css(".resume-preview h1 { font-weight: 700; }")) == [".resume-preview h1"]


def test_scope_css_handles_selector_lists_and_root_selectors():
    out = scope_css("h3, .text-xs { color: #333; }\nbody { font-family: serif; }")
    assert all_selectors(out) == [".resume-preview h3", ".resume-preview .text-xs", ".resume-preview"]


def test_scope_css_brace_inside_string_cannot_leak_rules():
    out = scope_css('a[title="{"] { color: red; } body { display: none; }')
    rules = style_rules(out)
    assert len(rules) == 2
    assert all(sel.startswith(".resume-preview") for sel in all_selectors(out))
    assert ([".resume-preview"], "display: none") in rules


def test_scope_css_keeps_functional_selectors_whole():
    out = scope_css(":is(h1, h2) { color: red; }")
    assert ".resume-preview h2" not in out
    assert all(sel.startswith(".resume-preview :is(") for sel in all_selectors(out))


def test_scope_css_ignores_braces_in_comments():
    out = scope_css("/* } body { */ h3 { color: blue; }")
    assert all_selectors(out) == [".resume-preview h3"]


def test_scope_css_recurses_into_media_queries():
    out = scope_css("@media print { h3 { color: black; } }")
    assert out.startswith("@media print")
    assert all_selectors(out) == [".resume-preview h3"]


def test_scope_css_drops_rules_it_cannot_scope():
    out = scope_css("@supports (display: grid) { body { display: none; } } h3 { color: blue; }")
    assert "display: none" not in out
    assert all_selectors(out) == [".resume-preview h3"]


def test_scope_css_leaves_other_at_rules_alone():
    css = "@import url(font.css);\n@font-face { font-family: X; src: url(x.woff); }\nh1 { font-family: X; }"
    out = scope_css(css)
    assert "@import" in out
    assert "@font-face" in out
    assert all_selectors(out) == [".resume-preview h1"]


def test_append_css_preserves_order():
    first = ".resume-preview h3 { color: blue; }"
    second = ".resume-preview h1 { color: red; }"
    combined = append_css(append_css("", first), second)
    assert combined.index(first) < combined.index(second)
    assert append_css(first, "") == first
