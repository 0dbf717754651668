"""Helpers for the accumulated per-resume CSS override."""
import logging
import re

import cssutils
from cssutils.css import CSSMediaRule, CSSStyleRule, CSSUnknownRule

logger = logging.getLogger(__name__)

# Model CSS routinely uses properties cssutils does not know; only show critical errors
cssutils.log.setLevel(logging.CRITICAL)

PREVIEW_SELECTOR = ".resume-preview"

# Selectors that address the whole document; they collapse onto the container
ROOT_SELECTORS = ("html", "body", ":root", "*")

# At-rules cssutils does not model that hold no selectors and can pass through
_PASSTHROUGH_AT_RULES = ("@keyframes", "@-webkit-keyframes")


def scope_selector(selector: str, scope: str = PREVIEW_SELECTOR) -> str:
    if re.match(re.escape(scope) + r"(?![\w-])", selector):
        return selector
    if selector in ROOT_SELECTORS:
        return scope
    return f"{scope} {selector}"


def _scope_rules(container, scope: str) -> None:
    for index in reversed(range(len(container.cssRules))):
        rule = container.cssRules[index]
        if isinstance(rule, CSSStyleRule):
            rule.selectorText = ", ".join(scope_selector(s.selectorText, scope) for s in rule.selectorList)
        elif isinstance(rule, CSSMediaRule):
            _scope_rules(rule, scope)
        elif isinstance(rule, CSSUnknownRule) and not rule.cssText.lstrip().lower().startswith(_PASSTHROUGH_AT_RULES):
            # e.g. @supports or @container: nested rules cssutils cannot reach
            logger.warning("Dropping CSS rule that cannot be scoped: %.80s", rule.cssText)
            container.deleteRule(index)


def scope_css(css: str, scope: str = PREVIEW_SELECTOR) -> str:
    """Prefix every selector that is not already under ``scope``.

    Rules nested in @media blocks are scoped too. @import, @font-face, @page
    and @keyframes are kept unchanged; at-rules whose nested rules cannot be
    scoped are dropped. Rules cssutils cannot parse are dropped as well.
    """
    # Never fetch @import targets named in model output
    parser = cssutils.CSSParser(raiseExceptions=False, validate=False, fetcher=lambda url: None)
    sheet = parser.parseString(css or "")
    _scope_rules(sheet, scope)
    return "\n".join(rule.cssText for rule in sheet.cssRules)


def append_css(existing: str, addition: str) -> str:
    """Order-preserving concatenation of style overrides."""
    if not existing:
        return addition
    if not addition:
        return existing
    return existing + "\n" + addition
