"""Render a stored resume into the preview HTML used by the editor and the PDF export."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from jinja2 import Environment, select_autoescape
from markupsafe import Markup

from app.schemas.ResumeSchemas import ResumeRecord

# Editing affordances on editable regions; hidden while exporting
DECORATION_CLASSES: Tuple[str, ...] = ("border-dashed", "border-gray-400", "p-2", "focus:ring-1", "focus:ring-primary")

MAIN_SECTIONS: List[Tuple[str, str]] = [
    ("About Me", "aboutMe"),
    ("Projects", "projects"),
    ("Achievements", "achievements"),
]
ASIDE_SECTIONS: List[Tuple[str, str]] = [
    ("Education", "education"),
    ("Technical Skills", "skills"),
    ("Soft Skills", "softSkills"),
]

BASE_STYLES = """
body { margin: 0; background: #f3f4f6; font-family: Helvetica, Arial, sans-serif; }
.resume-preview { background: #fff; color: #000; width: 794px; min-height: 1123px; padding: 32px; box-sizing: border-box; margin: 0 auto; }
.resume-preview header { text-align: center; margin-bottom: 24px; }
.resume-preview h1 { font-size: 30px; font-weight: 700; color: #1f2937; text-transform: uppercase; letter-spacing: 0.05em; margin: 0; }
.resume-preview h3 { font-size: 16px; font-weight: 700; text-transform: uppercase; letter-spacing: 0.05em; color: #374151; margin: 0 0 8px; padding-bottom: 4px; border-bottom: 2px solid #2563eb; }
.resume-preview .text-xs { font-size: 12px; line-height: 1.6; color: #374151; white-space: pre-wrap; }
.resume-preview .links { display: flex; justify-content: center; gap: 16px; margin-top: 8px; }
.resume-preview .links a { font-size: 12px; color: #4b5563; text-decoration: none; }
.resume-preview .grid { display: grid; grid-template-columns: 2fr 1fr; gap: 24px; }
.resume-preview .section { margin-bottom: 16px; }
.resume-preview .border-dashed { border: 1px dashed #9ca3af; border-radius: 6px; }
.resume-preview .p-2 { padding: 8px; }
""".strip()

PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ personal.name or 'Resume' }}</title>
<style>{{ base_styles }}</style>
<style id="custom-styles">{{ custom_css }}</style>
</head>
<body>
<div class="resume-preview" data-resume-id="{{ resume_id }}">
  <header>
    <h1>{{ personal.name }}</h1>
    <div class="text-xs contact">{{ contact_line }}</div>
    {% if links %}
    <div class="links">
      {% for label, href in links %}<a href="{{ href }}" data-link="{{ label }}">{{ href | replace('https://', '') }}</a>{% endfor %}
    </div>
    {% endif %}
  </header>
  <div class="grid">
    <main>
      {% for title, key in main_sections %}{{ section(title, key) }}{% endfor %}
    </main>
    <aside>
      {% for title, key in aside_sections %}{{ section(title, key) }}{% endfor %}
    </aside>
  </div>
</div>
</body>
</html>
"""

SECTION_TEMPLATE = """
<div class="section">
  <h3>{{ title }}</h3>
  <div {% if editable %}contenteditable="true" {% endif %}data-section="{{ key }}" class="{{ classes }}">{{ text }}</div>
</div>"""


def style_block(css: str) -> Markup:
    """CSS is emitted raw inside <style>; only a closing tag could break out of it."""
    return Markup((css or "").replace("</", "<\\/"))


def _get_env() -> Environment:
    return Environment(autoescape=select_autoescape(["html", "xml"], default_for_string=True))


def contact_line(record: ResumeRecord) -> str:
    personal = record.content.personalInfo
    return " | ".join(personal.addressLines + personal.contact.channels())


def safe_link(href: Optional[str]) -> Optional[str]:
    """Only absolute http(s) URLs are rendered as links."""
    if not href:
        return None
    href = href.strip()
    parsed = urlparse(href)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        return None
    return href


def profile_links(record: ResumeRecord) -> List[Tuple[str, str]]:
    """GitHub/LinkedIn links from the structured contact, falling back to the original form values."""
    contact = record.content.personalInfo.contact
    form = record.formValues or {}
    links = []
    github = safe_link(contact.github) or safe_link(form.get("githubLink"))
    linkedin = safe_link(contact.linkedin) or safe_link(form.get("linkedinProfile"))
    if github:
        links.append(("github", github))
    if linkedin:
        links.append(("linkedin", linkedin))
    return links


def render_preview_html(record: ResumeRecord, editable: bool = True) -> str:
    """Render the `.resume-preview` document for a record, with its style override applied."""
    env = _get_env()
    section_template = env.from_string(SECTION_TEMPLATE)
    classes = "text-xs"
    if editable:
        classes = " ".join(("text-xs", "border") + DECORATION_CLASSES)

    content: Dict[str, Any] = record.content.model_dump()

    def section(title: str, key: str):
        return Markup(section_template.render(title=title, key=key, text=content.get(key, ""), editable=editable, classes=classes))

    return env.from_string(PREVIEW_TEMPLATE).render(
        resume_id=record.id,
        personal=record.content.personalInfo,
        contact_line=contact_line(record),
        links=profile_links(record),
        base_styles=style_block(BASE_STYLES),
        custom_css=style_block(record.css),
        main_sections=MAIN_SECTIONS,
        aside_sections=ASIDE_SECTIONS,
        section=section,
    )
