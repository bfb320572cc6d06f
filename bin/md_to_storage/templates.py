"""Storage format macro templates.

Built-in templates are defined inline; a templates directory may override
them with ``<name>.xhtml.j2`` files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined

TEMPLATE_SUFFIX = ".xhtml.j2"

CODE_BLOCK_TEMPLATE = (
    '<ac:structured-macro ac:name="code">'
    '{% if language %}<ac:parameter ac:name="language">{{ language | e }}</ac:parameter>{% endif %}'
    '<ac:parameter ac:name="collapse">{{ "true" if collapse else "false" }}</ac:parameter>'
    '{% if theme %}<ac:parameter ac:name="theme">{{ theme | e }}</ac:parameter>{% endif %}'
    '{% if title %}<ac:parameter ac:name="title">{{ title | e }}</ac:parameter>{% endif %}'
    "<ac:plain-text-body><![CDATA[{{ text | cdata }}]]></ac:plain-text-body>"
    "</ac:structured-macro>"
)

BUILTIN_TEMPLATES = {
    "code-block": CODE_BLOCK_TEMPLATE,
}


def cdata(text: str) -> str:
    """Make ``text`` safe to embed in a CDATA section."""
    return str(text).replace("]]>", "]]]]><![CDATA[>")


class MacroLibrary:
    """Render named macro templates into storage format markup."""

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        builtin = DictLoader(
            {name + TEMPLATE_SUFFIX: source for name, source in BUILTIN_TEMPLATES.items()}
        )
        loaders = [builtin]
        if templates_dir is not None:
            loaders.insert(0, FileSystemLoader(str(templates_dir)))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
        )
        self.env.filters["cdata"] = cdata

    def render(self, name: str, **fields: object) -> str:
        template = self.env.get_template(name + TEMPLATE_SUFFIX)
        return template.render(**fields)
