"""
Ready-made HTML renderers

Renderer set for the usual chat-style markup:

- ``{name}`` - placeholder replaced by ``data["name"]``
- ``_text_`` - ``<i>``
- ``*text*`` - ``<b>``
- ``[text](url)`` - ``<a href="url">``, the ``(url)`` part is optional
- ``~text~`` - ``<s>``

Usage:
    from markup_renderer import createRenderer
    from markup_renderer.html_renderers import createHtmlRenderers, renderHtml

    render = createRenderer(createHtmlRenderers())
    renderHtml(render("Hi {firstName}, *welcome*!", {"firstName": "Sergey"}))
    # 'Hi Sergey, <b>welcome</b>!'
"""

import html
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Union

from .types import DelimiterPair, RenderMatchProps, Renderer


@dataclass
class HtmlElement:
    """HTML element built by the renderers of this module."""

    tag: str
    children: List[Any] = field(default_factory=list)
    attributes: Dict[str, str] = field(default_factory=dict)

    def toHtml(self) -> str:
        """Serialize the element, escaping text and attribute values."""
        attrs = "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attributes.items())
        return f"<{self.tag}{attrs}>{renderHtml(self.children)}</{self.tag}>"


def renderHtml(items: Sequence[Union[str, Any]]) -> str:
    """
    Join a render result into an HTML string.

    Strings are escaped, ``HtmlElement`` instances are serialized and any
    other element is converted with ``str`` and escaped.
    """
    chunks = []
    for item in items:
        if isinstance(item, HtmlElement):
            chunks.append(item.toHtml())
        else:
            chunks.append(html.escape(str(item), quote=False))
    return "".join(chunks)


def _renderPlaceholder(props: RenderMatchProps) -> str:
    name = "".join(child for child in props.children if isinstance(child, str)).strip()
    if not props.data:
        return ""
    value = props.data.get(name)
    return "" if value is None else str(value)


def _renderLink(props: RenderMatchProps) -> HtmlElement:
    attributes = {"href": props.endMatches[0]} if props.endMatches else {}
    return HtmlElement("a", props.children, attributes)


def createHtmlRenderers() -> List[Renderer]:
    """
    Build the HTML renderer set, placeholder first.

    Returns:
        Renderer declarations ready for ``createRenderer``
    """
    return [
        Renderer(match=DelimiterPair(start=r"\{", end=r"\}"), renderMatch=_renderPlaceholder),
        Renderer(match="_", renderMatch=lambda props: HtmlElement("i", props.children)),
        Renderer(match=r"\*", renderMatch=lambda props: HtmlElement("b", props.children)),
        Renderer(match=DelimiterPair(start=r"\[", end=r"\](?:\(([^)]+?)\))?"), renderMatch=_renderLink),
        Renderer(match="~", renderMatch=lambda props: HtmlElement("s", props.children)),
    ]
