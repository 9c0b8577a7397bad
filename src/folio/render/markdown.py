"""Markdown to styled HTML for project write-ups.

``ContentRenderer`` wraps a markdown-it-py parser and overrides the render
rules of the block types the site styles: paragraphs, headings (with anchor
ids), images, links, lists, rules, GFM tables and fenced code. Two fence
languages are structured blocks rather than code:

* ``techtable``: YAML describing a :class:`~folio.render.tables.TechTable`.
* ``image`` / ``figure``: YAML describing an :class:`~folio.render.images.ImageSpec`.

A block that fails to parse is logged and omitted; the rest of the document
still renders.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from typing import Any

import yaml
from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token
from pydantic import ValidationError

from folio.config.settings import RenderSettings
from folio.exceptions import InvalidBlockError
from folio.render.images import ImageSpec, build_figure
from folio.render.slugs import heading_slug
from folio.render.tables import TableMode, TechTable, build_table, distribute_column_widths
from folio.render.theme import Theme, palette_for
from folio.templating import TemplateLoader, default_loader

logger = logging.getLogger(__name__)

TECHTABLE_LANGS = frozenset({"techtable"})
FIGURE_LANGS = frozenset({"image", "figure"})

_EXTERNAL_REL = "noopener noreferrer"


def _only_images(children: Sequence[Token] | None) -> bool:
    if not children:
        return False
    has_image = False
    for child in children:
        if child.type == "image":
            has_image = True
        elif child.type == "softbreak" or (child.type == "text" and not child.content.strip()):
            continue
        else:
            return False
    return has_image


def _load_block(kind: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(source) or {}
    except yaml.YAMLError as exc:
        raise InvalidBlockError(kind, str(exc)) from exc
    if not isinstance(data, dict):
        raise InvalidBlockError(kind, f"expected a mapping, got {type(data).__name__}")
    return data


class ContentRenderer:
    """Render Markdown bodies into the site's styled HTML."""

    def __init__(
        self,
        settings: RenderSettings | None = None,
        loader: TemplateLoader | None = None,
    ) -> None:
        self.settings = settings or RenderSettings()
        self.loader = loader or default_loader()
        self.md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])
        self._register_rules()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, content: str, *, theme: Theme | str | None = None, wide_images: bool = False) -> str:
        """Render ``content`` to HTML.

        Args:
            content: Markdown body of a document.
            theme: Colour theme; defaults to the configured theme.
            wide_images: Render every figure full-bleed.

        """
        if not content:
            return ""
        env = {
            "theme": Theme(theme or self.settings.theme),
            "wide_images": wide_images,
            "figure_count": 0,
            "table_count": 0,
        }
        body = self.md.render(content, env)
        return f'<div class="prose" style="text-align: left;">\n{body}</div>\n'

    def render_inline(self, text: str, env: dict[str, Any] | None = None) -> str:
        return self.md.renderInline(text or "", env if env is not None else {})

    def render_table(self, spec: TechTable, *, theme: Theme | str | None = None, block_id: str = "") -> str:
        """Render a parsed tech table, or ``""`` when it has no rows."""
        theme = Theme(theme or self.settings.theme)
        env = {"theme": theme, "wide_images": False, "figure_count": 0, "table_count": 0}
        view = build_table(
            spec,
            theme=theme,
            wide=False,
            widen_factor=self.settings.widen_factor,
            render_cell=lambda text: self.render_inline(text, env),
        )
        if view is None:
            return ""
        wide_widths = None
        if view.mode is TableMode.EXPLICIT:
            wide_widths = distribute_column_widths(
                len(view.headers), spec.widths, widen_center=True, factor=self.settings.widen_factor
            )
        table_id = "tech-table-" + hashlib.sha1(f"{block_id}:{view.header_texts}".encode()).hexdigest()[:10]
        return self.loader.render_template(
            "blocks/tech_table.html.jinja",
            table=view,
            table_id=table_id,
            wide_widths=wide_widths,
            breakpoint=self.settings.wide_breakpoint_px,
        )

    def render_figure(
        self,
        spec: ImageSpec,
        *,
        position: int = 0,
        theme: Theme | str | None = None,
    ) -> str:
        """Render an image as a responsive figure, or ``""`` without a source."""
        palette = palette_for(theme or self.settings.theme)
        figure = build_figure(
            spec,
            position=position,
            caption_color=palette.caption_text,
            log_missing=self.settings.log_missing_images,
        )
        if figure is None:
            return ""
        return self.loader.render_template(
            "blocks/figure.html.jinja",
            figure=figure,
            tablet_breakpoint=self.settings.tablet_breakpoint_px,
            desktop_breakpoint=self.settings.wide_breakpoint_px,
        )

    # ------------------------------------------------------------------
    # markdown-it render rules
    # ------------------------------------------------------------------

    def _register_rules(self) -> None:
        content_renderer = self

        def paragraph_open(self, tokens, idx, options, env):
            inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
            if inline is not None and _only_images(inline.children):
                # Figures are block-level; don't nest them inside <p>.
                tokens[idx].hidden = True
                if idx + 2 < len(tokens):
                    tokens[idx + 2].hidden = True
            else:
                tokens[idx].attrJoin("class", "body-text")
            return self.renderToken(tokens, idx, options, env)

        def heading_open(self, tokens, idx, options, env):
            inline = tokens[idx + 1]
            slug = heading_slug(inline.children or inline.content)
            if slug:
                tokens[idx].attrSet("id", slug)
            tokens[idx].attrJoin("class", "heading-link")
            return self.renderToken(tokens, idx, options, env)

        def heading_close(self, tokens, idx, options, env):
            slug = tokens[idx - 2].attrGet("id")
            anchor = f'<a class="heading-anchor" href="#{slug}" aria-label="Link to this section">#</a>' if slug else ""
            return f"{anchor}{self.renderToken(tokens, idx, options, env)}"

        def image(self, tokens, idx, options, env):
            token = tokens[idx]
            env["figure_count"] = env.get("figure_count", 0) + 1
            spec = ImageSpec(
                src=str(token.attrGet("src") or ""),
                alt=self.renderInlineAsText(token.children or [], options, env),
                title=token.attrGet("title") or None,
                full_page=bool(env.get("wide_images")),
            )
            return content_renderer.render_figure(spec, position=env["figure_count"], theme=env.get("theme"))

        def link_open(self, tokens, idx, options, env):
            token = tokens[idx]
            href = str(token.attrGet("href") or "")
            if href.startswith("/"):
                token.attrJoin("class", "smart-link")
            elif not href.startswith("#"):
                token.attrSet("target", "_blank")
                token.attrSet("rel", _EXTERNAL_REL)
            return self.renderToken(tokens, idx, options, env)

        def list_open(self, tokens, idx, options, env):
            tokens[idx].attrJoin("class", "list")
            return self.renderToken(tokens, idx, options, env)

        def list_item_open(self, tokens, idx, options, env):
            tokens[idx].attrJoin("class", "list-item")
            return self.renderToken(tokens, idx, options, env)

        def code_inline(self, tokens, idx, options, env):
            tokens[idx].attrJoin("class", "inline-code")
            return f"<code{self.renderAttrs(tokens[idx])}>{escapeHtml(tokens[idx].content)}</code>"

        def hr(self, tokens, idx, options, env):
            return '<div class="rule-row" style="display: flex; justify-content: center;"><hr class="rule"></div>\n'

        def table_open(self, tokens, idx, options, env):
            tokens[idx].attrJoin("class", "data-table")
            opening = self.renderToken(tokens, idx, options, env)
            return (
                '<div class="table-wrap" style="overflow-x: auto; margin: 1rem 0; text-align: center;">\n'
                f"{opening}"
            )

        def table_close(self, tokens, idx, options, env):
            return f"{self.renderToken(tokens, idx, options, env)}</div>\n"

        def fence(self, tokens, idx, options, env):
            token = tokens[idx]
            info = token.info.strip()
            language = info.split(maxsplit=1)[0] if info else ""
            lowered = language.lower()
            if lowered in TECHTABLE_LANGS:
                return content_renderer._render_techtable_block(token.content, idx, env)
            if lowered in FIGURE_LANGS:
                return content_renderer._render_figure_block(token.content, env)
            return content_renderer.loader.render_template(
                "blocks/code_block.html.jinja",
                code=token.content,
                language=language,
                label=language[:1].upper() + language[1:] if language else "",
            )

        self.md.add_render_rule("paragraph_open", paragraph_open)
        self.md.add_render_rule("heading_open", heading_open)
        self.md.add_render_rule("heading_close", heading_close)
        self.md.add_render_rule("image", image)
        self.md.add_render_rule("link_open", link_open)
        self.md.add_render_rule("bullet_list_open", list_open)
        self.md.add_render_rule("ordered_list_open", list_open)
        self.md.add_render_rule("list_item_open", list_item_open)
        self.md.add_render_rule("code_inline", code_inline)
        self.md.add_render_rule("hr", hr)
        self.md.add_render_rule("table_open", table_open)
        self.md.add_render_rule("table_close", table_close)
        self.md.add_render_rule("fence", fence)

    def _render_techtable_block(self, source: str, idx: int, env: dict[str, Any]) -> str:
        try:
            spec = TechTable.model_validate(_load_block("techtable", source))
        except ValidationError as exc:
            logger.warning("Skipping techtable block: %s", exc)
            return ""
        except InvalidBlockError as exc:
            logger.warning("Skipping block: %s", exc)
            return ""
        env["table_count"] = env.get("table_count", 0) + 1
        return self.render_table(spec, theme=env.get("theme"), block_id=f"{idx}:{env['table_count']}")

    def _render_figure_block(self, source: str, env: dict[str, Any]) -> str:
        try:
            data = _load_block("image", source)
            if env.get("wide_images"):
                data.setdefault("full_page", data.pop("fullPage", True))
            spec = ImageSpec.model_validate(data)
        except ValidationError as exc:
            logger.warning("Skipping image block: %s", exc)
            return ""
        except InvalidBlockError as exc:
            logger.warning("Skipping block: %s", exc)
            return ""
        env["figure_count"] = env.get("figure_count", 0) + 1
        return self.render_figure(spec, position=env["figure_count"], theme=env.get("theme"))
