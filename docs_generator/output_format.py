"""Markup primitives for the two output formats.

Page renderers build pages from these primitives only, so both formats carry
the same information. Arguments named ``text`` are raw text and get escaped;
arguments named ``markup`` are fragments already produced by the format.
"""

import html

NBSP_INDENT = "&nbsp;" * 6


class OutputFormat:
    """Common interface of :class:`MarkdownFormat` and :class:`HtmlFormat`."""

    ext = ""

    def text(self, text: str) -> str:
        raise NotImplementedError

    def link(self, text: str, target: str) -> str:
        raise NotImplementedError

    def title(self, text: str, css_class: str) -> str:
        raise NotImplementedError

    def paragraph(self, text: str, css_class: str) -> str:
        raise NotImplementedError

    def code(self, code: str, css_class: str) -> str:
        raise NotImplementedError

    def list_item(self, markup: str, description: str, css_class: str) -> str:
        raise NotImplementedError

    def list_block(
        self, content: str, title_markup: str, css_class: str, level: int = 0
    ) -> str:
        raise NotImplementedError

    def text_block(self, title: str, text: str, css_class: str) -> str:
        """Render a titled block holding a single description."""
        raise NotImplementedError

    def example(self, title: str, content: str, location: str, css_class: str) -> str:
        raise NotImplementedError

    def details(self, lines: list[tuple[str, str]], css_class: str) -> str:
        """Render the page footer; ``lines`` are ``(suffix, markup)`` rows."""
        raise NotImplementedError

    def index(self, entries: list[tuple[str, str, str]]) -> str:
        """Render the index page from ``(name, target, description)`` rows."""
        raise NotImplementedError


class MarkdownFormat(OutputFormat):
    """Markdown pages: ``#`` headings, fenced php blocks, indented descriptions."""

    ext = "md"

    def text(self, text: str) -> str:
        return text

    def link(self, text: str, target: str) -> str:
        return f"[{text}]({target})"

    def title(self, text: str, css_class: str) -> str:
        return f"# {text}\n\n"

    def paragraph(self, text: str, css_class: str) -> str:
        return f"{text}\n\n" if text else ""

    def code(self, code: str, css_class: str) -> str:
        return f"```php\n{code.rstrip()}\n```\n\n"

    def list_item(self, markup: str, description: str, css_class: str) -> str:
        out = f"##### {markup}\n\n"
        if description:
            out += f"{NBSP_INDENT}{description}\n\n"
        return out

    def list_block(
        self, content: str, title_markup: str, css_class: str, level: int = 0
    ) -> str:
        if not content:
            return ""
        return "#" * level + f"## {title_markup}\n\n{content}"

    def text_block(self, title: str, text: str, css_class: str) -> str:
        return f"## {title}\n\n{NBSP_INDENT}{text}\n\n" if text else ""

    def example(self, title: str, content: str, location: str, css_class: str) -> str:
        return (
            f"**{title}**\n\n"
            + self.code(content, f"{css_class}-content")
            + f"Location: ~{location}\n\n"
        )

    def details(self, lines: list[tuple[str, str]], css_class: str) -> str:
        parts = ["## Details\n\n"]
        parts.extend(f"{markup}\n\n" for _, markup in lines)
        parts.append("---\n\n" + self.link("back to index", "index.md") + "\n\n")
        return "".join(parts)

    def index(self, entries: list[tuple[str, str, str]]) -> str:
        parts = ["## Classes\n\n"]
        for name, target, description in entries:
            parts.append(f"### {self.link(name, target)}\n\n")
            if description:
                parts.append(f"{NBSP_INDENT}{description}\n\n")
        return "".join(parts)


class HtmlFormat(OutputFormat):
    """HTML fragments: ``div``/``pre`` blocks with semantic class names."""

    ext = "html"

    def text(self, text: str) -> str:
        return html.escape(text, quote=False)

    def link(self, text: str, target: str) -> str:
        return f'<a href="{html.escape(target)}">{text}</a>'

    def _div(self, css_class: str, markup: str) -> str:
        return f'<div class="{css_class}">{markup}</div>'

    def title(self, text: str, css_class: str) -> str:
        return self._div(css_class, self.text(text))

    def paragraph(self, text: str, css_class: str) -> str:
        return self._div(css_class, self.text(text)) if text else ""

    def code(self, code: str, css_class: str) -> str:
        return f'<pre class="{css_class}">{self.text(code.rstrip())}</pre>'

    def list_item(self, markup: str, description: str, css_class: str) -> str:
        inner = self._div(f"{css_class}-name", markup)
        if description:
            inner += self._div(f"{css_class}-description", self.text(description))
        return self._div(css_class, inner)

    def list_block(
        self, content: str, title_markup: str, css_class: str, level: int = 0
    ) -> str:
        if not content:
            return ""
        return self._div(
            css_class,
            self._div(f"{css_class}-title", title_markup)
            + self._div(f"{css_class}-content", content),
        )

    def text_block(self, title: str, text: str, css_class: str) -> str:
        if not text:
            return ""
        return self._div(
            css_class,
            self._div(f"{css_class}-title", self.text(title))
            + self._div(f"{css_class}-description", self.text(text)),
        )

    def example(self, title: str, content: str, location: str, css_class: str) -> str:
        return self._div(
            css_class,
            self._div(f"{css_class}-title", self.text(title))
            + self.code(content, f"{css_class}-content")
            + self._div(f"{css_class}-location", self.text(f"Location: ~{location}")),
        )

    def details(self, lines: list[tuple[str, str]], css_class: str) -> str:
        inner = self._div(f"{css_class}-title", "Details")
        for suffix, markup in lines:
            inner += self._div(f"{css_class}-{suffix}", markup)
        inner += self._div(
            f"{css_class}-back-to-index", self.link("back to index", "index.html")
        )
        return self._div(css_class, inner)

    def index(self, entries: list[tuple[str, str, str]]) -> str:
        inner = self._div("page-index-classes-title", "Classes")
        for name, target, description in entries:
            entry = self._div(
                "page-index-class-name", self.link(self.text(name), target)
            )
            if description:
                entry += self._div(
                    "page-index-class-description", self.text(description)
                )
            inner += self._div("page-index-class", entry)
        return self._div("page-index-classes", inner)


OUTPUT_FORMATS: dict[str, type[OutputFormat]] = {
    MarkdownFormat.ext: MarkdownFormat,
    HtmlFormat.ext: HtmlFormat,
}


def get_output_format(name: str) -> OutputFormat:
    """Return the format registered for ``name`` (``md`` or ``html``)."""
    return OUTPUT_FORMATS[name]()
