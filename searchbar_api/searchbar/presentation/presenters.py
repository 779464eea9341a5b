"""
Presenters for the search bar
Convert a rendered dropdown (SearchView) to Markdown for preview pages
"""

from __future__ import annotations

from typing import List

from ..models import ItemKind, SearchView


class BasePresenter:
    """Base presenter with common formatting utilities"""

    def escape_markdown(self, text: str) -> str:
        """Escape markdown special characters"""
        if not text:
            return ""

        chars_to_escape = ['\\', '*', '_', '`', '[', ']', '(', ')', '#', '+', '-', '.', '!', '|']
        for char in chars_to_escape:
            text = text.replace(char, f'\\{char}')

        return text


class OptionsPresenter(BasePresenter):
    """Convert a search view to a Markdown dropdown"""

    def to_markdown(self, view: SearchView) -> str:
        query_display = f" '{view.query}'" if view.query else ""
        markdown: List[str] = [f"## Search{query_display}", ""]

        if view.filters:
            chips = " › ".join(f"`{token}`" for token in view.filters)
            markdown.extend([f"**Filters:** {chips}", ""])

        markdown.extend([f"_{self.escape_markdown(view.placeholder_text)}_", ""])

        if view.placeholder is not None:
            title = self.escape_markdown(view.placeholder.title)
            if view.placeholder.execute:
                markdown.append(f"- **{title}** (`{view.placeholder.execute}`)")
            else:
                markdown.append(f"- *{title}*")
            return "\n".join(markdown)

        for option in view.options:
            title = self.escape_markdown(option.title)
            if option.kind == ItemKind.HEADER:
                markdown.extend(["", f"### {title}"])
            elif option.kind == ItemKind.FILTER:
                markdown.append(f"- 🔽 {title}")
            else:
                line = f"- {title}"
                if option.path_info:
                    line += f" · `{option.path_info}`"
                markdown.append(line)

        return "\n".join(markdown)
