"""
HTML Renderer for the search bar
Converts the Markdown dropdown preview to a styled HTML page
"""

from __future__ import annotations

from typing import Optional

import markdown

from ..config import settings

THEMES = {
    "light": {"bg": "#ffffff", "fg": "#1f2328", "muted": "#656d76", "accent": "#0969da", "border": "#d0d7de"},
    "dark": {"bg": "#1e1e1e", "fg": "#dcdcdc", "muted": "#9a9a9a", "accent": "#4ea1ff", "border": "#3a3a3a"},
    "minimal": {"bg": "#fafafa", "fg": "#222222", "muted": "#777777", "accent": "#222222", "border": "#e5e5e5"},
}


class HtmlRenderer:
    """HTML renderer with configurable CSS themes"""

    def __init__(
        self,
        theme: Optional[str] = None,
        font_size: Optional[str] = None,
        max_width: Optional[str] = None
    ):
        # Use settings defaults or override with parameters
        self.theme = theme or settings.css_theme
        if self.theme not in THEMES:
            self.theme = "light"
        self.font_size = font_size or settings.html_font_size
        self.max_width = max_width or settings.html_max_width

        self.md = markdown.Markdown(extensions=['tables', 'fenced_code', 'sane_lists'])

    def render(self, markdown_text: str, title: str = "Search", metadata: Optional[dict] = None) -> str:
        """Convert Markdown to styled HTML with optional metadata"""
        self.md.reset()
        html_content = self.md.convert(markdown_text)
        return self._build_html_document(html_content, self._get_css(), title, metadata)

    def _build_html_document(self, content: str, css: str, title: str, metadata: Optional[dict] = None) -> str:
        # Metadata as hidden elements so the host can read session state
        metadata_elements = ""
        if metadata:
            for key, value in metadata.items():
                safe_key = self._escape_html(str(key))
                safe_value = self._escape_html(str(value))
                metadata_elements += f'    <meta name="searchbar-{safe_key}" content="{safe_value}">\n'

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{self._escape_html(title)}</title>
{metadata_elements}    <style>
{css}
    </style>
</head>
<body>
    <article class="searchbar-dropdown theme-{self.theme}">
        {content}
    </article>
</body>
</html>"""

    def _escape_html(self, text: str) -> str:
        """Escape HTML entities"""
        return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")

    def _get_css(self) -> str:
        colors = THEMES[self.theme]
        return f"""
:root {{
    --bg: {colors['bg']};
    --fg: {colors['fg']};
    --muted: {colors['muted']};
    --accent: {colors['accent']};
    --border: {colors['border']};
}}
body {{
    margin: 0;
    background: var(--bg);
    color: var(--fg);
    font: {self.font_size}/1.5 -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
}}
.searchbar-dropdown {{
    max-width: {self.max_width};
    margin: 0 auto;
    padding: 12px 16px;
}}
.searchbar-dropdown h2 {{ font-size: 1.1em; margin: 0 0 8px; }}
.searchbar-dropdown h3 {{
    font-size: 0.8em;
    text-transform: uppercase;
    color: var(--muted);
    border-bottom: 1px solid var(--border);
    margin: 12px 0 4px;
}}
.searchbar-dropdown ul {{ list-style: none; padding: 0; margin: 0; }}
.searchbar-dropdown li {{ padding: 4px 8px; border-radius: 4px; }}
.searchbar-dropdown li:hover {{ background: var(--border); }}
.searchbar-dropdown code {{ color: var(--accent); font-size: 0.85em; }}
"""
