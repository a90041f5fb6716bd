import html
import re
from typing import Dict, Any
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

_IF_BLOCK = re.compile(r'{%\s*if\s+(\w+)\s*%}(.*?){%\s*endif\s*%}', re.DOTALL)
_PLACEHOLDER = re.compile(r'{{\s*(\w+)\s*}}')
_TAG = re.compile(r'<[^>]+>')


class EmailTemplateLoader:
    """Loads the HTML email templates and fills in user supplied values"""

    def __init__(self, template_dir: Path = None):
        self.template_dir = template_dir or Path(__file__).parent.parent / "templates"
        self._template_cache = {}

    def load_template(self, template_name: str) -> str:
        if template_name in self._template_cache:
            return self._template_cache[template_name]

        template_path = self.template_dir / f"{template_name}.html"
        if not template_path.exists():
            logger.error(f"Template not found: {template_path}")
            raise FileNotFoundError(f"Template {template_name}.html not found")

        content = template_path.read_text(encoding="utf-8")
        self._template_cache[template_name] = content
        return content

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render with {% if x %} blocks and escaped {{ x }} placeholders"""
        content = self.load_template(template_name)

        content = _IF_BLOCK.sub(
            lambda m: m.group(2) if context.get(m.group(1).strip()) else "",
            content
        )
        # Report reasons and contact messages are user input
        return _PLACEHOLDER.sub(
            lambda m: html.escape(str(context.get(m.group(1)) or "")),
            content
        )

    def get_text_version(self, html_content: str) -> str:
        """Convert HTML to plain text for the email text part"""
        text = _TAG.sub('', html_content)
        text = html.unescape(text)
        return re.sub(r'\s+', ' ', text).strip()


# Global template loader instance
template_loader = EmailTemplateLoader()
