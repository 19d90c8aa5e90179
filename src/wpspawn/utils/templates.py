"""Template rendering utilities."""

import logging
from typing import Any, Dict, Optional

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError


logger = logging.getLogger(__name__)


class StringTemplateLoader(BaseLoader):
    """Template loader for string templates."""

    def __init__(self, template_string: str):
        self.template_string = template_string

    def get_source(self, environment, template):
        return self.template_string, None, lambda: True


def render_template(template_str: str, **context: Any) -> str:
    """Render a Jinja2 template string with given context.

    Undefined variables are errors; shell ``${VAR}`` syntax is left alone.
    """
    try:
        env = Environment(
            loader=StringTemplateLoader(template_str),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        template = env.get_template("")
        return template.render(**context)

    except TemplateError as e:
        logger.error(f"Template rendering error: {e}")
        raise


def merge_labels(base: Optional[Dict[str, str]], override: Dict[str, str]) -> Dict[str, str]:
    """Merge two label sets; keys from ``override`` win."""
    result = dict(base or {})
    result.update(override)
    return result
