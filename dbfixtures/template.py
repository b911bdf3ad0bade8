"""
Template pre-processing for YAML and CSV fixture files.

Fixture files may embed Jinja2 to generate rows or inject values:

    {% for i in range(1, 1001) %}
    fix_{{ i }}:
      id: {{ i }}
      name: guy_{{ i }}
    {% endfor %}

    created_on: {{ today().strftime("%Y-%m-%d") }}

No bindings are passed in beyond the globals below. Dynamic values make
fixtures unstable, so use them sparingly.
"""

import logging
from datetime import date, datetime, timedelta
from pathlib import Path

import jinja2

from dbfixtures.errors import FormatError

logger = logging.getLogger(__name__)

_env = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)
_env.globals.update(
    date=date,
    datetime=datetime,
    timedelta=timedelta,
    today=date.today,
)


def render_template(text: str, path: str | Path | None = None) -> str:
    """Render *text* as a Jinja2 template.

    Raises FormatError naming *path* on any template error; nothing is
    returned for a template that fails part way.
    """
    try:
        rendered = _env.from_string(text).render()
    except (jinja2.TemplateError, ArithmeticError, LookupError, TypeError, ValueError) as e:
        raise FormatError(f"a template error occurred rendering {path or '<string>'}: {e}") from e
    logger.debug("Rendered %s (%d -> %d chars)", path or "<string>", len(text), len(rendered))
    return rendered
