from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import jinja2

logger = logging.getLogger(__name__)

# Only `<%= name %>` is meaningful in deployment files. `${CI_VAR}` and
# helm's `{{ .Values }}` must come through untouched, so none of the
# default Jinja delimiters are active.
_ENV = jinja2.Environment(
    loader=jinja2.BaseLoader(),
    variable_start_string="<%=",
    variable_end_string="%>",
    block_start_string="<%",
    block_end_string="%>",
    comment_start_string="<%#",
    comment_end_string="%>",
    line_statement_prefix=None,
    line_comment_prefix=None,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
    autoescape=False,
)


def render_text(text: str, variables: Mapping[str, Any]) -> str:
    """Fill `<%= name %>` placeholders; an unknown name raises UndefinedError."""
    return _ENV.from_string(text).render(**variables)


def render_file(path: str, variables: Mapping[str, Any], *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would render %s", str(p))
        return
    rendered = render_text(p.read_text(encoding="utf-8"), variables)
    p.write_text(rendered, encoding="utf-8")
    logger.debug("Rendered %s", str(p))


def deployment_variables(app_name: str, *, release_prefix: str = "prod-th") -> dict[str, str]:
    release = f"{release_prefix}-{app_name}"
    return {
        "registryName": app_name,
        "projectRepoName": app_name,
        "helmProductionName": release,
        "nameOverride": release,
        "webHttp": f"{release}-http",
    }
