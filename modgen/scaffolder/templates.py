"""Jinja2 template rendering for bundle scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``modgen/scaffolder/templates/`` directory and renders them with the
bundle/module parameter map.  Besides rendering it owns the two other file
operations the generator needs: removing a file and copying a static asset.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    UndefinedError,
)

from ..exceptions import RenderError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for bundle scaffolding.

    Templates are looked up by their path relative to the template
    directory (e.g. ``"config/composer.json.j2"``).  Undefined template
    variables are errors, so a missing parameter surfaces as a
    :class:`~modgen.exceptions.RenderError` instead of an empty string.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["snake_case"] = _snake_case_filter
        self.env.filters["php_string"] = _php_string_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Raises:
            RenderError: If the template does not exist or references a
                parameter that is not in *context*.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateNotFound:
            raise RenderError(template_path, "template not found") from None
        except UndefinedError as exc:
            raise RenderError(template_path, f"missing parameter ({exc.message})") from None
        except TemplateError as exc:
            raise RenderError(template_path, str(exc)) from None

    # -- File operations ---------------------------------------------------

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        try:
            _write_file(out, content)
        except OSError as exc:
            raise RenderError(str(out), exc.strerror or str(exc)) from None
        return out

    def remove(self, path: str | Path) -> bool:
        """Delete *path* if it exists.  Returns ``True`` if a file was removed."""
        target = Path(path)
        if not target.exists():
            return False
        try:
            target.unlink()
        except OSError as exc:
            raise RenderError(str(target), exc.strerror or str(exc)) from None
        return True

    def copy(self, asset_path: str, output_path: str | Path) -> Path:
        """Copy a static asset from the template directory to *output_path*."""
        source = self.template_dir / asset_path
        if not source.is_file():
            raise RenderError(asset_path, "asset not found")
        out = Path(output_path)
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, out)
        except OSError as exc:
            raise RenderError(str(out), exc.strerror or str(exc)) from None
        return out


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def _php_string_filter(value: str) -> str:
    """Quote *value* as a single-quoted PHP string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
