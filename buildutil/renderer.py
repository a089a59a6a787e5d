"""
renderer.py

Responsibility: Render a Jinja2 template (from a file or an inline string) into
a new output file.

Rules:
- Parent directories of the output are created as needed (mode 0755).
- The output is created exclusively: an existing file is never overwritten.
- Undefined template variables are errors (StrictUndefined).
- A mapping passed as data becomes the template variables; any other value is
  available as `data`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from jinja2 import BaseLoader, Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from buildutil.errors import RenderError

DIR_MODE = 0o755


def _environment(loader: BaseLoader | None = None) -> Environment:
    return Environment(
        loader=loader,
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _template_vars(data: Any) -> dict[str, Any]:
    if isinstance(data, Mapping):
        return {str(k): v for k, v in data.items()}
    return {"data": data}


def render(template_file: str | Path, output_file: str | Path, output_perm: int, data: Any) -> None:
    """Render the template file `template_file` into `output_file`."""
    tpl_path = Path(template_file)
    try:
        env = _environment(FileSystemLoader(str(tpl_path.parent)))
        template = env.get_template(tpl_path.name)
    except (TemplateError, OSError, UnicodeDecodeError) as e:
        raise RenderError(f"Failed parsing template file {tpl_path}: {e}") from e
    _render(template, Path(output_file), output_perm, data)


def render_string(template_content: str, output_file: str | Path, output_perm: int, data: Any) -> None:
    """Render the template text `template_content` into `output_file`."""
    try:
        template = _environment().from_string(template_content)
    except TemplateError as e:
        raise RenderError(f"Failed parsing template string: {e}") from e
    _render(template, Path(output_file), output_perm, data)


def _render(template: Template, output_file: Path, output_perm: int, data: Any) -> None:
    try:
        text = template.render(_template_vars(data))
    except Exception as e:  # noqa: BLE001 - surface as RenderError
        raise RenderError(f"Failed rendering template into {output_file}: {e}") from e

    try:
        output_file.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise RenderError(f"Cannot create directory {output_file.parent}: {e}") from e

    try:
        fd = os.open(output_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, output_perm)
    except FileExistsError as e:
        raise RenderError(f"Output file already exists: {output_file}") from e
    except OSError as e:
        raise RenderError(f"Cannot create {output_file}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as out:
            out.write(text)
    except (OSError, UnicodeEncodeError) as e:
        raise RenderError(f"Failed writing {output_file}: {e}") from e
