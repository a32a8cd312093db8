# Copyright 2024 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Writes the secondary stylesheet, by default a SCSS map of glyph codepoints."""

from absl import logging
import importlib.resources as resources
import jinja2
from pathlib import Path
from typing import Any, Mapping, Optional

from webfontkit.errors import TemplateIOError
from webfontkit.util import abspath


DEFAULT_SCSS_TEMPLATE = resources.files("webfontkit.data") / "scss.jinja"


def stylesheet_context(font_name: str, codepoints: Mapping[str, int]) -> Mapping[str, Any]:
    return {
        "fontName": font_name,
        "codepoints": {name: f"{cp:x}" for name, cp in codepoints.items()},
    }


def read_template(template_file: Path) -> jinja2.Template:
    try:
        source = template_file.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateIOError(f"Unable to read template {template_file}: {e}") from e
    return jinja2.Environment(keep_trailing_newline=True).from_string(source)


def render(context: Mapping[str, Any], template_file: Optional[Path] = None) -> str:
    if template_file is None:
        template_file = DEFAULT_SCSS_TEMPLATE
    return read_template(template_file).render(context)


def write_scss(
    dest: Path,
    font_name: str,
    codepoints: Mapping[str, int],
    template_file: Optional[Path] = None,
):
    content = render(stylesheet_context(font_name, codepoints), template_file)
    dest = abspath(dest)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TemplateIOError(f"Unable to write {dest}: {e}") from e
    logging.info("Wrote %s", dest)
