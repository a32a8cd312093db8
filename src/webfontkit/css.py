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

"""The primary stylesheet: @font-face plus one class per glyph."""

import importlib.resources as resources
from typing import Callable, Mapping, Optional, Union

from webfontkit.config import GenerationPlan
from webfontkit.formats import FontFormat
from webfontkit.stylesheet import read_template


DEFAULT_CSS_TEMPLATE = resources.files("webfontkit.data") / "css.jinja"

# Appended to the url of a format in src
_URL_SUFFIX = {
    FontFormat.EOT: "?#iefix",
}

Urls = Mapping[Union[FontFormat, str], str]


def _fallback_url(plan: GenerationPlan, fmt: FontFormat) -> str:
    base = plan.css_fonts_path
    if base and not base.endswith("/"):
        base += "/"
    return f"{base}{plan.font_name}.{fmt.ext}"


def _src(plan: GenerationPlan, urls: Urls) -> str:
    parts = []
    for fmt in plan.order:
        url = urls.get(fmt, urls.get(fmt.format_id))
        if url is None:
            url = _fallback_url(plan, fmt)
        suffix = _URL_SUFFIX.get(fmt, "")
        if fmt is FontFormat.SVG and not url.startswith("data:"):
            suffix = "#" + plan.font_name
        parts.append(f'url("{url}{suffix}") format("{fmt.css_format}")')
    return ",\n\t\t".join(parts)


def css_generator(
    plan: GenerationPlan, codepoints: Mapping[str, int]
) -> Callable[[Optional[Urls]], str]:
    template = read_template(plan.css_template or DEFAULT_CSS_TEMPLATE)

    def generate_css(urls: Optional[Urls] = None) -> str:
        return template.render(
            fontName=plan.font_name,
            src=_src(plan, urls or {}),
            baseSelector=plan.base_selector,
            classPrefix=plan.class_prefix,
            codepoints={name: f"{cp:x}" for name, cp in codepoints.items()},
        )

    return generate_css
