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

"""Default rasterizer: svg glyphs to eot, woff, woff2, ttf and svg fonts.

A rasterizer is any coroutine function taking a GenerationPlan and returning a
RasterResult. This one compiles a TrueType font from the glyphs with ufo2ft
and derives every other format from it.
"""

from absl import logging
import asyncio
from fontTools import ttLib
from io import BytesIO
from pathlib import Path
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping, NamedTuple, Union
import ufo2ft
import ufoLib2

from webfontkit import css, eot, glyphs, svg_font
from webfontkit.config import GenerationPlan
from webfontkit.errors import RasterizationError
from webfontkit.formats import FontFormat


class RasterResult(NamedTuple):
    # keyed by FontFormat; custom rasterizers may use format ids instead
    blobs: Mapping[Union[FontFormat, str], bytes]
    # every glyph, including those the rasterizer assigned a codepoint to
    codepoints: Mapping[str, int]
    # urls by format => stylesheet text
    generate_css: Callable[..., str]


Rasterizer = Callable[[GenerationPlan], Awaitable[RasterResult]]


def _flavored(ttf: bytes, flavor: str) -> bytes:
    ttfont = ttLib.TTFont(BytesIO(ttf))
    ttfont.flavor = flavor
    out = BytesIO()
    ttfont.save(out)
    return out.getvalue()


# A format writer takes (plan, ufo, ttf bytes) and returns the font binary
_FORMAT_WRITERS = {
    FontFormat.TTF: lambda plan, ufo, ttf: ttf,
    FontFormat.WOFF: lambda plan, ufo, ttf: _flavored(ttf, "woff"),
    FontFormat.WOFF2: lambda plan, ufo, ttf: _flavored(ttf, "woff2"),
    FontFormat.EOT: lambda plan, ufo, ttf: eot.ttf_to_eot(ttf),
    FontFormat.SVG: lambda plan, ufo, ttf: svg_font.make_svg_font(plan, ufo),
}
assert _FORMAT_WRITERS.keys() == set(FontFormat)


def _compile_ttf(ufo: ufoLib2.Font) -> bytes:
    ttfont = ufo2ft.compileTTF(ufo)
    out = BytesIO()
    ttfont.save(out)
    return out.getvalue()


def _write_files(plan: GenerationPlan, blobs: Mapping[FontFormat, bytes]):
    dest_dir = plan.dest or Path.cwd()
    dest_dir.mkdir(parents=True, exist_ok=True)
    for fmt, blob in blobs.items():
        dest = dest_dir / f"{plan.font_name}.{fmt.ext}"
        dest.write_bytes(blob)
        logging.info("Wrote %s", dest)


def generate_sync(plan: GenerationPlan) -> RasterResult:
    sources = glyphs.glyph_sources(plan)
    if not sources:
        raise RasterizationError("No files to process")

    ufo = glyphs.build_ufo(plan, sources)
    ttf = _compile_ttf(ufo)
    blobs = {fmt: _FORMAT_WRITERS[fmt](plan, ufo, ttf) for fmt in plan.order}
    logging.info(
        "%s: %d glyphs, %s",
        plan.font_name,
        len(sources),
        ", ".join(f"{fmt} {len(blob)} bytes" for fmt, blob in blobs.items()),
    )

    if plan.write_files:
        _write_files(plan, blobs)

    codepoints = {s.glyph_name: s.codepoint for s in sources}
    return RasterResult(
        MappingProxyType(blobs),
        MappingProxyType(codepoints),
        css.css_generator(plan, codepoints),
    )


async def generate(plan: GenerationPlan) -> RasterResult:
    return await asyncio.to_thread(generate_sync, plan)
