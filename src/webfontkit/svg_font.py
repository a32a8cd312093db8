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

"""Writes an SVG font, the legacy format still asked for by old WebKit."""

from fontTools.pens.svgPathPen import SVGPathPen
from lxml import etree  # pytype: disable=import-error
from typing import Callable
import ufoLib2

from webfontkit.config import GenerationPlan


_SVG_NS = "http://www.w3.org/2000/svg"
_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)


def _number_formatter(precision: float) -> Callable[[float], str]:
    def ntos(value: float) -> str:
        value = round(value * precision) / precision
        if value == int(value):
            return str(int(value))
        return repr(value)

    return ntos


def _el(parent, tag, **attrib):
    attrib = {k.replace("_", "-"): str(v) for k, v in attrib.items()}
    return etree.SubElement(parent, f"{{{_SVG_NS}}}{tag}", attrib)


def make_svg_font(plan: GenerationPlan, ufo: ufoLib2.Font) -> bytes:
    glyphs = [ufo[name] for name in ufo.glyphOrder if name != ".notdef"]
    ntos = _number_formatter(plan.round)

    root = etree.Element(f"{{{_SVG_NS}}}svg", nsmap={None: _SVG_NS})
    defs = _el(root, "defs")
    font = _el(
        defs,
        "font",
        id=plan.font_name,
        horiz_adv_x=max((g.width for g in glyphs), default=0),
    )
    _el(
        font,
        "font-face",
        font_family=plan.font_name,
        units_per_em=plan.font_height,
        ascent=plan.font_height - plan.descent,
        descent=-plan.descent,
    )
    _el(font, "missing-glyph", horiz_adv_x=0)
    for glyph in glyphs:
        pen = SVGPathPen(ufo, ntos=ntos)
        glyph.draw(pen)
        _el(
            font,
            "glyph",
            glyph_name=glyph.name,
            unicode="".join(chr(u) for u in glyph.unicodes),
            horiz_adv_x=glyph.width,
            d=pen.getCommands(),
        )

    return etree.tostring(
        root, xml_declaration=True, encoding="UTF-8", pretty_print=True, doctype=_DOCTYPE
    )
