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

"""Draws svg glyph sources into a UFO, one glyph per file.

Each viewBox is mapped onto the em: flipped so y grows up, scaled to the font
height and shifted down by the descent. Without normalize every glyph gets the
same scale, that of the tallest viewBox, so relative sizes survive.
"""

from absl import logging
import itertools
from fontTools.pens.basePen import AbstractPen
from fontTools.pens.boundsPen import ControlBoundsPen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.transformPen import TransformPen
from lxml import etree  # pytype: disable=import-error
from pathlib import Path
from picosvg.geometric_types import Rect
from picosvg.svg import SVG
from picosvg.svg_transform import Affine2D
from picosvg.svg_types import SVGPath
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence
import ufoLib2

from webfontkit.config import GenerationPlan
from webfontkit.errors import RasterizationError


class GlyphSource(NamedTuple):
    filename: Path
    glyph_name: str
    codepoint: int
    svg: SVG  # picosvg


_SVG_CMD_TO_PEN_METHOD = {
    "M": "moveTo",
    "L": "lineTo",
    "C": "curveTo",
    "Q": "qCurveTo",
    "Z": "closePath",
}


def draw_svg_path(
    path: SVGPath, pen: AbstractPen, transform: Optional[Affine2D] = None
):
    """Draw SVGPath using a FontTools Segment Pen."""
    if transform is not None:
        pen = TransformPen(pen, transform)

    # In SVG sub-paths are implicitly open when they don't end with "Z"; in FT pens
    # the end of each sub-path must be marked explicitly with either pen.endPath()
    # for open paths or closePath() for closed ones.
    closed = True
    for cmd, args in path.as_cmd_seq():
        if cmd == "M":
            if not closed:
                pen.endPath()
            closed = False

        # pens expect args as 2-tuples; we use the 'grouper' itertools recipe
        assert len(args) % 2 == 0
        points = itertools.zip_longest(*([iter(args)] * 2))

        getattr(pen, _SVG_CMD_TO_PEN_METHOD[cmd])(*points)

        if cmd == "Z":
            closed = True

    if not closed:
        pen.endPath()


def assign_codepoints(
    glyph_names: Sequence[str], fixed: Mapping[str, int], start: int
) -> Dict[str, int]:
    """Fixed codepoints are kept, the rest count up from start skipping used."""
    used = set(fixed.values())
    result = {}
    next_codepoint = start
    for name in glyph_names:
        if name in fixed:
            result[name] = fixed[name]
            continue
        while next_codepoint in used:
            next_codepoint += 1
        result[name] = next_codepoint
        used.add(next_codepoint)
    return result


def _parse(svg_file: Path) -> SVG:
    try:
        return SVG.parse(str(svg_file)).topicosvg()
    except (OSError, ValueError, etree.ParseError) as e:
        raise RasterizationError(f"Unable to parse {svg_file}: {e}") from e


def glyph_sources(plan: GenerationPlan) -> List[GlyphSource]:
    names_by_file = {}
    for svg_file in plan.files:
        if svg_file in names_by_file:
            logging.warning("%s listed more than once, using the first", svg_file)
            continue
        names_by_file[svg_file] = plan.rename(str(svg_file))

    files_by_name = {}
    for svg_file, name in names_by_file.items():
        if name in files_by_name:
            raise RasterizationError(
                f"{svg_file} and {files_by_name[name]} are both named {name!r}"
            )
        files_by_name[name] = svg_file

    codepoints = assign_codepoints(
        list(files_by_name), plan.codepoints, plan.start_codepoint
    )
    names_by_codepoint = {}
    for name, codepoint in codepoints.items():
        if codepoint in names_by_codepoint:
            raise RasterizationError(
                f"{name} and {names_by_codepoint[codepoint]} both map to U+{codepoint:04X}"
            )
        names_by_codepoint[codepoint] = name
    return [
        GlyphSource(svg_file, name, codepoints[name], _parse(svg_file))
        for name, svg_file in files_by_name.items()
    ]


def _view_box(source: GlyphSource) -> Rect:
    view_box = source.svg.view_box()
    if view_box is None or view_box.h <= 0:
        raise RasterizationError(f"{source.filename} needs a non-empty viewBox")
    return view_box


def map_viewbox_to_font_space(view_box: Rect, scale: float, ascender: float) -> Affine2D:
    return Affine2D.compose_ltr(
        (
            # first normalize viewbox origin
            Affine2D(1, 0, 0, 1, -view_box.x, -view_box.y),
            # then scale, flip y axis and shift so the top sits on the ascender
            Affine2D(scale, 0, 0, -scale, 0, ascender),
        )
    )


def _ufo(plan: GenerationPlan) -> ufoLib2.Font:
    ufo = ufoLib2.Font()
    ufo.info.familyName = plan.font_name
    ufo.info.styleName = "Regular"
    ufo.info.unitsPerEm = plan.font_height
    # we just use a simple scheme that makes all sets of vertical metrics the same
    ufo.info.ascender = (
        ufo.info.openTypeHheaAscender
    ) = ufo.info.openTypeOS2TypoAscender = plan.font_height - plan.descent
    ufo.info.descender = (
        ufo.info.openTypeHheaDescender
    ) = ufo.info.openTypeOS2TypoDescender = -plan.descent
    ufo.info.openTypeHheaLineGap = ufo.info.openTypeOS2TypoLineGap = 0

    ttf_options = plan.format_options.get("ttf", {})
    version = str(ttf_options.get("version", "1.0"))
    major, _, minor = version.partition(".")
    ufo.info.versionMajor = int(major or 1)
    ufo.info.versionMinor = int(minor or 0)
    if "copyright" in ttf_options:
        ufo.info.copyright = ttf_options["copyright"]
    if "description" in ttf_options:
        ufo.info.openTypeNameDescription = ttf_options["description"]
    if "url" in ttf_options:
        ufo.info.openTypeNameManufacturerURL = ttf_options["url"]

    ufo.newGlyph(".notdef")
    ufo.glyphOrder = [".notdef"]
    return ufo


def build_ufo(plan: GenerationPlan, sources: Sequence[GlyphSource]) -> ufoLib2.Font:
    ufo = _ufo(plan)
    view_boxes = [_view_box(s) for s in sources]
    tallest = max(vb.h for vb in view_boxes)
    ascender = plan.font_height - plan.descent

    scales = [plan.font_height / (vb.h if plan.normalize else tallest) for vb in view_boxes]
    widths = [vb.w * scale for vb, scale in zip(view_boxes, scales)]
    if plan.fixed_width:
        widths = [max(widths)] * len(widths)

    for source, view_box, scale, width in zip(sources, view_boxes, scales, widths):
        transform = map_viewbox_to_font_space(view_box, scale, ascender)
        recording = RecordingPen()
        for shape in source.svg.shapes():
            draw_svg_path(shape.as_path(), recording, transform)

        dx = 0
        if plan.center_horizontally:
            bounds_pen = ControlBoundsPen(None)
            recording.replay(bounds_pen)
            if bounds_pen.bounds is not None:
                x_min, _, x_max, _ = bounds_pen.bounds
                dx = (width - (x_max - x_min)) / 2 - x_min

        glyph = ufo.newGlyph(source.glyph_name)
        glyph.width = round(width)
        glyph.unicodes = [source.codepoint]
        recording.replay(TransformPen(glyph.getPen(), (1, 0, 0, 1, dx, 0)))
        ufo.glyphOrder += [glyph.name]
        logging.debug(
            "%s %s U+%04X scale %.3f", plan.font_name, glyph.name, source.codepoint, scale
        )

    return ufo
