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

from fontTools import ttLib
from io import BytesIO
import pytest
import struct
from test_helper import SQUARE_SVG, TRIANGLE_SVG, mkdtemp, write_svgs
from webfontkit import config, glyphs, rasterize
from webfontkit.errors import RasterizationError
from webfontkit.formats import FontFormat


def _plan(**unit):
    tmp_dir = mkdtemp()
    write_svgs(tmp_dir / "icons", ("add.svg", "close.svg"))
    write_svgs(tmp_dir / "icons", ("play.svg",), TRIANGLE_SVG)
    unit.setdefault("files", ["icons/*.svg"])
    unit.setdefault("font_name", "icons")
    return config.resolve(unit, context=tmp_dir)


def test_all_formats_in_order():
    plan = _plan()

    result = rasterize.generate_sync(plan)

    assert tuple(result.blobs) == plan.types
    assert all(result.blobs[fmt] for fmt in plan.types)


def test_codepoints_skip_fixed():
    plan = _plan(codepoints={"close": 0xF102})

    result = rasterize.generate_sync(plan)

    assert dict(result.codepoints) == {"add": 0xF101, "close": 0xF102, "play": 0xF103}
    ttfont = ttLib.TTFont(BytesIO(result.blobs[FontFormat.TTF]))
    assert ttfont.getBestCmap() == {0xF101: "add", 0xF102: "close", 0xF103: "play"}
    assert ttfont["head"].unitsPerEm == 1000


@pytest.mark.parametrize(
    "fmt, flavor",
    [
        (FontFormat.WOFF, "woff"),
        (FontFormat.WOFF2, "woff2"),
    ],
)
def test_web_flavors(fmt, flavor):
    result = rasterize.generate_sync(_plan(types=[fmt.format_id]))

    ttfont = ttLib.TTFont(BytesIO(result.blobs[fmt]))
    assert ttfont.flavor == flavor
    assert set(ttfont.getBestCmap().values()) == {"add", "close", "play"}


def test_eot_header():
    result = rasterize.generate_sync(_plan(types="eot"))
    eot = result.blobs[FontFormat.EOT]

    eot_size, font_data_size, version = struct.unpack_from("<3I", eot)
    assert eot_size == len(eot)
    assert version == 0x00020001
    (magic,) = struct.unpack_from("<H", eot, 34)
    assert magic == 0x504C
    # the TrueType font closes the file
    ttfont = ttLib.TTFont(BytesIO(eot[-font_data_size:]))
    assert "add" in ttfont.getGlyphOrder()


def test_svg_font():
    result = rasterize.generate_sync(_plan(types=["svg"]))
    svg = result.blobs[FontFormat.SVG].decode("utf-8")

    assert '<font id="icons"' in svg
    assert 'glyph-name="add"' in svg
    assert 'unicode="\uf101"' in svg


def test_fixed_width():
    plan = _plan(types="ttf", fixed_width=True)

    result = rasterize.generate_sync(plan)

    ttfont = ttLib.TTFont(BytesIO(result.blobs[FontFormat.TTF]))
    hmtx = ttfont["hmtx"]
    assert hmtx["add"][0] == hmtx["play"][0] == 1000


def test_proportional_scale_by_default():
    result = rasterize.generate_sync(_plan(types="ttf"))

    ttfont = ttLib.TTFont(BytesIO(result.blobs[FontFormat.TTF]))
    hmtx = ttfont["hmtx"]
    # tallest viewBox is 24 high, the 16x16 triangle scales by the same factor
    assert hmtx["add"][0] == 1000
    assert hmtx["play"][0] == round(16 * 1000 / 24)


def test_normalize_scales_each_glyph():
    result = rasterize.generate_sync(_plan(types="ttf", normalize=True))

    ttfont = ttLib.TTFont(BytesIO(result.blobs[FontFormat.TTF]))
    assert ttfont["hmtx"]["play"][0] == 1000


def test_duplicate_glyph_names():
    tmp_dir = mkdtemp()
    write_svgs(tmp_dir / "a", ("add.svg",))
    write_svgs(tmp_dir / "b", ("add.svg",))
    plan = config.resolve({"files": ["a/*.svg", "b/*.svg"]}, context=tmp_dir)

    with pytest.raises(RasterizationError, match="both named 'add'"):
        rasterize.generate_sync(plan)


def test_shared_explicit_codepoint():
    plan = _plan(codepoints={"add": 0xF101, "close": 0xF101})

    with pytest.raises(RasterizationError, match=r"U\+F101"):
        rasterize.generate_sync(plan)


def test_same_file_twice_is_one_glyph():
    tmp_dir = mkdtemp()
    write_svgs(tmp_dir, ("add.svg",))
    plan = config.resolve({"files": ["add.svg", "*.svg"]}, context=tmp_dir)

    result = rasterize.generate_sync(plan)

    assert dict(result.codepoints) == {"add": 0xF101}


def test_bad_svg():
    tmp_dir = mkdtemp()
    (tmp_dir / "broken.svg").write_text("<svg")
    plan = config.resolve({"files": ["broken.svg"]}, context=tmp_dir)

    with pytest.raises(RasterizationError, match="broken.svg"):
        rasterize.generate_sync(plan)


def test_write_files():
    plan = _plan(types=["ttf", "woff"], write_files=True, dest="fonts")

    rasterize.generate_sync(plan)

    assert (plan.dest / "icons.ttf").is_file()
    assert (plan.dest / "icons.woff").is_file()


def test_generated_css():
    result = rasterize.generate_sync(_plan(types=["woff2", "ttf"]))

    css = result.generate_css(
        {FontFormat.WOFF2: "/icons.woff2", FontFormat.TTF: "/icons.ttf"}
    )

    assert 'url("/icons.woff2") format("woff2")' in css
    assert 'url("/icons.ttf") format("truetype")' in css
    assert ".icon-add:before" in css
    assert 'content: "\\f101";' in css


@pytest.mark.parametrize(
    "names, fixed, start, expected",
    [
        (("a", "b"), {}, 0xF101, {"a": 0xF101, "b": 0xF102}),
        (("a", "b"), {"a": 0xF101}, 0xF101, {"a": 0xF101, "b": 0xF102}),
        (("a", "b", "c"), {"c": 0xE000}, 0xE000, {"a": 0xE001, "b": 0xE002, "c": 0xE000}),
    ],
)
def test_assign_codepoints(names, fixed, start, expected):
    assert glyphs.assign_codepoints(names, fixed, start) == expected
