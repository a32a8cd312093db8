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

import base64
import pytest
from test_helper import fake_blobs, mkdtemp, write_svgs
from webfontkit import config, publish
from webfontkit.errors import RasterizationError
from webfontkit.formats import FontFormat
from webfontkit.host import DirectoryBuildHost
from webfontkit.publish import data_uri, output_filename


@pytest.mark.parametrize(
    "template, expected",
    [
        ("[chunkhash]-[fontname].[ext]", "abc-icons.woff"),
        ("[fontname].[ext]", "icons.woff"),
        # only the first occurrence of a token is replaced
        ("[fontname]/[fontname].[ext]", "icons/[fontname].woff"),
        ("[ext]-[fontname].[ext]", "woff-icons.[ext]"),
    ],
)
def test_output_filename(template, expected):
    assert output_filename(template, "abc", "icons", "woff") == expected


@pytest.mark.parametrize(
    "fmt, mime_type",
    [
        (FontFormat.EOT, "application/vnd.ms-fontobject"),
        (FontFormat.SVG, "image/svg+xml"),
        (FontFormat.TTF, "application/x-font-ttf"),
        (FontFormat.WOFF, "application/font-woff"),
        (FontFormat.WOFF2, "font/woff2"),
    ],
)
def test_data_uri(fmt, mime_type):
    uri = data_uri(fmt, b"\x00\x01binary")
    prefix = f"data:{mime_type};charset=utf-8;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix) :]) == b"\x00\x01binary"


def _plan_and_host(unit, build_options=None):
    tmp_dir = mkdtemp()
    write_svgs(tmp_dir / "icons", ("add.svg",))
    host = DirectoryBuildHost(tmp_dir / "icons.toml", tmp_dir / "out")
    unit = dict(unit, files=["icons/*.svg"])
    return config.resolve(unit, build_options or {}, tmp_dir), host


def test_emit_url():
    plan, host = _plan_and_host(
        {"fileName": "[fontname].[ext]", "fontName": "icons", "types": "ttf"},
        {"publicPath": "/assets/"},
    )

    outputs = publish.publish(plan, fake_blobs(), host)

    assert [o.url for o in outputs] == ["/assets/icons.ttf"]
    assert outputs[0].data_uri is None
    assert host.emitted == [host.output_dir / "icons.ttf"]
    assert (host.output_dir / "icons.ttf").read_bytes() == b"ttf font bytes"


def test_emit_with_chunkhash_in_format_order():
    plan, host = _plan_and_host(
        {"fontName": "icons", "types": ["woff2", "eot"]}, {"hashLength": 6}
    )

    outputs = publish.publish(plan, fake_blobs(), host)

    assert [o.format for o in outputs] == [FontFormat.WOFF2, FontFormat.EOT]
    chunk_hash = outputs[0].url[1:7]
    assert [o.url for o in outputs] == [
        f"/{chunk_hash}-icons.woff2",
        f"/{chunk_hash}-icons.eot",
    ]


def test_host_tokens_interpolated():
    plan, host = _plan_and_host(
        {"fileName": "[path][fontname].[hash:4].[ext]", "types": "woff"}
    )

    outputs = publish.publish(plan, fake_blobs(), host)

    assert outputs[0].url.startswith("/iconfont.")
    assert outputs[0].url.endswith(".woff")
    assert len(outputs[0].url) == len("/iconfont.1234.woff")


def test_no_hash_without_chunkhash_token(monkeypatch):
    def _fail(*_):
        raise AssertionError("should not hash")

    monkeypatch.setattr(publish, "hash_files", _fail)
    plan, host = _plan_and_host({"fileName": "[fontname].[ext]", "types": "svg"})

    outputs = publish.publish(plan, fake_blobs(), host)

    assert outputs[0].url == "/iconfont.svg"


def test_embed_emits_nothing():
    plan, host = _plan_and_host({"embed": True, "types": ["woff", "ttf"]})

    outputs = publish.publish(plan, fake_blobs(), host)

    assert host.emitted == []
    assert all(o.url is None for o in outputs)
    assert publish.urls(outputs) == {
        FontFormat.WOFF: data_uri(FontFormat.WOFF, b"woff font bytes"),
        FontFormat.TTF: data_uri(FontFormat.TTF, b"ttf font bytes"),
    }


def test_blobs_keyed_by_format_id():
    plan, host = _plan_and_host({"fileName": "[fontname].[ext]", "types": "woff"})

    outputs = publish.publish(plan, {"woff": b"woff font bytes"}, host)

    assert [o.url for o in outputs] == ["/iconfont.woff"]
    assert (host.output_dir / "iconfont.woff").read_bytes() == b"woff font bytes"


def test_missing_blob():
    plan, host = _plan_and_host({"types": ["woff", "ttf"]})

    with pytest.raises(RasterizationError, match="ttf"):
        publish.publish(plan, {FontFormat.WOFF: b"woff font bytes"}, host)
