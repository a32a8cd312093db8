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

"""The font formats we know how to produce and publish."""

import enum
from typing import Tuple


class FontFormat(enum.Enum):
    # value, file extension, MIME type for data URIs, CSS format() hint
    EOT = ("eot", "eot", "application/vnd.ms-fontobject", "embedded-opentype")
    WOFF2 = ("woff2", "woff2", "font/woff2", "woff2")
    WOFF = ("woff", "woff", "application/font-woff", "woff")
    TTF = ("ttf", "ttf", "application/x-font-ttf", "truetype")
    SVG = ("svg", "svg", "image/svg+xml", "svg")

    def __init__(self, format_id: str, ext: str, mime_type: str, css_format: str):
        self.format_id = format_id
        self.ext = ext
        self.mime_type = mime_type
        self.css_format = css_format

    def __str__(self):
        return self.format_id

    @classmethod
    def parse(cls, format_id: str) -> "FontFormat":
        for fmt in cls:
            if fmt.format_id == format_id:
                return fmt
        raise ValueError(
            f"Unsupported font format {format_id!r}, expected one of "
            + ", ".join(f.format_id for f in cls)
        )


DEFAULT_FORMATS: Tuple[FontFormat, ...] = (
    FontFormat.EOT,
    FontFormat.WOFF,
    FontFormat.WOFF2,
    FontFormat.TTF,
    FontFormat.SVG,
)
