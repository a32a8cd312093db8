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

"""Wraps a TrueType font in an Embedded OpenType (version 0x00020001) header.

The font data is stored as is, uncompressed and unobfuscated, which every
EOT consumer accepts. Header layout per https://www.w3.org/Submission/EOT/
"""

from fontTools import ttLib
from io import BytesIO
import struct


_VERSION = 0x00020001
_MAGIC_NUMBER = 0x504C
_DEFAULT_CHARSET = 1

# EOTSize, FontDataSize, Version, Flags, FontPANOSE, Charset, Italic, Weight,
# fsType, MagicNumber, UnicodeRange1-4, CodePageRange1-2, CheckSumAdjustment,
# Reserved1-4, Padding1
_HEADER = struct.Struct("<4I10s2BI2H4I2II4IH")

# family, subfamily, version, full name
_NAME_IDS = (1, 2, 5, 4)

_PANOSE_FIELDS = (
    "bFamilyType",
    "bSerifStyle",
    "bWeight",
    "bProportion",
    "bContrast",
    "bStrokeVariation",
    "bArmStyle",
    "bLetterForm",
    "bMidline",
    "bXHeight",
)


def _name_string(ttfont: ttLib.TTFont, name_id: int) -> bytes:
    encoded = (ttfont["name"].getDebugName(name_id) or "").encode("utf-16-le")
    return struct.pack("<H", len(encoded)) + encoded


def ttf_to_eot(ttf: bytes) -> bytes:
    ttfont = ttLib.TTFont(BytesIO(ttf))
    os2 = ttfont["OS/2"]

    # Padding1 closes the fixed header, Padding2-4 separate the names, then
    # Padding5 and a zero RootStringSize
    names = b"".join(
        struct.pack("<H", 0) + _name_string(ttfont, name_id) for name_id in _NAME_IDS
    )
    names = names[2:] + struct.pack("<HH", 0, 0)

    header_size = _HEADER.size + len(names)
    header = _HEADER.pack(
        header_size + len(ttf),
        len(ttf),
        _VERSION,
        0,  # flags, no subsetting, compression or obfuscation
        bytes(getattr(os2.panose, f) for f in _PANOSE_FIELDS),
        _DEFAULT_CHARSET,
        os2.fsSelection & 0x01,
        os2.usWeightClass,
        os2.fsType,
        _MAGIC_NUMBER,
        os2.ulUnicodeRange1,
        os2.ulUnicodeRange2,
        os2.ulUnicodeRange3,
        os2.ulUnicodeRange4,
        getattr(os2, "ulCodePageRange1", 0),
        getattr(os2, "ulCodePageRange2", 0),
        ttfont["head"].checkSumAdjustment,
        0,
        0,
        0,
        0,
        0,
    )
    return header + names + ttf
