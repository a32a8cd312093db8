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

"""Turns rasterized font binaries into emitted files or inline data URIs."""

from absl import logging
import base64
from typing import Mapping, NamedTuple, Optional, Tuple, Union
from urllib.parse import urljoin

from webfontkit.config import GenerationPlan
from webfontkit.errors import RasterizationError
from webfontkit.formats import FontFormat
from webfontkit.hashing import hash_files


CHUNKHASH_TOKEN = "[chunkhash]"
FONTNAME_TOKEN = "[fontname]"
EXT_TOKEN = "[ext]"


class FormatOutput(NamedTuple):
    format: FontFormat
    blob: bytes
    # exactly one of these is set
    url: Optional[str] = None
    data_uri: Optional[str] = None

    @property
    def href(self) -> str:
        return self.url if self.url is not None else self.data_uri


def output_filename(template: str, chunk_hash: str, font_name: str, ext: str) -> str:
    # Only the first occurrence of each token is replaced
    return (
        template.replace(CHUNKHASH_TOKEN, chunk_hash, 1)
        .replace(FONTNAME_TOKEN, font_name, 1)
        .replace(EXT_TOKEN, ext, 1)
    )


def data_uri(fmt: FontFormat, blob: bytes) -> str:
    return (
        f"data:{fmt.mime_type};charset=utf-8;base64,"
        + base64.b64encode(blob).decode("ascii")
    )


def public_url(public_path: str, filename: str) -> str:
    return urljoin(public_path, filename.replace("\\", "/"))


# Rasterizers may key blobs by FontFormat or by format id
Blobs = Mapping[Union[FontFormat, str], bytes]


def _blob(blobs: Blobs, fmt: FontFormat) -> bytes:
    blob = blobs.get(fmt, blobs.get(fmt.format_id))
    if blob is None:
        raise RasterizationError(f"Rasterizer produced no {fmt} font")
    return blob


def publish(plan: GenerationPlan, blobs: Blobs, host) -> Tuple[FormatOutput, ...]:
    """Emit, or inline, the binary for each format in plan order."""
    chunk_hash = ""
    if not plan.embed and CHUNKHASH_TOKEN in plan.file_name:
        chunk_hash = hash_files(plan.files, plan.hash_length)

    outputs = []
    for fmt in plan.order:
        blob = _blob(blobs, fmt)
        if plan.embed:
            outputs.append(FormatOutput(fmt, blob, data_uri=data_uri(fmt, blob)))
            continue
        filename = output_filename(plan.file_name, chunk_hash, plan.font_name, fmt.ext)
        filename = host.interpolate_name(filename, blob)
        host.emit_file(filename, blob)
        url = public_url(plan.public_path, filename)
        logging.debug("%s %s => %s", plan.font_name, fmt, url)
        outputs.append(FormatOutput(fmt, blob, url=url))
    return tuple(outputs)


def urls(outputs: Tuple[FormatOutput, ...]) -> Mapping[FontFormat, str]:
    return {o.format: o.href for o in outputs}
