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

"""Content hash of the glyph sources, used to cache-bust font filenames."""

import hashlib
from pathlib import Path
from typing import Iterable, Optional, Union


DEFAULT_HASH_LENGTH = 20


def hash_files(
    files: Iterable[Union[str, Path]], hash_length: Optional[int] = None
) -> str:
    # Digests of contents, sorted, so neither enumeration order nor
    # file names affect the result
    digests = sorted(hashlib.md5(Path(f).read_bytes()).digest() for f in files)
    combined = hashlib.md5()
    for digest in digests:
        combined.update(digest)
    if hash_length is None:
        hash_length = DEFAULT_HASH_LENGTH
    return combined.hexdigest()[:hash_length]
