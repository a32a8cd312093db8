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

"""Expands the glyph file patterns of a font config.

Besides the files themselves we track what the host build has to watch so it
notices when sources are modified, added or removed: literal patterns are
watched as written, globs are watched through the directory they expand in.
"""

from absl import logging
import glob
import os
from pathlib import Path
from typing import NamedTuple, Sequence, Tuple, Union

from webfontkit.errors import ConfigError
from webfontkit.util import abspath


class ResolvedFileSet(NamedTuple):
    files: Tuple[Path, ...]
    watched_files: Tuple[str, ...]
    watched_directories: Tuple[Path, ...]


def _glob_in(context: Path, pattern: str) -> Tuple[str, ...]:
    # glob.glob has no root_dir before 3.10 so escape the context and join;
    # an absolute pattern replaces the context entirely
    full_pattern = os.path.join(glob.escape(str(context)), pattern)
    return tuple(sorted(glob.glob(full_pattern, recursive=True)))


def resolve_files(
    patterns: Sequence[str], context: Union[str, Path], strict: bool = False
) -> ResolvedFileSet:
    """Resolve literal paths and glob patterns against context.

    Order follows the patterns; matches within one glob are sorted. Patterns
    that match nothing are not an error here.
    """
    context = abspath(context)
    files = []
    watched_files = []
    watched_directories = []

    for pattern in patterns:
        pattern = str(pattern)
        if not glob.has_magic(pattern):
            watched_files.append(pattern)
            files.append(abspath(context / pattern))
            continue

        matches = _glob_in(context, pattern)
        if not matches:
            logging.debug("%s matched no files in %s", pattern, context)
        files.extend(abspath(m) for m in matches)

        # trailing separator so only directories match
        parent = os.path.dirname(pattern) or os.curdir
        watched_directories.extend(
            abspath(d) for d in _glob_in(context, parent + "/")
        )

    seen = set()
    for f in files:
        if f not in seen:
            seen.add(f)
            continue
        if strict:
            raise ConfigError(f"{f} is matched by more than one files pattern")
        logging.warning("%s is matched by more than one files pattern", f)

    return ResolvedFileSet(
        tuple(files), tuple(watched_files), tuple(dict.fromkeys(watched_directories))
    )
