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

"""The slice of a host build tool a font config unit talks to.

A host tracks dependencies so it knows when to rebuild the unit, accepts the
files the unit emits and knows the public path those files are served from.
DirectoryBuildHost is a minimal host that writes emitted files to a directory;
the webfontkit command line uses it.
"""

import abc
from absl import logging
import hashlib
import os
from pathlib import Path
import re
from typing import Any, List, Mapping, Optional, Union

from webfontkit.util import abspath


_NAME_TOKEN = re.compile(r"\[(name|ext|path|folder|hash|contenthash)(?::(\d+))?\]")


def interpolate_name(
    template: str,
    resource_path: Union[str, Path],
    context: Union[str, Path],
    content: bytes,
) -> str:
    """Fill in the usual loader filename tokens.

    [name] and [ext] describe the resource (the font config unit itself),
    [path] is its directory relative to context, with a trailing slash,
    [folder] the name of that directory. [hash] and [contenthash] are md5 of
    content, optionally shortened as in [hash:8].
    """
    resource_path = abspath(resource_path)
    rel_dir = os.path.relpath(resource_path.parent, abspath(context))
    if rel_dir == os.curdir:
        rel_dir = ""
    else:
        rel_dir = rel_dir.replace(os.sep, "/") + "/"
    digest = hashlib.md5(content).hexdigest()

    def _replace(match):
        token, length = match.group(1), match.group(2)
        if token == "name":
            return resource_path.stem
        if token == "ext":
            return resource_path.suffix[1:]
        if token == "path":
            return rel_dir
        if token == "folder":
            return resource_path.parent.name
        return digest[: int(length)] if length else digest

    return _NAME_TOKEN.sub(_replace, template)


class BuildHost(abc.ABC):
    """What the pipeline needs from the build tool that runs it."""

    # directory of the unit being built; relative config paths resolve here
    context: Path
    # root of the build; [path] in emitted names is relative to this
    root_context: Path
    resource_path: Path
    public_path: Optional[str]
    # build-wide options, camelCase or snake_case keys
    options: Mapping[str, Any]

    @abc.abstractmethod
    def add_dependency(self, path: Union[str, Path]):
        ...

    @abc.abstractmethod
    def add_context_dependency(self, path: Union[str, Path]):
        ...

    @abc.abstractmethod
    def emit_file(self, name: str, content: bytes):
        ...

    def interpolate_name(self, template: str, content: bytes) -> str:
        return interpolate_name(
            template, self.resource_path, self.root_context, content
        )


class DirectoryBuildHost(BuildHost):
    def __init__(
        self,
        resource_path: Union[str, Path],
        output_dir: Union[str, Path],
        options: Optional[Mapping[str, Any]] = None,
        root_context: Optional[Union[str, Path]] = None,
        public_path: Optional[str] = None,
    ):
        self.resource_path = abspath(resource_path)
        self.context = self.resource_path.parent
        self.root_context = abspath(root_context or self.context)
        self.output_dir = abspath(output_dir)
        self.options = dict(options or {})
        self.public_path = public_path
        self.dependencies: List[Path] = []
        self.context_dependencies: List[Path] = []
        self.emitted: List[Path] = []

    def add_dependency(self, path):
        self.dependencies.append(abspath(self.context / path))

    def add_context_dependency(self, path):
        self.context_dependencies.append(abspath(self.context / path))

    def emit_file(self, name, content):
        dest = self.output_dir / name
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(content)
        self.emitted.append(dest)
        logging.info("Wrote %s", dest)
