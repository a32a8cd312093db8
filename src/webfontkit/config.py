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

"""Resolves a font config unit into the plan handed to the rasterizer.

A unit comes in one of two forms, picked by the caller: data (json or toml)
or a python module that builds the config programmatically and so may supply
functions, e.g. a custom rename. Values layer, lowest to highest: the
GenerationPlan defaults, build-wide options, the unit itself.
"""

from absl import logging
import json
import os
from pathlib import Path
import re
import runpy
from types import MappingProxyType
import tomli
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    MutableMapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from webfontkit.errors import ConfigError, ConfigParseError
from webfontkit.formats import DEFAULT_FORMATS, FontFormat
from webfontkit.paths import resolve_files
from webfontkit.util import abspath


# Maps a resolved glyph source path to a glyph name
Rename = Callable[[str], str]


def default_rename(path: str) -> str:
    name = os.path.basename(path)
    if name.endswith(".svg"):
        name = name[: -len(".svg")]
    return name


class GenerationPlan(NamedTuple):
    files: Tuple[Path, ...] = ()
    font_name: str = "iconfont"
    types: Tuple[FontFormat, ...] = DEFAULT_FORMATS
    font_height: int = 1000  # fixes conversion issues with small svgs
    codepoints: Mapping[str, int] = MappingProxyType({})
    base_selector: str = ".icon"
    class_prefix: str = "icon-"
    rename: Rename = default_rename
    css_template: Optional[Path] = None
    css_fonts_path: str = ""
    file_name: str = "[chunkhash]-[fontname].[ext]"
    public_path: str = "/"
    hash_length: Optional[int] = None
    write_files: bool = False
    dest: Optional[Path] = None
    embed: bool = False
    scss_dest: Optional[Path] = None
    scss_template: Optional[Path] = None
    format_options: Mapping[str, Mapping[str, Any]] = MappingProxyType({})
    fixed_width: bool = False
    center_horizontally: bool = False
    normalize: bool = False
    round: float = 10e12
    descent: int = 0
    start_codepoint: int = 0xF101
    strict_files: bool = False

    @property
    def order(self) -> Tuple[FontFormat, ...]:
        return self.types


_DEFAULT_PLAN = GenerationPlan()

# Only the unit may set these
_UNIT_ONLY = ("rename", "css_template", "css_fonts_path")
# Only the build may set these
_BUILD_ONLY = ("public_path", "hash_length")


_CAMEL_HUMP = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_HUMP.sub("_", key).lower()


def normalize_keys(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {_snake_case(str(k)): v for k, v in config.items()}


def parse_data(text: str, fmt: str = "json", source: str = "<string>") -> Dict[str, Any]:
    """Parse a data-only font config."""
    if fmt not in ("json", "toml"):
        raise ConfigError(f"Unknown config format {fmt!r}, expected json or toml")
    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = tomli.loads(text)
    except ValueError as e:
        raise ConfigParseError(source, str(e)) from e
    if not isinstance(data, Mapping):
        raise ConfigParseError(source, f"expected a table, got {type(data).__name__}")
    return normalize_keys(data)


def load_module(path: Union[str, Path]) -> Dict[str, Any]:
    """Run a python font config.

    The module defines font_config, either a mapping or a function taking no
    arguments that returns one.
    """
    path = abspath(path)
    try:
        namespace = runpy.run_path(str(path))
    except (OSError, SyntaxError) as e:
        raise ConfigParseError(str(path), str(e)) from e

    font_config = namespace.get("font_config")
    if callable(font_config):
        font_config = font_config()
    if not isinstance(font_config, Mapping):
        raise ConfigParseError(
            str(path), "expected font_config, a mapping or a function returning one"
        )
    return normalize_keys(font_config)


def load_unit(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if path.suffix == ".py":
        return load_module(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigParseError(str(path), str(e)) from e
    fmt = "json" if path.suffix == ".json" else "toml"
    return parse_data(text, fmt, source=str(path))


def _pop_option(
    unit: MutableMapping[str, Any], build_options: Mapping[str, Any], name: str
) -> Any:
    # None means not set; anything else, including "", wins
    unit_value = unit.pop(name, None)
    if name in _BUILD_ONLY and unit_value is not None:
        logging.warning("Ignoring %s in font config, it is a build option", name)
        unit_value = None
    build_value = None
    if name not in _UNIT_ONLY:
        build_value = build_options.get(name)
    if unit_value is not None:
        return unit_value
    if build_value is not None:
        return build_value
    return getattr(_DEFAULT_PLAN, name)


def _formats(types: Any) -> Tuple[FontFormat, ...]:
    if isinstance(types, (str, FontFormat)) or not isinstance(types, Sequence):
        types = [types]
    formats = []
    for t in types:
        if isinstance(t, FontFormat):
            formats.append(t)
            continue
        try:
            formats.append(FontFormat.parse(str(t)))
        except ValueError as e:
            raise ConfigError(str(e)) from e
    return tuple(formats)


def _codepoints(codepoints: Mapping[str, Any]) -> Mapping[str, int]:
    result = {}
    for name, value in codepoints.items():
        if isinstance(value, str):
            try:
                value = int(value, 16)
            except ValueError as e:
                raise ConfigError(f"Bad codepoint {value!r} for {name}") from e
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigError(f"Bad codepoint {value!r} for {name}")
        result[str(name)] = value
    return MappingProxyType(result)


def _path(context: Path, value: Optional[Union[str, Path]]) -> Optional[Path]:
    if value is None:
        return None
    return abspath(context / value)


def resolve(
    unit: Mapping[str, Any],
    build_options: Optional[Mapping[str, Any]] = None,
    context: Union[str, Path] = os.curdir,
    host=None,
) -> GenerationPlan:
    """Merge a unit with build options and defaults into a GenerationPlan.

    If host is given, every source and template the plan depends on is
    declared to it before anything is generated.
    """
    unit = normalize_keys(unit)
    build_options = normalize_keys(build_options or {})
    context = abspath(context)

    patterns = _pop_option(unit, build_options, "files")
    if isinstance(patterns, (str, Path)):
        patterns = [patterns]
    if not patterns:
        raise ConfigError("Font config must list glyph 'files'")
    strict_files = bool(_pop_option(unit, build_options, "strict_files"))
    resolved = resolve_files(patterns, context, strict=strict_files)

    rename = _pop_option(unit, build_options, "rename")
    if not callable(rename):
        raise ConfigError(f"'rename' must be callable, got {type(rename).__name__}")

    hash_length = _pop_option(unit, build_options, "hash_length")
    if hash_length is not None and int(hash_length) < 1:
        raise ConfigError(f"'hash_length' must be at least 1, got {hash_length}")
    plan = GenerationPlan(
        files=resolved.files,
        font_name=str(_pop_option(unit, build_options, "font_name")),
        types=_formats(_pop_option(unit, build_options, "types")),
        font_height=int(_pop_option(unit, build_options, "font_height")),
        codepoints=_codepoints(_pop_option(unit, build_options, "codepoints")),
        base_selector=_pop_option(unit, build_options, "base_selector"),
        class_prefix=_pop_option(unit, build_options, "class_prefix"),
        rename=rename,
        css_template=_path(context, _pop_option(unit, build_options, "css_template")),
        css_fonts_path=_pop_option(unit, build_options, "css_fonts_path"),
        file_name=_pop_option(unit, build_options, "file_name"),
        public_path=_pop_option(unit, build_options, "public_path"),
        hash_length=int(hash_length) if hash_length is not None else None,
        write_files=bool(_pop_option(unit, build_options, "write_files")),
        dest=_path(context, _pop_option(unit, build_options, "dest") or context),
        embed=bool(_pop_option(unit, build_options, "embed")),
        scss_dest=_path(context, _pop_option(unit, build_options, "scss_dest")),
        scss_template=_path(
            context, _pop_option(unit, build_options, "scss_template")
        ),
        format_options=MappingProxyType(
            dict(_pop_option(unit, build_options, "format_options"))
        ),
        fixed_width=bool(_pop_option(unit, build_options, "fixed_width")),
        center_horizontally=bool(
            _pop_option(unit, build_options, "center_horizontally")
        ),
        normalize=bool(_pop_option(unit, build_options, "normalize")),
        round=float(_pop_option(unit, build_options, "round")),
        descent=int(_pop_option(unit, build_options, "descent")),
        start_codepoint=int(_pop_option(unit, build_options, "start_codepoint")),
        strict_files=strict_files,
    )
    if plan.css_fonts_path:
        plan = plan._replace(css_fonts_path=str(_path(context, plan.css_fonts_path)))
    if unit:
        raise ConfigError(f"Unexpected config: {sorted(unit)}")

    if host is not None:
        _declare_dependencies(host, context, resolved, plan)

    logging.debug(
        "%s: %d files, formats %s",
        plan.font_name,
        len(plan.files),
        ",".join(str(t) for t in plan.types),
    )
    return plan


def _declare_dependencies(host, context: Path, resolved, plan: GenerationPlan):
    # literals are watched as written so the host sees them even before they
    # exist; glob matches are watched individually and through their directory
    literal_files = {abspath(context / f) for f in resolved.watched_files}
    for pattern in resolved.watched_files:
        host.add_dependency(pattern)
    for f in resolved.files:
        if f not in literal_files:
            host.add_dependency(f)
    for directory in resolved.watched_directories:
        host.add_context_dependency(directory)
    for template in (plan.css_template, plan.css_fonts_path, plan.scss_template):
        if template:
            host.add_dependency(template)
