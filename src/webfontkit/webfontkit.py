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

"""Build icon web fonts and their stylesheet from font config units.

Each unit is a toml, json or python font config listing svg glyph files. The
fonts are written to --output_dir, named per the unit's fileName, and the
stylesheet that loads them to <output_dir>/<unit file stem>.css.

Sample usage:
webfontkit --output_dir build --public_path /static/fonts/ icons.toml
webfontkit --embed --output_file - icons.py
"""

from absl import app
from absl import flags
from absl import logging
from pathlib import Path
from typing import Any, Dict, Sequence

from webfontkit import config, loader
from webfontkit.host import DirectoryBuildHost
from webfontkit.util import file_printer


FLAGS = flags.FLAGS


flags.DEFINE_string("output_dir", "build", "Where emitted fonts are written.")
flags.DEFINE_string(
    "output_file",
    None,
    "Where to write the stylesheet ('-' means stdout). "
    "Default <output_dir>/<unit name>.css. Only valid with a single unit.",
)
flags.DEFINE_string(
    "root_dir", None, "Build root; [path] in file names is relative to it."
)

# we use None as a sentinel for flag not set; build-wide options override the
# GenerationPlan defaults and are overridden by each unit.
flags.DEFINE_string("public_path", None, "Base url emitted fonts are served from.")
flags.DEFINE_string(
    "file_name", None, "Font file name template; [chunkhash], [fontname], [ext]."
)
flags.DEFINE_integer("hash_length", None, "Length of [chunkhash].", lower_bound=1)
flags.DEFINE_string("font_name", None, "Font family name.")
flags.DEFINE_string("class_prefix", None, "Prefix of per-glyph css classes.")
flags.DEFINE_string("base_selector", None, "Selector shared by all glyphs.")
flags.DEFINE_list("types", None, "Font formats to generate, in src order.")
flags.DEFINE_bool("embed", None, "Inline fonts as data uris instead of emitting.")

_BUILD_OPTION_FLAGS = (
    "public_path",
    "file_name",
    "hash_length",
    "font_name",
    "class_prefix",
    "base_selector",
    "types",
    "embed",
)


def _build_options() -> Dict[str, Any]:
    options = {}
    for name in _BUILD_OPTION_FLAGS:
        value = getattr(FLAGS, name)
        if value is not None:
            options[name] = value
    return options


def _run_unit(unit_file: Path, options: Dict[str, Any]) -> str:
    host = DirectoryBuildHost(
        unit_file,
        FLAGS.output_dir,
        options=options,
        root_context=FLAGS.root_dir,
    )
    unit = config.load_unit(unit_file)
    css = loader.process_sync(unit, host)
    logging.info(
        "%s: %d dependencies, %d directories watched",
        unit_file,
        len(host.dependencies),
        len(host.context_dependencies),
    )
    return css


def _run(argv: Sequence[str]):
    unit_files = tuple(Path(f) for f in argv[1:])
    if not unit_files:
        raise app.UsageError("Please provide at least one font config")
    if FLAGS.output_file and len(unit_files) > 1:
        raise app.UsageError("--output_file only works with a single font config")

    options = _build_options()
    logging.info("Proceeding with %d config(s)", len(unit_files))
    for unit_file in unit_files:
        css = _run_unit(unit_file, options)
        output_file = FLAGS.output_file
        if output_file is None:
            output_file = str(Path(FLAGS.output_dir) / (unit_file.stem + ".css"))
        with file_printer(output_file) as print:
            print(css)
        if output_file != "-":
            logging.info("Wrote %s", output_file)


def main():
    # We don't seem to be __main__ when run as cli tool installed by setuptools
    app.run(_run)


if __name__ == "__main__":
    app.run(_run)
