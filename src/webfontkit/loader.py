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

"""Runs one font config unit through the whole pipeline.

resolve the plan => rasterize => publish each format => write the secondary
stylesheet, if any => return the primary stylesheet for the host to use as the
unit's content.

Sample usage, from a build tool that implements host.BuildHost:
    css = await loader.process(config.load_unit(unit_file), host)
"""

from absl import logging
import asyncio
from typing import Any, Mapping, Optional

from webfontkit import config, publish, rasterize as default_rasterizer, stylesheet
from webfontkit.config import GenerationPlan
from webfontkit.errors import RasterizationError
from webfontkit.rasterize import Rasterizer, RasterResult


async def rasterize(plan: GenerationPlan, rasterizer: Rasterizer) -> RasterResult:
    # Rasterizer failures propagate as they are, there is no retry
    if not plan.files:
        raise RasterizationError(f"{plan.font_name}: no files to process")
    return await rasterizer(plan)


def plan_for(unit: Mapping[str, Any], host) -> GenerationPlan:
    build_options = config.normalize_keys(host.options)
    if host.public_path is not None:
        build_options.setdefault("public_path", host.public_path)
    return config.resolve(unit, build_options, host.context, host=host)


async def process(
    unit: Mapping[str, Any],
    host,
    rasterizer: Optional[Rasterizer] = None,
) -> str:
    """Build the fonts for unit; returns the primary stylesheet."""
    if rasterizer is None:
        rasterizer = default_rasterizer.generate

    plan = plan_for(unit, host)
    logging.info("Generating %s from %d files", plan.font_name, len(plan.files))
    result = await rasterize(plan, rasterizer)

    outputs = publish.publish(plan, result.blobs, host)

    if plan.scss_dest is not None:
        stylesheet.write_scss(
            plan.scss_dest, plan.font_name, result.codepoints, plan.scss_template
        )

    return result.generate_css(publish.urls(outputs))


def process_sync(
    unit: Mapping[str, Any],
    host,
    rasterizer: Optional[Rasterizer] = None,
) -> str:
    return asyncio.run(process(unit, host, rasterizer))
