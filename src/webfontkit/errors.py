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

"""Errors raised while turning a font config into web font assets."""


class WebfontError(Exception):
    """Base for everything webfontkit raises on purpose."""


class ConfigError(WebfontError, ValueError):
    """The font config is invalid, or resolves to nothing usable."""


class ConfigParseError(ConfigError):
    """The font config could not be read at all."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Unable to parse font config {source}: {reason}")


class RasterizationError(WebfontError):
    """The glyph sources could not be turned into font binaries."""


class TemplateIOError(WebfontError, IOError):
    """A stylesheet template could not be read, or its output written."""
