# Copyright (C) 2018 Tetsuya Miura <miute.dev@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import math
from logging import getLogger

import numpy as np

from .illuminant import D50
from .lab import delta_e2000, lab_to_xyz_d50, xyz_d50_to_lab
from .profile import SRGB

logger = getLogger(__name__)

DELTA_E_LIMIT = 2.0
"""float: The largest deltaE 2000 accepted between a chroma-reduced color
and its clipped counterpart.
"""

MAX_CHROMA = 400.0

MAX_ITERATIONS = 1000
"""int: The maximum number of refinement steps of `clamp_rgb`."""

ROUNDING_TOLERANCE = 1e-4


def range_round_check(rgb):
    """Snaps components that are out of [0, 1] by a rounding error.

    Arguments:
        rgb (array_like): The components.
    Returns:
        tuple[numpy.ndarray, bool]: The snapped components, and True if
            every component is in range.
    """
    result = np.array(rgb, dtype=float)
    in_range = True
    for index, value in enumerate(result):
        if value < 0:
            if value > -ROUNDING_TOLERANCE:
                result[index] = 0.0
            else:
                in_range = False
        elif value > 1:
            if value < 1.0 + ROUNDING_TOLERANCE:
                result[index] = 1.0
            else:
                in_range = False
    return result, in_range


def _lab_to_rgb(lab, profile):
    return profile.from_xyz(lab_to_xyz_d50(lab), D50)


def _rgb_to_lab(rgb, profile):
    return xyz_d50_to_lab(profile.to_xyz(rgb, D50))


def clamp_rgb(lab, profile=SRGB):
    """Maps the Lab color `lab` into the gamut of `profile`.

    The lightness is limited to [0, 100], then the chroma is reduced,
    keeping lightness and hue, until clipping the components changes the
    color by less than `DELTA_E_LIMIT`.

    Arguments:
        lab (array_like): The color, as [L, a, b] (D50).
        profile (ColorProfile, optional): The destination color space.
    Returns:
        numpy.ndarray: The companded components, within [0, 1].
    """
    light, a, b = lab
    light = min(100.0, max(0.0, light))
    hue = math.atan2(b, a)
    cos_h, sin_h = math.cos(hue), math.sin(hue)
    chroma = min(math.hypot(a, b), MAX_CHROMA)

    def clip(chroma):
        current = [light, chroma * cos_h, chroma * sin_h]
        clipped = np.clip(_lab_to_rgb(current, profile), 0.0, 1.0)
        delta_e = delta_e2000(current, _rgb_to_lab(clipped, profile))
        return clipped, delta_e

    clipped, delta_e = clip(chroma)
    if delta_e < DELTA_E_LIMIT:
        return clipped

    eps = 0.025
    factor = 0.97
    for iteration in range(MAX_ITERATIONS):
        if delta_e < DELTA_E_LIMIT:
            if factor < 1:
                if eps < 9e-5:
                    logger.debug('clamp {} -> {} in {} steps'.format(
                        list(lab), list(clipped), iteration))
                    return clipped
                # drive the chroma back up
                eps *= 0.15
                factor = 1.0 + eps
        elif factor > 1:
            eps *= 0.15
            factor = 1.0 - eps
        chroma *= factor
        clipped, delta_e = clip(chroma)

    logger.debug('clamp {}: no convergence, chroma={}'.format(list(lab),
                                                              chroma))
    return clipped
