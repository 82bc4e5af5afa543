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

import numpy as np

from .illuminant import D50

EPSILON = 216.0 / 24389.0
KAPPA = 24389.0 / 27.0

_XYZ_D65_TO_LMS = np.array([
    [0.8189330101, 0.3618667424, -0.1288597137],
    [0.0329845436, 0.9293118715, 0.0361456387],
    [0.0482003018, 0.2643662691, 0.6338517070],
])

_LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

_LMS_TO_XYZ_D65 = np.linalg.inv(_XYZ_D65_TO_LMS)

_OKLAB_TO_LMS = np.linalg.inv(_LMS_TO_OKLAB)


def _f(t):
    if t > EPSILON:
        return t ** (1.0 / 3.0)
    return (KAPPA * t + 16.0) / 116.0


def xyz_d50_to_lab(xyz):
    """Converts XYZ (D50) into CIE Lab.

    Returns:
        numpy.ndarray: [L, a, b].
    """
    x, y, z = np.asarray(xyz, dtype=float) / D50
    fx, fy, fz = _f(x), _f(y), _f(z)
    return np.array([116.0 * fy - 16.0, 500.0 * (fx - fy),
                     200.0 * (fy - fz)])


def lab_to_xyz_d50(lab):
    """Converts CIE Lab into XYZ (D50)."""
    light, a, b = lab
    fy = (light + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    x = fx ** 3 if fx ** 3 > EPSILON else (116.0 * fx - 16.0) / KAPPA
    y = fy ** 3 if light > KAPPA * EPSILON else light / KAPPA
    z = fz ** 3 if fz ** 3 > EPSILON else (116.0 * fz - 16.0) / KAPPA
    return np.array([x, y, z]) * D50


def lab_to_lch(lab):
    """Converts [L, a, b] into [L, C, h], with the hue in degrees."""
    light, a, b = lab
    hue = math.degrees(math.atan2(b, a)) % 360.0
    return np.array([light, math.hypot(a, b), hue])


def lch_to_lab(lch):
    light, chroma, hue = lch
    radians = math.radians(hue)
    return np.array([light, chroma * math.cos(radians),
                     chroma * math.sin(radians)])


def oklab_to_xyz_d65(oklab):
    lms = np.dot(_OKLAB_TO_LMS, oklab) ** 3
    return np.dot(_LMS_TO_XYZ_D65, lms)


def xyz_d65_to_oklab(xyz):
    lms = np.cbrt(np.dot(_XYZ_D65_TO_LMS, xyz))
    return np.dot(_LMS_TO_OKLAB, lms)


def delta_e2000(lab1, lab2):
    """Returns the CIE deltaE 2000 color difference of two Lab colors."""
    l1, a1, b1 = lab1
    l2, a2, b2 = lab2
    c_av = (math.hypot(a1, b1) + math.hypot(a2, b2)) * 0.5
    c_av7 = c_av ** 7
    g = 0.5 * (1.0 - math.sqrt(c_av7 / (c_av7 + 25.0 ** 7)))
    a1p = a1 * (1.0 + g)
    a2p = a2 * (1.0 + g)
    c1p = math.hypot(a1p, b1)
    c2p = math.hypot(a2p, b2)
    h1p = math.atan2(b1, a1p) % (2.0 * math.pi)
    h2p = math.atan2(b2, a2p) % (2.0 * math.pi)

    delta_lp = l2 - l1
    delta_cp = c2p - c1p
    if c1p * c2p == 0:
        delta_hp = 0.0
        h_av = h1p + h2p
    else:
        delta_hp = h2p - h1p
        h_av = (h1p + h2p) * 0.5
        if abs(delta_hp) > math.pi:
            delta_hp += -2.0 * math.pi if delta_hp > 0 else 2.0 * math.pi
            h_av += math.pi if h_av < math.pi else -math.pi
    delta_big_hp = 2.0 * math.sqrt(c1p * c2p) * math.sin(delta_hp * 0.5)

    l_av = (l1 + l2) * 0.5
    cp_av = (c1p + c2p) * 0.5
    t = (1.0
         - 0.17 * math.cos(h_av - math.radians(30.0))
         + 0.24 * math.cos(2.0 * h_av)
         + 0.32 * math.cos(3.0 * h_av + math.radians(6.0))
         - 0.20 * math.cos(4.0 * h_av - math.radians(63.0)))
    delta_theta = math.radians(30.0) * math.exp(
        -((h_av - math.radians(275.0)) / math.radians(25.0)) ** 2)
    cp_av7 = cp_av ** 7
    r_c = 2.0 * math.sqrt(cp_av7 / (cp_av7 + 25.0 ** 7))
    l50 = (l_av - 50.0) ** 2
    s_l = 1.0 + 0.015 * l50 / math.sqrt(20.0 + l50)
    s_c = 1.0 + 0.045 * cp_av
    s_h = 1.0 + 0.015 * cp_av * t
    r_t = -math.sin(2.0 * delta_theta) * r_c

    dl = delta_lp / s_l
    dc = delta_cp / s_c
    dh = delta_big_hp / s_h
    return math.sqrt(max(0.0, dl * dl + dc * dc + dh * dh + r_t * dc * dh))
