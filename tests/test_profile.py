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


import copy

import numpy as np
import pytest

from cssvalues.color import D50, D65, SRGB, ColorProfile, get_profile, \
    profile_names
from cssvalues.exception import NotSupportedError

PROFILES = sorted(profile_names)

RGB_PROFILES = [name for name in PROFILES if not name.startswith('xyz')]


@pytest.mark.parametrize('name', PROFILES)
def test_gamma_round_trip(name):
    profile = get_profile(name)
    for x in np.linspace(-2.0, 2.0, 4001):
        x = float(x)
        assert abs(profile.linear_component(profile.gamma_companding(x))
                   - x) < 1e-9
        assert abs(profile.gamma_companding(profile.linear_component(x))
                   - x) < 1e-9


@pytest.mark.parametrize('name', PROFILES)
def test_matrix_inverse(name):
    profile = get_profile(name)
    identity = np.dot(profile.matrix, profile.inverse_matrix)
    assert np.allclose(identity, np.identity(3), rtol=0, atol=1e-9)


@pytest.mark.parametrize('name', RGB_PROFILES)
def test_white_point(name):
    profile = get_profile(name)
    white = np.dot(profile.matrix, [1.0, 1.0, 1.0])
    assert np.allclose(white, profile.white, rtol=0, atol=1e-9)


def test_profiles_are_shared():
    assert copy.deepcopy(SRGB) is SRGB
    assert copy.copy(SRGB) is SRGB
    with pytest.raises(ValueError):
        SRGB.matrix[0, 0] = 1.0


def test_get_profile():
    assert get_profile('sRGB') is SRGB
    assert np.array_equal(get_profile('xyz').white, D65)
    assert np.array_equal(get_profile('prophoto-rgb').white, D50)
    with pytest.raises(NotSupportedError):
        get_profile('cmyk')


def test_from_primaries():
    profile = ColorProfile.from_primaries(
        'srgb-derived', 0.64, 0.33, 0.30, 0.60, 0.15, 0.06, D65)
    assert np.allclose(profile.matrix, SRGB.matrix, rtol=0, atol=1e-4)


def test_srgb_round_trip():
    rgb = [0.2, 0.4, 0.6]
    xyz = SRGB.to_xyz(rgb)
    assert np.allclose(SRGB.from_xyz(xyz), rgb, rtol=0, atol=1e-9)
    xyz_d50 = SRGB.to_xyz(rgb, D50)
    assert np.allclose(SRGB.from_xyz(xyz_d50, D50), rgb, rtol=0, atol=1e-9)


def test_white_maps_to_white():
    for name in RGB_PROFILES:
        profile = get_profile(name)
        xyz = profile.to_xyz([1.0, 1.0, 1.0], D65)
        assert np.allclose(xyz, D65, rtol=0, atol=1e-6)
