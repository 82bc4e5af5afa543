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


import numpy as np
import pytest

from cssvalues.color import D50, D65, delta_e2000, lab_to_lch, \
    lab_to_xyz_d50, lch_to_lab, oklab_to_xyz_d65, xyz_d50_to_lab, \
    xyz_d65_to_oklab


def test_white():
    assert np.allclose(xyz_d50_to_lab(D50), [100.0, 0.0, 0.0], atol=1e-9)
    assert np.allclose(lab_to_xyz_d50([100.0, 0.0, 0.0]), D50, atol=1e-9)
    assert np.allclose(xyz_d65_to_oklab(D65), [1.0, 0.0, 0.0], atol=1e-3)


@pytest.mark.parametrize('lab', [
    [50.0, 20.0, -30.0],
    [5.0, 1.0, 1.0],
    [90.0, -60.0, 80.0],
])
def test_lab_round_trip(lab):
    assert np.allclose(xyz_d50_to_lab(lab_to_xyz_d50(lab)), lab, atol=1e-9)


def test_oklab_round_trip():
    oklab = [0.6, 0.1, -0.05]
    xyz = oklab_to_xyz_d65(oklab)
    assert np.allclose(xyz_d65_to_oklab(xyz), oklab, atol=1e-6)


def test_lch():
    lch = lab_to_lch([50.0, 0.0, -10.0])
    assert np.allclose(lch, [50.0, 10.0, 270.0])
    assert np.allclose(lch_to_lab(lch), [50.0, 0.0, -10.0], atol=1e-9)


@pytest.mark.parametrize('lab1, lab2, expected', [
    ([50.0, 2.6772, -79.7751], [50.0, 0.0, -82.7485], 2.0425),
    ([50.0, 2.5, 0.0], [50.0, 0.0, -2.5], 4.3065),
    ([50.0, 2.5, 0.0], [73.0, 25.0, -18.0], 27.1492),
    ([60.2574, -34.0099, 36.2677], [60.4626, -34.1751, 39.4387], 1.2644),
    ([22.7233, 20.0904, -46.6940], [23.0331, 14.9730, -42.5619], 2.0373),
])
def test_delta_e2000(lab1, lab2, expected):
    assert delta_e2000(lab1, lab2) == pytest.approx(expected, abs=1e-4)
    assert delta_e2000(lab2, lab1) == pytest.approx(expected, abs=1e-4)


def test_delta_e2000_same_color():
    assert delta_e2000([50.0, 10.0, 10.0], [50.0, 10.0, 10.0]) == 0.0
