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


def xy_to_xyz(x, y):
    """Returns the tristimulus values (Y = 1) of the chromaticity (x, y).

    Arguments:
        x (float): The x chromaticity coordinate.
        y (float): The y chromaticity coordinate.
    Returns:
        numpy.ndarray: The XYZ values.
    """
    return np.array([x / y, 1.0, (1.0 - x - y) / y])


def _constant(array):
    array.setflags(write=False)
    return array


D50 = _constant(xy_to_xyz(0.3457, 0.3585))
"""numpy.ndarray: The D50 reference white."""

D65 = _constant(xy_to_xyz(0.3127, 0.3290))
"""numpy.ndarray: The D65 reference white."""


def is_same_white(white1, white2):
    return np.allclose(white1, white2, rtol=0.0, atol=1e-12)
