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

from .illuminant import is_same_white

BRADFORD = np.array([
    [0.8951, 0.2664, -0.1614],
    [-0.7502, 1.7135, 0.0367],
    [0.0389, -0.0685, 1.0296],
])
BRADFORD.setflags(write=False)

BRADFORD_INVERSE = np.linalg.inv(BRADFORD)
BRADFORD_INVERSE.setflags(write=False)


def chromatic_adaptation_matrix(source_white, dest_white):
    """Returns the Bradford adaptation matrix from `source_white` to
    `dest_white`.

    Both whites are mapped into cone-response space; the ratios of the
    responses form a diagonal scale that is composed as
    inverse(Bradford) . diag(ratios) . Bradford.

    Arguments:
        source_white (array_like): The XYZ of the source white (Y = 1).
        dest_white (array_like): The XYZ of the destination white (Y = 1).
    Returns:
        numpy.ndarray: A 3x3 matrix.
    """
    source_cone = np.dot(BRADFORD, source_white)
    dest_cone = np.dot(BRADFORD, dest_white)
    scale = np.diag(dest_cone / source_cone)
    return np.dot(BRADFORD_INVERSE, np.dot(scale, BRADFORD))


def adapt(xyz, source_white, dest_white):
    """Adapts the XYZ coordinates `xyz` from `source_white` to `dest_white`.

    Returns:
        numpy.ndarray: The adapted XYZ. A copy of `xyz` if both whites are
            the same.
    """
    xyz = np.array(xyz, dtype=float)
    if is_same_white(source_white, dest_white):
        return xyz
    return np.dot(chromatic_adaptation_matrix(source_white, dest_white), xyz)
