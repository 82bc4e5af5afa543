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

from ..exception import NotSupportedError
from .adaptation import adapt
from .illuminant import D50, D65, xy_to_xyz


def _readonly(matrix):
    matrix = np.array(matrix, dtype=float)
    matrix.setflags(write=False)
    return matrix


class ColorProfile(object):
    """An RGB color space: a primaries-to-XYZ matrix, its inverse, a
    reference white, and a pair of transfer functions.

    The transfer functions of this class are the identity, which is what
    the linear color spaces use. Profiles are immutable and shared: copying
    a profile returns the profile itself.
    """

    def __init__(self, name, matrix, white, inverse_matrix=None):
        """Constructs a ColorProfile object.

        Arguments:
            name (str): The name of the color space, as used in color().
            matrix (array_like): The 3x3 linear RGB to XYZ matrix.
            white (array_like): The reference white (Y = 1).
            inverse_matrix (array_like, optional): The XYZ to linear RGB
                matrix. If omitted, the inverse of `matrix` is used.
        """
        self._name = name
        self._matrix = _readonly(matrix)
        if inverse_matrix is None:
            inverse_matrix = np.linalg.inv(self._matrix)
        self._inverse_matrix = _readonly(inverse_matrix)
        self._white = _readonly(white)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, repr(self._name))

    @classmethod
    def from_primaries(cls, name, xr, yr, xg, yg, xb, yb, white):
        """Creates a profile from the chromaticities of its primaries.

        The columns of the unnormalized primaries matrix are scaled so that
        RGB (1, 1, 1) maps to `white`.

        Arguments:
            name (str): The name of the color space.
            xr, yr (float): The chromaticity of the red primary.
            xg, yg (float): The chromaticity of the green primary.
            xb, yb (float): The chromaticity of the blue primary.
            white (array_like): The reference white (Y = 1).
        Returns:
            ColorProfile: A new profile.
        """
        primaries = np.array([
            xy_to_xyz(xr, yr),
            xy_to_xyz(xg, yg),
            xy_to_xyz(xb, yb),
        ]).T
        scale = np.dot(np.linalg.inv(primaries), white)
        return cls(name, primaries * scale, white)

    @property
    def inverse_matrix(self):
        """numpy.ndarray: The XYZ to linear RGB matrix."""
        return self._inverse_matrix

    @property
    def matrix(self):
        """numpy.ndarray: The linear RGB to XYZ matrix."""
        return self._matrix

    @property
    def name(self):
        return self._name

    @property
    def white(self):
        """numpy.ndarray: The reference white."""
        return self._white

    def gamma_companding(self, x):
        """Returns the companded (non-linear) value of the linear component
        `x`.
        """
        return x

    def linear_component(self, x):
        """Returns the linear value of the companded component `x`."""
        return x

    def linear_rgb_to_xyz(self, rgb):
        return np.dot(self._matrix, rgb)

    def xyz_to_linear_rgb(self, xyz):
        return np.dot(self._inverse_matrix, xyz)

    def to_xyz(self, rgb, white=None):
        """Converts companded RGB components into XYZ.

        Arguments:
            rgb (array_like): The components.
            white (array_like, optional): The white of the result. Defaults
                to the white of this profile.
        Returns:
            numpy.ndarray: The XYZ values.
        """
        linear = [self.linear_component(float(x)) for x in rgb]
        xyz = self.linear_rgb_to_xyz(linear)
        if white is None:
            return xyz
        return adapt(xyz, self._white, white)

    def from_xyz(self, xyz, white=None):
        """Converts XYZ into companded RGB components.

        Arguments:
            xyz (array_like): The XYZ values.
            white (array_like, optional): The white of `xyz`. Defaults to
                the white of this profile.
        Returns:
            numpy.ndarray: The components, which may be out of range.
        """
        if white is not None:
            xyz = adapt(xyz, white, self._white)
        linear = self.xyz_to_linear_rgb(xyz)
        return np.array([self.gamma_companding(float(x)) for x in linear])


class SRGBProfile(ColorProfile):
    """The sRGB transfer functions (also used by Display P3)."""

    def gamma_companding(self, x):
        abs_x = abs(x)
        if abs_x <= 0.0031308:
            return 12.92 * x
        return math.copysign(1.055 * abs_x ** (1.0 / 2.4) - 0.055, x)

    def linear_component(self, x):
        abs_x = abs(x)
        if abs_x <= 0.04045:
            return x / 12.92
        return math.copysign(((abs_x + 0.055) / 1.055) ** 2.4, x)


class A98RGBProfile(ColorProfile):

    def gamma_companding(self, x):
        return math.copysign(abs(x) ** (256.0 / 563.0), x)

    def linear_component(self, x):
        return math.copysign(abs(x) ** (563.0 / 256.0), x)


class ProPhotoRGBProfile(ColorProfile):

    THRESHOLD = 1.0 / 512.0

    def gamma_companding(self, x):
        abs_x = abs(x)
        if abs_x < ProPhotoRGBProfile.THRESHOLD:
            return 16.0 * x
        return math.copysign(abs_x ** (1.0 / 1.8), x)

    def linear_component(self, x):
        abs_x = abs(x)
        if abs_x < 16.0 * ProPhotoRGBProfile.THRESHOLD:
            return x / 16.0
        return math.copysign(abs_x ** 1.8, x)


class Rec2020Profile(ColorProfile):

    ALPHA = 1.09929682680944
    BETA = 0.018053968510807

    def gamma_companding(self, x):
        abs_x = abs(x)
        if abs_x < Rec2020Profile.BETA:
            return 4.5 * x
        alpha = Rec2020Profile.ALPHA
        return math.copysign(alpha * abs_x ** 0.45 - (alpha - 1.0), x)

    def linear_component(self, x):
        abs_x = abs(x)
        if abs_x < 4.5 * Rec2020Profile.BETA:
            return x / 4.5
        alpha = Rec2020Profile.ALPHA
        return math.copysign(((abs_x + alpha - 1.0) / alpha) ** (1.0 / 0.45),
                             x)


_SRGB_MATRIX = [
    [0.41239079926595934, 0.357584339383878, 0.1804807884018343],
    [0.21263900587151027, 0.715168678767756, 0.07219231536073371],
    [0.01933081871559182, 0.11919477979462598, 0.9505321522496607],
]

_SRGB_INVERSE_MATRIX = [
    [3.24096994190452, -1.53738317757, -0.498610760293],
    [-0.96924363628088, 1.8759675015077, 0.04155505740718],
    [0.055630079697, -0.20397695888898, 1.05697151424288],
]

SRGB = SRGBProfile('srgb', _SRGB_MATRIX, D65, _SRGB_INVERSE_MATRIX)

SRGB_LINEAR = ColorProfile('srgb-linear', _SRGB_MATRIX, D65,
                           _SRGB_INVERSE_MATRIX)

DISPLAY_P3 = SRGBProfile.from_primaries(
    'display-p3', 0.680, 0.320, 0.265, 0.690, 0.150, 0.060, D65)

A98_RGB = A98RGBProfile.from_primaries(
    'a98-rgb', 0.64, 0.33, 0.21, 0.71, 0.15, 0.06, D65)

PROPHOTO_RGB = ProPhotoRGBProfile.from_primaries(
    'prophoto-rgb', 0.734699, 0.265301, 0.159597, 0.840403, 0.036598,
    0.000105, D50)

REC2020 = Rec2020Profile.from_primaries(
    'rec2020', 0.708, 0.292, 0.170, 0.797, 0.131, 0.046, D65)

XYZ_D50 = ColorProfile('xyz-d50', np.identity(3), D50)

XYZ_D65 = ColorProfile('xyz-d65', np.identity(3), D65)

_PROFILES = {
    'srgb': SRGB,
    'srgb-linear': SRGB_LINEAR,
    'display-p3': DISPLAY_P3,
    'a98-rgb': A98_RGB,
    'prophoto-rgb': PROPHOTO_RGB,
    'rec2020': REC2020,
    'xyz': XYZ_D65,
    'xyz-d50': XYZ_D50,
    'xyz-d65': XYZ_D65,
}

profile_names = frozenset(_PROFILES)


def get_profile(name):
    """Returns the built-in profile for the color space `name`.

    Raises:
        NotSupportedError: If the color space is not supported.
    """
    profile = _PROFILES.get(name.lower())
    if profile is None:
        raise NotSupportedError('Color space is not supported: '
                                + repr(name))
    return profile
