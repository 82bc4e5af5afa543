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

import tinycss2.color3

from ..color.adaptation import adapt
from ..color.gamut import clamp_rgb, range_round_check
from ..color.illuminant import D50, D65
from ..color.lab import delta_e2000, lab_to_lch, lab_to_xyz_d50, lch_to_lab, \
    oklab_to_xyz_d65, xyz_d50_to_lab, xyz_d65_to_oklab
from ..color.profile import SRGB, ColorProfile, get_profile, profile_names
from ..exception import CSSSyntaxError, InvalidAccessError, \
    InvalidModificationError, InvalidStateError, NotSupportedError, \
    TypeMismatchError
from .evaluator import Evaluator
from .types import IdentifierValue, NumberValue, PrimitiveValue, Type
from .units import UnitType

_COMPONENT_TYPES = frozenset([
    Type.NUMERIC, Type.EXPRESSION, Type.MATH_FUNCTION,
])


def _check_component(value):
    if isinstance(value, IdentifierValue) and value.name.lower() == 'none':
        return value
    if (isinstance(value, PrimitiveValue)
            and value.primitive_type in _COMPONENT_TYPES):
        return value
    raise TypeMismatchError('Invalid color component: ' + repr(value))


def component_value(value, percent_scale=1.0):
    """Returns the float value of a color component.

    Arguments:
        value (PrimitiveValue): A number, a percentage, an angle (converted
            to degrees), a calculated value, or the 'none' keyword.
        percent_scale (float, optional): The value of 100%.
    Returns:
        float: The value.
    Raises:
        InvalidStateError: If the component cannot be converted.
    """
    if isinstance(value, IdentifierValue) and value.name.lower() == 'none':
        return 0.0
    if value.primitive_type in (Type.EXPRESSION, Type.MATH_FUNCTION):
        evaluator = Evaluator(
            percentage_resolver=lambda percentage: NumberValue(
                UnitType.NUMBER, percentage.value * percent_scale / 100.0))
        value = evaluator.evaluate(value)
    if isinstance(value, NumberValue):
        if value.unit == UnitType.NUMBER:
            return value.value
        elif value.unit == UnitType.PERCENT:
            return value.value * percent_scale / 100.0
        elif UnitType.is_angle(value.unit):
            return UnitType.convert(value.value, value.unit, UnitType.DEG)
    raise InvalidStateError('Cannot convert the color component: '
                            + value.tostring())


def _hsl_to_rgb(hue, saturation, lightness):
    hue %= 360.0

    def f(n):
        k = (n + hue / 30.0) % 12.0
        a = saturation * min(lightness, 1.0 - lightness)
        return lightness - a * max(-1.0, min(k - 3.0, 9.0 - k, 1.0))

    return [f(0), f(8), f(4)]


def _hwb_to_rgb(hue, whiteness, blackness):
    if whiteness + blackness >= 1.0:
        gray = whiteness / (whiteness + blackness)
        return [gray, gray, gray]
    return [x * (1.0 - whiteness - blackness) + whiteness
            for x in _hsl_to_rgb(hue, 1.0, 0.5)]


def _rgb_to_hsl(red, green, blue):
    high = max(red, green, blue)
    low = min(red, green, blue)
    lightness = (high + low) / 2.0
    delta = high - low
    hue = saturation = 0.0
    if delta != 0:
        if 0.0 < lightness < 1.0:
            saturation = (high - lightness) / min(lightness, 1.0 - lightness)
        if high == red:
            hue = (green - blue) / delta + (6.0 if green < blue else 0.0)
        elif high == green:
            hue = (blue - red) / delta + 2.0
        else:
            hue = (red - green) / delta + 4.0
        hue *= 60.0
    return [hue, saturation, lightness]


def _rgb_to_hwb(red, green, blue):
    hue = _rgb_to_hsl(red, green, blue)[0]
    return [hue, min(red, green, blue), 1.0 - max(red, green, blue)]


class ColorValue(PrimitiveValue):
    """The base class of color values.

    Components are stored alpha first: index 0 is the alpha channel and
    indexes 1 to `component_count` are the color channels.
    """

    component_count = 3

    def __init__(self, components, alpha=None):
        super().__init__()
        if len(components) != self.component_count:
            raise InvalidModificationError(
                'Expected {} components, got {}'.format(
                    self.component_count, len(components)))
        if alpha is None:
            alpha = NumberValue(UnitType.NUMBER, 1, as_integer=True)
        self._components = [_check_component(alpha)]
        self._components.extend(
            _check_component(component) for component in components)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._components == other._components

    @property
    def alpha(self):
        return self._components[0]

    @property
    def components(self):
        """list[PrimitiveValue]: The color channels, without alpha."""
        return self._components[1:]

    @property
    def primitive_type(self):
        return Type.COLOR

    def _alpha_text(self, minify):
        return self._components[0].tostring(minify=minify)

    def _channels_text(self, minify, separator=' '):
        return separator.join(component.tostring(minify=minify)
                              for component in self._components[1:])

    def _modern_tostring(self, function_name, minify, prefix=''):
        s = function_name + '(' + prefix + self._channels_text(minify)
        if not self.is_opaque():
            s += '/' if minify else ' / '
            s += self._alpha_text(minify)
        return s + ')'

    @property
    def color_space(self):
        """str: The color space the channels are expressed in."""
        raise NotImplementedError

    def _native_components(self):
        raise NotImplementedError

    def _srgb_components(self):
        return None

    def _srgb_floats(self):
        rgb = self._srgb_components()
        if rgb is None:
            rgb = SRGB.from_xyz(self.to_xyz(D65))
        return rgb

    def _components_in(self, space):
        if space == self.color_space:
            return self._native_components()
        if space in ('hsl', 'hwb'):
            rgb = self._srgb_floats()
            if space == 'hsl':
                return _rgb_to_hsl(*rgb)
            return _rgb_to_hwb(*rgb)
        elif space in ('lab', 'lch'):
            lab = xyz_d50_to_lab(self.to_xyz(D50))
            return list(lab) if space == 'lab' else list(lab_to_lch(lab))
        elif space in ('oklab', 'oklch'):
            oklab = xyz_d65_to_oklab(self.to_xyz(D65))
            if space == 'oklab':
                return list(oklab)
            return list(lab_to_lch(oklab))
        profile = get_profile(space)
        return list(profile.from_xyz(self.to_xyz(profile.white),
                                     profile.white))

    def alpha_value(self):
        """Returns the alpha channel as a float in [0, 1]."""
        return min(1.0, max(0.0, component_value(self._components[0])))

    def get_component(self, index):
        """Returns the component at `index` (0 is alpha).

        Raises:
            InvalidAccessError: If `index` is out of range.
        """
        if not 0 <= index < len(self._components):
            raise InvalidAccessError('Invalid component index: '
                                     + repr(index))
        return self._components[index]

    def is_opaque(self):
        alpha = self._components[0]
        return (isinstance(alpha, NumberValue)
                and ((alpha.unit == UnitType.NUMBER and alpha.value == 1)
                     or (alpha.unit == UnitType.PERCENT
                         and alpha.value == 100)))

    def set_alpha(self, value):
        self.set_component(0, value)

    def set_component(self, index, value):
        """Replaces the component at `index` (0 is alpha).

        Raises:
            NoModificationAllowedError: If this is a subproperty value.
            InvalidAccessError: If `index` is out of range.
            TypeMismatchError: If `value` is not a numeric primitive.
        """
        self._check_modification()
        if not 0 <= index < len(self._components):
            raise InvalidAccessError('Invalid component index: '
                                     + repr(index))
        self._components[index] = _check_component(value)

    def set_components(self, components):
        """Replaces the color channels.

        Raises:
            InvalidModificationError: If the number of components is wrong.
        """
        self._check_modification()
        if len(components) != self.component_count:
            raise InvalidModificationError(
                'Expected {} components, got {}'.format(
                    self.component_count, len(components)))
        checked = [_check_component(component) for component in components]
        self._components[1:] = checked

    def to_srgb(self, clamp=True):
        """Converts this color into sRGB.

        Arguments:
            clamp (bool, optional): If True, a color outside the sRGB gamut
                is mapped into it by reducing its chroma in Lab. Otherwise
                the out-of-range components are returned unchanged.
        Returns:
            RGBColorValue: A new color.
        """
        rgb, in_range = range_round_check(self._srgb_floats())
        if not in_range and clamp:
            lab = xyz_d50_to_lab(self.to_xyz(D50))
            rgb = clamp_rgb(lab, SRGB)
        return RGBColorValue.from_floats(rgb,
                                         copy.deepcopy(self._components[0]))

    def to_color_space(self, space):
        """Converts this color into another color space.

        Arguments:
            space (str): 'srgb', 'hsl', 'hwb', 'lab', 'lch', 'oklab',
                'oklch', or the name of a predefined color() space.
        Returns:
            ColorValue: A new color with the same alpha. Colors outside
                the destination gamut are not clamped.
        Raises:
            NotSupportedError: If `space` is not supported.
        """
        space = space.lower()
        return _create_in_space(space, self._components_in(space),
                                copy.deepcopy(self._components[0]))

    def to_hsl(self):
        return self.to_color_space('hsl')

    def to_lab(self):
        return self.to_color_space('lab')

    def to_lch(self):
        return self.to_color_space('lch')

    def delta_e2000(self, other):
        """Returns the CIE deltaE 2000 difference to `other`.

        Arguments:
            other (ColorValue or ColorMixValue): The color to compare with.
        Returns:
            float: The difference; 0 for identical colors.
        """
        return delta_e2000(xyz_d50_to_lab(self.to_xyz(D50)),
                           xyz_d50_to_lab(other.to_xyz(D50)))

    def to_xyz(self, white=D65):
        """Converts this color into XYZ.

        Arguments:
            white (array_like, optional): The reference white of the result.
        Returns:
            numpy.ndarray: The XYZ values.
        """
        raise NotImplementedError


class RGBColorValue(ColorValue):
    """An sRGB color written as a hex color, a color keyword, or rgb()."""

    def __init__(self, components, alpha=None, legacy=False, text=None):
        """Constructs an RGBColorValue object.

        Arguments:
            components (list[PrimitiveValue]): The red, green and blue
                channels, as numbers in [0, 255] or percentages.
            alpha (PrimitiveValue, optional): The alpha channel.
            legacy (bool, optional): True to serialize with commas.
            text (str, optional): The hex color or keyword the value was
                written as. It is dropped on modification.
        """
        super().__init__(components, alpha)
        self._legacy = legacy
        self._text = text

    @staticmethod
    def _from_rgba(rgba, text):
        components = [NumberValue(UnitType.NUMBER, round(x * 255, 6))
                      for x in rgba[:3]]
        alpha = NumberValue(UnitType.NUMBER, rgba[3])
        return RGBColorValue(components, alpha, text=text)

    @staticmethod
    def from_floats(rgb, alpha=None):
        """Creates a color from companded components in [0, 1]."""
        components = [NumberValue(UnitType.NUMBER, float(x) * 255.0)
                      for x in rgb]
        return RGBColorValue(components, alpha)

    @staticmethod
    def from_hex(text):
        """Creates a color from a hex color such as '#fa0' or 'ffaa0080'.

        Raises:
            CSSSyntaxError: If `text` is not a valid hex color.
        """
        text = text.lstrip('#')
        rgba = tinycss2.color3.parse_color('#' + text)
        if rgba is None:
            raise CSSSyntaxError('Invalid hex color: ' + repr('#' + text))
        return RGBColorValue._from_rgba(rgba, '#' + text.lower())

    @staticmethod
    def from_keyword(name):
        """Creates a color from a named color or 'transparent'.

        Returns:
            RGBColorValue: A new color, or None if `name` is not a color
                keyword.
        """
        rgba = tinycss2.color3.parse_color(name)
        if rgba is None or isinstance(rgba, str):
            # 'currentcolor' depends on the element
            return None
        return RGBColorValue._from_rgba(rgba, name.lower())

    @property
    def color_space(self):
        return 'srgb'

    @property
    def legacy(self):
        return self._legacy

    def _native_components(self):
        return self.tolist()

    def _srgb_components(self):
        return self.tolist()

    def set_component(self, index, value):
        super().set_component(index, value)
        self._text = None

    def set_components(self, components):
        super().set_components(components)
        self._text = None

    def to_xyz(self, white=D65):
        return SRGB.to_xyz(self.tolist(), white)

    def tolist(self):
        """Returns [red, green, blue] as floats; in-gamut colors are within
        [0, 1].
        """
        return [component_value(component, 255.0) / 255.0
                for component in self._components[1:]]

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        if self._text is not None:
            return self._text
        if not self._legacy:
            return self._modern_tostring('rgb', minify)
        comma = ',' if minify else ', '
        s = self._channels_text(minify, comma)
        if self.is_opaque():
            return 'rgb(' + s + ')'
        return 'rgba(' + s + comma + self._alpha_text(minify) + ')'


class HSLColorValue(ColorValue):
    """An hsl() or hsla() color."""

    def __init__(self, components, alpha=None, legacy=False):
        super().__init__(components, alpha)
        self._legacy = legacy

    @property
    def color_space(self):
        return 'hsl'

    @property
    def legacy(self):
        return self._legacy

    def _native_components(self):
        hue, saturation, lightness = self._components[1:]
        return [component_value(hue),
                component_value(saturation, 100.0) / 100.0,
                component_value(lightness, 100.0) / 100.0]

    def _srgb_components(self):
        return _hsl_to_rgb(*self._native_components())

    def to_xyz(self, white=D65):
        return SRGB.to_xyz(self._srgb_components(), white)

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        if not self._legacy:
            return self._modern_tostring('hsl', minify)
        comma = ',' if minify else ', '
        s = self._channels_text(minify, comma)
        if self.is_opaque():
            return 'hsl(' + s + ')'
        return 'hsla(' + s + comma + self._alpha_text(minify) + ')'


class HWBColorValue(ColorValue):
    """An hwb() color."""

    @property
    def color_space(self):
        return 'hwb'

    def _native_components(self):
        hue, whiteness, blackness = self._components[1:]
        return [component_value(hue),
                component_value(whiteness, 100.0) / 100.0,
                component_value(blackness, 100.0) / 100.0]

    def _srgb_components(self):
        return _hwb_to_rgb(*self._native_components())

    def to_xyz(self, white=D65):
        return SRGB.to_xyz(self._srgb_components(), white)

    def tostring(self, **kwargs):
        return self._modern_tostring('hwb', kwargs.get('minify', False))


class LabColorValue(ColorValue):
    """A lab() or, if `ok` is True, an oklab() color."""

    def __init__(self, components, alpha=None, ok=False):
        super().__init__(components, alpha)
        self._ok = ok

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is not True:
            return result
        return self._ok == other._ok

    @property
    def color_space(self):
        return 'oklab' if self._ok else 'lab'

    @property
    def ok(self):
        return self._ok

    def _native_components(self):
        return self.to_lab_components()

    def to_lab_components(self):
        """Returns [L, a, b] as floats."""
        light, a, b = self._components[1:]
        if self._ok:
            return [component_value(light, 1.0), component_value(a, 0.4),
                    component_value(b, 0.4)]
        return [component_value(light, 100.0), component_value(a, 125.0),
                component_value(b, 125.0)]

    def to_xyz(self, white=D65):
        lab = self.to_lab_components()
        if self._ok:
            return adapt(oklab_to_xyz_d65(lab), D65, white)
        return adapt(lab_to_xyz_d50(lab), D50, white)

    def tostring(self, **kwargs):
        return self._modern_tostring('oklab' if self._ok else 'lab',
                                     kwargs.get('minify', False))


class LCHColorValue(ColorValue):
    """An lch() or, if `ok` is True, an oklch() color."""

    def __init__(self, components, alpha=None, ok=False):
        super().__init__(components, alpha)
        self._ok = ok

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is not True:
            return result
        return self._ok == other._ok

    @property
    def color_space(self):
        return 'oklch' if self._ok else 'lch'

    @property
    def ok(self):
        return self._ok

    def _native_components(self):
        light, chroma, hue = self._components[1:]
        if self._ok:
            return [component_value(light, 1.0),
                    component_value(chroma, 0.4), component_value(hue)]
        return [component_value(light, 100.0),
                component_value(chroma, 150.0), component_value(hue)]

    def to_lab_components(self):
        return list(lch_to_lab(self._native_components()))

    def to_xyz(self, white=D65):
        lab = self.to_lab_components()
        if self._ok:
            return adapt(oklab_to_xyz_d65(lab), D65, white)
        return adapt(lab_to_xyz_d50(lab), D50, white)

    def tostring(self, **kwargs):
        return self._modern_tostring('oklch' if self._ok else 'lch',
                                     kwargs.get('minify', False))


class ProfiledColorValue(ColorValue):
    """A color() value in a predefined RGB or XYZ color space."""

    def __init__(self, space, components, alpha=None):
        """Constructs a ProfiledColorValue object.

        Arguments:
            space (str or ColorProfile): The name of the color space, whose
                profile is looked up on first use, or a profile.
            components (list[PrimitiveValue]): The three channels.
            alpha (PrimitiveValue, optional): The alpha channel.
        """
        super().__init__(components, alpha)
        if isinstance(space, ColorProfile):
            self._space = space.name
            self._profile = space
        else:
            self._space = space.lower()
            self._profile = None

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is not True:
            return result
        return self._space == other._space

    @property
    def color_space(self):
        return self._space

    @property
    def profile(self):
        """ColorProfile: The profile of the color space.

        Raises:
            NotSupportedError: If the color space is not supported.
        """
        if self._profile is None:
            self._profile = get_profile(self._space)
        return self._profile

    def _native_components(self):
        return self.tolist()

    def _srgb_components(self):
        if self._space == SRGB.name:
            return self.tolist()
        return None

    def to_xyz(self, white=D65):
        """Converts this color into XYZ.

        Raises:
            NotSupportedError: If the color space is not supported.
            InvalidStateError: If a component is not a number or a
                percentage.
        """
        profile = self.profile
        return profile.to_xyz(self.tolist(), white)

    def tolist(self):
        return [component_value(component)
                for component in self._components[1:]]

    def tostring(self, **kwargs):
        return self._modern_tostring('color', kwargs.get('minify', False),
                                     self._space + ' ')


def create_color_value(function_name, components, alpha=None, legacy=False):
    """Creates a color value from a color function.

    Arguments:
        function_name (str): 'rgb', 'rgba', 'hsl', 'hsla', 'hwb', 'lab',
            'lch', 'oklab' or 'oklch'.
        components (list[PrimitiveValue]): The three channels.
        alpha (PrimitiveValue, optional): The alpha channel.
        legacy (bool, optional): True if the comma syntax was used.
    Returns:
        ColorValue: A new color.
    Raises:
        NotSupportedError: If `function_name` is not a color function.
    """
    if function_name in ('rgb', 'rgba'):
        return RGBColorValue(components, alpha, legacy)
    elif function_name in ('hsl', 'hsla'):
        return HSLColorValue(components, alpha, legacy)
    elif function_name == 'hwb':
        return HWBColorValue(components, alpha)
    elif function_name in ('lab', 'oklab'):
        return LabColorValue(components, alpha, function_name == 'oklab')
    elif function_name in ('lch', 'oklch'):
        return LCHColorValue(components, alpha, function_name == 'oklch')
    raise NotSupportedError('Not a color function: ' + repr(function_name))


color_function_set = frozenset([
    'rgb', 'rgba', 'hsl', 'hsla', 'hwb', 'lab', 'lch', 'oklab', 'oklch',
])

color_space_set = frozenset(profile_names | {
    'hsl', 'hwb', 'lab', 'lch', 'oklab', 'oklch',
})

hue_method_set = frozenset([
    'shorter', 'longer', 'increasing', 'decreasing',
])

_HUE_INDEXES = {
    'hsl': 0,
    'hwb': 0,
    'lch': 2,
    'oklch': 2,
}

_ACHROMATIC_EPSILON = 1e-6


def _create_in_space(space, values, alpha):
    if space == 'srgb':
        return RGBColorValue.from_floats(values, alpha)
    elif space in ('hsl', 'hwb'):
        hue, x, y = values
        components = [NumberValue(UnitType.NUMBER, float(hue)),
                      NumberValue(UnitType.PERCENT, float(x) * 100.0),
                      NumberValue(UnitType.PERCENT, float(y) * 100.0)]
        if space == 'hsl':
            return HSLColorValue(components, alpha)
        return HWBColorValue(components, alpha)
    components = [NumberValue(UnitType.NUMBER, float(x)) for x in values]
    if space in ('lab', 'oklab'):
        return LabColorValue(components, alpha, space == 'oklab')
    elif space in ('lch', 'oklch'):
        return LCHColorValue(components, alpha, space == 'oklch')
    get_profile(space)
    return ProfiledColorValue(space, components, alpha)


def _is_powerless_hue(space, values):
    if space == 'hsl':
        return abs(values[1]) < _ACHROMATIC_EPSILON
    elif space == 'hwb':
        return values[1] + values[2] >= 1.0 - _ACHROMATIC_EPSILON
    return abs(values[1]) < _ACHROMATIC_EPSILON * 100.0


def interpolate_hue(hue1, hue2, fraction, method=None):
    """Interpolates between two hues in degrees.

    Arguments:
        hue1 (float): The start hue.
        hue2 (float): The end hue.
        fraction (float): The weight of `hue2`, in [0, 1].
        method (str, optional): 'shorter' (the default), 'longer',
            'increasing' or 'decreasing'.
    Returns:
        float: The hue, in [0, 360).
    """
    hue1 %= 360.0
    hue2 %= 360.0
    diff = hue2 - hue1
    if method in (None, 'shorter'):
        if diff > 180.0:
            hue1 += 360.0
        elif diff < -180.0:
            hue2 += 360.0
    elif method == 'longer':
        if 0.0 < diff < 180.0:
            hue1 += 360.0
        elif -180.0 < diff <= 0.0:
            hue2 += 360.0
    elif method == 'increasing':
        if diff < 0.0:
            hue2 += 360.0
    elif method == 'decreasing':
        if diff > 0.0:
            hue1 += 360.0
    else:
        raise NotSupportedError('Unknown hue interpolation method: '
                                + repr(method))
    return (hue1 * (1.0 - fraction) + hue2 * fraction) % 360.0


def _check_mix_color(value):
    if isinstance(value, (ColorValue, ColorMixValue)):
        return value
    if isinstance(value, IdentifierValue):
        name = value.name.lower()
        if (name == 'currentcolor'
                or RGBColorValue.from_keyword(name) is not None):
            return value
    raise TypeMismatchError('Not a color: ' + repr(value))


def _check_mix_percentage(value):
    if value is None:
        return None
    if (isinstance(value, NumberValue) and value.unit == UnitType.PERCENT
            and 0 <= value.value <= 100):
        return value
    raise TypeMismatchError('Invalid color-mix() percentage: '
                            + repr(value))


def _resolve_color(value):
    if isinstance(value, ColorValue):
        return value
    elif isinstance(value, ColorMixValue):
        return value.mix()
    color = RGBColorValue.from_keyword(value.name)
    if color is None:
        raise InvalidStateError('Cannot mix ' + repr(value.name)
                                + ' without an element')
    return color


class ColorMixValue(PrimitiveValue):
    """A color-mix() value.

    The two colors are converted into the interpolation color space and
    mixed component by component; hue components follow the hue
    interpolation method. Alpha is interpolated without premultiplication.
    """

    def __init__(self, color_space, color1, color2, percent1=None,
                 percent2=None, hue_method=None):
        """Constructs a ColorMixValue object.

        Arguments:
            color_space (str): The interpolation color space, such as
                'srgb', 'oklab' or 'lch'.
            color1 (PrimitiveValue): The first color: a color value, a
                nested color-mix(), or a color keyword.
            color2 (PrimitiveValue): The second color.
            percent1 (NumberValue, optional): The percentage of `color1`.
            percent2 (NumberValue, optional): The percentage of `color2`.
            hue_method (str, optional): The hue interpolation method; only
                valid for hsl, hwb, lch and oklch.
        Raises:
            NotSupportedError: If the color space is not supported.
            TypeMismatchError: If an argument has a wrong type or the
                percentages are out of range or both zero.
        """
        super().__init__()
        space = color_space.lower()
        if space not in color_space_set:
            raise NotSupportedError('Color space is not supported: '
                                    + repr(color_space))
        if hue_method is not None:
            hue_method = hue_method.lower()
            if space not in _HUE_INDEXES or hue_method not in hue_method_set:
                raise TypeMismatchError(
                    'Invalid hue interpolation method for {}: {}'.format(
                        space, repr(hue_method)))
        percent1 = _check_mix_percentage(percent1)
        percent2 = _check_mix_percentage(percent2)
        if (percent1 is not None and percent2 is not None
                and percent1.value + percent2.value == 0):
            raise TypeMismatchError('color-mix() percentages sum to zero')
        self._space = space
        self._hue_method = hue_method
        self._colors = [_check_mix_color(color1), _check_mix_color(color2)]
        self._percentages = [percent1, percent2]

    def __eq__(self, other):
        if not isinstance(other, ColorMixValue):
            return NotImplemented
        return (self._space == other._space
                and self._hue_method == other._hue_method
                and self._colors == other._colors
                and self._percentages == other._percentages)

    @property
    def color_space(self):
        return self._space

    @property
    def hue_method(self):
        """str: The hue interpolation method, or None."""
        return self._hue_method

    @property
    def color1(self):
        return self._colors[0]

    @property
    def color2(self):
        return self._colors[1]

    @property
    def percent1(self):
        return self._percentages[0]

    @property
    def percent2(self):
        return self._percentages[1]

    @property
    def primitive_type(self):
        return Type.COLOR

    def _reset_subproperty(self):
        super()._reset_subproperty()
        for value in self._colors:
            value._reset_subproperty()

    def fractions(self):
        """Returns the normalized weights of the two colors.

        Returns:
            tuple[float, float, float]: The weights of the first and second
                colors, which add up to 1, and the alpha multiplier that
                applies when the percentages add up to less than 100%.
        """
        p1, p2 = [None if percent is None else percent.value
                  for percent in self._percentages]
        if p1 is None and p2 is None:
            p1 = p2 = 50.0
        elif p1 is None:
            p1 = 100.0 - p2
        elif p2 is None:
            p2 = 100.0 - p1
        total = p1 + p2
        return p1 / total, p2 / total, min(total, 100.0) / 100.0

    def mix(self):
        """Computes the mixed color.

        Returns:
            ColorValue: A new color in the interpolation color space.
        Raises:
            InvalidStateError: If a color is 'currentcolor' or a component
                cannot be converted.
        """
        color1, color2 = [_resolve_color(value) for value in self._colors]
        fraction1, fraction2, multiplier = self.fractions()
        values1 = list(color1._components_in(self._space))
        values2 = list(color2._components_in(self._space))
        hue_index = _HUE_INDEXES.get(self._space)
        if hue_index is not None:
            powerless1 = _is_powerless_hue(self._space, values1)
            powerless2 = _is_powerless_hue(self._space, values2)
            if powerless1 and not powerless2:
                values1[hue_index] = values2[hue_index]
            elif powerless2 and not powerless1:
                values2[hue_index] = values1[hue_index]
        values = []
        for index, (value1, value2) in enumerate(zip(values1, values2)):
            if index == hue_index:
                values.append(interpolate_hue(value1, value2, fraction2,
                                              self._hue_method))
            else:
                values.append(value1 * fraction1 + value2 * fraction2)
        alpha = (color1.alpha_value() * fraction1
                 + color2.alpha_value() * fraction2) * multiplier
        return _create_in_space(self._space, values,
                                NumberValue(UnitType.NUMBER, alpha))

    def to_color_space(self, space):
        return self.mix().to_color_space(space)

    def to_srgb(self, clamp=True):
        return self.mix().to_srgb(clamp)

    def to_xyz(self, white=D65):
        return self.mix().to_xyz(white)

    def delta_e2000(self, other):
        return self.mix().delta_e2000(other)

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        comma = ',' if minify else ', '
        s = 'color-mix(in ' + self._space
        if self._hue_method is not None:
            s += ' ' + self._hue_method + ' hue'
        for color, percent in zip(self._colors, self._percentages):
            s += comma + color.tostring(**kwargs)
            if percent is not None:
                s += ' ' + percent.tostring(**kwargs)
        return s + ')'
