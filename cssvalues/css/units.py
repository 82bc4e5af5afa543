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
from collections import OrderedDict
from decimal import Decimal


class UnitType(object):
    """The numeric unit table shared by the expression and colorimetry
    engines.
    """

    INVALID = 'invalid'

    NUMBER = 'number'
    PERCENT = 'percent'

    # <length>: font-relative
    EM = 'em'
    EX = 'ex'
    CAP = 'cap'
    CH = 'ch'
    IC = 'ic'
    REM = 'rem'
    REX = 'rex'
    RCAP = 'rcap'
    RCH = 'rch'
    RIC = 'ric'
    LH = 'lh'
    RLH = 'rlh'

    # <length>: viewport-percentage
    VW = 'vw'
    VH = 'vh'
    VI = 'vi'
    VB = 'vb'
    VMIN = 'vmin'
    VMAX = 'vmax'

    # <length>: absolute
    CM = 'cm'
    MM = 'mm'
    Q = 'q'
    IN = 'in'
    PT = 'pt'
    PC = 'pc'
    PX = 'px'

    # <angle>
    DEG = 'deg'
    GRAD = 'grad'
    RAD = 'rad'
    TURN = 'turn'

    # <time>
    S = 's'
    MS = 'ms'

    # <frequency>
    HZ = 'hz'
    KHZ = 'khz'

    # <resolution>
    DPI = 'dpi'
    DPCM = 'dpcm'
    DPPX = 'dppx'
    X = 'x'

    # <flex>
    FR = 'fr'

    RELATIVE_LENGTH_UNITS = frozenset([
        EM, EX, CAP, CH, IC, REM, REX, RCAP, RCH, RIC, LH, RLH,
        VW, VH, VI, VB, VMIN, VMAX,
    ])

    ABSOLUTE_LENGTH_UNITS = frozenset([CM, MM, Q, IN, PT, PC, PX])

    LENGTH_UNITS = RELATIVE_LENGTH_UNITS | ABSOLUTE_LENGTH_UNITS

    ANGLE_UNITS = frozenset([DEG, GRAD, RAD, TURN])

    TIME_UNITS = frozenset([S, MS])

    FREQUENCY_UNITS = frozenset([HZ, KHZ])

    RESOLUTION_UNITS = frozenset([DPI, DPCM, DPPX, X])

    @staticmethod
    def from_dimension(unit):
        """Returns the unit code of a dimension token unit, or
        `UnitType.INVALID` if the unit is not known.
        """
        if unit is None:
            return UnitType.NUMBER
        unit = unit.lower()
        if unit == '%':
            return UnitType.PERCENT
        if (unit in UnitType.LENGTH_UNITS
                or unit in UnitType.ANGLE_UNITS
                or unit in UnitType.TIME_UNITS
                or unit in UnitType.FREQUENCY_UNITS
                or unit in UnitType.RESOLUTION_UNITS
                or unit == UnitType.FR):
            return unit
        return UnitType.INVALID

    @staticmethod
    def is_length(unit):
        return unit in UnitType.LENGTH_UNITS

    @staticmethod
    def is_angle(unit):
        return unit in UnitType.ANGLE_UNITS

    @staticmethod
    def is_time(unit):
        return unit in UnitType.TIME_UNITS

    @staticmethod
    def is_frequency(unit):
        return unit in UnitType.FREQUENCY_UNITS

    @staticmethod
    def is_resolution(unit):
        return unit in UnitType.RESOLUTION_UNITS

    @staticmethod
    def get_canonical_unit(unit):
        unit = unit.lower()
        if unit == UnitType.NUMBER:
            # "number"
            return UnitType.NUMBER
        elif unit == UnitType.PERCENT:
            return UnitType.PERCENT
        elif unit in UnitType.ABSOLUTE_LENGTH_UNITS:
            # <absolute length>
            return UnitType.PX
        elif unit in UnitType.ANGLE_UNITS:
            # <angle>
            return UnitType.DEG
        elif unit in UnitType.TIME_UNITS:
            # <time>
            return UnitType.MS
        elif unit in UnitType.FREQUENCY_UNITS:
            # <frequency>
            return UnitType.HZ
        elif unit in UnitType.RESOLUTION_UNITS:
            # <resolution>
            return UnitType.DPPX
        elif unit == UnitType.FR:
            return UnitType.FR
        return None  # cannot convert

    @staticmethod
    def get_conversion_ratio(unit):
        unit = unit.lower()
        if unit == UnitType.CM:
            return Decimal(96) / Decimal(2.54)
        elif unit == UnitType.MM:
            return Decimal(96) / Decimal(2.54) / Decimal(10)
        elif unit == UnitType.Q:
            return Decimal(96) / Decimal(2.54) / Decimal(40)
        elif unit == UnitType.IN:
            return Decimal(96)
        elif unit == UnitType.PT:
            return Decimal(96) / Decimal(72)
        elif unit == UnitType.PC:
            return Decimal(96) / Decimal(6)
        elif unit == UnitType.GRAD:
            return Decimal(0.9)
        elif unit == UnitType.RAD:
            return Decimal(180) / Decimal(math.pi)
        elif unit == UnitType.TURN:
            return Decimal(360)
        elif unit == UnitType.S:
            return Decimal(1000)
        elif unit == UnitType.KHZ:
            return Decimal(1000)
        elif unit == UnitType.DPI:
            return Decimal(1) / Decimal(96)
        elif unit == UnitType.DPCM:
            return Decimal(1) / Decimal(96) * Decimal(2.54)
        return Decimal(1)

    @staticmethod
    def convert(value, from_unit, to_unit):
        """Converts `value` from `from_unit` into `to_unit`.

        Arguments:
            value (float): The value to convert.
            from_unit (str): The unit of `value`.
            to_unit (str): The target unit.
        Returns:
            float: The converted value.
        Raises:
            ValueError: If the units are not convertible into each other.
        """
        if from_unit == to_unit:
            return value
        canonical_unit1 = UnitType.get_canonical_unit(from_unit)
        canonical_unit2 = UnitType.get_canonical_unit(to_unit)
        if (canonical_unit1 is None
                or canonical_unit2 is None
                or canonical_unit1 != canonical_unit2):
            raise ValueError('Cannot convert {} to {}'.format(
                repr(from_unit), repr(to_unit)))
        conversion_ratio = (UnitType.get_conversion_ratio(from_unit)
                            / UnitType.get_conversion_ratio(to_unit))
        return float(Decimal(value) * conversion_ratio)

    @staticmethod
    def tostring(unit):
        """Returns the text suffix of `unit`."""
        if unit == UnitType.NUMBER:
            return ''
        elif unit == UnitType.PERCENT:
            return '%'
        elif unit == UnitType.Q:
            return 'Q'
        elif unit == UnitType.HZ:
            return 'Hz'
        elif unit == UnitType.KHZ:
            return 'kHz'
        return unit


class CSSNumericBaseType(object):
    """Represents the [css-typed-om] CSSNumericBaseType."""

    LENGTH = 'length'
    ANGLE = 'angle'
    TIME = 'time'
    FREQUENCY = 'frequency'
    RESOLUTION = 'resolution'
    FLEX = 'flex'
    PERCENT = 'percent'


_BASE_TYPE_KEYS = frozenset([
    CSSNumericBaseType.LENGTH, CSSNumericBaseType.ANGLE,
    CSSNumericBaseType.TIME, CSSNumericBaseType.FREQUENCY,
    CSSNumericBaseType.RESOLUTION, CSSNumericBaseType.FLEX])


class CSSNumericType(CSSNumericBaseType, OrderedDict):
    """Represents the [css-typed-om] CSSNumericType: a map from base types to
    powers, plus an optional percent hint.
    """

    PERCENT_HINT = 'percent_hint'

    def __repr__(self):
        return repr({key: value for key, value in self.items()})

    def copy(self):
        return CSSNumericType(self)

    @property
    def angle(self):
        return self.get(CSSNumericType.ANGLE)

    @angle.setter
    def angle(self, power):
        self[CSSNumericType.ANGLE] = power

    @property
    def flex(self):
        return self.get(CSSNumericType.FLEX)

    @flex.setter
    def flex(self, power):
        self[CSSNumericType.FLEX] = power

    @property
    def frequency(self):
        return self.get(CSSNumericType.FREQUENCY)

    @frequency.setter
    def frequency(self, power):
        self[CSSNumericType.FREQUENCY] = power

    @property
    def length(self):
        return self.get(CSSNumericType.LENGTH)

    @length.setter
    def length(self, power):
        self[CSSNumericType.LENGTH] = power

    @property
    def percent(self):
        return self.get(CSSNumericType.PERCENT)

    @percent.setter
    def percent(self, power):
        self[CSSNumericType.PERCENT] = power

    @property
    def percent_hint(self):
        return self.get(CSSNumericType.PERCENT_HINT)

    @percent_hint.setter
    def percent_hint(self, power):
        self[CSSNumericType.PERCENT_HINT] = power

    @property
    def resolution(self):
        return self.get(CSSNumericType.RESOLUTION)

    @resolution.setter
    def resolution(self, power):
        self[CSSNumericType.RESOLUTION] = power

    @property
    def time(self):
        return self.get(CSSNumericType.TIME)

    @time.setter
    def time(self, power):
        self[CSSNumericType.TIME] = power

    def powers(self):
        """Returns a dict of the non-zero powers, percent included."""
        return {key: power for key, power in self.items()
                if (key in _BASE_TYPE_KEYS or key == CSSNumericType.PERCENT)
                and power != 0}

    def is_number(self):
        """Returns True if every power is zero."""
        return len(self.powers()) == 0

    @staticmethod
    def add_types(type1, type2):
        """Adds two types `type1` and `type2`.

        Arguments:
            type1 (CSSNumericType): The type object.
            type2 (CSSNumericType): The type object.
        Returns:
            CSSNumericType: A new type object or None.
        """
        type1 = type1.copy()
        type2 = type2.copy()
        percent_hint1 = type1.percent_hint
        percent_hint2 = type2.percent_hint
        if percent_hint1 is not None and percent_hint2 is not None:
            if percent_hint1 != percent_hint2:
                return None
        elif percent_hint1 is not None and percent_hint2 is None:
            CSSNumericType.apply_percent_hint(type2, percent_hint1)
        elif percent_hint1 is None and percent_hint2 is not None:
            CSSNumericType.apply_percent_hint(type1, percent_hint2)

        final_type = CSSNumericType()
        keys1 = {key for key in set(type1) & _BASE_TYPE_KEYS
                 if type1[key] != 0}
        keys2 = {key for key in set(type2) & _BASE_TYPE_KEYS
                 if type2[key] != 0}
        if (all(key in type2 for key in keys1)
                and all(key in type1 for key in keys2)
                and all(type1[key] == type2[key]
                        for key in keys1 | keys2)
                and (type1.get(CSSNumericType.PERCENT, 0)
                     == type2.get(CSSNumericType.PERCENT, 0))):
            final_type.update(type1)
            for key in type2:
                if key not in final_type:
                    final_type[key] = type2[key]
            return final_type

        if (any([type1.percent, type2.percent])
                and (any([type1[key] for key in type1
                          if key in _BASE_TYPE_KEYS])
                     or any([type2[key] for key in type2
                             if key in _BASE_TYPE_KEYS]))):
            for key in sorted(_BASE_TYPE_KEYS):
                value1 = type1.get(key, 0)
                value2 = type2.get(key, 0)
                if any([value1, value2]) and value1 != value2:
                    CSSNumericType.apply_percent_hint(type1, key)
                    CSSNumericType.apply_percent_hint(type2, key)
                if type1.get(key, 0) != type2.get(key, 0):
                    return None
            final_type.update(type1)
            for key in set(type2) & _BASE_TYPE_KEYS:
                if key not in final_type and type2[key] != 0:
                    final_type[key] = type2[key]
            return final_type

        return None

    @staticmethod
    def apply_percent_hint(type_, hint):
        """Applies the percent hint `hint` to a `type_`.

        Arguments:
            type_ (CSSNumericType): A type object.
            hint (str): The percent hint.
        Returns:
            CSSNumericType: A type object.
        """
        if hint not in type_:
            type_[hint] = 0
        if CSSNumericType.PERCENT in type_:
            type_[hint] += type_[CSSNumericType.PERCENT]
            type_[CSSNumericType.PERCENT] = 0
        type_[CSSNumericType.PERCENT_HINT] = hint
        return type_

    @staticmethod
    def create_type(unit):
        """Creates a type from a string `unit`.

        Arguments:
            unit (str): The unit string.
        Returns:
            CSSNumericType: A new type object.
        """
        unit = unit.lower()
        result = CSSNumericType()
        if unit == UnitType.NUMBER:
            # "number"
            pass  # empty map
        elif unit == UnitType.PERCENT:
            # "percent"
            result.percent = 1
        elif unit in UnitType.LENGTH_UNITS:
            # <length>
            result.length = 1
        elif unit in UnitType.ANGLE_UNITS:
            # <angle>
            result.angle = 1
        elif unit in UnitType.TIME_UNITS:
            # <time>
            result.time = 1
        elif unit in UnitType.FREQUENCY_UNITS:
            # <frequency>
            result.frequency = 1
        elif unit in UnitType.RESOLUTION_UNITS:
            # <resolution>
            result.resolution = 1
        elif unit == UnitType.FR:
            # <flex>
            result.flex = 1
        else:
            raise ValueError('Invalid unit: ' + repr(unit))
        return result

    @staticmethod
    def invert_type(type_):
        """Returns the type of the reciprocal of a value of type `type_`."""
        result = type_.copy()
        for key in list(result.keys()):
            if key in _BASE_TYPE_KEYS or key == CSSNumericType.PERCENT:
                result[key] = -result[key]
        return result

    @staticmethod
    def multiply_types(type1, type2):
        """Multiplies two types `type1` and `type2`.

        Arguments:
            type1 (CSSNumericType): The type object.
            type2 (CSSNumericType): The type object.
        Returns:
            CSSNumericType: A new type object or None.
        """
        type1 = type1.copy()
        type2 = type2.copy()
        percent_hint1 = type1.percent_hint
        percent_hint2 = type2.percent_hint
        if percent_hint1 is not None and percent_hint2 is not None:
            if percent_hint1 != percent_hint2:
                return None
        elif percent_hint1 is not None and percent_hint2 is None:
            CSSNumericType.apply_percent_hint(type2, percent_hint1)
        elif percent_hint1 is None and percent_hint2 is not None:
            CSSNumericType.apply_percent_hint(type1, percent_hint2)

        final_type = CSSNumericType()
        final_type.update(type1)
        for key in set(type2) & (_BASE_TYPE_KEYS
                                 | {CSSNumericType.PERCENT}):
            power = type2[key]
            if key in final_type:
                final_type[key] += power
            else:
                final_type[key] = power
        return final_type
