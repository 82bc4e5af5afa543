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


from logging import getLogger

from .expression import AlgebraicPart, MathFunction, StyleExpression
from .syntax import Category
from .types import CssType, NumberValue, Type
from .units import CSSNumericType, UnitType

logger = getLogger(__name__)

_BASE_TYPE_CATEGORIES = {
    CSSNumericType.LENGTH: Category.LENGTH,
    CSSNumericType.ANGLE: Category.ANGLE,
    CSSNumericType.TIME: Category.TIME,
    CSSNumericType.FREQUENCY: Category.FREQUENCY,
    CSSNumericType.RESOLUTION: Category.RESOLUTION,
    CSSNumericType.FLEX: Category.FLEX,
    CSSNumericType.PERCENT: Category.PERCENTAGE,
}

# functions whose arguments must all have the same type, which is the type of
# the result
_SAME_TYPE_FUNCTIONS = frozenset([
    MathFunction.MIN, MathFunction.MAX, MathFunction.CLAMP,
    MathFunction.HYPOT, MathFunction.ABS, MathFunction.ROUND,
    MathFunction.MOD, MathFunction.REM,
])

_TRIGONOMETRIC_FUNCTIONS = frozenset([
    MathFunction.SIN, MathFunction.COS, MathFunction.TAN,
])

_INVERSE_TRIGONOMETRIC_FUNCTIONS = frozenset([
    MathFunction.ASIN, MathFunction.ACOS, MathFunction.ATAN,
])

_NUMBER_FUNCTIONS = frozenset([
    MathFunction.POW, MathFunction.SQRT, MathFunction.LOG, MathFunction.EXP,
])


class Dimension(object):
    """The outcome of a dimensional analysis."""

    def __init__(self, numeric_type=None, unknown_function=False,
                 pending=False):
        self._numeric_type = numeric_type
        self._unknown_function = unknown_function
        self._pending = pending

    def __repr__(self):
        return '<{} category={} unknown_function={} pending={}>'.format(
            self.__class__.__name__, self.category, self._unknown_function,
            self._pending)

    @property
    def category(self):
        """Category: The category of the result, or None if the type is
        invalid or unknown.
        """
        return category_of(self._numeric_type)

    @property
    def numeric_type(self):
        """CSSNumericType: The type of the result, or None."""
        return self._numeric_type

    @property
    def pending(self):
        """bool: True if a proxy value was found."""
        return self._pending

    @property
    def unknown_function(self):
        """bool: True if a function of unknown type was found."""
        return self._unknown_function


def category_of(numeric_type):
    """Returns the category of `numeric_type`.

    Arguments:
        numeric_type (CSSNumericType): The type, or None.
    Returns:
        Category: The category, or None if every power is not 0 or 1, if
            more than one base type is involved, or if a percent hint other
            than 'length' remains.
    """
    if numeric_type is None:
        return None
    powers = numeric_type.powers()
    if any(power != 1 for power in powers.values()) or len(powers) > 1:
        return None
    percent_hint = numeric_type.percent_hint
    if len(powers) == 0:
        return Category.NUMBER
    key = next(iter(powers))
    if key == CSSNumericType.PERCENT:
        return Category.PERCENTAGE
    if percent_hint is not None:
        if key == CSSNumericType.LENGTH and percent_hint == key:
            return Category.LENGTH_PERCENTAGE
        return None
    return _BASE_TYPE_CATEGORIES[key]


class DimensionalAnalyzer(object):
    """Infers the type of an expression or math function without evaluating
    it.
    """

    def __init__(self):
        self._unknown_function = False
        self._pending = False

    def analyze(self, value):
        """Analyzes a calculated value, an expression node, or a number.

        Arguments:
            value (CSSValue or StyleExpression): The value.
        Returns:
            Dimension: The result. Its category is None when the type is
                invalid; unknown functions and proxies are reported through
                the flags rather than as errors.
        """
        self._unknown_function = False
        self._pending = False
        if isinstance(value, StyleExpression):
            numeric_type = self._node_type(value)
        else:
            numeric_type = self._value_type(value)
        dimension = Dimension(numeric_type, self._unknown_function,
                              self._pending)
        logger.debug('{}: {}'.format(repr(value), repr(dimension)))
        return dimension

    def _value_type(self, value):
        if isinstance(value, NumberValue):
            return CSSNumericType.create_type(value.unit)
        elif value.css_value_type == CssType.PROXY:
            self._pending = True
            return None
        type_ = value.primitive_type
        if type_ == Type.EXPRESSION:
            return self._node_type(value.expression)
        elif type_ == Type.MATH_FUNCTION:
            return self._function_type(value)
        elif type_ in (Type.FUNCTION, Type.UNKNOWN):
            logger.debug('unknown function: ' + repr(value))
            self._unknown_function = True
        return None

    def _node_type(self, node):
        part_type = node.part_type
        if part_type == AlgebraicPart.OPERAND:
            return self._value_type(node.operand)
        elif part_type == AlgebraicPart.SUM:
            result = None
            for operand in node:
                numeric_type = self._node_type(operand)
                if numeric_type is None:
                    return None
                if result is None:
                    result = numeric_type
                else:
                    result = CSSNumericType.add_types(result, numeric_type)
                    if result is None:
                        return None
            return result

        # product: at least one factor must be a plain number
        result = CSSNumericType()
        has_number = False
        for operand in node:
            numeric_type = self._node_type(operand)
            if numeric_type is None:
                return None
            if numeric_type.is_number():
                has_number = True
            if operand.inverse:
                numeric_type = CSSNumericType.invert_type(numeric_type)
            result = CSSNumericType.multiply_types(result, numeric_type)
            if result is None:
                return None
        if not has_number:
            return None
        return result

    def _function_type(self, value):
        types = list()
        for argument in value.arguments:
            numeric_type = self._node_type(argument)
            if numeric_type is None:
                return None
            types.append(numeric_type)

        function = value.function
        if function in _SAME_TYPE_FUNCTIONS:
            result = types[0]
            for numeric_type in types[1:]:
                result = CSSNumericType.add_types(result, numeric_type)
                if result is None:
                    return None
            return result
        elif function == MathFunction.SIGN:
            return CSSNumericType()
        elif function in _TRIGONOMETRIC_FUNCTIONS:
            if category_of(types[0]) in (Category.ANGLE, Category.NUMBER):
                return CSSNumericType()
        elif function in _INVERSE_TRIGONOMETRIC_FUNCTIONS:
            if types[0].is_number():
                return CSSNumericType.create_type(UnitType.DEG)
        elif function == MathFunction.ATAN2:
            if CSSNumericType.add_types(types[0], types[1]) is not None:
                return CSSNumericType.create_type(UnitType.DEG)
        elif function in _NUMBER_FUNCTIONS:
            if all(numeric_type.is_number() for numeric_type in types):
                return CSSNumericType()
        return None
