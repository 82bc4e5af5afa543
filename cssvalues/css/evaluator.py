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

from ..exception import InvalidStateError, NotSupportedError, \
    TypeMismatchError
from .expression import AlgebraicPart, MathFunction, StyleExpression
from .types import CssType, NumberValue, Type
from .units import UnitType

logger = getLogger(__name__)


class _Quantity(object):
    """An intermediate result: `value` in `unit` raised to `exponent`.

    A plain number has the exponent 0 and no unit.
    """

    __slots__ = ('value', 'unit', 'exponent')

    def __init__(self, value, unit=None, exponent=0):
        self.value = value
        self.unit = unit if exponent != 0 else None
        self.exponent = exponent

    def __repr__(self):
        return '({}, {}, {})'.format(self.value, self.unit, self.exponent)

    def is_number(self):
        return self.exponent == 0


def _convert(value, from_unit, to_unit, exponent=1):
    try:
        ratio = UnitType.convert(1.0, from_unit, to_unit)
    except ValueError as exc:
        raise TypeMismatchError(str(exc))
    logger.debug('convert {}{} to {}'.format(value, from_unit, to_unit))
    return value * ratio ** exponent


def _same_unit(quantities):
    """Converts every quantity into the unit of the first one."""
    first = quantities[0]
    values = [first.value]
    for quantity in quantities[1:]:
        if quantity.exponent != first.exponent:
            raise TypeMismatchError('Incompatible operands: {} and {}'.format(
                repr(first), repr(quantity)))
        if quantity.is_number():
            values.append(quantity.value)
        else:
            values.append(_convert(quantity.value, quantity.unit, first.unit,
                                   quantity.exponent))
    return values


def _round_half_up(value):
    if math.isinf(value) or math.isnan(value):
        return value
    return float(math.floor(value + 0.5))


def _sum(values):
    try:
        return math.fsum(values)
    except ValueError:
        # infinities of opposite signs
        return math.nan
    except OverflowError:
        return sum(values)


def _divide(dividend, divisor):
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


def _is_odd_integer(x):
    return math.isfinite(x) and float(x).is_integer() and x % 2 == 1


def _log(x):
    if math.isnan(x) or x < 0:
        return math.nan
    elif x == 0:
        return -math.inf
    return math.log(x)


def _pow(base, exponent):
    if base == 0 and exponent < 0:
        if _is_odd_integer(exponent):
            return math.copysign(math.inf, base)
        return math.inf
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


class Evaluator(object):
    """Reduces calc() values and math functions to a number.

    Percentages are resolved through `percentage()`, which calls the
    `percentage_resolver` given to the constructor.
    """

    def __init__(self, percentage_resolver=None):
        """Constructs an Evaluator object.

        Arguments:
            percentage_resolver (callable, optional): A function that takes
                a percentage NumberValue and returns a NumberValue in the
                reference unit.
        """
        self._percentage_resolver = percentage_resolver

    def evaluate(self, value, unit=None):
        """Evaluates `value`.

        Arguments:
            value (CSSValue or StyleExpression): An ExpressionValue, a
                MathFunctionValue, a NumberValue, or an expression node.
            unit (str, optional): The unit of the result. If omitted, the
                unit of the first operand is used.
        Returns:
            NumberValue: A new number, marked as calculated.
        Raises:
            TypeMismatchError: If incompatible units are mixed, or the
                result is not convertible into `unit`.
            InvalidStateError: If the value contains a proxy.
            NotSupportedError: If the value contains an unknown function,
                or a percentage cannot be resolved.
        """
        if isinstance(value, StyleExpression):
            quantity = self._evaluate_node(value)
        else:
            quantity = self._evaluate_value(value)
        if quantity.exponent not in (0, 1):
            raise TypeMismatchError('Invalid unit power: ' + repr(quantity))
        result_unit = quantity.unit if quantity.unit is not None \
            else UnitType.NUMBER
        result = quantity.value
        if unit is not None and unit != result_unit:
            if result_unit == UnitType.NUMBER:
                raise TypeMismatchError('Cannot convert a number to '
                                        + repr(unit))
            result = _convert(result, result_unit, unit)
            result_unit = unit
        number = NumberValue(result_unit, result)
        number.calculated = True
        logger.debug('{} = {}'.format(repr(value), number.tostring()))
        return number

    def percentage(self, value):
        """Resolves a percentage into the reference unit.

        Arguments:
            value (NumberValue): The percentage.
        Returns:
            NumberValue: The resolved value.
        Raises:
            NotSupportedError: If no percentage resolver was given.
        """
        if self._percentage_resolver is None:
            raise NotSupportedError('Cannot resolve a percentage: '
                                    + value.tostring())
        return self._percentage_resolver(value)

    def _evaluate_value(self, value):
        if isinstance(value, NumberValue):
            number = value
            if number.unit == UnitType.PERCENT:
                number = self.percentage(number)
            if number.unit == UnitType.NUMBER:
                return _Quantity(number.value)
            return _Quantity(number.value, number.unit, 1)
        elif value.css_value_type == CssType.PROXY:
            raise InvalidStateError('Cannot evaluate a proxy value: '
                                    + value.tostring())
        type_ = value.primitive_type
        if type_ == Type.EXPRESSION:
            quantity = self._evaluate_node(value.expression)
        elif type_ == Type.MATH_FUNCTION:
            quantity = self._evaluate_function(value)
        else:
            raise NotSupportedError('Cannot evaluate: ' + value.tostring())
        if value.expect_integer:
            quantity.value = _round_half_up(quantity.value)
        return quantity

    def _evaluate_node(self, node):
        part_type = node.part_type
        if part_type == AlgebraicPart.OPERAND:
            return self._evaluate_value(node.operand)
        elif part_type == AlgebraicPart.SUM:
            quantities = list()
            for operand in node:
                quantity = self._evaluate_node(operand)
                if operand.inverse:
                    quantity.value = -quantity.value
                quantities.append(quantity)
            first = quantities[0]
            return _Quantity(_sum(_same_unit(quantities)), first.unit,
                             first.exponent)

        result = _Quantity(1.0)
        for operand in node:
            quantity = self._evaluate_node(operand)
            if operand.inverse:
                quantity.value = (math.copysign(math.inf, quantity.value)
                                  if quantity.value == 0
                                  else 1.0 / quantity.value)
                quantity.exponent = -quantity.exponent
            result = self._multiply(result, quantity)
        return result

    @staticmethod
    def _multiply(quantity1, quantity2):
        if quantity2.is_number():
            return _Quantity(quantity1.value * quantity2.value,
                             quantity1.unit, quantity1.exponent)
        elif quantity1.is_number():
            return _Quantity(quantity1.value * quantity2.value,
                             quantity2.unit, quantity2.exponent)

        unit1, unit2 = quantity1.unit, quantity2.unit
        if UnitType.is_time(unit1) and UnitType.is_frequency(unit2):
            unit1, unit2 = unit2, unit1
            quantity1, quantity2 = quantity2, quantity1
        if (UnitType.is_frequency(unit1) and UnitType.is_time(unit2)
                and quantity1.exponent == quantity2.exponent):
            # 1Hz = 1/s
            value1 = _convert(quantity1.value, unit1, UnitType.HZ,
                              quantity1.exponent)
            value2 = _convert(quantity2.value, unit2, UnitType.S,
                              quantity2.exponent)
            return _Quantity(value1 * value2)

        value2 = _convert(quantity2.value, unit2, unit1, quantity2.exponent)
        return _Quantity(quantity1.value * value2, unit1,
                         quantity1.exponent + quantity2.exponent)

    def _evaluate_function(self, value):
        function = value.function
        args = [self._evaluate_node(argument) for argument in value.arguments]
        first = args[0]

        if function in (MathFunction.MIN, MathFunction.MAX,
                        MathFunction.CLAMP, MathFunction.HYPOT):
            values = _same_unit(args)
            if function == MathFunction.MIN:
                result = min(values)
            elif function == MathFunction.MAX:
                result = max(values)
            elif function == MathFunction.CLAMP:
                result = max(values[0], min(values[1], values[2]))
            else:
                result = math.hypot(*values) if len(values) == 2 \
                    else math.sqrt(_sum([x * x for x in values]))
            return _Quantity(result, first.unit, first.exponent)
        elif function == MathFunction.ABS:
            return _Quantity(abs(first.value), first.unit, first.exponent)
        elif function == MathFunction.SIGN:
            if first.value == 0 or math.isnan(first.value):
                return _Quantity(first.value)
            return _Quantity(math.copysign(1.0, first.value))
        elif function in (MathFunction.SIN, MathFunction.COS,
                          MathFunction.TAN):
            radians = first.value
            if not first.is_number():
                if not UnitType.is_angle(first.unit) or first.exponent != 1:
                    raise TypeMismatchError('Expected an angle: '
                                            + repr(first))
                radians = _convert(first.value, first.unit, UnitType.RAD)
            if math.isinf(radians):
                return _Quantity(math.nan)
            if function == MathFunction.SIN:
                return _Quantity(math.sin(radians))
            elif function == MathFunction.COS:
                return _Quantity(math.cos(radians))
            return _Quantity(math.tan(radians))
        elif function in (MathFunction.ASIN, MathFunction.ACOS,
                          MathFunction.ATAN):
            self._check_numbers(value, args)
            if function != MathFunction.ATAN and abs(first.value) > 1:
                result = math.nan
            elif function == MathFunction.ASIN:
                result = math.asin(first.value)
            elif function == MathFunction.ACOS:
                result = math.acos(first.value)
            else:
                result = math.atan(first.value)
            return _Quantity(math.degrees(result), UnitType.DEG, 1)
        elif function == MathFunction.ATAN2:
            y, x = _same_unit(args)
            return _Quantity(math.degrees(math.atan2(y, x)), UnitType.DEG, 1)
        elif function in (MathFunction.ROUND, MathFunction.MOD,
                          MathFunction.REM):
            if len(args) == 1:
                self._check_numbers(value, args)
                args.append(_Quantity(1.0))
            a, b = _same_unit(args)
            if function == MathFunction.ROUND:
                result = _round_to_step(a, b, value.rounding_strategy)
            elif b == 0 or not math.isfinite(a) or math.isnan(b):
                result = math.nan
            elif function == MathFunction.REM:
                result = math.fmod(a, b)
            elif math.isinf(b):
                # mod() takes the sign of the divisor
                result = a if a == 0 or (a > 0) == (b > 0) else math.nan
            else:
                result = a - b * math.floor(a / b)
            return _Quantity(result, first.unit, first.exponent)

        # pow(), sqrt(), log() and exp()
        self._check_numbers(value, args)
        if function == MathFunction.POW:
            result = _pow(first.value, args[1].value)
        elif function == MathFunction.SQRT:
            result = math.sqrt(first.value) if first.value >= 0 else math.nan
        elif function == MathFunction.LOG:
            result = _log(first.value)
            if len(args) == 2:
                result = _divide(result, _log(args[1].value))
        else:
            try:
                result = math.exp(first.value)
            except OverflowError:
                result = math.inf
        return _Quantity(result)

    @staticmethod
    def _check_numbers(value, args):
        if not all(quantity.is_number() for quantity in args):
            raise TypeMismatchError('{}() expects numbers: {}'.format(
                value.name, repr(args)))


def _round_to_step(value, step, strategy):
    if step == 0 or math.isnan(step):
        return math.nan
    elif math.isinf(step):
        if math.isinf(value):
            return math.nan
        # a finite value lies between zero and the infinite multiples
        if strategy == 'up' and value > 0:
            return math.inf
        elif strategy == 'down' and value < 0:
            return -math.inf
        return math.copysign(0.0, value)
    step = abs(step)
    quotient = value / step
    if math.isinf(quotient) or math.isnan(quotient):
        return value
    if strategy == 'up':
        quotient = math.ceil(quotient)
    elif strategy == 'down':
        quotient = math.floor(quotient)
    elif strategy == 'to-zero':
        quotient = math.trunc(quotient)
    else:
        quotient = math.floor(quotient + 0.5)
    return quotient * step


class PercentageEvaluator(Evaluator):
    """An evaluator that keeps percentages and plain numbers as they are.

    Any other resulting unit is an error.
    """

    def evaluate(self, value, unit=None):
        result = super().evaluate(value, unit)
        if result.unit not in (UnitType.PERCENT, UnitType.NUMBER):
            raise TypeMismatchError('Expected a percentage or a number: '
                                    + result.tostring())
        return result

    def percentage(self, value):
        return value
