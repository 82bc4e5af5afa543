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


from enum import Enum
from logging import getLogger

from ..exception import CSSSyntaxError, InvalidModificationError, \
    NotSupportedError, TypeMismatchError
from .color import ColorMixValue, ProfiledColorValue, RGBColorValue, \
    color_function_set, create_color_value
from .expression import ExpressionBuilder, math_function_name_set, \
    split_arguments
from .lexical import LexicalType, parse_lexical_units
from .types import AttrValue, CounterValue, ElementReferenceValue, \
    FunctionValue, IdentifierValue, KeywordValue, LexicalValue, NumberValue, \
    RatioValue, StringValue, Type, UnicodeRangeValue, UnicodeWildcardValue, \
    UnknownValue, URIValue, ValueList, VarValue
from .units import UnitType

logger = getLogger(__name__)


class Outcome(Enum):
    VALUE = 'value'
    DEFERRED = 'deferred'


class Result(object):
    """The outcome of value creation.

    A DEFERRED result holds a proxy value (var(), attr(), or a sequence
    containing one), whose type is only known after substitution.
    """

    def __init__(self, value, outcome=Outcome.VALUE):
        self._value = value
        self._outcome = outcome

    def __repr__(self):
        return '<{} {} {}>'.format(self.__class__.__name__,
                                   self._outcome.name, repr(self._value))

    @property
    def outcome(self):
        """Outcome: VALUE or DEFERRED."""
        return self._outcome

    @property
    def value(self):
        """CSSValue: The created value."""
        return self._value

    def is_deferred(self):
        return self._outcome == Outcome.DEFERRED


def _ratio_operand(value):
    if isinstance(value, NumberValue):
        return value.unit == UnitType.NUMBER
    return value.primitive_type in (Type.EXPRESSION, Type.MATH_FUNCTION)


class ValueFactory(object):
    """Creates values from lexical units."""

    def __init__(self):
        self._builder = ExpressionBuilder(self)

    def create_value(self, lexical_unit):
        """Returns the value of `lexical_unit` and the units that follow it.

        See `parse_value()`.
        """
        return self.parse_value(lexical_unit).value

    def parse_value(self, lexical_unit):
        """Creates the value of a lexical-unit chain.

        Arguments:
            lexical_unit (LexicalUnit): The first unit of a property value.
        Returns:
            Result: The value, DEFERRED if it contains a proxy.
        Raises:
            CSSSyntaxError: If the units do not form a valid value.
        """
        if lexical_unit is None:
            raise CSSSyntaxError('Empty value')
        units = list(lexical_unit)
        if any(unit.contains_proxy() for unit in units):
            if len(units) == 1 and units[0].is_proxy():
                value = self.create_primitive_value(units[0])
            else:
                value = LexicalValue(lexical_unit)
            logger.debug('deferred: ' + repr(value))
            return Result(value, Outcome.DEFERRED)

        if len(units) == 1 and units[0].lexical_unit_type == LexicalType.IDENT:
            keyword = KeywordValue.from_name(units[0].value)
            if keyword is not None:
                return Result(keyword)
        return Result(self._create_list(units))

    def _create_list(self, units):
        groups = split_arguments(units[0])
        if len(groups) == 1:
            return self._create_space_list(groups[0])
        return ValueList([self._create_space_list(group) for group in groups],
                         comma_separated=True)

    def _create_space_list(self, units):
        items = list()
        index = 0
        while index < len(units):
            unit = units[index]
            if unit.lexical_unit_type == LexicalType.OPERATOR_SLASH:
                if (len(items) == 0 or index + 1 == len(units)
                        or not _ratio_operand(items[-1])):
                    raise CSSSyntaxError('Unexpected operator: /')
                consequent = self.create_primitive_value(units[index + 1])
                if not _ratio_operand(consequent):
                    raise CSSSyntaxError('Invalid ratio: '
                                         + repr(consequent.tostring()))
                try:
                    items[-1] = RatioValue(items[-1], consequent)
                except TypeMismatchError as exc:
                    raise CSSSyntaxError(exc.message)
                index += 2
                continue
            if (unit.lexical_unit_type == LexicalType.IDENT
                    and KeywordValue.from_name(unit.value) is not None):
                raise CSSSyntaxError('CSS-wide keywords cannot be combined'
                                     ' with other values: ' + unit.value)
            items.append(self.create_primitive_value(unit))
            index += 1
        if len(items) == 1:
            return items[0]
        return ValueList(items)

    def create_primitive_value(self, unit):
        """Creates the value of a single lexical unit.

        Raises:
            CSSSyntaxError: If the unit is malformed or is an operator.
        """
        unit_type = unit.lexical_unit_type
        if unit_type == LexicalType.INTEGER:
            return NumberValue(UnitType.NUMBER, unit.value, as_integer=True)
        elif unit_type in (LexicalType.REAL, LexicalType.PERCENTAGE,
                           LexicalType.DIMENSION):
            return NumberValue(unit.dimension_unit, unit.value)
        elif unit_type == LexicalType.IDENT:
            return IdentifierValue(unit.value)
        elif unit_type == LexicalType.STRING:
            return StringValue(unit.value)
        elif unit_type == LexicalType.URI:
            return URIValue(unit.value)
        elif unit_type == LexicalType.HASH:
            return RGBColorValue.from_hex(unit.value)
        elif unit_type == LexicalType.UNICODE_RANGE:
            start, end = unit.value
            try:
                return UnicodeRangeValue(start, end)
            except ValueError as exc:
                raise CSSSyntaxError(str(exc))
        elif unit_type == LexicalType.UNICODE_WILDCARD:
            try:
                return UnicodeWildcardValue(unit.value)
            except ValueError as exc:
                raise CSSSyntaxError(str(exc))
        elif unit_type == LexicalType.CALC:
            return self._builder.create_calc(unit)
        elif unit_type == LexicalType.VAR:
            return self._create_var(unit)
        elif unit_type == LexicalType.ATTR:
            return self._create_attr(unit)
        elif unit_type == LexicalType.FUNCTION:
            return self._create_function(unit)
        raise CSSSyntaxError('Unexpected lexical unit: '
                             + repr(unit.tostring()))

    def _create_fallback(self, comma):
        if comma.next_lexical_unit is None:
            return None
        return self.create_value(comma.next_lexical_unit)

    def _create_var(self, unit):
        name = unit.parameters
        if (name is None or name.lexical_unit_type != LexicalType.IDENT
                or not name.value.startswith('--')):
            raise CSSSyntaxError('Invalid var(): ' + repr(unit.tostring()))
        comma = name.next_lexical_unit
        if comma is None:
            return VarValue(name.value)
        if comma.lexical_unit_type != LexicalType.OPERATOR_COMMA:
            raise CSSSyntaxError('Invalid var(): ' + repr(unit.tostring()))
        return VarValue(name.value, self._create_fallback(comma))

    def _create_attr(self, unit):
        name = unit.parameters
        if name is None or name.lexical_unit_type != LexicalType.IDENT:
            raise CSSSyntaxError('Invalid attr(): ' + repr(unit.tostring()))
        data_type = None
        current = name.next_lexical_unit
        if (current is not None
                and current.lexical_unit_type == LexicalType.IDENT):
            data_type = current.value
            current = current.next_lexical_unit
        if current is None:
            return AttrValue(name.value, data_type)
        if current.lexical_unit_type != LexicalType.OPERATOR_COMMA:
            raise CSSSyntaxError('Invalid attr(): ' + repr(unit.tostring()))
        return AttrValue(name.value, data_type,
                         self._create_fallback(current))

    def _create_function(self, unit):
        name = unit.function_name
        if name in math_function_name_set:
            return self._builder.create_math_function(unit)
        elif name in color_function_set:
            return self._create_color_function(unit)
        elif name == 'color':
            return self._create_profiled_color(unit)
        elif name == 'color-mix':
            return self._create_color_mix(unit)
        elif name in ('counter', 'counters'):
            return self._create_counter(unit)
        elif name == 'element':
            reference = unit.parameters
            if (reference is None
                    or reference.lexical_unit_type != LexicalType.HASH
                    or reference.next_lexical_unit is not None):
                raise CSSSyntaxError('Invalid element(): '
                                     + repr(unit.tostring()))
            return ElementReferenceValue(reference.value)

        if unit.parameters is None:
            return FunctionValue(name)
        if any(param.is_operator()
               and param.lexical_unit_type != LexicalType.OPERATOR_COMMA
               for param in unit.parameters):
            logger.debug('keeping as text: ' + unit.tostring())
            return UnknownValue(unit.tostring())
        arguments = [self._create_space_list(group)
                     for group in split_arguments(unit.parameters)]
        return FunctionValue(name, arguments)

    def _create_components(self, units):
        return [self.create_primitive_value(unit) for unit in units]

    def _split_alpha(self, unit, units):
        slashes = [index for index, current in enumerate(units)
                   if current.lexical_unit_type == LexicalType.OPERATOR_SLASH]
        if len(slashes) == 0:
            return units, None
        index = slashes[0]
        if len(slashes) > 1 or index + 2 != len(units):
            raise CSSSyntaxError('Invalid alpha channel: '
                                 + repr(unit.tostring()))
        return units[:index], self.create_primitive_value(units[index + 1])

    def _create_color_function(self, unit):
        name = unit.function_name
        groups = split_arguments(unit.parameters)
        legacy = len(groups) > 1
        try:
            if legacy:
                if (name not in ('rgb', 'rgba', 'hsl', 'hsla')
                        or len(groups) not in (3, 4)
                        or any(len(group) != 1 for group in groups)):
                    raise CSSSyntaxError('Invalid color: '
                                         + repr(unit.tostring()))
                components = self._create_components(
                    [group[0] for group in groups[:3]])
                alpha = self.create_primitive_value(groups[3][0]) \
                    if len(groups) == 4 else None
            else:
                units = groups[0] if len(groups) > 0 else []
                units, alpha = self._split_alpha(unit, units)
                components = self._create_components(units)
            return create_color_value(name, components, alpha, legacy)
        except (InvalidModificationError, TypeMismatchError) as exc:
            raise CSSSyntaxError('Invalid color {}: {}'.format(
                repr(unit.tostring()), exc.message))

    def _create_profiled_color(self, unit):
        units = list(unit.parameters) if unit.parameters is not None else []
        if (len(units) == 0
                or units[0].lexical_unit_type != LexicalType.IDENT):
            raise CSSSyntaxError('Missing color space: '
                                 + repr(unit.tostring()))
        channels, alpha = self._split_alpha(unit, units[1:])
        try:
            return ProfiledColorValue(units[0].value,
                                      self._create_components(channels),
                                      alpha)
        except (InvalidModificationError, TypeMismatchError) as exc:
            raise CSSSyntaxError('Invalid color {}: {}'.format(
                repr(unit.tostring()), exc.message))

    def _create_color_mix(self, unit):
        groups = split_arguments(unit.parameters)
        if len(groups) != 3:
            raise CSSSyntaxError('Invalid color-mix(): '
                                 + repr(unit.tostring()))
        method = groups[0]
        names = [current.value for current in method
                 if current.lexical_unit_type == LexicalType.IDENT]
        if (len(names) != len(method) or len(names) not in (2, 4)
                or names[0].lower() != 'in'
                or (len(names) == 4 and names[3].lower() != 'hue')):
            raise CSSSyntaxError('Invalid color interpolation method: '
                                 + repr(unit.tostring()))
        hue_method = names[2] if len(names) == 4 else None
        (color1, percent1), (color2, percent2) = [
            self._create_mix_operand(unit, group) for group in groups[1:]]
        try:
            return ColorMixValue(names[1], color1, color2, percent1,
                                 percent2, hue_method)
        except (NotSupportedError, TypeMismatchError) as exc:
            raise CSSSyntaxError('Invalid color-mix() {}: {}'.format(
                repr(unit.tostring()), exc.message))

    def _create_mix_operand(self, unit, group):
        if len(group) not in (1, 2):
            raise CSSSyntaxError('Invalid color-mix() color: '
                                 + repr(unit.tostring()))
        color = percent = None
        for current in group:
            value = self.create_primitive_value(current)
            if (percent is None and isinstance(value, NumberValue)
                    and value.unit == UnitType.PERCENT):
                percent = value
            elif color is None:
                color = value
            else:
                raise CSSSyntaxError('Invalid color-mix() color: '
                                     + repr(unit.tostring()))
        if color is None:
            raise CSSSyntaxError('Missing color-mix() color: '
                                 + repr(unit.tostring()))
        return color, percent

    def _create_counter(self, unit):
        groups = split_arguments(unit.parameters)
        if unit.function_name == 'counter':
            minimum, maximum = 1, 2
        else:
            minimum, maximum = 2, 3
        if (not minimum <= len(groups) <= maximum
                or any(len(group) != 1 for group in groups)
                or groups[0][0].lexical_unit_type != LexicalType.IDENT):
            raise CSSSyntaxError('Invalid counter: ' + repr(unit.tostring()))
        name = groups[0][0].value
        separator = None
        if unit.function_name == 'counters':
            separator = self.create_primitive_value(groups[1][0])
            if not isinstance(separator, StringValue):
                raise CSSSyntaxError('Invalid counter separator: '
                                     + repr(unit.tostring()))
        style = None
        if len(groups) == maximum:
            style = self.create_primitive_value(groups[-1][0])
            if not isinstance(style, (IdentifierValue, FunctionValue)):
                raise CSSSyntaxError('Invalid counter style: '
                                     + repr(unit.tostring()))
        return CounterValue(name, style, separator)


def parse_value(css_text):
    """Parses the text of a property value.

    Arguments:
        css_text (str): The text.
    Returns:
        Result: The value, DEFERRED if it contains var() or attr().
    Raises:
        CSSSyntaxError: If the text is not a valid value.
    """
    return ValueFactory().parse_value(parse_lexical_units(css_text))
