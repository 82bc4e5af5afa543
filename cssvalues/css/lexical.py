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

import tinycss2
from tinycss2.serializer import serialize_identifier, serialize_string_value

from ..exception import CSSSyntaxError
from ..formatter import format_number_sequence
from .units import UnitType


class LexicalType(Enum):
    IDENT = 'ident'
    INTEGER = 'integer'
    REAL = 'real'
    DIMENSION = 'dimension'
    PERCENTAGE = 'percentage'
    STRING = 'string'
    URI = 'uri'
    HASH = 'hash'
    UNICODE_RANGE = 'unicode-range'
    UNICODE_WILDCARD = 'unicode-wildcard'
    FUNCTION = 'function'
    CALC = 'calc'
    SUB_EXPRESSION = 'sub-expression'
    VAR = 'var'
    ATTR = 'attr'
    OPERATOR_PLUS = '+'
    OPERATOR_MINUS = '-'
    OPERATOR_MULTIPLY = '*'
    OPERATOR_SLASH = '/'
    OPERATOR_EXP = '^'
    OPERATOR_COMMA = ','
    OPERATOR_TILDE = '~'
    OPERATOR_LT = '<'
    OPERATOR_LE = '<='
    OPERATOR_GT = '>'
    OPERATOR_GE = '>='
    OPERATOR_EQ = '='


PROXY_TYPES = frozenset([LexicalType.VAR, LexicalType.ATTR])

OPERATOR_TYPES = frozenset([
    LexicalType.OPERATOR_PLUS, LexicalType.OPERATOR_MINUS,
    LexicalType.OPERATOR_MULTIPLY, LexicalType.OPERATOR_SLASH,
    LexicalType.OPERATOR_EXP, LexicalType.OPERATOR_COMMA,
    LexicalType.OPERATOR_TILDE, LexicalType.OPERATOR_LT,
    LexicalType.OPERATOR_LE, LexicalType.OPERATOR_GT,
    LexicalType.OPERATOR_GE, LexicalType.OPERATOR_EQ,
])

_LITERAL_TYPES = {
    '+': LexicalType.OPERATOR_PLUS,
    '-': LexicalType.OPERATOR_MINUS,
    '*': LexicalType.OPERATOR_MULTIPLY,
    '/': LexicalType.OPERATOR_SLASH,
    '^': LexicalType.OPERATOR_EXP,
    ',': LexicalType.OPERATOR_COMMA,
    '~': LexicalType.OPERATOR_TILDE,
    '<': LexicalType.OPERATOR_LT,
    '>': LexicalType.OPERATOR_GT,
    '=': LexicalType.OPERATOR_EQ,
}


class LexicalUnit(object):
    """A node of the lexical-unit chain consumed by the value factory.

    Function and sub-expression units hold their arguments as a nested chain
    in `parameters`.
    """

    def __init__(self, lexical_unit_type, value=None, dimension_unit=None,
                 function_name=None, parameters=None):
        self._lexical_unit_type = lexical_unit_type
        self._value = value
        self._dimension_unit = dimension_unit
        self._function_name = function_name
        self._parameters = None
        self._next = None
        self._previous = None
        self._owner = None
        if parameters is not None:
            self.parameters = parameters

    def __iter__(self):
        unit = self
        while unit is not None:
            yield unit
            unit = unit._next

    def __repr__(self):
        return '<{} {} {}>'.format(self.__class__.__name__,
                                   self._lexical_unit_type.name,
                                   repr(self.tostring()))

    @property
    def dimension_unit(self):
        """str: The unit code of a dimension, percentage or number."""
        return self._dimension_unit

    @property
    def function_name(self):
        """str: The lower-cased function name."""
        return self._function_name

    @property
    def lexical_unit_type(self):
        """LexicalType: The kind of this unit."""
        return self._lexical_unit_type

    @property
    def next_lexical_unit(self):
        return self._next

    @property
    def owner(self):
        """LexicalUnit: The function unit whose parameters hold this unit."""
        return self._owner

    @property
    def parameters(self):
        """LexicalUnit: The first unit of the parameter chain, or None."""
        return self._parameters

    @parameters.setter
    def parameters(self, parameters):
        if isinstance(parameters, (list, tuple)):
            parameters = chain(parameters)
        self._parameters = parameters
        if parameters is not None:
            for unit in parameters:
                unit._owner = self

    @property
    def previous_lexical_unit(self):
        return self._previous

    @property
    def value(self):
        """The payload: a number, a string, or a (start, end) tuple for
        unicode ranges.
        """
        return self._value

    def append(self, unit):
        """Links `unit` after the last unit of this chain.

        Returns:
            LexicalUnit: `unit`.
        """
        last = self
        while last._next is not None:
            last = last._next
        last._next = unit
        unit._previous = last
        unit._owner = self._owner
        return unit

    def is_proxy(self):
        return self._lexical_unit_type in PROXY_TYPES

    def is_operator(self):
        return self._lexical_unit_type in OPERATOR_TYPES

    def contains_proxy(self):
        """Returns True if this unit or any nested parameter is a proxy."""
        if self.is_proxy():
            return True
        if self._parameters is not None:
            return any(unit.contains_proxy() for unit in self._parameters)
        return False

    def tostring(self):
        """Returns the text of this unit alone (not the rest of the
        chain).
        """
        type_ = self._lexical_unit_type
        if type_ in (LexicalType.INTEGER, LexicalType.REAL):
            return format_number_sequence([self._value])[0]
        elif type_ in (LexicalType.DIMENSION, LexicalType.PERCENTAGE):
            return (format_number_sequence([self._value])[0]
                    + UnitType.tostring(self._dimension_unit))
        elif type_ == LexicalType.IDENT:
            return serialize_identifier(self._value)
        elif type_ == LexicalType.STRING:
            return '"' + serialize_string_value(self._value) + '"'
        elif type_ == LexicalType.URI:
            return 'url("' + serialize_string_value(self._value) + '")'
        elif type_ == LexicalType.HASH:
            return '#' + self._value
        elif type_ == LexicalType.UNICODE_RANGE:
            start, end = self._value
            if start == end:
                return 'U+{:X}'.format(start)
            return 'U+{:X}-{:X}'.format(start, end)
        elif type_ == LexicalType.UNICODE_WILDCARD:
            return 'U+' + self._value
        elif type_ in (LexicalType.FUNCTION, LexicalType.CALC,
                       LexicalType.VAR, LexicalType.ATTR):
            return self._function_name + '(' + chain_tostring(
                self._parameters) + ')'
        elif type_ == LexicalType.SUB_EXPRESSION:
            return '(' + chain_tostring(self._parameters) + ')'
        return type_.value


def chain(units):
    """Links a list of units into a chain and returns the first one."""
    first = None
    for unit in units:
        if first is None:
            first = unit
        else:
            first.append(unit)
    return first


def chain_tostring(unit):
    """Returns the text of the chain starting at `unit`."""
    s = ''
    previous = None
    for current in (unit if unit is not None else []):
        if (previous is not None
                and current.lexical_unit_type != LexicalType.OPERATOR_COMMA):
            s += ' '
        s += current.tostring()
        previous = current
    return s


def _unicode_range_unit(start, end):
    # a range covering a whole block of 16 ** n code points was written with
    # n '?' wildcards
    width = 0
    while (width < 6 and start % 16 ** (width + 1) == 0
           and end - start + 1 >= 16 ** (width + 1)):
        width += 1
    if width > 0 and end - start + 1 == 16 ** width:
        prefix = start >> (4 * width)
        wildcard = ('{:X}'.format(prefix) if prefix else '') + '?' * width
        if len(wildcard) <= 6:
            return LexicalUnit(LexicalType.UNICODE_WILDCARD, wildcard)
    return LexicalUnit(LexicalType.UNICODE_RANGE, (start, end))


def _create_unit(token):
    token_type = token.type
    if token_type == 'ident':
        return LexicalUnit(LexicalType.IDENT, token.value)
    elif token_type == 'number':
        if token.is_integer:
            return LexicalUnit(LexicalType.INTEGER, token.int_value,
                               dimension_unit=UnitType.NUMBER)
        return LexicalUnit(LexicalType.REAL, token.value,
                           dimension_unit=UnitType.NUMBER)
    elif token_type == 'percentage':
        return LexicalUnit(LexicalType.PERCENTAGE, token.value,
                           dimension_unit=UnitType.PERCENT)
    elif token_type == 'dimension':
        unit = UnitType.from_dimension(token.lower_unit)
        if unit == UnitType.INVALID:
            raise CSSSyntaxError('Unknown dimension unit: '
                                 + repr(token.unit))
        return LexicalUnit(LexicalType.DIMENSION, token.value,
                           dimension_unit=unit)
    elif token_type == 'string':
        return LexicalUnit(LexicalType.STRING, token.value)
    elif token_type == 'url':
        return LexicalUnit(LexicalType.URI, token.value)
    elif token_type == 'hash':
        return LexicalUnit(LexicalType.HASH, token.value)
    elif token_type == 'unicode-range':
        return _unicode_range_unit(token.start, token.end)
    elif token_type == 'function':
        name = token.lower_name
        if name == 'url':
            # url("...") with a quoted string
            args = _significant(token.arguments)
            if len(args) != 1 or args[0].type != 'string':
                raise CSSSyntaxError('Invalid url(): '
                                     + repr(tinycss2.serialize([token])))
            return LexicalUnit(LexicalType.URI, args[0].value)
        elif name == 'calc':
            type_ = LexicalType.CALC
        elif name == 'var':
            type_ = LexicalType.VAR
        elif name == 'attr':
            type_ = LexicalType.ATTR
        else:
            type_ = LexicalType.FUNCTION
        return LexicalUnit(type_, function_name=name,
                           parameters=_create_units(token.arguments))
    elif token_type == '() block':
        return LexicalUnit(LexicalType.SUB_EXPRESSION,
                           parameters=_create_units(token.content))
    raise CSSSyntaxError('Unexpected token: '
                         + repr(tinycss2.serialize([token])))


def _significant(tokens):
    return [token for token in tokens
            if token.type not in ('whitespace', 'comment')]


def _create_units(tokens):
    units = list()
    for token in _significant(tokens):
        if token.type == 'literal':
            literal = token.value
            if (literal == '=' and len(units) > 0
                    and units[-1].lexical_unit_type
                    in (LexicalType.OPERATOR_LT, LexicalType.OPERATOR_GT)):
                previous = units.pop(-1)
                if previous.lexical_unit_type == LexicalType.OPERATOR_LT:
                    units.append(LexicalUnit(LexicalType.OPERATOR_LE))
                else:
                    units.append(LexicalUnit(LexicalType.OPERATOR_GE))
                continue
            type_ = _LITERAL_TYPES.get(literal)
            if type_ is None:
                raise CSSSyntaxError('Unexpected literal: ' + repr(literal))
            units.append(LexicalUnit(type_))
        elif token.type == 'error':
            raise CSSSyntaxError(token.message)
        else:
            units.append(_create_unit(token))
    return chain(units)


def parse_lexical_units(css_text):
    """Tokenizes `css_text` with tinycss2 and returns the first unit of the
    resulting chain.

    Arguments:
        css_text (str): The text of a property value.
    Returns:
        LexicalUnit: The first unit, or None if `css_text` is empty.
    Raises:
        CSSSyntaxError: If the text contains tokens that cannot appear in a
            property value.
    """
    tokens = tinycss2.parse_component_value_list(css_text,
                                                 skip_comments=True)
    return _create_units(tokens)
