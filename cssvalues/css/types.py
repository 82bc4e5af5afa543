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
import math
import re
from collections.abc import MutableSequence
from enum import Enum

import tinycss2.color3
from tinycss2.serializer import serialize_identifier, serialize_string_value

from ..exception import InvalidModificationError, \
    NoModificationAllowedError, TypeMismatchError
from ..formatter import format_number
from .lexical import LexicalUnit, chain_tostring
from .syntax import Category, Match, Multiplier
from .units import UnitType

_RE_UNQUOTED_URL = re.compile(r'[^\s"\'()\\]+')

_RE_UNICODE_WILDCARD = re.compile(r'[0-9a-f]{0,5}\?{1,6}', re.IGNORECASE)

css_wide_keyword_set = {
    'default', 'inherit', 'initial', 'revert', 'unset',
}

css_color_keyword_set = {
    'currentcolor', 'transparent',
}

easing_keyword_set = {
    'linear', 'ease', 'ease-in', 'ease-out', 'ease-in-out', 'step-start',
    'step-end',
}

gradient_function_set = {
    'linear-gradient', 'radial-gradient', 'conic-gradient',
    'repeating-linear-gradient', 'repeating-radial-gradient',
    'repeating-conic-gradient',
}

image_function_set = gradient_function_set | {
    'image', 'image-set', 'cross-fade', 'element', 'paint',
}

shape_function_set = {
    'inset', 'circle', 'ellipse', 'polygon', 'path', 'rect', 'xywh',
}

transform_function_set = {
    'matrix', 'matrix3d', 'translate', 'translatex', 'translatey',
    'translatez', 'translate3d', 'scale', 'scalex', 'scaley', 'scalez',
    'scale3d', 'rotate', 'rotatex', 'rotatey', 'rotatez', 'rotate3d',
    'skew', 'skewx', 'skewy', 'perspective',
}

easing_function_set = {
    'cubic-bezier', 'steps', 'linear',
}


class CssType(Enum):
    """The css-kind discriminant of a value."""

    KEYWORD = 'keyword'
    TYPED = 'typed'
    PROXY = 'proxy'
    LIST = 'list'
    SHORTHAND = 'shorthand'


class Type(Enum):
    """The primitive-type tag of typed and proxy values."""

    INITIAL = 'initial'
    INHERIT = 'inherit'
    UNSET = 'unset'
    REVERT = 'revert'
    NUMERIC = 'numeric'
    IDENT = 'ident'
    STRING = 'string'
    COLOR = 'color'
    RATIO = 'ratio'
    EXPRESSION = 'expression'
    MATH_FUNCTION = 'math-function'
    FUNCTION = 'function'
    GRADIENT = 'gradient'
    TRANSFORM_FUNCTION = 'transform-function'
    EASING_FUNCTION = 'easing-function'
    COUNTER = 'counter'
    COUNTERS = 'counters'
    UNICODE_RANGE = 'unicode-range'
    UNICODE_WILDCARD = 'unicode-wildcard'
    URI = 'uri'
    SHAPE = 'shape'
    ELEMENT_REFERENCE = 'element-reference'
    VAR = 'var'
    ATTR = 'attr'
    LEXICAL = 'lexical'
    UNKNOWN = 'unknown'


_KEYWORD_TYPES = {
    'initial': Type.INITIAL,
    'inherit': Type.INHERIT,
    'unset': Type.UNSET,
    'revert': Type.REVERT,
}


class CSSValue(object):
    """The root of all parsed CSS values."""

    def __init__(self):
        self._subproperty = False

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__,
                                repr(self.tostring()))

    @property
    def css_text(self):
        """str: The canonical text of this value."""
        return self.tostring()

    @property
    def css_value_type(self):
        """CssType: The css-kind discriminant."""
        raise NotImplementedError

    @property
    def minified_css_text(self):
        """str: The minified text of this value."""
        return self.tostring(minify=True)

    @property
    def primitive_type(self):
        """Type: The primitive-type tag, or None for lists."""
        return None

    @property
    def subproperty(self):
        """bool: True if this value was produced by shorthand expansion.

        Such a value must be modified through its owning declaration.
        """
        return self._subproperty

    @subproperty.setter
    def subproperty(self, subproperty):
        self._subproperty = bool(subproperty)

    def _check_modification(self):
        if self._subproperty:
            raise NoModificationAllowedError(
                'This value was set by a shorthand: modify the shorthand'
                ' at the owning declaration instead')

    def _reset_subproperty(self):
        self._subproperty = False

    def clone(self):
        """Returns a deep copy of this value without the subproperty flag.

        Returns:
            CSSValue: A new value.
        """
        value = copy.deepcopy(self)
        value._reset_subproperty()
        return value

    def matches(self, syntax):
        """Matches this value against the alternation chain `syntax`.

        Arguments:
            syntax (SyntaxFragment): The first alternative.
        Returns:
            Match: TRUE on the first matching alternative, PENDING if the
                value can only be validated after substitution, FALSE
                otherwise.
        """
        if syntax is None:
            return Match.FALSE
        result = Match.FALSE
        for fragment in syntax:
            if fragment.is_universal():
                return Match.TRUE
            match = self.matches_component(fragment)
            if match == Match.TRUE:
                return Match.TRUE
            elif match == Match.PENDING:
                result = Match.PENDING
        return result

    def matches_component(self, fragment):
        """Matches this value against `fragment` alone, ignoring the rest of
        the chain and the fragment's multiplier.
        """
        return Match.FALSE

    def set_css_text(self, css_text):
        """Replaces the contents of this value by parsing `css_text`.

        Arguments:
            css_text (str): The new text. It must produce a value of the
                same class.
        Raises:
            NoModificationAllowedError: If this is a subproperty value.
            InvalidModificationError: If the text produces another kind of
                value.
            CSSSyntaxError: If the text cannot be parsed.
        """
        from .factory import parse_value

        self._check_modification()
        value = parse_value(css_text).value
        if type(value) is not type(self):
            raise InvalidModificationError(
                'Cannot set a {} from {}'.format(self.__class__.__name__,
                                                 repr(css_text)))
        state = dict(value.__dict__)
        state['_subproperty'] = self._subproperty
        self.__dict__.update(state)

    def tostring(self, **kwargs):
        """Returns the text of this value.

        Keyword Arguments:
            minify (bool): If True, returns the minified text.
        Returns:
            str: The text.
        """
        raise NotImplementedError

    def write_css_text(self, wri, minify=False):
        """Writes the text of this value to the sink `wri`.

        Arguments:
            wri (SimpleWriter): The sink. Errors it raises propagate.
            minify (bool, optional): If True, writes the minified text.
        """
        wri.write(self.tostring(minify=minify))


class KeywordValue(CSSValue):
    """A CSS-wide keyword: initial, inherit, unset or revert."""

    def __init__(self, keyword_type):
        super().__init__()
        if keyword_type not in _KEYWORD_TYPES.values():
            raise ValueError('Invalid keyword type: ' + repr(keyword_type))
        self._keyword_type = keyword_type

    def __eq__(self, other):
        if not isinstance(other, KeywordValue):
            return NotImplemented
        return self._keyword_type == other._keyword_type

    @property
    def css_value_type(self):
        return CssType.KEYWORD

    @property
    def primitive_type(self):
        return self._keyword_type

    @staticmethod
    def from_name(name):
        """Returns a new keyword value for `name`, or None if `name` is not a
        CSS-wide keyword.
        """
        keyword_type = _KEYWORD_TYPES.get(name.lower())
        if keyword_type is None:
            return None
        return KeywordValue(keyword_type)

    def matches(self, syntax):
        # the keyword is valid for any property until the cascade resolves it
        if syntax is None:
            return Match.FALSE
        if any(fragment.is_universal() for fragment in syntax):
            return Match.TRUE
        return Match.PENDING

    def tostring(self, **kwargs):
        return self._keyword_type.value


class PrimitiveValue(CSSValue):
    """The base class of typed values."""

    @property
    def css_value_type(self):
        return CssType.TYPED

    def matches_component(self, fragment):
        return match_primitive(self, fragment)


class NumberValue(PrimitiveValue):
    """A number, a percentage or a dimension."""

    rel_tol = 1e-09
    abs_tol = 0.0

    def __init__(self, unit, value, as_integer=False):
        """Constructs a NumberValue object.

        Arguments:
            unit (str): The unit code (see UnitType).
            value (float): The value.
            as_integer (bool, optional): True if the number was specified as
                an integer.
        """
        super().__init__()
        if unit is None or unit == UnitType.INVALID:
            raise ValueError('Invalid unit: ' + repr(unit))
        self._unit = unit
        self._value = float(value)
        self._as_integer = bool(as_integer) and unit == UnitType.NUMBER
        self._calculated = False

    def __eq__(self, other):
        if not isinstance(other, NumberValue):
            return NotImplemented
        if self._unit != other._unit:
            return False
        if math.isnan(self._value) or math.isnan(other._value):
            return math.isnan(self._value) and math.isnan(other._value)
        return math.isclose(self._value,
                            other._value,
                            rel_tol=NumberValue.rel_tol,
                            abs_tol=NumberValue.abs_tol)

    @property
    def as_integer(self):
        """bool: True if the number was specified as an integer."""
        return self._as_integer

    @property
    def calculated(self):
        """bool: True if this number is the result of a calculation."""
        return self._calculated

    @calculated.setter
    def calculated(self, calculated):
        self._calculated = bool(calculated)

    @property
    def primitive_type(self):
        return Type.NUMERIC

    @property
    def unit(self):
        """str: The unit code."""
        return self._unit

    @property
    def value(self):
        """float: The value."""
        return self._value

    @value.setter
    def value(self, value):
        self._check_modification()
        self._value = float(value)

    def is_length_compatible(self):
        """Returns True for lengths and for a plain zero."""
        return (UnitType.is_length(self._unit)
                or (self._unit == UnitType.NUMBER and self._value == 0))

    def is_negative(self):
        return self._value < 0

    def set_float_value(self, unit, value):
        self._check_modification()
        if unit is None or unit == UnitType.INVALID:
            raise TypeMismatchError('Invalid unit: ' + repr(unit))
        self._unit = unit
        self._value = float(value)
        self._as_integer = False

    def to(self, unit):
        """Returns a new number converted into `unit`.

        Raises:
            TypeMismatchError: If the units are not convertible.
        """
        try:
            value = UnitType.convert(self._value, self._unit, unit)
        except ValueError as exc:
            raise TypeMismatchError(str(exc))
        return NumberValue(unit, value)

    def _non_finite_tostring(self, minify):
        # infinite and NaN numbers have no literal form
        if math.isnan(self._value):
            keyword = 'NaN'
        elif self._value > 0:
            keyword = 'infinity'
        else:
            keyword = '-infinity'
        if self._unit == UnitType.NUMBER:
            return 'calc(' + keyword + ')'
        operator = '*' if minify else ' * '
        return ('calc(' + keyword + operator + '1'
                + UnitType.tostring(self._unit) + ')')

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        if math.isinf(self._value) or math.isnan(self._value):
            return self._non_finite_tostring(minify)
        if self._as_integer and self._unit == UnitType.NUMBER:
            return str(int(round(self._value)))
        return (format_number(self._value, minify)
                + UnitType.tostring(self._unit))


class IdentifierValue(PrimitiveValue):

    def __init__(self, name):
        super().__init__()
        self._name = name

    def __eq__(self, other):
        if not isinstance(other, IdentifierValue):
            return NotImplemented
        return self._name == other._name

    @property
    def name(self):
        return self._name

    @property
    def primitive_type(self):
        return Type.IDENT

    def tostring(self, **kwargs):
        return serialize_identifier(self._name)


class StringValue(PrimitiveValue):

    def __init__(self, text, quote='"'):
        super().__init__()
        if quote not in ('"', "'"):
            raise ValueError('Invalid quote: ' + repr(quote))
        self._text = text
        self._quote = quote

    def __eq__(self, other):
        if not isinstance(other, StringValue):
            return NotImplemented
        return self._text == other._text

    @property
    def primitive_type(self):
        return Type.STRING

    @property
    def text(self):
        """str: The unquoted, unescaped text."""
        return self._text

    @text.setter
    def text(self, text):
        self._check_modification()
        self._text = text

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        quote = self._quote
        if minify and quote in self._text:
            other = "'" if quote == '"' else '"'
            if other not in self._text:
                quote = other
        s = self._text.replace('\\', '\\\\').replace('\n', '\\a ')
        s = s.replace(quote, '\\' + quote)
        return quote + s + quote


class URIValue(PrimitiveValue):
    """A url() reference. Resolution against a base URL is left to the
    document layer.
    """

    def __init__(self, href):
        super().__init__()
        self._href = href

    def __eq__(self, other):
        if not isinstance(other, URIValue):
            return NotImplemented
        return self._href == other._href

    @property
    def href(self):
        return self._href

    @href.setter
    def href(self, href):
        self._check_modification()
        self._href = href

    @property
    def primitive_type(self):
        return Type.URI

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        if minify and _RE_UNQUOTED_URL.fullmatch(self._href) is not None:
            return 'url(' + self._href + ')'
        return 'url("' + serialize_string_value(self._href) + '")'


class UnicodeRangeValue(PrimitiveValue):

    def __init__(self, start, end=None):
        super().__init__()
        if end is None:
            end = start
        if not 0 <= start <= end <= 0x10ffff:
            raise ValueError('Invalid unicode range: {}-{}'.format(
                hex(start), hex(end)))
        self._start = start
        self._end = end

    def __eq__(self, other):
        if not isinstance(other, UnicodeRangeValue):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    @property
    def end(self):
        return self._end

    @property
    def primitive_type(self):
        return Type.UNICODE_RANGE

    @property
    def start(self):
        return self._start

    def tostring(self, **kwargs):
        if self._start == self._end:
            return 'U+{:X}'.format(self._start)
        return 'U+{:X}-{:X}'.format(self._start, self._end)


class UnicodeWildcardValue(PrimitiveValue):
    """A unicode range written with '?' wildcards, like U+4??."""

    def __init__(self, wildcard):
        super().__init__()
        if _RE_UNICODE_WILDCARD.fullmatch(wildcard) is None:
            raise ValueError('Invalid unicode wildcard: ' + repr(wildcard))
        self._wildcard = wildcard.upper()

    def __eq__(self, other):
        if not isinstance(other, UnicodeWildcardValue):
            return NotImplemented
        return self._wildcard == other._wildcard

    @property
    def primitive_type(self):
        return Type.UNICODE_WILDCARD

    @property
    def start(self):
        return int(self._wildcard.replace('?', '0'), 16)

    @property
    def end(self):
        return int(self._wildcard.replace('?', 'F'), 16)

    def tostring(self, **kwargs):
        return 'U+' + self._wildcard


class RatioValue(PrimitiveValue):
    """A <ratio> such as 16 / 9."""

    def __init__(self, antecedent, consequent):
        super().__init__()
        self._antecedent = _check_ratio_component(antecedent)
        self._consequent = _check_ratio_component(consequent)

    def __eq__(self, other):
        if not isinstance(other, RatioValue):
            return NotImplemented
        return (self._antecedent == other._antecedent
                and self._consequent == other._consequent)

    @property
    def antecedent(self):
        return self._antecedent

    @antecedent.setter
    def antecedent(self, value):
        self._check_modification()
        self._antecedent = _check_ratio_component(value)

    @property
    def consequent(self):
        return self._consequent

    @consequent.setter
    def consequent(self, value):
        self._check_modification()
        self._consequent = _check_ratio_component(value)

    @property
    def primitive_type(self):
        return Type.RATIO

    def _reset_subproperty(self):
        super()._reset_subproperty()
        self._antecedent._reset_subproperty()
        self._consequent._reset_subproperty()

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        separator = '/' if minify else ' / '
        return (self._antecedent.tostring(**kwargs) + separator
                + self._consequent.tostring(**kwargs))


def _check_ratio_component(value):
    if (isinstance(value, NumberValue) and value.unit == UnitType.NUMBER
            and value.value >= 0):
        return value
    if (isinstance(value, PrimitiveValue)
            and value.primitive_type in (Type.EXPRESSION,
                                         Type.MATH_FUNCTION)):
        return value
    raise TypeMismatchError('Invalid ratio component: ' + repr(value))


class CounterValue(PrimitiveValue):
    """A counter() or, when `separator` is given, a counters() function."""

    def __init__(self, name, style=None, separator=None):
        super().__init__()
        self._name = name
        self._style = style
        self._separator = separator

    def __eq__(self, other):
        if not isinstance(other, CounterValue):
            return NotImplemented
        return (self._name == other._name
                and self._style == other._style
                and self._separator == other._separator)

    @property
    def name(self):
        return self._name

    @property
    def primitive_type(self):
        return Type.COUNTER if self._separator is None else Type.COUNTERS

    @property
    def separator(self):
        return self._separator

    @property
    def style(self):
        """CSSValue: The counter style (an identifier or a symbols()
        function), or None for decimal.
        """
        return self._style

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        comma = ',' if minify else ', '
        args = [serialize_identifier(self._name)]
        if self._separator is not None:
            args.append(self._separator.tostring(**kwargs))
        if self._style is not None:
            args.append(self._style.tostring(**kwargs))
        function_name = 'counter' if self._separator is None else 'counters'
        return function_name + '(' + comma.join(args) + ')'


class ElementReferenceValue(PrimitiveValue):
    """An element(#id) reference."""

    def __init__(self, reference):
        super().__init__()
        self._reference = reference

    def __eq__(self, other):
        if not isinstance(other, ElementReferenceValue):
            return NotImplemented
        return self._reference == other._reference

    @property
    def primitive_type(self):
        return Type.ELEMENT_REFERENCE

    @property
    def reference(self):
        return self._reference

    def tostring(self, **kwargs):
        return 'element(#' + self._reference + ')'


class FunctionValue(PrimitiveValue):
    """A generic function: gradients, shapes, transform and easing
    functions, and any function this package does not model further.
    """

    def __init__(self, name, arguments=None):
        """Constructs a FunctionValue object.

        Arguments:
            name (str): The function name.
            arguments (list[CSSValue], optional): The comma-separated
                arguments. An argument made of several space-separated
                components is a ValueList.
        """
        super().__init__()
        self._name = name.lower()
        self._arguments = list(arguments) if arguments is not None else []

    def __eq__(self, other):
        if not isinstance(other, FunctionValue):
            return NotImplemented
        return (self._name == other._name
                and self._arguments == other._arguments)

    @property
    def arguments(self):
        return list(self._arguments)

    @property
    def name(self):
        return self._name

    @property
    def primitive_type(self):
        name = self._name
        if name in gradient_function_set:
            return Type.GRADIENT
        elif name in shape_function_set:
            return Type.SHAPE
        elif name in transform_function_set:
            return Type.TRANSFORM_FUNCTION
        elif name in easing_function_set:
            return Type.EASING_FUNCTION
        return Type.FUNCTION

    def _reset_subproperty(self):
        super()._reset_subproperty()
        for argument in self._arguments:
            argument._reset_subproperty()

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        comma = ',' if minify else ', '
        return (self._name + '('
                + comma.join(arg.tostring(**kwargs)
                             for arg in self._arguments)
                + ')')


class UnknownValue(PrimitiveValue):
    """A value this package cannot interpret, kept as text."""

    def __init__(self, text):
        super().__init__()
        self._text = text

    def __eq__(self, other):
        if not isinstance(other, UnknownValue):
            return NotImplemented
        return self._text == other._text

    @property
    def primitive_type(self):
        return Type.UNKNOWN

    def tostring(self, **kwargs):
        return self._text


class ProxyValue(PrimitiveValue):
    """The base class of values whose type is only known after
    substitution.
    """

    @property
    def css_value_type(self):
        return CssType.PROXY

    def matches_component(self, fragment):
        if fragment.is_universal():
            return Match.TRUE
        return Match.PENDING


class VarValue(ProxyValue):
    """A var() reference to a custom property."""

    def __init__(self, name, fallback=None):
        super().__init__()
        self._name = name
        self._fallback = fallback

    def __eq__(self, other):
        if not isinstance(other, VarValue):
            return NotImplemented
        return self._name == other._name and self._fallback == other._fallback

    @property
    def fallback(self):
        """CSSValue: The fallback value, or None."""
        return self._fallback

    @property
    def name(self):
        return self._name

    @property
    def primitive_type(self):
        return Type.VAR

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        s = 'var(' + self._name
        if self._fallback is not None:
            s += ',' if minify else ', '
            s += self._fallback.tostring(**kwargs)
        return s + ')'


_ATTR_TYPE_CATEGORIES = {
    'string': {Category.STRING},
    'ident': {Category.CUSTOM_IDENT, Category.IDENTIFIER},
    'color': {Category.COLOR},
    'url': {Category.URL, Category.IMAGE},
    'integer': {Category.INTEGER, Category.NUMBER},
    'number': {Category.NUMBER},
    'length': {Category.LENGTH, Category.LENGTH_PERCENTAGE},
    'percentage': {Category.PERCENTAGE, Category.LENGTH_PERCENTAGE},
    'angle': {Category.ANGLE},
    'time': {Category.TIME},
    'frequency': {Category.FREQUENCY},
    'flex': {Category.FLEX},
}


def _attr_type_categories(data_type):
    categories = _ATTR_TYPE_CATEGORIES.get(data_type)
    if categories is not None:
        return categories
    unit = UnitType.from_dimension(data_type)
    if unit == UnitType.PERCENT:
        return _ATTR_TYPE_CATEGORIES['percentage']
    elif UnitType.is_length(unit):
        return _ATTR_TYPE_CATEGORIES['length']
    elif UnitType.is_angle(unit):
        return _ATTR_TYPE_CATEGORIES['angle']
    elif UnitType.is_time(unit):
        return _ATTR_TYPE_CATEGORIES['time']
    elif UnitType.is_frequency(unit):
        return _ATTR_TYPE_CATEGORIES['frequency']
    elif unit == UnitType.FR:
        return _ATTR_TYPE_CATEGORIES['flex']
    return set()


class AttrValue(ProxyValue):
    """An attr() reference to an element attribute."""

    def __init__(self, name, data_type=None, fallback=None):
        """Constructs an AttrValue object.

        Arguments:
            name (str): The attribute name.
            data_type (str, optional): The declared type or unit; None means
                'string'.
            fallback (CSSValue, optional): The fallback value.
        """
        super().__init__()
        self._name = name
        self._data_type = data_type.lower() if data_type else None
        self._fallback = fallback

    def __eq__(self, other):
        if not isinstance(other, AttrValue):
            return NotImplemented
        return (self._name == other._name
                and self._data_type == other._data_type
                and self._fallback == other._fallback)

    @property
    def data_type(self):
        return self._data_type

    @property
    def fallback(self):
        return self._fallback

    @property
    def name(self):
        return self._name

    @property
    def primitive_type(self):
        return Type.ATTR

    def matches_component(self, fragment):
        if fragment.is_universal():
            return Match.TRUE
        data_type = self._data_type or 'string'
        if fragment.category in _attr_type_categories(data_type):
            return Match.PENDING
        if (self._fallback is not None
                and self._fallback.matches_component(fragment)
                != Match.FALSE):
            return Match.PENDING
        return Match.FALSE

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        s = 'attr(' + self._name
        if self._data_type is not None:
            s += ' ' + self._data_type
        if self._fallback is not None:
            s += ',' if minify else ', '
            s += self._fallback.tostring(**kwargs)
        return s + ')'


class LexicalValue(ProxyValue):
    """A sequence that contains a proxy somewhere inside and is therefore
    kept as lexical units until substitution.
    """

    def __init__(self, lexical_unit):
        super().__init__()
        if not isinstance(lexical_unit, LexicalUnit):
            raise TypeMismatchError('Expected a lexical unit: '
                                    + repr(lexical_unit))
        self._lexical_unit = lexical_unit

    def __eq__(self, other):
        if not isinstance(other, LexicalValue):
            return NotImplemented
        return self.tostring() == other.tostring()

    @property
    def lexical_unit(self):
        return self._lexical_unit

    @property
    def primitive_type(self):
        return Type.LEXICAL

    def tostring(self, **kwargs):
        return chain_tostring(self._lexical_unit)


class ValueList(CSSValue, MutableSequence):
    """A space- or comma-separated list of values."""

    def __init__(self, items=None, comma_separated=False):
        super().__init__()
        self._comma_separated = comma_separated
        self._items = list()
        if items is not None:
            for item in items:
                self._items.append(_check_list_item(item))

    def __delitem__(self, index):
        self._check_modification()
        del self._items[index]

    def __eq__(self, other):
        if not isinstance(other, ValueList):
            return NotImplemented
        return (self._comma_separated == other._comma_separated
                and self._items == other._items)

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __setitem__(self, index, value):
        self._check_modification()
        self._items[index] = _check_list_item(value)

    @property
    def comma_separated(self):
        """bool: True for a comma-separated list."""
        return self._comma_separated

    @property
    def css_value_type(self):
        return CssType.LIST

    def _reset_subproperty(self):
        super()._reset_subproperty()
        for item in self._items:
            item._reset_subproperty()

    def _accepts_multiplier(self, fragment):
        multiplier = fragment.multiplier
        if multiplier == Multiplier.NUMBER:
            return (self._comma_separated
                    or fragment.category == Category.TRANSFORM_LIST)
        elif (multiplier in (Multiplier.PLUS, Multiplier.STAR)
              or fragment.category == Category.TRANSFORM_LIST):
            return not self._comma_separated
        return False

    def _values_match(self, fragment):
        result = Match.TRUE
        for item in self._items:
            if (item.css_value_type == CssType.LIST
                    and fragment.category != Category.TRANSFORM_LIST):
                return Match.FALSE
            match = item.matches_component(fragment)
            if match == Match.FALSE:
                return Match.FALSE
            elif match == Match.PENDING:
                result = Match.PENDING
        return result

    def _exercises_length_and_percentage(self):
        lengths = percentages = 0
        for item in self._items:
            if not isinstance(item, NumberValue):
                return False
            if item.unit == UnitType.PERCENT:
                percentages += 1
            elif item.is_length_compatible():
                lengths += 1
            else:
                return False
        return lengths > 0 and percentages > 0

    def insert(self, index, value):
        self._check_modification()
        self._items.insert(index, _check_list_item(value))

    def matches(self, syntax):
        if len(self._items) == 0 or syntax is None:
            return Match.FALSE
        if len(self._items) == 1:
            return self._items[0].matches(syntax)

        result = Match.FALSE
        length_witnessed = percentage_witnessed = False
        for fragment in syntax:
            if fragment.is_universal():
                return Match.TRUE
            if not self._accepts_multiplier(fragment):
                continue
            match = self._values_match(fragment)
            if match == Match.TRUE:
                return Match.TRUE
            elif result == Match.FALSE:
                result = match
            if (match == Match.FALSE
                    and fragment.category in (Category.LENGTH,
                                              Category.PERCENTAGE)
                    and self._exercises_length_and_percentage()):
                if fragment.category == Category.LENGTH:
                    length_witnessed = True
                else:
                    percentage_witnessed = True
                if length_witnessed and percentage_witnessed:
                    return Match.TRUE
        return result

    def matches_component(self, fragment):
        if fragment.is_universal():
            return Match.TRUE
        multiplier = fragment.multiplier
        if multiplier == Multiplier.NUMBER:
            if (self._comma_separated or len(self._items) == 1
                    or fragment.category == Category.TRANSFORM_LIST):
                return self._values_match(fragment)
        elif self._accepts_multiplier(fragment):
            return self._values_match(fragment)
        return Match.FALSE

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        if self._comma_separated:
            separator = ',' if minify else ', '
        else:
            separator = ' '
        return separator.join(item.tostring(**kwargs) for item in self._items)


def _check_list_item(value):
    if not isinstance(value, CSSValue):
        raise TypeMismatchError('Expected a CSS value: ' + repr(value))
    if value.css_value_type == CssType.KEYWORD:
        raise InvalidModificationError(
            'CSS-wide keywords cannot appear in a list: ' + repr(value))
    return value


class ShorthandValue(CSSValue):
    """The value of a shorthand property as written, before expansion."""

    def __init__(self, value, important=False):
        super().__init__()
        if not isinstance(value, CSSValue):
            raise TypeMismatchError('Expected a CSS value: ' + repr(value))
        self._value = value
        self._important = important

    def __eq__(self, other):
        if not isinstance(other, ShorthandValue):
            return NotImplemented
        return (self._value == other._value
                and self._important == other._important)

    @property
    def css_value_type(self):
        return CssType.SHORTHAND

    @property
    def important(self):
        return self._important

    @property
    def value(self):
        return self._value

    def _reset_subproperty(self):
        super()._reset_subproperty()
        self._value._reset_subproperty()

    def matches(self, syntax):
        return self._value.matches(syntax)

    def tostring(self, **kwargs):
        s = self._value.tostring(**kwargs)
        if self._important:
            s += '!important' if kwargs.get('minify', False) \
                else ' !important'
        return s


def _match_number(value, category):
    unit = value.unit
    if category == Category.LENGTH:
        return value.is_length_compatible()
    elif category == Category.LENGTH_PERCENTAGE:
        return value.is_length_compatible() or unit == UnitType.PERCENT
    elif category == Category.PERCENTAGE:
        return unit == UnitType.PERCENT
    elif category == Category.NUMBER:
        return unit == UnitType.NUMBER
    elif category == Category.INTEGER:
        return unit == UnitType.NUMBER and (value.as_integer
                                            or value.calculated)
    elif category == Category.ANGLE:
        return UnitType.is_angle(unit)
    elif category == Category.TIME:
        return UnitType.is_time(unit)
    elif category == Category.FREQUENCY:
        return UnitType.is_frequency(unit)
    elif category == Category.RESOLUTION:
        return UnitType.is_resolution(unit)
    elif category == Category.FLEX:
        return unit == UnitType.FR
    return False


def _match_identifier(value, fragment):
    category = fragment.category
    name = value.name
    if category == Category.IDENTIFIER:
        return name == fragment.name
    elif category == Category.CUSTOM_IDENT:
        return name.lower() not in css_wide_keyword_set
    elif category == Category.COLOR:
        lower_name = name.lower()
        return (lower_name in css_color_keyword_set
                or tinycss2.color3.parse_color(lower_name) is not None)
    elif category == Category.EASING_FUNCTION:
        return name.lower() in easing_keyword_set
    elif category == Category.TRANSFORM_LIST:
        return name.lower() == 'none'
    return False


def match_primitive(value, fragment):
    """Matches a typed value against a single syntax fragment.

    Arguments:
        value (PrimitiveValue): The value.
        fragment (SyntaxFragment): The fragment; its `next` is ignored.
    Returns:
        Match: The result.
    """
    category = fragment.category
    if category == Category.UNIVERSAL:
        return Match.TRUE
    type_ = value.primitive_type
    if type_ == Type.NUMERIC:
        matched = _match_number(value, category)
    elif type_ == Type.IDENT:
        matched = _match_identifier(value, fragment)
    elif type_ == Type.STRING:
        matched = category == Category.STRING
    elif type_ == Type.URI:
        matched = category in (Category.URL, Category.IMAGE)
    elif type_ == Type.COLOR:
        matched = category == Category.COLOR
    elif type_ == Type.RATIO:
        matched = category == Category.RATIO
    elif type_ in (Type.GRADIENT, Type.ELEMENT_REFERENCE):
        matched = category == Category.IMAGE
    elif type_ == Type.FUNCTION:
        matched = (category == Category.IMAGE
                   and value.name in image_function_set)
    elif type_ == Type.SHAPE:
        matched = category == Category.BASIC_SHAPE
    elif type_ == Type.TRANSFORM_FUNCTION:
        matched = category in (Category.TRANSFORM_FUNCTION,
                               Category.TRANSFORM_LIST)
    elif type_ == Type.EASING_FUNCTION:
        matched = category == Category.EASING_FUNCTION
    elif type_ in (Type.COUNTER, Type.COUNTERS):
        matched = category == Category.COUNTER
    elif type_ in (Type.UNICODE_RANGE, Type.UNICODE_WILDCARD):
        matched = category == Category.UNICODE_RANGE
    else:
        # Type.UNKNOWN, and tags handled by their own classes
        matched = False
    return Match.TRUE if matched else Match.FALSE
