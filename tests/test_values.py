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

import pytest

from cssvalues.css.expression import MathFunctionValue
from cssvalues.css.factory import parse_value
from cssvalues.css.syntax import Match, parse_syntax
from cssvalues.css.types import CssType, FunctionValue, IdentifierValue, \
    KeywordValue, NumberValue, RatioValue, StringValue, Type, \
    UnicodeRangeValue, UnicodeWildcardValue, URIValue, ValueList
from cssvalues.css.units import UnitType
from cssvalues.exception import InvalidModificationError, \
    NoModificationAllowedError, TypeMismatchError
from cssvalues.formatter import format_number
from cssvalues.writer import BufferSimpleWriter


def value_of(css_text):
    return parse_value(css_text).value


def test_number_value():
    value = NumberValue(UnitType.PX, 10)
    assert value.css_value_type == CssType.TYPED
    assert value.primitive_type == Type.NUMERIC
    assert value.tostring() == '10px'
    assert NumberValue(UnitType.NUMBER, 0.5).tostring(minify=True) == '.5'
    assert NumberValue(UnitType.NUMBER, 3, as_integer=True).tostring() == '3'
    assert NumberValue(UnitType.PERCENT, 50).tostring() == '50%'


def test_number_value_equality():
    assert NumberValue(UnitType.PX, 0.1 + 0.2) == NumberValue(UnitType.PX, 0.3)
    assert NumberValue(UnitType.PX, 1) != NumberValue(UnitType.EM, 1)


def test_number_value_to():
    value = NumberValue(UnitType.IN, 1).to(UnitType.PX)
    assert value.unit == UnitType.PX
    assert value.value == pytest.approx(96)
    with pytest.raises(TypeMismatchError):
        NumberValue(UnitType.PX, 1).to(UnitType.DEG)


def test_string_value_quotes():
    assert StringValue('a"b').tostring() == '"a\\"b"'
    assert StringValue('a"b').tostring(minify=True) == '\'a"b\''


def test_uri_value():
    value = URIValue('images/a.png')
    assert value.tostring() == 'url("images/a.png")'
    assert value.tostring(minify=True) == 'url(images/a.png)'
    assert URIValue('a b.png').tostring(minify=True) == 'url("a b.png")'


def test_unicode_ranges():
    assert UnicodeRangeValue(0x26).tostring() == 'U+26'
    assert UnicodeRangeValue(0, 0x7f).tostring() == 'U+0-7F'
    wildcard = UnicodeWildcardValue('4??')
    assert (wildcard.start, wildcard.end) == (0x400, 0x4ff)
    with pytest.raises(ValueError):
        UnicodeRangeValue(0x7f, 0)


def test_ratio_value():
    value = value_of('16 / 9')
    assert isinstance(value, RatioValue)
    assert value.tostring() == '16 / 9'
    assert value.minified_css_text == '16/9'
    assert value.matches(parse_syntax('<ratio>')) == Match.TRUE
    with pytest.raises(TypeMismatchError):
        RatioValue(NumberValue(UnitType.PX, 1),
                   NumberValue(UnitType.NUMBER, 2))


def test_keyword_value():
    value = value_of('inherit')
    assert isinstance(value, KeywordValue)
    assert value.css_value_type == CssType.KEYWORD
    assert value.primitive_type == Type.INHERIT
    assert value.matches(parse_syntax('<length>')) == Match.PENDING
    assert value.matches(parse_syntax('<length> | *')) == Match.TRUE


def test_identifier_matches():
    value = IdentifierValue('auto')
    assert value.matches(parse_syntax('<length> | auto')) == Match.TRUE
    assert value.matches(parse_syntax('<length> | none')) == Match.FALSE
    assert value.matches(parse_syntax('<custom-ident>')) == Match.TRUE
    assert IdentifierValue('red').matches(
        parse_syntax('<color>')) == Match.TRUE


def test_universal_matches_anything():
    syntax = parse_syntax('*')
    for css_text in ('10px', 'auto', '"text"', 'a b c', 'x, y'):
        assert value_of(css_text).matches(syntax) == Match.TRUE


def test_list_length_percentage():
    value = ValueList([NumberValue(UnitType.PX, 10),
                       NumberValue(UnitType.PERCENT, 50)])
    assert value.matches(parse_syntax('<length-percentage>+')) == Match.TRUE
    assert value.matches(parse_syntax('<length>+')) == Match.FALSE
    assert value.matches(
        parse_syntax('<length>+ | <percentage>+')) == Match.TRUE


def test_list_same_alternative():
    value = value_of('10px auto')
    assert value.matches(parse_syntax('<length>+ | auto')) == Match.FALSE
    assert value.matches(parse_syntax('<length>+')) == Match.FALSE
    assert value_of('10px 20px').matches(
        parse_syntax('<length>+')) == Match.TRUE


def test_list_separators():
    space = value_of('10px 20px')
    comma = value_of('10px, 20px')
    assert comma.comma_separated
    assert comma.tostring() == '10px, 20px'
    assert comma.minified_css_text == '10px,20px'
    assert space.matches(parse_syntax('<length>#')) == Match.FALSE
    assert comma.matches(parse_syntax('<length>#')) == Match.TRUE
    assert comma.matches(parse_syntax('<length>+')) == Match.FALSE


def test_list_rejects_keywords():
    value = ValueList([NumberValue(UnitType.PX, 1)])
    with pytest.raises(InvalidModificationError):
        value.append(KeywordValue(Type.INITIAL))
    with pytest.raises(TypeMismatchError):
        value.append('10px')


def test_list_with_proxy_is_pending():
    value = ValueList([NumberValue(UnitType.PX, 1), value_of('var(--x)')])
    assert value.matches(parse_syntax('<length>+')) == Match.PENDING


def test_subproperty_rejects_mutation():
    value = NumberValue(UnitType.PX, 10)
    value.subproperty = True
    with pytest.raises(NoModificationAllowedError):
        value.value = 20
    with pytest.raises(NoModificationAllowedError):
        value.set_css_text('20px')

    clone = value.clone()
    assert not clone.subproperty
    clone.value = 20
    assert clone.value == 20
    assert value.value == 10


def test_clone_is_deep():
    value = value_of('10px 20px')
    value.subproperty = True
    clone = value.clone()
    assert clone == value
    assert not clone.subproperty
    clone[0] = NumberValue(UnitType.EM, 1)
    assert value[0] == NumberValue(UnitType.PX, 10)
    with pytest.raises(NoModificationAllowedError):
        value[0] = NumberValue(UnitType.EM, 1)


def test_set_css_text():
    value = NumberValue(UnitType.PX, 10)
    value.set_css_text('2em')
    assert value.unit == UnitType.EM
    assert value.value == 2
    with pytest.raises(InvalidModificationError):
        value.set_css_text('auto')


def test_write_css_text():
    wri = BufferSimpleWriter()
    value_of('calc(0.5em + 10px)').write_css_text(wri, minify=True)
    assert wri.getvalue() == 'calc(.5em + 10px)'


@pytest.mark.parametrize('x, expected', [
    (0.5, '0.5'),
    (1.0 / 3.0, '0.333333'),
    (-0.0000001, '-0.0000001'),
    (1e-7, '0.0000001'),
    (1.23456789e-8, '0.0000000123456789'),
    (-0.0, '0'),
])
def test_format_number(x, expected):
    assert format_number(x) == expected


def test_small_number_round_trip():
    value = value_of('calc(0.0000001px + 1px)')
    assert value.tostring() == 'calc(0.0000001px + 1px)'
    assert value_of(value.tostring()) == value
    assert NumberValue(UnitType.PX, 1e-7).tostring(minify=True) \
        == '.0000001px'


@pytest.mark.parametrize('value, text, minified', [
    (NumberValue(UnitType.PX, math.inf), 'calc(infinity * 1px)',
     'calc(infinity*1px)'),
    (NumberValue(UnitType.DEG, -math.inf), 'calc(-infinity * 1deg)',
     'calc(-infinity*1deg)'),
    (NumberValue(UnitType.NUMBER, math.inf), 'calc(infinity)',
     'calc(infinity)'),
    (NumberValue(UnitType.NUMBER, math.nan), 'calc(NaN)', 'calc(NaN)'),
    (NumberValue(UnitType.PERCENT, math.nan), 'calc(NaN * 1%)',
     'calc(NaN*1%)'),
])
def test_non_finite_serialization(value, text, minified):
    assert value.tostring() == text
    assert value.minified_css_text == minified


@pytest.mark.parametrize('css_text, expected', [
    ('calc(NaN)', 'calc(NaN)'),
    ('calc(nan)', 'calc(NaN)'),
    ('calc(NAN * 1px)', 'calc(NaN * 1px)'),
    ('calc(Infinity * 2)', 'calc(infinity * 2)'),
])
def test_constant_names_are_canonical(css_text, expected):
    assert value_of(css_text).tostring() == expected


def test_nan_equality():
    assert NumberValue(UnitType.PX, math.nan) \
        == NumberValue(UnitType.PX, math.nan)
    assert NumberValue(UnitType.PX, math.nan) != NumberValue(UnitType.PX, 1)


def test_function_arguments_are_copies():
    value = value_of('foo(1, 2)')
    assert isinstance(value, FunctionValue)
    value.arguments.clear()
    assert len(value.arguments) == 2
    assert value.tostring() == 'foo(1, 2)'
    value = value_of('min(1px, 2px)')
    assert isinstance(value, MathFunctionValue)
    value.arguments.pop()
    assert len(value.arguments) == 2
    assert value.tostring() == 'min(1px, 2px)'
