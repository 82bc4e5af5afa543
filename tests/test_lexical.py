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


import pytest

from cssvalues.css.lexical import LexicalType, chain_tostring, \
    parse_lexical_units
from cssvalues.css.units import UnitType
from cssvalues.exception import CSSSyntaxError


def types_of(unit):
    return [current.lexical_unit_type for current in unit]


def test_empty():
    assert parse_lexical_units('') is None
    assert parse_lexical_units('  /* comment */ ') is None


def test_numbers():
    unit = parse_lexical_units('1 2.5 50% 10px')
    assert types_of(unit) == [LexicalType.INTEGER, LexicalType.REAL,
                              LexicalType.PERCENTAGE, LexicalType.DIMENSION]
    units = list(unit)
    assert units[0].value == 1
    assert units[2].dimension_unit == UnitType.PERCENT
    assert units[3].dimension_unit == UnitType.PX
    assert units[3].previous_lexical_unit is units[2]


def test_unknown_dimension():
    with pytest.raises(CSSSyntaxError):
        parse_lexical_units('10foo')


def test_functions():
    unit = parse_lexical_units('calc(1px + var(--x)) attr(data-x)')
    assert types_of(unit) == [LexicalType.CALC, LexicalType.ATTR]
    assert unit.contains_proxy()
    assert types_of(unit.parameters) == [
        LexicalType.DIMENSION, LexicalType.OPERATOR_PLUS, LexicalType.VAR]
    assert unit.parameters.owner is unit


def test_sub_expression():
    unit = parse_lexical_units('calc((1px + 2px) * 3)')
    group = unit.parameters
    assert group.lexical_unit_type == LexicalType.SUB_EXPRESSION
    assert types_of(group.parameters) == [
        LexicalType.DIMENSION, LexicalType.OPERATOR_PLUS,
        LexicalType.DIMENSION]


def test_comparison_operators():
    unit = parse_lexical_units('a <= b >= c < d')
    assert types_of(unit) == [
        LexicalType.IDENT, LexicalType.OPERATOR_LE, LexicalType.IDENT,
        LexicalType.OPERATOR_GE, LexicalType.IDENT, LexicalType.OPERATOR_LT,
        LexicalType.IDENT]


def test_uri():
    unit = parse_lexical_units('url(a.png) url("b c.png")')
    assert types_of(unit) == [LexicalType.URI, LexicalType.URI]
    assert [current.value for current in unit] == ['a.png', 'b c.png']


@pytest.mark.parametrize('text, start, end', [
    ('U+26', 0x26, 0x26),
    ('u+0-7F', 0, 0x7f),
    ('U+0025-00FF', 0x25, 0xff),
    ('U+A5', 0xa5, 0xa5),
])
def test_unicode_range(text, start, end):
    unit = parse_lexical_units(text)
    assert unit.lexical_unit_type == LexicalType.UNICODE_RANGE
    assert unit.value == (start, end)
    assert unit.next_lexical_unit is None


def test_unicode_wildcard():
    unit = parse_lexical_units('U+4??, U+0-7F')
    assert types_of(unit) == [LexicalType.UNICODE_WILDCARD,
                              LexicalType.OPERATOR_COMMA,
                              LexicalType.UNICODE_RANGE]
    assert unit.value == '4??'


def test_unicode_wildcard_block():
    unit = parse_lexical_units('U+??')
    assert unit.lexical_unit_type == LexicalType.UNICODE_WILDCARD
    assert unit.value == '??'


def test_chain_tostring():
    unit = parse_lexical_units('var(--x, 10px) "a" #fff')
    assert chain_tostring(unit) == 'var(--x, 10px) "a" #fff'
