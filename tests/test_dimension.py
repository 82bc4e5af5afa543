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

from cssvalues.css.dimension import DimensionalAnalyzer, category_of
from cssvalues.css.factory import parse_value
from cssvalues.css.syntax import Category, Match, parse_syntax
from cssvalues.css.units import CSSNumericType, UnitType


def value_of(css_text):
    return parse_value(css_text).value


def analyze(css_text):
    return DimensionalAnalyzer().analyze(value_of(css_text))


@pytest.mark.parametrize('css_text, category', [
    ('calc(1px + 2em)', Category.LENGTH),
    ('calc(2 * 3)', Category.NUMBER),
    ('calc(50% + 10px)', Category.LENGTH_PERCENTAGE),
    ('calc(100% / 3)', Category.PERCENTAGE),
    ('calc(10deg * 2)', Category.ANGLE),
    ('calc(1s - 200ms)', Category.TIME),
    ('calc(2 / 1khz)', None),
    ('min(1px, 2em)', Category.LENGTH),
    ('sin(45deg)', Category.NUMBER),
    ('atan2(1px, 2px)', Category.ANGLE),
    ('sqrt(4)', Category.NUMBER),
    ('sign(-10px)', Category.NUMBER),
])
def test_category(css_text, category):
    assert analyze(css_text).category == category


@pytest.mark.parametrize('css_text', [
    'calc(1px + 1deg)',
    'calc(1px * 1px)',
    'calc(1px / 1px)',
    'calc(1px + 2)',
    'sqrt(4px)',
    'sin(1px)',
    'atan2(1px, 1deg)',
])
def test_invalid_type(css_text):
    assert analyze(css_text).category is None


def test_unknown_function():
    dimension = analyze('calc(foo(1) * 2)')
    assert dimension.unknown_function
    assert dimension.category is None
    value = value_of('calc(foo(1) * 2)')
    assert value.matches(parse_syntax('*')) == Match.TRUE
    assert value.matches(parse_syntax('<length>')) == Match.FALSE


def test_integer_accepts_number():
    value = value_of('calc(2 * 3)')
    assert value.matches(parse_syntax('<integer>')) == Match.TRUE
    assert value.matches(parse_syntax('<length>')) == Match.FALSE


def test_length_percentage_matching():
    value = value_of('calc(50% + 10px)')
    assert value.matches(parse_syntax('<length-percentage>')) == Match.TRUE
    assert value.matches(parse_syntax('<length>')) == Match.FALSE
    assert value.matches(parse_syntax('<percentage>')) == Match.FALSE
    assert value.matches(
        parse_syntax('<length> | <percentage>')) == Match.TRUE
    assert value_of('calc(1px + 2px)').matches(
        parse_syntax('<length-percentage>')) == Match.TRUE


def test_math_function_matching():
    assert value_of('clamp(1px, 2vw, 10px)').matches(
        parse_syntax('<length>')) == Match.TRUE
    assert value_of('atan2(1, 2)').matches(
        parse_syntax('<angle>')) == Match.TRUE


def test_category_of():
    assert category_of(None) is None
    assert category_of(CSSNumericType()) == Category.NUMBER
    assert category_of(CSSNumericType.create_type(UnitType.PX)) \
        == Category.LENGTH
    assert category_of(CSSNumericType.create_type(UnitType.PERCENT)) \
        == Category.PERCENTAGE
