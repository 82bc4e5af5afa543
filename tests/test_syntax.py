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

from cssvalues.css.syntax import Category, Multiplier, SyntaxFragment, \
    parse_syntax
from cssvalues.exception import CSSSyntaxError


def test_parse_syntax_alternation():
    syntax = parse_syntax('<length>+ | <percentage> | auto')
    fragments = list(syntax)
    assert len(fragments) == 3
    assert fragments[0].category == Category.LENGTH
    assert fragments[0].multiplier == Multiplier.PLUS
    assert fragments[1].category == Category.PERCENTAGE
    assert fragments[1].multiplier == Multiplier.NONE
    assert fragments[2].category == Category.IDENTIFIER
    assert fragments[2].name == 'auto'
    assert syntax.tostring() == '<length>+ | <percentage> | auto'


def test_parse_syntax_universal():
    syntax = parse_syntax('*')
    assert syntax.is_universal()
    assert syntax.next is None


def test_parse_syntax_comma_list():
    syntax = parse_syntax('<color>#')
    assert syntax.category == Category.COLOR
    assert syntax.multiplier == Multiplier.NUMBER
    assert syntax.is_list()


def test_transform_list_is_a_list():
    syntax = parse_syntax('<transform-list>')
    assert syntax.multiplier == Multiplier.NONE
    assert syntax.is_list()


@pytest.mark.parametrize('text', [
    '',
    '<unknown-type>',
    '<length> | | <percentage>',
    '<identifier>',
    '<length>?',
])
def test_parse_syntax_error(text):
    with pytest.raises(CSSSyntaxError):
        parse_syntax(text)


def test_identifier_fragment_requires_name():
    with pytest.raises(ValueError):
        SyntaxFragment(Category.IDENTIFIER)
