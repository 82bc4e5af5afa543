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


import re
from enum import Enum

from ..exception import CSSSyntaxError

_RE_SYNTAX_ALTERNATION = re.compile(r'\s*\|\s*')

_RE_SYNTAX_COMPONENT = re.compile(
    r'(<(?P<name>[a-z][a-z0-9\-]*)>|(?P<ident>-?[a-z_][a-z0-9_\-]*))'
    r'(?P<multiplier>[+#*])?',
    re.IGNORECASE)


class Category(Enum):
    """The data-type categories of a syntax fragment."""

    LENGTH = 'length'
    PERCENTAGE = 'percentage'
    LENGTH_PERCENTAGE = 'length-percentage'
    NUMBER = 'number'
    INTEGER = 'integer'
    ANGLE = 'angle'
    TIME = 'time'
    FREQUENCY = 'frequency'
    RESOLUTION = 'resolution'
    FLEX = 'flex'
    COLOR = 'color'
    IMAGE = 'image'
    URL = 'url'
    STRING = 'string'
    CUSTOM_IDENT = 'custom-ident'
    COUNTER = 'counter'
    BASIC_SHAPE = 'basic-shape'
    TRANSFORM_FUNCTION = 'transform-function'
    TRANSFORM_LIST = 'transform-list'
    EASING_FUNCTION = 'easing-function'
    UNICODE_RANGE = 'unicode-range'
    RATIO = 'ratio'
    UNIVERSAL = '*'
    IDENTIFIER = 'identifier'  # a literal keyword such as 'auto'


class Multiplier(Enum):
    NONE = ''
    PLUS = '+'  # one or more, space separated
    STAR = '*'  # zero or more, space separated
    NUMBER = '#'  # one or more, comma separated


class Match(Enum):
    """The three-valued outcome of grammar matching.

    PENDING means the value cannot be validated until a substitution
    (var(), attr(), or a CSS-wide keyword) has been resolved.
    """

    TRUE = 'true'
    FALSE = 'false'
    PENDING = 'pending'


class SyntaxFragment(object):
    """A node in a chain of `|`-separated syntax alternatives."""

    def __init__(self, category, multiplier=Multiplier.NONE, name=None):
        """Constructs a SyntaxFragment object.

        Arguments:
            category (Category): The data-type category.
            multiplier (Multiplier, optional): The repetition multiplier.
            name (str, optional): The keyword of an IDENTIFIER fragment.
        """
        if category == Category.IDENTIFIER and not name:
            raise ValueError('Expected a keyword for an identifier fragment')
        self._category = category
        self._multiplier = multiplier
        self._name = name
        self._next = None

    def __iter__(self):
        fragment = self
        while fragment is not None:
            yield fragment
            fragment = fragment._next

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__,
                                repr(self.tostring()))

    @property
    def category(self):
        """Category: The data-type category."""
        return self._category

    @property
    def multiplier(self):
        """Multiplier: The repetition multiplier."""
        return self._multiplier

    @property
    def name(self):
        """str: The keyword of a literal fragment, or None."""
        return self._name

    @property
    def next(self):
        """SyntaxFragment: The next alternative, or None."""
        return self._next

    @next.setter
    def next(self, fragment):
        self._next = fragment

    def is_list(self):
        """Returns True if this fragment accepts more than one value."""
        return (self._multiplier != Multiplier.NONE
                or self._category == Category.TRANSFORM_LIST)

    def is_universal(self):
        return self._category == Category.UNIVERSAL

    def tostring(self, chain=True):
        """Returns the text of this fragment, followed by the rest of the
        chain if `chain` is True.
        """
        if self._category == Category.UNIVERSAL:
            s = '*'
        elif self._category == Category.IDENTIFIER:
            s = self._name
        else:
            s = '<' + self._category.value + '>'
        s += self._multiplier.value
        if chain and self._next is not None:
            s += ' | ' + self._next.tostring()
        return s


def parse_syntax(text):
    """Parses a syntax definition such as '<length>+ | <percentage> | auto'.

    Arguments:
        text (str): The syntax definition.
    Returns:
        SyntaxFragment: The first fragment of the alternation chain.
    Raises:
        CSSSyntaxError: If the definition is malformed.
    """
    text = text.strip()
    if len(text) == 0:
        raise CSSSyntaxError('Empty syntax definition')
    if text == '*':
        return SyntaxFragment(Category.UNIVERSAL)

    first = last = None
    for component in _RE_SYNTAX_ALTERNATION.split(text):
        if component == '*':
            fragment = SyntaxFragment(Category.UNIVERSAL)
        else:
            matched = _RE_SYNTAX_COMPONENT.fullmatch(component)
            if matched is None:
                raise CSSSyntaxError('Invalid syntax component: '
                                     + repr(component))
            multiplier = Multiplier(matched.group('multiplier') or '')
            name = matched.group('name')
            if name is not None:
                try:
                    category = Category(name.lower())
                except ValueError:
                    raise CSSSyntaxError('Unknown data type: ' + repr(name))
                if category == Category.IDENTIFIER:
                    raise CSSSyntaxError('Unknown data type: ' + repr(name))
                fragment = SyntaxFragment(category, multiplier)
            else:
                fragment = SyntaxFragment(Category.IDENTIFIER, multiplier,
                                          matched.group('ident'))
        if first is None:
            first = fragment
        else:
            last.next = fragment
        last = fragment
    return first
