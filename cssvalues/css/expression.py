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
import weakref
from enum import Enum

from ..exception import CSSSyntaxError, InvalidModificationError
from .lexical import LexicalType
from .syntax import Category, Match
from .types import NumberValue, PrimitiveValue, Type
from .units import UnitType


class AlgebraicPart(Enum):
    SUM = 'sum'
    PRODUCT = 'product'
    OPERAND = 'operand'


class MathFunction(Enum):
    """The math functions that may appear inside or instead of calc()."""

    MIN = 'min'
    MAX = 'max'
    CLAMP = 'clamp'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ASIN = 'asin'
    ACOS = 'acos'
    ATAN = 'atan'
    ATAN2 = 'atan2'
    POW = 'pow'
    SQRT = 'sqrt'
    HYPOT = 'hypot'
    LOG = 'log'
    EXP = 'exp'
    ABS = 'abs'
    SIGN = 'sign'
    ROUND = 'round'
    MOD = 'mod'
    REM = 'rem'


# (minimum, maximum) argument counts; None means unbounded
_MATH_FUNCTION_ARITY = {
    MathFunction.MIN: (1, None),
    MathFunction.MAX: (1, None),
    MathFunction.CLAMP: (3, 3),
    MathFunction.SIN: (1, 1),
    MathFunction.COS: (1, 1),
    MathFunction.TAN: (1, 1),
    MathFunction.ASIN: (1, 1),
    MathFunction.ACOS: (1, 1),
    MathFunction.ATAN: (1, 1),
    MathFunction.ATAN2: (2, 2),
    MathFunction.POW: (2, 2),
    MathFunction.SQRT: (1, 1),
    MathFunction.HYPOT: (1, None),
    MathFunction.LOG: (1, 2),
    MathFunction.EXP: (1, 1),
    MathFunction.ABS: (1, 1),
    MathFunction.SIGN: (1, 1),
    MathFunction.ROUND: (1, 2),
    MathFunction.MOD: (2, 2),
    MathFunction.REM: (2, 2),
}

math_function_name_set = frozenset(function.value for function in MathFunction)

rounding_strategy_set = frozenset(['nearest', 'up', 'down', 'to-zero'])

_CONSTANTS = {
    'pi': math.pi,
    'e': math.e,
    'infinity': math.inf,
    '-infinity': -math.inf,
    'NaN': math.nan,
}

_CONSTANT_NAMES = {name.lower(): name for name in _CONSTANTS}


class StyleExpression(object):
    """The base class of expression nodes.

    A node is owned by the operand list of its parent; the parent itself is
    only held through a weak reference.
    """

    part_type = None

    def __init__(self):
        self._inverse = False
        self._parent = None

    def __deepcopy__(self, memo):
        return self.clone()

    def __eq__(self, other):
        if not isinstance(other, StyleExpression):
            return NotImplemented
        return (self.part_type == other.part_type
                and self._inverse == other._inverse)

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__,
                                repr(self.tostring()))

    @property
    def inverse(self):
        """bool: True for a subtraction within a sum, or a division within a
        product.
        """
        return self._inverse

    @inverse.setter
    def inverse(self, inverse):
        self._inverse = bool(inverse)

    @property
    def parent(self):
        """StyleExpression: The enclosing node, or None."""
        return self._parent() if self._parent is not None else None

    def _set_parent(self, parent):
        self._parent = weakref.ref(parent) if parent is not None else None

    def clone(self):
        raise NotImplementedError

    def tostring(self, minify=False):
        raise NotImplementedError


class OperandExpression(StyleExpression):
    """A leaf node holding a primitive value."""

    part_type = AlgebraicPart.OPERAND

    def __init__(self, operand, constant=None):
        """Constructs an OperandExpression object.

        Arguments:
            operand (PrimitiveValue): The operand.
            constant (str, optional): The name of the constant the operand
                was written as (e.g. 'pi').
        """
        super().__init__()
        self._operand = operand
        self._constant = constant

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is not True:
            return result
        return (self._operand == other._operand
                and self._constant == other._constant)

    @property
    def constant(self):
        return self._constant

    @property
    def operand(self):
        return self._operand

    def clone(self):
        expression = OperandExpression(copy.deepcopy(self._operand),
                                       self._constant)
        expression._inverse = self._inverse
        return expression

    def is_negative_number(self):
        return (self._constant is None
                and isinstance(self._operand, NumberValue)
                and self._operand.is_negative())

    def absolute_text(self, minify=False):
        number = self._operand
        return NumberValue(number.unit, -number.value,
                           number.as_integer).tostring(minify=minify)

    def tostring(self, minify=False):
        if self._constant is not None:
            return self._constant
        return self._operand.tostring(minify=minify)


class OperationExpression(StyleExpression):
    """The base class of sum and product nodes."""

    def __init__(self, *expressions):
        super().__init__()
        self._operands = list()
        self.next_operand_inverse = False
        for expression in expressions:
            self.add_expression(expression)

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is not True:
            return result
        return self._operands == other._operands

    def __getitem__(self, index):
        return self._operands[index]

    def __iter__(self):
        return iter(self._operands)

    def __len__(self):
        return len(self._operands)

    @property
    def operands(self):
        """list[StyleExpression]: A copy of the operand list."""
        return list(self._operands)

    def add_expression(self, expression):
        """Appends `expression` to the operands.

        The inverse flag queued in `next_operand_inverse` is applied to
        `expression` and then cleared.
        """
        self._operands.append(expression)
        expression._set_parent(self)
        if self.next_operand_inverse:
            expression.inverse = True
            self.next_operand_inverse = False

    def clone(self):
        expression = self.__class__()
        expression._inverse = self._inverse
        for operand in self._operands:
            expression.add_expression(operand.clone())
        return expression


class SumExpression(OperationExpression):
    """An n-ary sum. Inverse operands are subtracted."""

    part_type = AlgebraicPart.SUM

    def replace_last_expression(self, operation):
        """Replaces the last operand by `operation`, which takes the
        replaced operand as its first operand.

        The inverse flag of the replaced operand moves to `operation`.

        Arguments:
            operation (OperationExpression): The new operand.
        Raises:
            InvalidModificationError: If this sum has no operands.
        """
        if len(self._operands) == 0:
            raise InvalidModificationError('Empty sum')
        last = self._operands.pop()
        if last.inverse:
            last.inverse = False
            operation.inverse = True
        last._set_parent(None)
        inverse = operation.next_operand_inverse
        operation.next_operand_inverse = False
        operation.add_expression(last)
        operation.next_operand_inverse = inverse
        operation._set_parent(self)
        self._operands.append(operation)

    def tostring(self, minify=False):
        s = ''
        for index, expression in enumerate(self._operands):
            negative = (expression.part_type == AlgebraicPart.OPERAND
                        and expression.is_negative_number())
            if expression.part_type == AlgebraicPart.SUM:
                text = '(' + expression.tostring(minify) + ')'
            elif negative and (index > 0 or expression.inverse):
                text = expression.absolute_text(minify)
            else:
                text = expression.tostring(minify)
            if index == 0:
                if expression.inverse:
                    s += text if negative else '-1' + (
                        '*' if minify else ' * ') + text
                else:
                    s += text
                continue
            if expression.inverse != negative:
                s += ' - '
            else:
                s += ' + '
            s += text
        return s


class ProductExpression(OperationExpression):
    """An n-ary product. Inverse operands are divisors."""

    part_type = AlgebraicPart.PRODUCT

    def add_expression(self, expression):
        """Appends `expression` to the operands.

        If `expression` is the last operand of a sum that does not already
        own this product, the product replaces it in that sum instead of
        nesting the sum (see SumExpression.replace_last_expression).
        """
        parent = expression.parent
        if (isinstance(parent, SumExpression) and parent is not self.parent
                and len(parent) > 0 and parent[-1] is expression):
            parent.replace_last_expression(self)
            return
        super().add_expression(expression)

    def tostring(self, minify=False):
        s = ''
        for index, expression in enumerate(self._operands):
            text = expression.tostring(minify)
            if expression.part_type != AlgebraicPart.OPERAND:
                text = '(' + text + ')'
            if index == 0:
                if expression.inverse:
                    s += '1/' if minify else '1 / '
            elif expression.inverse:
                s += '/' if minify else ' / '
            else:
                s += '*' if minify else ' * '
            s += text
        return s


class _CalculatedValue(PrimitiveValue):

    def __init__(self):
        super().__init__()
        self._expect_integer = False

    @property
    def expect_integer(self):
        """bool: True if the result must be rounded to an integer when
        evaluated.
        """
        return self._expect_integer

    def set_expect_integer(self, expect_integer=True):
        self._check_modification()
        self._expect_integer = bool(expect_integer)

    def _match(self, syntax, chain):
        from .dimension import DimensionalAnalyzer

        if syntax is None:
            return Match.FALSE
        fragments = list(syntax) if chain else [syntax]
        dimension = DimensionalAnalyzer().analyze(self)
        if any(fragment.is_universal() for fragment in fragments):
            return Match.TRUE
        if dimension.pending:
            return Match.PENDING
        result = dimension.category
        if result is None:
            return Match.FALSE

        length = percentage = False
        for fragment in fragments:
            category = fragment.category
            if category == result:
                return Match.TRUE
            elif (category == Category.LENGTH_PERCENTAGE
                  and result in (Category.LENGTH, Category.PERCENTAGE)):
                return Match.TRUE
            elif category == Category.INTEGER and result == Category.NUMBER:
                return Match.TRUE
            elif result == Category.LENGTH_PERCENTAGE:
                if category == Category.LENGTH:
                    length = True
                elif category == Category.PERCENTAGE:
                    percentage = True
                if length and percentage:
                    return Match.TRUE
        return Match.FALSE

    def matches(self, syntax):
        return self._match(syntax, True)

    def matches_component(self, fragment):
        return self._match(fragment, False)


class ExpressionValue(_CalculatedValue):
    """A calc() value."""

    def __init__(self, expression):
        super().__init__()
        self._expression = expression

    def __eq__(self, other):
        if not isinstance(other, ExpressionValue):
            return NotImplemented
        return self._expression == other._expression

    @property
    def expression(self):
        """StyleExpression: The root node."""
        return self._expression

    @expression.setter
    def expression(self, expression):
        self._check_modification()
        self._expression = expression

    @property
    def primitive_type(self):
        return Type.EXPRESSION

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        return 'calc(' + self._expression.tostring(minify) + ')'


class MathFunctionValue(_CalculatedValue):
    """A math function such as min(), clamp() or atan2()."""

    def __init__(self, function, arguments, rounding_strategy=None):
        """Constructs a MathFunctionValue object.

        Arguments:
            function (MathFunction): The function.
            arguments (list[StyleExpression]): One node per argument.
            rounding_strategy (str, optional): The strategy of round().
        Raises:
            CSSSyntaxError: If the argument count is wrong.
        """
        super().__init__()
        minimum, maximum = _MATH_FUNCTION_ARITY[function]
        count = len(arguments)
        if count < minimum or (maximum is not None and count > maximum):
            raise CSSSyntaxError('Wrong argument count for {}(): {}'.format(
                function.value, count))
        if rounding_strategy is not None:
            if function != MathFunction.ROUND:
                raise CSSSyntaxError('Unexpected rounding strategy: '
                                     + repr(rounding_strategy))
            if rounding_strategy not in rounding_strategy_set:
                raise CSSSyntaxError('Unknown rounding strategy: '
                                     + repr(rounding_strategy))
        self._function = function
        self._arguments = list(arguments)
        self._rounding_strategy = rounding_strategy

    def __eq__(self, other):
        if not isinstance(other, MathFunctionValue):
            return NotImplemented
        return (self._function == other._function
                and self._rounding_strategy == other._rounding_strategy
                and self._arguments == other._arguments)

    @property
    def arguments(self):
        return list(self._arguments)

    @property
    def function(self):
        """MathFunction: The function."""
        return self._function

    @property
    def name(self):
        return self._function.value

    @property
    def primitive_type(self):
        return Type.MATH_FUNCTION

    @property
    def rounding_strategy(self):
        return self._rounding_strategy

    def tostring(self, **kwargs):
        minify = kwargs.get('minify', False)
        args = [argument.tostring(minify) for argument in self._arguments]
        if self._rounding_strategy is not None:
            args.insert(0, self._rounding_strategy)
        return self.name + '(' + (',' if minify else ', ').join(args) + ')'


class ExpressionBuilder(object):
    """Builds expression trees from lexical units.

    Operands other than numbers, constants, groups and math functions are
    created with `factory`, which must provide
    `create_primitive_value(lexical_unit)`.
    """

    def __init__(self, factory):
        self._factory = factory

    def build(self, units):
        """Builds the tree of an operation.

        Arguments:
            units (iterable[LexicalUnit]): The units, without commas.
        Returns:
            StyleExpression: The root node.
        Raises:
            CSSSyntaxError: If the operation is malformed.
        """
        root = None
        sum_ = product = None
        expect_operand = True
        for unit in units:
            unit_type = unit.lexical_unit_type
            if unit_type in (LexicalType.OPERATOR_PLUS,
                             LexicalType.OPERATOR_MINUS):
                if expect_operand:
                    raise CSSSyntaxError('Missing operand before '
                                         + repr(unit_type.value))
                if sum_ is None:
                    sum_ = SumExpression(root)
                    root = sum_
                sum_.next_operand_inverse = (
                    unit_type == LexicalType.OPERATOR_MINUS)
                product = None
                expect_operand = True
            elif unit_type in (LexicalType.OPERATOR_MULTIPLY,
                               LexicalType.OPERATOR_SLASH):
                if expect_operand:
                    raise CSSSyntaxError('Missing operand before '
                                         + repr(unit_type.value))
                if product is None:
                    product = ProductExpression()
                    if sum_ is None:
                        product.add_expression(root)
                        root = product
                    else:
                        product.add_expression(sum_[-1])
                product.next_operand_inverse = (
                    unit_type == LexicalType.OPERATOR_SLASH)
                expect_operand = True
            elif unit.is_operator():
                raise CSSSyntaxError('Unexpected operator: '
                                     + repr(unit_type.value))
            else:
                if not expect_operand:
                    raise CSSSyntaxError('Missing operator before '
                                         + repr(unit.tostring()))
                operand = self.create_operand(unit)
                if product is not None:
                    product.add_expression(operand)
                elif sum_ is not None:
                    sum_.add_expression(operand)
                else:
                    root = operand
                expect_operand = False

        if root is None:
            raise CSSSyntaxError('Empty expression')
        if expect_operand:
            raise CSSSyntaxError('Missing operand at the end of expression')
        return root

    def create_calc(self, unit):
        """Returns a new ExpressionValue from a calc() unit."""
        if unit.parameters is None:
            raise CSSSyntaxError('Empty calc()')
        return ExpressionValue(self.build(unit.parameters))

    def create_math_function(self, unit):
        """Returns a new MathFunctionValue from a function unit.

        Raises:
            CSSSyntaxError: If the function is unknown or malformed.
        """
        try:
            function = MathFunction(unit.function_name)
        except ValueError:
            raise CSSSyntaxError('Unknown math function: '
                                 + repr(unit.function_name))
        groups = split_arguments(unit.parameters)
        rounding_strategy = None
        if (function == MathFunction.ROUND and len(groups) > 0
                and len(groups[0]) == 1
                and groups[0][0].lexical_unit_type == LexicalType.IDENT
                and groups[0][0].value.lower() in rounding_strategy_set):
            rounding_strategy = groups.pop(0)[0].value.lower()
        arguments = [self.build(group) for group in groups]
        return MathFunctionValue(function, arguments, rounding_strategy)

    def create_operand(self, unit):
        unit_type = unit.lexical_unit_type
        if unit_type in (LexicalType.SUB_EXPRESSION, LexicalType.CALC):
            if unit.parameters is None:
                raise CSSSyntaxError('Empty group: ' + repr(unit.tostring()))
            return self.build(unit.parameters)
        elif unit_type == LexicalType.IDENT:
            name = _CONSTANT_NAMES.get(unit.value.lower())
            if name is None:
                raise CSSSyntaxError('Unknown constant: ' + repr(unit.value))
            return OperandExpression(
                NumberValue(UnitType.NUMBER, _CONSTANTS[name]), name)
        elif (unit_type == LexicalType.FUNCTION
              and unit.function_name in math_function_name_set):
            return OperandExpression(self.create_math_function(unit))
        return OperandExpression(self._factory.create_primitive_value(unit))


def split_arguments(unit):
    """Splits a parameter chain on commas.

    Returns:
        list[list[LexicalUnit]]: The units of each argument.
    Raises:
        CSSSyntaxError: If an argument is empty.
    """
    groups = [[]]
    for current in (unit if unit is not None else []):
        if current.lexical_unit_type == LexicalType.OPERATOR_COMMA:
            groups.append([])
        else:
            groups[-1].append(current)
    if unit is None:
        return []
    if any(len(group) == 0 for group in groups):
        raise CSSSyntaxError('Empty argument')
    return groups
