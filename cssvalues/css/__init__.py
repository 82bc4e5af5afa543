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


from .color import ColorMixValue, ColorValue, HSLColorValue, HWBColorValue, \
    LabColorValue, LCHColorValue, ProfiledColorValue, RGBColorValue, \
    color_function_set, color_space_set, component_value, \
    create_color_value, hue_method_set, interpolate_hue
from .dimension import Dimension, DimensionalAnalyzer, category_of
from .evaluator import Evaluator, PercentageEvaluator
from .expression import AlgebraicPart, ExpressionBuilder, ExpressionValue, \
    MathFunction, MathFunctionValue, OperandExpression, OperationExpression, \
    ProductExpression, StyleExpression, SumExpression, \
    math_function_name_set, rounding_strategy_set
from .factory import Outcome, Result, ValueFactory, parse_value
from .lexical import LexicalType, LexicalUnit, parse_lexical_units
from .syntax import Category, Match, Multiplier, SyntaxFragment, parse_syntax
from .types import AttrValue, CounterValue, CssType, CSSValue, \
    ElementReferenceValue, FunctionValue, IdentifierValue, KeywordValue, \
    LexicalValue, NumberValue, PrimitiveValue, ProxyValue, RatioValue, \
    ShorthandValue, StringValue, Type, UnicodeRangeValue, \
    UnicodeWildcardValue, UnknownValue, URIValue, ValueList, VarValue, \
    css_color_keyword_set, css_wide_keyword_set
from .units import CSSNumericBaseType, CSSNumericType, UnitType
