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


import decimal
import math

precision = 6
"""int: The precision is a decimal number indicating how many digits should
be displayed after the decimal point for a floating point value.
The precision must be greater than zero.
"""

rel_tol = 1e-05
"""float: The relative error allowed when rounding to `precision`. A number
that loses more (such as 1e-7, which would round to 0) is written in full.
"""


def _exact_text(x):
    # the shortest text that reads back as x, without an exponent
    text = '{:f}'.format(decimal.Decimal(repr(float(x))))
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_number_sequence(s):
    """Formats the numbers with `precision` decimals.

    A number that the rounding would change beyond `rel_tol` is written
    in full instead.
    """
    number_sequence = list()
    for x in iter(s):
        text = '{:.{precision}f}'.format(
            x, precision=precision).rstrip('0').rstrip('.')
        if (math.isfinite(x)
                and not math.isclose(float(text), x, rel_tol=rel_tol)):
            text = _exact_text(x)
        number_sequence.append(text if text != '-0' else '0')
    return number_sequence


def format_minified_number_sequence(s):
    """Formats the numbers as `format_number_sequence` does, without the
    leading zero of fractions (e.g. '.5', '-.25').
    """
    number_sequence = list()
    for x in format_number_sequence(s):
        if x.startswith('0.'):
            x = x[1:]
        elif x.startswith('-0.'):
            x = '-' + x[2:]
        number_sequence.append(x)
    return number_sequence


def format_number(x, minify=False):
    if minify:
        return format_minified_number_sequence([x])[0]
    return format_number_sequence([x])[0]
