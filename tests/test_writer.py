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


import io

import pytest

from cssvalues.css.factory import parse_value
from cssvalues.writer import BufferSimpleWriter, SimpleWriter, \
    StreamSimpleWriter


class FailingWriter(SimpleWriter):

    def __init__(self):
        self.calls = 0

    def write(self, text):
        self.calls += 1
        raise OSError('disk full')


def value_of(css_text):
    return parse_value(css_text).value


def test_buffer_writer():
    wri = BufferSimpleWriter()
    value_of('1px 2px').write_css_text(wri)
    assert wri.getvalue() == '1px 2px'
    assert str(wri) == '1px 2px'


def test_stream_writer():
    stream = io.StringIO()
    wri = StreamSimpleWriter(stream)
    value_of('calc(0.5em + 10px)').write_css_text(wri, minify=True)
    value_of('rgb(255 0 0 / 0.5)').write_css_text(wri)
    assert stream.getvalue() == 'calc(.5em + 10px)rgb(255 0 0 / 0.5)'


@pytest.mark.parametrize('css_text', [
    '10px',
    'calc(1px + 2em)',
    'color-mix(in srgb, red, blue)',
])
def test_write_error_propagates(css_text):
    wri = FailingWriter()
    with pytest.raises(OSError):
        value_of(css_text).write_css_text(wri)
    assert wri.calls == 1


def test_abstract_writer():
    with pytest.raises(TypeError):
        SimpleWriter()
