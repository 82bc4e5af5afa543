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
from abc import ABC, abstractmethod


class SimpleWriter(ABC):
    """A minimal text output sink used for serialization.

    Implementations may raise OSError from `write()`; serialization does not
    catch it.
    """

    @abstractmethod
    def write(self, text):
        """Writes a string or a single character.

        Arguments:
            text (str): The text to write.
        """
        raise NotImplementedError


class BufferSimpleWriter(SimpleWriter):
    """An in-memory sink backed by io.StringIO."""

    def __init__(self):
        self._buffer = io.StringIO()

    def __str__(self):
        return self._buffer.getvalue()

    def getvalue(self):
        return self._buffer.getvalue()

    def write(self, text):
        self._buffer.write(text)


class StreamSimpleWriter(SimpleWriter):
    """Writes to a text stream such as an open file."""

    def __init__(self, stream):
        self._stream = stream

    def write(self, text):
        self._stream.write(text)
