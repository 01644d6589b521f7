# Copyright 2026 Firefly Software Solutions Inc.
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
"""Around interception: wrap a method so a wrapper method decides if, when
and how the original runs."""

from decorate.around.binding import WrapperBinding
from decorate.around.call import AroundCall
from decorate.around.decorator import declare_around, install_around, make_declarator
from decorate.around.options import AroundOptions, validate_options
from decorate.around.trampoline import build_trampoline, is_trampoline

__all__ = [
    "AroundCall",
    "AroundOptions",
    "WrapperBinding",
    "build_trampoline",
    "declare_around",
    "install_around",
    "is_trampoline",
    "make_declarator",
    "validate_options",
]
