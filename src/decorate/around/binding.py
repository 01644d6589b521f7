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
"""WrapperBinding — the declared decorator -> wrapper association."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WrapperBinding:
    """One ``around_decorator`` declaration.

    Attributes:
        decorator_name: Name of the declarator the class calls right before
            defining a method to wrap.
        wrapper_name: Name of the method that receives the
            :class:`~decorate.around.call.AroundCall`.
        owner: Qualified name of the class that declared the binding.
    """

    decorator_name: str
    wrapper_name: str
    owner: str
