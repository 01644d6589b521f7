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
"""decorate — declarative around interception for Python classes."""

from decorate.alias import create_alias
from decorate.around import AroundCall, WrapperBinding, is_trampoline
from decorate.kernel.exceptions import (
    AliasError,
    ConfigurationError,
    DecorateError,
    ResultUnavailableError,
)
from decorate.meta import Decoratable, DecoratableMeta, DecorationNamespace
from decorate.registry import DecorationRegistry, default_registry

__version__ = "0.1.0"

__all__ = [
    "AliasError",
    "AroundCall",
    "ConfigurationError",
    "Decoratable",
    "DecoratableMeta",
    "DecorateError",
    "DecorationNamespace",
    "DecorationRegistry",
    "ResultUnavailableError",
    "WrapperBinding",
    "create_alias",
    "default_registry",
    "is_trampoline",
]
