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
"""Validation of ``around_decorator`` options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator

from decorate.kernel.exceptions import ConfigurationError

CALL_REQUIRED_MESSAGE = "call option with identifier argument required"


class AroundOptions(BaseModel):
    """Options accepted by ``around_decorator``: exactly one, ``call``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    call: StrictStr

    @field_validator("call")
    @classmethod
    def _call_is_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"'{value}' is not an identifier")
        return value


def validate_options(options: Mapping[str, Any]) -> AroundOptions:
    """Validate *options*, reporting a bad ``call`` before unknown keys.

    Raises:
        ConfigurationError: If ``call`` is missing or not an identifier, or
            if any key other than ``call`` is present.
    """
    try:
        return AroundOptions.model_validate(dict(options))
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        if any(e["loc"][:1] == ("call",) for e in errors):
            raise ConfigurationError(
                CALL_REQUIRED_MESSAGE,
                code="AROUND_CALL_REQUIRED",
                context={"call": options.get("call")},
            ) from exc
        # extra="forbid": anything not on ``call`` is an extra key
        option = str(errors[0]["loc"][0])
        raise ConfigurationError(
            f"Unknown option '{option}'",
            code="AROUND_UNKNOWN_OPTION",
            context={"option": option, "options": sorted(map(str, options))},
        ) from exc
