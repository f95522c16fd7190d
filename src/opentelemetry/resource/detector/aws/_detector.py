# Copyright The OpenTelemetry Authors
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

import abc
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from opentelemetry.sdk.resources import Resource, ResourceDetector
from opentelemetry.util.types import AttributeValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Detected:
    """The detector recognized its environment. ``attributes`` is read-only."""

    attributes: Mapping[str, AttributeValue]

    def __post_init__(self):
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes))
        )


@dataclass(frozen=True)
class NotDetected:
    """The detector did not recognize its environment."""

    reason: str = ""


DetectionOutcome = Union[Detected, NotDetected]


class AwsResourceDetector(ResourceDetector):
    """Base class of the AWS resource detectors.

    Subclasses implement ``_detect`` and return a ``DetectionOutcome``.
    Exceptions escaping ``_detect`` are reported as ``NotDetected`` unless
    ``raise_on_error`` is set.

    ``deadline`` is an optional absolute ``time.monotonic()`` value by which
    detection must be complete; detectors issuing requests derive their
    timeouts from it.
    """

    def __init__(
        self, raise_on_error: bool = False, deadline: Optional[float] = None
    ):
        super().__init__(raise_on_error=raise_on_error)
        self.deadline = deadline

    @abc.abstractmethod
    def _detect(self) -> DetectionOutcome:
        pass

    def detect_outcome(self) -> DetectionOutcome:
        try:
            return self._detect()
        # pylint: disable=broad-except
        except Exception as exception:
            if self.raise_on_error:
                raise exception

            logger.warning("%s failed: %s", self.__class__.__name__, exception)
            return NotDetected(str(exception))

    def detect(self) -> "Resource":
        outcome = self.detect_outcome()
        if isinstance(outcome, Detected):
            return Resource(dict(outcome.attributes))
        return Resource.get_empty()
