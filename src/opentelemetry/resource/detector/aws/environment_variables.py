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

import logging
import math
from os import environ

logger = logging.getLogger(__name__)

OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT = (
    "OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT"
)
"""
.. envvar:: OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT

The :envvar:`OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT` sets, in seconds, how
long a single request made by the AWS resource detectors may take, and the
overall budget used by ``detect_aws_resource``.
Default: 2
"""

_DEFAULT_TIMEOUT = 2.0


def get_detector_timeout() -> float:
    value = environ.get(OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT)

    if not value:
        return _DEFAULT_TIMEOUT

    try:
        timeout = float(value)
    except ValueError:
        logger.warning(
            "Invalid value for %s: %r, using %s",
            OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT,
            value,
            _DEFAULT_TIMEOUT,
        )
        return _DEFAULT_TIMEOUT

    if not math.isfinite(timeout) or timeout <= 0:
        logger.warning(
            "%s must be a positive finite number, got %s, using %s",
            OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT,
            timeout,
            _DEFAULT_TIMEOUT,
        )
        return _DEFAULT_TIMEOUT

    return timeout
