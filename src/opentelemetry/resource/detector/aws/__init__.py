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

"""
Resource detectors for processes running on AWS Elastic Beanstalk, Elastic
Container Service, Elastic Kubernetes Service and Lambda.

Usage
-----

.. code-block:: python

    from opentelemetry.resource.detector.aws import detect_aws_resource
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider

    resource = Resource.create().merge(detect_aws_resource())
    provider = TracerProvider(resource=resource)

The detectors are also registered as ``aws_beanstalk``, ``aws_ecs``,
``aws_eks`` and ``aws_lambda`` for ``OTEL_EXPERIMENTAL_RESOURCE_DETECTORS``.
"""

import time
from typing import Optional, Sequence

from opentelemetry.resource.detector.aws._detector import (
    AwsResourceDetector,
    Detected,
    DetectionOutcome,
    NotDetected,
)
from opentelemetry.resource.detector.aws._lambda import (
    AwsLambdaResourceDetector,
)
from opentelemetry.resource.detector.aws.beanstalk import (
    AwsBeanstalkResourceDetector,
)
from opentelemetry.resource.detector.aws.ecs import AwsEcsResourceDetector
from opentelemetry.resource.detector.aws.eks import AwsEksResourceDetector
from opentelemetry.resource.detector.aws.environment_variables import (
    get_detector_timeout,
)
from opentelemetry.sdk.resources import (
    Resource,
    ResourceDetector,
    get_aggregated_resources,
)

_DEFAULT_DETECTORS = (
    AwsBeanstalkResourceDetector,
    AwsEcsResourceDetector,
    AwsEksResourceDetector,
    AwsLambdaResourceDetector,
)


def detect_aws_resource(
    detectors: Optional[Sequence[ResourceDetector]] = None,
    initial_resource: Optional[Resource] = None,
    timeout: Optional[float] = None,
) -> Resource:
    """Runs ``detectors`` in parallel and merges what they find, in order,
    onto ``initial_resource``.

    When no detectors are given, all four AWS detectors run and any requests
    they make share a deadline ``timeout`` seconds from now.
    """
    if timeout is None:
        timeout = get_detector_timeout()

    if detectors is None:
        deadline = time.monotonic() + timeout
        detectors = [
            detector_class(deadline=deadline)
            for detector_class in _DEFAULT_DETECTORS
        ]

    if initial_resource is None:
        initial_resource = Resource.get_empty()

    return get_aggregated_resources(
        list(detectors), initial_resource=initial_resource, timeout=timeout
    )


__all__ = [
    "AwsBeanstalkResourceDetector",
    "AwsEcsResourceDetector",
    "AwsEksResourceDetector",
    "AwsLambdaResourceDetector",
    "AwsResourceDetector",
    "Detected",
    "DetectionOutcome",
    "NotDetected",
    "detect_aws_resource",
]
