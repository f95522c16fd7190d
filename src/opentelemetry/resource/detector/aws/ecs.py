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
import os

from opentelemetry.resource.detector.aws._detector import (
    AwsResourceDetector,
    Detected,
    DetectionOutcome,
    NotDetected,
)
from opentelemetry.resource.detector.aws._files import (
    ReadError,
    get_hostname,
    read_container_id,
)
from opentelemetry.semconv.resource import (
    CloudPlatformValues,
    CloudProviderValues,
    ResourceAttributes,
)

logger = logging.getLogger(__name__)

_METADATA_URI_V4 = "ECS_CONTAINER_METADATA_URI_V4"
_METADATA_URI = "ECS_CONTAINER_METADATA_URI"


def _get_container_id() -> str:
    try:
        return read_container_id()
    except ReadError as exception:
        logger.warning("Failed to get container ID on ECS: %s", exception)
        return ""


class AwsEcsResourceDetector(AwsResourceDetector):
    """Detects attribute values only available when the app is running on AWS
    Elastic Container Service (ECS) and returns them in a Resource.
    """

    def _detect(self) -> DetectionOutcome:
        if not os.environ.get(_METADATA_URI_V4) and not os.environ.get(
            _METADATA_URI
        ):
            logger.debug(
                "Missing %s and %s therefore process is not on ECS.",
                _METADATA_URI_V4,
                _METADATA_URI,
            )
            return NotDetected("ECS container metadata URI not set")

        container_name = get_hostname()
        container_id = _get_container_id()

        if not container_name and not container_id:
            logger.warning(
                "Neither hostname nor container ID found on ECS process."
            )
            return NotDetected("No hostname or container ID")

        attributes = {
            ResourceAttributes.CLOUD_PROVIDER: CloudProviderValues.AWS.value,
            ResourceAttributes.CLOUD_PLATFORM: CloudPlatformValues.AWS_ECS.value,
        }
        if container_name:
            attributes[ResourceAttributes.CONTAINER_NAME] = container_name
        if container_id:
            attributes[ResourceAttributes.CONTAINER_ID] = container_id

        return Detected(attributes)
