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
from os import environ

from opentelemetry.resource.detector.aws._detector import (
    AwsResourceDetector,
    Detected,
    DetectionOutcome,
    NotDetected,
)
from opentelemetry.semconv.resource import (
    CloudPlatformValues,
    CloudProviderValues,
    ResourceAttributes,
)

logger = logging.getLogger(__name__)

_OPTIONAL_ENV_ATTRIBUTES = (
    ("AWS_REGION", ResourceAttributes.CLOUD_REGION),
    ("AWS_LAMBDA_FUNCTION_VERSION", ResourceAttributes.FAAS_VERSION),
    ("AWS_LAMBDA_LOG_STREAM_NAME", ResourceAttributes.FAAS_INSTANCE),
)


class AwsLambdaResourceDetector(AwsResourceDetector):
    """Detects attribute values only available when the app is running on AWS
    Lambda and returns them in a Resource.

    Uses Lambda defined runtime environment variables. See more: https://docs.aws.amazon.com/lambda/latest/dg/configuration-envvars.html#configuration-envvars-runtime
    """

    def _detect(self) -> DetectionOutcome:
        function_name = environ.get("AWS_LAMBDA_FUNCTION_NAME")
        if not function_name:
            logger.debug(
                "Missing AWS_LAMBDA_FUNCTION_NAME therefore process is not on Lambda."
            )
            return NotDetected("AWS_LAMBDA_FUNCTION_NAME not set")

        attributes = {
            ResourceAttributes.CLOUD_PROVIDER: CloudProviderValues.AWS.value,
            ResourceAttributes.CLOUD_PLATFORM: CloudPlatformValues.AWS_LAMBDA.value,
            ResourceAttributes.FAAS_NAME: function_name,
        }
        for env_var, attribute in _OPTIONAL_ENV_ATTRIBUTES:
            value = environ.get(env_var)
            if value:
                attributes[attribute] = value

        memory_size = environ.get("AWS_LAMBDA_FUNCTION_MEMORY_SIZE")
        if memory_size:
            try:
                attributes[ResourceAttributes.FAAS_MAX_MEMORY] = int(
                    memory_size
                )
            except ValueError:
                logger.warning(
                    "Invalid AWS_LAMBDA_FUNCTION_MEMORY_SIZE: %r", memory_size
                )

        return Detected(attributes)
