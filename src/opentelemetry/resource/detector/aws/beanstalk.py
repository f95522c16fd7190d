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
    ProbeError,
    check_access,
    read_json,
)
from opentelemetry.semconv.resource import (
    CloudPlatformValues,
    CloudProviderValues,
    ResourceAttributes,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONF_PATH = "/var/elasticbeanstalk/xray/environment.conf"
_WIN_OS_CONF_PATH = "C:\\Program Files\\Amazon\\XRay\\environment.conf"

# service.name is not read from the file
_SERVICE_NAME = "elastic_beanstalk"

_CONF_FIELDS = (
    ("environment_name", ResourceAttributes.SERVICE_NAMESPACE),
    ("version_label", ResourceAttributes.SERVICE_VERSION),
    ("deployment_id", ResourceAttributes.SERVICE_INSTANCE_ID),
)


def _get_conf_file_path() -> str:
    if os.name == "nt":
        return _WIN_OS_CONF_PATH
    return _DEFAULT_CONF_PATH


class AwsBeanstalkResourceDetector(AwsResourceDetector):
    """Detects attribute values only available when the app is running on AWS
    Elastic Beanstalk and returns them in a Resource.

    NOTE: Requires enabling X-Ray on Beanstalk Environment. See more here: https://docs.aws.amazon.com/xray/latest/devguide/xray-services-beanstalk.html
    """

    def _detect(self) -> DetectionOutcome:
        conf_file_path = _get_conf_file_path()

        if not check_access(conf_file_path):
            logger.debug(
                "%s not readable, process is not on Elastic Beanstalk.",
                conf_file_path,
            )
            return NotDetected(f"{conf_file_path} not readable")

        try:
            parsed_data = read_json(conf_file_path)
        except ProbeError as error:
            logger.warning("Failed to load Beanstalk config: %s", error)
            return NotDetected(str(error))

        if not isinstance(parsed_data, dict):
            logger.warning(
                "Beanstalk config %s is not a JSON object", conf_file_path
            )
            return NotDetected(f"{conf_file_path} is not a JSON object")

        attributes = {
            ResourceAttributes.CLOUD_PROVIDER: CloudProviderValues.AWS.value,
            ResourceAttributes.CLOUD_PLATFORM: CloudPlatformValues.AWS_ELASTIC_BEANSTALK.value,
            ResourceAttributes.SERVICE_NAME: _SERVICE_NAME,
        }
        for field, attribute in _CONF_FIELDS:
            value = parsed_data.get(field)
            if isinstance(value, (str, bool, int, float)):
                attributes[attribute] = value

        return Detected(attributes)
