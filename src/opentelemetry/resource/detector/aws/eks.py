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

import json
import logging
from typing import Optional

from opentelemetry.resource.detector.aws._detector import (
    AwsResourceDetector,
    Detected,
    DetectionOutcome,
    NotDetected,
)
from opentelemetry.resource.detector.aws._files import (
    K8S_CERT_PATH,
    K8S_TOKEN_PATH,
    ReadError,
    check_access,
    read_bearer_credential,
    read_container_id,
)
from opentelemetry.resource.detector.aws._http import (
    RequestError,
    get_with_auth,
    remaining_timeout,
)
from opentelemetry.resource.detector.aws.environment_variables import (
    get_detector_timeout,
)
from opentelemetry.semconv.resource import (
    CloudPlatformValues,
    CloudProviderValues,
    ResourceAttributes,
)

logger = logging.getLogger(__name__)

K8S_SVC_URL = "https://kubernetes.default.svc"
AUTH_CONFIGMAP_PATH = "/api/v1/namespaces/kube-system/configmaps/aws-auth"
CW_CONFIGMAP_PATH = (
    "/api/v1/namespaces/amazon-cloudwatch/configmaps/cluster-info"
)


def _get_container_id() -> str:
    try:
        return read_container_id()
    except ReadError as exception:
        logger.warning("Failed to get container ID on EKS: %s", exception)
        return ""


def _get_cluster_name(body: str) -> str:
    try:
        cluster_name = json.loads(body)["data"]["cluster.name"]
    except (ValueError, KeyError, TypeError) as exception:
        logger.warning("Cannot get cluster name on EKS: %s", exception)
        return ""

    if not isinstance(cluster_name, str):
        logger.warning("Cannot get cluster name on EKS: not a string")
        return ""
    return cluster_name


class AwsEksResourceDetector(AwsResourceDetector):
    """Detects attribute values only available when the app is running on AWS
    Elastic Kubernetes Service (EKS) and returns them in a Resource.

    NOTE: Uses a `cluster-info` configmap in the `amazon-cloudwatch` namespace. See more here: https://docs.aws.amazon.com/AmazonCloudWatch/latest/monitoring/Container-Insights-setup-EKS-quickstart.html#Container-Insights-setup-EKS-quickstart-Fluentd

    Args:
        raise_on_error: re-raise unexpected exceptions instead of returning
            an empty Resource.
        deadline: absolute ``time.monotonic()`` value bounding all requests.
        timeout: per-request timeout in seconds, defaults to
            ``OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT``.
    """

    def __init__(
        self,
        raise_on_error: bool = False,
        deadline: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(raise_on_error=raise_on_error, deadline=deadline)
        self.timeout = timeout

    def _request(self, path: str, cred_value: str):
        timeout = self.timeout
        if timeout is None:
            timeout = get_detector_timeout()
        return get_with_auth(
            K8S_SVC_URL,
            path,
            cred_value,
            remaining_timeout(timeout, self.deadline),
            cafile=K8S_CERT_PATH,
        )

    def _is_eks(self, cred_value: str) -> bool:
        try:
            response = self._request(AUTH_CONFIGMAP_PATH, cred_value)
        except RequestError as exception:
            logger.warning("Failed to query aws-auth configmap: %s", exception)
            return False

        if not response.ok:
            logger.debug(
                "aws-auth configmap returned status %s", response.status
            )
            return False
        return bool(response.body)

    def _get_cluster_info(self, cred_value: str) -> str:
        try:
            response = self._request(CW_CONFIGMAP_PATH, cred_value)
        except RequestError as exception:
            logger.warning(
                "Failed to query cluster-info configmap: %s", exception
            )
            return ""

        if not response.ok:
            logger.warning(
                "cluster-info configmap returned status %s", response.status
            )
            return ""
        return response.body

    def _detect(self) -> DetectionOutcome:
        if not check_access(K8S_TOKEN_PATH):
            logger.debug(
                "%s not readable, process is not on Kubernetes.",
                K8S_TOKEN_PATH,
            )
            return NotDetected(f"{K8S_TOKEN_PATH} not readable")

        try:
            cred_value = read_bearer_credential()
        except ReadError as exception:
            logger.warning("Failed to get k8s token: %s", exception)
            return NotDetected(str(exception))

        if not self._is_eks(cred_value):
            logger.debug("Could not confirm process is running on EKS.")
            return NotDetected("aws-auth configmap not found")

        cluster_info = self._get_cluster_info(cred_value)
        cluster_name = _get_cluster_name(cluster_info) if cluster_info else ""
        container_id = _get_container_id()

        if not container_id and not cluster_name:
            logger.warning(
                "Neither cluster name nor container ID found on EKS process."
            )
            return NotDetected("No cluster name or container ID")

        attributes = {
            ResourceAttributes.CLOUD_PROVIDER: CloudProviderValues.AWS.value,
            ResourceAttributes.CLOUD_PLATFORM: CloudPlatformValues.AWS_EKS.value,
        }
        if cluster_name:
            attributes[ResourceAttributes.K8S_CLUSTER_NAME] = cluster_name
        if container_id:
            attributes[ResourceAttributes.CONTAINER_ID] = container_id

        return Detected(attributes)
