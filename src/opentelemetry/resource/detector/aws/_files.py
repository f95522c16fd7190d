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

"""Local signal readers shared by the AWS resource detectors."""

import json
import logging
import os
import socket

logger = logging.getLogger(__name__)

CGROUP_PATH = "/proc/self/cgroup"
K8S_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"
K8S_CERT_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"

_CONTAINER_ID_LENGTH = 64


class ProbeError(Exception):
    """Base class for failures reading an environment signal."""


class ReadError(ProbeError):
    """A file is missing, unreadable or could not be decoded."""

    def __init__(self, path, reason):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class ParseError(ProbeError):
    """A signal was read but its content is malformed."""

    def __init__(self, path, reason):
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


def check_access(path) -> bool:
    try:
        return os.access(path, os.R_OK)
    except (OSError, ValueError):
        return False


def read_text(path) -> str:
    try:
        with open(path, encoding="utf8") as file:
            return file.read()
    except (OSError, UnicodeDecodeError) as error:
        raise ReadError(path, error) from error


def read_json(path):
    content = read_text(path)
    try:
        return json.loads(content)
    except ValueError as error:
        raise ParseError(path, error) from error


def find_container_id(content: str) -> str:
    """Returns the trailing 64 characters of the first cgroup line longer
    than a container ID, or an empty string when there is no such line.
    """
    for raw_line in content.splitlines():
        line = raw_line.strip()
        # Subsequent IDs should be the same, exit if found one
        if len(line) > _CONTAINER_ID_LENGTH:
            return line[-_CONTAINER_ID_LENGTH:]
    return ""


def read_container_id(path=CGROUP_PATH) -> str:
    return find_container_id(read_text(path))


def read_bearer_credential(path=K8S_TOKEN_PATH) -> str:
    """Returns the ``Authorization`` header value for the service account
    token stored at ``path``. The token is used verbatim.
    """
    return "Bearer " + read_text(path)


def get_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError as error:
        logger.debug("Failed to get hostname: %s", error)
        return ""
