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

import time
import unittest
from unittest.mock import patch

from opentelemetry.resource.detector.aws import (
    AwsEksResourceDetector,
    AwsResourceDetector,
    Detected,
    NotDetected,
    detect_aws_resource,
)
from opentelemetry.resource.detector.aws.environment_variables import (
    get_detector_timeout,
)
from opentelemetry.sdk.resources import Resource, ResourceDetector


class _StaticDetector(AwsResourceDetector):
    def __init__(self, outcome, **kwargs):
        super().__init__(**kwargs)
        self.outcome = outcome

    def _detect(self):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class _ResourceDetector(ResourceDetector):
    def __init__(self, attributes):
        super().__init__()
        self.attributes = attributes

    def detect(self):
        return Resource(self.attributes)


class TestDetectionOutcome(unittest.TestCase):
    def test_detected_attributes_are_read_only(self):
        attributes = {"cloud.provider": "aws"}
        outcome = Detected(attributes)
        attributes["cloud.region"] = "us-east-1"

        self.assertNotIn("cloud.region", outcome.attributes)
        with self.assertRaises(TypeError):
            outcome.attributes["cloud.region"] = "us-east-1"

    def test_equality(self):
        self.assertEqual(
            Detected({"cloud.provider": "aws"}),
            Detected({"cloud.provider": "aws"}),
        )
        self.assertEqual(NotDetected("reason"), NotDetected("reason"))
        self.assertNotEqual(Detected({}), NotDetected())


class TestAwsResourceDetector(unittest.TestCase):
    def test_detected_becomes_resource(self):
        detector = _StaticDetector(Detected({"cloud.provider": "aws"}))

        self.assertEqual(
            detector.detect(), Resource({"cloud.provider": "aws"})
        )

    def test_not_detected_becomes_empty_resource(self):
        detector = _StaticDetector(NotDetected("not here"))

        self.assertIs(detector.detect(), Resource.get_empty())

    def test_unexpected_error_becomes_not_detected(self):
        detector = _StaticDetector(RuntimeError("boom"))

        with self.assertLogs(
            "opentelemetry.resource.detector.aws._detector", level="WARNING"
        ):
            outcome = detector.detect_outcome()

        self.assertEqual(outcome, NotDetected("boom"))
        self.assertEqual(detector.detect(), Resource.get_empty())

    def test_raise_on_error(self):
        detector = _StaticDetector(RuntimeError("boom"), raise_on_error=True)

        with self.assertRaises(RuntimeError):
            detector.detect()

    def test_deadline(self):
        self.assertIsNone(_StaticDetector(NotDetected()).deadline)
        self.assertEqual(
            _StaticDetector(NotDetected(), deadline=42.0).deadline, 42.0
        )


class TestDetectAwsResource(unittest.TestCase):
    def test_merges_in_order(self):
        actual = detect_aws_resource(
            [
                _StaticDetector(
                    Detected({"cloud.provider": "aws", "k": "first"})
                ),
                _StaticDetector(NotDetected()),
                _StaticDetector(RuntimeError("boom")),
                _ResourceDetector({"k": "second"}),
            ],
            timeout=1,
        )

        self.assertEqual(
            actual, Resource({"cloud.provider": "aws", "k": "second"})
        )

    def test_initial_resource(self):
        actual = detect_aws_resource(
            [_StaticDetector(Detected({"cloud.provider": "aws"}))],
            initial_resource=Resource({"service.name": "mock-service"}),
            timeout=1,
        )

        self.assertEqual(
            actual,
            Resource(
                {"service.name": "mock-service", "cloud.provider": "aws"}
            ),
        )

    def test_nothing_detected(self):
        self.assertEqual(
            detect_aws_resource([_StaticDetector(NotDetected())], timeout=1),
            Resource.get_empty(),
        )

    @patch.dict("os.environ", {}, clear=True)
    @patch("os.access", return_value=False)
    def test_default_detectors_off_aws(self, mock_access):
        self.assertEqual(detect_aws_resource(), Resource.get_empty())

    @patch.dict("os.environ", {"AWS_LAMBDA_FUNCTION_NAME": "name"}, clear=True)
    @patch("os.access", return_value=False)
    def test_default_detectors_on_lambda(self, mock_access):
        actual = detect_aws_resource()

        self.assertEqual(actual.attributes["faas.name"], "name")
        self.assertEqual(actual.attributes["cloud.platform"], "aws_lambda")

    @patch.dict("os.environ", {}, clear=True)
    def test_default_detectors_share_deadline(self):
        created = []
        original_init = AwsEksResourceDetector.__init__

        def record_init(detector, *args, **kwargs):
            original_init(detector, *args, **kwargs)
            created.append(detector)

        with patch.object(
            AwsEksResourceDetector, "__init__", record_init
        ), patch("os.access", return_value=False):
            before = time.monotonic()
            detect_aws_resource(timeout=3)

        self.assertEqual(len(created), 1)
        self.assertGreaterEqual(created[0].deadline, before + 3)
        self.assertLessEqual(created[0].deadline, time.monotonic() + 3)


class TestDetectorTimeout(unittest.TestCase):
    @patch.dict("os.environ", {}, clear=True)
    def test_default(self):
        self.assertEqual(get_detector_timeout(), 2.0)

    @patch.dict(
        "os.environ",
        {"OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT": "0.5"},
        clear=True,
    )
    def test_from_environment(self):
        self.assertEqual(get_detector_timeout(), 0.5)

    def test_invalid_values(self):
        for value in ("soon", "0", "-1", "inf", "-inf", "nan"):
            with self.subTest(value=value), patch.dict(
                "os.environ",
                {"OTEL_PYTHON_AWS_RESOURCE_DETECTOR_TIMEOUT": value},
                clear=True,
            ):
                with self.assertLogs(
                    "opentelemetry.resource.detector.aws.environment_variables",
                    level="WARNING",
                ):
                    self.assertEqual(get_detector_timeout(), 2.0)
