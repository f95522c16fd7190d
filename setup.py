import os

from setuptools import find_namespace_packages, setup


HERE = os.path.dirname(os.path.abspath(__file__))


long_description = """
# OpenTelemetry Resource Detectors for AWS

`opentelemetry-resource-detector-aws` identifies, at startup, whether a process
runs on AWS Elastic Beanstalk, Elastic Container Service (ECS), Elastic
Kubernetes Service (EKS) or Lambda, and describes that environment with
OpenTelemetry resource attributes.

## Getting Started

```python
from opentelemetry.resource.detector.aws import detect_aws_resource
from opentelemetry.sdk.resources import Resource

resource = Resource.create().merge(detect_aws_resource())
```

The detectors are also available to the SDK's
`OTEL_EXPERIMENTAL_RESOURCE_DETECTORS` setting as `aws_beanstalk`, `aws_ecs`,
`aws_eks` and `aws_lambda`.
"""

install_requires = [
    "opentelemetry-api ~= 1.12",
    "opentelemetry-sdk ~= 1.12",
    "opentelemetry-semantic-conventions >= 0.33b0",
]

_detector_module = "opentelemetry.resource.detector.aws"

setup_kwargs = dict(
    name="opentelemetry-resource-detector-aws",
    version="0.1b0",
    description="AWS resource detectors for OpenTelemetry",
    url="https://github.com/open-telemetry/opentelemetry-python-contrib",
    author="OpenTelemetry Authors",
    author_email="cncf-opentelemetry-contributors@lists.cncf.io",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    package_dir={"": "src"},
    packages=find_namespace_packages(
        where=os.path.join(HERE, "src"), include=["opentelemetry*"]
    ),
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require={
        "test": ["pytest", "httpretty"],
    },
    entry_points={
        "opentelemetry_resource_detector": [
            "aws_beanstalk = {}.beanstalk:AwsBeanstalkResourceDetector".format(
                _detector_module
            ),
            "aws_ecs = {}.ecs:AwsEcsResourceDetector".format(_detector_module),
            "aws_eks = {}.eks:AwsEksResourceDetector".format(_detector_module),
            "aws_lambda = {}._lambda:AwsLambdaResourceDetector".format(
                _detector_module
            ),
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)


setup(**setup_kwargs)
