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

import concurrent.futures
import socket
import ssl
import time
from http.client import HTTPException
from typing import NamedTuple, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from opentelemetry.resource.detector.aws._files import ProbeError

_GET_METHOD = "GET"


class RequestError(ProbeError):
    """A request could not be completed."""


class RequestTimeoutError(RequestError):
    """No answer arrived within the allowed time."""


class RequestConnectionError(RequestError):
    """The server could not be reached or the exchange broke off."""


class ProbeResponse(NamedTuple):
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def remaining_timeout(timeout: float, deadline: Optional[float]) -> float:
    """Returns the time a request may take given an optional absolute
    ``time.monotonic()`` deadline.
    """
    if deadline is None:
        return timeout

    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise RequestTimeoutError("Detection deadline already passed")
    return min(timeout, remaining)


def _fetch(request: Request, timeout: float, context) -> ProbeResponse:
    try:
        with urlopen(request, timeout=timeout, context=context) as response:
            return ProbeResponse(
                response.status, response.read().decode("utf-8", "replace")
            )
    except HTTPError as error:
        return ProbeResponse(
            error.code, error.read().decode("utf-8", "replace")
        )


def get_with_auth(
    host: str,
    path: str,
    credential: str,
    timeout: float,
    cafile: Optional[str] = None,
) -> ProbeResponse:
    """Issues a single GET to ``host + path`` with ``credential`` as the
    ``Authorization`` header.

    Any response the server sends back is returned, whatever its status.
    Failing to get one raises a ``RequestError``. ``timeout`` bounds the
    whole exchange, from connecting to reading the last byte of the body.
    """
    url = host + path
    # a stalled exchange is left behind in its worker thread
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    try:
        context = (
            ssl.create_default_context(cafile=cafile) if cafile else None
        )
        request = Request(
            url, headers={"Authorization": credential}, method=_GET_METHOD
        )
        future = executor.submit(_fetch, request, timeout, context)
        return future.result(timeout=timeout)
    except (concurrent.futures.TimeoutError, socket.timeout) as error:
        raise RequestTimeoutError(
            f"GET {url} timed out after {timeout}s"
        ) from error
    except URLError as error:
        if isinstance(error.reason, socket.timeout):
            raise RequestTimeoutError(
                f"GET {url} timed out after {timeout}s"
            ) from error
        raise RequestConnectionError(
            f"GET {url} failed: {error.reason}"
        ) from error
    except (OSError, HTTPException) as error:
        raise RequestConnectionError(f"GET {url} failed: {error}") from error
    except ValueError as error:
        raise RequestError(f"Invalid request to {url}: {error}") from error
    finally:
        executor.shutdown(wait=False)
