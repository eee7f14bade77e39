"""Sample Store API client.

This module defines a small client wrapper around the Sample Store HTTP
API.  The client uses the ``requests`` library internally and exposes
high‑level methods for every operation the service offers:

* :meth:`hello` – fetch the root greeting.
* :meth:`create_sample` – store a new sample.
* :meth:`get_sample` – fetch a single sample by its identifier.
* :meth:`list_samples` – return every stored sample.

Every method returns a ``(data, error)`` tuple.  On success ``data``
holds the payload unwrapped from the server's ``{"data": ...}``
envelope and ``error`` is ``None``.  On failure ``data`` is empty and
``error`` is a dictionary with keys ``status_code`` and ``message``.

The client supports optional authentication via an API key which will
be sent in the ``Authorization`` header, for deployments that put the
service behind an authenticating proxy.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)


class SampleStoreAPI:
    """Client for interacting with the Sample Store API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
        prefix: str = "",
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` will be
                included in all requests.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
            prefix: Optional path prefix such as ``/api/v1``.
        """
        self.base_url = base_url.rstrip("/") + prefix.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/samples``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``.  On failure,
            ``data`` is ``None`` and ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = (
                        err_json.get("error")
                        or err_json.get("detail")
                        or err_json.get("message")
                        or str(err_json)
                    )
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _unwrap(data: Any) -> Any:
        """Strip the ``{"data": ...}`` envelope from a response body."""
        if isinstance(data, dict) and "data" in data:
            return data["data"]
        return data

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def hello(self) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Fetch the root greeting."""
        data, error = self._request("GET", "/")
        if error:
            return None, error
        return self._unwrap(data), None

    def create_sample(
        self,
        name: str,
        timestamp: Union[datetime, str],
        v0: Optional[float] = None,
        v1: Optional[float] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Store a new sample.

        Args:
            name: Label of the sample.
            timestamp: A ``datetime`` or an ISO‑8601 string.
            v0: First reading; ``None`` is stored as null, not zero.
            v1: Second reading; ``None`` is stored as null, not zero.
        Returns:
            A tuple ``(sample, error)``.  ``sample`` includes the
            generated ``id``.
        """
        if isinstance(timestamp, datetime):
            timestamp = timestamp.isoformat()
        payload = {"name": name, "timestamp": timestamp, "v0": v0, "v1": v1}
        data, error = self._request("POST", "/samples", json_body=payload)
        if error:
            return None, error
        return self._unwrap(data), None

    def get_sample(self, sample_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve a single sample by ID.

        Returns:
            A tuple ``(sample, error)``.  A missing sample yields an
            error with ``status_code`` 404.
        """
        data, error = self._request("GET", f"/samples/{sample_id}")
        if error:
            return None, error
        return self._unwrap(data), None

    def list_samples(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all stored samples.

        Returns:
            A tuple ``(samples, error)``.  ``samples`` is empty on failure.
        """
        data, error = self._request("GET", "/samples")
        if error:
            return [], error
        samples = self._unwrap(data)
        if isinstance(samples, list):
            return samples, None
        return [], None
