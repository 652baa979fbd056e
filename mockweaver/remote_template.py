"""Templates and JSON schemas fetched from a file or web location."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, Optional

from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

log = logging.getLogger(__name__)

_FILE_PREFIX = "file://"
_WEB_PREFIXES = ("https://", "http://")


class BadHTTPStatusError(Exception):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"got http code {status_code}: failed to download file")
        self.status_code = status_code
        self.body = body


def https_get(url: str) -> str:
    """Fetch ``url`` and return the body; raises BadHTTPStatusError on a non-200 answer."""
    try:
        with urllib.request.urlopen(url) as response:  # noqa: S310
            status = response.status
            raw = response.read()
    except urllib.error.HTTPError as exc:
        status = exc.code
        try:
            raw = exc.read()
        finally:
            exc.close()
    except urllib.error.URLError as exc:
        log.error("failed to download file: %s", exc.reason)
        raise ConnectionError(f"downloading file: {exc.reason}") from exc
    body = raw.decode("utf-8", errors="replace")
    if status != 200:
        log.debug("got non-200 response (%d) when downloading file. Response body:", status)
        log.debug("%s", body)
        raise BadHTTPStatusError(status, body)
    return body


def download(url: str) -> str:
    """Return the text at a ``file://``, ``https://`` or ``http://`` location."""
    if url.startswith(_FILE_PREFIX):
        return Path(url[len(_FILE_PREFIX):]).read_text(encoding="utf-8")
    if url.startswith(_WEB_PREFIXES):
        return https_get(url)
    raise ValueError(f"unsupported protocol specifier in {url}")


def _build_validator(text: str) -> Any:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"creating JSON schema: {exc}") from exc
    if not isinstance(document, (dict, bool)):
        raise ValueError("creating JSON schema: schema must be an object or a boolean")
    cls = validator_for(document)
    try:
        cls.check_schema(document)
    except SchemaError as exc:
        raise ValueError(f"creating JSON schema: {exc.message}") from exc
    return cls(document)


class RemoteTemplate:
    """A template and its schema, each fetched on first use and then cached."""

    def __init__(self, template_url: str, schema_url: str) -> None:
        self.template_url = template_url
        self.schema_url = schema_url
        self._template_string = ""
        self._template_downloaded = False
        self._schema: Optional[Any] = None
        self._schema_downloaded = False

    def template(self) -> str:
        """Return the template text, downloading it only on the first call."""
        if not self._template_downloaded:
            self._template_downloaded = True
            self._template_string = download(self.template_url)
        return self._template_string

    def schema(self) -> Optional[Any]:
        """Return a validator for the JSON schema, downloading it only on the first call."""
        if not self._schema_downloaded:
            log.debug("schema for %s not downloaded before", self.template_url)
            self._schema_downloaded = True
            try:
                text = download(self.schema_url)
            except Exception:
                log.debug("schema download for %s encountered an error", self.template_url)
                raise
            self._schema = _build_validator(text)
        return self._schema