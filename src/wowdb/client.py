"""Record API client: fetches single item and spell records by id."""

import json
import logging
from typing import Optional, Union

import requests
from pydantic import ValidationError

from config import get_request_timeout, get_wowdb_url
from exceptions import FetchError
from models import Record, RecordKind, RECORD_MODELS

logger = logging.getLogger(__name__)


def strip_parens(body: str) -> str:
    """
    Remove the parentheses the API wraps its JSON in.

    Example:
        >>> strip_parens('({"ID": 1})')
        '{"ID": 1}'
    """
    body = body.strip()
    if body.startswith("(") and body.endswith(")"):
        return body[1:-1]
    return body


class WowdbClient:
    """Client for the item/spell record API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize client.

        Args:
            base_url: API base URL (defaults to WOWDB_URL env var)
            timeout: Request timeout in seconds (defaults to REQUEST_TIMEOUT env var)
        """
        self.base_url = (base_url or get_wowdb_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_request_timeout()

    def fetch(self, kind: Union[RecordKind, str], record_id: int) -> Record:
        """
        Fetch one record.

        Args:
            kind: "item" or "spell"
            record_id: Numeric id

        Returns:
            Parsed ItemRecord or SpellRecord

        Raises:
            FetchError: On transport errors, non-2xx responses, or payloads
                that aren't a valid record
        """
        kind = RecordKind(kind)
        url = f"{self.base_url}/{kind.value}/{record_id}"
        logger.debug(f"Fetching data for {kind.value} {record_id} ...")

        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FetchError(kind.value, record_id, str(e)) from e

        try:
            data = json.loads(strip_parens(response.text))
        except ValueError as e:
            raise FetchError(kind.value, record_id, f"invalid JSON: {e}") from e

        try:
            return RECORD_MODELS[kind].model_validate(data)
        except ValidationError as e:
            raise FetchError(kind.value, record_id, f"unexpected record shape: {e}") from e
