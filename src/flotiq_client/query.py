"""Query string serialization for Flotiq API requests.

Nested mappings fold into bracketed keys, sequences repeat their key, sets
are emitted in a stable sorted order and dates use ISO-8601 in UTC.

Example:
    ```python
    from flotiq_client.query import querystring

    querystring({"limit": 1, "ids[]": ["a", "b"], "filters": {"slug": "foo"}})
    # 'limit=1&ids%5B%5D=a&ids%5B%5D=b&filters%5Bslug%5D=foo'
    ```
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime, time
from typing import Any
from urllib.parse import quote

# Characters left unescaped by ECMAScript's encodeURIComponent
_UNRESERVED = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a single query key or value."""
    return quote(value, safe=_UNRESERVED)


def querystring(params: Mapping[str, Any], prefix: str = "") -> str:
    """Serialize ``params`` into a URL query string (without the leading ``?``).

    Args:
        params: Query parameters. Order of the output follows the mapping's
            iteration order.
        prefix: Key prefix used when recursing into nested mappings.

    Returns:
        ``&``-joined ``key=value`` pairs; empty parts are dropped.
    """
    parts = (_querystring_single_key(key, value, prefix) for key, value in params.items())
    return "&".join(part for part in parts if part)


def _querystring_single_key(key: str, value: Any, key_prefix: str = "") -> str:
    full_key = f"{key_prefix}[{key}]" if key_prefix else str(key)

    if isinstance(value, (list, tuple)):
        encoded_key = encode_uri_component(full_key)
        multi_value = f"&{encoded_key}=".join(encode_uri_component(_stringify(item)) for item in value)
        return f"{encoded_key}={multi_value}"

    if isinstance(value, (set, frozenset)):
        return _querystring_single_key(key, sorted(value, key=_stringify), key_prefix)

    if isinstance(value, (datetime, date)):
        return f"{encode_uri_component(full_key)}={encode_uri_component(to_iso_string(value))}"

    if isinstance(value, Mapping):
        return querystring(value, full_key)

    return f"{encode_uri_component(full_key)}={encode_uri_component(_stringify(value))}"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (datetime, date)):
        return to_iso_string(value)
    return str(value)


def to_iso_string(value: date) -> str:
    """Format a date or datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are taken to be UTC already; plain dates mean midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min, tzinfo=UTC)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
