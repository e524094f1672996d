# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

# Statuses retried by the retry executor
TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

# Transport / payload subcodes
NETWORK_ERROR = "network_error"
INVALID_RESPONSE = "invalid_response"
INVALID_PAYLOAD = "invalid_payload"

# Query directive subcodes
QUERY_INVALID_DIRECTIVE = "invalid_query_directive"

# Shape validation subcodes
SHAPE_NOT_AN_ARRAY = "not-an-array"
SHAPE_MISSING_KEYS = "missing-keys"
SHAPE_MISSING_VALUES = "missing-values"

# Registry subcodes
LOOKUP_DATA_EXTENSION_NOT_FOUND = "lookup_data_extension_not_found"


def http_subcode(status_code: int) -> str:
    """Map an HTTP status to its ``http_<status>`` subcode."""
    return f"http_{status_code}"


def is_transient_status(status_code) -> bool:
    return status_code in TRANSIENT_STATUS_CODES
