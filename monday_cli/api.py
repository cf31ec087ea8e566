"""
HTTP request layer, GraphQL execution, security helpers, and token validation.
"""

import hashlib
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from monday_cli import config
from monday_cli.exceptions import CliError, DecodeError, HTTPError, NetworkError, SetupError

_RETRYABLE_HTTP_CODES = frozenset({429, 502, 503, 504})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _safe_json_parse(text, context="input"):
    """Parse JSON with friendly error message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CliError(f"[ERROR] Invalid JSON in {context}: {e.msg} at position {e.pos}") from None


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _try_call(fn, *args, **kwargs):
    """Call a function that might raise CliError, returning None on failure."""
    try:
        return fn(*args, **kwargs)
    except CliError:
        return None


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Drop credentials and query strings from URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    netloc = parsed.hostname or ""
    if parsed.port:
        netloc += f":{parsed.port}"
    return urllib.parse.urlunsplit((parsed.scheme, netloc, parsed.path, "", ""))


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, retryable=None, detail=None):
    """Build a consistent CLI-safe HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    if retryable is not None:
        meta.append(f"retryable={'yes' if retryable else 'no'}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


def _parse_retry_after(headers):
    """Return Retry-After seconds from response headers, or None."""
    if not headers:
        return None
    value = headers.get("Retry-After")
    if value is None:
        return None
    try:
        secs = int(str(value).strip())
    except ValueError:
        return None
    return max(0, secs)


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, data=None, headers=None, method="POST", idempotent=False):
    """Make an HTTP request with standard error handling.
    Returns parsed JSON on success.
    Raises HTTPError for HTTP errors (caller handles specific codes),
    NetworkError for timeouts and connection failures,
    DecodeError when the body is not JSON."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(request_id)
    max_attempts = 1 + max(0, config.HTTP_MAX_RETRIES if idempotent else 0)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)

    for attempt in range(max_attempts):
        start = time.perf_counter()
        will_retry = idempotent and attempt < max_attempts - 1
        req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
        if sampled:
            _log_http_event(
                phase="request",
                method=method,
                url=safe_url,
                attempt=attempt + 1,
                max_attempts=max_attempts,
                idempotent=idempotent,
                request_id=request_id,
                timeout_seconds=timeout,
            )
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                content_type = resp.headers.get("Content-Type", "")
                raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
                if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                    raise DecodeError(
                        "[ERROR] Response too large from monday.com API "
                        f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                    )
                if sampled:
                    _log_http_event(
                        phase="response",
                        method=method,
                        url=safe_url,
                        attempt=attempt + 1,
                        status=getattr(resp, "status", 200),
                        content_type=content_type,
                        bytes=len(raw),
                        latency_ms=round((time.perf_counter() - start) * 1000, 2),
                        request_id=request_id,
                    )
                try:
                    return json.loads(raw.decode("utf-8"))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    if content_type and "json" not in content_type.lower():
                        raise DecodeError(
                            f"[ERROR] Unexpected Content-Type from server "
                            f"({content_type}). This may be a proxy or "
                            "network issue."
                        ) from None
                    raise DecodeError(
                        "[ERROR] Unexpected response from monday.com API (not valid JSON)."
                    ) from None
        except urllib.error.HTTPError as e:
            error_body = (
                e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
                if e.fp
                else ""
            )
            retryable = e.code in _RETRYABLE_HTTP_CODES
            can_retry = will_retry and retryable
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    attempt=attempt + 1,
                    status=e.code,
                    retryable=retryable,
                    will_retry=can_retry,
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            if can_retry:
                retry_after = _parse_retry_after(getattr(e, "headers", None))
                if retry_after is None:
                    retry_after = config.HTTP_RETRY_BASE_SECONDS * (2**attempt)
                time.sleep(retry_after)
                continue
            raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
        except TimeoutError as e:
            if sampled:
                _log_http_event(
                    phase="network_error",
                    method=method,
                    url=safe_url,
                    attempt=attempt + 1,
                    error="timeout",
                    will_retry=will_retry,
                    request_id=request_id,
                )
            if will_retry:
                time.sleep(config.HTTP_RETRY_BASE_SECONDS * (2**attempt))
                continue
            raise NetworkError(
                _error_envelope(
                    f"Request timed out after {timeout} seconds. Is the monday.com API reachable?",
                    request_id=request_id,
                    retryable=False,
                )
            ) from e
        except urllib.error.URLError as e:
            if sampled:
                _log_http_event(
                    phase="network_error",
                    method=method,
                    url=safe_url,
                    attempt=attempt + 1,
                    error=f"url_error: {e.reason}",
                    will_retry=will_retry,
                    request_id=request_id,
                )
            if will_retry:
                time.sleep(config.HTTP_RETRY_BASE_SECONDS * (2**attempt))
                continue
            raise NetworkError(
                _error_envelope(
                    f"Connection failed: {e.reason}",
                    request_id=request_id,
                    retryable=False,
                )
            ) from e

    raise NetworkError(_error_envelope("Request failed.", request_id=request_id))


# ---------------------------------------------------------------------------
# GraphQL
# ---------------------------------------------------------------------------


def _graphql_error_message(errors):
    """Join the messages of a GraphQL ``errors`` array into one line."""
    messages = []
    for err in errors:
        if isinstance(err, dict):
            messages.append(str(err.get("message") or err))
        else:
            messages.append(str(err))
    return "; ".join(messages) or "unknown error"


def graphql_request(query, variables=None, *, mutation=False):
    """Execute a GraphQL document against the monday.com API.

    Queries are idempotent and retried on transient failures; mutations
    are sent once. Returns the response ``data`` object.
    """
    if not config.API_TOKEN:
        raise SetupError("[SETUP_NEEDED] MONDAY_API_TOKEN is not set.\n  Run: monday-cli setup")
    request_id = str(uuid.uuid4())
    headers = {
        "Authorization": config.API_TOKEN,
        "API-Version": config.API_VERSION,
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Cache-Control": "no-cache",
        "X-Request-Id": request_id,
    }
    payload = {"query": query}
    if variables:
        payload["variables"] = variables
    try:
        result = _http_request(config.API_URL, payload, headers, idempotent=not mutation)
    except HTTPError as e:
        if e.code in (401, 403):
            raise SetupError(
                "[TOKEN_EXPIRED] The monday.com API token was rejected. "
                "Generate a new one under Profile > Developers > My access tokens."
            ) from e
        if e.code == 429:
            raise NetworkError(
                "[ERROR] Rate limit reached (monday.com complexity budget exhausted). "
                "Wait a minute and retry."
            ) from e
        server_req_id = e.headers.get("X-Request-Id") if e.headers else None
        raise NetworkError(
            _error_envelope(
                f"HTTP {e.code}: {e.reason}",
                status=e.code,
                request_id=server_req_id or request_id,
                retryable=e.code in _RETRYABLE_HTTP_CODES,
                detail=_sanitize_error(e.body),
            )
        ) from e

    if not isinstance(result, dict):
        raise DecodeError(
            "[ERROR] Unexpected GraphQL response shape: "
            f"expected JSON object, got {type(result).__name__}."
        )
    errors = result.get("errors") or result.get("error_message")
    if errors:
        if isinstance(errors, str):
            errors = [errors]
        raise NetworkError(
            _error_envelope(
                f"GraphQL error: {_graphql_error_message(errors)}",
                request_id=request_id,
            )
        )
    data = result.get("data")
    if not isinstance(data, dict):
        raise DecodeError("[ERROR] GraphQL response is missing the 'data' object.")
    return data


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


def _check_token():
    """Validate the API token before running a command. Returns the `me` record."""
    if not config.API_TOKEN:
        raise SetupError("[SETUP_NEEDED] No API token configured.\n  Run: monday-cli setup")
    try:
        data = graphql_request("query { me { id name email } }")
    except SetupError as e:
        raise SetupError(str(e) + "\n  Run: monday-cli setup") from e
    me = data.get("me")
    if not me:
        raise SetupError(
            "[TOKEN_EXPIRED] The API token is not associated with a user.\n"
            "  Run: monday-cli setup\n"
            "  Or update MONDAY_API_TOKEN in .env manually."
        )
    return me
