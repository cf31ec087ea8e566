"""Core output dispatchers."""

import json

from monday_cli import config


def pretty_print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="json"):
    """Output data in requested format."""
    if fmt == "table" and formatter:
        print(formatter(data))
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))


def mutation_response(action, target=None, details=None, data=None, fmt="json"):
    """Print a mutation confirmation. Text confirmations are dropped with --quiet."""
    if fmt == "json":
        payload = {"ok": True, "mutation": {"action": action, "target": target}}
        if details:
            payload["mutation"]["details"] = details
        if data:
            payload["data"] = data
        print(json.dumps(payload, ensure_ascii=False))
        return
    if config.RUNTIME_QUIET:
        return
    parts = [action]
    if target:
        parts.append(target)
    if details:
        parts.append(details)
    print(f"OK: {': '.join(parts)}")
