"""
Interactive setup wizard for monday-cli.
Asks for an API token, checks it against the API, and saves it to .env.
"""

from monday_cli import config
from monday_cli.api import _mask_token, _try_call, graphql_request
from monday_cli.boards import ME_QUERY
from monday_cli.exceptions import SetupError


def _validate_token(token):
    """Return the `me` record for *token*, or None if the API rejects it."""
    previous = config.API_TOKEN
    config.API_TOKEN = token
    try:
        data = _try_call(graphql_request, ME_QUERY)
    finally:
        config.API_TOKEN = previous
    if not data or not data.get("me"):
        return None
    return data["me"]


def _setup_done(me):
    print(f"\n  Connected as {me.get('name', '?')} ({me.get('email', '?')}).")
    print("  Token saved to .env\n")
    print("Next steps:")
    print("  monday-cli boards                      # find a board id")
    print("  monday-cli columns <board_id>          # see its columns")
    print("  monday-cli items <board_id> --labels   # read decoded items")


def cmd_setup():
    print("=== monday-cli setup ===\n")
    print("Create a personal API token in monday.com:")
    print("  avatar > Developers > My access tokens > Show\n")

    current = config.API_TOKEN
    if current:
        print(f"  Current token: {_mask_token(current)}")
        if input("  Keep it? [Y/n]: ").strip().lower() in ("", "y", "yes"):
            me = _validate_token(current)
            if me:
                _setup_done(me)
                return
            print("  The current token was rejected. Enter a new one.\n")

    for _attempt in range(3):
        token = input("  API token: ").strip()
        if not token:
            print("  Token cannot be empty.")
            continue
        me = _validate_token(token)
        if not me:
            print("  The API rejected that token. Try again.")
            continue
        config.save_env_value("MONDAY_API_TOKEN", token)
        config.API_TOKEN = token
        _setup_done(me)
        return

    raise SetupError("[SETUP_NEEDED] No valid API token provided.")
