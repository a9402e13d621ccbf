#!/usr/bin/env python3
"""
GET /api/<version>/hosts against a live Foreman

- Connection settings come from FOREMAN_ADDRESS, FOREMAN_API_VERSION,
  FOREMAN_USERNAME, FOREMAN_PASSWORD, FOREMAN_TIMEOUT
- Optional SEARCH narrows the listing (Foreman search syntax)
- Prints status and JSON response
"""

import json
import os
import sys

from requests import exceptions as req_exceptions

from foreman_client import Client, Query
from foreman_errors import ForemanError
from foreman_utils.log import get_logger
from foreman_utils.settings import options_from_env

logger = get_logger("foreman-smoke")
# show the client's PREPARED / status lines
get_logger()

SEARCH = os.environ.get("SEARCH", "")


def main():
    params = {"search": SEARCH} if SEARCH else {}
    try:
        with Client(options_from_env()) as client:
            resp = client.index(Query("hosts", params))
    except (ForemanError, req_exceptions.RequestException) as e:
        logger.error("Request failed: %s", str(e))
        return 1

    print("Status:", resp.status_code)
    try:
        body = resp.json()
        print("Response JSON:", json.dumps(body, indent=2))
    except ValueError:
        print("Response Text:", resp.text)
    return 0 if resp.ok else 1


if __name__ == "__main__":
    sys.exit(main())
