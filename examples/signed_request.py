"""
Signed API Request Example

This example demonstrates calling a protected resource with an access token
obtained through ``main.py``. Every request is signed by ``OAuth1Auth``.

Required environment variables:
- OAUTH_CONSUMER_KEY, OAUTH_CONSUMER_SECRET
- OAUTH_TOKEN, OAUTH_TOKEN_SECRET: the access token pair
- API_URL: The protected resource to fetch

Usage:
    python examples/signed_request.py
"""

import logging
import os
import sys

import httpx
from dotenv import load_dotenv

import oauth1_client

# Set up logging configuration
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> bool:
    load_dotenv()

    settings = {
        name: os.getenv(name)
        for name in [
            "OAUTH_CONSUMER_KEY",
            "OAUTH_CONSUMER_SECRET",
            "OAUTH_TOKEN",
            "OAUTH_TOKEN_SECRET",
            "API_URL",
        ]
    }
    missing = [name for name, value in settings.items() if not value]
    if missing:
        logger.error("Missing environment variables: %s", ", ".join(missing))
        return False

    consumer = oauth1_client.Consumer(
        key=settings["OAUTH_CONSUMER_KEY"],
        secret=settings["OAUTH_CONSUMER_SECRET"],
        signature_method=os.getenv("OAUTH_SIGNATURE_METHOD", oauth1_client.HMAC_SHA1),
    )
    auth = oauth1_client.OAuth1Auth(
        consumer, settings["OAUTH_TOKEN"], settings["OAUTH_TOKEN_SECRET"]
    )

    with httpx.Client(auth=auth, follow_redirects=False) as client:
        response = client.get(settings["API_URL"])

    logger.info("Response status: %s", response.status_code)
    print(response.text)
    return response.is_success


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
