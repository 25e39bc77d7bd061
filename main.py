"""
Three-legged OAuth 1.0a authorization from the command line.

Obtains a request token, opens the provider's authorization page in the
browser, asks for the verifier (PIN) the provider displays, and exchanges
the request token for an access token.

Required environment variables (a .env file is read if present):
- OAUTH_CONSUMER_KEY, OAUTH_CONSUMER_SECRET
- OAUTH_REQUEST_TOKEN_URI, OAUTH_ACCESS_TOKEN_URI, OAUTH_AUTHORIZE_URI

Optional:
- OAUTH_SIGNATURE_METHOD (default HMAC-SHA1)
- OAUTH_RSA_KEY_FILE: PEM private key, used as the secret for RSA-SHA1
- OAUTH_CALLBACK (default "oob")

Usage:
    python main.py
"""

import logging
import os
import sys
import webbrowser

from dotenv import load_dotenv

import oauth1_client

# Set up logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),  # Output to console
        logging.FileHandler("app.log"),  # Output to file
    ],
)
logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = [
    "OAUTH_CONSUMER_KEY",
    "OAUTH_REQUEST_TOKEN_URI",
    "OAUTH_ACCESS_TOKEN_URI",
    "OAUTH_AUTHORIZE_URI",
]


def load_consumer() -> oauth1_client.Consumer | None:
    """Build the consumer from environment variables.

    Returns:
        The consumer, or None if a required setting is missing
    """
    missing = [name for name in REQUIRED_SETTINGS if not os.getenv(name)]
    if missing:
        logger.error("Missing environment variables: %s", ", ".join(missing))
        return None

    secret = os.getenv("OAUTH_CONSUMER_SECRET", "")
    rsa_key_file = os.getenv("OAUTH_RSA_KEY_FILE")
    if rsa_key_file:
        with open(rsa_key_file) as f:
            secret = f.read()

    return oauth1_client.Consumer(
        key=os.environ["OAUTH_CONSUMER_KEY"],
        secret=secret,
        request_token_uri=os.environ["OAUTH_REQUEST_TOKEN_URI"],
        access_token_uri=os.environ["OAUTH_ACCESS_TOKEN_URI"],
        authorize_uri=os.environ["OAUTH_AUTHORIZE_URI"],
        signature_method=os.getenv("OAUTH_SIGNATURE_METHOD", oauth1_client.HMAC_SHA1),
    )


def main() -> bool:
    """
    Run the three-legged flow and print the access token.

    Returns:
        bool: True if an access token was obtained, False otherwise
    """
    load_dotenv()

    consumer = load_consumer()
    if consumer is None:
        return False

    callback = os.getenv("OAUTH_CALLBACK", "oob")
    logger.info("Starting OAuth flow for consumer: %s", consumer.key)

    try:
        request_token, auth_url = oauth1_client.get_authorization_url(
            consumer, callback
        )
    except oauth1_client.Oauth1Error as e:
        logger.error("Could not start authorization: %s", e)
        return False

    print(f"Authorize this application at:\n  {auth_url}")
    webbrowser.open(auth_url)
    verifier = input("Verifier (PIN): ").strip()

    try:
        token = oauth1_client.complete_authorization(consumer, request_token, verifier)
    except oauth1_client.Oauth1Error as e:
        logger.error("Could not complete authorization: %s", e)
        return False

    print(f"OAUTH_TOKEN={token.token}")
    print(f"OAUTH_TOKEN_SECRET={token.secret}")
    return True


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
