"""Call the Cardmarket API with an OAuth 1.0 signed request.

Credentials are read from the .env file:
CARDMARKET_APP_TOKEN, CARDMARKET_APP_SECRET,
CARDMARKET_ACCESS_TOKEN, CARDMARKET_ACCESS_TOKEN_SECRET
"""

import sys

from cardmarketclient.client import CardmarketClient
from cardmarketclient.config import credentials_from_env, debug_from_env

CREDENTIALS = credentials_from_env()
DEBUG = debug_from_env()


def get_expansion_singles(expansion_id: int):
    """Fetch the singles of one expansion and print the response."""
    client = CardmarketClient(
        app_token=CREDENTIALS.consumer_key,
        access_token=CREDENTIALS.access_token,
        app_secret=CREDENTIALS.consumer_secret,
        access_token_secret=CREDENTIALS.access_token_secret,
        debug=DEBUG,
    )

    print(f"=== Cardmarket: expansion {expansion_id} singles ===")
    print(f"App Token: {CREDENTIALS.consumer_key[:10]}...")

    response = client.get_expansion_singles(expansion_id)

    print(f"Status Code: {response.status_code}")
    if response.status_code in (401, 403):
        print("Request was rejected, check the credentials in your .env file")
    print(response.text)
    return response


if __name__ == "__main__":
    if len(sys.argv) > 1:
        get_expansion_singles(int(sys.argv[1]))
    else:
        get_expansion_singles(1469)
