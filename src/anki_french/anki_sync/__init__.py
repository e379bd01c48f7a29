"""AnkiConnect access.

Example usage:

from anki_french.anki_sync import AnkiConnectClient

client = AnkiConnectClient()
client.version()
"""
from .anki_connect import AnkiConnectClient, DEFAULT_ANKI_CONNECT_URL
