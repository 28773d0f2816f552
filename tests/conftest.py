"""Test configuration and fixtures.

Settings are loaded from the environment; pin the identities the tests
rely on before any container is built.
"""

import os

from tests.factories import ADMIN_ID, CHANNEL_ID

os.environ["ENVIRONMENT"] = "test"
os.environ["TELEGRAM__ADMIN_ID"] = str(ADMIN_ID)
os.environ["TELEGRAM__CHANNEL_ID"] = str(CHANNEL_ID)
os.environ["SUBSCRIPTION__REDEMPTION_TRIGGER"] = "command"
