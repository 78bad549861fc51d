"""
Domain models for the Botify Agent system.

This package contains the value types exchanged between the tool layer,
the services and the storage and API adapters.
"""

from botify_agent.domains.auth import *
from botify_agent.domains.errors import *
from botify_agent.domains.messages import *
from botify_agent.domains.spotify import *
from botify_agent.domains.tools import *
