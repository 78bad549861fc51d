"""
Repository implementations for data access.

This package contains repository implementations that provide
data access capabilities for the domain models.
"""
from botify_agent.repositories.auth import *
from botify_agent.repositories.message import *
from botify_agent.repositories.status import *
