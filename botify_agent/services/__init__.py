"""
Service implementations for the Botify Agent system.

These services implement the business logic interfaces defined in
botify_agent.interfaces.services.
"""
from botify_agent.services.agent import *
from botify_agent.services.auth import *
from botify_agent.services.chat import *
from botify_agent.services.status import *
