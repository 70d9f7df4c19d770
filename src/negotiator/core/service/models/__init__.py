"""Domain models for the negotiation chat service.

Re-exports every public symbol so callers can import from
``negotiator.core.service.models`` directly.
"""

from .constants import *  # noqa: F401, F403
from .errors import *  # noqa: F401, F403
from .turns import *  # noqa: F401, F403
