"""Identity bounded context: users, credentials and bearer tokens.

Plays the Identity Provider role for the rest of the system. Ordering only
ever sees the user identifier that a validated token resolves to.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
