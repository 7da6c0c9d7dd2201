"""User login: command and handler.

A successful login only records the time; token issuance happens at the
API boundary so the domain never handles signing secrets.
"""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.credentials import verify_password
from identity.domain import identity
from identity.errors import InvalidCredentials
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class AuthenticateUser:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=72)


@identity.command_handler(part_of=User)
class AuthenticateUserHandler:
    @handle(AuthenticateUser)
    def authenticate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None or not verify_password(command.password, user.password_hash):
            logger.info("Login rejected")
            raise InvalidCredentials({"credentials": ["Invalid credentials"]})

        user.record_login()
        repo.add(user)
        return str(user.id)
