"""User registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.credentials import hash_password
from identity.domain import identity
from identity.errors import UserAlreadyExists
from identity.user.user import User

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


@identity.command(part_of="User")
class RegisterUser:
    """Create a new user account from a name, email and password."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=MIN_PASSWORD_LENGTH, max_length=72)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise UserAlreadyExists({"email": ["User already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password),
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
