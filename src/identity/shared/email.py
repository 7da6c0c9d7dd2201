"""Email address validation used when registering and looking up users."""

from protean.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(address: str) -> str:
    """Return the canonical (trimmed, lower-cased) form of an email address.

    Raises ``ValidationError`` when the address is structurally invalid:
    exactly one ``@``, non-empty local and domain parts, a dotted domain,
    no consecutive dots, no whitespace or forbidden characters.
    """
    email = (address or "").strip().lower()

    def _reject():
        raise ValidationError({"email": ["Valid email is required"]})

    if not email or any(ch.isspace() for ch in email):
        _reject()

    if email.count("@") != 1:
        _reject()

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        _reject()

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        _reject()

    if "." not in domain_part:
        _reject()

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            _reject()

    if ".." in local_part or ".." in domain_part:
        _reject()

    if any(forbidden in email for forbidden in _FORBIDDEN):
        _reject()

    return email
