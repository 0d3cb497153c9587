from autoforgx.errors import ValidationError


def validate_credentials(email: str, password: str) -> None:
    """Check that both credentials are present.

    Raises:
        ValidationError: If email or password is empty
    """
    if not email.strip():
        raise ValidationError("Email is required")

    if not password:
        raise ValidationError("Password is required")
