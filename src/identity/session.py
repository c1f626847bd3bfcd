"""The signed-in user, as handed over by the external identity provider.

Credentials are verified upstream; the storefront only copies the name and
email onto the orders it places.
"""

from pydantic import BaseModel, ConfigDict

GUEST_NAME = "Cliente Turbo"
GUEST_EMAIL = "cliente@turbodrink.app"


class UserSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = GUEST_NAME
    email: str = GUEST_EMAIL

    @classmethod
    def from_login(cls, email: str | None = None, name: str | None = None):
        """Build a session after a successful login.

        A blank email falls back to the guest identity; the display name
        defaults to the email used to sign in.
        """
        email = (email or "").strip()
        if not email:
            return cls()
        return cls(name=(name or "").strip() or email, email=email)

    @classmethod
    def guest(cls):
        return cls()
