"""Abstract User class that sessions talk to."""

from abc import ABC, abstractmethod
import uuid as uuid_module

from ..messages.localization import Localization


class User(ABC):
    """
    Abstract base class for users.

    Sessions interact with this interface, never with the terminal or a
    window directly. Implementations include ConsoleUser (the CLI host),
    SpectatorUser (simulations) and MockUser (tests).
    """

    @property
    @abstractmethod
    def uuid(self) -> str:
        """The user's unique identifier (UUID string)."""
        ...

    @property
    @abstractmethod
    def username(self) -> str:
        """The user's display name."""
        ...

    @property
    @abstractmethod
    def locale(self) -> str:
        """The user's locale for localization (e.g., 'en')."""
        ...

    @abstractmethod
    def speak(self, text: str, buffer: str = "misc") -> None:
        """
        Send a text message to be displayed.

        Args:
            text: The message text.
            buffer: Which buffer to route the message to (misc, activity, errors).
        """
        ...

    def speak_l(self, message_id: str, buffer: str = "misc", **kwargs) -> None:
        """
        Send a localized message to be displayed.

        Args:
            message_id: The message ID from the .ftl file.
            buffer: Which buffer to route the message to.
            **kwargs: Variables to substitute into the message.
        """
        text = Localization.get(self.locale, message_id, **kwargs)
        self.speak(text, buffer)


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid_module.uuid4())
