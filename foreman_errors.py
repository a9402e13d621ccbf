# foreman_errors.py - exceptions raised by the Foreman client


class ForemanError(Exception):
    """Base class for every error raised by the client itself.

    Transport failures are not wrapped: they surface as the
    ``requests.exceptions.RequestException`` raised by the session.
    """


class AddressError(ForemanError, ValueError):
    """The configured Foreman address cannot be turned into a request URL."""


class SerializationError(ForemanError, TypeError):
    """Resource parameters could not be encoded as JSON."""


class ValidationError(ForemanError, ValueError):
    """A mandatory piece of a request (resource name, id) is missing."""


class ConfigurationError(ForemanError, ValueError):
    """An environment setting has a value that cannot be used."""
