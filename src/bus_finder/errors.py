"""Exceptions raised by the bus finder client side."""


class BusFinderError(Exception):
    """Base class for bus finder errors."""


class InputValidationError(BusFinderError):
    """The form input cannot be searched (e.g. both fields empty)."""


class TransportError(BusFinderError):
    """A request to the route service failed or returned an unusable body."""
