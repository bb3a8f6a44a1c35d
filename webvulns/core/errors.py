"""Exception types raised by webvulns."""


class WebVulnsError(Exception):
    """Base class for errors raised by this package."""


class InvalidInjectionPoint(WebVulnsError, ValueError):
    """An injection point was configured with conflicting locations."""


class PredicateNotImplemented(WebVulnsError, NotImplementedError):
    """
    A vulnerability predicate was called on a class that does not implement it.

    Carries the operation name and the offending class as attributes.
    """

    def __init__(self, operation: str, vuln_class: type):
        self.operation = operation
        self.vuln_class = vuln_class
        super().__init__(operation, vuln_class)

    def __str__(self):
        return f"{self.vuln_class.__name__} did not implement {self.operation}()"
