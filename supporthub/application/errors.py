"""Application-level error taxonomy."""


class RoutingDataUnavailableError(RuntimeError):
    """The rule or queue store could not be reached.

    Distinct from "no rule matched": the routing engine never substitutes a
    default result when this is raised.
    """


class EntityNotFoundError(LookupError):
    """A rule, queue or mailbox configuration id does not exist."""


class RuleManagementError(ValueError):
    """A management request violates a tenancy or referential constraint."""


class MailboxPollingError(RuntimeError):
    """Polling one mailbox configuration failed."""
