"""Port interface for polling a shared mailbox."""

from abc import ABC, abstractmethod


class MailboxPollerPort(ABC):
    @abstractmethod
    async def poll_mailbox(self, config_id: int) -> int:
        """Poll one mailbox configuration and return the number of messages processed.

        Raises MailboxPollingError when the poll fails.
        """
        ...
