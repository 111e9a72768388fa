"""Typed convenience clients for common OTRS objects.

Each wrapper is declared with :class:`Operation` and simply forwards to
:meth:`OtrsClient.call`; anything not declared here is still reachable
through ``call("AnyOperation", {...})``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from otrsrpc.client import OtrsClient


class Operation:
    """Class attribute that binds a Python name to a remote operation."""

    def __init__(self, remote_name: str, doc: str = ""):
        self.remote_name = remote_name
        self.name = remote_name
        self.__doc__ = doc or f"Call the remote ``{remote_name}`` operation."

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: OtrsClient | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.operation(self.remote_name)

    def __repr__(self) -> str:
        return f"Operation({self.name!r} -> {self.remote_name!r})"


def declared_operations(client_cls: type[OtrsClient]) -> dict[str, str]:
    """Map wrapper names to remote operation names for a client class."""
    found: dict[str, str] = {}
    for klass in reversed(client_cls.__mro__):
        for attr, value in vars(klass).items():
            if isinstance(value, Operation):
                found[attr] = value.remote_name
    return found


class TicketClient(OtrsClient):
    """Operations of the remote ``TicketObject``."""

    default_module = "Ticket"

    ticket_create = Operation("TicketCreate", "Create a ticket; returns the new TicketID.")
    ticket_get = Operation("TicketGet", "Fetch ticket attributes by TicketID.")
    ticket_search = Operation("TicketSearch", "Search tickets; returns TicketID/TicketNumber pairs.")
    ticket_delete = Operation("TicketDelete")
    ticket_number_lookup = Operation("TicketNumberLookup")
    ticket_id_lookup = Operation("TicketIDLookup")
    ticket_title_update = Operation("TicketTitleUpdate")
    ticket_state_set = Operation("TicketStateSet")
    ticket_queue_set = Operation("TicketQueueSet")
    ticket_owner_set = Operation("TicketOwnerSet")
    ticket_lock_set = Operation("TicketLockSet")
    ticket_priority_set = Operation("TicketPrioritySet")
    article_create = Operation("ArticleCreate", "Add an article to a ticket; returns the ArticleID.")
    article_get = Operation("ArticleGet")
    article_index = Operation("ArticleIndex")
    history_get = Operation("HistoryGet")


class CustomerUserClient(OtrsClient):
    """Operations of the remote ``CustomerUserObject``."""

    default_module = "CustomerUser"

    customer_user_data_get = Operation("CustomerUserDataGet")
    customer_search = Operation("CustomerSearch")
    customer_user_list = Operation("CustomerUserList")
    customer_user_add = Operation("CustomerUserAdd")
    customer_user_update = Operation("CustomerUserUpdate")


class QueueClient(OtrsClient):
    """Operations of the remote ``QueueObject``."""

    default_module = "Queue"

    queue_lookup = Operation("QueueLookup")
    queue_get = Operation("QueueGet")
    get_all_queues = Operation("GetAllQueues")


class UserClient(OtrsClient):
    """Operations of the remote ``UserObject``."""

    default_module = "User"

    user_lookup = Operation("UserLookup")
    get_user_data = Operation("GetUserData")
    user_search = Operation("UserSearch")
    user_list = Operation("UserList")


CLIENTS: dict[str, type[OtrsClient]] = {
    "Ticket": TicketClient,
    "CustomerUser": CustomerUserClient,
    "Queue": QueueClient,
    "User": UserClient,
}


def client_for(module: str, **kwargs: Any) -> OtrsClient:
    """Build the typed client for ``module`` or a plain one when none exists."""
    factory: Callable[..., OtrsClient] = CLIENTS.get(module, OtrsClient)
    return factory(module, **kwargs)
