"""Interaction controller tying user input to the events API."""
import logging
from typing import Callable, List, Optional

from store.client import EventStoreClient
from store.exceptions import StoreClientError
from viewmodel.deriver import ViewModelDeriver
from viewmodel.models import DecoratedEvent, Event

logger = logging.getLogger(__name__)

ADD_FAILED = 'Failed to add event'
DELETE_FAILED = 'Failed to delete'


def log_notice(message: str) -> None:
    """Default failure notice: log it."""
    logger.warning(message)


class InteractionController:
    """Owns the in-memory event list and the new-event form fields."""

    def __init__(
        self,
        store_client: EventStoreClient,
        deriver: Optional[ViewModelDeriver] = None,
        notify: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize the controller.

        Args:
            store_client: Client for list/create/delete calls
            deriver: View-model deriver (default: ViewModelDeriver())
            notify: Called with a message when add or delete fails
        """
        self.store_client = store_client
        self.deriver = deriver or ViewModelDeriver()
        self.notify = notify or log_notice
        self.events: List[Event] = []
        self.loading = True
        self.event_name = ''
        self.event_date = ''

    @property
    def state(self) -> str:
        if self.loading:
            return 'loading'
        return 'loaded' if self.events else 'empty'

    def load(self) -> bool:
        """
        Fetch the event list once.

        On failure the error is logged and the controller stays loading.

        Returns:
            True if the list was loaded
        """
        try:
            events = self.store_client.list_events()
        except StoreClientError as e:
            logger.error(f"Fetch error: {e}")
            return False

        self.events = events
        self.loading = False
        logger.info(f"Loaded {len(events)} events")
        return True

    def add(self, name: Optional[str] = None, date: Optional[str] = None) -> bool:
        """
        Create an event from the form fields, then refresh the list.

        Args:
            name: Event name (default: the event_name field)
            date: Event date, YYYY-MM-DD (default: the event_date field)

        Returns:
            True if the event was created and the list refreshed
        """
        name = self.event_name if name is None else name
        date = self.event_date if date is None else date

        if not name or not name.strip() or not date or not date.strip():
            logger.debug("Ignoring add with empty name or date")
            return False

        try:
            self.store_client.create_event(name, date)
            updated = self.store_client.list_events()
        except StoreClientError as e:
            logger.error(f"Add failed: {e}")
            self.notify(ADD_FAILED)
            return False

        self.events = updated
        self.event_name = ''
        self.event_date = ''
        return True

    def delete(self, event_id: str) -> bool:
        """
        Delete an event and drop it from the local list without a refetch.

        Args:
            event_id: Identifier of the event to delete

        Returns:
            True if the event was deleted
        """
        try:
            self.store_client.delete_event(event_id)
        except StoreClientError as e:
            logger.error(f"Delete failed: {e}")
            self.notify(DELETE_FAILED)
            return False

        self.events = [e for e in self.events if e.event_id != event_id]
        return True

    def view(self) -> List[DecoratedEvent]:
        """Decorate the current list for display."""
        return self.deriver.derive(self.events)
