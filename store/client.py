"""REST client for the countdown events API."""
import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from store.exceptions import (
    AuthenticationError,
    HttpStatusError,
    TransportError,
)
from store.session import SessionProvider
from viewmodel.deriver import parse_event_date
from viewmodel.models import Event

logger = logging.getLogger(__name__)


class EventStoreClient:
    """Client for the list/create/delete operations of the events API."""

    EVENTS_PATH = '/events'

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 30,
        session_provider: Optional[SessionProvider] = None
    ):
        """
        Initialize the events API client.

        Args:
            base_url: API base URL, without the /events path
            timeout: HTTP request timeout in seconds (default: 30)
            session_provider: Token source; when set, every request
                carries an Authorization: Bearer header
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session_provider = session_provider
        self.http = requests.Session()
        logger.info(f"Initialized EventStoreClient for {self.base_url}")

    def list_events(self) -> List[Event]:
        """
        Fetch every stored event.

        Returns:
            List of Event objects in server order

        Raises:
            StoreClientError: If the request fails or returns non-2xx
        """
        response = self._request('list_events', 'GET', self.EVENTS_PATH)

        try:
            items = response.json()
        except ValueError as e:
            raise TransportError(
                'list_events', f"Response is not valid JSON: {e}", cause=e
            ) from e

        if not isinstance(items, list):
            raise TransportError(
                'list_events',
                f"Expected a JSON array, got {type(items).__name__}"
            )

        events = []
        for item in items:
            event = self._item_to_event(item)
            if event:
                events.append(event)

        logger.info(f"Fetched {len(events)} events")
        return events

    def create_event(self, name: str, date: str) -> None:
        """
        Create an event.

        Args:
            name: Event name
            date: Event date (YYYY-MM-DD)

        Raises:
            StoreClientError: If the request fails or returns non-2xx
        """
        payload = {'eventName': name, 'eventDate': date}
        self._request('create_event', 'POST', self.EVENTS_PATH, json=payload)
        logger.info(f"Created event '{name}' on {date}")

    def delete_event(self, event_id: str) -> None:
        """
        Delete an event by identifier.

        Args:
            event_id: Identifier assigned by the API

        Raises:
            StoreClientError: If the request fails or returns non-2xx
        """
        path = f"{self.EVENTS_PATH}/{quote(str(event_id), safe='')}"
        self._request('delete_event', 'DELETE', path)
        logger.info(f"Deleted event {event_id}")

    def _headers(self, operation: str) -> dict:
        """
        Build request headers, attaching the bearer token when authenticated.

        Raises:
            AuthenticationError: If a session provider is set but has no token
        """
        headers = {'Accept': 'application/json'}

        if self.session_provider is not None:
            token = self.session_provider.get_token()
            if not token:
                raise AuthenticationError(
                    operation, 'No session token available'
                )
            headers['Authorization'] = f"Bearer {token}"

        return headers

    def _request(self, operation: str, method: str, path: str, **kwargs) -> requests.Response:
        """
        Send a single request. Failures are not retried.

        Args:
            operation: Operation name used in logs and errors
            method: HTTP method
            path: Path below the base URL

        Returns:
            The successful response

        Raises:
            StoreClientError: On missing token, network error or non-2xx status
        """
        url = f"{self.base_url}{path}"
        headers = self._headers(operation)

        logger.info(f"{method} {url}")
        try:
            response = self.http.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{operation} failed: {e}")
            raise TransportError(operation, str(e), cause=e) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"{operation} failed with HTTP {response.status_code}"
            )
            raise HttpStatusError(operation, response.status_code, response.text)

        return response

    def _item_to_event(self, item: dict) -> Optional[Event]:
        """
        Convert an API item to an Event.

        Args:
            item: JSON object with eventId, eventName, eventDate, daysLeft

        Returns:
            Event object or None if conversion fails
        """
        try:
            # Rejects dates the deriver could not parse
            parse_event_date(item['eventDate'])
            days_left = item.get('daysLeft')
            return Event(
                event_id=str(item['eventId']),
                name=item['eventName'],
                date=item['eventDate'],
                days_left=int(days_left) if days_left is not None else None
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Failed to convert item to Event: {e}")
            return None
