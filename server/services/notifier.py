"""
Broker notification sinks.

Called once per accept decision when the user has left contact details. Implementations:
HTTP lead API (production), logging only (no CONTACT_API_URL). Failures are logged and
reported as False; nothing is retried.
"""

import logging
from typing import Protocol

import requests

from boat_feed.models.boat import Boat

from ..models.users import ContactIdentity

logger = logging.getLogger(__name__)

LISTING_URL = "https://www.batoo.it/barche/{boat_id}"


class NotificationSink(Protocol):
    """Protocol for telling a broker that a user is interested in a boat."""

    def notify_interest(self, boat: Boat, contact: ContactIdentity) -> bool:
        """Return True when the notification was accepted downstream."""
        ...


def build_lead_payload(boat: Boat, contact: ContactIdentity, broker_email: str) -> dict:
    """Lead request body for the contact API."""
    title = f"{boat.builder} {boat.model}".strip()
    message = (
        "Hello,\n\n"
        "A Boat Match user has just shown strong interest in one of your listings.\n\n"
        "USER:\n"
        f"- Name: {contact.name}\n"
        f"- Email: {contact.email}\n"
        f"- Phone: {contact.phone}\n\n"
        "BOAT:\n"
        f"- Boat: {title} ({boat.year_built or 'n/a'})\n"
        f"- Price: {boat.sell_price_formatted or boat.sell_price}\n"
        f"- Link: {LISTING_URL.format(boat_id=boat.boat_id)}\n\n"
        "Please get back to the user as soon as possible.\n"
    )
    return {
        "name": contact.name,
        "surname": "",
        "email": contact.email,
        "phone": contact.phone,
        "interestedIn": f"MATCH REQUEST: {title}",
        "message": message,
        "brokerEmail": broker_email,
        "to": broker_email,
    }


class HttpBrokerNotifier:
    """POSTs a lead to the contact API; the broker is the boat's agency or the default inbox."""

    def __init__(self, url: str, default_broker_email: str, timeout: float = 10.0):
        self._url = url
        self._default_broker_email = default_broker_email
        self._timeout = timeout

    def notify_interest(self, boat: Boat, contact: ContactIdentity) -> bool:
        broker_email = boat.agency_email or self._default_broker_email
        payload = build_lead_payload(boat, contact, broker_email)
        try:
            response = requests.post(
                self._url,
                json=payload,
                headers={"accept": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(
                "[notify] LEAD_FAILED boat_id=%s broker=%s error=%s", boat.boat_id, broker_email, e,
            )
            return False
        logger.info("[notify] LEAD_SENT boat_id=%s broker=%s", boat.boat_id, broker_email)
        return True


class LoggingNotifier:
    """Records the lead in the log only. Used for local runs and tests."""

    def __init__(self, default_broker_email: str = "info@batoo.it"):
        self._default_broker_email = default_broker_email
        self.sent: list = []

    def notify_interest(self, boat: Boat, contact: ContactIdentity) -> bool:
        broker_email = boat.agency_email or self._default_broker_email
        self.sent.append((boat.boat_id, contact.email, broker_email))
        logger.info(
            "[notify] LEAD_LOGGED boat_id=%s broker=%s contact=%s",
            boat.boat_id, broker_email, contact.email,
        )
        return True
