"""
Support Service Module
Validates support requests, scores them for spam, rate limits them and
relays them to the configured notification sink
"""
import logging
import re
import time
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import requests

from .notification_sink import NotificationSink
from ..utils.logger import custom_logger

logger = logging.getLogger(__name__)

SUPPORT_TYPES = ('Bug Report', 'Feature Request', 'General Question', 'Course Issue')

SPAM_KEYWORDS = (
    'free money', 'get rich quick', 'make money fast', 'work from home',
    'click here', 'limited time', 'act now', 'urgent', 'congratulations',
    'winner', 'prize', 'lottery', 'viagra', 'casino', 'gambling',
    'bitcoin', 'crypto investment', 'guaranteed income', 'easy money',
    'nigerian prince', 'inheritance', 'million dollars', 'bank transfer',
    'verify account', 'suspended account', 'update payment', 'refund',
    'sex', 'adult', 'dating', 'singles', 'meet women', 'hot girls',
)

# Share of capital letters above which text counts as shouting
CAPS_RATIO = 0.3

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

SUSPICIOUS_EMAIL_PATTERNS = (
    re.compile(r'\d{6,}@'),     # long run of digits before the domain
    re.compile(r'^[a-z]{1,2}@'),  # one or two letter username
    re.compile(r'^\d+@'),       # numeric username
    re.compile(r'@\d+\w+\.'),   # domain starting with digits
)

# Accepted without a DNS lookup
VALID_DOMAINS = (
    'gmail.com', 'yahoo.com', 'outlook.com', 'hotmail.com', 'icloud.com',
    'protonmail.com', 'aol.com', 'mail.com', 'zoho.com', 'live.com',
    'msn.com', 'yandex.com', 'rediffmail.com', 'fastmail.com',
)

# Accepted when the DNS lookup itself fails
FALLBACK_DOMAINS = ('gmail.com', 'yahoo.com', 'outlook.com', 'hotmail.com')

MIN_NAME_LENGTH = 2
SUBJECT_LENGTH = (5, 100)
MESSAGE_LENGTH = (10, 1000)

EMBED_COLOR = 0xea580c
SPAM_EMBED_COLOR = 0xff0000


class SupportValidationError(ValueError):
    """A support request failed validation; the message is user facing"""


class RateLimitedError(Exception):
    """A support request arrived inside the rate-limit window"""


@dataclass
class SupportRequest:
    name: str
    email: str
    type: str
    subject: str
    message: str

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> 'SupportRequest':
        if not isinstance(payload, dict):
            payload = {}

        def text(key):
            value = payload.get(key)
            return value if isinstance(value, str) else ''

        return cls(
            name=text('name'),
            email=text('email').strip(),
            type=text('type'),
            subject=text('subject'),
            message=text('message'),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def spam_signals(text: str) -> List[str]:
    """
    Names of the spam heuristics that fire for the given text.
    An empty list means the text looks clean.
    """
    signals = []
    lower_text = text.lower()

    if any(keyword in lower_text for keyword in SPAM_KEYWORDS):
        signals.append('keywords')
    if len(re.findall(r'[A-Z]', text)) > len(text) * CAPS_RATIO:
        signals.append('excessive_caps')
    if re.search(r'[!?]{2,}', text):
        signals.append('excessive_punctuation')
    if re.search(r'(.)\1{3,}', text):
        signals.append('repeated_characters')
    if re.search(r'https?://', text) or 'www.' in text:
        signals.append('urls')

    return signals


class DomainVerifier:
    """
    Checks that an email domain can receive mail by asking a
    DNS-over-HTTPS resolver for MX records.
    """
    def __init__(self, resolver_url: str = 'https://dns.google/resolve', timeout: float = 10,
                 session: Optional[requests.Session] = None):
        self.resolver_url = resolver_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @custom_logger.log_function_call
    def has_mx_records(self, domain: str) -> bool:
        if not domain:
            return False
        try:
            response = self.session.get(
                self.resolver_url,
                params={'name': domain, 'type': 'MX'},
                timeout=self.timeout
            )
            data = response.json()
            return data.get('Status') == 0 and bool(data.get('Answer'))
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"MX lookup for {domain} failed, using fallback list: {str(e)}")
            return domain.lower() in FALLBACK_DOMAINS


def email_error(email: str, verifier: DomainVerifier) -> Optional[str]:
    """
    Validate an email address
    @returns: User-facing error message, or None when the address is acceptable
    """
    if not EMAIL_REGEX.match(email):
        return "Invalid email format"

    if any(pattern.search(email) for pattern in SUSPICIOUS_EMAIL_PATTERNS):
        return "Email address appears suspicious"

    domain = email.split('@', 1)[1].lower()
    if domain in VALID_DOMAINS:
        return None

    if not verifier.has_mx_records(domain):
        return "Email domain does not exist or cannot receive emails"
    return None


def validate_support_request(support_request: SupportRequest, verifier: DomainVerifier) -> None:
    """
    Run every validation rule in order; the first failure is raised.

    Raises:
        SupportValidationError: With the message to show the user
    """
    fields = support_request.to_dict()
    if not all(fields.values()):
        raise SupportValidationError("Please fill in all fields")

    name = support_request.name.strip()
    if len(name) < MIN_NAME_LENGTH:
        raise SupportValidationError("Please enter a valid name (at least 2 characters)")
    if re.search(r'\d', name):
        raise SupportValidationError("Name should not contain numbers")
    if not re.fullmatch(r'[A-Za-z\s]+', name):
        raise SupportValidationError("Name may only contain letters and spaces")

    error = email_error(support_request.email, verifier)
    if error:
        raise SupportValidationError(error)

    if support_request.type not in SUPPORT_TYPES:
        raise SupportValidationError(f"Support type must be one of: {', '.join(SUPPORT_TYPES)}")

    subject = support_request.subject.strip()
    if len(subject) < SUBJECT_LENGTH[0]:
        raise SupportValidationError("Please provide a more descriptive subject (at least 5 characters)")
    if len(subject) > SUBJECT_LENGTH[1]:
        raise SupportValidationError("Subject must be at most 100 characters")

    message = support_request.message.strip()
    if len(message) < MESSAGE_LENGTH[0]:
        raise SupportValidationError("Please provide more details in your message (at least 10 characters)")
    if len(message) > MESSAGE_LENGTH[1]:
        raise SupportValidationError("Message must be at most 1000 characters")


def build_webhook_payload(support_request: SupportRequest, is_spam: bool,
                          now: Optional[datetime] = None) -> Dict[str, Any]:
    """Discord-style embed describing the support request."""
    now = now or datetime.now(timezone.utc)
    spam_prefix = "(SPAM) " if is_spam else ""

    fields = [
        {'name': "📝 Subject", 'value': support_request.subject, 'inline': False},
        {'name': "👤 Name", 'value': support_request.name, 'inline': True},
        {'name': "📧 Email", 'value': support_request.email, 'inline': True},
        {'name': "🔍 Type", 'value': support_request.type, 'inline': True},
        {'name': "💬 Message", 'value': support_request.message, 'inline': False},
    ]
    if is_spam:
        fields.append({
            'name': "⚠️ Spam Detection",
            'value': "This message was flagged as potential spam",
            'inline': False,
        })

    footer = "Certiswift Support System"
    if is_spam:
        footer += " | SPAM DETECTED"

    return {
        'embeds': [
            {
                'title': f"{spam_prefix}🎓 Certiswift Support: {support_request.type}",
                'color': SPAM_EMBED_COLOR if is_spam else EMBED_COLOR,
                'fields': fields,
                'timestamp': now.isoformat(),
                'footer': {'text': footer},
            }
        ]
    }


class SubmissionRateLimiter:
    """
    One accepted submission per client per window.

    The store is any object with Flask-Caching style ``get``/``set``;
    only successful submissions are recorded.
    """
    def __init__(self, store, window_seconds: int = 60, clock: Callable[[], float] = time.time):
        self.store = store
        self.window_seconds = window_seconds
        self.clock = clock

    @staticmethod
    def _key(client_key: str) -> str:
        return f"support:last_submission:{client_key}"

    def seconds_remaining(self, client_key: str) -> float:
        last_submission = self.store.get(self._key(client_key))
        if last_submission is None:
            return 0.0
        elapsed = self.clock() - float(last_submission)
        return max(0.0, self.window_seconds - elapsed)

    def check(self, client_key: str) -> None:
        if self.seconds_remaining(client_key) > 0:
            raise RateLimitedError("Please wait at least 1 minute between support requests")

    def record(self, client_key: str) -> None:
        self.store.set(self._key(client_key), self.clock(), timeout=self.window_seconds)


class SupportService:
    """Validation, spam tagging, rate limiting and delivery of support requests."""

    def __init__(self, sink: NotificationSink, verifier: DomainVerifier, rate_limiter: SubmissionRateLimiter):
        self.sink = sink
        self.verifier = verifier
        self.rate_limiter = rate_limiter

    def submit(self, payload: Optional[Dict[str, Any]], client_key: str) -> Dict[str, Any]:
        """
        Validate and deliver a support request
        @param payload: Raw form fields
        @param client_key: Identifies the submitter for rate limiting
        @returns: Summary of the accepted submission

        Raises:
            SupportValidationError: Invalid form, nothing sent
            RateLimitedError: Inside the rate-limit window, nothing sent
            NotificationError: Delivery failed, not recorded for rate limiting
        """
        support_request = SupportRequest.from_payload(payload)
        validate_support_request(support_request, self.verifier)

        signals = spam_signals(
            f"{support_request.subject} {support_request.message} {support_request.name}"
        )
        is_spam = bool(signals)
        if is_spam:
            logger.warning(f"Support request from {support_request.email} flagged as spam: {signals}")

        self.rate_limiter.check(client_key)

        self.sink.send(build_webhook_payload(support_request, is_spam))
        self.rate_limiter.record(client_key)

        logger.info(f"Support request '{support_request.subject}' sent for {support_request.email}")
        return {'spam': is_spam, 'type': support_request.type}
