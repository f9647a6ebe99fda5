from datetime import datetime, timezone

import pytest
import requests

from certiswift.services.notification_sink import NotificationError, WebhookNotificationSink
from certiswift.services.support_service import (
    DomainVerifier,
    SupportRequest,
    SupportValidationError,
    build_webhook_payload,
    email_error,
    spam_signals,
    validate_support_request,
)


VALID_REQUEST = {
    'name': 'Jane Doe',
    'email': 'jane.doe@gmail.com',
    'type': 'Bug Report',
    'subject': 'Video player broken',
    'message': 'The lesson video stops loading after the second module.',
}


def make_request(**overrides):
    return SupportRequest.from_payload(dict(VALID_REQUEST, **overrides))


@pytest.mark.unit
class TestSpamSignals:

    def test_clean_text(self):
        assert spam_signals('Video player broken The lesson video stops loading Jane Doe') == []

    @pytest.mark.parametrize('text, signal', [
        ('You are a winner of our course', 'keywords'),
        ('Click Here for a bonus', 'keywords'),
        ('THIS IS BROKEN AGAIN', 'excessive_caps'),
        ('why does it fail?!', 'excessive_punctuation'),
        ('soooooo slow', 'repeated_characters'),
        ('see https://example.com for details', 'urls'),
        ('see www.example.com for details', 'urls'),
    ])
    def test_each_heuristic(self, text, signal):
        assert signal in spam_signals(text)

    def test_three_repeats_is_not_a_run(self):
        assert 'repeated_characters' not in spam_signals('the tool said zzz then stopped')


@pytest.mark.unit
class TestValidation:

    def test_valid_request_passes(self, verifier):
        validate_support_request(make_request(), verifier)

    @pytest.mark.parametrize('overrides, message', [
        ({'subject': ''}, 'Please fill in all fields'),
        ({'type': ''}, 'Please fill in all fields'),
        ({'name': 'J'}, 'Please enter a valid name (at least 2 characters)'),
        ({'name': '  J  '}, 'Please enter a valid name (at least 2 characters)'),
        ({'name': 'Jane 2'}, 'Name should not contain numbers'),
        ({'name': 'Jane_Doe'}, 'Name may only contain letters and spaces'),
        ({'name': 'José Núñez'}, 'Name may only contain letters and spaces'),
        ({'email': 'jane.doe@gmail'}, 'Invalid email format'),
        ({'email': 'jane doe@gmail.com'}, 'Invalid email format'),
        ({'email': 'jo@gmail.com'}, 'Email address appears suspicious'),
        ({'email': 'jane1234567@gmail.com'}, 'Email address appears suspicious'),
        ({'email': '12345@gmail.com'}, 'Email address appears suspicious'),
        ({'email': 'jane@123mail.com'}, 'Email address appears suspicious'),
        ({'email': 'jane@nowhere.invalid'}, 'Email domain does not exist or cannot receive emails'),
        ({'type': 'Complaint'}, 'Support type must be one of: Bug Report, Feature Request, General Question, Course Issue'),
        ({'subject': 'Help'}, 'Please provide a more descriptive subject (at least 5 characters)'),
        ({'subject': 'x' * 101}, 'Subject must be at most 100 characters'),
        ({'message': 'Too short'}, 'Please provide more details in your message (at least 10 characters)'),
        ({'message': 'y' * 1001}, 'Message must be at most 1000 characters'),
    ])
    def test_rejections(self, verifier, overrides, message):
        with pytest.raises(SupportValidationError) as exc:
            validate_support_request(make_request(**overrides), verifier)
        assert str(exc.value) == message

    def test_common_domains_skip_dns(self, verifier):
        assert email_error('jane.doe@outlook.com', verifier) is None
        assert verifier.lookups == []

    def test_other_domains_use_dns(self, verifier):
        assert email_error('jane@certiswift.in', verifier) is None
        assert verifier.lookups == ['certiswift.in']


class FakeDnsResponse:
    def __init__(self, payload):
        self.payload = payload

    def json(self):
        return self.payload


class FakeHttpSession:
    def __init__(self, payload=None, error=None, status_code=204):
        self.payload = payload
        self.error = error
        self.status_code = status_code
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append(('GET', url, params))
        if self.error:
            raise self.error
        return FakeDnsResponse(self.payload)

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append(('POST', url, json))
        if self.error:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response.url = url
        return response


@pytest.mark.unit
class TestDomainVerifier:

    def test_mx_answer(self):
        session = FakeHttpSession({'Status': 0, 'Answer': [{'data': '10 mx.certiswift.in.'}]})
        verifier = DomainVerifier('https://dns.test/resolve', session=session)

        assert verifier.has_mx_records('certiswift.in') is True
        assert session.requests == [('GET', 'https://dns.test/resolve', {'name': 'certiswift.in', 'type': 'MX'})]

    def test_nxdomain(self):
        verifier = DomainVerifier(session=FakeHttpSession({'Status': 3}))
        assert verifier.has_mx_records('nowhere.invalid') is False

    def test_lookup_failure_uses_fallback_list(self):
        verifier = DomainVerifier(session=FakeHttpSession(error=requests.ConnectionError('offline')))

        assert verifier.has_mx_records('gmail.com') is True
        assert verifier.has_mx_records('certiswift.in') is False


@pytest.mark.unit
class TestWebhook:

    def test_payload_for_normal_request(self):
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        payload = build_webhook_payload(make_request(), is_spam=False, now=now)

        embed = payload['embeds'][0]
        assert embed['title'] == '🎓 Certiswift Support: Bug Report'
        assert embed['color'] == 0xea580c
        assert embed['timestamp'] == '2024-05-01T12:00:00+00:00'
        assert embed['footer'] == {'text': 'Certiswift Support System'}
        assert [f['value'] for f in embed['fields']] == [
            VALID_REQUEST['subject'], VALID_REQUEST['name'], VALID_REQUEST['email'],
            VALID_REQUEST['type'], VALID_REQUEST['message'],
        ]

    def test_payload_for_spam(self):
        embed = build_webhook_payload(make_request(), is_spam=True)['embeds'][0]

        assert embed['title'].startswith('(SPAM) ')
        assert embed['color'] == 0xff0000
        assert embed['fields'][-1]['value'] == 'This message was flagged as potential spam'
        assert embed['footer']['text'].endswith('| SPAM DETECTED')

    def test_sink_posts_json(self):
        session = FakeHttpSession()
        WebhookNotificationSink('https://hooks.test/x', session=session).send({'embeds': []})

        assert session.requests == [('POST', 'https://hooks.test/x', {'embeds': []})]

    def test_sink_raises_on_http_error(self):
        sink = WebhookNotificationSink('https://hooks.test/x', session=FakeHttpSession(status_code=500))

        with pytest.raises(NotificationError):
            sink.send({'embeds': []})

    def test_sink_requires_url(self):
        with pytest.raises(NotificationError):
            WebhookNotificationSink(None).send({'embeds': []})


@pytest.mark.integration
class TestSupportEndpoint:

    def test_valid_submission_is_sent(self, client, sink):
        response = client.post('/api/support', json=VALID_REQUEST)

        assert response.status_code == 200
        assert response.get_json()['data'] == {'spam': False, 'type': 'Bug Report'}
        assert len(sink.sent) == 1

    def test_spam_is_sent_but_tagged(self, client, sink):
        response = client.post('/api/support', json=dict(VALID_REQUEST, message='Claim your FREE MONEY prize now!!'))

        assert response.status_code == 200
        assert response.get_json()['data']['spam'] is True
        assert sink.sent[0]['embeds'][0]['title'].startswith('(SPAM) ')

    @pytest.mark.parametrize('overrides', [
        {'name': 'J'},
        {'name': 'Jane 2'},
        {'email': 'not-an-email'},
        {'subject': 'Hi'},
        {'message': 'Short'},
    ])
    def test_invalid_submission_makes_no_call(self, client, sink, overrides):
        response = client.post('/api/support', json=dict(VALID_REQUEST, **overrides))

        assert response.status_code == 400
        assert sink.sent == []

    def test_rate_limit_window(self, client, sink, clock):
        assert client.post('/api/support', json=VALID_REQUEST).status_code == 200

        clock.advance(30)
        response = client.post('/api/support', json=VALID_REQUEST)
        assert response.status_code == 429
        assert len(sink.sent) == 1

        clock.advance(31)
        assert client.post('/api/support', json=VALID_REQUEST).status_code == 200
        assert len(sink.sent) == 2

    def test_failed_delivery_does_not_start_window(self, client, sink):
        sink.fail_next = True
        assert client.post('/api/support', json=VALID_REQUEST).status_code == 502

        assert client.post('/api/support', json=VALID_REQUEST).status_code == 200

    def test_rejected_submission_does_not_start_window(self, client, sink):
        client.post('/api/support', json=dict(VALID_REQUEST, subject='Hi'))

        assert client.post('/api/support', json=VALID_REQUEST).status_code == 200

    def test_empty_body(self, client):
        response = client.post('/api/support', json={})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Please fill in all fields'

    @pytest.mark.parametrize('body', [['not', 'an', 'object'], 'text', 42])
    def test_non_object_body(self, client, sink, body):
        response = client.post('/api/support', json=body)

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Please fill in all fields'
        assert sink.sent == []


@pytest.mark.integration
class TestRateLimitBehindProxy:

    @pytest.fixture
    def proxied_client(self, supabase, sink, verifier, clock):
        from certiswift import create_app
        from conftest import TEST_CONFIG

        app = create_app(dict(TEST_CONFIG, PROXY_FIX_X_FOR=1))
        app.extensions['supabase'] = supabase
        support_service = app.extensions['support_service']
        support_service.sink = sink
        support_service.verifier = verifier
        support_service.rate_limiter.clock = clock
        return app.test_client()

    def test_forwarded_clients_get_separate_windows(self, proxied_client, sink):
        first = proxied_client.post('/api/support', json=VALID_REQUEST,
                                    headers={'X-Forwarded-For': '203.0.113.7'})
        second = proxied_client.post('/api/support', json=VALID_REQUEST,
                                     headers={'X-Forwarded-For': '198.51.100.20'})
        repeat = proxied_client.post('/api/support', json=VALID_REQUEST,
                                     headers={'X-Forwarded-For': '203.0.113.7'})

        assert (first.status_code, second.status_code, repeat.status_code) == (200, 200, 429)
        assert len(sink.sent) == 2

    def test_without_proxy_fix_forwarded_header_is_ignored(self, client):
        assert client.post('/api/support', json=VALID_REQUEST,
                           headers={'X-Forwarded-For': '203.0.113.7'}).status_code == 200
        assert client.post('/api/support', json=VALID_REQUEST,
                           headers={'X-Forwarded-For': '198.51.100.20'}).status_code == 429
