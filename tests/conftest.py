import itertools
from datetime import datetime, timedelta, timezone

import pytest

from certiswift import create_app
from certiswift.services.notification_sink import NotificationError, NotificationSink


# --- In-memory stand-in for the supabase-py query builder ---

class FakeAPIError(Exception):
    """Shaped like postgrest's APIError"""
    def __init__(self, message, code='PGRST000', details=None, hint=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.action = None
        self.columns = '*'
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_to = None
        self.count = None
        self.on_conflict = ''
        self.ignore_duplicates = False

    # verbs
    def select(self, *columns, count=None, **kwargs):
        self.action = 'select'
        self.columns = ','.join(columns) if columns else '*'
        self.count = count
        return self

    def insert(self, rows, **kwargs):
        self.action = 'insert'
        self.payload = rows
        return self

    def update(self, values, **kwargs):
        self.action = 'update'
        self.payload = values
        return self

    def delete(self, **kwargs):
        self.action = 'delete'
        return self

    def upsert(self, rows, on_conflict='', ignore_duplicates=False, **kwargs):
        self.action = 'upsert'
        self.payload = rows
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    # modifiers
    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False, **kwargs):
        self.order_by = (column, desc)
        return self

    def limit(self, size, **kwargs):
        self.limit_to = size
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def _project(self, row):
        if self.columns.strip() == '*':
            return dict(row)
        names = [name.strip() for name in self.columns.split(',')]
        return {name: row.get(name) for name in names}

    def execute(self):
        self.db.calls.append((self.table, self.action))
        if self.table in self.db.failing:
            raise FakeAPIError(f'{self.table} is unavailable', code='PGRST301', hint='test failure')

        rows = self.db.tables.setdefault(self.table, [])
        handler = getattr(self, f'_execute_{self.action}')
        return handler(rows)

    def _execute_select(self, rows):
        result = [row for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            result = sorted(result, key=lambda row: row.get(column) or '', reverse=desc)
        total = len(result)
        if self.limit_to is not None:
            result = result[:self.limit_to]
        return FakeResponse([self._project(row) for row in result], count=total if self.count else None)

    def _as_list(self):
        return self.payload if isinstance(self.payload, list) else [self.payload]

    def _execute_insert(self, rows):
        inserted = [self.db.new_row(self.table, values) for values in self._as_list()]
        return FakeResponse([dict(row) for row in inserted])

    def _execute_update(self, rows):
        updated = []
        for row in rows:
            if self._matches(row):
                row.update(self.payload)
                updated.append(dict(row))
        return FakeResponse(updated)

    def _execute_delete(self, rows):
        deleted = [row for row in rows if self._matches(row)]
        self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
        return FakeResponse([dict(row) for row in deleted])

    def _execute_upsert(self, rows):
        keys = [key.strip() for key in self.on_conflict.split(',') if key.strip()] or ['id']
        result = []
        for values in self._as_list():
            existing = next(
                (row for row in rows if all(row.get(key) == values.get(key) for key in keys)),
                None
            )
            if existing is None:
                result.append(dict(self.db.new_row(self.table, values)))
            elif not self.ignore_duplicates:
                existing.update(values)
                result.append(dict(existing))
        return FakeResponse(result)


class FakeSupabase:
    """Tables are plain lists of dict rows; ids and timestamps are generated."""
    TIMESTAMP_COLUMNS = {'achievements': 'earned_at'}

    def __init__(self):
        self.tables = {}
        self.failing = set()
        self.calls = []
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, *tables):
        self.failing.update(tables)

    def recover(self):
        self.failing.clear()

    def next_timestamp(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._clock))
        return moment.isoformat()

    def new_row(self, table, values):
        row = dict(values)
        row.setdefault('id', next(self._ids))
        row.setdefault(self.TIMESTAMP_COLUMNS.get(table, 'created_at'), self.next_timestamp())
        self.tables.setdefault(table, []).append(row)
        return row

    def seed(self, table, *rows):
        return [dict(self.new_row(table, row)) for row in rows]

    def rows(self, table):
        return self.tables.get(table, [])


# --- Support intake collaborators ---

class RecordingSink(NotificationSink):
    def __init__(self):
        self.sent = []
        self.fail_next = False

    def send(self, payload):
        if self.fail_next:
            self.fail_next = False
            raise NotificationError("Failed to send message")
        self.sent.append(payload)


class StubVerifier:
    """Answers MX lookups from a fixed set of domains"""
    def __init__(self, domains=('certiswift.in',)):
        self.domains = set(domains)
        self.lookups = []

    def has_mx_records(self, domain):
        self.lookups.append(domain)
        return domain in self.domains


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


# --- Fixtures ---

TEST_CONFIG = {
    'TESTING': True,
    'SUPABASE_URL': 'http://supabase.test',
    'SUPABASE_KEY': 'test-anon-key',
    'SECRET_KEY': 'test-secret-key',
    'CACHE_TYPE': 'SimpleCache',
    'SUPPORT_WEBHOOK_URL': 'https://hooks.test/support',
    'SUPPORT_RATE_LIMIT_SECONDS': 60,
    'DEFAULT_TOTAL_MODULES': 10,
    'CORS_ORIGINS': ['http://localhost:3000'],
    'PROXY_FIX_X_FOR': 0,
}


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(supabase, sink, verifier, clock):
    app = create_app(dict(TEST_CONFIG))
    app.extensions['supabase'] = supabase

    support_service = app.extensions['support_service']
    support_service.sink = sink
    support_service.verifier = verifier
    support_service.rate_limiter.clock = clock
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client, supabase):
    """Test client holding an authenticated admin session"""
    from werkzeug.security import generate_password_hash

    supabase.seed('admins', {'email': 'admin@certiswift.in', 'password': generate_password_hash('s3cret-pass')})
    response = client.post('/api/admin/login', json={'email': 'admin@certiswift.in', 'password': 's3cret-pass'})
    assert response.status_code == 200
    return client


@pytest.fixture
def make_course(supabase):
    def _make(**overrides):
        row = {
            'title': 'Python for Data Science',
            'description': 'Data analysis with pandas',
            'provider': 'Data Science Hub',
            'type': 'FREE',
            'course_url': 'https://example.com/python',
        }
        row.update(overrides)
        return supabase.seed('courses', row)[0]
    return _make
