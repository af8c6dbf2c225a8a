"""
GenX TechFest - Test Configuration and Fixtures
"""
import os
from datetime import datetime, timedelta
from typing import AsyncGenerator, Callable, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['TESTING'] = 'true'
os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RAZORPAY_KEY_ID'] = 'rzp_test_key'
os.environ['RAZORPAY_KEY_SECRET'] = 'test_razorpay_secret'
os.environ['RAZORPAY_WEBHOOK_SECRET'] = 'test_webhook_secret'
os.environ['ADMIN_EMAILS_STR'] = 'chief@genxtechfest.in'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''

from app.main import app
from app.core.config import settings
from app.core.database import Base, get_db
from app.core.security import get_password_hash, create_access_token
from app.models.user import User, UserRole
from app.models.event import Event, EventKind, EventTiming
from app.services.payment_gateway import get_payment_gateway
from app.services.payment_service import PaymentService
from tests.mocks.mock_gateway import FakeGateway

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


def make_person(**overrides) -> Dict[str, str]:
    """Registrant payload with valid random identity fields"""
    person = {
        'name': fake.name(),
        'email': fake.unique.email(),
        'registration_no': fake.unique.bothify('2#CSE####').upper(),
        'mobile_no': fake.numerify('9#########'),
        'semester': str(fake.random_int(min=1, max=8)),
    }
    person.update(overrides)
    return person


@pytest.fixture
def person_factory() -> Callable[..., Dict[str, str]]:
    return make_person


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def payment_service(fake_gateway: FakeGateway) -> PaymentService:
    return PaymentService(settings=settings, gateway=fake_gateway)


@pytest.fixture
async def client(db_session: AsyncSession, fake_gateway: FakeGateway) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and gateway overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: fake_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, password: str, role: UserRole) -> User:
    user = User(
        email=fake.unique.email(),
        hashed_password=get_password_hash(password),
        name=fake.name()[:50],
        registration_no=fake.unique.bothify('2#ECE####').upper(),
        branch='CSE',
        semester='5',
        mobile='+91' + fake.numerify('9#########'),
        role=role,
        is_admin=role != UserRole.USER,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await _create_user(db_session, 'testpassword123', UserRole.USER)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin test user"""
    return await _create_user(db_session, 'adminpassword123', UserRole.ADMIN)


def _headers_for(user: User) -> dict:
    token_data = {
        'sub': str(user.id),
        'email': user.email,
        'role': user.role.value
    }
    token = create_access_token(token_data)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return _headers_for(test_user)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Generate authentication headers for admin user"""
    return _headers_for(admin_user)


async def _create_event(db_session: AsyncSession, **fields) -> Event:
    start = datetime(2026, 3, 14, 10, 0)
    values = {
        'title': fake.catch_phrase()[:100],
        'description': fake.paragraph(),
        'date': start,
        'end_date': start + timedelta(hours=6),
        'venue': 'Main Auditorium',
        'type': EventTiming.UPCOMING,
        'registrations': [],
    }
    values.update(fields)
    event = Event(**values)
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest.fixture
async def group_event(db_session: AsyncSession) -> Event:
    """Team event: fee 49 per head, up to 3 members besides the leader"""
    return await _create_event(
        db_session,
        title='Hackathon',
        event_type=EventKind.GROUP,
        fee=49,
        max_team_size=3,
    )


@pytest.fixture
async def individual_event(db_session: AsyncSession) -> Event:
    return await _create_event(
        db_session,
        title='Code Sprint',
        event_type=EventKind.INDIVIDUAL,
        fee=100,
        max_team_size=1,
    )
