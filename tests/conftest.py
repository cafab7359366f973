import pytest
from storefront import create_app
from storefront.extensions import db as _db
from storefront.models.store import Store
from storefront.models.product import Product


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    """Fresh schema per test; services commit, so rollback is not enough."""
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture
def store(db):
    s = Store(name="Test Store", owner_id=4242, api_key="test-store-key")
    db.session.add(s)
    db.session.commit()
    return s


@pytest.fixture
def product(db, store):
    p = Product(store_id=store.id, title="Crew Tee")
    db.session.add(p)
    db.session.commit()
    return p


@pytest.fixture
def auth_headers(store):
    return {"X-Store-Key": store.api_key}
