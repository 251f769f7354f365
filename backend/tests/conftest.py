import os
import tempfile

import pytest

# must be set before dashboard.config is imported
_tmpdir = tempfile.mkdtemp(prefix="dashboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"

from dashboard.db import SessionLocal, init_db  # noqa: E402
from dashboard.repositories.customer_repo import CustomerRepository  # noqa: E402

SEED_CUSTOMERS = [
    {"id": "c1", "name": "Evil Rabbit", "email": "evil@rabbit.com"},
    {"id": "c2", "name": "Lee Robinson", "email": "lee@robinson.com"},
    {"id": "c3", "name": "Quinn Listing", "email": "quinn@listing.com"},
]


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    init_db(reset=True)
    db = SessionLocal()
    try:
        repo = CustomerRepository(db)
        for c in SEED_CUSTOMERS:
            repo.get_or_create(**c)
        db.commit()
    finally:
        db.close()
    yield
