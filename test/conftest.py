import os
import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("SECRET_KEY", "test-secret-key")

@pytest.fixture
def mock_db():
    """
    Creates a mock async database session.
    `mock_db.execute.return_value` is the result object, so tests configure
    rows with e.g. `mock_db.execute.return_value.scalars.return_value.all.return_value`.
    """
    session = MagicMock(spec=AsyncSession)
    session.info = {}
    session.execute = AsyncMock(return_value=MagicMock())
    return session

@pytest.fixture
def executed_sql(mock_db):
    """SQL text of the last statement passed to `mock_db.execute`, with values inlined."""
    def _executed_sql():
        statement = mock_db.execute.call_args.args[0]
        return str(statement.compile(compile_kwargs={"literal_binds": True}))
    return _executed_sql
