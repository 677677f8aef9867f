import copy
import json

import pytest

from app.schemas.domain import FinancialData
from tests.fakes import SAMPLE_PAYLOAD


@pytest.fixture
def sample_payload() -> dict:
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_data(sample_payload) -> FinancialData:
    return FinancialData.model_validate(sample_payload)


@pytest.fixture
def sample_json(sample_payload) -> str:
    return json.dumps(sample_payload)
