import sys
from pathlib import Path

import pytest

# Ensure the `foodtrucks` package is importable when running pytest from the repository root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXTURE_CSV = Path(__file__).resolve().parent / "fixtures" / "Mobile_Food_Facility_Permit.csv"


class DistanceRetrieverMock:
    """Always reports two destinations within walking distance (712m and 145m)."""

    def __init__(self, payload=None, error=None):
        self.calls = []
        self.payload = payload
        self.error = error

    def distance_matrix(self, origins, destinations, mode="walking"):
        self.calls.append({"origins": list(origins), "destinations": list(destinations), "mode": mode})
        if self.error is not None:
            raise self.error
        if self.payload is not None:
            return self.payload
        return {
            "status": "OK",
            "origin_addresses": ["100 Spear St, San Francisco, CA 94105, USA"],
            "destination_addresses": [
                "540 Howard St, San Francisco, CA 94105, USA",
                "329 Brannan St, San Francisco, CA 94107, USA",
            ],
            "rows": [
                {
                    "elements": [
                        {"status": "OK", "duration": {"value": 551}, "distance": {"text": "0.7 km", "value": 712}},
                        {"status": "OK", "duration": {"value": 1271}, "distance": {"text": "1.6 km", "value": 145}},
                    ]
                }
            ],
        }


@pytest.fixture
def fixture_csv():
    return FIXTURE_CSV


@pytest.fixture
def vendors():
    from foodtrucks.etl.loader import load_vendors

    return load_vendors(FIXTURE_CSV)


@pytest.fixture
def retriever():
    return DistanceRetrieverMock()
