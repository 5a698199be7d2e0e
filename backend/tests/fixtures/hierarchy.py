"""Sample kitchen layout used across tests."""

from datetime import datetime, timedelta

SAMPLE_SECTIONS = [
    {"name": "Kitchen", "units": ["Fridge 01", "Fridge 02"]},
    {"name": "Bar", "units": ["Chiller A"]},
]

SAMPLE_CONTACTS = {
    "Kitchen": [("Aisyah", "012-345 6789")],
    "Bar": [],
}


class StepClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 8, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current
