"""Clients for fetching the raw dataset payloads."""
from scripture_qa.clients.dataset_client import (
    DatasetClient,
    DatasetClientProtocol,
    FakeDatasetClient,
)

__all__ = [
    "DatasetClient",
    "DatasetClientProtocol",
    "FakeDatasetClient",
]
