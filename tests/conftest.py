from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from bodyparser.parser.nodes import ElementNode, parse_document
from bodyparser.telemetry import metrics


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture()
def parse_body():
    def _parse(markup: str) -> ElementNode:
        return parse_document(markup)

    return _parse
