from pathlib import Path

import pytest
import yaml

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def demo_doc():
    return yaml.safe_load((FIXTURES / "demo.yaml").read_text(encoding="utf-8"))
