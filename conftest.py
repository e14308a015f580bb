"""
Root conftest.py for the content service repository.

Makes the service's ``app`` package importable when the tests run from
a source checkout without an editable install.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """
    Add service directories to sys.path.

    Each service directory holds an ``app`` package and a ``tests``
    directory next to it.
    """
    root_dir = Path(__file__).parent

    for service_path in sorted((root_dir / "services").iterdir()):
        if (service_path / "app").is_dir() and str(service_path) not in sys.path:
            sys.path.insert(0, str(service_path))
